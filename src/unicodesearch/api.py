#api.py
# How to Run:
#    First, build the dataset with `us-etl`, then start the server with
#    `us-api-server` and note the URL it logs (e.g. http://127.0.0.1:51234/emoji.json).
#    Browse it from another terminal with `us-browse --url <that URL>`, or
#    leave --url out to use the most recently logged server.
import json
import logging
import os
import socket

from flask import Flask, jsonify, send_file

from .config import DATASET_PATH, DATASET_ROUTE, HEALTH_ROUTE, HOST

# This specific log message is what api_utils.py searches for
URL_LOG_MESSAGE = "Dataset available at: "


# --- Helper function to find a free port ---
def find_free_port():
    """
    Finds and returns an available TCP port on the local machine.
    This is done by binding a socket to port 0, which tells the OS to
    assign an ephemeral port. We then close the socket and return the port number.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((HOST, 0))
        return s.getsockname()[1]


def count_records(dataset_path: str) -> int:
    with open(dataset_path, 'r', encoding='utf-8') as f:
        return len(json.load(f).get("data", []))


def create_app(dataset_path: str = DATASET_PATH) -> Flask:
    """
    Serves the dataset file as-is. Filtering and sorting stay with the
    browsing side, the server only hands out the document.
    """
    app = Flask(__name__)
    app.config["DATASET_PATH"] = os.path.abspath(dataset_path)

    @app.route(DATASET_ROUTE, methods=['GET'])
    def get_dataset():
        path = app.config["DATASET_PATH"]
        if not os.path.exists(path):
            logging.error(f"Dataset requested but '{path}' does not exist.")
            return jsonify({"success": False, "error": "Dataset not built yet"}), 404
        return send_file(path, mimetype="application/json")

    @app.route(HEALTH_ROUTE, methods=['GET'])
    def health():
        path = app.config["DATASET_PATH"]
        if not os.path.exists(path):
            return jsonify({"status": "missing", "records": 0}), 503
        return jsonify({"status": "ok", "records": count_records(path)})

    return app


# --- Main Application Logic ---
def main(dataset_path: str = DATASET_PATH):
    """Starts the dataset server on a free local port."""
    if not os.path.exists(dataset_path):
        logging.error(f"'{dataset_path}' not found. Please run the ETL first (us-etl).")
        raise SystemExit(1)

    app = create_app(dataset_path)

    # Disable Flask's default verbose logging to avoid duplication with our logger
    log = logging.getLogger('werkzeug')
    log.setLevel(logging.WARNING)

    port = find_free_port()
    dataset_url = f"http://{HOST}:{port}{DATASET_ROUTE}"

    logging.info("="*50)
    logging.info(f"Serving {count_records(dataset_path)} records from '{dataset_path}'.")
    logging.info(f"{URL_LOG_MESSAGE}{dataset_url}")
    logging.info("="*50)

    app.run(host=HOST, port=port)
