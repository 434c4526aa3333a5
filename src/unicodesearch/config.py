#config.py
import os

# --- Upstream sources ---
EMOJI_TEST_URL = "https://unicode.org/Public/emoji/latest/emoji-test.txt"
GEMOJI_URL = "https://raw.githubusercontent.com/github/gemoji/master/db/emoji.json"

# --- Local files, kept next to the package like the server log ---
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
DATASET_FILENAME = "emoji.json"
DATASET_PATH = os.path.join(SCRIPT_DIR, DATASET_FILENAME)
LOG_FILE_PATH = os.path.join(SCRIPT_DIR, "unicodesearch.log")

# --- Server ---
DATASET_ROUTE = "/" + DATASET_FILENAME
HEALTH_ROUTE = "/api/v1/health"
HOST = "127.0.0.1"

# Per-codepoint detail page used by the codepoints column formatter
CHAR_INFO_URL = "https://www.fileformat.info/info/unicode/char/{codepoint}/index.htm"

FETCH_TIMEOUT = 10.0
