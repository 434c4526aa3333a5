# src/unicodesearch/cli.py
import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from .api import main as run_api_logic
from .api_utils import find_latest_api_url
from .client import fetch_dataset, load_dataset_file
from .config import DATASET_PATH, EMOJI_TEST_URL, GEMOJI_URL, LOG_FILE_PATH
from .errors import DatasetFetchError, UnicodeSearchError
from .gemoji import download_gemoji, load_gemoji
from .grid import Column, EmojiGrid, GridRow, RenderTarget
from .query_state import MemoryQueryString, QueryStateSync
from .scraper import run_etl, run_merge

TERMINAL_COLUMNS = ("emoji", "codepoints", "description", "version", "tags")


def configure_logging(log_path: Optional[str] = LOG_FILE_PATH, level=logging.INFO):
    """Logs to the log file (when given) and to the console."""
    handlers = [logging.StreamHandler()]
    if log_path:
        handlers.insert(0, logging.FileHandler(log_path, encoding='utf-8'))
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    # Disable Flask's default verbose logging to avoid duplication
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


class TerminalRenderTarget(RenderTarget):
    """Prints the grid as tab separated text."""

    def __init__(self, stream=None, limit: Optional[int] = None, fields: Sequence[str] = TERMINAL_COLUMNS):
        self.stream = stream or sys.stdout
        self.limit = limit
        self.fields = fields
        self.error = None

    def render(self, columns: Sequence[Column], rows: List[GridRow], summary: str) -> None:
        titles = {column.field: column.title for column in columns}
        shown = [field for field in self.fields if field in titles]
        print("\t".join(titles[field] for field in shown), file=self.stream)
        for row in rows[:self.limit] if self.limit else rows:
            print("\t".join(row.cells[field] for field in shown), file=self.stream)
        print(summary, file=self.stream)

    def show_error(self, message: str) -> None:
        self.error = message
        print(f"ERROR: {message}", file=sys.stderr)


def _gemoji_entries(args):
    if args.gemoji:
        return load_gemoji(args.gemoji)
    if args.gemoji_url:
        return download_gemoji(args.gemoji_url)
    return None


def _add_gemoji_arguments(parser):
    parser.add_argument("--gemoji", help="Path to a Gemoji db/emoji.json file")
    parser.add_argument("--gemoji-url", nargs="?", const=GEMOJI_URL, default=None,
                        help="Download Gemoji data (defaults to the GitHub copy)")


def _fail(error: UnicodeSearchError):
    logging.error(f"FATAL: {error}")
    sys.exit(1)


# These functions are the entry points registered in pyproject.toml
def run_etl_entrypoint(argv: Optional[Sequence[str]] = None):
    """Entry point for the 'us-etl' command."""
    parser = argparse.ArgumentParser(prog="us-etl", description="Build the emoji dataset JSON.")
    parser.add_argument("--input", help="Local emoji-test.txt (downloaded when omitted)")
    parser.add_argument("--url", default=EMOJI_TEST_URL, help="emoji-test.txt URL")
    parser.add_argument("--output", default=DATASET_PATH, help="Dataset JSON to write")
    _add_gemoji_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging()
    try:
        run_etl(args.output, input_path=args.input, url=args.url, gemoji=_gemoji_entries(args))
    except UnicodeSearchError as e:
        _fail(e)


def run_merge_entrypoint(argv: Optional[Sequence[str]] = None):
    """Entry point for the 'us-merge' command."""
    parser = argparse.ArgumentParser(prog="us-merge", description="Merge Gemoji keywords into a dataset.")
    parser.add_argument("dataset", nargs="?", default=DATASET_PATH)
    parser.add_argument("--output", help="Write here instead of overwriting the dataset")
    _add_gemoji_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging()
    try:
        entries = _gemoji_entries(args)
        if entries is None:
            parser.error("one of --gemoji or --gemoji-url is required")
        run_merge(args.dataset, entries, args.output)
    except UnicodeSearchError as e:
        _fail(e)


def run_api_server_entrypoint(argv: Optional[Sequence[str]] = None):
    """Entry point for the 'us-api-server' command."""
    parser = argparse.ArgumentParser(prog="us-api-server", description="Serve the dataset JSON.")
    parser.add_argument("--dataset", default=DATASET_PATH)
    args = parser.parse_args(argv)

    configure_logging()
    run_api_logic(args.dataset)


def browse(records, query: str, tags: Sequence[str] = (), target: Optional[RenderTarget] = None) -> MemoryQueryString:
    """Loads a grid from a query string, clicks the given tags, returns the final query."""
    query_string = MemoryQueryString(query)
    grid = EmojiGrid(records, target or TerminalRenderTarget(), QueryStateSync(query_string))
    grid.load()
    for tag in tags:
        grid.click_tag(tag)
    return query_string


def run_browse_entrypoint(argv: Optional[Sequence[str]] = None):
    """Entry point for the 'us-browse' command."""
    parser = argparse.ArgumentParser(prog="us-browse", description="Filter and sort the emoji dataset.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="Dataset URL (defaults to the last started server)")
    source.add_argument("--file", help="Read the dataset from a local file instead")
    parser.add_argument("--query", default="", help="View state, e.g. 'description=cat&sort=emoji&dir=desc'")
    parser.add_argument("--tag", action="append", default=[], help="Toggle a tag filter (repeatable)")
    parser.add_argument("--limit", type=int, default=50, help="Rows to print (0 for all)")
    args = parser.parse_args(argv)

    configure_logging(log_path=None, level=logging.WARNING)
    target = TerminalRenderTarget(limit=args.limit)
    try:
        if args.file:
            records = load_dataset_file(args.file)
        else:
            url = args.url or find_latest_api_url()
            if not url:
                raise DatasetFetchError("No dataset URL: start us-api-server or pass --url")
            records = asyncio.run(fetch_dataset(url))
    except UnicodeSearchError as e:
        target.show_error(str(e))
        _fail(e)

    query_string = browse(records, args.query, args.tag, target)
    print(f"?{query_string.query}")


# This block runs when you execute `python -m unicodesearch.cli <command>`
if __name__ == "__main__":
    commands = {
        "etl": run_etl_entrypoint,
        "merge": run_merge_entrypoint,
        "server": run_api_server_entrypoint,
        "browse": run_browse_entrypoint,
    }
    if len(sys.argv) < 2 or sys.argv[1] not in commands:
        print(f"CLI Error: use one of {', '.join(commands)}.", file=sys.stderr)
        sys.exit(1)
    commands[sys.argv[1]](sys.argv[2:])
