#scraper.py
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .config import EMOJI_TEST_URL
from .errors import InputFetchError, InputMissingError
from .gemoji import MergeResult, merge_keywords
from .models import GemojiEntry
from .parser import EmojiTestParser


def read_emoji_test(path: str) -> str:
    if not os.path.exists(path):
        raise InputMissingError(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise InputFetchError(f"Could not decode '{path}': {e}") from e


def download_emoji_test(url: str = EMOJI_TEST_URL) -> str:
    logging.info(f"Fetching emoji data from {url}...")
    try:
        response = requests.get(url)
        response.raise_for_status()  # Raise an exception for bad status codes
    except requests.exceptions.RequestException as e:
        raise InputFetchError(f"Error fetching emoji data: {e}") from e
    response.encoding = 'utf-8'
    return response.text


def build_document(text: str, lastmod: Optional[datetime] = None) -> Dict[str, Any]:
    """Parses emoji-test text into the dataset document served to the browser."""
    parser = EmojiTestParser()
    data = [record.to_dict() for record in parser.parse(text)]
    if parser.unmatched:
        logging.warning(f"{parser.unmatched} lines did not match the emoji-test format.")
    logging.info(f"Parsed {len(data)} emoji records.")

    lastmod = lastmod or datetime.now(timezone.utc)
    return {
        "success": True,
        "lastmod": lastmod.isoformat(),
        "data": data,
    }


def merge_document(document: Dict[str, Any], entries: List[GemojiEntry]) -> MergeResult:
    """Returns the merge result; the caller builds the new document from it."""
    return merge_keywords(document.get("data", []), entries)


def load_document(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise InputMissingError(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except ValueError as e:
        raise InputFetchError(f"Could not decode dataset '{path}': {e}") from e


def write_document(document: Dict[str, Any], path: str) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(document, f, ensure_ascii=False, indent=2)
    logging.info(f"Successfully created '{path}' with {len(document.get('data', []))} records.")


def run_etl(output_path: str, input_path: Optional[str] = None, url: str = EMOJI_TEST_URL,
            gemoji: Optional[List[GemojiEntry]] = None) -> Dict[str, Any]:
    """
    Builds the dataset from a local emoji-test.txt, or downloads it when no
    input path is given, optionally merging Gemoji keywords before writing.
    """
    text = read_emoji_test(input_path) if input_path else download_emoji_test(url)
    document = build_document(text)
    if gemoji is not None:
        document["data"] = merge_document(document, gemoji).records
    write_document(document, output_path)
    return document


def run_merge(dataset_path: str, gemoji: List[GemojiEntry], output_path: Optional[str] = None) -> Dict[str, Any]:
    """Merges Gemoji keywords into an existing dataset file."""
    document = load_document(dataset_path)
    result = merge_document(document, gemoji)
    merged = dict(document, data=result.records)
    write_document(merged, output_path or dataset_path)
    return merged
