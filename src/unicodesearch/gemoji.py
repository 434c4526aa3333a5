#gemoji.py
import json
import logging
import os
from typing import Any, Dict, Iterable, List, NamedTuple

import requests

from .errors import InputFetchError, InputMissingError
from .models import GemojiEntry


class MergeResult(NamedTuple):
    records: List[Dict[str, Any]]
    missing_records: List[str]  # glyphs with no Gemoji entry
    unused_entries: List[str]  # Gemoji glyphs with no record


def parse_gemoji(raw_entries: Iterable[Dict[str, Any]]) -> List[GemojiEntry]:
    entries = []
    for raw in raw_entries:
        if not raw.get("emoji"):
            logging.warning(f"Ignoring Gemoji entry without an emoji: {raw.get('description', '')!r}")
            continue
        entries.append(GemojiEntry.from_dict(raw))
    return entries


def load_gemoji(path: str) -> List[GemojiEntry]:
    """Reads a Gemoji db/emoji.json file."""
    if not os.path.exists(path):
        raise InputMissingError(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw_entries = json.load(f)
    except ValueError as e:
        raise InputFetchError(f"Could not decode Gemoji data '{path}': {e}") from e
    return parse_gemoji(raw_entries)


def download_gemoji(url: str) -> List[GemojiEntry]:
    logging.info(f"Fetching Gemoji data from {url}...")
    try:
        response = requests.get(url)
        response.raise_for_status()
        raw_entries = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        raise InputFetchError(f"Error fetching Gemoji data: {e}") from e
    return parse_gemoji(raw_entries)


def merge_keywords(records: Iterable[Dict[str, Any]], entries: Iterable[GemojiEntry]) -> MergeResult:
    """
    Sets each record's keywords to the aliases and tags of the Gemoji entry
    with the same glyph.

    Records without an entry are returned unchanged. Records whose entry has
    neither aliases nor tags lose any keywords from an earlier merge.
    """
    by_glyph = {entry.glyph: entry for entry in entries}
    used = set()
    merged = []
    missing = []

    for record in records:
        glyph = record.get("emoji", "")
        entry = by_glyph.get(glyph)
        if entry is None:
            missing.append(glyph)
            logging.debug(f"No Gemoji entry for {glyph} ({record.get('description', '')})")
            merged.append(record)
            continue

        used.add(glyph)
        updated = dict(record)
        keywords = sorted(entry.aliases | entry.tags)
        if keywords:
            updated["keywords"] = keywords
        else:
            updated.pop("keywords", None)
        merged.append(updated)

    unused = [glyph for glyph in by_glyph if glyph not in used]
    if missing:
        logging.info(f"{len(missing)} records have no Gemoji entry.")
    for glyph in unused:
        logging.warning(f"Gemoji entry {glyph} matched no record, dropped.")

    return MergeResult(merged, missing, unused)
