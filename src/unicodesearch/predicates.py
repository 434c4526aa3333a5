#predicates.py
"""
Header filter matching.

The shape of the filter value picks the mode, always case-insensitive:

    ""          matches everything
    "c"         a single character: starts with
    "^text"     starts with "text" (a bare "^" matches everything)
    "/re/"      regular expression search; a bad pattern matches nothing
    "text"      contains
"""
from functools import lru_cache
from typing import Iterable, List, Optional

import regex

TOKEN_SPLIT = regex.compile(r"[ ,]+")

# Seconds a user pattern may spend on one candidate before it counts as no match
REGEX_TIMEOUT = 0.1


@lru_cache(maxsize=128)
def _compile(pattern: str):
    try:
        return regex.compile(pattern, regex.IGNORECASE)
    except regex.error:
        return None


def is_regex_filter(value: str) -> bool:
    return len(value) >= 2 and value.startswith("/") and value.endswith("/")


def match_text(value: str, candidate: Optional[str]) -> bool:
    if not value:
        return True
    text = (candidate or "").lower()

    if len(value) == 1 and value not in ("^", "/"):
        return text.startswith(value.lower())

    if value.startswith("^"):
        return text.startswith(value[1:].lower())

    if is_regex_filter(value):
        compiled = _compile(value[1:-1])
        if compiled is None:
            return False
        try:
            return compiled.search(candidate or "", timeout=REGEX_TIMEOUT) is not None
        except TimeoutError:
            return False

    return value.lower() in text


def match_any(value: str, candidates: Iterable[Optional[str]]) -> bool:
    """True if any candidate matches; used for description plus keywords."""
    if not value:
        return True
    return any(match_text(value, candidate) for candidate in candidates)


def match_exact(value: str, candidate: Optional[str]) -> bool:
    if not value:
        return True
    return value == candidate


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """Query-string text to the tri-state used by match_present."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    return None


def match_present(flag: Optional[bool], candidate) -> bool:
    if flag is True:
        return bool(candidate)
    if flag is False:
        return not candidate
    return True


def tokenize(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [token for token in TOKEN_SPLIT.split(value) if token]


def match_tags(value: str, tags) -> bool:
    """
    Every token must hold: "x" requires tag x, "!x" requires its absence.
    """
    for token in tokenize(value):
        if token.startswith("!"):
            excluded = token[1:]
            if excluded and excluded in tags:
                return False
        elif token not in tags:
            return False
    return True
