#tag_toggle.py
from typing import Optional

from .predicates import tokenize


def toggle_tag(current: Optional[str], tag: str) -> str:
    """
    Next value of the tags filter after a tag chip is clicked: the tag is
    removed when already listed and appended otherwise.
    """
    if not current or not current.strip():
        return tag
    tokens = tokenize(current)
    if tag in tokens:
        tokens = [token for token in tokens if token != tag]
    else:
        tokens.append(tag)
    return " ".join(tokens)
