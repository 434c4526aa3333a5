#normalizer.py
import logging
from typing import Iterable, List, Set

from .models import NormalizedRecord, RawRecord

SKIN_TONE_SUFFIX = "skin tone"
SKIN_TONE_TAG = "skin-tone"


def _slug(text: str) -> str:
    return text.strip().lower().replace(" ", "-")


def skin_tone_tags(description: str) -> List[str]:
    """
    Tags for descriptions such as "woman: medium-light skin tone".

    The tone name is cut out of the text between the last colon and the
    trailing " skin tone", which only holds for the upstream naming scheme.
    """
    if not description.endswith(SKIN_TONE_SUFFIX):
        return []
    tags = [SKIN_TONE_TAG]
    colon = description.rfind(":")
    if colon == -1:
        logging.warning(f"Skin tone description without a colon, tone not tagged: {description!r}")
        return tags
    tone = _slug(description[colon + 2:-len(" " + SKIN_TONE_SUFFIX)])
    if tone:
        tags.append(tone)
    return tags


def derive_tags(record: RawRecord) -> Set[str]:
    base = [record.group, record.subgroup, record.qualification or "", record.version]
    tags = {_slug(value) for value in base}
    tags.update(skin_tone_tags(record.description))
    # keywords come from Gemoji and are kept exactly as written
    tags.update(record.keywords)
    tags.discard("")
    return tags


def normalize(record: RawRecord, order: int) -> NormalizedRecord:
    return NormalizedRecord(record=record, tags=frozenset(derive_tags(record)), order=order)


def normalize_all(records: Iterable[RawRecord]) -> List[NormalizedRecord]:
    """Normalizes records in ingestion order, numbering them from zero."""
    return [normalize(record, order) for order, record in enumerate(records)]
