#parser.py
import logging
import re
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union

from .models import ParseDiagnostic, QUALIFICATIONS, RawRecord

GROUP_PREFIX = "# group: "
SUBGROUP_PREFIX = "# subgroup: "

# Captures every field of a data line such as:
# 1F600 ; fully-qualified # 😀 E1.0 grinning face
EMOJI_LINE_PATTERN = re.compile(
    r"^(?P<codepoints>[0-9A-Fa-f]+(?: +[0-9A-Fa-f]+)*)\s*;\s*"
    r"(?P<qualification>" + "|".join(QUALIFICATIONS) + r")\s*#\s*"
    r"(?P<emoji>\S+)\s+E(?P<version>\d+\.\d+)\s+(?P<description>.+?)\s*$"
)


class ParseContext(NamedTuple):
    """Grouping carried from the marker lines to the data lines below them."""
    group: str = ""
    subgroup: str = ""


def parse_line(line: str, context: ParseContext) -> Optional[RawRecord]:
    """Matches one data line, returning None when it does not fit the grammar."""
    match = EMOJI_LINE_PATTERN.match(line)
    if not match:
        return None
    return RawRecord(
        codepoints=tuple(match.group("codepoints").upper().split()),
        qualification=match.group("qualification"),
        emoji=match.group("emoji"),
        version=match.group("version"),
        description=match.group("description"),
        group=context.group,
        subgroup=context.subgroup,
    )


def step(context: ParseContext, line: str) -> Tuple[ParseContext, Union[RawRecord, str, None]]:
    """
    Folds one line into the parse.

    Returns the next context together with a RawRecord for a data line, the
    stripped line itself when it failed to match, or None for lines that carry
    no record (blank lines, comments, group markers).
    """
    stripped = line.rstrip("\r\n")
    if not stripped.strip():
        return context, None
    if stripped.startswith(GROUP_PREFIX):
        return context._replace(group=stripped[len(GROUP_PREFIX):].strip()), None
    if stripped.startswith(SUBGROUP_PREFIX):
        return context._replace(subgroup=stripped[len(SUBGROUP_PREFIX):].strip()), None
    if stripped.startswith("#"):
        return context, None

    record = parse_line(stripped, context)
    if record is None:
        return context, stripped
    return context, record


class EmojiTestParser:
    """
    Streams RawRecords out of an emoji-test.txt style document.

    Lines that fail the grammar are dropped and kept as diagnostics; the
    count is complete once the record iterator is exhausted.
    """

    def __init__(self):
        self.diagnostics: List[ParseDiagnostic] = []

    @property
    def unmatched(self) -> int:
        return len(self.diagnostics)

    def parse(self, source: Union[str, Iterable[str]]) -> Iterator[RawRecord]:
        lines = source.splitlines() if isinstance(source, str) else source
        context = ParseContext()
        for line_number, line in enumerate(lines, start=1):
            context, result = step(context, line)
            if isinstance(result, RawRecord):
                yield result
            elif result is not None:
                diagnostic = ParseDiagnostic(line_number, result)
                self.diagnostics.append(diagnostic)
                logging.warning(f"Skipped unparseable {diagnostic}")


def parse_emoji_test(source: Union[str, Iterable[str]]) -> Tuple[List[RawRecord], List[ParseDiagnostic]]:
    """Eagerly parses a whole document, returning records and diagnostics."""
    parser = EmojiTestParser()
    records = list(parser.parse(source))
    return records, parser.diagnostics
