#grid.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from . import predicates
from .config import CHAR_INFO_URL
from .models import FilterState, NormalizedRecord, SortState
from .query_state import QueryStateSync
from .tag_toggle import toggle_tag

FilterFunc = Callable[[str, NormalizedRecord], bool]
SortKey = Callable[[NormalizedRecord], Any]
Formatter = Callable[[NormalizedRecord], str]

DEFAULT_SORT = SortState("emoji", "asc")


@dataclass(frozen=True)
class Column:
    field: str
    title: str
    filter_func: FilterFunc
    sort_key: Optional[SortKey] = None
    formatter: Optional[Formatter] = None

    def format(self, record: NormalizedRecord) -> str:
        if self.formatter is not None:
            return self.formatter(record)
        value = record.field_value(self.field)
        return "" if value is None else str(value)


@dataclass(frozen=True)
class GridRow:
    record: NormalizedRecord
    cells: Dict[str, str]


class RenderTarget:
    """The table widget that shows rows; it owns layout and paging."""

    def render(self, columns: Sequence[Column], rows: List[GridRow], summary: str) -> None:
        raise NotImplementedError

    def show_error(self, message: str) -> None:
        raise NotImplementedError


# --- Column behaviour ---

def _text_filter(field: str) -> FilterFunc:
    def filter_func(value: str, record: NormalizedRecord) -> bool:
        return predicates.match_text(value, record.field_value(field))
    return filter_func


def _text_sort(field: str) -> SortKey:
    def sort_key(record: NormalizedRecord):
        return (record.field_value(field) or "").lower()
    return sort_key


def _description_filter(value: str, record: NormalizedRecord) -> bool:
    return predicates.match_any(value, (record.record.description,) + record.record.keywords)


def _emoji_filter(value: str, record: NormalizedRecord) -> bool:
    return predicates.match_exact(value, record.record.emoji)


def _keywords_filter(value: str, record: NormalizedRecord) -> bool:
    return predicates.match_present(predicates.parse_flag(value), record.record.keywords)


def _tags_filter(value: str, record: NormalizedRecord) -> bool:
    return predicates.match_tags(value, record.tags)


def _version_sort(record: NormalizedRecord):
    try:
        return tuple(int(part) for part in record.record.version.split("."))
    except ValueError:
        return (0,)


def codepoint_url(record: NormalizedRecord) -> str:
    return CHAR_INFO_URL.format(codepoint=record.record.codepoints[0].lower())


def format_codepoints(record: NormalizedRecord) -> str:
    return f"{' '.join(record.record.codepoints)} <{codepoint_url(record)}>"


def format_tags(record: NormalizedRecord) -> str:
    return " ".join(sorted(record.tags))


def format_keywords(record: NormalizedRecord) -> str:
    return ", ".join(record.record.keywords)


EMOJI_COLUMNS = (
    Column("emoji", "Emoji", _emoji_filter, lambda record: record.order),
    Column("codepoints", "Codepoints", _text_filter("codepoints"), _text_sort("codepoints"), format_codepoints),
    Column("description", "Description", _description_filter, _text_sort("description")),
    Column("group", "Group", _text_filter("group"), _text_sort("group")),
    Column("subgroup", "Subgroup", _text_filter("subgroup"), _text_sort("subgroup")),
    Column("qualification", "Qualification", _text_filter("qualification"), _text_sort("qualification")),
    Column("version", "Version", _text_filter("version"), _version_sort),
    Column("keywords", "Keywords", _keywords_filter, None, format_keywords),
    Column("tags", "Tags", _tags_filter, None, format_tags),
)


# --- View computation ---

def active_filters(columns: Sequence[Column], filters: FilterState) -> List[Tuple[Column, str]]:
    """Non-empty filters on known columns; the rest are ignored with a warning."""
    by_field = {column.field: column for column in columns}
    active = []
    for field, value in filters.items():
        column = by_field.get(field)
        if column is None:
            logging.warning(f"Ignoring filter on unknown column '{field}'.")
            continue
        if value:
            active.append((column, value))
    return active


def apply_view(
    records: Sequence[NormalizedRecord],
    columns: Sequence[Column],
    filters: FilterState,
    sort: Optional[SortState] = None,
) -> List[NormalizedRecord]:
    """Filters with every active header filter, then sorts stably by order."""
    by_field = {column.field: column for column in columns}
    active = active_filters(columns, filters)

    rows = [record for record in records if all(column.filter_func(value, record) for column, value in active)]
    rows.sort(key=lambda record: record.order)

    column = by_field.get(sort.field) if sort is not None else None
    if sort is not None and (column is None or column.sort_key is None):
        logging.warning(f"Column '{sort.field}' is not sortable, keeping original order.")
    elif column is not None:
        # sort() is stable even with reverse=True, so equal keys keep their order
        rows.sort(key=column.sort_key, reverse=sort.descending)
    return rows


def row_count_summary(shown: int, total: int, filtered: bool) -> str:
    if filtered:
        return f"Rows: {shown:,} of {total:,}"
    return f"Rows: {total:,}"


class EmojiGrid:
    """
    Connects the dataset, the query string and a render target. Each user
    event rebuilds the filter and sort state, writes it to the query string
    and renders again.
    """

    def __init__(self, records: Sequence[NormalizedRecord], target: RenderTarget,
                 query_state: QueryStateSync, columns: Sequence[Column] = EMOJI_COLUMNS):
        self.records = list(records)
        self.target = target
        self.query_state = query_state
        self.columns = tuple(columns)
        self.filters: FilterState = {}
        self.sort: Optional[SortState] = None

    def load(self) -> List[GridRow]:
        self.filters, self.sort = self.query_state.load()
        return self.refresh()

    def refresh(self) -> List[GridRow]:
        visible = apply_view(self.records, self.columns, self.filters, self.sort or DEFAULT_SORT)
        rows = [GridRow(record, {column.field: column.format(record) for column in self.columns})
                for record in visible]
        filtered = bool(active_filters(self.columns, self.filters))
        self.target.render(self.columns, rows, row_count_summary(len(rows), len(self.records), filtered))
        return rows

    def _changed(self) -> List[GridRow]:
        self.query_state.save(self.filters, self.sort)
        return self.refresh()

    def set_filter(self, field: str, value: Optional[str]) -> List[GridRow]:
        filters = {key: current for key, current in self.filters.items() if key != field}
        if value:
            filters[field] = value
        self.filters = filters
        return self._changed()

    def set_sort(self, field: str, direction: str = "asc") -> List[GridRow]:
        self.sort = SortState(field, direction)
        return self._changed()

    def click_tag(self, tag: str) -> List[GridRow]:
        return self.set_filter("tags", toggle_tag(self.filters.get("tags"), tag))
