#query_state.py
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlencode

from .models import FilterState, SortState

SORT_KEY = "sort"
DIR_KEY = "dir"
RESERVED_KEYS = (SORT_KEY, DIR_KEY)


class PersistentQueryString:
    """Where the view state lives between sessions, e.g. a page URL."""

    def read(self) -> Dict[str, str]:
        raise NotImplementedError

    def replace(self, params: Mapping[str, str]) -> None:
        raise NotImplementedError


class MemoryQueryString(PersistentQueryString):
    """
    A query string held in memory. replace() swaps the current entry and
    never keeps the previous one, the same way history.replaceState works.
    """

    def __init__(self, query: str = ""):
        self.query = query.lstrip("?")
        self.replacements = 0

    def read(self) -> Dict[str, str]:
        return dict(parse_qsl(self.query))

    def replace(self, params: Mapping[str, str]) -> None:
        self.query = urlencode(list(params.items()))
        self.replacements += 1


def decode(params: Mapping[str, str]) -> Tuple[FilterState, Optional[SortState]]:
    filters = {}
    for key, value in params.items():
        if key in RESERVED_KEYS or not key or not value:
            continue
        filters[key] = value

    sort = None
    field = params.get(SORT_KEY)
    if field:
        direction = "desc" if params.get(DIR_KEY) == "desc" else "asc"
        sort = SortState(field, direction)
    return filters, sort


def encode(filters: Mapping[str, str], sort: Optional[SortState]) -> Dict[str, str]:
    params = {key: value for key, value in filters.items() if value and key not in RESERVED_KEYS}
    if sort is not None:
        params[SORT_KEY] = sort.field
        params[DIR_KEY] = sort.direction
    return params


class QueryStateSync:
    """Reads the view state once at load and rewrites it after each change."""

    def __init__(self, port: PersistentQueryString):
        self.port = port
        self._loaded = False

    def load(self) -> Tuple[FilterState, Optional[SortState]]:
        if self._loaded:
            raise RuntimeError("Query state has already been loaded")
        self._loaded = True
        return decode(self.port.read())

    def save(self, filters: Mapping[str, str], sort: Optional[SortState]) -> None:
        self.port.replace(encode(filters, sort))
