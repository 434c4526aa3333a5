"""
Tests for the grid adapter: filtering, sorting and query-string sync.
"""
import dataclasses

from unicodesearch.grid import (
    EMOJI_COLUMNS,
    EmojiGrid,
    RenderTarget,
    apply_view,
    codepoint_url,
    row_count_summary,
)
from unicodesearch.models import SortState
from unicodesearch.normalizer import normalize
from unicodesearch.query_state import MemoryQueryString, QueryStateSync


class RecordingTarget(RenderTarget):
    def __init__(self):
        self.renders = []
        self.errors = []

    def render(self, columns, rows, summary):
        self.renders.append((rows, summary))

    def show_error(self, message):
        self.errors.append(message)

    @property
    def last_emoji(self):
        return [row.record.record.emoji for row in self.renders[-1][0]]

    @property
    def last_summary(self):
        return self.renders[-1][1]


def descriptions(records):
    return [record.record.description for record in records]


class TestApplyView:

    def test_no_filters_keeps_order(self, records):
        assert apply_view(records, EMOJI_COLUMNS, {}) == records

    def test_description_contains(self, records):
        assert descriptions(apply_view(records, EMOJI_COLUMNS, {"description": "cat"})) == ["grinning cat"]

    def test_description_regex(self, records):
        view = apply_view(records, EMOJI_COLUMNS, {"description": "/^grinning (cat|face)$/"})
        assert descriptions(view) == ["grinning face", "grinning cat"]

    def test_invalid_regex_shows_no_rows(self, records):
        assert apply_view(records, EMOJI_COLUMNS, {"description": "/bad(/"}) == []

    def test_description_also_searches_keywords(self, records):
        with_keywords = normalize(dataclasses.replace(records[0].record, keywords=("happy",)), 0)
        view = apply_view([with_keywords] + records[1:], EMOJI_COLUMNS, {"description": "happy"})
        assert view == [with_keywords]

    def test_emoji_is_exact(self, records):
        assert descriptions(apply_view(records, EMOJI_COLUMNS, {"emoji": "😺"})) == ["grinning cat"]
        assert apply_view(records, EMOJI_COLUMNS, {"emoji": "😺😺"}) == []

    def test_tags(self, records):
        view = apply_view(records, EMOJI_COLUMNS, {"tags": "skin-tone !component"})
        assert descriptions(view) == ["woman: medium-light skin tone", "thumbs up: medium skin tone"]

    def test_keywords_flag(self, records):
        assert apply_view(records, EMOJI_COLUMNS, {"keywords": "true"}) == []
        assert len(apply_view(records, EMOJI_COLUMNS, {"keywords": "false"})) == len(records)

    def test_filters_combine(self, records):
        view = apply_view(records, EMOJI_COLUMNS, {"description": "^grinning", "version": "0.6"})
        assert descriptions(view) == ["grinning face with big eyes", "grinning cat"]

    def test_unknown_filter_is_ignored(self, records):
        assert apply_view(records, EMOJI_COLUMNS, {"nonsense": "x"}) == records

    def test_sort_ties_keep_original_order(self, records):
        for direction in ("asc", "desc"):
            view = apply_view(records, EMOJI_COLUMNS, {"description": "smiling"},
                              SortState("description", direction))
            assert [record.order for record in view] == [2, 3]

    def test_sort_desc(self, records):
        view = apply_view(records, EMOJI_COLUMNS, {"subgroup": "face-smiling"}, SortState("description", "desc"))
        assert descriptions(view) == [
            "smiling face", "smiling face", "grinning face with big eyes", "grinning face",
        ]

    def test_version_sorts_numerically(self, records):
        view = apply_view(records, EMOJI_COLUMNS, {}, SortState("version"))
        assert [record.record.version for record in view] == ["0.6"] * 4 + ["1.0"] * 4

    def test_unsortable_column_keeps_order(self, records):
        assert apply_view(records, EMOJI_COLUMNS, {}, SortState("tags", "desc")) == records


class TestFormatting:

    def test_row_count_summary(self):
        assert row_count_summary(1234, 1234, False) == "Rows: 1,234"
        assert row_count_summary(3, 1234, True) == "Rows: 3 of 1,234"

    def test_codepoint_url(self, records):
        assert codepoint_url(records[5]) == "https://www.fileformat.info/info/unicode/char/1f469/index.htm"

    def test_cells(self, records):
        target = RecordingTarget()
        grid = EmojiGrid(records, target, QueryStateSync(MemoryQueryString()))
        rows = grid.load()

        cells = rows[0].cells
        assert cells["emoji"] == "😀"
        assert cells["description"] == "grinning face"
        assert cells["tags"] == "1.0 face-smiling fully-qualified smileys-&-emotion"
        assert cells["keywords"] == ""


class TestEmojiGrid:

    def make_grid(self, records, query=""):
        target = RecordingTarget()
        port = MemoryQueryString(query)
        return EmojiGrid(records, target, QueryStateSync(port)), target, port

    def test_load_restores_view_from_query(self, records):
        grid, target, port = self.make_grid(records, "description=grinning&sort=description&dir=desc")
        grid.load()

        assert target.last_emoji == ["😃", "😀", "😺"]
        assert target.last_summary == "Rows: 3 of 8"
        assert port.replacements == 0

    def test_unknown_filter_does_not_count_as_filtered(self, records):
        grid, target, port = self.make_grid(records, "nonsense=x")
        grid.load()

        assert len(target.last_emoji) == 8
        assert target.last_summary == "Rows: 8"

    def test_filter_change_updates_query(self, records):
        grid, target, port = self.make_grid(records)
        grid.load()
        assert target.last_summary == "Rows: 8"

        grid.set_filter("description", "cat")
        assert target.last_emoji == ["😺"]
        assert port.read() == {"description": "cat"}

        grid.set_filter("description", "")
        assert port.read() == {}
        assert target.last_summary == "Rows: 8"
        assert port.replacements == 2

    def test_sort_change_updates_query(self, records):
        grid, target, port = self.make_grid(records, "group=people")
        grid.load()
        grid.set_sort("description", "desc")

        assert target.last_emoji == ["👩🏼", "👍🏽", "🏻"]
        assert port.read() == {"group": "people", "sort": "description", "dir": "desc"}

    def test_tag_clicks_toggle_filter(self, records):
        grid, target, port = self.make_grid(records)
        grid.load()

        grid.click_tag("skin-tone")
        assert port.read() == {"tags": "skin-tone"}
        assert len(target.last_emoji) == 3

        grid.click_tag("component")
        assert port.read() == {"tags": "skin-tone component"}
        assert target.last_emoji == ["🏻"]

        grid.click_tag("skin-tone")
        grid.click_tag("component")
        assert port.read() == {}
        assert len(target.last_emoji) == 8
