"""Tests for the plain-text UI module.

These tests ensure deterministic, stable output from the rendering functions.
"""

import json

from tablekit.columns import ColumnSchema, field_column
from tablekit.pagination import ELLIPSIS, page_navigation, page_window
from tablekit.sorting import SortConfig, SortDirection
from tablekit.ui import (
    ColorMode,
    colorize,
    header_title,
    render_cell,
    render_json,
    render_paginator,
    render_table,
    strip_ansi,
)


# --- Test data ---

SAMPLE_ROWS = [
    {"name": "Amy", "age": 25, "city": "Denver"},
    {"name": "Bob", "age": 30, "city": "Boston"},
]

SAMPLE_COLUMNS = [
    field_column("name"),
    field_column("age", align="right"),
    field_column("city"),
]


class TestRenderTable:
    """Tests for render_table."""

    def test_basic_table(self):
        output = render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)

        lines = output.split("\n")
        assert lines == [
            "Name  Age  City",
            "----  ---  ------",
            "Amy    25  Denver",
            "Bob    30  Boston",
        ]

    def test_keeps_input_order(self):
        output = render_table(list(reversed(SAMPLE_ROWS)), SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)
        lines = output.split("\n")
        assert lines[2].startswith("Bob")
        assert lines[3].startswith("Amy")

    def test_no_rows_header_only(self):
        output = render_table([], SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)
        assert output.split("\n")[0] == "Name  Age  City"
        assert len(output.split("\n")) == 2

    def test_no_columns(self):
        assert render_table(SAMPLE_ROWS, [], color_mode=ColorMode.NEVER) == ""

    def test_without_header(self):
        output = render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.NEVER, show_header=False)
        assert output.split("\n")[0] == "Amy    25  Denver"

    def test_sort_marker(self):
        output = render_table(
            SAMPLE_ROWS,
            SAMPLE_COLUMNS,
            sort_config=SortConfig("age", SortDirection.DESCENDING),
            color_mode=ColorMode.NEVER,
        )
        assert output.split("\n")[0] == "Name  Age v  City"

    def test_truncates_long_values(self):
        rows = [{"text": "x" * 80}]
        output = render_table(rows, [field_column("text")], color_mode=ColorMode.NEVER, max_width=10)
        assert output.split("\n")[2] == "xxxxxxx..."

    def test_custom_renderer(self):
        columns = [field_column("name"), field_column("age", renderer=lambda r: f"{r['age']} yrs")]
        output = render_table(SAMPLE_ROWS, columns, color_mode=ColorMode.NEVER)
        assert "25 yrs" in output

    def test_deterministic(self):
        first = render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)
        second = render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)
        assert first == second

    def test_color_only_in_header(self):
        output = render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.ALWAYS)
        assert "\033[1m" in output.split("\n")[0]
        assert strip_ansi(output) == render_table(SAMPLE_ROWS, SAMPLE_COLUMNS, color_mode=ColorMode.NEVER)


class TestCells:
    def test_render_cell_default(self):
        assert render_cell({"age": None}, field_column("age")) == ""
        assert render_cell({"age": 4}, field_column("age")) == "4"

    def test_render_cell_custom(self):
        column = ColumnSchema(id="x", title="X", accessor=lambda r: r, renderer=lambda r: "custom")
        assert render_cell({}, column) == "custom"

    def test_render_cell_custom_non_text(self):
        column = ColumnSchema(id="x", title="X", accessor=lambda r: r, renderer=lambda r: r["n"] * 2)
        assert render_cell({"n": 21}, column) == "42"

    def test_table_with_non_text_renderer(self):
        columns = [field_column("name"), field_column("age", renderer=lambda r: r["age"] > 26)]
        output = render_table(SAMPLE_ROWS, columns, color_mode=ColorMode.NEVER)
        assert output.split("\n")[2:] == ["Amy   false", "Bob   true"]

    def test_header_title_ascending(self):
        assert header_title(field_column("age"), SortConfig("age")) == "Age ^"

    def test_header_title_other_column(self):
        assert header_title(field_column("name"), SortConfig("age")) == "Name"

    def test_header_title_not_sortable(self):
        column = field_column("notes", sortable=False)
        assert header_title(column, SortConfig("notes")) == "Notes"


class TestRenderPaginator:
    """Tests for render_paginator."""

    def test_window_only(self):
        output = render_paginator(page_window(5, 10, 2), 5, color_mode=ColorMode.NEVER)
        assert output == "1 ... 3 4 [5] 6 7 ... 10"

    def test_with_navigation(self):
        output = render_paginator(
            page_window(5, 10, 2),
            5,
            page_navigation(5, 10),
            color_mode=ColorMode.NEVER,
        )
        assert output == "<< < 1 ... 3 4 [5] 6 7 ... 10 > >>"

    def test_first_page_navigation(self):
        output = render_paginator(
            page_window(1, 3, 2),
            1,
            page_navigation(1, 3, show_edge_buttons=False),
            color_mode=ColorMode.NEVER,
        )
        assert output == "[1] 2 3 >"

    def test_single_page(self):
        output = render_paginator([1], 1, page_navigation(1, 1), color_mode=ColorMode.NEVER)
        assert output == "[1]"

    def test_colored_current_page(self):
        output = render_paginator([1, ELLIPSIS, 9], 9, color_mode=ColorMode.ALWAYS)
        assert "\033[7m[9]" in output
        assert strip_ansi(output) == "1 ... [9]"


class TestRenderJson:
    def test_sorted_keys(self):
        output = render_json({"b": 1, "a": 2})
        assert output.index('"a"') < output.index('"b"')

    def test_to_dict_fallback(self):
        output = render_json({"sort": SortConfig("age")})
        assert json.loads(output) == {"sort": {"column_id": "age", "direction": "asc"}}

    def test_date_fallback(self):
        from datetime import date

        assert json.loads(render_json([date(2025, 1, 2)])) == ["2025-01-02"]

    def test_unicode_kept(self):
        assert "Zoë" in render_json({"name": "Zoë"})


class TestColorize:
    def test_never(self):
        assert colorize("x", "bold", ColorMode.NEVER) == "x"

    def test_always(self):
        assert colorize("x", "bold", ColorMode.ALWAYS) == "\033[1mx\033[0m"

    def test_unknown_color(self):
        assert colorize("x", "chartreuse", ColorMode.ALWAYS) == "x"
