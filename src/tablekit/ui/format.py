"""Plain-text rendering for tablekit.

A minimal stand-in for a real rendering layer: draws a derived page as a
text table and a page window as a navigator line. Rendering never sorts,
filters or slices; it draws exactly the records it is given, in order.

Key design principles:
- Optional color: all color can be disabled with --color never
- Non-TTY safe: works when stdout is redirected
- ASCII safe: no Unicode characters that might fail on Windows
- Custom cell renderers take precedence over default cell text

Rendering Contracts:
-------------------
1. render_table(records, columns, *, sort_config, ...)
   - Contract: identical records and columns give byte-identical output
   - Ordering: input order, untouched
   - Widths: calculated from content, capped at max_width chars

2. render_paginator(window, current_page, navigation, ...)
   - Current page shown as [n]; ellipsis markers as "..."
   - Navigation controls shown as << < > >> only when enabled

3. render_json(obj, *, sort_keys=True, ...)
   - Contract: identical obj gives byte-identical output
   - Encoding: UTF-8 with ensure_ascii=False
"""

import json
import re
import sys
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from ..columns import ColumnSchema, ColumnSet
from ..common import cell_text
from ..pagination import ELLIPSIS, PageNavigation, WindowItem
from ..sorting import SortConfig, SortDirection


class ColorMode(Enum):
    """Color output mode."""

    AUTO = "auto"  # Color if TTY, no color otherwise
    ALWAYS = "always"  # Always use color
    NEVER = "never"  # Never use color


# ANSI color codes (ASCII-safe)
_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "reverse": "\033[7m",
}

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

_SORT_MARKERS = {
    SortDirection.ASCENDING: "^",
    SortDirection.DESCENDING: "v",
}


def _should_color(mode: ColorMode) -> bool:
    """Determine if output should be colored."""
    if mode == ColorMode.NEVER:
        return False
    if mode == ColorMode.ALWAYS:
        return True
    # AUTO: color if stdout is a TTY
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str, mode: ColorMode = ColorMode.AUTO) -> str:
    """Apply color to text if color mode allows.

    Args:
        text: Text to colorize.
        color: Color name (bold, dim, cyan, reverse).
        mode: Color mode (auto, always, never).

    Returns:
        Colored text if mode allows, otherwise plain text.
    """
    if not _should_color(mode):
        return text

    code = _COLORS.get(color, "")
    if not code:
        return text

    return f"{code}{text}{_COLORS['reset']}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_PATTERN.sub("", text)


def render_cell(record: Any, column: ColumnSchema) -> str:
    """Text for one cell: the column's renderer if set, else its value text.

    Renderer output goes through cell_text, so renderers may return any value.
    """
    if column.renderer is not None:
        return cell_text(column.renderer(record))
    return cell_text(column.value(record))


def header_title(column: ColumnSchema, sort_config: Optional[SortConfig]) -> str:
    """Column title with a sort marker when the column is the active sort."""
    if sort_config is not None and sort_config.column_id == column.id and column.sortable:
        return f"{column.title} {_SORT_MARKERS[sort_config.direction]}"
    return column.title


def render_table(
    records: Sequence[Any],
    columns: ColumnSet | Iterable[ColumnSchema],
    *,
    sort_config: Optional[SortConfig] = None,
    color_mode: ColorMode = ColorMode.AUTO,
    show_header: bool = True,
    max_width: int = 60,
) -> str:
    """Render records as a formatted table.

    Args:
        records: Records to draw, already in display order.
        columns: Column definitions.
        sort_config: Active sort, marked in the header.
        color_mode: Color output mode.
        show_header: Whether to show column headers.
        max_width: Cap on automatic column width.

    Returns:
        Formatted table as string ("" when there are no columns).
    """
    cols = list(ColumnSet.coerce(columns))
    if not cols:
        return ""

    titles = [header_title(col, sort_config) for col in cols]
    cells = [[render_cell(record, col) for col in cols] for record in records]

    # Calculate column widths
    widths = []
    for i, title in enumerate(titles):
        max_len = len(title)
        for row in cells:
            max_len = max(max_len, len(row[i]))
        widths.append(min(max_len, max_width))

    lines = []

    if show_header:
        header_parts = [
            _align(title, widths[i], cols[i].align) for i, title in enumerate(titles)
        ]
        lines.append(colorize("  ".join(header_parts).rstrip(), "bold", color_mode))
        lines.append("  ".join("-" * w for w in widths))

    for row in cells:
        parts = []
        for i, val in enumerate(row):
            # Truncate if too long
            if len(val) > widths[i]:
                val = val[: widths[i] - 3] + "..."
            parts.append(_align(val, widths[i], cols[i].align))
        lines.append("  ".join(parts).rstrip())

    return "\n".join(lines)


def _align(text: str, width: int, align: str) -> str:
    """Align text within width."""
    if align == "right":
        return text.rjust(width)
    elif align == "center":
        return text.center(width)
    else:
        return text.ljust(width)


def render_paginator(
    window: Sequence[WindowItem],
    current_page: int,
    navigation: Optional[PageNavigation] = None,
    *,
    color_mode: ColorMode = ColorMode.AUTO,
) -> str:
    """Render a page window as a navigator line.

    Args:
        window: Page numbers and ELLIPSIS markers from page_window.
        current_page: Page to highlight.
        navigation: Which first/previous/next/last controls to show.
        color_mode: Color output mode.

    Returns:
        Line like "<< < 1 ... 3 4 [5] 6 7 ... 10 > >>".
    """
    parts = []
    if navigation is not None:
        if navigation.show_first:
            parts.append("<<")
        if navigation.show_previous:
            parts.append("<")

    for item in window:
        if item == ELLIPSIS:
            parts.append(colorize(ELLIPSIS, "dim", color_mode))
        elif item == current_page:
            parts.append(colorize(f"[{item}]", "reverse", color_mode))
        else:
            parts.append(str(item))

    if navigation is not None:
        if navigation.show_next:
            parts.append(">")
        if navigation.show_last:
            parts.append(">>")

    return " ".join(parts)


def render_json(
    obj: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
) -> str:
    """Render object as JSON with stable key ordering.

    Args:
        obj: Object to serialize.
        indent: Indentation level (None for compact).
        sort_keys: Whether to sort dictionary keys.

    Returns:
        JSON string with stable ordering.
    """
    return json.dumps(
        obj,
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
        default=_json_default,
    )


def _json_default(obj: Any) -> Any:
    """JSON serialization fallback for non-standard types."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    return str(obj)
