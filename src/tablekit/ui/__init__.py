"""UI module for tablekit.

Plain-text views of derived table output. This module is a thin consumer
of the engine: it draws what the controller derived and never filters,
sorts or paginates on its own.

Submodules:
- format: Table and paginator rendering, JSON output, color handling

Usage:
    from tablekit.ui import render_table, render_paginator
    from tablekit.ui.format import render_json
"""

from .format import (
    render_table,
    render_paginator,
    render_json,
    render_cell,
    header_title,
    ColorMode,
    colorize,
    strip_ansi,
)

__all__ = [
    # Format - core rendering
    "render_table",
    "render_paginator",
    "render_json",
    "ColorMode",
    # Format - helpers
    "render_cell",
    "header_title",
    "colorize",
    "strip_ansi",
]
