"""Command-line interface for tablekit."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .columns import field_column
from .common import PRODUCER, SCHEMA_VERSION, DuplicateColumnError, RecordsFormatError
from .config import TableDefaults
from .controller import DataTableController, PaginationConfig
from .errors import (
    TableKitError,
    duplicate_column,
    file_not_found,
    invalid_argument,
    print_error,
    records_invalid,
    unknown_column,
)
from .loading import build_columns, infer_field_names, load_records
from .log import configure_logging
from .pagination import clamp_page, page_navigation, page_window
from .sorting import SortConfig, resolve_sort_column

logger = logging.getLogger(__name__)

VERSION = PRODUCER["version"]


class CommandError(Exception):
    """Raised by command helpers to abort with an error envelope."""

    def __init__(self, error: TableKitError):
        self.error = error
        super().__init__(error.message)


def _split_names(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _load_defaults() -> TableDefaults:
    try:
        return TableDefaults.from_env()
    except ValueError as e:
        raise CommandError(invalid_argument("environment", "TABLEKIT_*", str(e)))


def _setup_logging(args: argparse.Namespace, defaults: TableDefaults) -> None:
    if getattr(args, "verbose", False):
        configure_logging(logging.DEBUG)
    else:
        configure_logging(defaults.log_level)


def _load(path_arg: str) -> list[dict]:
    try:
        return load_records(Path(path_arg))
    except FileNotFoundError:
        raise CommandError(file_not_found(path_arg))
    except RecordsFormatError as e:
        raise CommandError(records_invalid(path_arg, e.reason))


def _columns_for(records: list[dict], args: argparse.Namespace):
    available = infer_field_names(records)
    names = _split_names(getattr(args, "columns", None)) or None
    excluded = _split_names(getattr(args, "exclude_search", None))

    for name in (names or []) + excluded:
        if name not in available:
            raise CommandError(unknown_column(name, available))

    try:
        return build_columns(records, names, exclude_from_search=excluded)
    except DuplicateColumnError as e:
        raise CommandError(duplicate_column(e.column_id))


def _run(handler, args: argparse.Namespace) -> int:
    """Run a command handler, turning CommandError into an exit code."""
    try:
        return handler(args)
    except CommandError as e:
        print_error(e.error, json_mode=getattr(args, "json", False))
        return 1


# =============================================================================
# view
# =============================================================================


def build_view_document(controller: DataTableController) -> dict:
    """Build the JSON document for the view command.

    Args:
        controller: Controller holding the current table inputs.

    Returns:
        ``tablekit.derived_result`` document.
    """
    result = controller.result
    sort = controller.sort_config or SortConfig()
    document = {
        "schema_name": "tablekit.derived_result",
        "schema_version": SCHEMA_VERSION,
        "producer": PRODUCER,
        "query": controller.query,
        "sort": sort.to_dict(),
        "sort_applied": resolve_sort_column(controller.sort_config, controller.columns) is not None,
        "columns": [
            {
                "id": column.id,
                "title": column.title,
                "searchable": column.searchable,
                "sortable": column.sortable,
            }
            for column in controller.columns
        ],
        "page_window": controller.window(),
        "navigation": controller.navigation().to_dict(),
    }
    document.update(result.to_dict(controller.columns))
    return document


def cmd_view(args: argparse.Namespace) -> int:
    """Handle the view command.

    Loads records, derives the requested page, and prints it as a table
    (or as a derived-result JSON document with --json).
    """
    from .ui import ColorMode, render_json, render_paginator, render_table

    defaults = _load_defaults()
    _setup_logging(args, defaults)

    try:
        sort_config = SortConfig.parse(args.sort)
    except ValueError as e:
        raise CommandError(invalid_argument("--sort", args.sort, str(e)))

    records = _load(args.file)
    columns = _columns_for(records, args)
    logger.debug("Loaded %d records with columns %s", len(records), columns.ids)

    # Sorting by a field that --columns hides is a user error
    sort_id = sort_config.column_id
    if sort_id is not None and sort_id not in columns and sort_id in infer_field_names(records):
        raise CommandError(unknown_column(sort_id, columns.ids))

    controller = DataTableController(
        records,
        columns,
        query=args.query or "",
        sort_config=sort_config,
        pagination=PaginationConfig(
            items_per_page=args.per_page if args.per_page is not None else defaults.items_per_page,
            current_page=args.page,
        ),
        page_range=args.page_range if args.page_range is not None else defaults.page_range,
        show_edge_buttons=defaults.show_edge_buttons and not args.no_edge_buttons,
    )

    if args.json:
        print(render_json(build_view_document(controller)))
        return 0

    color_mode = ColorMode(args.color)
    result = controller.result

    if result.visible_records:
        print(
            render_table(
                result.visible_records,
                controller.columns,
                sort_config=controller.sort_config,
                color_mode=color_mode,
            )
        )
    else:
        print("No matching records.")

    print()
    print(f"{controller.page_label()}  ({controller.range_info()})")
    print(
        render_paginator(
            controller.window(),
            result.effective_current_page,
            controller.navigation(),
            color_mode=color_mode,
        )
    )
    return 0


# =============================================================================
# window
# =============================================================================


def cmd_window(args: argparse.Namespace) -> int:
    """Handle the window command.

    Prints the navigator window for a page without loading any records.
    """
    from .ui import ColorMode, render_json, render_paginator

    defaults = _load_defaults()
    _setup_logging(args, defaults)

    page_range = args.range if args.range is not None else defaults.page_range
    total_pages = max(1, args.total)
    current_page = clamp_page(args.page, total_pages)

    window = page_window(current_page, total_pages, page_range)
    navigation = page_navigation(
        current_page,
        total_pages,
        show_edge_buttons=defaults.show_edge_buttons and not args.no_edge_buttons,
    )

    if args.json:
        print(
            render_json(
                {
                    "current_page": current_page,
                    "total_pages": total_pages,
                    "page_range": max(0, page_range),
                    "window": window,
                    "navigation": navigation.to_dict(),
                }
            )
        )
    else:
        print(render_paginator(window, current_page, navigation, color_mode=ColorMode(args.color)))
    return 0


# =============================================================================
# columns
# =============================================================================


def cmd_columns(args: argparse.Namespace) -> int:
    """Handle the columns command."""
    from .ui import ColorMode, render_json, render_table

    defaults = _load_defaults()
    _setup_logging(args, defaults)

    records = _load(args.file)
    columns = build_columns(records)
    rows = [
        {
            "id": column.id,
            "title": column.title,
            "searchable": column.searchable,
            "sortable": column.sortable,
            "align": column.align,
        }
        for column in columns
    ]

    if args.json:
        print(render_json(rows))
        return 0

    if not rows:
        print("No columns found.")
        return 0

    print(
        render_table(
            rows,
            [field_column(key) for key in ("id", "title", "align")],
            color_mode=ColorMode(args.color),
        )
    )
    return 0


# =============================================================================
# Entry point
# =============================================================================


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output (default: auto)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def main(argv: list[str] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="tablekit",
        description="Filter, sort and paginate tabular records",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # view command
    view_parser = subparsers.add_parser("view", help="Show one page of a records file")
    view_parser.add_argument("file", help="Records file (.json, .jsonl, .csv)")
    view_parser.add_argument("--columns", help="Comma-separated column ids (default: all)")
    view_parser.add_argument(
        "--exclude-search", help="Comma-separated column ids excluded from search"
    )
    view_parser.add_argument("-q", "--query", default="", help="Free-text search")
    view_parser.add_argument("--sort", help="Sort as COLUMN[:asc|desc]")
    view_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    view_parser.add_argument("--per-page", type=int, help="Items per page")
    view_parser.add_argument("--page-range", type=int, help="Sibling pages in the navigator")
    view_parser.add_argument(
        "--no-edge-buttons", action="store_true", help="Hide first/last navigator controls"
    )
    _add_output_flags(view_parser)
    view_parser.set_defaults(func=cmd_view)

    # window command
    window_parser = subparsers.add_parser("window", help="Show a page navigator window")
    window_parser.add_argument("--page", type=int, required=True, help="Current page")
    window_parser.add_argument("--total", type=int, required=True, help="Total pages")
    window_parser.add_argument("--range", type=int, help="Sibling pages around the current page")
    window_parser.add_argument(
        "--no-edge-buttons", action="store_true", help="Hide first/last navigator controls"
    )
    _add_output_flags(window_parser)
    window_parser.set_defaults(func=cmd_window)

    # columns command
    columns_parser = subparsers.add_parser("columns", help="List columns of a records file")
    columns_parser.add_argument("file", help="Records file (.json, .jsonl, .csv)")
    _add_output_flags(columns_parser)
    columns_parser.set_defaults(func=cmd_columns)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return _run(args.func, args)


if __name__ == "__main__":
    sys.exit(main())
