"""tablekit: filter, sort and paginate tabular records.

The engine behind a data-table viewer and a page navigator. Given records,
column definitions, a search query, a sort and a page request, it derives
the visible slice of records and the navigator's page window.

Usage:
    from tablekit import DataTableController, field_column

    table = DataTableController(people, [field_column("name"), field_column("age")])
    table.set_query("am")
    table.sort_by("age")
    table.result.visible_records
"""

from .columns import ColumnSchema, ColumnSet, field_column, read_field
from .common import DuplicateColumnError, RecordsFormatError, cell_text
from .controller import (
    DataTableController,
    DerivedResult,
    PaginationConfig,
    derive,
)
from .filtering import filter_records, record_matches
from .pagination import (
    ELLIPSIS,
    PageNavigation,
    PageSlice,
    change_page,
    format_page_label,
    format_range_info,
    page_navigation,
    page_window,
    slice_page,
)
from .sorting import SortConfig, SortDirection, sort_records, toggle_sort

__version__ = "0.1.0"

__all__ = [
    # Columns
    "ColumnSchema",
    "ColumnSet",
    "field_column",
    "read_field",
    # Engines
    "filter_records",
    "record_matches",
    "SortConfig",
    "SortDirection",
    "sort_records",
    "toggle_sort",
    "ELLIPSIS",
    "PageSlice",
    "PageNavigation",
    "slice_page",
    "page_window",
    "page_navigation",
    "change_page",
    "format_page_label",
    "format_range_info",
    # Controller
    "DataTableController",
    "DerivedResult",
    "PaginationConfig",
    "derive",
    # Errors and helpers
    "DuplicateColumnError",
    "RecordsFormatError",
    "cell_text",
]
