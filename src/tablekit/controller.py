"""Data table controller: filter -> sort -> paginate.

The controller composes the three engines into one derivation and holds
the caller-mutable inputs (query, sort, page, page size). It is otherwise
stateless: every read of ``result`` is a pure function of those inputs
plus the records and columns it was built with.

Key design principles:
- Fixed pipeline order: filter, then sort, then paginate
- Out-of-range inputs are clamped, never rejected
- Page changes reuse the filtered+sorted sequence (memoized on query and
  sort); the memo never changes observable results
- Records are never mutated; swap the collection with replace_records
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable, Optional, Sequence

from .columns import ColumnSchema, ColumnSet
from .filtering import filter_records
from .pagination import (
    PageNavigation,
    WindowItem,
    change_page,
    format_page_label,
    format_range_info,
    normalize_page_size,
    page_navigation,
    page_window,
    slice_page,
)
from .sorting import SortConfig, SortDirection, sort_records, toggle_sort

logger = logging.getLogger(__name__)

DEFAULT_ITEMS_PER_PAGE = 10
DEFAULT_PAGE_RANGE = 2


@dataclass(frozen=True)
class PaginationConfig:
    """Requested page size and page."""

    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    current_page: int = 1

    def normalized(self) -> "PaginationConfig":
        """Return a copy with the page size clamped to >= 1."""
        return PaginationConfig(
            items_per_page=normalize_page_size(self.items_per_page),
            current_page=self.current_page,
        )


@dataclass
class DerivedResult:
    """Output of one derivation.

    Attributes:
        visible_records: Records on the effective page, in display order.
        total_pages: Page count for the filtered sequence (at least 1).
        effective_current_page: Requested page clamped into [1, total_pages].
        total_filtered_count: Number of records matching the query.
        start_index: Index of the first visible record in the filtered sequence.
        end_index: Index past the last visible record.
        items_per_page: Page size actually used.
    """

    visible_records: list = field(default_factory=list)
    total_pages: int = 1
    effective_current_page: int = 1
    total_filtered_count: int = 0
    start_index: int = 0
    end_index: int = 0
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE

    def to_dict(self, columns: Optional[ColumnSet | Iterable[ColumnSchema]] = None) -> dict:
        """Convert to dictionary.

        Args:
            columns: If given, each visible record is projected to a
                ``{column_id: value}`` dict; otherwise records are emitted as-is.
        """
        if columns is not None:
            column_set = ColumnSet.coerce(columns)
            rows = [
                {column.id: column.value(record) for column in column_set}
                for record in self.visible_records
            ]
        else:
            rows = list(self.visible_records)

        return {
            "visible_records": rows,
            "total_pages": self.total_pages,
            "effective_current_page": self.effective_current_page,
            "total_filtered_count": self.total_filtered_count,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "items_per_page": self.items_per_page,
        }


def paginate(
    ordered: Sequence[Any],
    pagination: PaginationConfig,
) -> DerivedResult:
    """Slice an already filtered and sorted sequence into a DerivedResult."""
    pagination = pagination.normalized()
    page = slice_page(len(ordered), pagination.items_per_page, pagination.current_page)
    return DerivedResult(
        visible_records=list(ordered[page.start_index:page.end_index]),
        total_pages=page.total_pages,
        effective_current_page=page.effective_page,
        total_filtered_count=len(ordered),
        start_index=page.start_index,
        end_index=page.end_index,
        items_per_page=pagination.items_per_page,
    )


def derive(
    records: Sequence[Any],
    columns: ColumnSet | Iterable[ColumnSchema],
    query: Optional[str] = "",
    sort_config: Optional[SortConfig] = None,
    pagination_config: Optional[PaginationConfig] = None,
) -> DerivedResult:
    """Run one full derivation: filter, then sort, then paginate.

    Args:
        records: Records to derive from (not mutated).
        columns: Column definitions.
        query: Free-text query; empty disables filtering.
        sort_config: Active sort; None or an unknown column disables sorting.
        pagination_config: Page size and requested page.

    Returns:
        DerivedResult for the requested page.

    Raises:
        DuplicateColumnError: If ``columns`` repeats a column id.
    """
    column_set = ColumnSet.coerce(columns)
    filtered = filter_records(records, query, column_set)
    ordered = sort_records(filtered, sort_config, column_set)
    return paginate(ordered, pagination_config or PaginationConfig())


def default_record_key(record: Any) -> Hashable:
    """Identity key for a record.

    Uses a non-None ``id`` field or attribute when present, falling back
    to object identity.
    """
    if isinstance(record, Mapping):
        record_id = record.get("id")
    else:
        record_id = getattr(record, "id", None)
    if record_id is not None:
        return record_id
    return id(record)


class DataTableController:
    """Holds table inputs and derives the visible page on demand."""

    def __init__(
        self,
        records: Sequence[Any],
        columns: ColumnSet | Iterable[ColumnSchema],
        *,
        query: str = "",
        sort_config: Optional[SortConfig] = None,
        pagination: Optional[PaginationConfig] = None,
        page_range: int = DEFAULT_PAGE_RANGE,
        show_edge_buttons: bool = True,
        record_key: Callable[[Any], Hashable] = default_record_key,
    ):
        """Initialize the controller.

        Args:
            records: Records to display. Treated as immutable.
            columns: Column definitions (ids must be unique).
            query: Initial search text.
            sort_config: Initial sort (None for input order).
            pagination: Initial page size and page.
            page_range: Sibling pages shown around the current page.
            show_edge_buttons: Whether the navigator shows first/last controls.
            record_key: Identity function used for row selection.

        Raises:
            DuplicateColumnError: If two columns share an id.
        """
        self.columns = ColumnSet.coerce(columns)
        self._records: Sequence[Any] = records
        self.query = query or ""
        self.sort_config = sort_config
        pagination = (pagination or PaginationConfig()).normalized()
        self.items_per_page = pagination.items_per_page
        self.current_page = pagination.current_page
        self.page_range = max(0, page_range)
        self.show_edge_buttons = show_edge_buttons
        self.record_key = record_key

        self._selected: dict[Hashable, Any] = {}
        self._memo_key: Optional[tuple] = None
        self._memo_ordered: Sequence[Any] = ()

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    @property
    def records(self) -> Sequence[Any]:
        return self._records

    @property
    def pagination(self) -> PaginationConfig:
        return PaginationConfig(
            items_per_page=self.items_per_page,
            current_page=self.current_page,
        )

    def _ordered(self) -> Sequence[Any]:
        """Filtered and sorted records, memoized on (query, sort)."""
        key = (self.query, self.sort_config)
        if self._memo_key == key:
            logger.debug("Reusing filtered/sorted records for %r", key)
            return self._memo_ordered

        filtered = filter_records(self._records, self.query, self.columns)
        ordered = sort_records(filtered, self.sort_config, self.columns)
        self._memo_key = key
        self._memo_ordered = ordered
        return ordered

    @property
    def result(self) -> DerivedResult:
        """Derive the current page."""
        result = paginate(self._ordered(), self.pagination)
        if result.effective_current_page != self.current_page:
            logger.debug(
                "Requested page %d clamped to %d of %d",
                self.current_page,
                result.effective_current_page,
                result.total_pages,
            )
        logger.debug(
            "Derived %d of %d records (page %d of %d)",
            len(result.visible_records),
            result.total_filtered_count,
            result.effective_current_page,
            result.total_pages,
        )
        return result

    @property
    def visible_records(self) -> list:
        return self.result.visible_records

    @property
    def total_pages(self) -> int:
        return self.result.total_pages

    @property
    def effective_current_page(self) -> int:
        return self.result.effective_current_page

    @property
    def total_filtered_count(self) -> int:
        return len(self._ordered())

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    def replace_records(self, records: Sequence[Any]) -> None:
        """Swap in a new record collection.

        Selection entries whose records are gone are dropped.
        """
        self._records = records
        self._memo_key = None
        self._memo_ordered = ()
        present = {self.record_key(record) for record in records}
        self._selected = {
            key: record for key, record in self._selected.items() if key in present
        }

    def set_query(self, query: Optional[str], *, reset_page: bool = False) -> None:
        self.query = query or ""
        if reset_page:
            self.current_page = 1

    def set_sort(self, sort_config: Optional[SortConfig]) -> None:
        self.sort_config = sort_config

    def sort_by(
        self,
        column_id: str,
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> None:
        self.sort_config = SortConfig(column_id=column_id, direction=direction)

    def toggle_sort(self, column_id: str) -> Optional[SortConfig]:
        """Apply a header tap on a column.

        Unknown column ids are ignored.

        Returns:
            The sort configuration now in effect.
        """
        column = self.columns.get(column_id)
        if column is None:
            logger.debug("Ignoring sort toggle on unknown column %r", column_id)
            return self.sort_config
        self.sort_config = toggle_sort(self.sort_config, column)
        return self.sort_config

    def set_items_per_page(self, items_per_page: int) -> None:
        self.items_per_page = normalize_page_size(items_per_page)

    def set_page(self, page: int) -> int:
        """Request a page; it is clamped when the result is derived.

        Returns:
            The effective page after clamping.
        """
        self.current_page = page
        return self.effective_current_page

    def go_to_page(self, page: int) -> int:
        """Navigate to a page, ignoring requests outside the valid range.

        Returns:
            The effective page after the change.
        """
        current = self.effective_current_page
        self.current_page = change_page(current, page, self.total_pages)
        return self.effective_current_page

    def next_page(self) -> int:
        return self.go_to_page(self.effective_current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.effective_current_page - 1)

    def first_page(self) -> int:
        return self.go_to_page(1)

    def last_page(self) -> int:
        return self.go_to_page(self.total_pages)

    # -------------------------------------------------------------------------
    # Navigator
    # -------------------------------------------------------------------------

    def window(self) -> list[WindowItem]:
        """Page window for the navigator."""
        result = self.result
        return page_window(result.effective_current_page, result.total_pages, self.page_range)

    def navigation(self) -> PageNavigation:
        result = self.result
        return page_navigation(
            result.effective_current_page,
            result.total_pages,
            show_edge_buttons=self.show_edge_buttons,
        )

    def page_label(self) -> str:
        result = self.result
        return format_page_label(result.effective_current_page, result.total_pages)

    def range_info(self) -> str:
        result = self.result
        page = slice_page(
            result.total_filtered_count,
            result.items_per_page,
            result.effective_current_page,
        )
        return format_range_info(page, result.total_filtered_count)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, record: Any) -> None:
        self._selected[self.record_key(record)] = record

    def deselect(self, record: Any) -> None:
        self._selected.pop(self.record_key(record), None)

    def toggle_selection(self, record: Any) -> bool:
        """Flip a record's selection.

        Returns:
            True if the record is selected afterwards.
        """
        key = self.record_key(record)
        if key in self._selected:
            del self._selected[key]
            return False
        self._selected[key] = record
        return True

    def is_selected(self, record: Any) -> bool:
        return self.record_key(record) in self._selected

    def clear_selection(self) -> None:
        self._selected.clear()

    def selected_records(self) -> list:
        """Selected records in the order of the current record collection."""
        return [record for record in self._records if self.is_selected(record)]
