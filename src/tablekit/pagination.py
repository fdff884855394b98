"""Pagination engine for tabular views and page navigators.

Two independent computations over plain integers:

1. slice_page(count, items_per_page, current_page)
   - Visible slice bounds, clamped current page, total page count
   - Never raises: out-of-range pages are clamped, page size is forced >= 1

2. page_window(current_page, total_pages, page_range)
   - Page numbers and ellipsis markers shown by a navigator
   - First and last pages are always present
   - One ellipsis per side, only when pages are actually hidden

Navigator helpers (page_navigation, change_page, labels) build on these.
"""

from dataclasses import dataclass
from typing import Union

# Marker for a run of hidden pages in a page window
ELLIPSIS = "..."

WindowItem = Union[int, str]


@dataclass(frozen=True)
class PageSlice:
    """Bounds of one page within a sequence.

    Attributes:
        start_index: Index of the first visible item (inclusive).
        end_index: Index past the last visible item (exclusive).
        effective_page: Requested page clamped into [1, total_pages].
        total_pages: Number of pages (at least 1).
    """

    start_index: int
    end_index: int
    effective_page: int
    total_pages: int

    @property
    def size(self) -> int:
        return self.end_index - self.start_index

    @property
    def is_first(self) -> bool:
        return self.effective_page == 1

    @property
    def is_last(self) -> bool:
        return self.effective_page == self.total_pages


def normalize_page_size(items_per_page: int) -> int:
    """Clamp a page size to at least 1."""
    return max(1, items_per_page)


def compute_total_pages(count: int, items_per_page: int) -> int:
    """Compute the page count for a sequence length.

    Args:
        count: Number of items.
        items_per_page: Page size (clamped to >= 1).

    Returns:
        max(1, ceil(count / items_per_page)).
    """
    per_page = normalize_page_size(items_per_page)
    return max(1, -(-max(0, count) // per_page))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a page number into [1, total_pages]."""
    return min(max(page, 1), max(total_pages, 1))


def slice_page(count: int, items_per_page: int, current_page: int) -> PageSlice:
    """Compute the visible slice for a page.

    Args:
        count: Number of items in the (filtered, sorted) sequence.
        items_per_page: Page size; values <= 0 are treated as 1.
        current_page: Requested page (1-indexed); clamped, never rejected.

    Returns:
        PageSlice with start/end indexes, effective page and total pages.
    """
    count = max(0, count)
    per_page = normalize_page_size(items_per_page)
    total_pages = compute_total_pages(count, per_page)
    effective_page = clamp_page(current_page, total_pages)

    start_index = (effective_page - 1) * per_page
    end_index = min(start_index + per_page, count)

    return PageSlice(
        start_index=start_index,
        end_index=end_index,
        effective_page=effective_page,
        total_pages=total_pages,
    )


def page_window(current_page: int, total_pages: int, page_range: int = 2) -> list[WindowItem]:
    """Compute the page numbers a navigator shows.

    Args:
        current_page: Current page (clamped into [1, total_pages]).
        total_pages: Number of pages (clamped to >= 1).
        page_range: Sibling pages shown on each side of the current page
            (clamped to >= 0).

    Returns:
        Ordered list of page numbers and ELLIPSIS markers, e.g.
        ``[1, "...", 3, 4, 5, 6, 7, "...", 10]`` for page 5 of 10, range 2.
    """
    total_pages = max(1, total_pages)
    page_range = max(0, page_range)
    current_page = clamp_page(current_page, total_pages)

    if total_pages == 1:
        return [1]

    low = max(2, current_page - page_range)
    high = min(total_pages - 1, current_page + page_range)

    window: list[WindowItem] = [1]
    if current_page - page_range > 2:
        window.append(ELLIPSIS)
    window.extend(range(low, high + 1))
    if current_page + page_range < total_pages - 1:
        window.append(ELLIPSIS)
    window.append(total_pages)
    return window


@dataclass(frozen=True)
class PageNavigation:
    """Which navigator controls are shown for the current page."""

    show_first: bool
    show_previous: bool
    show_next: bool
    show_last: bool

    def to_dict(self) -> dict:
        return {
            "first": self.show_first,
            "previous": self.show_previous,
            "next": self.show_next,
            "last": self.show_last,
        }


def page_navigation(
    current_page: int,
    total_pages: int,
    show_edge_buttons: bool = True,
) -> PageNavigation:
    """Decide which first/previous/next/last controls to show.

    Previous/next appear only when a neighbouring page exists. First/last
    appear only when edge buttons are enabled and the current page is not
    already on that edge.
    """
    total_pages = max(1, total_pages)
    current_page = clamp_page(current_page, total_pages)
    has_previous = current_page > 1
    has_next = current_page < total_pages
    return PageNavigation(
        show_first=show_edge_buttons and has_previous,
        show_previous=has_previous,
        show_next=has_next,
        show_last=show_edge_buttons and has_next,
    )


def change_page(current_page: int, requested_page: int, total_pages: int) -> int:
    """Apply a navigator page change.

    Requests outside [1, total_pages] are ignored.

    Returns:
        The requested page if valid, otherwise ``current_page``.
    """
    if 1 <= requested_page <= max(1, total_pages):
        return requested_page
    return current_page


def format_page_label(page: int, total_pages: int) -> str:
    """Format a label like "Page 2 of 5"."""
    return f"Page {page} of {total_pages}"


def format_range_info(page_slice: PageSlice, count: int) -> str:
    """Format a range string for the visible slice.

    Args:
        page_slice: Visible slice.
        count: Total item count.

    Returns:
        String like "Showing 11-20 of 45", "3 items" when everything fits
        on one page, or "0 items".
    """
    if count <= page_slice.end_index - page_slice.start_index:
        return f"{count} items" if count != 1 else "1 item"
    return f"Showing {page_slice.start_index + 1}-{page_slice.end_index} of {count}"
