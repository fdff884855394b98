"""Tests for the pagination engine.

Tests verify:
- Slice bounds and clamping
- Coverage: all pages together reconstruct the sequence exactly once
- Page window edges, ranges and ellipsis thresholds
- Navigator controls and page-change guards
"""

import pytest

from tablekit.pagination import (
    ELLIPSIS,
    PageNavigation,
    PageSlice,
    change_page,
    clamp_page,
    compute_total_pages,
    format_page_label,
    format_range_info,
    page_navigation,
    page_window,
    slice_page,
)


class TestComputeTotalPages:
    @pytest.mark.parametrize(
        "count,per_page,expected",
        [
            (0, 10, 1),
            (1, 10, 1),
            (10, 10, 1),
            (11, 10, 2),
            (45, 10, 5),
            (3, 1, 3),
            (5, 0, 5),
            (5, -3, 5),
        ],
    )
    def test_total_pages(self, count, per_page, expected):
        assert compute_total_pages(count, per_page) == expected


class TestSlicePage:
    """Tests for slice_page."""

    def test_first_page(self):
        page = slice_page(45, 10, 1)
        assert page == PageSlice(start_index=0, end_index=10, effective_page=1, total_pages=5)

    def test_last_partial_page(self):
        page = slice_page(45, 10, 5)
        assert (page.start_index, page.end_index) == (40, 45)
        assert page.size == 5
        assert page.is_last

    def test_page_clamped_high(self):
        """A huge page on a short sequence clamps to the only page."""
        page = slice_page(3, 10, 10000)
        assert page.effective_page == 1
        assert page.start_index == 0
        assert page.end_index == 3

    @pytest.mark.parametrize("requested", [0, -1, -50])
    def test_page_clamped_low(self, requested):
        page = slice_page(30, 10, requested)
        assert page.effective_page == 1
        assert page.start_index == 0

    def test_items_per_page_clamped(self):
        page = slice_page(3, 0, 2)
        assert page.total_pages == 3
        assert (page.start_index, page.end_index) == (1, 2)

    def test_empty_sequence(self):
        page = slice_page(0, 10, 4)
        assert page == PageSlice(start_index=0, end_index=0, effective_page=1, total_pages=1)
        assert page.is_first and page.is_last

    @pytest.mark.parametrize("count,per_page", [(0, 3), (1, 3), (9, 3), (10, 3), (17, 4), (5, 1)])
    def test_pages_cover_sequence_once(self, count, per_page):
        """Concatenating every page reconstructs the sequence with no gaps or duplicates."""
        items = list(range(count))
        total = slice_page(count, per_page, 1).total_pages

        collected = []
        for page_number in range(1, total + 1):
            page = slice_page(count, per_page, page_number)
            collected.extend(items[page.start_index:page.end_index])

        assert collected == items

    def test_full_pages_have_page_size(self):
        for page_number in range(1, 5):
            assert slice_page(45, 10, page_number).size == 10


class TestClampPage:
    def test_clamp(self):
        assert clamp_page(0, 5) == 1
        assert clamp_page(3, 5) == 3
        assert clamp_page(9, 5) == 5
        assert clamp_page(4, 0) == 1


class TestPageWindow:
    """Tests for page_window."""

    def test_symmetric_window(self):
        assert page_window(5, 10, 2) == [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10]

    def test_single_page(self):
        assert page_window(1, 1, 2) == [1]

    def test_single_page_any_range(self):
        assert page_window(1, 1, 0) == [1]

    def test_near_start_no_leading_ellipsis(self):
        """Pages 2..5 are contiguous with page 1."""
        assert page_window(3, 10, 2) == [1, 2, 3, 4, 5, ELLIPSIS, 10]

    def test_leading_gap_of_one_page(self):
        """current - range == 3 hides page 2, so an ellipsis appears."""
        assert page_window(5, 10, 2)[:3] == [1, ELLIPSIS, 3]

    def test_near_end_no_trailing_ellipsis(self):
        assert page_window(8, 10, 2) == [1, ELLIPSIS, 6, 7, 8, 9, 10]

    def test_last_page(self):
        assert page_window(10, 10, 2) == [1, ELLIPSIS, 8, 9, 10]

    def test_first_page(self):
        assert page_window(1, 10, 2) == [1, 2, 3, ELLIPSIS, 10]

    def test_zero_range_includes_current(self):
        assert page_window(5, 10, 0) == [1, ELLIPSIS, 5, ELLIPSIS, 10]

    def test_zero_range_on_edges(self):
        assert page_window(1, 10, 0) == [1, ELLIPSIS, 10]
        assert page_window(10, 10, 0) == [1, ELLIPSIS, 10]

    def test_two_pages(self):
        assert page_window(1, 2, 0) == [1, 2]
        assert page_window(2, 2, 2) == [1, 2]

    def test_large_range_shows_all_pages(self):
        """A range covering every page shows all pages with no ellipsis."""
        assert page_window(3, 6, 6) == [1, 2, 3, 4, 5, 6]
        assert page_window(1, 4, 100) == [1, 2, 3, 4]

    def test_negative_range_treated_as_zero(self):
        assert page_window(5, 10, -3) == page_window(5, 10, 0)

    def test_current_out_of_range_clamped(self):
        assert page_window(50, 10, 1) == page_window(10, 10, 1)
        assert page_window(-2, 10, 1) == page_window(1, 10, 1)

    def test_zero_total_treated_as_one(self):
        assert page_window(1, 0, 2) == [1]

    @pytest.mark.parametrize("total", range(1, 13))
    @pytest.mark.parametrize("page_range", [0, 1, 2, 3])
    def test_window_structure(self, total, page_range):
        """Every window starts at 1, ends at total, is increasing, and never
        has two ellipses in a row or an ellipsis hiding nothing."""
        for current in range(1, total + 1):
            window = page_window(current, total, page_range)
            numbers = [item for item in window if item != ELLIPSIS]

            assert window[0] == 1
            assert window[-1] == total
            assert current in numbers
            assert numbers == sorted(set(numbers))
            assert window.count(ELLIPSIS) <= 2

            for i, item in enumerate(window):
                if item == ELLIPSIS:
                    # Ellipsis sits between two numbers that skip at least one page
                    assert window[i + 1] - window[i - 1] >= 2
                elif i > 0 and window[i - 1] != ELLIPSIS:
                    assert item == window[i - 1] + 1


class TestPageNavigation:
    """Tests for page_navigation."""

    def test_middle_page(self):
        nav = page_navigation(5, 10)
        assert nav == PageNavigation(True, True, True, True)

    def test_first_page(self):
        nav = page_navigation(1, 10)
        assert not nav.show_first
        assert not nav.show_previous
        assert nav.show_next
        assert nav.show_last

    def test_last_page(self):
        nav = page_navigation(10, 10)
        assert nav.show_first and nav.show_previous
        assert not nav.show_next and not nav.show_last

    def test_single_page(self):
        assert page_navigation(1, 1) == PageNavigation(False, False, False, False)

    def test_edge_buttons_hidden(self):
        nav = page_navigation(5, 10, show_edge_buttons=False)
        assert not nav.show_first and not nav.show_last
        assert nav.show_previous and nav.show_next

    def test_to_dict(self):
        assert page_navigation(1, 2).to_dict() == {
            "first": False,
            "previous": False,
            "next": True,
            "last": True,
        }


class TestChangePage:
    def test_valid_request(self):
        assert change_page(1, 5, 10) == 5

    def test_below_range_ignored(self):
        assert change_page(1, 0, 10) == 1

    def test_above_range_ignored(self):
        assert change_page(1, 11, 10) == 1

    def test_edges_allowed(self):
        assert change_page(5, 1, 10) == 1
        assert change_page(5, 10, 10) == 10


class TestLabels:
    def test_page_label(self):
        assert format_page_label(2, 5) == "Page 2 of 5"

    def test_range_info_partial(self):
        assert format_range_info(slice_page(45, 10, 2), 45) == "Showing 11-20 of 45"

    def test_range_info_last_page(self):
        assert format_range_info(slice_page(45, 10, 5), 45) == "Showing 41-45 of 45"

    def test_range_info_single_page(self):
        assert format_range_info(slice_page(3, 10, 1), 3) == "3 items"

    def test_range_info_one_item(self):
        assert format_range_info(slice_page(1, 10, 1), 1) == "1 item"

    def test_range_info_empty(self):
        assert format_range_info(slice_page(0, 10, 1), 0) == "0 items"
