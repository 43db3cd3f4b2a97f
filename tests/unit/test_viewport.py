"""Tests for scroll clamping and selection following."""

import pytest
from hypothesis import given, strategies as st

from transcriber.ui.viewport import ScrollWindow, SelectionWindow


class TestScrollWindow:
    """Test the clamped scroll offset."""

    def test_clamping(self):
        window = ScrollWindow(total=10, visible_count=4)

        assert window.max_offset == 6
        assert window.scroll_to(100) == 6
        assert window.scroll_to(-5) == 0

    def test_short_content_cannot_scroll(self):
        window = ScrollWindow(total=3, visible_count=10)

        assert window.max_offset == 0
        assert window.page_down() == 0
        assert window.end() == 0

    def test_navigation(self):
        window = ScrollWindow(total=100, visible_count=9)

        assert window.line_down() == 1
        assert window.line_up() == 0
        assert window.half_page_down() == 5
        assert window.page_down() == 14
        assert window.half_page_up() == 9
        assert window.page_up() == 0
        assert window.end() == 91
        assert window.home() == 0

    def test_visible_range(self):
        window = ScrollWindow(total=10, visible_count=4, offset=8)

        assert window.offset == 6
        assert list(window.visible_range()) == [6, 7, 8, 9]

    def test_set_bounds_reclamps_without_resetting(self):
        window = ScrollWindow(total=50, visible_count=10, offset=30)

        window.set_bounds(total=50, visible_count=20)
        assert window.offset == 30

        window.set_bounds(total=35, visible_count=20)
        assert window.offset == 15

    def test_reset(self):
        window = ScrollWindow(total=50, visible_count=10, offset=30)
        window.reset()
        assert window.offset == 0

    def test_visible_count_is_at_least_one(self):
        window = ScrollWindow(total=5, visible_count=0)
        assert window.visible_count == 1
        assert window.max_offset == 4

    @given(
        st.integers(min_value=0, max_value=500),
        st.integers(min_value=1, max_value=60),
        st.lists(
            st.sampled_from(
                ["line_up", "line_down", "half_page_up", "half_page_down",
                 "page_up", "page_down", "home", "end"]
            ),
            max_size=30,
        ),
    )
    def test_offset_always_in_bounds(self, total, visible, moves):
        window = ScrollWindow(total=total, visible_count=visible)
        for move in moves:
            getattr(window, move)()
            assert 0 <= window.offset <= window.max_offset


class TestSelectionWindow:
    """Test the keep-selection-visible behaviour of the session list."""

    def test_selection_is_clamped(self):
        window = SelectionWindow(total=3, visible_count=10)

        assert window.select(10) == 2
        assert window.select(-1) == 0

    def test_empty_list(self):
        window = SelectionWindow(total=0, visible_count=5)

        assert window.select(3) == 0
        assert window.offset == 0

    def test_follow_scrolls_to_nearest_edge(self):
        window = SelectionWindow(total=20, visible_count=5)

        window.select(7)
        assert window.offset == 3

        window.select(5)
        assert window.offset == 3

        window.select(1)
        assert window.offset == 1

    def test_move_selection(self):
        window = SelectionWindow(total=20, visible_count=5)

        window.move_selection(6)
        window.move_selection(-2)

        assert window.selected == 4
        assert window.offset == 2

    def test_shrinking_keeps_selection_visible(self):
        window = SelectionWindow(total=20, visible_count=10)
        window.select(15)

        window.set_bounds(total=20, visible_count=3)

        assert window.offset <= window.selected < window.offset + window.visible_count

    def test_shrinking_data_clamps_selection(self):
        window = SelectionWindow(total=20, visible_count=5)
        window.select(19)

        window.set_bounds(total=4, visible_count=5)

        assert window.selected == 3
        assert window.offset == 0

    @pytest.mark.parametrize("index", [0, 4, 5, 11, 19])
    def test_selection_always_visible(self, index):
        window = SelectionWindow(total=20, visible_count=5)
        window.select(index)
        assert index in window.visible_range()
