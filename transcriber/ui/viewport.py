"""Clamped scroll windows for the two panes."""

import math


class ScrollWindow:
    """A window of ``visible_count`` rows over ``total`` rows.

    ``offset`` is kept in ``[0, max_offset]`` after every mutation, where
    ``max_offset = max(0, total - visible_count)``.
    """

    def __init__(self, total: int = 0, visible_count: int = 1, offset: int = 0):
        self.total = max(0, total)
        self.visible_count = max(1, visible_count)
        self.offset = 0
        self.scroll_to(offset)

    def __repr__(self) -> str:
        return (
            f"ScrollWindow(offset={self.offset}, visible_count={self.visible_count}, "
            f"total={self.total})"
        )

    @property
    def max_offset(self) -> int:
        return max(0, self.total - self.visible_count)

    @property
    def half_page(self) -> int:
        return math.ceil(self.visible_count / 2)

    def visible_range(self) -> range:
        return range(self.offset, min(self.total, self.offset + self.visible_count))

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, self.max_offset))

    def scroll_to(self, offset: int) -> int:
        self.offset = self.clamp(offset)
        return self.offset

    def scroll_by(self, delta: int) -> int:
        return self.scroll_to(self.offset + delta)

    def line_up(self) -> int:
        return self.scroll_by(-1)

    def line_down(self) -> int:
        return self.scroll_by(1)

    def half_page_up(self) -> int:
        return self.scroll_by(-self.half_page)

    def half_page_down(self) -> int:
        return self.scroll_by(self.half_page)

    def page_up(self) -> int:
        return self.scroll_by(-self.visible_count)

    def page_down(self) -> int:
        return self.scroll_by(self.visible_count)

    def home(self) -> int:
        return self.scroll_to(0)

    def end(self) -> int:
        return self.scroll_to(self.max_offset)

    def reset(self) -> None:
        self.offset = 0

    def set_bounds(self, total: int, visible_count: int) -> int:
        """Adopt new content length and height, re-clamping the offset."""
        self.total = max(0, total)
        self.visible_count = max(1, visible_count)
        return self.scroll_to(self.offset)


class SelectionWindow(ScrollWindow):
    """Scroll window of the session list that keeps a selection in view."""

    def __init__(self, total: int = 0, visible_count: int = 1):
        super().__init__(total, visible_count)
        self.selected = 0

    def select(self, index: int) -> int:
        """Move the selection, clamped to the data, and follow it."""
        if self.total == 0:
            self.selected = 0
        else:
            self.selected = max(0, min(index, self.total - 1))
        self.follow()
        return self.selected

    def move_selection(self, delta: int) -> int:
        return self.select(self.selected + delta)

    def follow(self) -> int:
        """Scroll the minimum amount that puts the selection in view."""
        offset = self.offset
        if self.selected < offset:
            offset = self.selected
        if self.selected >= offset + self.visible_count:
            offset = self.selected - self.visible_count + 1
        return self.scroll_to(offset)

    def set_bounds(self, total: int, visible_count: int) -> int:
        super().set_bounds(total, visible_count)
        if self.total:
            self.selected = max(0, min(self.selected, self.total - 1))
        else:
            self.selected = 0
        return self.follow()
