"""Terminal display width, wrapping and padding primitives.

Widths use a small table: control characters take no cells,
ASCII takes one, everything else is treated as double width. The renderer,
the viewport and the session list all measure text through this module so
that wrapping and scrolling agree on what fits.
"""

from typing import Iterable, Iterator, List

from ..core.types import Row
from ..core.constants import RowKind

TAB_EXPANSION = "  "
ELLIPSIS = "..."


def char_width(char: str) -> int:
    """Display cells taken by a single code point."""
    code = ord(char) if char else 0
    if code <= 0x1F:
        return 0
    if code <= 0x7F:
        return 1
    return 2


def string_width(text: str) -> int:
    """Display cells taken by ``text``."""
    return sum(char_width(char) for char in text or "")


def pad_right(text: str, target_width: int) -> str:
    """Right-pad ``text`` with spaces up to ``target_width`` cells."""
    current = string_width(text)
    if current >= target_width:
        return text
    return text + " " * (target_width - current)


def truncate_by_width(text: str, max_width: int) -> str:
    """Longest prefix of ``text`` that fits in ``max_width`` cells."""
    if not text or max_width <= 0:
        return ""
    width = 0
    result = []
    for char in text:
        w = char_width(char)
        if width + w > max_width:
            break
        result.append(char)
        width += w
    return "".join(result)


def truncate_label(label: str, max_width: int) -> str:
    """Fit a single-line label, marking truncation with an ellipsis.

    Labels wider than the budget keep their first ``max_width - 3`` cells
    followed by ``...``; budgets of three cells or less are hard-cut.
    """
    if not label:
        return ""
    if string_width(label) <= max_width:
        return label
    if max_width <= len(ELLIPSIS):
        return truncate_by_width(label, max_width)
    return truncate_by_width(label, max_width - len(ELLIPSIS)) + ELLIPSIS


def _expand(text: str) -> Iterator[str]:
    for char in text:
        if char == "\r":
            continue
        if char == "\t":
            yield from TAB_EXPANSION
        else:
            yield char


def wrap_text(text: str, max_width: int) -> List[str]:
    """Hard-wrap ``text`` into lines of at most ``max_width`` cells.

    Newlines are not interpreted; callers split logical lines first. A code
    point wider than the budget is placed on a line of its own. Empty input
    produces a single ``" "`` line so every logical line yields a row.
    """
    if max_width <= 0:
        return [text or ""]
    if text == "":
        return [" "]

    lines: List[str] = []
    line: List[str] = []
    line_width = 0
    for char in _expand(text):
        w = char_width(char)
        if line_width + w > max_width and line:
            lines.append("".join(line))
            line = []
            line_width = 0
        line.append(char)
        line_width += w
        if line_width >= max_width:
            lines.append("".join(line))
            line = []
            line_width = 0
    if line or not lines:
        lines.append("".join(line) or " ")
    return lines


def wrap_rows(rows: Iterable[Row], max_width: int) -> List[Row]:
    """Wrap every row to ``max_width``.

    Continuations of a label row become plain text rows so they are never
    mistaken for a new heading. Rows that already fit are returned as-is,
    which makes the pass idempotent.
    """
    wrapped: List[Row] = []
    for row in rows:
        lines = wrap_text(row.text or "", max_width)
        for index, line in enumerate(lines):
            kind = row.kind
            if index > 0 and kind is RowKind.LABEL:
                kind = RowKind.TEXT
            if index == 0 and line == row.text and kind is row.kind:
                wrapped.append(row)
            else:
                wrapped.append(Row(kind=kind, text=line, role=row.role))
    return wrapped


def build_title_border_line(width: int, title: str = "") -> str:
    """Top border of a titled pane, e.g. ``┌─ [1] Sessions ───┐``."""
    if not width or width < 2:
        return ""
    inner_width = width - 2
    if not title:
        return "┌" + "─" * inner_width + "┐"
    safe_title = truncate_by_width(title, inner_width)
    remaining = max(0, inner_width - string_width(safe_title))
    left_dashes = min(1, remaining)
    right_dashes = max(0, remaining - left_dashes)
    return "┌" + "─" * left_dashes + safe_title + "─" * right_dashes + "┐"


def build_header_line(left: str, right: str, total_width: int) -> str:
    """Left text and right-justified text on one line of ``total_width``.

    The right side is truncated first and at least one space is kept between
    the two; the left side is only cut when it cannot fit on its own.
    """
    left = left or ""
    right = right or ""
    if not total_width or total_width <= 0:
        return left
    left_width = string_width(left)
    if left_width >= total_width:
        return truncate_by_width(left, total_width)
    right_width = string_width(right)
    if left_width + 1 + right_width <= total_width:
        return left + " " * (total_width - left_width - right_width) + right
    right = truncate_by_width(right, max(0, total_width - left_width - 1))
    gap = max(1, total_width - left_width - string_width(right))
    return left + " " * gap + right
