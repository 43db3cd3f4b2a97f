"""Turn conversation entries into display rows for the conversation pane."""

from typing import List, Optional, Sequence, Tuple

from ..core.constants import RenderMode, RowKind
from ..core.types import ConversationEntry, Row
from ..io.exporter import markdown_header
from .text_layout import pad_right, string_width, wrap_rows, wrap_text

SPACER_TEXT = " "
BOX_SEPARATION = 2


def build_box_rows(entries: Sequence[ConversationEntry], max_width: int) -> List[Row]:
    """Pretty mode: one bordered block per entry.

    ::

        + User ------------+
        | hello            |
        +------------------+
    """
    rows: List[Row] = []
    inner_width = max(1, max_width - 4)
    border_inner_width = inner_width + 2
    bottom = "+" + "-" * border_inner_width + "+"

    for entry in entries:
        label_tag = f" {entry.role.label} "
        if string_width(label_tag) > border_inner_width:
            label_tag = label_tag[:border_inner_width]
        remaining = max(0, border_inner_width - string_width(label_tag))
        top = "+" + label_tag + "-" * remaining + "+"
        rows.append(Row(RowKind.BOX_BORDER, top, entry.role))

        for raw_line in (entry.text or "").split("\n"):
            for line in wrap_text(raw_line, inner_width):
                rows.append(
                    Row(RowKind.BOX_TEXT, f"| {pad_right(line, inner_width)} |", entry.role)
                )

        rows.append(Row(RowKind.BOX_BORDER, bottom, entry.role))
        rows.extend(Row(RowKind.SPACER, SPACER_TEXT) for _ in range(BOX_SEPARATION))

    while rows and rows[-1].kind is RowKind.SPACER:
        rows.pop()
    return rows


def build_markdown_rows(entries: Sequence[ConversationEntry]) -> List[Row]:
    """Markdown mode: the export document, one row per physical line.

    Headings become label rows carrying the role; body and separator lines
    are text rows. Empty lines are shown as a single space.
    """
    rows: List[Row] = []
    for index, entry in enumerate(entries):
        if index:
            rows.append(Row(RowKind.TEXT, SPACER_TEXT))
        rows.append(Row(RowKind.LABEL, markdown_header(entry.role), entry.role))
        for line in (entry.text or "").split("\n"):
            rows.append(Row(RowKind.TEXT, line or SPACER_TEXT))
    return rows


class TranscriptRenderer:
    """Derive wrapped rows from (entries, mode, width), caching the last result."""

    def __init__(self):
        self._key: Optional[Tuple[Tuple[ConversationEntry, ...], RenderMode, int]] = None
        self._rows: List[Row] = []

    def render(
        self, entries: Sequence[ConversationEntry], mode: RenderMode, width: int
    ) -> List[Row]:
        """Rows for the conversation pane, wrapped to ``width`` cells."""
        key = (tuple(entries), mode, width)
        if key == self._key:
            return self._rows

        if mode is RenderMode.MARKDOWN:
            logical = build_markdown_rows(entries)
        else:
            logical = build_box_rows(entries, width)

        self._rows = wrap_rows(logical, width)
        self._key = key
        return self._rows

    def invalidate(self) -> None:
        self._key = None
        self._rows = []
