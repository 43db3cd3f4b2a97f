"""Markdown serialization and export of a reconstructed conversation."""

from pathlib import Path
from typing import Optional, Sequence, Union

import aiofiles

from ..core.constants import Role
from ..core.exceptions import ExportError
from ..core.types import ConversationEntry, SessionDescriptor
from .directories import get_export_dir
from .logger import get_logger

logger = get_logger("exporter")


def markdown_header(role: Role) -> str:
    return f"### {role.label}"


def build_markdown(entries: Sequence[ConversationEntry]) -> str:
    """Serialize entries as Markdown.

    Each entry is a ``### User`` / ``### Assistant`` heading followed by its
    text verbatim; entries are separated by one blank line and the document
    ends with exactly one newline.
    """
    blocks = [f"{markdown_header(entry.role)}\n{entry.text}" for entry in entries]
    return "\n\n".join(blocks) + "\n"


def default_export_path(
    session: SessionDescriptor, directory: Optional[Path] = None
) -> Path:
    """``<id>.md`` (or ``<log base name>.md``) in the working directory."""
    base = session.id or session.base_name or "session"
    return (directory or get_export_dir()) / f"{base}.md"


class MarkdownExporter:
    """Write conversations to Markdown files."""

    async def export(
        self, entries: Sequence[ConversationEntry], path: Union[str, Path]
    ) -> Path:
        """Write the Markdown rendering of ``entries`` to ``path``.

        Existing files are overwritten.

        Raises:
            ExportError: If the path is empty or cannot be written
        """
        if not str(path).strip():
            raise ExportError(Path(), "Export path is empty")
        target = Path(path).expanduser()
        markdown = build_markdown(entries)
        try:
            async with aiofiles.open(target, "w", encoding="utf-8", newline="\n") as f:
                await f.write(markdown)
        except OSError as e:
            logger.warning(f"Export to {target} failed: {e}")
            raise ExportError(target, e.strerror or str(e)) from e

        logger.info(f"Exported {len(entries)} entries to {target}")
        return target
