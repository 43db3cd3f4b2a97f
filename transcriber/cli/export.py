# transcriber/cli/export.py
"""Export command: write one session's conversation as Markdown."""

import asyncio
import sys
from pathlib import Path
from typing import Optional, Tuple

import rich_click as click
from rich.console import Console

from ..config.schema import TranscriberConfig
from ..core.exceptions import TranscriberError
from ..core.types import SessionDescriptor
from ..io.conversation_extractor import ConversationExtractor
from ..io.exporter import MarkdownExporter, default_export_path
from ..io.logger import setup_logging
from ..io.session_locator import SessionLocator
from ..ui.display_utils import DisplayUtils

console = Console()
display = DisplayUtils(console)


async def resolve_session(
    settings: TranscriberConfig, key: str
) -> SessionDescriptor:
    """Find a session by log path, stable id or log base name.

    Raises:
        TranscriberError: If no session matches
    """
    locator = SessionLocator(settings.sessions_dir, settings.log_extension)
    candidate = Path(key).expanduser()
    if candidate.is_file():
        return await locator.describe(candidate)

    scan = await locator.scan()
    session = scan.find(key)
    if session is None:
        raise TranscriberError("Session not found", key)
    return session


async def export_session(
    settings: TranscriberConfig, key: str, output: Optional[Path]
) -> Tuple[Path, int]:
    session = await resolve_session(settings, key)
    entries = await ConversationExtractor().extract(session.path)
    target = output or default_export_path(session)
    written = await MarkdownExporter().export(entries, target)
    return written, len(entries)


@click.command()
@click.argument("session")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination file (default: ./<session id>.md)",
)
@click.pass_obj
def export(settings, session, output):
    """Export a session's conversation as Markdown.

    SESSION is a log file path, a session id, or a log file name without
    its extension.
    """
    setup_logging(settings.log_level, str(settings.log_file) if settings.log_file else None)
    try:
        written, count = asyncio.run(export_session(settings, session, output))
    except TranscriberError as e:
        display.failure(e)
        sys.exit(1)

    display.success(f"Exported {count} messages to {written}")
