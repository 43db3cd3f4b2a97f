# transcriber/cli/list_sessions.py
"""List command for recorded sessions."""

import asyncio
import os
import sys

import rich_click as click
from rich.console import Console
from rich.table import Table

from ..core.exceptions import SessionScanError
from ..io.logger import setup_logging
from ..io.session_locator import SessionLocator, parse_repo_name
from ..ui.display_utils import DisplayUtils
from .constants import NORD_BLUE, NORD_CYAN, NORD_GREEN, NORD_YELLOW

console = Console()
display = DisplayUtils(console)


@click.command(name="list")
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Show at most N sessions")
@click.pass_obj
def list_sessions(settings, limit):
    """List recorded sessions, most recent first."""
    setup_logging(settings.log_level, str(settings.log_file) if settings.log_file else None)

    locator = SessionLocator(settings.sessions_dir, settings.log_extension)
    try:
        scan = asyncio.run(locator.scan())
    except SessionScanError as e:
        display.failure(e)
        sys.exit(1)

    if scan.empty:
        display.warning("No sessions found", str(scan.root))
        if not scan.root_exists:
            display.dim("The sessions directory does not exist yet.")
        return

    sessions = scan.sessions[:limit] if limit else scan.sessions
    table = Table(title=f"Sessions in {scan.root}")
    table.add_column("Started", style=NORD_CYAN, no_wrap=True)
    table.add_column("ID", style=NORD_GREEN)
    table.add_column("Repository", style=NORD_YELLOW)
    table.add_column("Branch", style=NORD_BLUE)
    table.add_column("File")

    for session in sessions:
        repository = session.repository
        table.add_row(
            session.label,
            session.id or "-",
            parse_repo_name(repository.url) if repository and repository.url else "-",
            repository.branch if repository and repository.branch else "-",
            os.path.relpath(session.path, scan.root.absolute()),
        )

    console.print(table)
    if limit and len(scan.sessions) > limit:
        display.dim(f"Showing {limit} of {len(scan.sessions)} sessions")
