# transcriber/cli/browse.py
"""Interactive two-pane browser command."""

import asyncio
import sys

import rich_click as click
from rich.console import Console

from ..core.constants import RenderMode
from ..core.exceptions import ResumeError
from ..io.logger import setup_logging
from ..io.resume import run_resume_command
from ..ui.app import TranscriberApp
from ..ui.display_utils import DisplayUtils

console = Console()
display = DisplayUtils(console)


@click.command()
@click.option("--markdown", is_flag=True, help="Start in Markdown view")
@click.pass_obj
def browse(settings, markdown):
    """Open the interactive session browser.

    [bold]KEYS:[/bold]
    • Tab / 1 / 2     switch pane
    • j/k, f/b, g/G   move or scroll (Ctrl+D / Ctrl+U: half page)
    • m               toggle pretty / Markdown view
    • e               export the conversation as Markdown
    • c               resume the session in the companion tool
    • q               quit
    """
    setup_logging(
        settings.log_level,
        str(settings.log_file) if settings.log_file else None,
        console=False,
    )
    if markdown:
        settings = settings.model_copy(
            update={"default_render_mode": RenderMode.MARKDOWN}
        )

    if not sys.stdin.isatty():
        display.error("The browser needs an interactive terminal", "Try 'transcriber list' instead")
        sys.exit(1)

    app = TranscriberApp(settings, console=console)
    try:
        resume_argv = asyncio.run(app.run())
    except KeyboardInterrupt:
        return

    if resume_argv:
        try:
            code = run_resume_command(resume_argv)
        except ResumeError as e:
            display.failure(e)
            sys.exit(1)
        sys.exit(code)
