# transcriber/cli/__init__.py
"""Main CLI entry point."""

import locale
from pathlib import Path

# Configure rich-click BEFORE importing it as click, otherwise the
# settings below don't take effect.
import rich_click.rich_click as rc

rc.USE_RICH_MARKUP = True
rc.SHOW_ARGUMENTS = True
rc.GROUP_ARGUMENTS_OPTIONS = True
rc.SHOW_METAVARS_COLUMN = False
rc.APPEND_METAVARS_HELP = True
rc.MAX_WIDTH = 100

# Nord color scheme
rc.STYLE_OPTION = "bold #8fbcbb"  # Nord7 teal
rc.STYLE_ARGUMENT = "bold #88c0d0"  # Nord8 light blue
rc.STYLE_COMMAND = "bold #5e81ac"  # Nord10 blue
rc.STYLE_SWITCH = "#a3be8c"  # Nord14 green
rc.STYLE_METAVAR = "#d8dee9"  # Nord4 light gray
rc.STYLE_USAGE = "bold #8fbcbb"
rc.STYLE_OPTION_DEFAULT = "#4c566a"  # Nord3 dim gray
rc.STYLE_HELPTEXT_FIRST_LINE = "bold"
rc.STYLE_HELPTEXT = "#d8dee9"

import rich_click as click
from rich.console import Console

from .. import __version__
from ..config import Config
from ..core.exceptions import ConfigError
from ..io.logger import get_logger
from ..ui.display_utils import DisplayUtils
from .browse import browse
from .export import export
from .list_sessions import list_sessions

console = Console()
display = DisplayUtils(console)
logger = get_logger("cli")


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="transcriber")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/transcriber/transcriber.yaml)",
)
@click.option(
    "--sessions-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root directory of session logs (default: $CODEX_SESSIONS_DIR or ~/.codex/sessions)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write log records to this file",
)
@click.pass_context
def cli(ctx, config_path, sessions_dir, log_level, log_file) -> None:
    """Browse recorded agent sessions as readable conversations.

    Without a command, opens the interactive two-pane browser.

    [bold]EXAMPLES:[/bold]
    Browse sessions:       transcriber
    Start in Markdown:     transcriber browse --markdown
    List sessions:         transcriber list -n 20
    Export one session:    transcriber export <session-id> -o notes.md
    """
    try:
        config = Config(
            config_path,
            overrides={
                "sessions_dir": sessions_dir,
                "log_level": log_level,
                "log_file": log_file,
            },
        )
    except ConfigError as e:
        display.failure(e)
        ctx.exit(1)

    ctx.obj = config.settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(browse)


# Register commands
cli.add_command(browse)
cli.add_command(list_sessions)
cli.add_command(export)


def use_system_locale() -> None:
    """Adopt the user's locale so session labels collate naturally."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.debug(f"Keeping the C locale: {e}")


def main() -> None:
    use_system_locale()
    cli()


if __name__ == "__main__":
    main()
