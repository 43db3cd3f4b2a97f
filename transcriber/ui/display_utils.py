"""Unified display utilities for command line messages.

Used by the non-interactive commands so errors, warnings and confirmations
share one look.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..core.exceptions import TranscriberError

# Nord color palette
NORD_COLORS = {
    "nord3": "#4c566a",  # Muted gray (dim text)
    "nord11": "#bf616a",  # Red - Errors
    "nord13": "#ebcb8b",  # Yellow - Warnings
    "nord14": "#a3be8c",  # Green - Success
}


class DisplayUtils:
    """Utilities for consistent message display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize display utilities.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def error(
        self,
        message: str,
        context: Optional[str] = None,
    ) -> None:
        """Display an error message.

        Args:
            message: The error message
            context: Optional detail line shown below the message
        """
        self.console.print(
            f"[{NORD_COLORS['nord11']}][FAIL] {message}[/{NORD_COLORS['nord11']}]"
        )
        if context:
            self.console.print(
                f"[{NORD_COLORS['nord3']}]       {context}[/{NORD_COLORS['nord3']}]"
            )

    def failure(self, error: TranscriberError) -> None:
        """Display a transcriber exception as status plus detail."""
        self.error(escape(error.status), escape(error.detail) if error.detail else None)

    def warning(self, message: str, context: Optional[str] = None) -> None:
        self.console.print(
            f"[{NORD_COLORS['nord13']}]⚠ {message}[/{NORD_COLORS['nord13']}]"
        )
        if context:
            self.console.print(
                f"[{NORD_COLORS['nord3']}]  {context}[/{NORD_COLORS['nord3']}]"
            )

    def success(self, message: str) -> None:
        self.console.print(
            f"[{NORD_COLORS['nord14']}]✓ {message}[/{NORD_COLORS['nord14']}]"
        )

    def dim(self, message: str) -> None:
        """Display dimmed text."""
        self.console.print(f"[{NORD_COLORS['nord3']}]{message}[/{NORD_COLORS['nord3']}]")
