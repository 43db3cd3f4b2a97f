"""Logging configuration for transcriber."""

import logging
from typing import Optional

from rich.logging import RichHandler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"transcriber.{name}")


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None, console: bool = True
):
    """Configure logging for transcriber.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to write logs to
        console: Attach a Rich console handler. The full-screen browser
            turns this off so log records cannot tear the display.
    """
    logger = logging.getLogger("transcriber")
    logger.setLevel(getattr(logging, level.upper()))

    # Re-running setup (tests, repeated CLI invocations) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = RichHandler(
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=False,
            show_path=False,
        )
        console_handler.setLevel(getattr(logging, level.upper()))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    # Don't propagate to root logger
    logger.propagate = False
