"""Session discovery, extraction, export and logging for transcriber."""

from .conversation_extractor import ConversationExtractor, extract_from_lines
from .exporter import MarkdownExporter, build_markdown, default_export_path
from .logger import get_logger, setup_logging
from .session_locator import SessionLocator, SessionScan, parse_repo_name

__all__ = [
    "ConversationExtractor",
    "MarkdownExporter",
    "SessionLocator",
    "SessionScan",
    "build_markdown",
    "default_export_path",
    "extract_from_lines",
    "get_logger",
    "parse_repo_name",
    "setup_logging",
]
