"""Transcriber - browse and export recorded agent sessions"""

__version__ = "0.1.0"

# Config exports
from .config import Config, TranscriberConfig

# Core exports
from .core.types import ConversationEntry, RepositoryHint, Row, SessionDescriptor

# IO exports
from .io import (
    ConversationExtractor,
    SessionLocator,
    SessionScan,
    build_markdown,
    get_logger,
)

# UI exports
from .ui import ScrollWindow, TranscriptBrowser, TranscriptRenderer

__all__ = [
    # Version
    "__version__",
    # Core
    "ConversationEntry",
    "RepositoryHint",
    "Row",
    "SessionDescriptor",
    # Config
    "Config",
    "TranscriberConfig",
    # IO
    "ConversationExtractor",
    "SessionLocator",
    "SessionScan",
    "build_markdown",
    "get_logger",
    # UI
    "ScrollWindow",
    "TranscriptBrowser",
    "TranscriptRenderer",
]
