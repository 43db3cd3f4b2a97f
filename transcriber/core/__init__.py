"""Core types, constants and exceptions for transcriber."""

from .constants import Focus, RenderMode, Role, RowKind
from .exceptions import (
    ConfigError,
    ConversationLoadError,
    ExportError,
    ResumeError,
    SessionScanError,
    TranscriberError,
)
from .types import ConversationEntry, RepositoryHint, Row, SessionDescriptor

__all__ = [
    "ConfigError",
    "ConversationEntry",
    "ConversationLoadError",
    "ExportError",
    "Focus",
    "RenderMode",
    "RepositoryHint",
    "ResumeError",
    "Role",
    "Row",
    "RowKind",
    "SessionDescriptor",
    "SessionScanError",
    "TranscriberError",
]
