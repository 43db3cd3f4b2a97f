"""Custom exceptions for transcriber.

Each exception carries a short human-readable ``status`` line and an
optional ``detail`` line, which is what the browser shows in its status area.
"""

from pathlib import Path
from typing import Optional, Union


class TranscriberError(Exception):
    """Base exception for all transcriber errors."""

    def __init__(self, status: str, detail: Optional[str] = None):
        self.status = status
        self.detail = detail or ""
        message = status if not detail else f"{status}: {detail}"
        super().__init__(message)


class ConfigError(TranscriberError):
    """Raised when the configuration file or values are invalid."""

    def __init__(self, detail: str):
        super().__init__("Invalid configuration", detail)


class SessionScanError(TranscriberError):
    """Raised when the sessions root exists but cannot be listed."""

    def __init__(self, root: Union[str, Path], reason: str):
        self.root = Path(root)
        super().__init__("Load error", reason)


class ConversationLoadError(TranscriberError):
    """Raised when a session log cannot be read during extraction."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        super().__init__("Load error", reason)


class ExportError(TranscriberError):
    """Raised when the Markdown export cannot be written."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        super().__init__("Export failed", reason)


class ResumeError(TranscriberError):
    """Raised when a session cannot be handed off to the companion tool."""
