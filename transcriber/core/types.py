"""Core data types for transcriber.

All types here are immutable value objects. Session descriptors are produced
once per scanned log file, conversation entries once per extraction, and rows
are derived from entries by the renderer.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import LOG_EXTENSION, Role, RowKind


@dataclass(frozen=True)
class RepositoryHint:
    """Repository information lifted from a session metadata record."""

    url: str = ""
    branch: str = ""


@dataclass(frozen=True)
class SessionDescriptor:
    """One discovered session log."""

    path: Path
    label: str
    sort_key: float = 0.0
    id: Optional[str] = None
    repository: Optional[RepositoryHint] = None

    @property
    def base_name(self) -> str:
        """File name without the log extension."""
        name = self.path.name
        if name.endswith(LOG_EXTENSION):
            return name[: -len(LOG_EXTENSION)]
        return name


@dataclass(frozen=True)
class ConversationEntry:
    """One user or assistant message of a reconstructed conversation."""

    role: Role
    text: str


@dataclass(frozen=True)
class Row:
    """A single display line of the conversation pane."""

    kind: RowKind
    text: str
    role: Optional[Role] = field(default=None)
