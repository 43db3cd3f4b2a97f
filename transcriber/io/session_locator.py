"""Discover session logs and derive their list metadata."""

import asyncio
import json
import locale
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import aiofiles

from ..core.constants import (
    LABEL_TIME_FORMAT,
    LOG_EXTENSION,
    ROLLOUT_TIMESTAMP_PATTERN,
    RecordTypes,
)
from ..core.exceptions import SessionScanError
from ..core.types import RepositoryHint, SessionDescriptor
from .logger import get_logger

logger = get_logger("session_locator")

_ROLLOUT_RE = re.compile(ROLLOUT_TIMESTAMP_PATTERN)
_EXCESS_FRACTION_RE = re.compile(r"(\.\d{6})\d+")

# Upper bound on log files opened at the same time while describing
MAX_OPEN_FILES = 32


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse a metadata timestamp into an aware datetime.

    Accepts ISO 8601 strings (``Z`` suffix allowed) and epoch milliseconds.
    Naive timestamps are interpreted in local time.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str) or not raw.strip():
        return None

    text = raw.strip()
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    text = _EXCESS_FRACTION_RE.sub(r"\1", text)
    try:
        parsed = datetime.fromisoformat(text)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        try:
            parsed = parsed.astimezone()
        except (OverflowError, ValueError, OSError):
            return None
    return parsed


def parse_filename_timestamp(path: Union[str, Path]) -> Optional[datetime]:
    """Recover the UTC start time embedded in a ``rollout-...`` file name."""
    match = _ROLLOUT_RE.search(Path(path).name)
    if not match:
        return None
    date_part, hours, minutes, seconds = match.groups()
    try:
        return datetime.strptime(
            f"{date_part}T{hours}:{minutes}:{seconds}", "%Y-%m-%dT%H:%M:%S"
        ).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def format_local_timestamp(moment: datetime) -> Optional[str]:
    """Render a datetime as a local ``YYYY-MM-DD hh:mm:ss`` label.

    Returns None when the moment cannot be shifted into the local zone,
    which happens near the ends of the supported date range.
    """
    try:
        return moment.astimezone().strftime(LABEL_TIME_FORMAT)
    except (OverflowError, ValueError, OSError):
        return None


def to_millis(moment: Optional[datetime]) -> float:
    if moment is None:
        return 0.0
    try:
        return moment.timestamp() * 1000
    except (OverflowError, ValueError, OSError):
        return 0.0


def parse_repo_name(repository_url: str) -> str:
    """Short repository name from a remote URL.

    ``https://github.com/acme/widgets.git`` becomes ``widgets``. Strings that
    are not URLs (scp-style remotes, local paths) fall back to their basename.
    """
    if not repository_url:
        return ""
    parsed = urlparse(repository_url)
    if parsed.scheme and parsed.netloc:
        pathname = re.sub(r"\.git$", "", parsed.path)
        parts = [part for part in pathname.split("/") if part]
        return parts[-1] if parts else ""
    trimmed = re.sub(r"\.git$", "", repository_url)
    return os.path.basename(trimmed.rstrip("/"))


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class SessionScan:
    """Result of one scan of the sessions root.

    ``root_exists`` tells an empty root apart from a root that is not there;
    both produce an empty ``sessions`` list. Unreadable roots raise
    :class:`SessionScanError` instead.
    """

    root: Path
    sessions: List[SessionDescriptor] = field(default_factory=list)
    root_exists: bool = True

    @property
    def empty(self) -> bool:
        return not self.sessions

    def find(self, key: str) -> Optional[SessionDescriptor]:
        """Look a session up by stable id, absolute path or base name."""
        for session in self.sessions:
            if session.id and session.id == key:
                return session
        candidate = Path(key).expanduser()
        for session in self.sessions:
            if session.path == candidate or session.base_name == key:
                return session
        return None


class SessionLocator:
    """Recursively enumerate session logs under a root directory."""

    def __init__(self, root: Union[str, Path], extension: str = LOG_EXTENSION):
        """Initialize the locator.

        Args:
            root: Directory scanned for session logs
            extension: File name suffix that marks a session log
        """
        self.root = Path(root).expanduser()
        self.extension = extension

    async def scan(self) -> SessionScan:
        """Scan the root and return every session, sorted for display.

        Raises:
            SessionScanError: If the root exists but cannot be listed
        """
        loop = asyncio.get_running_loop()
        files = await loop.run_in_executor(None, self.find_log_files)
        if files is None:
            logger.info(f"Sessions directory does not exist: {self.root}")
            return SessionScan(root=self.root, root_exists=False)

        semaphore = asyncio.Semaphore(MAX_OPEN_FILES)

        async def bounded(path: Path) -> SessionDescriptor:
            async with semaphore:
                return await self.describe(path)

        sessions = await asyncio.gather(*(bounded(path) for path in files))
        logger.debug(f"Scanned {len(sessions)} sessions under {self.root}")
        return SessionScan(root=self.root, sessions=sort_sessions(sessions))

    def find_log_files(self) -> Optional[List[Path]]:
        """List log files below the root, or None if the root is missing.

        Unreadable subdirectories are skipped. Symbolic links are not
        followed.
        """
        try:
            entries = self._list_dir(self.root)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SessionScanError(self.root, e.strerror or str(e)) from e

        results: List[Path] = []
        pending = [entries]
        while pending:
            for entry in pending.pop():
                if entry.is_dir(follow_symlinks=False):
                    try:
                        pending.append(self._list_dir(Path(entry.path)))
                    except OSError as e:
                        logger.warning(f"Skipping unreadable directory {entry.path}: {e}")
                elif entry.is_file(follow_symlinks=False) and entry.name.endswith(
                    self.extension
                ):
                    results.append(Path(entry.path))
        return sorted(results)

    @staticmethod
    def _list_dir(path: Path) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            return list(it)

    async def describe(self, path: Path) -> SessionDescriptor:
        """Build the descriptor of one log file. Never raises."""
        meta = await self.read_metadata(path)
        payload = _as_dict(meta.get("payload")) if meta else {}
        meta = meta or {}

        meta_time = parse_timestamp(payload.get("timestamp") or meta.get("timestamp"))
        file_time = parse_filename_timestamp(path)

        label = (
            (meta_time and format_local_timestamp(meta_time))
            or (file_time and format_local_timestamp(file_time))
            or os.path.relpath(path, self.root)
        )

        mtime_ms = await self._mtime_millis(path)
        sort_key = mtime_ms or to_millis(meta_time) or to_millis(file_time) or 0.0

        session_id = _as_text(payload.get("id")) or _as_text(meta.get("id")) or None
        git = payload.get("git") or meta.get("git")

        return SessionDescriptor(
            path=path.absolute(),
            label=label,
            sort_key=sort_key,
            id=session_id,
            repository=self._repository_hint(git),
        )

    async def read_metadata(self, path: Path) -> Optional[Dict[str, Any]]:
        """Return the first-line metadata record, or None if absent or broken."""
        try:
            async with aiofiles.open(
                path, "r", encoding="utf-8", errors="replace"
            ) as f:
                line = (await f.readline()).strip()
        except OSError as e:
            logger.debug(f"Could not read metadata from {path}: {e}")
            return None

        if not line:
            return None
        try:
            parsed = json.loads(line)
        except (ValueError, RecursionError):
            logger.debug(f"First line of {path} is not a JSON record")
            return None
        if isinstance(parsed, dict) and parsed.get("type") == RecordTypes.SESSION_META:
            return parsed
        return None

    @staticmethod
    async def _mtime_millis(path: Path) -> float:
        loop = asyncio.get_running_loop()
        try:
            stat = await loop.run_in_executor(None, os.stat, path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return 0.0
        return stat.st_mtime_ns / 1_000_000

    @staticmethod
    def _repository_hint(git: Any) -> Optional[RepositoryHint]:
        if not isinstance(git, dict):
            return None
        url = _as_text(git.get("repository_url")) or _as_text(git.get("repositoryUrl"))
        branch = _as_text(git.get("branch"))
        if not url and not branch:
            return None
        return RepositoryHint(url=url, branch=branch)


def sort_sessions(sessions: List[SessionDescriptor]) -> List[SessionDescriptor]:
    """Newest first; equal keys ordered by label using the active locale."""
    return sorted(sessions, key=lambda s: (-s.sort_key, locale.strxfrm(s.label)))
