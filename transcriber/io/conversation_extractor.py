"""Reconstruct the user/assistant conversation from a session log.

Session logs mix several record schemas. Event records (``event_msg``) carry
the messages as the user saw them; response items (``response_item``) carry
the raw model input and output. Both streams are collected while scanning,
and the event stream wins whenever it produced anything at all.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import aiofiles

from ..core.constants import EXCLUDE_PREFIXES, RecordTypes, Role
from ..core.exceptions import ConversationLoadError
from ..core.types import ConversationEntry
from .logger import get_logger

logger = get_logger("conversation_extractor")


def should_exclude(text: str) -> bool:
    """True for empty text and for injected context blocks."""
    if not text:
        return True
    return text.lstrip().startswith(EXCLUDE_PREFIXES)


def image_placeholders(payload: Dict[str, Any]) -> List[str]:
    images: List[Any] = []
    for field_name in RecordTypes.IMAGE_FIELDS:
        value = payload.get(field_name)
        if isinstance(value, list):
            images.extend(value)
    return [f"[image {index}]" for index in range(1, len(images) + 1)]


def append_images(text: str, payload: Dict[str, Any]) -> str:
    """Append ``[image N]`` placeholders for attachments of a user message."""
    placeholders = image_placeholders(payload)
    if not placeholders:
        return text
    suffix = "\n".join(placeholders)
    if not text:
        return suffix
    return f"{text}\n\n{suffix}"


def text_from_content(content: Any) -> str:
    """Join the input/output text parts of a response item."""
    if not isinstance(content, list):
        return ""
    parts = []
    for item in content:
        if not isinstance(item, dict) or item.get("type") not in RecordTypes.TEXT_PARTS:
            continue
        text = item.get("text")
        if isinstance(text, str) and text:
            parts.append(text)
    return "\n".join(parts)


class ConversationAccumulator:
    """Collects the primary and fallback streams for one log."""

    def __init__(self):
        self.primary: List[ConversationEntry] = []
        self.fallback: List[ConversationEntry] = []
        self.skipped_lines = 0

    def feed_line(self, line: str) -> None:
        """Parse one raw log line. Blank and malformed lines are ignored."""
        if not line.strip():
            return
        try:
            record = json.loads(line)
        except (ValueError, RecursionError):
            # JSONDecodeError, oversized integers and runaway nesting alike
            self.skipped_lines += 1
            return
        if isinstance(record, dict):
            self.feed_record(record)

    def feed_record(self, record: Dict[str, Any]) -> None:
        record_type = record.get("type")
        payload = record.get("payload")
        if not isinstance(payload, dict):
            payload = {}

        if record_type == RecordTypes.EVENT_MSG:
            self._feed_event(payload)
        elif record_type == RecordTypes.RESPONSE_ITEM:
            self._feed_response_item(payload)

    def _feed_event(self, payload: Dict[str, Any]) -> None:
        message = payload.get("message")
        message = message if isinstance(message, str) else ""
        msg_type = payload.get("type")

        if msg_type == RecordTypes.USER_MESSAGE:
            self._queue(self.primary, Role.USER, append_images(message, payload))
        elif msg_type in RecordTypes.AGENT_MESSAGES:
            self._queue(self.primary, Role.ASSISTANT, message)

    def _feed_response_item(self, payload: Dict[str, Any]) -> None:
        if payload.get("type") != RecordTypes.MESSAGE:
            return
        try:
            role = Role(payload.get("role"))
        except ValueError:
            return
        self._queue(self.fallback, role, text_from_content(payload.get("content")))

    @staticmethod
    def _queue(stream: List[ConversationEntry], role: Role, text: str) -> None:
        if should_exclude(text):
            return
        stream.append(ConversationEntry(role=role, text=text))

    def result(self) -> List[ConversationEntry]:
        """Primary stream if it has anything, otherwise the fallback stream."""
        if self.primary:
            return list(self.primary)
        return list(self.fallback)


def extract_from_lines(lines: Iterable[str]) -> List[ConversationEntry]:
    """Extract a conversation from already-read log lines."""
    accumulator = ConversationAccumulator()
    for line in lines:
        accumulator.feed_line(line)
    return accumulator.result()


class ConversationExtractor:
    """Stream a session log from disk into conversation entries."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def extract(self, path: Union[str, Path]) -> List[ConversationEntry]:
        """Read ``path`` line by line and return its conversation.

        Raises:
            ConversationLoadError: If the file cannot be opened or read
        """
        path = Path(path)
        accumulator = ConversationAccumulator()
        try:
            async with aiofiles.open(
                path, "r", encoding=self.encoding, errors="replace"
            ) as f:
                async for line in f:
                    accumulator.feed_line(line)
        except OSError as e:
            raise ConversationLoadError(path, e.strerror or str(e)) from e

        if accumulator.skipped_lines:
            logger.debug(
                f"Skipped {accumulator.skipped_lines} malformed lines in {path}"
            )
        entries = accumulator.result()
        logger.debug(
            f"Extracted {len(entries)} entries from {path} "
            f"(primary={len(accumulator.primary)}, fallback={len(accumulator.fallback)})"
        )
        return entries

