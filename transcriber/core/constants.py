"""Core constants for the transcriber application."""

from enum import Enum


# Nord color scheme for console output
class Colors:
    """Nord color scheme constants."""

    GREEN = "#a3be8c"
    RED = "#bf616a"
    YELLOW = "#ebcb8b"
    BLUE = "#5e81ac"
    CYAN = "#88c0d0"
    FROST = "#81a1c1"
    TEAL = "#8fbcbb"
    DIM = "#4c566a"


class Role(str, Enum):
    """Speaker of a conversation entry."""

    USER = "user"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        return "User" if self is Role.USER else "Assistant"


class RowKind(str, Enum):
    """Kind of a rendered display row."""

    TEXT = "text"
    BOX_BORDER = "box-border"
    BOX_TEXT = "box-text"
    LABEL = "label"
    SPACER = "spacer"


class RenderMode(str, Enum):
    """Conversation pane render modes."""

    PRETTY = "pretty"
    MARKDOWN = "markdown"

    def toggled(self) -> "RenderMode":
        return RenderMode.MARKDOWN if self is RenderMode.PRETTY else RenderMode.PRETTY


class Focus(str, Enum):
    """Which pane receives navigation keys."""

    SESSIONS = "sessions"
    CONVERSATION = "conversation"


# Session log record discriminants
class RecordTypes:
    """Top-level and payload `type` values understood by the extractor."""

    SESSION_META = "session_meta"
    EVENT_MSG = "event_msg"
    RESPONSE_ITEM = "response_item"
    USER_MESSAGE = "user_message"
    AGENT_MESSAGES = ("agent_message", "assistant_message")
    MESSAGE = "message"
    TEXT_PARTS = ("input_text", "output_text")
    IMAGE_FIELDS = ("images", "local_images")


# Injected context that is not part of the human conversation
EXCLUDE_PREFIXES = (
    "# AGENTS.md",
    "<environment_context>",
    "<permissions instructions>",
    "<INSTRUCTIONS>",
)


class Layout:
    """Fixed geometry of the browser screen."""

    DEFAULT_COLUMNS = 120
    DEFAULT_ROWS = 24
    HEADER_LINES = 6  # title, status, detail, export path, export hint, blank
    FOOTER_LINES = 1
    MIN_PANE_HEIGHT = 4
    PANE_BORDER = 2
    MIN_CONTENT_WIDTH = 10
    MIN_CONVERSATION_PANE_WIDTH = 20
    MIN_LABEL_WIDTH = 8
    SELECTION_PREFIX = "> "
    IDLE_PREFIX = "  "


APP_TITLE = "Codex Transcriber"
LOG_EXTENSION = ".jsonl"
ROLLOUT_TIMESTAMP_PATTERN = r"rollout-(\d{4}-\d{2}-\d{2})T(\d{2})-(\d{2})-(\d{2})"
LABEL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
