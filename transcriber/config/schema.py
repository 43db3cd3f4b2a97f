"""Pydantic schema for configuration validation."""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.constants import LOG_EXTENSION, RenderMode
from ..io.directories import get_default_sessions_dir

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class TranscriberConfig(BaseModel):
    """Schema for transcriber settings."""

    sessions_dir: Path = Field(
        default_factory=get_default_sessions_dir,
        description="Root directory scanned for session logs",
    )
    log_extension: str = Field(
        default=LOG_EXTENSION,
        min_length=1,
        description="File name suffix of session logs",
    )
    list_pane_width: int = Field(
        default=25,
        ge=12,
        le=80,
        description="Width of the session list pane, borders included",
    )
    default_render_mode: RenderMode = Field(
        default=RenderMode.PRETTY,
        description="Render mode the conversation pane starts in",
    )
    resume_command: List[str] = Field(
        default_factory=lambda: ["codex", "resume"],
        min_length=1,
        description="Command the session id is appended to for resuming",
    )
    log_level: LogLevel = Field(default="WARNING")
    log_file: Optional[Path] = Field(
        default=None, description="Optional file receiving log records"
    )

    @field_validator("sessions_dir", "log_file")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand ``~`` in configured paths."""
        return v.expanduser() if v is not None else v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("resume_command")
    @classmethod
    def validate_command(cls, v: List[str]) -> List[str]:
        """The executable name must not be blank."""
        if not v[0].strip():
            raise ValueError("resume_command must start with an executable name")
        return v
