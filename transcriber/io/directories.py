"""Directory resolution for transcriber.

Follows the XDG Base Directory specification for configuration and knows
the default location of recorded sessions.
"""

import os
from pathlib import Path

SESSIONS_DIR_ENV = "CODEX_SESSIONS_DIR"


def get_config_dir() -> Path:
    """Get the configuration directory for transcriber.

    Returns ~/.config/transcriber/ by default, or respects $XDG_CONFIG_HOME
    if set. Does NOT create the directory; transcriber only reads from it.

    Returns:
        Path to the configuration directory
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "transcriber"
    return Path.home() / ".config" / "transcriber"


def get_default_sessions_dir() -> Path:
    """Get the default root that holds recorded session logs.

    Returns:
        Path to ~/.codex/sessions
    """
    return Path.home() / ".codex" / "sessions"


def get_export_dir() -> Path:
    """Directory that default export paths are joined with."""
    return Path.cwd()
