"""Configuration management for transcriber."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..core.exceptions import ConfigError
from ..io.directories import SESSIONS_DIR_ENV, get_config_dir
from ..io.logger import get_logger
from .schema import TranscriberConfig

logger = get_logger("config")

CONFIG_FILENAME = "transcriber.yaml"


class Config:
    """Configuration manager for transcriber.

    Settings are layered, later layers winning: built-in defaults, the YAML
    file, the ``CODEX_SESSIONS_DIR`` environment variable, then explicit
    overrides (command line options).
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        self.config_path = config_path
        if config_path:
            data.update(self.load_file(Path(config_path)))
        else:
            default_path = get_config_dir() / CONFIG_FILENAME
            if default_path.exists():
                logger.debug(f"Loading config from: {default_path}")
                self.config_path = default_path
                data.update(self.load_file(default_path))

        sessions_dir = environ.get(SESSIONS_DIR_ENV)
        if sessions_dir:
            data["sessions_dir"] = sessions_dir

        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        try:
            self.settings = TranscriberConfig(**data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

    @staticmethod
    def load_file(path: Path) -> Dict[str, Any]:
        """Read a YAML config file into a plain dict."""
        try:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e.strerror or e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping of settings")
        return loaded

    @property
    def sessions_dir(self) -> Path:
        return self.settings.sessions_dir
