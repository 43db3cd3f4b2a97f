"""Configuration for transcriber."""

from .config import CONFIG_FILENAME, Config
from .schema import TranscriberConfig

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "TranscriberConfig",
]
