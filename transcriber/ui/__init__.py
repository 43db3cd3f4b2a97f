"""User interface components for transcriber."""

from .browser import BrowserAction, TranscriptBrowser
from .transcript_renderer import TranscriptRenderer
from .viewport import ScrollWindow, SelectionWindow

__all__ = [
    "BrowserAction",
    "ScrollWindow",
    "SelectionWindow",
    "TranscriptBrowser",
    "TranscriptRenderer",
]
