"""Non-blocking keyboard input for the browser."""

import os
import select
import sys
import termios
import tty
from typing import List, Optional


class Keys:
    """Names of the non-printable keys the browser understands."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TAB = "tab"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    CTRL_C = "ctrl+c"
    CTRL_D = "ctrl+d"
    CTRL_U = "ctrl+u"

    NAMED = frozenset(
        {
            UP, DOWN, LEFT, RIGHT, HOME, END, PAGE_UP, PAGE_DOWN, TAB,
            ENTER, ESCAPE, BACKSPACE, DELETE, CTRL_C, CTRL_D, CTRL_U,
        }
    )


ESCAPE_SEQUENCES = {
    "\x1b[A": Keys.UP,
    "\x1b[B": Keys.DOWN,
    "\x1b[C": Keys.RIGHT,
    "\x1b[D": Keys.LEFT,
    "\x1bOA": Keys.UP,
    "\x1bOB": Keys.DOWN,
    "\x1bOC": Keys.RIGHT,
    "\x1bOD": Keys.LEFT,
    "\x1b[H": Keys.HOME,
    "\x1b[F": Keys.END,
    "\x1bOH": Keys.HOME,
    "\x1bOF": Keys.END,
    "\x1b[1~": Keys.HOME,
    "\x1b[7~": Keys.HOME,
    "\x1b[4~": Keys.END,
    "\x1b[8~": Keys.END,
    "\x1b[3~": Keys.DELETE,
    "\x1b[5~": Keys.PAGE_UP,
    "\x1b[6~": Keys.PAGE_DOWN,
}

CONTROL_KEYS = {
    "\t": Keys.TAB,
    "\r": Keys.ENTER,
    "\n": Keys.ENTER,
    "\x7f": Keys.BACKSPACE,
    "\x08": Keys.BACKSPACE,
    "\x03": Keys.CTRL_C,
    "\x04": Keys.CTRL_D,
    "\x15": Keys.CTRL_U,
}

# Longest first so "\x1b[1~" is not read as "\x1b[" + "1~"
_SEQUENCES_BY_LENGTH = sorted(ESCAPE_SEQUENCES, key=len, reverse=True)


def decode_keys(data: str) -> List[str]:
    """Split raw terminal input into key names and printable characters.

    Unknown CSI sequences and other control characters are dropped.
    """
    keys: List[str] = []
    index = 0
    while index < len(data):
        char = data[index]
        if char == "\x1b":
            for sequence in _SEQUENCES_BY_LENGTH:
                if data.startswith(sequence, index):
                    keys.append(ESCAPE_SEQUENCES[sequence])
                    index += len(sequence)
                    break
            else:
                if data.startswith("\x1b[", index):
                    # Skip an unknown CSI sequence up to its final byte
                    end = index + 2
                    while end < len(data) and not ("\x40" <= data[end] <= "\x7e"):
                        end += 1
                    index = end + 1
                else:
                    keys.append(Keys.ESCAPE)
                    index += 1
            continue
        if char in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[char])
        elif char.isprintable():
            keys.append(char)
        index += 1
    return keys


class KeyboardHandler:
    """Non-blocking keyboard reader for the full-screen browser."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.original_settings = None
        self.running = False

    def start(self):
        """Put the terminal in cbreak mode."""
        if self.stream.isatty():
            self.original_settings = termios.tcgetattr(self.stream)
            tty.setcbreak(self.stream.fileno())
            self.running = True

    def stop(self):
        """Restore terminal settings."""
        if self.original_settings:
            termios.tcsetattr(self.stream, termios.TCSADRAIN, self.original_settings)
            self.original_settings = None
        self.running = False

    def read_keys(self, timeout: float = 0) -> List[str]:
        """Return every key pressed since the last call (non-blocking)."""
        data = self._read_available(timeout)
        return decode_keys(data) if data else []

    def _read_available(self, timeout: float) -> Optional[str]:
        if not self.running:
            return None
        fd = self.stream.fileno()
        if not select.select([fd], [], [], timeout)[0]:
            return None
        raw = os.read(fd, 1024)
        return raw.decode("utf-8", errors="ignore")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
