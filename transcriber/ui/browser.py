"""State and event handling of the two-pane session browser.

:class:`TranscriptBrowser` owns every piece of mutable browser state and is
only touched from the event loop. It performs no I/O: key handling returns a
:class:`BrowserAction` telling the shell which read or write to start, and
the shell reports results back. After every mutation the derived state is
recomputed in a fixed order: rows from (entries, mode, width), then the
clamped scroll windows from the row counts and pane heights.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..config.schema import TranscriberConfig
from ..core.constants import APP_TITLE, Focus, Layout
from ..core.exceptions import ResumeError, TranscriberError
from ..core.types import ConversationEntry, Row, SessionDescriptor
from ..io.exporter import default_export_path
from ..io.logger import get_logger
from ..io.resume import build_resume_command
from ..io.session_locator import SessionScan, parse_repo_name
from .keyboard_handler import Keys
from .text_layout import build_header_line, truncate_label
from .transcript_renderer import TranscriptRenderer
from .viewport import ScrollWindow, SelectionWindow

logger = get_logger("browser")


class BrowserAction(Enum):
    """Work the shell has to start after a key press."""

    NONE = "none"
    QUIT = "quit"
    LOAD_CONVERSATION = "load_conversation"
    EXPORT = "export"
    RESUME = "resume"


class TranscriptBrowser:
    """Coordinator of the session list and conversation panes."""

    def __init__(
        self,
        config: TranscriberConfig,
        columns: int = Layout.DEFAULT_COLUMNS,
        rows: int = Layout.DEFAULT_ROWS,
        export_dir: Optional[Path] = None,
    ):
        self.config = config
        self.columns = columns
        self.rows_available = rows
        self.export_dir = export_dir

        self.sessions: List[SessionDescriptor] = []
        self.sessions_loading = True
        self.sessions_error = ""

        self.entries: Tuple[ConversationEntry, ...] = ()
        self.conversation_loading = False
        self.conversation_error = ""
        self.generation = 0

        self.render_mode = config.default_render_mode
        self.focus = Focus.SESSIONS
        self.exporting = False
        self.export_path = ""
        self.status = ""
        self.status_detail = ""
        self.resume_argv: Optional[List[str]] = None

        self.renderer = TranscriptRenderer()
        self.rows: List[Row] = []
        self.list_window = SelectionWindow()
        self.conversation_window = ScrollWindow()
        self.recompute()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def pane_height(self) -> int:
        return max(
            Layout.MIN_PANE_HEIGHT,
            self.rows_available - Layout.HEADER_LINES - Layout.FOOTER_LINES,
        )

    @property
    def visible_count(self) -> int:
        return max(1, self.pane_height - Layout.PANE_BORDER)

    @property
    def list_width(self) -> int:
        return self.config.list_pane_width

    @property
    def list_content_width(self) -> int:
        return max(Layout.MIN_CONTENT_WIDTH, self.list_width - Layout.PANE_BORDER)

    @property
    def max_label_width(self) -> int:
        return max(
            Layout.MIN_LABEL_WIDTH,
            self.list_content_width - len(Layout.SELECTION_PREFIX),
        )

    @property
    def conversation_content_width(self) -> int:
        pane_width = max(
            Layout.MIN_CONVERSATION_PANE_WIDTH, self.columns - self.list_width
        )
        return max(Layout.MIN_CONTENT_WIDTH, pane_width - Layout.PANE_BORDER)

    @property
    def conversation_pane_width(self) -> int:
        return self.conversation_content_width + Layout.PANE_BORDER

    @property
    def conversation_visible_count(self) -> int:
        return max(1, self.visible_count - len(self.conversation_header_lines()))

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def selected_index(self) -> int:
        return self.list_window.selected

    @property
    def selected_session(self) -> Optional[SessionDescriptor]:
        if not self.sessions:
            return None
        return self.sessions[self.list_window.selected]

    def recompute(self) -> None:
        """Re-derive rows and re-clamp both scroll windows."""
        self.list_window.set_bounds(len(self.sessions), self.visible_count)
        self.rows = self.renderer.render(
            self.entries, self.render_mode, self.conversation_content_width
        )
        self.conversation_window.set_bounds(
            len(self.rows), self.conversation_visible_count
        )

    def resize(self, columns: int, rows: int) -> None:
        """React to a terminal size change without resetting scroll offsets."""
        if (columns, rows) == (self.columns, self.rows_available):
            return
        self.columns = columns
        self.rows_available = rows
        self.recompute()

    def set_status(self, status: str, detail: str = "") -> None:
        self.status = status
        self.status_detail = detail

    def report(self, error: TranscriberError) -> None:
        self.set_status(error.status, error.detail)

    # ------------------------------------------------------------------
    # Session list
    # ------------------------------------------------------------------

    def publish_sessions(self, scan: SessionScan) -> BrowserAction:
        """Install a completed scan and select its first session."""
        self.sessions = list(scan.sessions)
        self.sessions_loading = False
        self.sessions_error = ""
        self.list_window.reset()
        self.list_window.select(0)
        self.recompute()
        return BrowserAction.LOAD_CONVERSATION

    def fail_sessions(self, error: Exception) -> None:
        self.sessions = []
        self.sessions_loading = False
        if isinstance(error, TranscriberError):
            self.sessions_error = error.detail or error.status
        else:
            self.sessions_error = str(error)
        self.recompute()

    def select(self, index: int) -> BrowserAction:
        previous = self.selected_session
        self.list_window.select(index)
        self.recompute()
        if self.selected_session is not previous:
            return BrowserAction.LOAD_CONVERSATION
        return BrowserAction.NONE

    # ------------------------------------------------------------------
    # Conversation loading
    # ------------------------------------------------------------------

    def begin_extraction(self) -> Optional[Tuple[int, SessionDescriptor]]:
        """Start loading the selected session.

        Returns the generation tag and session to extract, or None when no
        session is selected. Results of earlier generations become stale.
        """
        self.generation += 1
        self.entries = ()
        self.conversation_error = ""
        self.conversation_window.reset()
        session = self.selected_session
        self.conversation_loading = session is not None
        self.recompute()
        if session is None:
            return None
        return self.generation, session

    def apply_conversation(
        self, generation: int, entries: Sequence[ConversationEntry]
    ) -> bool:
        """Install extraction results unless they are stale."""
        if generation != self.generation:
            logger.debug(f"Discarding stale extraction {generation} (current {self.generation})")
            return False
        self.entries = tuple(entries)
        self.conversation_loading = False
        self.conversation_window.reset()
        self.recompute()
        return True

    def fail_conversation(self, generation: int, error: Exception) -> bool:
        if generation != self.generation:
            return False
        self.conversation_loading = False
        if isinstance(error, TranscriberError):
            self.conversation_error = error.detail or error.status
        else:
            self.conversation_error = str(error)
        self.recompute()
        return True

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def begin_export(self) -> None:
        session = self.selected_session
        if session is None:
            self.set_status("No session selected")
            return
        if self.conversation_loading or self.conversation_error:
            self.set_status("Conversation not loaded", self.conversation_error)
            return
        self.export_path = str(default_export_path(session, self.export_dir))
        self.exporting = True
        self.set_status("")

    def finish_export(self, path: Path) -> None:
        self.exporting = False
        self.set_status("Export complete", str(path))

    def fail_export(self, error: TranscriberError) -> None:
        self.exporting = False
        self.report(error)

    def cancel_export(self) -> None:
        self.exporting = False
        self.set_status("Export cancelled")

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> BrowserAction:
        """Apply one key press and report what the shell must do next."""
        if self.exporting:
            return self._handle_export_key(key)

        if key == Keys.TAB:
            self.focus = (
                Focus.CONVERSATION if self.focus is Focus.SESSIONS else Focus.SESSIONS
            )
            return BrowserAction.NONE
        if key == "1":
            self.focus = Focus.SESSIONS
            return BrowserAction.NONE
        if key == "2":
            self.focus = Focus.CONVERSATION
            return BrowserAction.NONE
        if key in ("q", Keys.CTRL_C):
            return BrowserAction.QUIT

        if self.focus is Focus.SESSIONS:
            action = self._handle_list_key(key)
        else:
            action = self._handle_conversation_key(key)
        if action is not None:
            return action

        if key == "m":
            self.render_mode = self.render_mode.toggled()
            self.conversation_window.reset()
            self.recompute()
        elif key == "e":
            self.begin_export()
        return BrowserAction.NONE

    def _handle_export_key(self, key: str) -> BrowserAction:
        if key == Keys.ESCAPE:
            self.cancel_export()
        elif key == Keys.ENTER:
            return BrowserAction.EXPORT
        elif key in (Keys.BACKSPACE, Keys.DELETE):
            self.export_path = self.export_path[:-1]
        elif key not in Keys.NAMED:
            self.export_path += key
        return BrowserAction.NONE

    def _handle_list_key(self, key: str) -> Optional[BrowserAction]:
        window = self.list_window
        page = self.visible_count
        moves = {
            Keys.UP: -1,
            "k": -1,
            Keys.DOWN: 1,
            "j": 1,
            Keys.PAGE_UP: -page,
            "b": -page,
            Keys.PAGE_DOWN: page,
            "f": page,
            Keys.CTRL_U: -window.half_page,
            Keys.CTRL_D: window.half_page,
        }
        if key in moves:
            return self.select(window.selected + moves[key])
        if key in ("g", Keys.HOME):
            return self.select(0)
        if key in ("G", Keys.END):
            return self.select(len(self.sessions) - 1)
        if key == "c":
            return self._request_resume()
        return None

    def _handle_conversation_key(self, key: str) -> Optional[BrowserAction]:
        window = self.conversation_window
        actions = {
            Keys.UP: window.line_up,
            "k": window.line_up,
            Keys.DOWN: window.line_down,
            "j": window.line_down,
            Keys.PAGE_UP: window.page_up,
            "b": window.page_up,
            Keys.PAGE_DOWN: window.page_down,
            "f": window.page_down,
            Keys.CTRL_U: window.half_page_up,
            Keys.CTRL_D: window.half_page_down,
            "g": window.home,
            Keys.HOME: window.home,
            "G": window.end,
            Keys.END: window.end,
        }
        if key in actions:
            actions[key]()
            return BrowserAction.NONE
        return None

    def _request_resume(self) -> BrowserAction:
        session = self.selected_session
        if session is None:
            self.set_status("No session selected")
            return BrowserAction.NONE
        try:
            self.resume_argv = build_resume_command(session, self.config.resume_command)
        except ResumeError as e:
            self.report(e)
            return BrowserAction.NONE
        return BrowserAction.RESUME

    # ------------------------------------------------------------------
    # View model
    # ------------------------------------------------------------------

    def header_lines(self) -> List[str]:
        """The six lines above the panes."""
        title = build_header_line(
            APP_TITLE, f"Directory: {self.config.sessions_dir}", self.columns
        )
        return [
            title,
            self.status,
            self.status_detail,
            f"Export path: {self.export_path}" if self.exporting else "",
            "Enter to save, Esc to cancel" if self.exporting else "",
            "",
        ]

    def footer_line(self) -> str:
        if self.focus is Focus.SESSIONS:
            return "Quit: q | Move: j/k, g/G, f/b | Codex: c"
        return "Quit: q | Scroll: j/k, g/G, f/b | Markdown: m | Export: e"

    def conversation_header_lines(self) -> List[str]:
        session = self.selected_session
        if session is None:
            return []
        repository = session.repository
        repo_name = parse_repo_name(repository.url) if repository else ""
        branch = repository.branch if repository else ""
        return [
            f"Repository: {repo_name or 'unknown'}",
            f"Branch: {branch or 'unknown'}",
            " ",
        ]

    def session_list_lines(self) -> List[Tuple[str, bool]]:
        """Visible list lines and whether each is the selection."""
        if self.sessions_loading:
            return [("Loading...", False)]
        if self.sessions_error:
            return [("Load error", False), (self.sessions_error, False)]
        if not self.sessions:
            return [("No sessions found", False)]

        lines = []
        for index in self.list_window.visible_range():
            selected = index == self.list_window.selected
            prefix = Layout.SELECTION_PREFIX if selected else Layout.IDLE_PREFIX
            label = truncate_label(self.sessions[index].label, self.max_label_width)
            lines.append((prefix + label, selected))
        return lines

    def conversation_message(self) -> Optional[List[str]]:
        """Placeholder lines shown instead of rows, or None to show rows."""
        if self.conversation_loading:
            return ["Loading..."]
        if self.conversation_error:
            return ["Load error", self.conversation_error]
        if self.selected_session is None:
            return ["Select a session"]
        if not self.rows:
            return ["No conversation found"]
        return None

    def visible_rows(self) -> List[Row]:
        return [self.rows[index] for index in self.conversation_window.visible_range()]
