"""Full-screen browser shell built on rich's Live display."""

import asyncio
from typing import List, Optional, Set

from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from ..config.schema import TranscriberConfig
from ..core.constants import Colors, Focus, Role, RowKind
from ..core.exceptions import ConversationLoadError, ExportError, SessionScanError
from ..core.types import Row, SessionDescriptor
from ..io.conversation_extractor import ConversationExtractor
from ..io.exporter import MarkdownExporter
from ..io.logger import get_logger
from ..io.session_locator import SessionLocator
from .browser import BrowserAction, TranscriptBrowser
from .keyboard_handler import KeyboardHandler
from .text_layout import build_title_border_line, pad_right, truncate_by_width

logger = get_logger("app")

ROLE_STYLES = {
    Role.USER: Colors.CYAN,
    Role.ASSISTANT: Colors.FROST,
}

TICK_SECONDS = 0.03


def row_style(row: Row) -> str:
    """Colour hint of a conversation row."""
    if row.role is None:
        return ""
    if row.kind in (RowKind.BOX_BORDER, RowKind.BOX_TEXT):
        return ROLE_STYLES[row.role]
    if row.kind is RowKind.LABEL:
        return f"bold {ROLE_STYLES[row.role]}"
    return ""


class ScreenPainter:
    """Paint a :class:`TranscriptBrowser` as a list of rich Text lines."""

    def __init__(self, browser: TranscriptBrowser):
        self.browser = browser

    def render(self) -> Group:
        browser = self.browser
        lines: List[Text] = []
        for index, header in enumerate(browser.header_lines()):
            style = "bold" if index == 0 else ""
            lines.append(self._line(header, browser.columns, style))

        left = self._pane(
            "[1] Sessions",
            browser.list_width,
            self._session_lines(),
            browser.focus is Focus.SESSIONS,
        )
        right = self._pane(
            "[2] Conversation",
            browser.conversation_pane_width,
            self._conversation_lines(),
            browser.focus is Focus.CONVERSATION,
        )
        for left_line, right_line in zip(left, right):
            lines.append(Text.assemble(left_line, right_line, no_wrap=True))

        lines.append(self._line(browser.footer_line(), browser.columns, Colors.DIM))
        return Group(*lines)

    @staticmethod
    def _line(text: str, width: int, style: str = "") -> Text:
        return Text(truncate_by_width(text, width), style=style, no_wrap=True, overflow="crop")

    def _pane(self, title: str, width: int, content: List[Text], focused: bool) -> List[Text]:
        height = self.browser.pane_height
        inner_width = width - 2
        inner_height = height - 2
        border = Colors.GREEN if focused else Colors.DIM

        lines = [Text(build_title_border_line(width, f" {title} "), style=f"bold {border}")]
        for index in range(inner_height):
            body = content[index] if index < len(content) else Text("")
            line = Text("│", style=border)
            body.truncate(inner_width, overflow="crop", pad=True)
            line.append_text(body)
            line.append("│", style=border)
            lines.append(line)
        lines.append(Text("└" + "─" * inner_width + "┘", style=border))
        return lines

    def _session_lines(self) -> List[Text]:
        width = self.browser.list_content_width
        return [
            Text(pad_right(truncate_by_width(text, width), width), style=Colors.CYAN if selected else "")
            for text, selected in self.browser.session_list_lines()
        ]

    def _conversation_lines(self) -> List[Text]:
        browser = self.browser
        width = browser.conversation_content_width
        lines = []
        for header in browser.conversation_header_lines():
            is_meta = header.startswith(("Repository:", "Branch:"))
            lines.append(
                Text(
                    pad_right(truncate_by_width(header, width), width),
                    style=f"bold {Colors.YELLOW}" if is_meta else "",
                )
            )

        message = browser.conversation_message()
        if message is not None:
            lines.extend(Text(pad_right(truncate_by_width(m, width), width)) for m in message)
            return lines

        for row in browser.visible_rows():
            lines.append(Text(pad_right(row.text, width), style=row_style(row)))
        return lines


class TranscriberApp:
    """Run the browser: keyboard loop, background reads and repainting."""

    def __init__(
        self,
        config: TranscriberConfig,
        console: Optional[Console] = None,
        keyboard: Optional[KeyboardHandler] = None,
        locator: Optional[SessionLocator] = None,
        extractor: Optional[ConversationExtractor] = None,
        exporter: Optional[MarkdownExporter] = None,
    ):
        self.config = config
        self.console = console or Console()
        self.keyboard = keyboard or KeyboardHandler()
        self.locator = locator or SessionLocator(config.sessions_dir, config.log_extension)
        self.extractor = extractor or ConversationExtractor()
        self.exporter = exporter or MarkdownExporter()

        width, height = self.console.size
        self.browser = TranscriptBrowser(config, columns=width, rows=height)
        self.painter = ScreenPainter(self.browser)
        self.running = False
        self.dirty = True
        self._tasks: Set[asyncio.Task] = set()

    async def run(self) -> Optional[List[str]]:
        """Run until the user quits.

        Returns:
            The resume command to run after the screen is restored, if the
            user asked to continue a session in the companion tool
        """
        self.running = True
        self._spawn(self.load_sessions())
        try:
            with self.keyboard, Live(
                self.painter.render(),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                while self.running:
                    self._sync_size()
                    for key in self.keyboard.read_keys():
                        await self.dispatch(self.browser.handle_key(key))
                        self.dirty = True
                    if self.dirty:
                        live.update(self.painter.render(), refresh=True)
                        self.dirty = False
                    await asyncio.sleep(TICK_SECONDS)
        finally:
            await self._cancel_tasks()
        return self.browser.resume_argv if self.browser.resume_argv else None

    async def dispatch(self, action: BrowserAction) -> None:
        if action is BrowserAction.QUIT:
            self.running = False
        elif action is BrowserAction.RESUME:
            self.running = False
        elif action is BrowserAction.LOAD_CONVERSATION:
            self.start_extraction()
        elif action is BrowserAction.EXPORT:
            await self.export()

    def start_extraction(self) -> None:
        request = self.browser.begin_extraction()
        if request is not None:
            generation, session = request
            self._spawn(self.load_conversation(generation, session))

    async def load_sessions(self) -> None:
        try:
            scan = await self.locator.scan()
        except SessionScanError as e:
            logger.warning(f"Session scan failed: {e}")
            self.browser.fail_sessions(e)
        except Exception as e:
            logger.exception("Unexpected error while scanning sessions")
            self.browser.fail_sessions(e)
        else:
            await self.dispatch(self.browser.publish_sessions(scan))
        self.dirty = True

    async def load_conversation(self, generation: int, session: SessionDescriptor) -> None:
        try:
            entries = await self.extractor.extract(session.path)
        except ConversationLoadError as e:
            logger.warning(f"Could not load {session.path}: {e}")
            self.browser.fail_conversation(generation, e)
        except Exception as e:
            logger.exception(f"Unexpected error while loading {session.path}")
            self.browser.fail_conversation(generation, e)
        else:
            self.browser.apply_conversation(generation, entries)
        self.dirty = True

    async def export(self) -> None:
        try:
            path = await self.exporter.export(self.browser.entries, self.browser.export_path)
        except ExportError as e:
            self.browser.fail_export(e)
        else:
            self.browser.finish_export(path)
        self.dirty = True

    def _sync_size(self) -> None:
        width, height = self.console.size
        if (width, height) != (self.browser.columns, self.browser.rows_available):
            self.browser.resize(width, height)
            self.dirty = True

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _cancel_tasks(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
