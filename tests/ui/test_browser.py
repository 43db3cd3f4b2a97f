"""Tests for the browser coordinator: keys, loading states and export flow."""

from pathlib import Path

import pytest

from tests.builders import make_entry, make_session
from transcriber.core.constants import Focus, RenderMode, Role
from transcriber.core.exceptions import ConversationLoadError, ExportError, SessionScanError
from transcriber.core.types import RepositoryHint, SessionDescriptor
from transcriber.io import resume
from transcriber.io.session_locator import SessionScan
from transcriber.ui.browser import BrowserAction, TranscriptBrowser
from transcriber.ui.keyboard_handler import Keys


def long_entries(lines: int = 100):
    return [make_entry("assistant", "\n".join(f"line {i}" for i in range(lines)))]


def scan_of(*sessions) -> SessionScan:
    return SessionScan(root=Path("/sessions"), sessions=list(sessions))


@pytest.fixture
def browser(settings, tmp_path):
    return TranscriptBrowser(settings, columns=120, rows=24, export_dir=tmp_path)


@pytest.fixture
def loaded(browser):
    """Browser with three sessions and the first conversation loaded."""
    browser.publish_sessions(
        scan_of(
            make_session("a.jsonl", label="first", session_id="id-a"),
            make_session("b.jsonl", label="second"),
            make_session("c.jsonl", label="third"),
        )
    )
    generation, _ = browser.begin_extraction()
    browser.apply_conversation(generation, long_entries())
    return browser


class TestGeometry:
    """Test pane sizes derived from the terminal size."""

    def test_default_terminal(self, browser):
        assert browser.pane_height == 17
        assert browser.visible_count == 15
        assert browser.list_content_width == 23
        assert browser.max_label_width == 21
        assert browser.conversation_content_width == 93
        assert browser.conversation_pane_width == 95

    def test_tiny_terminal(self, browser):
        browser.resize(10, 3)

        assert browser.pane_height == 4
        assert browser.visible_count == 2
        assert browser.conversation_content_width == 18

    def test_conversation_header_takes_rows(self, loaded):
        assert loaded.conversation_visible_count == 12


class TestSessionList:
    """Test publishing scans and moving the selection."""

    def test_loading_state(self, browser):
        assert browser.session_list_lines() == [("Loading...", False)]

    def test_publish_selects_first(self, browser):
        action = browser.publish_sessions(scan_of(make_session(label="only")))

        assert action is BrowserAction.LOAD_CONVERSATION
        assert browser.selected_session.label == "only"
        assert browser.session_list_lines() == [("> only", True)]

    def test_empty_scan(self, browser):
        browser.publish_sessions(scan_of())

        assert browser.session_list_lines() == [("No sessions found", False)]
        assert browser.begin_extraction() is None
        assert browser.conversation_message() == ["Select a session"]

    def test_scan_failure(self, browser):
        browser.fail_sessions(SessionScanError("/x", "Permission denied"))

        assert browser.session_list_lines() == [
            ("Load error", False),
            ("Permission denied", False),
        ]

    def test_labels_are_truncated(self, browser):
        browser.publish_sessions(scan_of(make_session(label="x" * 40)))

        text, _ = browser.session_list_lines()[0]
        assert text == "> " + "x" * 18 + "..."

    def test_moving_selection_requests_load(self, loaded):
        assert loaded.handle_key("j") is BrowserAction.LOAD_CONVERSATION
        assert loaded.selected_index == 1
        assert loaded.handle_key(Keys.UP) is BrowserAction.LOAD_CONVERSATION
        assert loaded.selected_index == 0

    def test_moving_past_the_edge_is_a_no_op(self, loaded):
        assert loaded.handle_key("k") is BrowserAction.NONE
        loaded.handle_key("G")
        assert loaded.selected_index == 2
        assert loaded.handle_key(Keys.DOWN) is BrowserAction.NONE

    def test_page_keys_clamp(self, loaded):
        loaded.handle_key("f")
        assert loaded.selected_index == 2
        loaded.handle_key(Keys.CTRL_U)
        assert loaded.selected_index == 0

    def test_visible_lines_follow_selection(self, browser):
        sessions = [make_session(f"{i}.jsonl", label=f"s{i}") for i in range(40)]
        browser.publish_sessions(scan_of(*sessions))

        browser.handle_key(Keys.END)

        lines = browser.session_list_lines()
        assert len(lines) == browser.visible_count
        assert lines[-1] == ("> s39", True)


class TestConversationLoading:
    """Test extraction bookkeeping."""

    def test_loading_message(self, browser):
        browser.publish_sessions(scan_of(make_session()))
        browser.begin_extraction()

        assert browser.conversation_message() == ["Loading..."]

    def test_stale_results_are_discarded(self, loaded):
        loaded.handle_key("j")
        stale, _ = loaded.begin_extraction()
        loaded.handle_key("j")
        current, session = loaded.begin_extraction()

        assert loaded.apply_conversation(stale, [make_entry("user", "stale")]) is False
        assert loaded.entries == ()
        assert loaded.conversation_loading

        assert loaded.apply_conversation(current, [make_entry("user", "fresh")]) is True
        assert session.label == "third"
        assert loaded.entries[0].text == "fresh"

    def test_stale_failures_are_discarded(self, loaded):
        stale, _ = loaded.begin_extraction()
        loaded.begin_extraction()

        assert loaded.fail_conversation(stale, ConversationLoadError("/a", "gone")) is False
        assert loaded.conversation_error == ""

    def test_failure_is_local_to_the_pane(self, loaded):
        generation, _ = loaded.begin_extraction()

        loaded.fail_conversation(generation, ConversationLoadError("/a", "gone"))

        assert loaded.conversation_message() == ["Load error", "gone"]
        assert len(loaded.sessions) == 3

    def test_empty_conversation(self, loaded):
        generation, _ = loaded.begin_extraction()
        loaded.apply_conversation(generation, [])

        assert loaded.conversation_message() == ["No conversation found"]

    def test_repository_header(self, browser):
        session = SessionDescriptor(
            path=Path("/s/a.jsonl"),
            label="a",
            repository=RepositoryHint("https://github.com/acme/widgets.git", "main"),
        )
        browser.publish_sessions(scan_of(session))

        assert browser.conversation_header_lines() == [
            "Repository: widgets",
            "Branch: main",
            " ",
        ]

    def test_unknown_repository(self, loaded):
        assert loaded.conversation_header_lines()[:2] == [
            "Repository: unknown",
            "Branch: unknown",
        ]


class TestConversationScrolling:
    """Test conversation pane navigation and offset resets."""

    def test_focus_keys(self, loaded):
        loaded.handle_key(Keys.TAB)
        assert loaded.focus is Focus.CONVERSATION
        loaded.handle_key(Keys.TAB)
        assert loaded.focus is Focus.SESSIONS
        loaded.handle_key("2")
        assert loaded.focus is Focus.CONVERSATION
        loaded.handle_key("1")
        assert loaded.focus is Focus.SESSIONS

    def test_scroll_keys(self, loaded):
        loaded.handle_key("2")
        window = loaded.conversation_window

        loaded.handle_key("j")
        assert window.offset == 1
        loaded.handle_key(Keys.CTRL_D)
        assert window.offset == 7
        loaded.handle_key("G")
        assert window.offset == window.max_offset == len(loaded.rows) - 12
        loaded.handle_key("g")
        assert window.offset == 0

    def test_selection_does_not_move_while_scrolling(self, loaded):
        loaded.handle_key("2")
        assert loaded.handle_key("j") is BrowserAction.NONE
        assert loaded.selected_index == 0

    def test_visible_rows(self, loaded):
        loaded.handle_key("2")
        loaded.handle_key("f")

        rows = loaded.visible_rows()
        assert len(rows) == 12
        assert rows[0] is loaded.rows[12]

    def test_mode_toggle_resets_offset(self, loaded):
        loaded.handle_key("2")
        loaded.handle_key("G")

        loaded.handle_key("m")

        assert loaded.render_mode is RenderMode.MARKDOWN
        assert loaded.conversation_window.offset == 0
        assert loaded.rows[0].text == "### Assistant"
        assert loaded.rows[0].role is Role.ASSISTANT

    def test_resize_reclamps_without_reset(self, loaded):
        loaded.handle_key("2")
        loaded.conversation_window.scroll_to(40)

        loaded.resize(120, 30)
        assert loaded.conversation_window.offset == 40

        loaded.conversation_window.end()
        loaded.resize(120, 60)
        assert loaded.conversation_window.offset == loaded.conversation_window.max_offset

    def test_session_switch_resets_offset(self, loaded):
        loaded.handle_key("2")
        loaded.handle_key("G")
        loaded.handle_key("1")

        loaded.handle_key("j")
        loaded.begin_extraction()

        assert loaded.conversation_window.offset == 0

    def test_quit_keys(self, loaded):
        assert loaded.handle_key("q") is BrowserAction.QUIT
        assert loaded.handle_key(Keys.CTRL_C) is BrowserAction.QUIT


class TestExportFlow:
    """Test the export prompt."""

    def test_begin_export_uses_default_path(self, loaded, tmp_path):
        loaded.handle_key("e")

        assert loaded.exporting
        assert loaded.export_path == str(tmp_path / "id-a.md")
        assert loaded.header_lines()[3] == f"Export path: {tmp_path / 'id-a.md'}"
        assert loaded.header_lines()[4] == "Enter to save, Esc to cancel"

    def test_editing_the_path(self, loaded):
        loaded.handle_key("e")
        loaded.export_path = "/tmp/ou"

        for key in ["t", "x", Keys.BACKSPACE, ".", "m", "d", "q", Keys.UP]:
            loaded.handle_key(key)

        assert loaded.export_path == "/tmp/out.mdq"

    def test_enter_requests_export(self, loaded, tmp_path):
        loaded.handle_key("e")

        assert loaded.handle_key(Keys.ENTER) is BrowserAction.EXPORT

        loaded.finish_export(tmp_path / "id-a.md")
        assert not loaded.exporting
        assert loaded.status == "Export complete"
        assert loaded.status_detail == str(tmp_path / "id-a.md")

    def test_failed_export_can_be_retried(self, loaded):
        loaded.handle_key("e")
        loaded.fail_export(ExportError("/x/out.md", "No such file or directory"))

        assert loaded.status == "Export failed"
        assert loaded.status_detail == "No such file or directory"
        loaded.handle_key("e")
        assert loaded.exporting

    def test_escape_cancels(self, loaded):
        loaded.handle_key("e")
        loaded.handle_key(Keys.ESCAPE)

        assert not loaded.exporting
        assert loaded.status == "Export cancelled"

    def test_refused_while_conversation_loads(self, browser):
        browser.publish_sessions(scan_of(make_session("a.jsonl", session_id="id-a")))
        browser.begin_extraction()

        browser.handle_key("e")

        assert not browser.exporting
        assert browser.status == "Conversation not loaded"

    def test_refused_after_load_error(self, browser):
        browser.publish_sessions(scan_of(make_session("a.jsonl", session_id="id-a")))
        generation, _ = browser.begin_extraction()
        browser.fail_conversation(generation, ConversationLoadError("/a.jsonl", "Permission denied"))

        browser.handle_key("e")

        assert not browser.exporting
        assert browser.status == "Conversation not loaded"
        assert browser.status_detail == "Permission denied"

    def test_no_session(self, browser):
        browser.publish_sessions(scan_of())
        browser.handle_key("2")
        browser.handle_key("e")

        assert not browser.exporting
        assert browser.status == "No session selected"


class TestResume:
    """Test the companion tool handoff request."""

    def test_resume_with_id(self, loaded, monkeypatch):
        monkeypatch.setattr(resume.shutil, "which", lambda name: "/bin/codex")

        assert loaded.handle_key("c") is BrowserAction.RESUME
        assert loaded.resume_argv == ["codex", "resume", "id-a"]

    def test_resume_without_id(self, loaded):
        loaded.handle_key("j")

        assert loaded.handle_key("c") is BrowserAction.NONE
        assert loaded.status == "Session id not found"
        assert loaded.resume_argv is None


class TestChrome:
    """Test the header and footer text."""

    def test_header(self, browser, settings):
        lines = browser.header_lines()

        assert len(lines) == 6
        assert lines[0].startswith("Codex Transcriber")
        assert lines[0].endswith(f"Directory: {settings.sessions_dir}")
        assert len(lines[0]) == 120

    def test_footer_depends_on_focus(self, loaded):
        assert "Codex: c" in loaded.footer_line()
        loaded.handle_key(Keys.TAB)
        assert "Markdown: m" in loaded.footer_line()
