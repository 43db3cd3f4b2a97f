"""Minimal test fixtures - just what we actually need."""

import pytest

from transcriber.config.schema import TranscriberConfig


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the real config and sessions directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("CODEX_SESSIONS_DIR", raising=False)
    yield tmp_path


@pytest.fixture
def sessions_dir(tmp_path):
    root = tmp_path / "sessions"
    root.mkdir()
    return root


@pytest.fixture
def settings(sessions_dir):
    """Settings pointing at an empty temporary sessions root."""
    return TranscriberConfig(sessions_dir=sessions_dir)
