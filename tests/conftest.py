"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from confswap.config import ToolDescriptor
from confswap.store import ProfileStore
from confswap.tools import TOOLS


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the developer's real environment out of every test."""
    monkeypatch.delenv("CONFSWAP_HOME", raising=False)
    monkeypatch.delenv("CONFSWAP_LOG_LEVEL", raising=False)
    yield
    # CliRunner streams are closed after each invoke
    log = logging.getLogger("confswap")
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.setLevel(logging.NOTSET)
    log.propagate = True


@pytest.fixture
def home(tmp_path, monkeypatch):
    """A fake home directory, also exported as $HOME."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def codex_tool():
    return TOOLS["codex"]


@pytest.fixture
def claude_tool():
    return TOOLS["claude"]


@pytest.fixture
def codex_store(home, codex_tool):
    return ProfileStore(codex_tool, home=home)


@pytest.fixture
def claude_store(home, claude_tool):
    return ProfileStore(claude_tool, home=home)


@pytest.fixture
def codex_files(home):
    """Write a live Codex config and return (config.toml, auth.json)."""
    config = home / ".codex" / "config.toml"
    auth = home / ".codex" / "auth.json"
    config.parent.mkdir(parents=True)
    config.write_text('key = "value1"\n')
    auth.write_text('{"token":"abc"}')
    return config, auth


@pytest.fixture
def claude_settings(home):
    settings = home / ".claude" / "settings.json"
    settings.parent.mkdir(parents=True)
    settings.write_text('{"x":1}')
    return settings


def make_tool(name: str, *rel_paths: str) -> ToolDescriptor:
    return ToolDescriptor(name=name, display_name=name.title(), config_rel_paths=tuple(rel_paths))


def snapshot(*paths: Path) -> dict:
    """Map each path to its bytes, or None if it doesn't exist."""
    return {p: (p.read_bytes() if p.exists() else None) for p in paths}
