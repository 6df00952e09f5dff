"""Pytest configuration and shared fixtures for aura_launcher tests."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from aura_launcher.core.history import FrecencyStore
from aura_launcher.models.app import DesktopApp

# Fixed reference time: 2025-01-01T00:00:00Z
EPOCH = 1735689600


class FakeClock:
    """Manually advanced clock returning Unix seconds."""

    def __init__(self, now: float = EPOCH):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingBackend:
    """Icon lookup stub that records every call."""

    def __init__(self, icons: Optional[Dict[str, str]] = None):
        self.icons = icons or {}
        self.calls: List[Tuple[str, int, Optional[str]]] = []

    def __call__(self, name: str, size: int, theme: Optional[str]) -> Optional[str]:
        self.calls.append((name, size, theme))
        return self.icons.get(name)

    def call_count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


def _make_app(app_id: str, name: str, keywords=(), icon: Optional[str] = None) -> DesktopApp:
    """Build a DesktopApp the way the catalog scan would."""
    return DesktopApp(
        id=app_id,
        name=name,
        exec=f"{app_id} %u",
        icon=icon,
        keywords=tuple(keywords),
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at EPOCH."""
    return FakeClock()


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    """History file location inside a not-yet-created data directory."""
    return tmp_path / "data" / "aura-launcher" / "history.json"


@pytest.fixture
def store(history_path: Path, clock: FakeClock) -> FrecencyStore:
    """Empty frecency store driven by the fake clock."""
    return FrecencyStore(history_path, clock=clock)


@pytest.fixture
def backend() -> CountingBackend:
    """Icon backend that knows firefox and chromium."""
    return CountingBackend({
        "firefox": "/usr/share/icons/hicolor/48x48/apps/firefox.png",
        "chromium": "/usr/share/icons/hicolor/48x48/apps/chromium.png",
    })


@pytest.fixture
def sample_apps() -> List[DesktopApp]:
    """Small catalog covering browsers, an editor and a terminal."""
    return [
        _make_app("firefox", "Firefox", keywords=("web", "browser"), icon="firefox"),
        _make_app("chromium", "Chromium", keywords=("web", "browser"), icon="chromium"),
        _make_app("code", "Visual Studio Code", keywords=("editor", "ide"), icon="vscode"),
        _make_app("ghostty", "Ghostty", keywords=("terminal", "shell"), icon="com.mitchellh.ghostty"),
    ]


@pytest.fixture
def make_app():
    """Factory for DesktopApp records."""
    return _make_app


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging()."""
    logger = logging.getLogger("aura_launcher")
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
