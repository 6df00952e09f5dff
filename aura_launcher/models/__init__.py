"""Data models for aura-launcher."""

from .app import DesktopApp
from .config import AppearanceSection, LauncherConfig, LauncherSection
from .frecency import FrecencyEntry, HistoryDocument

__all__ = [
    "AppearanceSection",
    "DesktopApp",
    "FrecencyEntry",
    "HistoryDocument",
    "LauncherConfig",
    "LauncherSection",
]
