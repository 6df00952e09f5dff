"""Core ranking, history and icon lookup for aura-launcher."""

from .desktop import scan_applications
from .history import FrecencyStore
from .icons import IconCache
from .launcher import Launcher
from .matcher import FuzzyMatcher, MatchResult

__all__ = [
    "FrecencyStore",
    "FuzzyMatcher",
    "IconCache",
    "Launcher",
    "MatchResult",
    "scan_applications",
]
