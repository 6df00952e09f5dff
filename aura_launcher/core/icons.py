"""Icon resolution with a bounded LRU cache.

Icon names from desktop entries are resolved through the XDG icon theme
lookup, which walks theme directories on disk and is slow. IconCache
keeps the most recently used results, including misses, so each
unresolvable icon costs one theme lookup instead of one per redraw.
"""

import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from xdg.IconTheme import getIconPath

logger = logging.getLogger(__name__)

# (name, size, theme) -> path of the icon file, or None if not found
IconLookup = Callable[[str, int, Optional[str]], Optional[str]]

DEFAULT_CAPACITY = 200
DEFAULT_ICON_SIZE = 48

# Icon search directories for manual fallback
ICON_SEARCH_DIRS = [
    Path.home() / ".local/share/icons",
    Path.home() / ".icons",
    Path("/usr/share/icons"),
    Path("/usr/share/pixmaps"),
]

ICON_EXTENSIONS = (".svg", ".png", ".xpm")


def xdg_icon_lookup(name: str, size: int, theme: Optional[str] = None) -> Optional[str]:
    """Resolve an icon name through the XDG icon theme specification.

    Falls back to a flat search of the standard icon directories for
    icons installed outside any theme.

    Args:
        name: Icon name (e.g., "firefox", "com.mitchellh.ghostty")
        size: Preferred icon size in pixels
        theme: Icon theme name (None = user's configured theme)

    Returns:
        Full path to icon file or None if not found
    """
    themed = getIconPath(name, size, theme)
    if themed and Path(themed).exists():
        return str(Path(themed))

    for directory in ICON_SEARCH_DIRS:
        if not directory.exists():
            continue
        for ext in ICON_EXTENSIONS:
            probe = directory / f"{name}{ext}"
            if probe.exists():
                return str(probe)

    return None


CacheKey = Tuple[str, int, Optional[str]]


class IconCache:
    """Thread-safe LRU cache in front of an icon lookup backend.

    Both hits and misses are cached. A cached None means the backend
    already reported the icon as missing and is not asked again until the
    entry is evicted or the cache is cleared.

    The backend is called without holding the lock, so two threads
    missing on the same icon may both query it; the last result wins and
    no thread ever observes a partially written entry.

    Examples:
        >>> cache = IconCache(capacity=2, backend=lambda name, size, theme: None)
        >>> cache.get("missing-icon") is None
        True
        >>> cache.stats()["misses"]
        1
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        size: int = DEFAULT_ICON_SIZE,
        theme: Optional[str] = None,
        backend: Optional[IconLookup] = None,
    ):
        """Initialize icon cache.

        Args:
            capacity: Maximum number of cached lookups
            size: Default icon size in pixels
            theme: Default icon theme name (None = system default)
            backend: Lookup function (default: XDG icon theme lookup)

        Raises:
            ValueError: If capacity is less than 1
        """
        if capacity < 1:
            raise ValueError(f"Icon cache capacity must be at least 1, got {capacity}")

        self.capacity = capacity
        self.size = size
        self.theme = theme
        self._backend = backend or xdg_icon_lookup
        self._entries: "OrderedDict[CacheKey, Optional[str]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, icon_name: str) -> Optional[str]:
        """Look up an icon using the cache's default size and theme."""
        return self.resolve(icon_name)

    def resolve(
        self,
        icon_name: Optional[str],
        size: Optional[int] = None,
        theme: Optional[str] = None,
    ) -> Optional[str]:
        """Resolve icon name to full file path.

        Args:
            icon_name: Icon name or absolute path (e.g., "firefox" or "/path/to/icon.svg")
            size: Icon size in pixels (default: cache size)
            theme: Icon theme name (default: cache theme)

        Returns:
            Full path to icon file or None if not found
        """
        if not icon_name:
            return None

        # Existing absolute paths need no theme lookup
        candidate = Path(icon_name)
        if candidate.is_absolute() and candidate.exists():
            return str(candidate)

        key: CacheKey = (
            icon_name,
            self.size if size is None else size,
            self.theme if theme is None else theme,
        )

        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
            self._misses += 1

        resolved = self._backend(*key)
        logger.debug(f"Icon lookup {icon_name!r} (size={key[1]}, theme={key[2]}): {resolved}")

        with self._lock:
            self._entries[key] = resolved
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicted icon {evicted[0]!r} from cache")

        return resolved

    def clear(self) -> None:
        """Remove every cached lookup."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with size, capacity, hits, misses and evictions
        """
        with self._lock:
            return {
                "size": len(self._entries),
                "capacity": self.capacity,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __contains__(self, icon_name: str) -> bool:
        key = (icon_name, self.size, self.theme)
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
