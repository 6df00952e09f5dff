"""Launch history with frecency scoring.

The FrecencyStore tracks how often and how recently each application
was launched. Scores decay with a 7-day half-life, so apps launched
frequently a month ago fade while recent launches stay near the top.

Lifecycle: load() once at startup, record_launch() on every launch,
persist() after each launch. The store is owned by the caller and is
not safe for concurrent mutation.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..models.frecency import FrecencyEntry, HistoryDocument
from .config import default_history_path

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class FrecencyStore:
    """Per-application launch counters backed by a JSON file.

    Attributes:
        path: File the store was loaded from and will be saved to

    Examples:
        >>> store = FrecencyStore(Path("/tmp/history.json"))
        >>> store.record_launch("firefox")
        >>> store.get("firefox").frequency
        1
    """

    def __init__(
        self,
        path: Path,
        entries: Optional[Dict[str, FrecencyEntry]] = None,
        clock: Clock = time.time,
    ):
        """Initialize frecency store.

        Args:
            path: History file location
            entries: Initial entries keyed by app id (default: empty)
            clock: Returns current Unix time in seconds
        """
        self.path = path
        self._entries: Dict[str, FrecencyEntry] = dict(entries or {})
        self._clock = clock

    @classmethod
    def load(cls, path: Optional[Path] = None, clock: Clock = time.time) -> "FrecencyStore":
        """Load history from disk.

        A missing, unreadable or malformed file yields an empty store.
        Load failures are never raised to the caller.

        Args:
            path: History file (default: $XDG_DATA_HOME/aura-launcher/history.json)
            clock: Returns current Unix time in seconds

        Returns:
            FrecencyStore bound to path
        """
        path = path or default_history_path()

        if not path.exists():
            logger.debug(f"No history at {path}, starting empty")
            return cls(path, clock=clock)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            document = HistoryDocument.model_validate(data)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as e:
            logger.warning(f"Ignoring corrupt history {path}: {e}")
            return cls(path, clock=clock)
        except OSError as e:
            logger.warning(f"Failed to read history {path}: {e}")
            return cls(path, clock=clock)

        logger.debug(f"Loaded {len(document.apps)} history entries from {path}")
        return cls(path, document.apps, clock=clock)

    def _now(self) -> int:
        return int(self._clock())

    def record_launch(self, app_id: str) -> None:
        """Record an app launch.

        Creates the entry on first launch, then increments the launch
        count and stamps the access time.

        Args:
            app_id: Application id (desktop file stem)
        """
        now = self._now()
        entry = self._entries.get(app_id)
        if entry is None:
            entry = FrecencyEntry(frequency=0, last_accessed=now)
            self._entries[app_id] = entry

        entry.frequency += 1
        entry.last_accessed = now

    def score(self, app_id: str, now: Optional[float] = None) -> float:
        """Get frecency score for an app (0.0 if never launched).

        Args:
            app_id: Application id
            now: Unix time to score at (default: store clock)
        """
        entry = self._entries.get(app_id)
        if entry is None:
            return 0.0
        return entry.score(self._clock() if now is None else now)

    def get(self, app_id: str) -> Optional[FrecencyEntry]:
        """Get the raw entry for an app, or None if never launched."""
        return self._entries.get(app_id)

    def entries(self) -> Dict[str, FrecencyEntry]:
        """Get a copy of all entries keyed by app id."""
        return {app_id: entry.model_copy() for app_id, entry in self._entries.items()}

    def ranked(self, now: Optional[float] = None) -> List[Tuple[str, FrecencyEntry, float]]:
        """List entries with current scores, highest score first.

        Args:
            now: Unix time to score at (default: store clock)

        Returns:
            List of (app_id, entry, score) tuples, ties ordered by id
        """
        now = self._clock() if now is None else now
        scored = [
            (app_id, entry, entry.score(now))
            for app_id, entry in self._entries.items()
        ]
        scored.sort(key=lambda item: (-item[2], item[0]))
        return scored

    def persist(self) -> None:
        """Save history to disk.

        Creates parent directory if it doesn't exist. Performs atomic
        write using temp file + rename so a failed save never truncates
        the previous history.

        Raises:
            OSError: If the history file cannot be written
        """
        document = HistoryDocument(apps=self._entries)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".history-", suffix=".json"
            )

            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document.model_dump(mode="json"), f, indent=2, sort_keys=True)
                    f.write("\n")
                    f.flush()
                    os.fsync(f.fileno())

                os.rename(temp_path, self.path)

            except Exception:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
                raise

        except OSError as e:
            logger.error(f"Failed to save history to {self.path}: {e}")
            raise

        logger.debug(f"Saved {len(self._entries)} history entries to {self.path}")

    def __contains__(self, app_id: str) -> bool:
        return app_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
