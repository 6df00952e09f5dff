"""Launcher session: catalog, history, matcher and icon cache for one run.

The presentation layer creates one Launcher at startup, calls filter()
on every keystroke and launch() when the user picks a result.
"""

import logging
import subprocess
from typing import Callable, List, Optional, Sequence

from ..models.app import DesktopApp
from ..models.config import LauncherConfig
from .config import load_config
from .desktop import scan_applications
from .history import FrecencyStore
from .icons import IconCache
from .matcher import FuzzyMatcher, MatchResult

logger = logging.getLogger(__name__)

Spawner = Callable[[str], None]


def spawn_command(command: str) -> None:
    """Start a shell command detached from the launcher.

    Raises:
        OSError: If the shell cannot be started
    """
    subprocess.Popen(
        ["sh", "-c", command],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class Launcher:
    """Owns the state of one launcher run.

    Attributes:
        config: Launcher configuration
        apps: Catalog snapshot
        history: Frecency store, persisted after every launch
        matcher: Fuzzy matcher used by filter()
        icon_cache: Icon cache used by icon_path()
    """

    def __init__(
        self,
        config: LauncherConfig,
        apps: Sequence[DesktopApp],
        history: FrecencyStore,
        matcher: Optional[FuzzyMatcher] = None,
        icon_cache: Optional[IconCache] = None,
        spawn: Optional[Spawner] = None,
    ):
        self.config = config
        self.apps = list(apps)
        self.history = history
        if matcher is None:
            matcher = FuzzyMatcher(min_score=config.launcher.min_score)
        if icon_cache is None:
            icon_cache = IconCache(
                capacity=config.appearance.icon_cache_capacity,
                size=config.appearance.icon_size,
                theme=config.appearance.icon_theme,
            )
        self.matcher = matcher
        self.icon_cache = icon_cache
        self._spawn = spawn or spawn_command

    @classmethod
    def create(cls, config: Optional[LauncherConfig] = None, history: Optional[FrecencyStore] = None) -> "Launcher":
        """Build a launcher from the user's environment.

        Args:
            config: Configuration (default: loaded from XDG config location)
            history: Frecency store (default: loaded from XDG data location)
        """
        if config is None:
            config = load_config()
        if history is None:
            history = FrecencyStore.load()
        return cls(config, scan_applications(), history)

    def filter(self, query: str, limit: Optional[int] = None) -> List[MatchResult]:
        """Rank the catalog against a query.

        Args:
            query: User query (empty = most used apps)
            limit: Maximum results (default: config max_results)
        """
        max_results = self.config.launcher.max_results if limit is None else limit
        return self.matcher.match_apps(query, self.apps, self.history, max_results)

    def find(self, app_id: str) -> Optional[DesktopApp]:
        """Find an app in the catalog by id."""
        for app in self.apps:
            if app.id == app_id:
                return app
        return None

    def icon_path(self, app: DesktopApp) -> Optional[str]:
        """Resolve the icon of an app to a file path."""
        return self.icon_cache.resolve(app.icon)

    def launch(self, app: DesktopApp) -> bool:
        """Record and start an application.

        The launch is recorded and persisted before the process is
        spawned. A failed save is logged and does not stop the launch.

        Args:
            app: Application to launch

        Returns:
            True if the process was started, False otherwise
        """
        cmd = app.launch_command()
        logger.info(f"Launching: {cmd}")

        self.history.record_launch(app.id)
        try:
            self.history.persist()
        except OSError as e:
            logger.warning(f"Failed to save history: {e}")

        try:
            self._spawn(cmd)
        except OSError as e:
            logger.error(f"Failed to launch {cmd}: {e}")
            return False

        return True
