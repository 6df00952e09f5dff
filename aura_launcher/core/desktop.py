"""Application catalog scanning from .desktop files.

Walks the applications/ directory of every XDG data directory, user
directory first, and builds one DesktopApp per visible application.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from xdg import BaseDirectory
from xdg.DesktopEntry import DesktopEntry
from xdg.Exceptions import ParsingError

from ..models.app import DesktopApp
from .matcher import fold_case

logger = logging.getLogger(__name__)


def applications_dirs() -> List[Path]:
    """Get XDG data directories for .desktop files.

    Returns:
        $XDG_DATA_HOME/applications followed by each $XDG_DATA_DIRS entry
    """
    return [Path(data_dir) / "applications" for data_dir in BaseDirectory.xdg_data_dirs]


def parse_desktop_file(entry_path: Path) -> Optional[DesktopApp]:
    """Parse a .desktop file into a DesktopApp.

    Args:
        entry_path: Path to .desktop file

    Returns:
        DesktopApp, or None if the entry is hidden, not an application,
        lacks a name or command, or cannot be parsed
    """
    try:
        entry = DesktopEntry(str(entry_path))
    except (ParsingError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unparseable desktop file {entry_path}: {e}")
        return None

    if entry.getNoDisplay() or entry.getHidden():
        return None

    if entry.getType() != "Application":
        return None

    name = entry.getName()
    exec_cmd = entry.getExec()
    if not name or not exec_cmd:
        return None

    keywords = tuple(kw for kw in entry.getKeywords() if kw)

    return DesktopApp(
        id=entry_path.stem,
        name=name,
        exec=exec_cmd,
        icon=entry.getIcon() or None,
        keywords=keywords,
        description=entry.getComment() or None,
        path=entry_path,
    )


def scan_applications(dirs: Optional[Iterable[Path]] = None) -> List[DesktopApp]:
    """Scan all .desktop files from XDG data directories.

    The first file found for an id wins, so user entries shadow system
    ones.

    Args:
        dirs: Directories to scan (default: applications_dirs())

    Returns:
        Visible applications sorted alphabetically by name
    """
    apps: List[DesktopApp] = []
    seen_ids: Set[str] = set()

    for directory in applications_dirs() if dirs is None else dirs:
        if not directory.is_dir():
            continue

        for entry_path in sorted(directory.glob("*.desktop")):
            app_id = entry_path.stem
            if app_id in seen_ids:
                continue

            app = parse_desktop_file(entry_path)
            if app is None:
                continue

            seen_ids.add(app_id)
            apps.append(app)

    apps.sort(key=lambda a: fold_case(a.name))
    logger.debug(f"Found {len(apps)} applications")
    return apps
