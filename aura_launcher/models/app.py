"""Application records produced by the catalog scan."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

# Desktop entry field codes that are expanded by the launcher, not the shell
FIELD_CODE_PATTERN = re.compile(r"%[fFuUdDnNickvm]")


@dataclass(frozen=True)
class DesktopApp:
    """Represents a launchable application from a .desktop file.

    Immutable for the lifetime of one catalog snapshot. The id is the
    desktop file stem and is stable across runs.
    """

    id: str
    name: str
    exec: str
    icon: Optional[str] = None
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    path: Optional[Path] = None

    def launch_command(self) -> str:
        """Get the exec command with field codes removed.

        Examples:
            >>> DesktopApp(id="firefox", name="Firefox", exec="firefox %u").launch_command()
            'firefox'
        """
        return FIELD_CODE_PATTERN.sub("", self.exec).strip()

    def haystack(self) -> str:
        """Text searched by the fuzzy matcher: name followed by keywords."""
        return " ".join((self.name, *self.keywords))
