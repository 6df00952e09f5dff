"""Output formatting for CLI commands.

Rich tables for terminals, plain JSON for scripts.
"""

import json
import sys
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from ..core.matcher import MatchResult
from ..models.frecency import FrecencyEntry


# ANSI color codes for output
class Colors:
    RESET = "\033[0m"
    GREEN = "\033[32m"
    RED = "\033[31m"
    BLUE = "\033[34m"


def print_success(message: str) -> None:
    """Print success message in green."""
    print(f"{Colors.GREEN}✓{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    print(f"{Colors.RED}✗{Colors.RESET} {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print info message in blue."""
    print(f"{Colors.BLUE}ℹ{Colors.RESET} {message}")


def print_json(data: Any, file=None) -> None:
    """Print data as indented JSON."""
    print(json.dumps(data, indent=2), file=file or sys.stdout)


def results_to_json(
    results: Sequence[MatchResult],
    icon_for: Optional[Callable[[MatchResult], Optional[str]]] = None,
) -> List[Dict[str, Any]]:
    """Convert ranked results to JSON-serializable dicts."""
    rows = []
    for rank, result in enumerate(results, start=1):
        row = {
            "rank": rank,
            "id": result.app.id,
            "name": result.app.name,
            "command": result.app.launch_command(),
            "fuzzy_score": result.fuzzy_score,
            "frecency_score": round(result.frecency_score, 4),
            "combined_score": round(result.combined_score, 4),
        }
        if icon_for is not None:
            row["icon"] = icon_for(result)
        rows.append(row)
    return rows


def results_table(
    query: str,
    results: Sequence[MatchResult],
    icon_for: Optional[Callable[[MatchResult], Optional[str]]] = None,
) -> Table:
    """Build a rich table of ranked results."""
    title = f"Results for '{query}'" if query.strip() else "Most used applications"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Fuzzy", justify="right")
    table.add_column("Frecency", justify="right", style="green")
    table.add_column("Combined", justify="right", style="bold")
    if icon_for is not None:
        table.add_column("Icon", style="dim")

    for rank, result in enumerate(results, start=1):
        row = [
            str(rank),
            result.app.name,
            result.app.id,
            str(result.fuzzy_score),
            f"{result.frecency_score:.2f}",
            f"{result.combined_score:.2f}",
        ]
        if icon_for is not None:
            row.append(icon_for(result) or "-")
        table.add_row(*row)

    return table


def history_table(rows: Sequence[Tuple[str, FrecencyEntry, float]]) -> Table:
    """Build a rich table of launch history entries."""
    table = Table(title="Launch History", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Launches", justify="right")
    table.add_column("Last launched")
    table.add_column("Score", justify="right", style="green")

    for app_id, entry, score in rows:
        last = datetime.fromtimestamp(entry.last_accessed).strftime("%Y-%m-%d %H:%M")
        table.add_row(app_id, str(entry.frequency), last, f"{score:.2f}")

    return table


def print_table(table: Table) -> None:
    """Render a rich table to stdout."""
    Console().print(table)
