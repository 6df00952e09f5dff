"""CLI command handlers for aura-launcher.

Implements search, launch, history and icon commands on top of the
launcher core.
"""

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..core.config import load_config
from ..core.history import FrecencyStore
from ..core.icons import IconCache
from ..core.launcher import Launcher
from .logging_config import get_logger, log_timing, setup_logging
from .output import (
    history_table,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    results_table,
    results_to_json,
)


def _build_launcher(args: argparse.Namespace) -> Launcher:
    """Load config, history and catalog for commands that rank apps."""
    config = load_config(args.config)
    history = FrecencyStore.load(args.history)

    with log_timing("Load catalog", get_logger()):
        return Launcher.create(config, history)


def cmd_search(args: argparse.Namespace) -> int:
    """Rank applications against a query."""
    launcher = _build_launcher(args)
    query = " ".join(args.query)

    results = launcher.filter(query, limit=args.limit)

    icon_for = None
    if args.icons:
        def icon_for(result):
            return launcher.icon_path(result.app)

    if args.json:
        print_json(results_to_json(results, icon_for))
        return 0

    if not results:
        print_info(f"No applications match '{query}'")
        return 0

    print_table(results_table(query, results, icon_for))
    return 0


def cmd_launch(args: argparse.Namespace) -> int:
    """Launch an application by id and record it in history."""
    launcher = _build_launcher(args)

    app = launcher.find(args.app_id)
    if app is None:
        print_error(f"Unknown application: {args.app_id}")
        return 1

    if args.dry_run:
        print_info(f"Would launch {app.name}: {app.launch_command()}")
        return 0

    if not launcher.launch(app):
        print_error(f"Failed to launch {app.name}")
        return 1

    print_success(f"Launched {app.name}")
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    """Show recorded launches with their current frecency scores."""
    history = FrecencyStore.load(args.history)
    rows = history.ranked()

    if args.json:
        print_json([
            {
                "id": app_id,
                "frequency": entry.frequency,
                "last_accessed": entry.last_accessed,
                "score": round(score, 4),
            }
            for app_id, entry, score in rows
        ])
        return 0

    if not rows:
        print_info(f"No launches recorded in {history.path}")
        return 0

    print_table(history_table(rows))
    return 0


def cmd_icon(args: argparse.Namespace) -> int:
    """Resolve an icon name to a file path."""
    appearance = load_config(args.config).appearance
    cache = IconCache(
        capacity=appearance.icon_cache_capacity,
        size=appearance.icon_size,
        theme=appearance.icon_theme,
    )

    path = cache.resolve(args.name, size=args.size, theme=args.theme)
    if path is None:
        print_error(f"Icon not found: {args.name}")
        return 1

    print(path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="aura-launcher",
        description="Aura Launcher - rank and launch desktop applications",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"aura-launcher {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: ~/.config/aura-launcher/config.json)"
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=None,
        help="History file (default: ~/.local/share/aura-launcher/history.json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # aura-launcher search [query...]
    parser_search = subparsers.add_parser(
        "search",
        help="Rank applications against a query",
        description="Rank applications by fuzzy match and launch history"
    )
    parser_search.add_argument(
        "query",
        nargs="*",
        help="Search query (omit to list most used applications)"
    )
    parser_search.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of results (default: config max_results)"
    )
    parser_search.add_argument(
        "--icons",
        action="store_true",
        help="Resolve and show icon paths"
    )
    parser_search.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    # aura-launcher launch <app_id>
    parser_launch = subparsers.add_parser(
        "launch",
        help="Launch an application",
        description="Launch an application by desktop file id and record it in history"
    )
    parser_launch.add_argument(
        "app_id",
        help="Desktop file id (e.g., firefox)"
    )
    parser_launch.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the command without launching or recording"
    )

    # aura-launcher history
    parser_history = subparsers.add_parser(
        "history",
        help="Show launch history",
        description="Show recorded launches with current frecency scores"
    )
    parser_history.add_argument(
        "--json",
        action="store_true",
        help="Output history as JSON"
    )

    # aura-launcher icon <name>
    parser_icon = subparsers.add_parser(
        "icon",
        help="Resolve an icon name",
        description="Resolve an icon name through the XDG icon theme"
    )
    parser_icon.add_argument(
        "name",
        help="Icon name or absolute path"
    )
    parser_icon.add_argument(
        "--size",
        type=int,
        default=None,
        help="Icon size in pixels (default: config icon_size)"
    )
    parser_icon.add_argument(
        "--theme",
        default=None,
        help="Icon theme (default: config icon_theme)"
    )

    return parser


def cli_main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(verbose=args.verbose, debug=args.debug)
    if args.debug:
        logger.debug("Debug logging enabled")

    # No command = show help
    if not args.command:
        parser.print_help()
        return 0

    command_handlers = {
        "search": cmd_search,
        "launch": cmd_launch,
        "history": cmd_history,
        "icon": cmd_icon,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    print_error(f"Unknown command: {args.command}")
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(cli_main())
