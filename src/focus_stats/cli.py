"""
CLI entry point for Focus Stats.

PURPOSE: Command-line interface for the statistics report, session listing,
session deletion and the web dashboard.
AI CONTEXT: Main entry points for package execution.

USAGE:
    # Show all-time statistics (default)
    focus-stats

    # Run with subcommands
    focus-stats show --period 7days          # Statistics report
    focus-stats list --start 2026-03-01      # Session table
    focus-stats delete --period yesterday    # Delete after confirmation
    focus-stats dashboard --port 8000        # Launch web dashboard
"""

from __future__ import annotations

import argparse
import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

from .config import Config
from .errors import FocusStatsError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from .storage import SessionStore

# Constants
PROG_NAME = "focus-stats"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached so basicConfig runs once)."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    return logging.getLogger(__name__)


def _open_store(store: SessionStore | None) -> SessionStore:
    from .storage import SessionStore as Store

    return store or Store()


def run_show(
    period: str = "",
    start: str = "",
    end: str = "",
    *,
    store: SessionStore | None = None,
    console: Console | None = None,
) -> None:
    """
    Print the statistics report for the selected window.

    Args:
        period: Period keyword; empty for all-time.
        start: Optional start date option.
        end: Optional end date option.
        store: Optional SessionStore for testability.
        console: Optional rich Console for testability.

    Raises:
        FocusStatsError: On invalid options or storage failure.

    Example:
        >>> # From command line:
        >>> # focus-stats show --period 30days
        >>> run_show(period="30days")
    """
    from .stats_service import Stats

    with _open_store(store) as session_store:
        Stats.from_options(session_store, period, start, end, console=console).show()


def run_list(
    period: str = "",
    start: str = "",
    end: str = "",
    *,
    store: SessionStore | None = None,
    console: Console | None = None,
) -> None:
    """
    Print a table of the sessions in the selected window.

    Raises:
        FocusStatsError: On invalid options or storage failure.
    """
    from .stats_service import Stats

    with _open_store(store) as session_store:
        Stats.from_options(session_store, period, start, end, console=console).list()


def run_delete(
    period: str = "",
    start: str = "",
    end: str = "",
    *,
    store: SessionStore | None = None,
    console: Console | None = None,
) -> int:
    """
    Delete the sessions in the selected window after confirmation.

    Returns:
        Number of sessions deleted.

    Raises:
        FocusStatsError: On invalid options or storage failure.
    """
    from .stats_service import Stats

    with _open_store(store) as session_store:
        stats = Stats.from_options(session_store, period, start, end, console=console)
        return stats.delete(sys.stdin)


def run_dashboard(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """
    Launch the web dashboard.

    Args:
        host: Network interface to bind to.
        port: TCP port for the HTTP server.

    Raises:
        OSError: If port is already in use.
    """
    from .web import run_dashboard as start_web

    _get_logger().info("Starting dashboard at http://%s:%s", host, port)
    start_web(host=host, port=port)


def _add_window_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--period",
        default="",
        help=f"Time period, one of: {', '.join(Config.PERIODS)} (default: all-time)",
    )
    parser.add_argument(
        "-s",
        "--start",
        default="",
        help="Start date: YYYY-MM-DD or 'YYYY-MM-DD HH:MM:SS AM/PM' (overrides --period)",
    )
    parser.add_argument(
        "-e",
        "--end",
        default="",
        help="End date: YYYY-MM-DD or 'YYYY-MM-DD HH:MM:SS AM/PM' (overrides --period)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Focus Stats - usage statistics for your work sessions",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Show statistics (default)")
    _add_window_options(show_parser)

    list_parser = subparsers.add_parser("list", help="List sessions in a time range")
    _add_window_options(list_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete sessions in a time range")
    _add_window_options(delete_parser)

    dashboard_parser = subparsers.add_parser("dashboard", help="Launch web dashboard")
    dashboard_parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Bind address (default: {DEFAULT_HOST})",
    )
    dashboard_parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port number (default: {DEFAULT_PORT})",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main CLI entry point for Focus Stats.

    Parses command-line arguments and dispatches to the matching
    subcommand handler. Without a subcommand the all-time statistics
    report is shown.

    Args:
        argv: Arguments without the program name. Default: sys.argv[1:].

    Returns:
        Exit code 0 on success, 1 when the command failed.

    Raises:
        SystemExit: On --help, --version or argument parsing errors.

    Example:
        >>> # From command line:
        >>> # focus-stats list --period today
        >>> sys.exit(main())
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = _get_logger()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.command == "list":
            run_list(args.period, args.start, args.end)
        elif args.command == "delete":
            run_delete(args.period, args.start, args.end)
        elif args.command == "dashboard":
            run_dashboard(host=args.host, port=args.port)
        elif args.command == "show":
            run_show(args.period, args.start, args.end)
        else:
            run_show()
    except FocusStatsError as e:
        logger.debug("Command %r failed", args.command, exc_info=True)
        print(f"{PROG_NAME}: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
