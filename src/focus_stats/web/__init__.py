"""
Web dashboard module for Focus Stats.

PURPOSE: FastAPI JSON API and server-rendered charts.
AI CONTEXT: Same window options and statistics as the CLI.

FEATURES:
- JSON statistics and session listings
- Server-side chart rendering (matplotlib)

USAGE:
    # Via CLI
    focus-stats dashboard

    # Programmatically
    from focus_stats.web import create_app
    app = create_app()
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
