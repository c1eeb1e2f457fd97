"""
Focus Stats.

PURPOSE: Aggregate recorded timer sessions into usage statistics.
AI CONTEXT: This package turns raw work sessions into hourly, weekday and
calendar summaries and renders them to the terminal or a web dashboard.

PACKAGE STRUCTURE:
- period.py: Named period and date option resolution
- statistics.py: Bucket aggregation, totals and averages
- models.py: Data models (Session, TimelineEntry, Quantity)
- storage.py: JSON session store
- stats_service.py: Orchestration of fetch -> compute -> render
- presenters.py: Terminal (rich) and chart (matplotlib) rendering
- config.py: Configuration constants
- errors.py: Exception hierarchy

QUICK START:
    # Show statistics for the last week
    focus-stats show --period 7days

    # List and delete sessions in a range
    focus-stats list --start 2026-01-01 --end 2026-01-31
    focus-stats delete --period yesterday
"""

from focus_stats.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
