"""Version information for focus-stats."""

__version__ = "1.0.0"
__version_date__ = "2026-10-17"

__title__ = "focus_stats"
__description__ = "Usage statistics for a personal productivity timer"

__author__ = "focus-stats contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2026 focus-stats contributors"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
