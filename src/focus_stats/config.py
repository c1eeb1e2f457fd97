"""
Configuration for Focus Stats.

PURPOSE: Centralized configuration constants and runtime settings.
AI CONTEXT: All configurable values live here - modify this file to change behavior.

CONFIGURATION CATEGORIES:
- Storage: File paths and directory structure
- Aggregation: Calendar thresholds that pick the history granularity
- Display: Bar characters and date formats used by presenters
- Periods: Valid named reporting periods

ENVIRONMENT VARIABLES:
- FOCUS_STATS_DIR: Directory holding sessions.json (default: ~/.focus_stats)

USAGE:
    from focus_stats.config import Config
    storage_dir = Config.get_storage_dir()
    threshold = Config.MAX_HOURS_IN_A_MONTH
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for Focus Stats.

    DESIGN: Frozen dataclass ensures configuration immutability at runtime.
    All values are class-level constants - no instance creation needed.

    GRANULARITY THRESHOLDS:
    - Up to 24 hours: month labels
    - 24 < hours <= 744 (31 day month): day labels
    - hours > 8784 (leap year): year labels
    - Anything in between: month labels

    STORAGE STRUCTURE:
        ~/.focus_stats/
        └── sessions.json      # List of session records
    """

    # =========================================================================
    # STORAGE CONFIGURATION
    # =========================================================================
    STORAGE_DIR: ClassVar[str] = os.path.join(os.path.expanduser("~"), ".focus_stats")
    SESSIONS_FILE: ClassVar[str] = "sessions.json"

    # =========================================================================
    # AGGREGATION CONSTANTS
    # =========================================================================
    HOURS_IN_A_DAY: ClassVar[int] = 24
    MAX_HOURS_IN_A_MONTH: ClassVar[int] = 744
    """31 day months."""

    MAX_HOURS_IN_A_YEAR: ClassVar[int] = 8784
    """Leap years."""

    MINUTES_IN_AN_HOUR: ClassVar[int] = 60
    SECONDS_IN_A_MINUTE: ClassVar[int] = 60

    DAY_KEY_FORMAT: ClassVar[str] = "%B %d, %Y"
    MONTH_KEY_FORMAT: ClassVar[str] = "%B %Y"
    YEAR_KEY_FORMAT: ClassVar[str] = "%Y"

    # =========================================================================
    # DISPLAY CONFIGURATION
    # =========================================================================
    BAR_CHART_CHAR: ClassVar[str] = "▇"
    BAR_CHART_WIDTH: ClassVar[int] = 40
    REPORT_DATE_FORMAT: ClassVar[str] = "%B %d, %Y"
    LIST_DATE_FORMAT: ClassVar[str] = "%b %d, %Y %I:%M %p"
    HOUR_LABEL_FORMAT: ClassVar[str] = "%I:%M %p"

    # =========================================================================
    # REPORTING PERIODS
    # =========================================================================
    PERIODS: ClassVar[tuple[str, ...]] = (
        "all-time",
        "today",
        "yesterday",
        "7days",
        "14days",
        "30days",
        "90days",
        "180days",
        "365days",
    )

    # =========================================================================
    # ENVIRONMENT-BASED SETTINGS (runtime configurable)
    # =========================================================================
    _storage_dir_override: ClassVar[str | None] = None

    @classmethod
    def get_storage_dir(cls) -> str:
        """
        Get the directory that holds the session store.

        Uses a priority system: test overrides first, then the
        FOCUS_STATS_DIR environment variable, then STORAGE_DIR.

        Returns:
            Absolute or user-relative path to the storage directory.

        Example:
            >>> # With env var: FOCUS_STATS_DIR=/tmp/focus
            >>> Config.get_storage_dir()
            '/tmp/focus'
        """
        if cls._storage_dir_override is not None:
            return cls._storage_dir_override
        return os.environ.get("FOCUS_STATS_DIR", cls.STORAGE_DIR)

    @classmethod
    def set_test_overrides(cls, storage_dir: str | None = None) -> None:
        """
        Set test overrides for environment-based settings.

        Must call reset_test_overrides() in test teardown to avoid
        affecting other tests.

        Args:
            storage_dir: Override for the storage directory. None to clear.
        """
        cls._storage_dir_override = storage_dir

    @classmethod
    def reset_test_overrides(cls) -> None:
        """Reset all test overrides to use environment variables."""
        cls._storage_dir_override = None

    @classmethod
    def is_valid_period(cls, period: str) -> bool:
        """
        Check whether a keyword names a supported reporting period.

        The empty string is accepted and means all-time.

        Args:
            period: Period keyword from the command line.

        Returns:
            True if period is empty or one of PERIODS.

        Example:
            >>> Config.is_valid_period("7days")
            True
            >>> Config.is_valid_period("fortnight")
            False
        """
        return period == "" or period in cls.PERIODS
