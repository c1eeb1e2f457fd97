"""
Reporting period resolution for Focus Stats.

PURPOSE: Turn a named period keyword or explicit date options into the
concrete (start, end) window the statistics are computed over.
AI CONTEXT: Pure functions - the current time is injectable for tests.

PERIOD SEMANTICS:
- end is today at 23:59:59, except yesterday (yesterday at 23:59:59)
- Ndays: start is midnight N-1 days before today (N days including today)
- today: start is the current moment, NOT midnight
- all-time / empty: (None, None), no bound on either side

DATE OPTIONS:
- YYYY-MM-DD                 start -> 12:00:00 AM, end -> 11:59:59 PM
- YYYY-MM-DD HH:MM:SS AM/PM  used as given
Explicit options override the matching side of the period.

USAGE:
    start, end = resolve_window(period="7days")
    start, end = resolve_window(start="2026-01-01", end="2026-01-31")
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum

from .config import Config
from .errors import InvalidDateFormat, InvalidDateRange, InvalidPeriodKeyword

__all__ = [
    "Period",
    "get_period",
    "parse_date_option",
    "resolve_window",
]

logger = logging.getLogger(__name__)

DATE_ONLY_FORMAT = "%Y-%m-%d"
DATE_TIME_FORMAT = "%Y-%m-%d %I:%M:%S %p"


class Period(str, Enum):
    """Named reporting periods accepted by --period."""

    ALL_TIME = "all-time"
    TODAY = "today"
    YESTERDAY = "yesterday"
    DAYS_7 = "7days"
    DAYS_14 = "14days"
    DAYS_30 = "30days"
    DAYS_90 = "90days"
    DAYS_180 = "180days"
    DAYS_365 = "365days"


_PERIOD_DAYS: dict[Period, int] = {
    Period.DAYS_7: 7,
    Period.DAYS_14: 14,
    Period.DAYS_30: 30,
    Period.DAYS_90: 90,
    Period.DAYS_180: 180,
    Period.DAYS_365: 365,
}


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_end(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=0)


def get_period(
    period: Period | str,
    now: datetime | None = None,
) -> tuple[datetime | None, datetime | None]:
    """
    Get the start and end of a named reporting period.

    Business context: The period keyword is the common way to ask for
    statistics ("what did I do this week?"). The N-day windows include
    today, so 7days covers today plus the six days before it.

    Args:
        period: A Period member or its string value. Unknown values and
            the empty string are treated as all-time; callers validate
            keywords beforehand (see resolve_window).
        now: Current local time. Defaults to datetime.now().

    Returns:
        Tuple (start, end) of naive local datetimes, or (None, None) for
        all-time.

    Example:
        >>> now = datetime(2026, 3, 10, 15, 30)
        >>> get_period("7days", now)
        (datetime.datetime(2026, 3, 4, 0, 0), datetime.datetime(2026, 3, 10, 23, 59, 59))
        >>> get_period("today", now)[0]
        datetime.datetime(2026, 3, 10, 15, 30)
    """
    now = now or datetime.now()
    try:
        period = Period(period)
    except ValueError:
        return None, None

    end = _day_end(now)

    if period is Period.TODAY:
        # Counts from the current moment rather than from midnight
        return now, end
    if period is Period.YESTERDAY:
        yesterday = now - timedelta(days=1)
        return _midnight(yesterday), _day_end(yesterday)
    if period in _PERIOD_DAYS:
        start = now - timedelta(days=_PERIOD_DAYS[period] - 1)
        return _midnight(start), end

    return None, None


def parse_date_option(value: str | None, *, is_end: bool = False) -> datetime | None:
    """
    Parse a --start or --end option into a local datetime.

    A date-only value is expanded to the first second of the day for a
    start option and to the last second of the day for an end option.

    Args:
        value: Raw option value. Surrounding whitespace is ignored.
        is_end: True when parsing the end of the window.

    Returns:
        Naive local datetime, or None if value is empty.

    Raises:
        InvalidDateFormat: If value matches neither accepted format.

    Example:
        >>> parse_date_option("2026-01-31", is_end=True)
        datetime.datetime(2026, 1, 31, 23, 59, 59)
        >>> parse_date_option("2026-01-31 2:15:00 PM")
        datetime.datetime(2026, 1, 31, 14, 15)
    """
    value = (value or "").strip()
    if not value:
        return None

    try:
        parsed = datetime.strptime(value, DATE_ONLY_FORMAT)
    except ValueError:
        pass
    else:
        return _day_end(parsed) if is_end else parsed

    try:
        return datetime.strptime(value, DATE_TIME_FORMAT)
    except ValueError as e:
        raise InvalidDateFormat(value) from e


def resolve_window(
    period: str | None = "",
    start: str | None = "",
    end: str | None = "",
    now: datetime | None = None,
) -> tuple[datetime | None, datetime | None]:
    """
    Resolve command line options into the reporting window.

    Validates the period keyword, resolves it, then lets explicit start
    and end options override the corresponding side.

    Args:
        period: Period keyword; empty means all-time.
        start: Optional start date option.
        end: Optional end date option.
        now: Current local time, injectable for tests.

    Returns:
        Tuple (start, end). Either side may be None when unbounded.

    Raises:
        InvalidPeriodKeyword: If period is non-empty and unsupported.
        InvalidDateFormat: If start or end cannot be parsed.
        InvalidDateRange: If both sides are set and end precedes start.

    Example:
        >>> resolve_window(start="2026-01-01", end="2026-01-31")
        (datetime.datetime(2026, 1, 1, 0, 0), datetime.datetime(2026, 1, 31, 23, 59, 59))
    """
    period = (period or "").strip()
    if not Config.is_valid_period(period):
        raise InvalidPeriodKeyword(period, Config.PERIODS)

    window_start, window_end = get_period(period, now)

    start_override = parse_date_option(start, is_end=False)
    end_override = parse_date_option(end, is_end=True)
    if start_override is not None:
        window_start = start_override
    if end_override is not None:
        window_end = end_override

    if window_start is not None and window_end is not None and window_end < window_start:
        raise InvalidDateRange()

    logger.debug("Resolved window %s -> %s (period=%r)", window_start, window_end, period)
    return window_start, window_end
