"""
Statistics engine for Focus Stats.

PURPOSE: Aggregate work sessions into hourly, weekday and calendar buckets.
AI CONTEXT: Pure data processing - no visualization, no I/O.

BUCKETS:
1. Hour of day: 0-23, all keys always present
2. Weekday: 0-6 (Monday = 0), all keys always present
3. History: calendar label, one pre-populated entry per day of the window

HISTORY GRANULARITY (chosen once from the window length in hours):
- hours <= 24:           month labels  ("March 2026")
- 24 < hours <= 744:     day labels    ("March 07, 2026")
- 744 < hours <= 8784:   month labels
- hours > 8784:          year labels   ("2026")

DURATION MODEL:
Each running span of a session is clipped to the reporting window and
split at hour boundaries. Every piece is credited to the hour, weekday and
calendar label of its first instant. Seconds are summed per bucket for the
session and rounded to whole minutes once per bucket. Completed and
abandoned counts go to the buckets of the session's start instant.

USAGE:
    data = compute_stats(sessions, start, end)
    data.totals.minutes
    data.hour_of_day[9].completed
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from .config import Config
from .models import Quantity, Session

__all__ = [
    "StatsData",
    "compute_stats",
    "end_of_day",
    "history_key_format",
    "hours_and_mins_to_mins",
    "hours_between",
    "init_data",
    "mins_to_hours_and_mins",
    "round_time",
    "start_of_day",
]

logger = logging.getLogger(__name__)


def round_time(value: float) -> int:
    """
    Round a time value in seconds, minutes or hours to the nearest integer.

    Halves are rounded away from zero (2.5 -> 3), unlike the built-in
    round() which rounds halves to even.

    Args:
        value: Time value to round.

    Returns:
        Nearest integer.

    Example:
        >>> round_time(2.5)
        3
        >>> round_time(89.4)
        89
    """
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded if value >= 0 else -rounded)


def mins_to_hours_and_mins(value: int) -> tuple[int, int]:
    """
    Express a minutes value in hours and minutes.

    Example:
        >>> mins_to_hours_and_mins(135)
        (2, 15)
    """
    return value // Config.MINUTES_IN_AN_HOUR, value % Config.MINUTES_IN_AN_HOUR


def hours_and_mins_to_mins(hours: int, minutes: int) -> int:
    """Inverse of mins_to_hours_and_mins()."""
    return hours * Config.MINUTES_IN_AN_HOUR + minutes


def start_of_day(value: datetime) -> datetime:
    """Midnight of the day containing value."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    """Last whole second (23:59:59) of the day containing value."""
    return value.replace(hour=23, minute=59, second=59, microsecond=0)


def hours_between(start: datetime, end: datetime) -> int:
    """Length of [start, end] in hours, rounded with round_time()."""
    return round_time((end - start).total_seconds() / 3600)


def history_key_format(hours_diff: int) -> str:
    """
    Choose the strftime pattern used for history labels.

    Args:
        hours_diff: Length of the reporting window in whole hours.

    Returns:
        Day, month or year pattern from Config.

    Example:
        >>> history_key_format(12)
        '%B %Y'
        >>> history_key_format(100)
        '%B %d, %Y'
        >>> history_key_format(9000)
        '%Y'
    """
    if Config.HOURS_IN_A_DAY < hours_diff <= Config.MAX_HOURS_IN_A_MONTH:
        return Config.DAY_KEY_FORMAT
    if hours_diff > Config.MAX_HOURS_IN_A_YEAR:
        return Config.YEAR_KEY_FORMAT
    return Config.MONTH_KEY_FORMAT


def _hour_pieces(start: datetime, end: datetime) -> Iterator[tuple[datetime, float]]:
    """Split [start, end) at hour boundaries, yielding (piece start, seconds)."""
    cursor = start
    while cursor < end:
        next_hour = cursor.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        piece_end = min(next_hour, end)
        yield cursor, (piece_end - cursor).total_seconds()
        cursor = piece_end


def _count(quantity: Quantity, completed: bool) -> None:
    if completed:
        quantity.completed += 1
    else:
        quantity.abandoned += 1


@dataclass
class StatsData:
    """
    Computed statistics for one reporting window.

    A fresh instance is built for every computation and never reused.
    history_key_format is fixed at construction; history keys are the
    labels pre-populated by init_data() and are never extended afterwards.
    """

    history_key_format: str = Config.MONTH_KEY_FORMAT
    weekday: dict[int, Quantity] = field(default_factory=lambda: {i: Quantity() for i in range(7)})
    hour_of_day: dict[int, Quantity] = field(
        default_factory=lambda: {i: Quantity() for i in range(24)}
    )
    history: dict[str, Quantity] = field(default_factory=dict)
    totals: Quantity = field(default_factory=Quantity)
    averages: Quantity = field(default_factory=Quantity)

    def label(self, value: datetime) -> str:
        """History label of an instant under this instance's format."""
        return value.strftime(self.history_key_format)

    def _distribute_session(
        self,
        session: Session,
        start: datetime | None,
        end: datetime | None,
    ) -> float:
        """
        Add a session's in-window running time to the minute buckets.

        Each timeline span is intersected with [start, end]; time outside
        the window is ignored. Labels that were not pre-populated are
        dropped from history.

        Args:
            session: Finished session to distribute.
            start: Window start, or None for no lower bound.
            end: Window end, or None for no upper bound.

        Returns:
            Total in-window running time of the session in seconds.
        """
        seconds = 0.0
        hourly: dict[int, float] = defaultdict(float)
        weekday: dict[int, float] = defaultdict(float)
        daily: dict[str, float] = defaultdict(float)

        for entry in session.timeline:
            if entry.end_time is None:
                continue
            lower = entry.start_time if start is None else max(entry.start_time, start)
            upper = entry.end_time if end is None else min(entry.end_time, end)
            if upper <= lower:
                continue

            for piece_start, piece_seconds in _hour_pieces(lower, upper):
                hourly[piece_start.hour] += piece_seconds
                weekday[piece_start.weekday()] += piece_seconds
                daily[self.label(piece_start)] += piece_seconds
                seconds += piece_seconds

        for day, secs in weekday.items():
            self.weekday[day].minutes += round_time(secs / Config.SECONDS_IN_A_MINUTE)

        for hour, secs in hourly.items():
            self.hour_of_day[hour].minutes += round_time(secs / Config.SECONDS_IN_A_MINUTE)

        for key, secs in daily.items():
            if key in self.history:
                self.history[key].minutes += round_time(secs / Config.SECONDS_IN_A_MINUTE)

        return seconds

    def compute_totals(
        self,
        sessions: Sequence[Session],
        start: datetime | None,
        end: datetime | None,
    ) -> None:
        """
        Accumulate minutes and completed/abandoned counts for sessions.

        Sessions still in progress (no end time) are skipped entirely.
        Minutes are spread over the buckets the session was running in;
        the completed or abandoned count goes to the buckets of the
        session's start instant only.

        Business context: A session that runs from 23:30 to 00:30 shows up
        as 30 minutes on each day in the work history but counts as one
        session on the day it was started.

        Args:
            sessions: Sessions fetched for the window.
            start: Window start.
            end: Window end.

        Example:
            >>> data = init_data(start, end, hours_between(start, end))
            >>> data.compute_totals(sessions, start, end)
            >>> data.totals.completed
            3
        """
        for session in sessions:
            if not session.is_finished:
                logger.debug("Skipping unfinished session started %s", session.start_time)
                continue

            seconds = self._distribute_session(session, start, end)
            duration = round_time(seconds / Config.SECONDS_IN_A_MINUTE)

            _count(self.weekday[session.start_time.weekday()], session.completed)
            _count(self.hour_of_day[session.start_time.hour], session.completed)

            history_bucket = self.history.get(self.label(session.start_time))
            if history_bucket is not None:
                _count(history_bucket, session.completed)

            _count(self.totals, session.completed)
            self.totals.minutes += duration

    def compute_averages(self, start: datetime, end: datetime) -> None:
        """
        Calculate per-day averages of minutes and session counts.

        The number of days runs from start to the end of end's day, in
        whole days. Windows shorter than a day (today, or a few hours)
        count as one day.

        Args:
            start: Window start.
            end: Window end.

        Example:
            >>> data.totals.minutes = 700
            >>> data.compute_averages(datetime(2026, 3, 1), datetime(2026, 3, 7, 23, 59, 59))
            >>> data.averages.minutes
            100
        """
        hours = hours_between(start, end_of_day(end))
        number_of_days = max(hours // Config.HOURS_IN_A_DAY, 1)

        self.averages.minutes = round_time(self.totals.minutes / number_of_days)
        self.averages.completed = round_time(self.totals.completed / number_of_days)
        self.averages.abandoned = round_time(self.totals.abandoned / number_of_days)

    def history_items(self) -> list[tuple[str, Quantity]]:
        """History entries in chronological order."""
        return sorted(
            self.history.items(),
            key=lambda item: datetime.strptime(item[0], self.history_key_format),
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to a JSON-compatible dict.

        History is emitted as an ordered list so consumers do not need to
        know how to sort the labels.
        """
        return {
            "history_key_format": self.history_key_format,
            "totals": self.totals.to_dict(),
            "averages": self.averages.to_dict(),
            "weekday": {str(k): v.to_dict() for k, v in sorted(self.weekday.items())},
            "hour_of_day": {str(k): v.to_dict() for k, v in sorted(self.hour_of_day.items())},
            "history": [{"label": k, **v.to_dict()} for k, v in self.history_items()],
        }


def init_data(start: datetime, end: datetime, hours_diff: int) -> StatsData:
    """
    Create a StatsData with every bucket initialised.

    Decides the history granularity from hours_diff, then pre-populates
    one history entry per 24 hour step from start to end inclusive. With a
    coarser than daily format several steps share one label.

    Args:
        start: Window start.
        end: Window end.
        hours_diff: Window length in whole hours.

    Returns:
        Zero-valued StatsData.

    Example:
        >>> data = init_data(datetime(2026, 3, 1), datetime(2026, 3, 3, 23, 59, 59), 72)
        >>> list(data.history)
        ['March 01, 2026', 'March 02, 2026', 'March 03, 2026']
    """
    data = StatsData(history_key_format=history_key_format(hours_diff))

    step = timedelta(hours=Config.HOURS_IN_A_DAY)
    date = start
    while date <= end:
        data.history.setdefault(data.label(date), Quantity())
        date += step

    return data


def compute_stats(
    sessions: Sequence[Session],
    start: datetime,
    end: datetime,
    hours_diff: int | None = None,
) -> StatsData:
    """
    Aggregate sessions over [start, end].

    Args:
        sessions: Sessions to aggregate.
        start: Window start.
        end: Window end.
        hours_diff: Window length in hours. Computed from start and end
            when omitted.

    Returns:
        New StatsData with totals and averages filled in.
    """
    if hours_diff is None:
        hours_diff = hours_between(start, end)

    data = init_data(start, end, hours_diff)
    data.compute_totals(sessions, start, end)
    data.compute_averages(start, end)
    return data
