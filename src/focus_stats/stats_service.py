"""
Stats service - orchestration of the statistics commands.

PURPOSE: Fetch sessions for a window, compute statistics, render them.
AI CONTEXT: Shared by the CLI; the web routes reuse fetch/compute.

ARCHITECTURE:
    CLI options ──► resolve_window ──► Stats ◄── SessionStore
                                        │
                                        ├──► compute_stats (statistics.py)
                                        └──► TerminalPresenter

REPORT ORDER (show):
    header, summary, averages*, work history**, weekdays, hours
    *  only for windows longer than a day
    ** only for windows longer than a day with time logged

USAGE:
    with SessionStore() as store:
        Stats.from_options(store, period="7days").show()
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from rich.console import Console

from .config import Config
from .models import Session
from .period import resolve_window
from .presenters import TerminalPresenter
from .statistics import StatsData, end_of_day, hours_between, init_data, start_of_day

if TYPE_CHECKING:
    from .storage import SessionStore

__all__ = ["Stats"]

logger = logging.getLogger(__name__)


class Stats:
    """
    Statistics for one reporting window.

    Created per command invocation and discarded afterwards.

    Attributes:
        start_time: Window start; None until anchored for all-time.
        end_time: Window end; None until anchored for all-time.
        sessions: Sessions fetched for the window.
        data: Computed statistics, set by show().
        hours_diff: Window length in whole hours, set by show().
    """

    def __init__(
        self,
        store: SessionStore,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        *,
        console: Console | None = None,
        now: datetime | None = None,
    ) -> None:
        """
        Initialize with a store and a resolved window.

        Args:
            store: Session source. show() closes it when done.
            start_time: Window start, or None for no lower bound.
            end_time: Window end, or None for no upper bound.
            console: rich Console to render to. Default: stdout.
            now: Current local time, injectable for tests.
        """
        self.store = store
        self.start_time = start_time
        self.end_time = end_time
        self.sessions: list[Session] = []
        self.data: StatsData | None = None
        self.hours_diff = 0
        self.presenter = TerminalPresenter(console or Console())
        self._now = now

    @classmethod
    def from_options(
        cls,
        store: SessionStore,
        period: str | None = "",
        start: str | None = "",
        end: str | None = "",
        *,
        console: Console | None = None,
        now: datetime | None = None,
    ) -> Stats:
        """
        Build a Stats from command line options.

        Raises:
            InvalidPeriodKeyword: If period is unsupported.
            InvalidDateFormat: If start or end cannot be parsed.
            InvalidDateRange: If end precedes start.

        Example:
            >>> stats = Stats.from_options(store, period="30days")
        """
        window_start, window_end = resolve_window(period, start, end, now)
        return cls(store, window_start, window_end, console=console, now=now)

    def fetch_sessions(self) -> list[Session]:
        """
        Load and deserialize the sessions in the window.

        Raises:
            StorageError: If the store can't be read.
            SessionDecodeError: On the first malformed record; nothing
                is returned in that case.
        """
        records = self.store.get_sessions(self.start_time, self.end_time)
        self.sessions = [Session.from_dict(record) for record in records]
        logger.debug("Loaded %d session(s)", len(self.sessions))
        return self.sessions

    def _anchor_window(self) -> tuple[datetime, datetime]:
        """
        Replace open window bounds with concrete datetimes.

        An open end becomes the end of today. An open start becomes
        midnight of the earliest session, or midnight of the end's day
        when there are no sessions.

        Returns:
            The anchored (start, end).
        """
        if self.end_time is None:
            self.end_time = end_of_day(self._now or datetime.now())
        if self.start_time is None:
            first = self.sessions[0].start_time if self.sessions else self.end_time
            self.start_time = start_of_day(first)
        return self.start_time, self.end_time

    def compute(self) -> StatsData:
        """
        Compute statistics for the fetched sessions.

        Returns:
            Fresh StatsData, also stored on self.data.
        """
        start, end = self._anchor_window()

        self.hours_diff = hours_between(start, end)
        self.data = init_data(start, end, self.hours_diff)
        self.data.compute_totals(self.sessions, start, end)
        self.data.compute_averages(start, end)
        return self.data

    def show(self) -> None:
        """
        Display the statistics report for the window.

        The store is closed when this returns or raises.

        Raises:
            StorageError: If the store can't be read.
            SessionDecodeError: If a stored record is malformed.
        """
        try:
            self.fetch_sessions()
            data = self.compute()
            start, end = self._anchor_window()

            longer_than_a_day = self.hours_diff > Config.HOURS_IN_A_DAY

            self.presenter.render_header(start, end)
            self.presenter.render_summary(data)
            if longer_than_a_day:
                self.presenter.render_averages(data)
            if longer_than_a_day and data.totals.minutes > 0:
                self.presenter.render_work_history(data)
            self.presenter.render_weekday_breakdown(data)
            self.presenter.render_hourly_breakdown(data)
        finally:
            self.store.close()

    def list(self) -> None:
        """
        Print a table of the sessions in the window.

        Prints an informational notice instead of an empty table.
        """
        self.fetch_sessions()

        if not self.sessions:
            self.presenter.render_info("No sessions found for the specified time range")
            return

        self.presenter.render_session_table(self.sessions)

    def delete(self, confirm: TextIO | None = None) -> int:
        """
        Delete every session in the window after confirmation.

        Lists the sessions first. When there are none, nothing else
        happens: no prompt, no deletion. Otherwise a warning is shown and
        one line is read from confirm; any input, including an empty
        line, proceeds.

        Args:
            confirm: Stream to read the confirmation from. Default: stdin.

        Returns:
            Number of sessions deleted.
        """
        self.list()

        if not self.sessions:
            return 0

        self.presenter.render_warning(
            "The above sessions will be deleted permanently. Press ENTER to proceed"
        )
        (confirm or sys.stdin).readline()

        removed = self.store.delete_sessions(self.start_time, self.end_time)
        logger.info("Deleted %d session(s)", removed)
        return removed
