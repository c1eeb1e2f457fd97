"""
Presenters for Focus Stats.

PURPOSE: Render computed statistics and session listings.
AI CONTEXT: Formatting only - all numbers come from statistics.StatsData.

PRESENTERS:
- TerminalPresenter: rich tables and horizontal bar charts on a text stream
- ChartPresenter: matplotlib PNG charts for the web dashboard

USAGE:
    presenter = TerminalPresenter(Console(file=sys.stdout))
    presenter.render_summary(data)
    presenter.render_weekday_breakdown(data)
"""

from __future__ import annotations

import calendar
import io
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import Config
from .statistics import mins_to_hours_and_mins

if TYPE_CHECKING:
    from .models import Session
    from .statistics import StatsData

__all__ = [
    "ChartPresenter",
    "TerminalPresenter",
    "bar_length",
    "hour_label",
    "weekday_label",
]

HEADING_STYLE = "bright_blue"
VALUE_STYLE = "green"
HEADER_STYLE = "bold black on yellow"

HISTORY_BAR_COLOR = "#3b82f6"


def hour_label(hour: int) -> str:
    """
    Format an hour of day as a 12-hour clock label.

    Example:
        >>> hour_label(0)
        '12:00 AM'
        >>> hour_label(13)
        '01:00 PM'
    """
    return datetime(2000, 1, 1, hour).strftime(Config.HOUR_LABEL_FORMAT)


def weekday_label(day: int) -> str:
    """Weekday name for a datetime.weekday() value (0 = Monday)."""
    return calendar.day_name[day]


def bar_length(value: int, largest: int, width: int = Config.BAR_CHART_WIDTH) -> int:
    """
    Scale a value to a bar length.

    The largest value fills width characters. Non-zero values always get
    at least one character so they remain visible.

    Example:
        >>> bar_length(50, 100, 40)
        20
        >>> bar_length(1, 1000, 40)
        1
        >>> bar_length(0, 0, 40)
        0
    """
    if value <= 0 or largest <= 0:
        return 0
    return max(1, round(value / largest * width))


class TerminalPresenter:
    """
    Presenter that writes the statistics report to a rich Console.

    Sections are rendered independently; the caller (stats_service.Stats)
    decides which ones apply to the current window and in what order.
    """

    def __init__(self, console: Console) -> None:
        """
        Initialize with the console to render to.

        Args:
            console: rich Console. Use Console(file=stream) to capture output.
        """
        self.console = console

    def _heading(self, title: str) -> None:
        self.console.print()
        self.console.print(Text(title, style=HEADING_STYLE))

    def _duration(self, minutes: int) -> Text:
        hours, mins = mins_to_hours_and_mins(minutes)
        return Text(f"{hours} hours {mins} minutes", style=VALUE_STYLE)

    def _line(self, label: str, value: Text | int) -> None:
        if not isinstance(value, Text):
            value = Text(str(value), style=VALUE_STYLE)
        self.console.print(Text.assemble(f"{label} ", value))

    def render_header(self, start: datetime, end: datetime) -> None:
        """
        Print the reporting period banner.

        Example:
            Reporting period: March 01, 2026 - March 07, 2026
        """
        period = (
            f"Reporting period: {start.strftime(Config.REPORT_DATE_FORMAT)}"
            f" - {end.strftime(Config.REPORT_DATE_FORMAT)}"
        )
        self.console.print(Text(f" {period} ", style=HEADER_STYLE))

    def render_summary(self, data: StatsData) -> None:
        """Print totals: time logged, completed and abandoned sessions."""
        self._heading("Summary")
        self._line("Total time logged:", self._duration(data.totals.minutes))
        self._line("Work sessions completed:", data.totals.completed)
        self._line("Work sessions abandoned:", data.totals.abandoned)

    def render_averages(self, data: StatsData) -> None:
        """Print per-day averages."""
        self._heading("Averages")
        self._line("Average time logged per day:", self._duration(data.averages.minutes))
        self._line("Completed sessions per day:", data.averages.completed)
        self._line("Abandoned sessions per day:", data.averages.abandoned)

    def render_bar_chart(self, title: str, bars: Sequence[tuple[str, int]]) -> None:
        """
        Print a horizontal bar chart with the value after each bar.

        Args:
            title: Chart heading.
            bars: (label, value) pairs in display order.
        """
        self._heading(title)
        largest = max((value for _, value in bars), default=0)

        grid = Table.grid(padding=(0, 1))
        grid.add_column(justify="right", no_wrap=True)
        grid.add_column(no_wrap=True)
        for label, value in bars:
            bar = Config.BAR_CHART_CHAR * bar_length(value, largest)
            grid.add_row(label, Text.assemble((bar, HEADING_STYLE), f" {value}"))
        self.console.print(grid)

    def render_work_history(self, data: StatsData) -> None:
        """Print minutes per calendar bucket, oldest first."""
        self.render_bar_chart(
            "Work history (minutes)",
            [(label, quantity.minutes) for label, quantity in data.history_items()],
        )

    def render_weekday_breakdown(self, data: StatsData) -> None:
        """Print minutes per weekday, Monday first."""
        self.render_bar_chart(
            "Weekly breakdown (minutes)",
            [(weekday_label(day), data.weekday[day].minutes) for day in sorted(data.weekday)],
        )

    def render_hourly_breakdown(self, data: StatsData) -> None:
        """Print minutes per hour of day, midnight first."""
        bars = [
            (hour_label(hour), data.hour_of_day[hour].minutes)
            for hour in sorted(data.hour_of_day)
        ]
        self.render_bar_chart("Hourly breakdown (minutes)", bars)

    def render_session_table(self, sessions: Sequence[Session]) -> None:
        """
        Print a table of sessions: index, start, end and status.

        Sessions still in progress have a blank end date.
        """
        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Start date", no_wrap=True)
        table.add_column("End date", no_wrap=True)
        table.add_column("Status")

        for index, session in enumerate(sessions, start=1):
            end_date = (
                session.end_time.strftime(Config.LIST_DATE_FORMAT) if session.end_time else ""
            )
            status = Text(session.status, style="green" if session.completed else "red")
            table.add_row(
                str(index),
                session.start_time.strftime(Config.LIST_DATE_FORMAT),
                end_date,
                status,
            )

        self.console.print(table)

    def render_info(self, message: str) -> None:
        """Print an informational notice."""
        self.console.print(Text.assemble((" INFO ", "bold black on cyan"), f" {message}"))

    def render_warning(self, message: str) -> None:
        """Print a warning without a trailing newline, ready for a prompt."""
        warning = Text.assemble((" WARNING ", "bold black on yellow"), f" {message}")
        self.console.print(warning, end="")


class ChartPresenter:
    """
    Presenter for chart images.

    Uses matplotlib for server-side chart rendering.
    Returns PNG images as bytes for the web dashboard.
    """

    def render_history_chart(self, data: StatsData) -> bytes:
        """
        Render the work history as a vertical bar chart PNG.

        Bars are ordered chronologically and labelled with the history
        labels of the current granularity.

        Args:
            data: Computed statistics.

        Returns:
            PNG image as bytes.

        Example:
            >>> png = ChartPresenter().render_history_chart(data)
            >>> png[:4]
            b'\\x89PNG'
        """
        import matplotlib

        matplotlib.use("Agg")  # Non-interactive backend
        import matplotlib.pyplot as plt

        items = data.history_items()
        labels = [label for label, _ in items]
        minutes = [quantity.minutes for _, quantity in items]

        fig, ax = plt.subplots(figsize=(8, 3))
        if items:
            ax.bar(range(len(labels)), minutes, color=HISTORY_BAR_COLOR)
            ax.set_xticks(range(len(labels)))
            ax.set_xticklabels(labels, rotation=45, ha="right")
        ax.set_ylabel("Minutes")
        ax.set_title("Work history")
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)

        buf = io.BytesIO()
        plt.tight_layout()
        plt.savefig(buf, format="png", dpi=100, bbox_inches="tight")
        plt.close(fig)
        buf.seek(0)
        return buf.read()
