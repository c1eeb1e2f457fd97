"""
Data models for Focus Stats.

PURPOSE: Type-safe dataclasses representing core domain entities.
AI CONTEXT: These models define the schema of stored sessions and of the
accumulators the statistics engine fills in.

MODEL HIERARCHY:
- Session: One timer run (has many TimelineEntry spans)
- TimelineEntry: Contiguous span during which a Session was running
- Quantity: Minutes/completed/abandoned accumulator for one bucket

TIME HANDLING:
All datetimes are naive and expressed in local time. Stored timestamps
carrying a UTC offset are converted to local time when loaded.

SERIALIZATION:
Session and TimelineEntry have to_dict() for JSON persistence and
from_dict() for loading. Timestamps use ISO 8601 format.

USAGE:
    session = Session.from_dict(record)
    if session.is_finished:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .errors import SessionDecodeError

__all__ = [
    "Quantity",
    "Session",
    "TimelineEntry",
    "parse_timestamp",
]


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp into a naive local datetime.

    Accepts both 'Z' suffix and '+00:00' offsets. Aware values are converted
    to the local timezone before the tzinfo is dropped, so every datetime the
    statistics engine sees shares the same clock.

    Args:
        value: ISO 8601 string, e.g. '2026-03-01T09:30:00+01:00'.

    Returns:
        Naive datetime in local time.

    Raises:
        SessionDecodeError: If value is not a string or not ISO 8601.

    Example:
        >>> parse_timestamp("2026-03-01T09:30:00")
        datetime.datetime(2026, 3, 1, 9, 30)
    """
    if not isinstance(value, str):
        raise SessionDecodeError(f"Expected ISO 8601 timestamp, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise SessionDecodeError(f"Invalid timestamp {value!r}: {e}") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass
class Quantity:
    """
    Accumulator for one aggregation bucket.

    Always non-negative. Created zero-valued and mutated only by the
    statistics engine.
    """

    minutes: int = 0
    completed: int = 0
    abandoned: int = 0

    def to_dict(self) -> dict[str, int]:
        """Serialize to a JSON-compatible dict."""
        return {
            "minutes": self.minutes,
            "completed": self.completed,
            "abandoned": self.abandoned,
        }


@dataclass
class TimelineEntry:
    """
    Contiguous span during which a session was actively running.

    The last span of a session that is still running has no end_time.
    """

    start_time: datetime
    end_time: datetime | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Serialize to a JSON-compatible dict."""
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimelineEntry:
        """
        Deserialize a timeline span.

        A missing, null or empty end_time leaves the span open.

        Raises:
            SessionDecodeError: If start_time is missing or a timestamp is invalid.
        """
        if not isinstance(data, dict):
            raise SessionDecodeError(f"Timeline entry must be an object, got {data!r}")
        if "start_time" not in data:
            raise SessionDecodeError("Timeline entry missing field 'start_time'")

        end_raw = data.get("end_time")
        return cls(
            start_time=parse_timestamp(data["start_time"]),
            end_time=parse_timestamp(end_raw) if end_raw else None,
        )


@dataclass
class Session:
    """
    A single timer session.

    LIFECYCLE:
    1. Started by the timer; start_time set, end_time None
    2. Possibly paused and resumed; each running span is a TimelineEntry
    3. Finished: end_time set, completed tells whether it ran to the end
       or was abandoned

    Sessions are owned by the session store and read-only to the
    statistics engine.
    """

    start_time: datetime
    end_time: datetime | None = None
    completed: bool = False
    timeline: list[TimelineEntry] = field(default_factory=list)
    name: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        """
        Whether the session has ended.

        Business context: Sessions still in progress have no end time and
        are left out of every statistic until they finish.

        Returns:
            True if end_time is set.

        Example:
            >>> Session(start_time=datetime(2026, 1, 1, 9)).is_finished
            False
        """
        return self.end_time is not None

    @property
    def status(self) -> str:
        """'completed' or 'abandoned'."""
        return "completed" if self.completed else "abandoned"

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize session to dictionary for JSON storage.

        Returns:
            Dict with ISO 8601 timestamps; end_time is None for sessions
            still in progress.

        Example:
            >>> session = Session(start_time=datetime(2026, 1, 1, 9))
            >>> session.to_dict()["end_time"] is None
            True
        """
        return {
            "name": self.name,
            "tags": list(self.tags),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "completed": self.completed,
            "timeline": [entry.to_dict() for entry in self.timeline],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        """
        Deserialize session from dictionary.

        Reconstructs a Session from a stored record. An empty or missing
        end_time means the session is still in progress.

        Business context: A single corrupt record aborts the whole fetch,
        so every problem is reported as SessionDecodeError rather than a
        KeyError or ValueError leaking from deep inside the parser.

        Args:
            data: Dict as produced by to_dict().

        Returns:
            Session instance.

        Raises:
            SessionDecodeError: If the record is not a dict, start_time is
                missing, a timestamp is invalid, or completed, name or tags
                have the wrong type.

        Example:
            >>> record = {"start_time": "2026-01-01T09:00:00", "completed": True}
            >>> Session.from_dict(record).completed
            True
        """
        if not isinstance(data, dict):
            raise SessionDecodeError(f"Session record must be an object, got {data!r}")
        if "start_time" not in data:
            raise SessionDecodeError("Session record missing field 'start_time'")

        end_raw = data.get("end_time")
        timeline_raw = data.get("timeline") or []
        if not isinstance(timeline_raw, list):
            raise SessionDecodeError("Session timeline must be a list")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise SessionDecodeError(f"Session 'completed' must be a boolean, got {completed!r}")

        name = data.get("name") or ""
        if not isinstance(name, str):
            raise SessionDecodeError(f"Session 'name' must be a string, got {name!r}")

        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise SessionDecodeError(f"Session 'tags' must be a list of strings, got {tags!r}")

        return cls(
            start_time=parse_timestamp(data["start_time"]),
            end_time=parse_timestamp(end_raw) if end_raw else None,
            completed=completed,
            timeline=[TimelineEntry.from_dict(entry) for entry in timeline_raw],
            name=name,
            tags=list(tags),
        )
