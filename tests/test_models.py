"""Tests for models module."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from focus_stats.errors import SessionDecodeError
from focus_stats.models import Quantity, Session, TimelineEntry, parse_timestamp


class TestParseTimestamp:
    """Tests for ISO 8601 timestamp parsing."""

    def test_naive(self) -> None:
        """Naive timestamps are returned as they are."""
        assert parse_timestamp("2026-03-01T09:30:00") == datetime(2026, 3, 1, 9, 30)

    def test_z_suffix_converted_to_local(self) -> None:
        """UTC timestamps become naive local time."""
        expected = datetime(2026, 3, 1, 9, 30, tzinfo=UTC).astimezone().replace(tzinfo=None)
        assert parse_timestamp("2026-03-01T09:30:00Z") == expected

    def test_offset_converted_to_local(self) -> None:
        """Offsets other than UTC are honoured."""
        expected = datetime(2026, 3, 1, 8, 30, tzinfo=UTC).astimezone().replace(tzinfo=None)
        assert parse_timestamp("2026-03-01T09:30:00+01:00") == expected

    @pytest.mark.parametrize("value", ["yesterday", "", None, 1700000000])
    def test_invalid(self, value: object) -> None:
        """Non-ISO values raise SessionDecodeError."""
        with pytest.raises(SessionDecodeError):
            parse_timestamp(value)


class TestQuantity:
    """Tests for the Quantity accumulator."""

    def test_defaults_to_zero(self) -> None:
        """New quantities are empty."""
        assert Quantity().to_dict() == {"minutes": 0, "completed": 0, "abandoned": 0}


class TestTimelineEntry:
    """Tests for TimelineEntry."""

    def test_open_span(self) -> None:
        """A span without end_time is still running."""
        entry = TimelineEntry.from_dict({"start_time": "2026-03-01T09:00:00", "end_time": None})
        assert entry == TimelineEntry(datetime(2026, 3, 1, 9, 0), None)
        assert entry.to_dict() == {"start_time": "2026-03-01T09:00:00", "end_time": None}

    def test_missing_end_time(self) -> None:
        """A span with no end_time key is open."""
        entry = TimelineEntry.from_dict({"start_time": "2026-03-01T09:00:00"})
        assert entry.end_time is None

    def test_missing_start_time(self) -> None:
        """start_time is mandatory."""
        with pytest.raises(SessionDecodeError, match="start_time"):
            TimelineEntry.from_dict({"end_time": "2026-03-01T09:25:00"})

    def test_not_a_dict(self) -> None:
        """Spans must be objects."""
        with pytest.raises(SessionDecodeError):
            TimelineEntry.from_dict(["2026-03-01T09:00:00"])  # type: ignore[arg-type]


class TestSession:
    """Tests for Session serialization and status."""

    def _record(self, **overrides: object) -> dict[str, object]:
        record: dict[str, object] = {
            "name": "writing",
            "tags": ["deep-work"],
            "start_time": "2026-03-01T09:00:00",
            "end_time": "2026-03-01T09:25:00",
            "completed": True,
            "timeline": [
                {"start_time": "2026-03-01T09:00:00", "end_time": "2026-03-01T09:25:00"}
            ],
        }
        record.update(overrides)
        return record

    def test_from_dict(self) -> None:
        """All fields are restored."""
        session = Session.from_dict(self._record())

        assert session.name == "writing"
        assert session.tags == ["deep-work"]
        assert session.start_time == datetime(2026, 3, 1, 9, 0)
        assert session.end_time == datetime(2026, 3, 1, 9, 25)
        assert session.completed is True
        assert session.timeline == [
            TimelineEntry(datetime(2026, 3, 1, 9, 0), datetime(2026, 3, 1, 9, 25))
        ]
        assert session.is_finished
        assert session.status == "completed"

    def test_round_trip(self) -> None:
        """to_dict() output loads back into an equal session."""
        session = Session.from_dict(self._record())
        assert Session.from_dict(session.to_dict()) == session

    @pytest.mark.parametrize("end_time", [None, ""])
    def test_in_progress(self, end_time: str | None) -> None:
        """A missing or empty end_time means the session is still running."""
        session = Session.from_dict(self._record(end_time=end_time, completed=False))
        assert session.end_time is None
        assert not session.is_finished
        assert session.to_dict()["end_time"] is None

    def test_abandoned_status(self) -> None:
        """Finished but not completed is abandoned."""
        assert Session.from_dict(self._record(completed=False)).status == "abandoned"

    def test_minimal_record(self) -> None:
        """Only start_time is required."""
        session = Session.from_dict({"start_time": "2026-03-01T09:00:00"})
        assert session.timeline == []
        assert session.tags == []
        assert session.name == ""

    def test_missing_start_time(self) -> None:
        """start_time is mandatory."""
        record = self._record()
        del record["start_time"]
        with pytest.raises(SessionDecodeError, match="start_time"):
            Session.from_dict(record)

    def test_bad_timeline(self) -> None:
        """timeline must be a list."""
        with pytest.raises(SessionDecodeError, match="timeline"):
            Session.from_dict(self._record(timeline={"start_time": "x"}))

    def test_bad_timestamp(self) -> None:
        """Invalid timestamps anywhere in the record are reported."""
        with pytest.raises(SessionDecodeError):
            Session.from_dict(self._record(end_time="later"))

    def test_not_a_dict(self) -> None:
        """Records must be objects."""
        with pytest.raises(SessionDecodeError):
            Session.from_dict("2026-03-01")  # type: ignore[arg-type]

    def test_running_session_round_trip(self) -> None:
        """A session in progress keeps its open last span."""
        record = self._record(
            end_time=None,
            completed=False,
            timeline=[{"start_time": "2026-03-01T09:00:00", "end_time": None}],
        )
        session = Session.from_dict(record)

        assert session.timeline == [TimelineEntry(datetime(2026, 3, 1, 9, 0), None)]
        assert Session.from_dict(session.to_dict()) == session

    @pytest.mark.parametrize("completed", ["false", "true", 0, 1, None])
    def test_completed_must_be_bool(self, completed: object) -> None:
        """completed is not coerced from strings or numbers."""
        with pytest.raises(SessionDecodeError, match="completed"):
            Session.from_dict(self._record(completed=completed))

    @pytest.mark.parametrize("tags", ["deep-work", ["deep-work", 3], {"deep-work": True}])
    def test_tags_must_be_list_of_strings(self, tags: object) -> None:
        """tags is not split from a string or built from other types."""
        with pytest.raises(SessionDecodeError, match="tags"):
            Session.from_dict(self._record(tags=tags))

    @pytest.mark.parametrize("name", [42, ["writing"]])
    def test_name_must_be_string(self, name: object) -> None:
        """name is not converted with str()."""
        with pytest.raises(SessionDecodeError, match="name"):
            Session.from_dict(self._record(name=name))
