"""
Exception hierarchy for Focus Stats.

PURPOSE: One root exception so the CLI and web layer can report any
failure of a command verbatim.

HIERARCHY:
    FocusStatsError
    ├── ValidationError          # Bad user input, never retried
    │   ├── InvalidDateFormat
    │   ├── InvalidDateRange
    │   └── InvalidPeriodKeyword
    ├── StorageError             # Session store I/O failure
    └── SessionDecodeError       # Stored record could not be deserialized
"""

from __future__ import annotations

__all__ = [
    "FocusStatsError",
    "ValidationError",
    "InvalidDateFormat",
    "InvalidDateRange",
    "InvalidPeriodKeyword",
    "StorageError",
    "SessionDecodeError",
]


class FocusStatsError(Exception):
    """General focus-stats error."""


class ValidationError(FocusStatsError):
    """Invalid command line input."""


class InvalidDateFormat(ValidationError):
    """A start or end option does not match an accepted date format."""

    def __init__(self, value: str = "") -> None:
        self.value = value
        super().__init__(
            "The specified date format must be: YYYY-MM-DD or YYYY-MM-DD HH:MM:SS PM"
        )


class InvalidDateRange(ValidationError):
    """The resolved end of the window precedes its start."""

    def __init__(self) -> None:
        super().__init__("The end date must not be earlier than the start date")


class InvalidPeriodKeyword(ValidationError):
    """The period keyword is not one of the supported periods."""

    def __init__(self, period: str, valid: tuple[str, ...] | list[str]) -> None:
        self.period = period
        super().__init__(f"Period must be one of: {', '.join(valid)}")


class StorageError(FocusStatsError):
    """Session store could not be read or written."""


class SessionDecodeError(FocusStatsError):
    """A stored session record is malformed."""
