"""
Session storage for Focus Stats.

PURPOSE: JSON file persistence of timer sessions with range queries.
AI CONTEXT: All session reads and deletions go through this module.

STORAGE STRUCTURE:
    ~/.focus_stats/
    └── sessions.json      # List: session records (see models.Session)

ERROR HANDLING STRATEGY:
- File not found: Treated as an empty store
- JSON corruption or I/O failure: Logged, then raised as StorageError
- Use after close(): StorageError
Statistics must never be computed from partial data, so nothing is
swallowed here.

RANGE SEMANTICS:
A session belongs to [start, end] when its start_time falls in the range.
None on either side leaves that side open.

USAGE:
    with SessionStore() as store:
        records = store.get_sessions(start, end)

    # Testing with MockFileSystem
    store = SessionStore(storage_dir="/test", filesystem=mock_fs)
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .config import Config
from .errors import SessionDecodeError, StorageError
from .filesystem import RealFileSystem
from .models import Session, parse_timestamp

if TYPE_CHECKING:
    from types import TracebackType

    from .filesystem import FileSystem

__all__ = ["SessionStore"]

logger = logging.getLogger(__name__)


class SessionStore:
    """
    JSON file session store.

    DESIGN PRINCIPLES:
    1. Fail loudly: I/O and corruption errors raise StorageError
    2. Ordered: Records are returned sorted by start_time
    3. Scoped: Usable as a context manager; close() is idempotent
    4. Testable: FileSystem can be injected for mocking

    THREAD SAFETY:
    Not thread-safe. One command invocation owns one store.
    """

    def __init__(
        self,
        storage_dir: str | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """
        Open the session store.

        Args:
            storage_dir: Custom storage path. Default: Config.get_storage_dir()
            filesystem: FileSystem implementation. Default: RealFileSystem
        """
        self.storage_dir = storage_dir or Config.get_storage_dir()
        self._fs: FileSystem = filesystem or RealFileSystem()
        self.sessions_file = os.path.join(self.storage_dir, Config.SESSIONS_FILE)
        self._closed = False
        logger.debug("Session store opened: %s", self.sessions_file)

    def __enter__(self) -> SessionStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def close(self) -> None:
        """Release the store. Calling it more than once is harmless."""
        if not self._closed:
            self._closed = True
            logger.debug("Session store closed: %s", self.sessions_file)

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("Session store is closed")

    # =========================================================================
    # FILE I/O
    # =========================================================================

    def _read_records(self) -> list[dict[str, Any]]:
        """
        Read every stored record.

        Returns:
            List of raw session records. Empty if the file doesn't exist.

        Raises:
            StorageError: On I/O failure or if the file isn't a JSON list.
        """
        if not self._fs.exists(self.sessions_file):
            return []

        try:
            content = self._fs.read_text(self.sessions_file)
        except OSError as e:
            logger.error(f"Error reading {self.sessions_file}: {e}")
            raise StorageError(f"Could not read {self.sessions_file}: {e}") from e

        try:
            records = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self.sessions_file}: {e}")
            raise StorageError(f"Invalid JSON in {self.sessions_file}: {e}") from e

        if not isinstance(records, list):
            logger.error(f"Unexpected content in {self.sessions_file}: {type(records).__name__}")
            raise StorageError(f"Expected a list of sessions in {self.sessions_file}")
        return records

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        """
        Write every record, replacing the file in one step.

        FORMATTING:
        - 2-space indent for readability
        - UTF-8 encoding

        Raises:
            StorageError: On I/O failure.
        """
        tmp_file = f"{self.sessions_file}.tmp"
        try:
            self._fs.makedirs(self.storage_dir, exist_ok=True)
            self._fs.write_text(tmp_file, json.dumps(records, indent=2))
            self._fs.replace(tmp_file, self.sessions_file)
        except OSError as e:
            logger.error(f"Error writing {self.sessions_file}: {e}")
            raise StorageError(f"Could not write {self.sessions_file}: {e}") from e

    @staticmethod
    def _record_start(record: dict[str, Any]) -> datetime:
        if not isinstance(record, dict) or "start_time" not in record:
            raise SessionDecodeError(f"Session record missing field 'start_time': {record!r}")
        return parse_timestamp(record["start_time"])

    @classmethod
    def _in_range(
        cls,
        record: dict[str, Any],
        start: datetime | None,
        end: datetime | None,
    ) -> bool:
        started = cls._record_start(record)
        if start is not None and started < start:
            return False
        return end is None or started <= end

    # =========================================================================
    # SESSION OPERATIONS
    # =========================================================================

    def get_sessions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """
        Get the raw records of sessions started within [start, end].

        Records are returned serialized; callers deserialize them with
        Session.from_dict() and abort on the first bad record.

        Args:
            start: Lower bound on start_time, or None.
            end: Upper bound on start_time, or None.

        Returns:
            Matching records sorted by start_time, earliest first.

        Raises:
            StorageError: If the store can't be read.
            SessionDecodeError: If a record has no valid start_time.

        Example:
            >>> store.get_sessions(datetime(2026, 3, 1), datetime(2026, 3, 1, 23, 59, 59))
            [{'start_time': '2026-03-01T09:00:00', ...}]
        """
        self._check_open()
        matching = [r for r in self._read_records() if self._in_range(r, start, end)]
        matching.sort(key=self._record_start)
        logger.debug("Fetched %d session(s) between %s and %s", len(matching), start, end)
        return matching

    def add_session(self, session: Session) -> None:
        """
        Append one session.

        Args:
            session: Session to persist.

        Raises:
            StorageError: If the store can't be read or written.
        """
        self._check_open()
        records = self._read_records()
        records.append(session.to_dict())
        self._write_records(records)

    def delete_sessions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """
        Permanently remove all sessions started within [start, end].

        WARNING: Destroys data. With both bounds None every session is removed.

        Args:
            start: Lower bound on start_time, or None.
            end: Upper bound on start_time, or None.

        Returns:
            Number of sessions removed.

        Raises:
            StorageError: If the store can't be read or written.
        """
        self._check_open()
        records = self._read_records()
        kept = [r for r in records if not self._in_range(r, start, end)]
        removed = len(records) - len(kept)
        if removed:
            self._write_records(kept)
            logger.info("Deleted %d session(s) from %s", removed, self.sessions_file)
        return removed
