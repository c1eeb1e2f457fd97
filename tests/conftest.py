"""
Pytest configuration and shared fixtures for Focus Stats tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- Session builders for concise test data
- Shared fixtures available to all test modules
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from datetime import datetime, timedelta
from typing import Any

import pytest

from focus_stats.config import Config
from focus_stats.models import Session, TimelineEntry
from focus_stats.storage import SessionStore

STORAGE_DIR = "/test/focus"
SESSIONS_PATH = f"{STORAGE_DIR}/{Config.SESSIONS_FILE}"


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using dictionaries:
    - _files: dict mapping path -> content (str)
    - _dirs: set of directory paths
    - _read_only: paths whose writes fail with PermissionError
    - _unreadable: paths whose reads fail with PermissionError

    FEATURES:
    - No actual I/O operations
    - Easy to inspect state
    - Failure injection for storage error paths
    """

    def __init__(self) -> None:
        """
        Initialize empty mock file system.

        Example:
            >>> fs = MockFileSystem()
            >>> fs.list_files()
            []
        """
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()
        self._read_only: set[str] = set()
        self._unreadable: set[str] = set()

    def exists(self, path: str) -> bool:
        """Check if path is a mock file or directory."""
        return path in self._files or path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create mock directory and parent directories.

        Raises:
            OSError: If directory exists and exist_ok is False,
                or if path is an existing file.
        """
        if path in self._dirs:
            if not exist_ok:
                raise OSError(f"Directory exists: {path}")
            return

        if path in self._files:
            raise OSError(f"Path is a file, not directory: {path}")

        parts = path.rstrip("/").split("/")
        for i in range(1, len(parts) + 1):
            parent = "/".join(parts[:i])
            if parent:
                self._dirs.add(parent)

    def read_text(self, path: str, _encoding: str = "utf-8") -> str:
        """
        Read mock file contents.

        Raises:
            FileNotFoundError: If path not in _files.
            PermissionError: If path was marked unreadable.
        """
        if path in self._unreadable:
            raise PermissionError(f"Permission denied: {path}")
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        return self._files[path]

    def write_text(self, path: str, content: str, _encoding: str = "utf-8") -> None:
        """
        Write text to mock file, creating parent directories.

        Raises:
            PermissionError: If path is in _read_only set.
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")

        parent = "/".join(path.rstrip("/").split("/")[:-1])
        if parent and parent not in self._dirs:
            self.makedirs(parent, exist_ok=True)

        self._files[path] = content

    def replace(self, src: str, dst: str) -> None:
        """
        Move a mock file over another.

        Raises:
            FileNotFoundError: If src doesn't exist.
        """
        if src not in self._files:
            raise FileNotFoundError(f"No such file: {src}")
        self._files[dst] = self._files.pop(src)

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def get_file(self, path: str) -> str | None:
        """Get file content, or None if the file doesn't exist."""
        return self._files.get(path)

    def set_file(self, path: str, content: str) -> None:
        """Set file content directly, bypassing permission checks."""
        self._files[path] = content

    def set_read_only(self, path: str) -> None:
        """Make writes to path fail with PermissionError."""
        self._read_only.add(path)

    def set_unreadable(self, path: str) -> None:
        """Make reads of path fail with PermissionError."""
        self._unreadable.add(path)

    def list_files(self) -> list[str]:
        """List all file paths, sorted."""
        return sorted(self._files)


def make_session(
    start: datetime,
    minutes: float = 25,
    *,
    completed: bool = True,
    finished: bool = True,
    spans: list[tuple[datetime, datetime]] | None = None,
) -> Session:
    """
    Build a session that ran without pauses for the given minutes.

    Args:
        start: Session start.
        minutes: Running time when spans is not given.
        completed: Completed (True) or abandoned (False).
        finished: False leaves end_time unset and the last span open
            (session in progress).
        spans: Explicit running spans; overrides minutes.

    Returns:
        Session with a matching timeline.
    """
    if spans is None:
        spans = [(start, start + timedelta(minutes=minutes))]
    timeline = [TimelineEntry(span_start, span_end) for span_start, span_end in spans]
    if not finished:
        timeline[-1] = TimelineEntry(spans[-1][0], None)
    return Session(
        start_time=start,
        end_time=spans[-1][1] if finished else None,
        completed=completed,
        timeline=timeline,
    )


def write_sessions(fs: MockFileSystem, records: list[Any]) -> None:
    """Store raw records as the sessions file of the test store."""
    fs.set_file(SESSIONS_PATH, json.dumps(records))


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """
    Provide a fresh MockFileSystem for each test.

    Example:
        >>> def test_storage(mock_fs):
        ...     store = SessionStore(storage_dir="/test", filesystem=mock_fs)
    """
    return MockFileSystem()


@pytest.fixture
def store(mock_fs: MockFileSystem) -> Iterator[SessionStore]:
    """Provide a SessionStore backed by mock_fs, closed after the test."""
    session_store = SessionStore(storage_dir=STORAGE_DIR, filesystem=mock_fs)
    yield session_store
    session_store.close()


@pytest.fixture(autouse=True)
def reset_config() -> Iterator[None]:
    """Clear Config test overrides after every test."""
    yield
    Config.reset_test_overrides()
