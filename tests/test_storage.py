"""Tests for storage module."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING

import pytest
from conftest import SESSIONS_PATH, STORAGE_DIR, make_session, write_sessions

from focus_stats.config import Config
from focus_stats.errors import SessionDecodeError, StorageError
from focus_stats.storage import SessionStore

if TYPE_CHECKING:
    from conftest import MockFileSystem


def _record(start: str, completed: bool = True) -> dict[str, object]:
    return {"start_time": start, "end_time": start, "completed": completed, "timeline": []}


class TestSessionStoreInit:
    """Tests for SessionStore construction."""

    def test_uses_configured_directory(self, mock_fs: MockFileSystem) -> None:
        """Without storage_dir the Config directory is used."""
        Config.set_test_overrides(storage_dir="/configured")
        store = SessionStore(filesystem=mock_fs)
        assert store.sessions_file == f"/configured/{Config.SESSIONS_FILE}"

    def test_env_var(self, mock_fs: MockFileSystem, monkeypatch: pytest.MonkeyPatch) -> None:
        """FOCUS_STATS_DIR points the store elsewhere."""
        monkeypatch.setenv("FOCUS_STATS_DIR", "/from-env")
        store = SessionStore(filesystem=mock_fs)
        assert store.storage_dir == "/from-env"

    def test_nothing_written_on_open(self, mock_fs: MockFileSystem) -> None:
        """Opening a store has no side effects."""
        SessionStore(storage_dir=STORAGE_DIR, filesystem=mock_fs)
        assert mock_fs.list_files() == []


class TestSessionStoreLifecycle:
    """Tests for close() and the context manager protocol."""

    def test_context_manager_closes(self, mock_fs: MockFileSystem) -> None:
        """Leaving the with block closes the store."""
        with SessionStore(storage_dir=STORAGE_DIR, filesystem=mock_fs) as store:
            assert not store.closed
        assert store.closed

    def test_close_is_idempotent(self, store: SessionStore) -> None:
        """Closing twice is harmless."""
        store.close()
        store.close()
        assert store.closed

    @pytest.mark.parametrize("operation", ["get_sessions", "delete_sessions"])
    def test_use_after_close(self, store: SessionStore, operation: str) -> None:
        """Operations on a closed store raise StorageError."""
        store.close()
        with pytest.raises(StorageError, match="closed"):
            getattr(store, operation)()


class TestGetSessions:
    """Tests for range queries.

    Categories:
    1. Empty and missing files
    2. Bounds and ordering
    3. Corrupt data
    """

    def test_missing_file(self, store: SessionStore) -> None:
        """A store that was never written is empty."""
        assert store.get_sessions() == []

    def test_missing_file_is_not_read(
        self, store: SessionStore, mock_fs: MockFileSystem
    ) -> None:
        """A missing file is detected before any read is attempted."""
        mock_fs.set_unreadable(SESSIONS_PATH)
        assert store.get_sessions() == []

    def test_empty_file(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """An empty sessions file is an empty store."""
        mock_fs.set_file(SESSIONS_PATH, "")
        assert store.get_sessions() == []

    def test_sorted_by_start(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Records come back earliest first."""
        write_sessions(
            mock_fs,
            [_record("2026-03-03T09:00:00"), _record("2026-03-01T09:00:00")],
        )
        starts = [r["start_time"] for r in store.get_sessions()]
        assert starts == ["2026-03-01T09:00:00", "2026-03-03T09:00:00"]

    def test_bounds_are_inclusive(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Sessions starting exactly on either bound are included."""
        write_sessions(
            mock_fs,
            [
                _record("2026-03-01T00:00:00"),
                _record("2026-03-01T23:59:59"),
                _record("2026-03-02T00:00:00"),
                _record("2026-02-28T23:59:59"),
            ],
        )

        result = store.get_sessions(datetime(2026, 3, 1), datetime(2026, 3, 1, 23, 59, 59))

        assert [r["start_time"] for r in result] == [
            "2026-03-01T00:00:00",
            "2026-03-01T23:59:59",
        ]

    def test_open_bounds(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """A None bound leaves that side unrestricted."""
        write_sessions(mock_fs, [_record("2020-01-01T09:00:00"), _record("2030-01-01T09:00:00")])
        assert len(store.get_sessions(None, datetime(2026, 1, 1))) == 1
        assert len(store.get_sessions(datetime(2026, 1, 1), None)) == 1
        assert len(store.get_sessions()) == 2

    def test_invalid_json(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Corrupt JSON is reported, not treated as empty."""
        mock_fs.set_file(SESSIONS_PATH, "{not json")
        with pytest.raises(StorageError, match="Invalid JSON"):
            store.get_sessions()

    def test_not_a_list(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """The file must hold a list of records."""
        mock_fs.set_file(SESSIONS_PATH, json.dumps({"sessions": []}))
        with pytest.raises(StorageError):
            store.get_sessions()

    def test_read_failure(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """I/O errors surface as StorageError."""
        mock_fs.set_file(SESSIONS_PATH, "[]")
        mock_fs.set_unreadable(SESSIONS_PATH)
        with pytest.raises(StorageError, match="Could not read"):
            store.get_sessions()

    def test_record_without_start(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """A record the range filter can't place aborts the query."""
        write_sessions(mock_fs, [{"end_time": "2026-03-01T09:00:00"}])
        with pytest.raises(SessionDecodeError):
            store.get_sessions()


class TestAddSession:
    """Tests for add_session()."""

    def test_appends(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Sessions are appended and readable back."""
        store.add_session(make_session(datetime(2026, 3, 1, 9, 0)))
        store.add_session(make_session(datetime(2026, 3, 2, 9, 0), completed=False))

        records = json.loads(mock_fs.get_file(SESSIONS_PATH) or "[]")
        assert [r["completed"] for r in records] == [True, False]
        assert len(store.get_sessions()) == 2

    def test_no_temporary_file_left(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """The temporary file is moved over the sessions file."""
        store.add_session(make_session(datetime(2026, 3, 1, 9, 0)))
        assert mock_fs.list_files() == [SESSIONS_PATH]

    def test_write_failure(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """I/O errors while writing surface as StorageError."""
        mock_fs.set_read_only(f"{SESSIONS_PATH}.tmp")
        with pytest.raises(StorageError, match="Could not write"):
            store.add_session(make_session(datetime(2026, 3, 1, 9, 0)))


class TestDeleteSessions:
    """Tests for delete_sessions()."""

    def test_deletes_range(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Only sessions in range are removed."""
        write_sessions(
            mock_fs,
            [
                _record("2026-03-01T09:00:00"),
                _record("2026-03-02T09:00:00"),
                _record("2026-03-03T09:00:00"),
            ],
        )

        removed = store.delete_sessions(datetime(2026, 3, 2), datetime(2026, 3, 2, 23, 59, 59))

        assert removed == 1
        remaining = [r["start_time"] for r in store.get_sessions()]
        assert remaining == ["2026-03-01T09:00:00", "2026-03-03T09:00:00"]

    def test_delete_all(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """Open bounds remove everything."""
        write_sessions(mock_fs, [_record("2026-03-01T09:00:00"), _record("2026-03-02T09:00:00")])
        assert store.delete_sessions() == 2
        assert store.get_sessions() == []

    def test_nothing_matches(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """The file is not rewritten when nothing is removed."""
        original = json.dumps([_record("2026-03-01T09:00:00")])
        mock_fs.set_file(SESSIONS_PATH, original)

        assert store.delete_sessions(datetime(2027, 1, 1), None) == 0
        assert mock_fs.get_file(SESSIONS_PATH) == original
