"""
FileSystem abstraction for Focus Stats.

PURPOSE: Injectable file system interface for testability.
AI CONTEXT: Lets the session store run against an in-memory file system in
unit tests without temp directories.

DESIGN:
- Protocol defines the interface the session store needs
- RealFileSystem uses actual os operations
- MockFileSystem in tests/conftest.py stores data in memory for tests

USAGE:
    # Production
    store = SessionStore(filesystem=RealFileSystem())

    # Tests (MockFileSystem from conftest.py)
    store = SessionStore(storage_dir="/test", filesystem=mock_fs)
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    Protocol for the file operations used by the session store.

    All paths are strings. Implementations include RealFileSystem for
    production and MockFileSystem for testing.
    """

    def exists(self, path: str) -> bool:
        """
        Check if path exists (file or directory).

        Args:
            path: Path to check for existence.

        Returns:
            True if the path exists. Never raises.
        """
        ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create directory and all parent directories.

        Args:
            path: Path of directory to create.
            exist_ok: If True, don't raise if directory exists.

        Raises:
            OSError: If directory exists and exist_ok is False.
        """
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """
        Read file contents as text.

        Raises:
            FileNotFoundError: If file doesn't exist.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to file, overwriting existing content.

        Raises:
            PermissionError: If file is read-only.
        """
        ...

    def replace(self, src: str, dst: str) -> None:
        """
        Move src over dst, replacing dst if it exists.

        Used to publish a fully written temporary file in one step.

        Raises:
            FileNotFoundError: If src doesn't exist.
        """
        ...


class RealFileSystem:
    """
    Real file system implementation using the os module.

    This is the production implementation that performs actual I/O.
    """

    def exists(self, path: str) -> bool:  # pragma: no cover
        """Delegate to os.path.exists()."""
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:  # pragma: no cover
        """Delegate to os.makedirs()."""
        os.makedirs(path, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:  # pragma: no cover
        """Read the whole file in text mode."""
        with open(path, encoding=encoding) as f:
            return f.read()

    def write_text(
        self, path: str, content: str, encoding: str = "utf-8"
    ) -> None:  # pragma: no cover
        """Write the whole file in text mode."""
        with open(path, "w", encoding=encoding) as f:
            f.write(content)

    def replace(self, src: str, dst: str) -> None:  # pragma: no cover
        """
        Atomically move src over dst.

        Delegates to os.replace(), which is atomic when both paths are on
        the same filesystem.
        """
        os.replace(src, dst)
