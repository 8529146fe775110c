"""
File access seam for the Zone01 profile session store.

PURPOSE: The credential file is the only thing written to disk. SessionStore
takes a FileSystem so tests can swap in the in-memory MockFileSystem from
tests/conftest.py.

USAGE:
    store = SessionStore()                                   # real disk
    store = SessionStore(storage_dir="/s", filesystem=mock_fs)  # tests
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    The six operations SessionStore performs on its credential file.

    Implementations raise the usual OSError family: FileNotFoundError when
    reading or removing a missing file, PermissionError when the file is
    not writable.
    """

    def exists(self, path: str) -> bool: ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None: ...

    def chmod(self, path: str, mode: int) -> None:
        """Set permission bits; the credential file gets 0o600."""
        ...

    def remove(self, path: str) -> None: ...


class RealFileSystem:
    """FileSystem backed by os and open(); used outside tests."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        os.makedirs(path, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        with open(path, encoding=encoding) as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        with open(path, "w", encoding=encoding) as f:
            f.write(content)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def remove(self, path: str) -> None:
        os.remove(path)
