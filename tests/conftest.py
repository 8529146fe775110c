"""
Pytest configuration and shared fixtures for Zone01 Profile tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- GraphQLBackend: Fake sign-in and GraphQL endpoints on httpx.MockTransport
- Shared fixtures available to all test modules
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from zone01_profile.config import Config
from zone01_profile.session import SessionStore

STORAGE_DIR = "/home/student/.zone01_profile"
TEST_TOKEN = "header.payload.signature"


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using dictionaries:
    - _files: dict mapping path -> content (str)
    - _dirs: set of directory paths
    - _modes: dict mapping path -> permission mode (int)

    A file whose mode lacks the owner write bit rejects writes with
    PermissionError, which is how tests simulate an unwritable session file.
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
        self._modes: dict[str, int] = {}
        self._read_only: set[str] = set()

    def exists(self, path: str) -> bool:
        """
        Check if path exists in mock filesystem.

        Args:
            path: Absolute path to check.

        Returns:
            True if path is a stored file or directory.
        """
        return path in self._files or path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create mock directory and its parents.

        Args:
            path: Absolute path of directory to create.
            exist_ok: If True, don't raise if directory exists.

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
            FileNotFoundError: If path is not a stored file.
        """
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        return self._files[path]

    def write_text(self, path: str, content: str, _encoding: str = "utf-8") -> None:
        """
        Write text to mock file, creating parent directories.

        Raises:
            PermissionError: If path is read-only (see chmod).
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")

        parent = "/".join(path.rstrip("/").split("/")[:-1])
        if parent and parent not in self._dirs:
            self.makedirs(parent, exist_ok=True)

        self._files[path] = content

    def chmod(self, path: str, mode: int) -> None:
        """
        Record permission mode; no owner write bit makes the file read-only.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        if path not in self._files and path not in self._dirs:
            raise FileNotFoundError(f"No such file or directory: {path}")

        self._modes[path] = mode
        if mode & 0o200 == 0:
            self._read_only.add(path)
        else:
            self._read_only.discard(path)

    def remove(self, path: str) -> None:
        """
        Remove a mock file.

        Raises:
            FileNotFoundError: If path is not a stored file.
            PermissionError: If path is read-only.
        """
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")
        del self._files[path]
        self._modes.pop(path, None)

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def get_file(self, path: str) -> str | None:
        """Get file content, or None if the file doesn't exist."""
        return self._files.get(path)

    def set_file(self, path: str, content: str) -> None:
        """Set file content directly (test setup)."""
        self.write_text(path, content)

    def get_mode(self, path: str) -> int | None:
        """Get the recorded permission mode of a path."""
        return self._modes.get(path)

    def list_files(self) -> list[str]:
        """List all file paths, sorted."""
        return sorted(self._files.keys())


class GraphQLBackend:
    """
    Fake Zone01 endpoints served through httpx.MockTransport.

    GraphQL responses are chosen by operation name (the word after
    'query' in the document). Every request is recorded for assertions.

    Attributes:
        payloads: Operation name -> 'data' payload.
        errors: If set, returned as the 'errors' list for every query.
        status_code: HTTP status for GraphQL responses.
        auth_status: HTTP status for the sign-in endpoint.
        auth_body: Raw body returned by the sign-in endpoint.
        fail_with: If set, raised from the transport instead of responding.
        requests: Every request received, in order.
    """

    def __init__(self, payloads: dict[str, Any]) -> None:
        self.payloads = payloads
        self.errors: list[dict[str, Any]] | None = None
        self.status_code = 200
        self.auth_status = 200
        self.auth_body = json.dumps(TEST_TOKEN)
        self.fail_with: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        """Answer one request as the real endpoints would."""
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        if str(request.url) == Config.AUTH_URL:
            return httpx.Response(self.auth_status, text=self.auth_body)

        document = json.loads(request.content)["query"]
        operation = document.split()[1]
        if self.errors:
            return httpx.Response(self.status_code, json={"errors": self.errors})
        return httpx.Response(
            self.status_code, json={"data": self.payloads.get(operation, {})}
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        """New AsyncClient routed to this backend."""
        return httpx.AsyncClient(transport=self.transport)

    def operations(self) -> list[str]:
        """Operation names of the GraphQL requests received so far."""
        return [
            json.loads(r.content)["query"].split()[1]
            for r in self.requests
            if str(r.url) == Config.GRAPHQL_URL
        ]


def _aggregate(amount: int) -> dict[str, Any]:
    return {"aggregate": {"sum": {"amount": amount}}}


@pytest.fixture
def profile_payloads() -> dict[str, Any]:
    """
    GraphQL 'data' payloads for a typical student.

    Level 12 with 200 XP in total. The history sums to 230 XP over
    January (150) and February (80) 2024, so the cumulative series is
    clamped to 150 then 200. Audits: 1.2 MB done, 900 kB received.

    Returns:
        Operation name -> data payload.
    """
    return {
        "GetUserLevel": {
            "user": [{"events": [{"level": 12}], "transactions_aggregate": _aggregate(200)}]
        },
        "GetUserData": {
            "user": [
                {
                    "login": "jdoe",
                    "attrs": {"firstName": "John", "lastName": "Doe"},
                    "transactions_aggregate": _aggregate(200),
                }
            ]
        },
        "GetMonthlyXP": {
            "transaction": [
                {"amount": 100, "createdAt": "2024-01-15T10:00:00Z"},
                {"amount": 50, "createdAt": "2024-01-20T10:00:00Z"},
                {"amount": 80, "createdAt": "2024-02-10T10:00:00Z"},
            ]
        },
        "GetAuditRatio": {
            "user": [{"XPup": _aggregate(1_200_000), "XPdown": _aggregate(900_000)}]
        },
        "GetSkills": {
            "user": [
                {
                    "progresses": [
                        {"object": {"name": "go"}, "grade": 1},
                        {"object": {"name": "js"}, "grade": 1.5},
                    ]
                }
            ]
        },
    }


@pytest.fixture
def backend(profile_payloads: dict[str, Any]) -> GraphQLBackend:
    """Fake Zone01 backend answering with profile_payloads."""
    return GraphQLBackend(profile_payloads)


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """Fresh in-memory filesystem for each test."""
    return MockFileSystem()


@pytest.fixture
def store(mock_fs: MockFileSystem) -> SessionStore:
    """Empty session store on the mock filesystem."""
    return SessionStore(storage_dir=STORAGE_DIR, filesystem=mock_fs)


@pytest.fixture
def signed_in_store(store: SessionStore) -> SessionStore:
    """Session store already holding TEST_TOKEN."""
    store.set(TEST_TOKEN)
    return store


@pytest.fixture
def client_factory(backend: GraphQLBackend) -> Callable[[], httpx.AsyncClient]:
    """Factory of AsyncClients bound to the fake backend."""
    return backend.client
