"""
Session store for Zone01 Profile Dashboard.

PURPOSE: Hold at most one credential between runs.

STORAGE STRUCTURE:
    .zone01_profile/
    └── session.json   # {"gql_token": "<credential>"}

LIFECYCLE:
- set: after a successful sign-in
- clear: on logout, or by the query gateway when the backend reports
  an expired credential

ERROR HANDLING STRATEGY:
- File not found: No credential
- JSON corruption: Log error, no credential
- Write failure: Log error, report False to the caller

USAGE:
    store = SessionStore()
    store.set({"token": "eyJhbGciOi..."})
    store.get()   # 'eyJhbGciOi...'
    store.clear()
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .config import Config
from .filesystem import RealFileSystem

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["SessionStore", "normalize_credential"]

logger = logging.getLogger(__name__)

_CREDENTIAL_FILE_MODE = 0o600


def normalize_credential(raw: Any) -> str:
    """
    Extract the bare credential string from a sign-in result.

    The authentication endpoint answers either with the bare token
    (a JSON string) or with an object wrapping it under 'token'. Both
    shapes are reduced to the token text.

    Args:
        raw: Token string, JSON-quoted token string, or mapping with a
            'token' field.

    Returns:
        The credential string with surrounding whitespace removed.

    Raises:
        ValueError: If no non-empty credential can be extracted.

    Example:
        >>> normalize_credential({"token": "abc"})
        'abc'
        >>> normalize_credential('"abc"')
        'abc'
    """
    if isinstance(raw, Mapping):
        raw = raw.get("token")

    if isinstance(raw, str):
        token = raw.strip()
        if token.startswith('"') and token.endswith('"'):
            try:
                token = str(json.loads(token)).strip()
            except json.JSONDecodeError:
                token = token.strip('"')
        if token:
            return token

    raise ValueError("Sign-in response did not contain a credential")


class SessionStore:
    """
    Single-credential store backed by one JSON file.

    DESIGN PRINCIPLES:
    1. One key only (Config.TOKEN_KEY); presence or absence is the only state
    2. No expiry tracking: expiry is learned from a failed query
    3. Fail-safe reads: unreadable storage means "no credential"
    4. Testable: FileSystem can be injected for mocking

    THREAD SAFETY:
    Not thread-safe. The dashboard runs on a single event loop.
    """

    def __init__(
        self,
        storage_dir: str | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """
        Initialize the store.

        The storage directory is created lazily on the first write so a
        read-only check (`get`) never touches the disk layout.

        Args:
            storage_dir: Custom storage path. Default: Config.SESSION_DIR
            filesystem: FileSystem implementation. Default: RealFileSystem
        """
        self.storage_dir = storage_dir or Config.SESSION_DIR
        self._fs: FileSystem = filesystem or RealFileSystem()
        self.session_file = Config.session_path(self.storage_dir)

    def _read(self) -> dict[str, Any]:
        """
        Read the session document.

        Returns:
            Parsed document, or an empty dict when missing or unreadable.
        """
        try:
            content = self._fs.read_text(self.session_file)
            data = json.loads(content)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self.session_file}: {e}")
            return {}
        except OSError as e:
            logger.error(f"Error reading {self.session_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Unexpected session document in {self.session_file}")
            return {}
        return data

    def get(self) -> str | None:
        """
        Get the stored credential.

        Returns:
            Credential string, or None when absent.
        """
        token = self._read().get(Config.TOKEN_KEY)
        if isinstance(token, str) and token:
            return token
        return None

    @property
    def has_credential(self) -> bool:
        """True when a credential is stored."""
        return self.get() is not None

    def set(self, raw: str | Mapping[str, Any]) -> bool:
        """
        Store a credential, replacing any previous one.

        Business context: Called right after sign-in. The raw sign-in
        result is accepted as-is and normalized here so callers never
        need to know which shape the endpoint returned.

        Args:
            raw: Bare credential or sign-in response wrapping it under
                'token'.

        Returns:
            True if the credential was persisted.

        Raises:
            ValueError: If raw holds no credential.

        Example:
            >>> store = SessionStore(storage_dir="/tmp/z01", filesystem=fs)
            >>> store.set({"token": "abc"})
            True
            >>> store.get()
            'abc'
        """
        token = normalize_credential(raw)
        try:
            self._fs.makedirs(self.storage_dir, exist_ok=True)
            self._fs.write_text(
                self.session_file,
                json.dumps({Config.TOKEN_KEY: token}, indent=2),
            )
            self._fs.chmod(self.session_file, _CREDENTIAL_FILE_MODE)
        except OSError as e:
            logger.error(f"Error writing {self.session_file}: {e}")
            return False

        logger.info("Credential stored")
        return True

    def clear(self) -> bool:
        """
        Remove the stored credential.

        Idempotent: clearing an empty store succeeds.

        Returns:
            True if no credential remains on disk.
        """
        if not self._fs.exists(self.session_file):
            return True
        try:
            self._fs.remove(self.session_file)
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.error(f"Error removing {self.session_file}: {e}")
            return False

        logger.info("Credential cleared")
        return True
