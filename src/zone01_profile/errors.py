"""
Error taxonomy for Zone01 Profile Dashboard.

PURPOSE: Typed failures raised by the auth client, gateway and accessors.

HIERARCHY:
    ProfileError
    ├── Unauthenticated        no credential stored
    ├── InvalidRequest         query text is not a query/mutation
    ├── InvalidCredentials     sign-in rejected
    ├── RemoteError            endpoint reported an error
    │   └── CredentialExpired  credential rejected as expired (session cleared)
    └── NetworkFailure         transport-level failure

PROPAGATION:
Accessors and the gateway never catch these. Web routes and CLI commands
catch ProfileError once per user action and show the login view (or exit
non-zero).
"""

from __future__ import annotations

__all__ = [
    "ProfileError",
    "Unauthenticated",
    "InvalidRequest",
    "InvalidCredentials",
    "RemoteError",
    "CredentialExpired",
    "NetworkFailure",
]


class ProfileError(Exception):
    """Base class for all dashboard failures."""


class Unauthenticated(ProfileError):
    """Raised when a query is attempted without a stored credential."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InvalidRequest(ProfileError):
    """Raised when a GraphQL document does not start with an operation keyword."""

    def __init__(self, message: str = "Invalid GraphQL query") -> None:
        super().__init__(message)


class InvalidCredentials(ProfileError):
    """Raised when the authentication endpoint rejects the username/password."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class RemoteError(ProfileError):
    """
    Raised when a remote endpoint answers with an error.

    Attributes:
        errors: Raw GraphQL error objects, empty for auth failures.
    """

    def __init__(self, message: str, errors: list[dict[str, object]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class CredentialExpired(RemoteError):
    """
    Raised when the backend rejects the credential as expired.

    The gateway has already cleared the session store when this is raised,
    so the next render starts unauthenticated.
    """


class NetworkFailure(ProfileError):
    """Raised on transport failures (DNS, connection, timeout)."""
