"""
GraphQL query gateway for Zone01 Profile Dashboard.

PURPOSE: Send one GraphQL document with the stored credential attached.

REQUEST CONTRACT:
    POST Config.GRAPHQL_URL
    Authorization: Bearer <credential>
    {"query": "<document>", "variables": {}}

ERROR HANDLING:
- No credential: Unauthenticated (no request sent)
- Document not starting with query/mutation: InvalidRequest (no request sent)
- Transport failure: NetworkFailure
- Error list mentioning JWT: session cleared, CredentialExpired
- Any other error list: RemoteError carrying the first message

USAGE:
    async with httpx.AsyncClient() as client:
        gateway = QueryGateway(SessionStore(), client)
        data = await gateway.execute(USER_LEVEL_QUERY)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from .config import Config
from .errors import (
    CredentialExpired,
    InvalidRequest,
    NetworkFailure,
    RemoteError,
    Unauthenticated,
)

if TYPE_CHECKING:
    from .session import SessionStore

__all__ = ["QueryGateway", "is_operation", "is_expired_credential_error"]

logger = logging.getLogger(__name__)


def is_operation(query_text: str) -> bool:
    """
    Check that a document starts with a GraphQL operation keyword.

    Args:
        query_text: GraphQL document, leading whitespace allowed.

    Returns:
        True if the stripped text starts with 'query' or 'mutation'.

    Example:
        >>> is_operation("  query { user { login } }")
        True
        >>> is_operation("{ user { login } }")
        False
    """
    return query_text.strip().startswith(Config.OPERATION_KEYWORDS)


def is_expired_credential_error(error: Any) -> bool:
    """Check whether a GraphQL error object reports an expired credential."""
    message = str(error.get("message", "")) if isinstance(error, dict) else str(error)
    return Config.EXPIRED_CREDENTIAL_MARKER in message


class QueryGateway:
    """
    Executes GraphQL documents against the Zone01 endpoint.

    DESIGN:
    - The session store is injected, never looked up globally
    - The HTTP client is injected and owned by the caller
    - Every failure propagates as a ProfileError subclass
    """

    def __init__(
        self,
        session: SessionStore,
        client: httpx.AsyncClient,
        url: str | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            session: Store holding the bearer credential. Cleared by the
                gateway when the backend reports an expired credential.
            client: Async HTTP client used for the request.
            url: GraphQL endpoint. Default: Config.GRAPHQL_URL
        """
        self.session = session
        self.client = client
        self.url = url or Config.GRAPHQL_URL

    async def execute(self, query_text: str) -> dict[str, Any]:
        """
        Run one GraphQL query or mutation.

        Checks run in order: credential present, then document shape,
        then the network call. The first two fail without any request
        being sent.

        Business context: Every statistic on the profile page flows
        through here. Credential expiry is the one error the gateway
        acts on itself: it clears the stored credential before raising,
        so whatever view renders next starts signed out.

        Args:
            query_text: GraphQL document starting with 'query' or
                'mutation'.

        Returns:
            The response's 'data' payload (empty dict if absent).

        Raises:
            Unauthenticated: No credential is stored.
            InvalidRequest: Document does not start with an operation keyword.
            NetworkFailure: The request could not be completed.
            CredentialExpired: Backend rejected the credential (session cleared).
            RemoteError: Backend returned any other error.

        Example:
            >>> data = await gateway.execute("query { user { login } }")
            >>> data["user"][0]["login"]
            'jdoe'
        """
        token = self.session.get()
        if not token:
            raise Unauthenticated()

        if not is_operation(query_text):
            raise InvalidRequest()

        try:
            response = await self.client.post(
                self.url,
                json={"query": query_text, "variables": {}},
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {token}",
                },
                timeout=Config.REQUEST_TIMEOUT,
            )
        except httpx.TransportError as e:
            logger.error(f"GraphQL request failed: {e}")
            raise NetworkFailure(str(e)) from e

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteError(
                f"Unexpected response from GraphQL endpoint ({response.status_code})"
            ) from e

        if not isinstance(result, dict):
            raise RemoteError("Unexpected response from GraphQL endpoint")

        errors = result.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            self._raise_for_errors(errors)

        if response.is_error:
            raise RemoteError(f"GraphQL endpoint returned {response.status_code}")

        data = result.get("data")
        return data if isinstance(data, dict) else {}

    def _raise_for_errors(self, errors: list[Any]) -> None:
        """
        Convert a GraphQL error list into an exception.

        Args:
            errors: Non-empty list of error objects with a 'message' field.

        Raises:
            CredentialExpired: If any message mentions the credential marker.
            RemoteError: Otherwise, with the first error's message.
        """
        first = errors[0]
        if isinstance(first, dict):
            first_message = str(first.get("message", "GraphQL error"))
        else:
            first_message = str(first)

        if any(is_expired_credential_error(e) for e in errors):
            logger.warning("Credential expired, clearing session")
            self.session.clear()
            raise CredentialExpired(first_message, errors)

        raise RemoteError(first_message, errors)
