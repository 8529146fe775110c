"""
Sign-in client for Zone01 Profile Dashboard.

PURPOSE: Exchange a username/password pair for a credential.

REQUEST CONTRACT:
    POST Config.AUTH_URL
    Authorization: Basic base64(username:password)

RESPONSES:
- 2xx: JSON body, either the bare token string or {"token": ...}
- non-2xx: text body; containing "invalid" -> InvalidCredentials,
  anything else is surfaced verbatim as RemoteError
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from .config import Config
from .errors import InvalidCredentials, NetworkFailure, RemoteError

__all__ = ["AuthClient", "basic_auth_header"]

logger = logging.getLogger(__name__)


def basic_auth_header(username: str, password: str) -> str:
    """
    Build an HTTP Basic authorization header value.

    Example:
        >>> basic_auth_header("jdoe", "secret")
        'Basic amRvZTpzZWNyZXQ='
    """
    raw = f"{username}:{password}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


class AuthClient:
    """Client for the Zone01 sign-in endpoint."""

    def __init__(self, client: httpx.AsyncClient, url: str | None = None) -> None:
        """
        Initialize the sign-in client.

        Args:
            client: Async HTTP client used for the request.
            url: Sign-in endpoint. Default: Config.AUTH_URL
        """
        self.client = client
        self.url = url or Config.AUTH_URL

    async def login(self, username: str, password: str) -> Any:
        """
        Sign in and return the raw credential payload.

        The payload is returned as the endpoint sent it; pass it to
        SessionStore.set(), which accepts both the bare token and the
        wrapped form.

        Args:
            username: Zone01 login or email.
            password: Account password.

        Returns:
            Decoded JSON body (usually the token string), or the raw text
            body if it is not JSON.

        Raises:
            InvalidCredentials: The endpoint rejected the credentials.
            RemoteError: Any other non-success response.
            NetworkFailure: The request could not be completed.

        Example:
            >>> payload = await AuthClient(client).login("jdoe", "secret")
            >>> store.set(payload)
        """
        try:
            response = await self.client.post(
                self.url,
                headers={
                    "Authorization": basic_auth_header(username, password),
                    "Content-Type": "application/json",
                },
                timeout=Config.REQUEST_TIMEOUT,
            )
        except httpx.TransportError as e:
            logger.error(f"Sign-in request failed: {e}")
            raise NetworkFailure(str(e)) from e

        if response.is_error:
            body = response.text
            if Config.INVALID_CREDENTIALS_MARKER in body:
                logger.info(f"Sign-in rejected for {username}")
                raise InvalidCredentials(Config.INVALID_CREDENTIALS_MESSAGE)
            raise RemoteError(body or f"Sign-in failed ({response.status_code})")

        logger.info(f"Signed in as {username}")
        try:
            return response.json()
        except ValueError:
            return response.text
