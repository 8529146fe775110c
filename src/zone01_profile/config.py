"""
Configuration for Zone01 Profile Dashboard.

PURPOSE: Centralized compile-time constants.

CONFIGURATION CATEGORIES:
- Endpoints: Authentication and GraphQL URLs
- Query Scope: Event path filter applied to every statistics query
- Session: Location and key of the persisted credential
- Charts: Canvas geometry for the SVG charts

There are no environment variables or config files: all values below are
fixed and changed by editing this module.

USAGE:
    from zone01_profile.config import Config
    url = Config.GRAPHQL_URL
    path = Config.session_path()
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for the profile dashboard.

    DESIGN: Frozen dataclass with class-level constants only. No instance
    creation needed.

    SESSION STRUCTURE:
        .zone01_profile/
        └── session.json   # {"gql_token": "<credential>"}
    """

    # =========================================================================
    # REMOTE ENDPOINTS
    # =========================================================================
    DOMAIN: ClassVar[str] = "zone01normandie.org"
    AUTH_URL: ClassVar[str] = "https://zone01normandie.org/api/auth/signin"
    GRAPHQL_URL: ClassVar[str] = "https://zone01normandie.org/api/graphql-engine/v1/graphql"
    REQUEST_TIMEOUT: ClassVar[float] = 15.0
    """Seconds before an auth or GraphQL request is abandoned."""

    # =========================================================================
    # QUERY SCOPE
    # =========================================================================
    EVENT_PATH: ClassVar[str] = "/rouen/div-01"
    """Path filter shared by every statistics query (the Rouen div-01 cursus)."""

    OPERATION_KEYWORDS: ClassVar[tuple[str, ...]] = ("query", "mutation")
    """Keywords a GraphQL document must start with to be sent."""

    EXPIRED_CREDENTIAL_MARKER: ClassVar[str] = "JWT"
    """Substring of a GraphQL error message signalling an expired credential."""

    INVALID_CREDENTIALS_MARKER: ClassVar[str] = "invalid"
    """Substring of a sign-in error body signalling rejected credentials."""

    # =========================================================================
    # SESSION PERSISTENCE
    # =========================================================================
    SESSION_DIR: ClassVar[str] = ".zone01_profile"
    SESSION_FILE: ClassVar[str] = "session.json"
    TOKEN_KEY: ClassVar[str] = "gql_token"

    # =========================================================================
    # PRESENTATION
    # =========================================================================
    AUDIT_RATIO_SENTINEL: ClassVar[str] = "N/A"
    PROFILE_ERROR_MESSAGE: ClassVar[str] = "Error loading profile"
    MISSING_FIELDS_MESSAGE: ClassVar[str] = "Login and password required"
    INVALID_CREDENTIALS_MESSAGE: ClassVar[str] = "Invalid credentials"

    MONTH_LABELS: ClassVar[tuple[str, ...]] = (
        "janv.",
        "févr.",
        "mars",
        "avr.",
        "mai",
        "juin",
        "juil.",
        "août",
        "sept.",
        "oct.",
        "nov.",
        "déc.",
    )
    """Short French month names, indexed by 0-based month."""

    XP_CHART_WIDTH: ClassVar[int] = 800
    XP_CHART_HEIGHT: ClassVar[int] = 300
    XP_CHART_MARGIN_TOP: ClassVar[int] = 40
    XP_CHART_MARGIN_RIGHT: ClassVar[int] = 40
    XP_CHART_MARGIN_BOTTOM: ClassVar[int] = 60
    XP_CHART_MARGIN_LEFT: ClassVar[int] = 40

    AUDIT_BAR_MAX_WIDTH: ClassVar[int] = 400

    @classmethod
    def session_path(cls, storage_dir: str | None = None) -> str:
        """
        Build the path of the session file.

        Args:
            storage_dir: Directory override. Default: SESSION_DIR relative
                to the working directory.

        Returns:
            Path string such as '.zone01_profile/session.json'.

        Example:
            >>> Config.session_path('/tmp/profile')
            '/tmp/profile/session.json'
        """
        return os.path.join(storage_dir or cls.SESSION_DIR, cls.SESSION_FILE)

    @classmethod
    def month_label(cls, month_index: int) -> str:
        """
        Get the short month label for a 0-based month index.

        Business context: Month labels appear under each point of the
        cumulative XP chart. They follow the French abbreviations the
        Zone01 Normandie interface uses.

        Args:
            month_index: 0 for January through 11 for December.

        Returns:
            Abbreviated month name, e.g. 'janv.' or 'août'.

        Raises:
            IndexError: If month_index is outside 0-11.

        Example:
            >>> Config.month_label(1)
            'févr.'
        """
        if not 0 <= month_index < len(cls.MONTH_LABELS):
            raise IndexError(f"Month index out of range: {month_index}")
        return cls.MONTH_LABELS[month_index]
