"""
Data models for Zone01 Profile Dashboard.

PURPOSE: Typed records for query results and derived chart data.

MODEL HIERARCHY:
- Transaction: One dated XP gain from the monthly history query
- MonthBucket: All transactions of one calendar month, plus running total
- LevelInfo / UserData / AuditRatio / Skill: Accessor results
- ProfileSummary: Everything the summary cards display
- ChartPoint: A bucket placed in SVG chart coordinates

SERIALIZATION:
Records built from GraphQL payloads have from_dict(); records exposed by
the JSON API have to_dict(). Timestamps are timezone-aware datetimes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a GraphQL timestamp into an aware datetime.

    Hasura returns ISO 8601 strings such as '2024-01-15T10:00:00.123+00:00'
    or with a trailing 'Z'. Naive values are taken as UTC.

    Args:
        value: ISO 8601 timestamp string.

    Returns:
        Timezone-aware datetime.

    Raises:
        TypeError: If value is not a string (e.g. null).
        ValueError: If value is not an ISO 8601 timestamp.

    Example:
        >>> parse_timestamp('2024-01-15T10:00:00Z').tzinfo is not None
        True
    """
    if not isinstance(value, str):
        raise TypeError(f"Timestamp must be a string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True)
class Transaction:
    """
    A single XP transaction.

    Immutable and fetched fresh on every profile render; never persisted.
    """

    amount: int
    created_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transaction:
        """
        Build a transaction from a GraphQL record.

        Args:
            data: Dict with 'amount' (number) and 'createdAt' (ISO 8601).
                A missing amount counts as 0.

        Returns:
            Transaction instance.

        Raises:
            KeyError: If 'createdAt' is missing.
            TypeError: If 'createdAt' is not a string (e.g. null).
            ValueError: If 'createdAt' or 'amount' cannot be parsed.

        Example:
            >>> tx = Transaction.from_dict({"amount": 100, "createdAt": "2024-01-15T10:00:00Z"})
            >>> tx.amount
            100
        """
        return cls(
            amount=int(data.get("amount") or 0),
            created_at=parse_timestamp(data["createdAt"]),
        )


@dataclass(frozen=True)
class MonthBucket:
    """
    XP aggregated over one calendar month.

    Keyed by (year, month_index). month_index is 0-based (January = 0).
    total_amount is the month's sum; after calculate_cumulative it holds
    the clamped contribution. cumulative_amount is the running total up to
    and including this month.
    """

    year: int
    month_index: int
    label: str
    total_amount: int
    cumulative_amount: int = 0

    @property
    def key(self) -> tuple[int, int]:
        """Unique (year, month_index) key."""
        return (self.year, self.month_index)

    @property
    def first_of_month(self) -> date:
        """First calendar day of the bucket's month, used for ordering."""
        return date(self.year, self.month_index + 1, 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "year": self.year,
            "month_index": self.month_index,
            "label": self.label,
            "total_amount": self.total_amount,
            "cumulative_amount": self.cumulative_amount,
        }


@dataclass(frozen=True)
class LevelInfo:
    """Current level and total XP for the configured event path."""

    level: int = 0
    xp: int = 0


@dataclass(frozen=True)
class UserData:
    """
    Basic user record.

    attrs is passed through untouched: the backend returns it either as a
    JSON object or as a JSON-encoded string.
    """

    login: str = ""
    attrs: Any = None
    total_xp: int = 0


@dataclass(frozen=True)
class AuditRatio:
    """
    Audit points given (up) and received (down).

    ratio is the one-decimal string of up/down, or the "N/A" sentinel
    when nothing was received.
    """

    up: int = 0
    down: int = 0
    ratio: str = "N/A"

    @property
    def total(self) -> int:
        """Sum of given and received audit points."""
        return self.up + self.down


@dataclass(frozen=True)
class Skill:
    """A completed skill with its grade."""

    name: str
    grade: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Skill:
        """
        Build a skill from a GraphQL progress record.

        Args:
            data: Dict shaped like {"object": {"name": ...}, "grade": ...}.
                Missing or mistyped fields default to an empty name
                and grade 0.

        Returns:
            Skill instance.
        """
        obj = data.get("object")
        name = obj.get("name") if isinstance(obj, dict) else None
        try:
            grade = float(data.get("grade") or 0)
        except (TypeError, ValueError):
            grade = 0.0
        return cls(name=str(name or ""), grade=grade)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {"name": self.name, "grade": self.grade}


@dataclass(frozen=True)
class ProfileSummary:
    """Values shown on the profile summary cards."""

    display_name: str
    login: str
    level: int
    total_xp: int
    audits_done: int
    audits_received: int
    audit_ratio: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "display_name": self.display_name,
            "login": self.login,
            "level": self.level,
            "total_xp": self.total_xp,
            "audits_done": self.audits_done,
            "audits_received": self.audits_received,
            "audit_ratio": self.audit_ratio,
        }


@dataclass(frozen=True)
class ChartPoint:
    """A month placed on the cumulative XP chart canvas."""

    x: float
    y: float
    label: str
    value: int
