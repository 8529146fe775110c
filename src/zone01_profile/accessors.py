"""
Statistics accessors for Zone01 Profile Dashboard.

PURPOSE: Run the fixed profile queries and pull out the values used.

DEFAULTS:
A missing field never becomes an error: absent numbers read as 0 and
absent lists as empty. Failures of the query itself (auth, network,
backend errors) propagate unchanged from the gateway.

USAGE:
    accessors = StatisticsAccessors(gateway)
    level = await accessors.get_user_level()
    history = await accessors.get_monthly_xp()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import Config
from .models import AuditRatio, LevelInfo, Skill, Transaction, UserData
from .queries import (
    AUDIT_RATIO_QUERY,
    MONTHLY_XP_QUERY,
    SKILLS_QUERY,
    USER_DATA_QUERY,
    USER_LEVEL_QUERY,
)

if TYPE_CHECKING:
    from .gateway import QueryGateway

__all__ = ["StatisticsAccessors", "dig", "compute_audit_ratio"]

logger = logging.getLogger(__name__)


def dig(data: Any, *path: str | int, default: Any = None) -> Any:
    """
    Follow a path of keys and list indexes, stopping at the first gap.

    Args:
        data: Nested dicts/lists from a GraphQL payload.
        *path: Dict keys (str) and list indexes (int).
        default: Returned when any step is missing or None.

    Returns:
        The value at the end of the path, or default.

    Example:
        >>> dig({"user": [{"login": "jdoe"}]}, "user", 0, "login")
        'jdoe'
        >>> dig({"user": []}, "user", 0, "login", default="")
        ''
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return default
        elif not isinstance(current, dict):
            return default
        current = current[step] if isinstance(step, int) else current.get(step)
        if current is None:
            return default
    return current


def _as_int(value: Any) -> int:
    """Coerce a GraphQL number (int, float or numeric string) to int, 0 if unusable."""
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _aggregate_sum(node: Any) -> int:
    """Read aggregate.sum.amount from a transactions_aggregate node."""
    return _as_int(dig(node, "aggregate", "sum", "amount", default=0))


def compute_audit_ratio(up: int, down: int) -> str:
    """
    Compute the audit ratio shown on the profile.

    Args:
        up: Audit points given.
        down: Audit points received.

    Returns:
        up/down with one decimal, or the "N/A" sentinel when down is 0.

    Example:
        >>> compute_audit_ratio(50, 25)
        '2.0'
        >>> compute_audit_ratio(10, 0)
        'N/A'
    """
    if down == 0:
        return Config.AUDIT_RATIO_SENTINEL
    return f"{up / down:.1f}"


class StatisticsAccessors:
    """
    The five read operations behind the profile page.

    Each method issues one named query through the gateway. The methods
    share no state and may be awaited concurrently.
    """

    def __init__(self, gateway: QueryGateway) -> None:
        self.gateway = gateway

    async def get_user_level(self) -> LevelInfo:
        """
        Get the current level and total XP.

        Returns:
            LevelInfo; level from the first matching event, XP from the
            transactions aggregate. Both default to 0.
        """
        data = await self.gateway.execute(USER_LEVEL_QUERY)
        user = dig(data, "user", 0, default={})
        return LevelInfo(
            level=_as_int(dig(user, "events", 0, "level", default=0)),
            xp=_aggregate_sum(dig(user, "transactions_aggregate")),
        )

    async def get_user_data(self) -> UserData:
        """
        Get the login, profile attributes and total XP.

        Returns:
            UserData; empty login and None attrs when no user is returned.
        """
        data = await self.gateway.execute(USER_DATA_QUERY)
        user = dig(data, "user", 0, default={})
        return UserData(
            login=str(dig(user, "login", default="")),
            attrs=dig(user, "attrs"),
            total_xp=_aggregate_sum(dig(user, "transactions_aggregate")),
        )

    async def get_monthly_xp(self) -> list[Transaction]:
        """
        Get XP transactions in chronological order.

        Records without a usable 'createdAt' are skipped with a warning.

        Returns:
            List of Transaction, empty when the history is absent.
        """
        data = await self.gateway.execute(MONTHLY_XP_QUERY)
        records = dig(data, "transaction", default=[])
        if not isinstance(records, list):
            records = []

        transactions: list[Transaction] = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning(f"Skipping malformed XP transaction {record!r}")
                continue
            try:
                transactions.append(Transaction.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed XP transaction {record!r}: {e}")
        return transactions

    async def get_audit_ratio(self) -> AuditRatio:
        """
        Get audit points given and received with their ratio.

        Returns:
            AuditRatio; ratio is "N/A" when nothing was received.

        Example:
            >>> audit = await accessors.get_audit_ratio()
            >>> audit.ratio
            '1.3'
        """
        data = await self.gateway.execute(AUDIT_RATIO_QUERY)
        user = dig(data, "user", 0, default={})
        up = _aggregate_sum(dig(user, "XPup"))
        down = _aggregate_sum(dig(user, "XPdown"))
        return AuditRatio(up=up, down=down, ratio=compute_audit_ratio(up, down))

    async def get_skills(self) -> list[Skill]:
        """Get completed skills, most recently updated first."""
        data = await self.gateway.execute(SKILLS_QUERY)
        progresses = dig(data, "user", 0, "progresses", default=[])
        if not isinstance(progresses, list):
            return []
        return [Skill.from_dict(p) for p in progresses if isinstance(p, dict)]
