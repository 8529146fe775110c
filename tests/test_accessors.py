"""Tests for statistics accessors."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from conftest import GraphQLBackend
from zone01_profile.accessors import StatisticsAccessors, compute_audit_ratio, dig
from zone01_profile.errors import CredentialExpired, Unauthenticated
from zone01_profile.gateway import QueryGateway
from zone01_profile.models import AuditRatio, LevelInfo, Skill, UserData
from zone01_profile.session import SessionStore


class FakeGateway:
    """Gateway stand-in returning one canned payload for any query."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.data = data
        self.queries: list[str] = []

    async def execute(self, query_text: str) -> dict[str, Any]:
        self.queries.append(query_text)
        return self.data


def _accessors(data: dict[str, Any]) -> StatisticsAccessors:
    return StatisticsAccessors(FakeGateway(data))  # type: ignore[arg-type]


class TestDig:
    """Tests for dig."""

    def test_nested_path(self) -> None:
        """Verifies keys and indexes can be mixed."""
        data = {"user": [{"events": [{"level": 3}]}]}
        assert dig(data, "user", 0, "events", 0, "level") == 3

    @pytest.mark.parametrize(
        "data",
        [{}, {"user": []}, {"user": None}, {"user": [None]}, {"user": "x"}, [], None],
    )
    def test_gap_returns_default(self, data: Any) -> None:
        """Verifies any missing or mistyped step yields the default."""
        assert dig(data, "user", 0, "login", default="") == ""

    def test_negative_index(self) -> None:
        """Verifies negative indexes address from the end."""
        assert dig({"a": [1, 2, 3]}, "a", -1) == 3


class TestComputeAuditRatio:
    """Tests for compute_audit_ratio."""

    @pytest.mark.parametrize(
        ("up", "down", "expected"),
        [(50, 25, "2.0"), (1_200_000, 900_000, "1.3"), (0, 10, "0.0"), (10, 0, "N/A"), (0, 0, "N/A")],
    )
    def test_ratio(self, up: int, down: int, expected: str) -> None:
        """Verifies one-decimal ratio and the zero-received sentinel.

        Business context:
        A student who has not been audited yet has no meaningful ratio;
        'N/A' is shown rather than infinity.
        """
        assert compute_audit_ratio(up, down) == expected


class TestGetUserLevel:
    """Tests for StatisticsAccessors.get_user_level."""

    @pytest.mark.asyncio
    async def test_reads_level_and_xp(self, profile_payloads: dict[str, Any]) -> None:
        """Verifies level and aggregate XP are extracted."""
        level = await _accessors(profile_payloads["GetUserLevel"]).get_user_level()
        assert level == LevelInfo(level=12, xp=200)

    @pytest.mark.asyncio
    async def test_missing_fields_default_to_zero(self) -> None:
        """Verifies a user with no events or transactions reads as 0/0.

        Business context:
        A student who has not started the cursus yet still gets a
        profile page instead of an error.
        """
        level = await _accessors({"user": [{"events": [], "transactions_aggregate": None}]}).get_user_level()
        assert level == LevelInfo(level=0, xp=0)

    @pytest.mark.asyncio
    async def test_no_user(self) -> None:
        """Verifies an empty user list reads as 0/0."""
        assert await _accessors({"user": []}).get_user_level() == LevelInfo()

    @pytest.mark.asyncio
    async def test_float_amount(self) -> None:
        """Verifies numeric aggregates returned as floats are truncated."""
        data = {"user": [{"events": [{"level": 4}], "transactions_aggregate": {"aggregate": {"sum": {"amount": 1234.0}}}}]}
        assert await _accessors(data).get_user_level() == LevelInfo(level=4, xp=1234)


class TestGetUserData:
    """Tests for StatisticsAccessors.get_user_data."""

    @pytest.mark.asyncio
    async def test_reads_user(self, profile_payloads: dict[str, Any]) -> None:
        """Verifies login, attrs and total XP are extracted."""
        user = await _accessors(profile_payloads["GetUserData"]).get_user_data()
        assert user.login == "jdoe"
        assert user.attrs == {"firstName": "John", "lastName": "Doe"}
        assert user.total_xp == 200

    @pytest.mark.asyncio
    async def test_no_user(self) -> None:
        """Verifies defaults when no user is returned."""
        assert await _accessors({}).get_user_data() == UserData()


class TestGetMonthlyXP:
    """Tests for StatisticsAccessors.get_monthly_xp."""

    @pytest.mark.asyncio
    async def test_reads_transactions(self, profile_payloads: dict[str, Any]) -> None:
        """Verifies transactions are returned in response order."""
        history = await _accessors(profile_payloads["GetMonthlyXP"]).get_monthly_xp()
        assert [tx.amount for tx in history] == [100, 50, 80]
        assert history[0].created_at == datetime(2024, 1, 15, 10, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_skips_malformed_records(self) -> None:
        """Verifies bad records are dropped, good ones kept.

        Arrangement:
        History with a record missing createdAt, one with an unparseable
        date, a non-dict entry and one valid record.

        Assertion Strategy:
        Only the valid record survives; no exception escapes.
        """
        data = {
            "transaction": [
                {"amount": 10},
                {"amount": 20, "createdAt": "not a date"},
                "garbage",
                {"amount": 30, "createdAt": "2024-03-01T12:00:00Z"},
            ]
        }
        history = await _accessors(data).get_monthly_xp()
        assert [tx.amount for tx in history] == [30]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [{}, {"transaction": None}, {"transaction": {"amount": 1}}])
    async def test_absent_history_is_empty(self, data: dict[str, Any]) -> None:
        """Verifies missing or mistyped history reads as empty."""
        assert await _accessors(data).get_monthly_xp() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("created_at", [None, 1705312800, {"date": "2024-01-15"}])
    async def test_skips_non_string_timestamps(self, created_at: Any) -> None:
        """Verifies a null or non-string createdAt drops only that record.

        Business context:
        One bad history row must not cost the student the whole profile.
        """
        data = {
            "transaction": [
                {"amount": 10, "createdAt": created_at},
                {"amount": 30, "createdAt": "2024-03-01T12:00:00Z"},
            ]
        }
        history = await _accessors(data).get_monthly_xp()
        assert [tx.amount for tx in history] == [30]


class TestGetAuditRatio:
    """Tests for StatisticsAccessors.get_audit_ratio."""

    @pytest.mark.asyncio
    async def test_reads_up_and_down(self, profile_payloads: dict[str, Any]) -> None:
        """Verifies given/received points and ratio."""
        audit = await _accessors(profile_payloads["GetAuditRatio"]).get_audit_ratio()
        assert audit == AuditRatio(up=1_200_000, down=900_000, ratio="1.3")

    @pytest.mark.asyncio
    async def test_nothing_received(self) -> None:
        """Verifies the sentinel when no audit was received."""
        data = {"user": [{"XPup": {"aggregate": {"sum": {"amount": 500}}}, "XPdown": {"aggregate": {"sum": {"amount": None}}}}]}
        audit = await _accessors(data).get_audit_ratio()
        assert audit == AuditRatio(up=500, down=0, ratio="N/A")


class TestGetSkills:
    """Tests for StatisticsAccessors.get_skills."""

    @pytest.mark.asyncio
    async def test_reads_skills(self, profile_payloads: dict[str, Any]) -> None:
        """Verifies skills keep response order."""
        skills = await _accessors(profile_payloads["GetSkills"]).get_skills()
        assert skills == [Skill("go", 1.0), Skill("js", 1.5)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [{}, {"user": [{"progresses": None}]}, {"user": [{"progresses": 3}]}])
    async def test_absent_skills(self, data: dict[str, Any]) -> None:
        """Verifies missing skills read as an empty list."""
        assert await _accessors(data).get_skills() == []

    @pytest.mark.asyncio
    async def test_malformed_skill_records_defaulted(self) -> None:
        """Verifies a non-object skill or non-numeric grade does not raise.

        Arrangement:
        Progress records with 'object' as a bare string and a letter grade.

        Assertion Strategy:
        Each record yields a Skill with defaults for the unusable field.
        """
        data = {
            "user": [
                {
                    "progresses": [
                        {"object": "go", "grade": 1},
                        {"object": {"name": "js"}, "grade": "A"},
                    ]
                }
            ]
        }
        assert await _accessors(data).get_skills() == [Skill("", 1.0), Skill("js", 0.0)]


class TestAccessorsThroughGateway:
    """Accessors wired to a real gateway and a fake backend."""

    @pytest.mark.asyncio
    async def test_each_accessor_sends_its_query(
        self, signed_in_store: SessionStore, backend: GraphQLBackend
    ) -> None:
        """Verifies one named query per accessor call."""
        async with backend.client() as client:
            accessors = StatisticsAccessors(QueryGateway(signed_in_store, client))
            await accessors.get_user_level()
            await accessors.get_user_data()
            await accessors.get_monthly_xp()
            await accessors.get_audit_ratio()
            await accessors.get_skills()

        assert backend.operations() == [
            "GetUserLevel",
            "GetUserData",
            "GetMonthlyXP",
            "GetAuditRatio",
            "GetSkills",
        ]

    @pytest.mark.asyncio
    async def test_errors_propagate(self, store: SessionStore, backend: GraphQLBackend) -> None:
        """Verifies gateway failures are not turned into defaults."""
        async with backend.client() as client:
            with pytest.raises(Unauthenticated):
                await StatisticsAccessors(QueryGateway(store, client)).get_user_level()

    @pytest.mark.asyncio
    async def test_expiry_propagates(
        self, signed_in_store: SessionStore, backend: GraphQLBackend
    ) -> None:
        """Verifies credential expiry reaches the caller."""
        backend.errors = [{"message": "JWTExpired"}]
        async with backend.client() as client:
            with pytest.raises(CredentialExpired):
                await StatisticsAccessors(QueryGateway(signed_in_store, client)).get_skills()
