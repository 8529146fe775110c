"""
Presenters for Zone01 Profile Dashboard.

PURPOSE: Testable layer between the statistics accessors and the HTML.

DESIGN PRINCIPLES:
1. Presenters fetch through accessors and return view models (dataclasses)
2. No dependencies on FastAPI or HTML
3. All-or-nothing: a profile view model exists only if every query succeeded
4. Each presenter focuses on one output (page data or PNG chart)

USAGE:
    presenter = ProfilePresenter(accessors)
    profile = await presenter.load()
    # profile is ready for template rendering
"""

from __future__ import annotations

import asyncio
import io
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .config import Config
from .models import ChartPoint, MonthBucket, ProfileSummary, Skill
from .statistics import (
    audit_bar_percentages,
    calculate_cumulative,
    chart_points,
    group_by_month,
)

if TYPE_CHECKING:
    from .accessors import StatisticsAccessors

__all__ = [
    "LoginViewModel",
    "AuditViewModel",
    "ProfileViewModel",
    "ProfilePresenter",
    "ChartPresenter",
    "resolve_display_name",
    "format_compact",
    "format_audit_value",
]

logger = logging.getLogger(__name__)

# Chart color palette shared with the dashboard CSS
CHART_COLORS: dict[str, str] = {
    "line": "#3b82f6",
    "bar": "#334155",
    "text": "#94a3b8",
}


def resolve_display_name(login: str, attrs: Any) -> str:
    """
    Work out the name shown on the profile card.

    Uses attrs['name'] when present, otherwise 'firstName lastName',
    otherwise the login. attrs may arrive as a mapping or as a
    JSON-encoded string; anything unparseable falls back to the login.

    Args:
        login: Account login.
        attrs: User attributes from the user data query.

    Returns:
        Display name, never empty if login is not empty.

    Example:
        >>> resolve_display_name("jdoe", {"firstName": "John", "lastName": "Doe"})
        'John Doe'
        >>> resolve_display_name("jdoe", None)
        'jdoe'
    """
    if not attrs:
        return login

    if isinstance(attrs, str):
        try:
            attrs = json.loads(attrs)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing attrs for {login}: {e}")
            return login

    if not isinstance(attrs, dict):
        return login

    if attrs.get("name"):
        return str(attrs["name"])
    full_name = f"{attrs.get('firstName') or ''} {attrs.get('lastName') or ''}".strip()
    return full_name or login


def format_compact(value: int) -> str:
    """
    Format a number with a K/M suffix for bar labels.

    Example:
        >>> format_compact(1_300_000), format_compact(1500), format_compact(999)
        ('1.3M', '1.5K', '999')
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1000:
        return f"{value / 1000:.1f}K"
    return str(value)


def format_audit_value(value: int) -> str:
    """
    Format audit points as the platform shows them (bytes, kB/MB).

    Example:
        >>> format_audit_value(2_500_000), format_audit_value(12_340)
        ('2.50 MB', '12.34 kB')
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.2f} MB"
    return f"{value / 1000:.2f} kB"


@dataclass
class LoginViewModel:
    """View model for the login form."""

    error: str | None = None
    username: str = ""


@dataclass
class AuditViewModel:
    """View model for the audit ratio bar pair."""

    up: int
    down: int
    ratio: str

    @property
    def percentages(self) -> tuple[float, float]:
        """(done, received) share of all audit points."""
        return audit_bar_percentages(self.up, self.down)

    @property
    def up_width(self) -> float:
        """
        Width of the 'Done' bar in SVG units.

        Bars share Config.AUDIT_BAR_MAX_WIDTH in proportion to their share
        of the total, so the pair always reads as a split of one whole.

        Returns:
            Width between 0 and AUDIT_BAR_MAX_WIDTH.
        """
        return Config.AUDIT_BAR_MAX_WIDTH * self.percentages[0] / 100

    @property
    def down_width(self) -> float:
        """Width of the 'Received' bar in SVG units."""
        return Config.AUDIT_BAR_MAX_WIDTH * self.percentages[1] / 100

    @property
    def up_label(self) -> str:
        return format_compact(self.up)

    @property
    def down_label(self) -> str:
        return format_compact(self.down)

    @property
    def done_display(self) -> str:
        return format_audit_value(self.up)

    @property
    def received_display(self) -> str:
        return format_audit_value(self.down)


@dataclass
class ProfileViewModel:
    """Complete view model for the profile page."""

    summary: ProfileSummary
    audit: AuditViewModel
    buckets: list[MonthBucket] = field(default_factory=list)
    points: list[ChartPoint] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)

    @property
    def has_history(self) -> bool:
        """True when there is at least one month to chart."""
        return bool(self.buckets)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the JSON shape served by /api/profile.

        Returns:
            Dict with 'summary', 'audit', 'months' and 'skills' keys.
        """
        return {
            "summary": self.summary.to_dict(),
            "audit": {
                "up": self.audit.up,
                "down": self.audit.down,
                "ratio": self.audit.ratio,
            },
            "months": [b.to_dict() for b in self.buckets],
            "skills": [s.to_dict() for s in self.skills],
        }


class ProfilePresenter:
    """
    Presenter for the profile view.

    Runs the statistics accessors and assembles the profile view model.
    """

    def __init__(self, accessors: StatisticsAccessors) -> None:
        """
        Initialize profile presenter with its data source.

        Business context: Injecting the accessors keeps the presenter
        testable with a fake that returns canned statistics, with no
        HTTP involved.

        Args:
            accessors: StatisticsAccessors bound to an authenticated gateway.
        """
        self.accessors = accessors

    async def load(self) -> ProfileViewModel:
        """
        Fetch every statistic and build the profile view model.

        The five queries are read-only and independent, so they run
        concurrently and the presenter waits for all of them. The first
        failure propagates; no partial profile is ever returned.

        Business context: This is the data behind the whole profile page:
        summary cards, audit bars, cumulative XP chart and skills list.
        The chart's cumulative series is clamped to the total XP shown on
        the summary card.

        Returns:
            ProfileViewModel with summary, audit bars, clamped cumulative
            buckets, chart points and skills.

        Raises:
            ProfileError: Any accessor failure (see errors module).

        Example:
            >>> profile = await ProfilePresenter(accessors).load()
            >>> profile.summary.level
            12
        """
        results = await asyncio.gather(
            self.accessors.get_user_data(),
            self.accessors.get_user_level(),
            self.accessors.get_audit_ratio(),
            self.accessors.get_monthly_xp(),
            self.accessors.get_skills(),
            return_exceptions=True,
        )
        # Every query has settled here; surface the first failure in call order
        for result in results:
            if isinstance(result, Exception):
                raise result
        user, level, audit, history, skills = results

        buckets = calculate_cumulative(group_by_month(history), level.xp)

        summary = ProfileSummary(
            display_name=resolve_display_name(user.login, user.attrs),
            login=user.login,
            level=level.level,
            total_xp=level.xp,
            audits_done=audit.up,
            audits_received=audit.down,
            audit_ratio=audit.ratio,
        )
        return ProfileViewModel(
            summary=summary,
            audit=AuditViewModel(up=audit.up, down=audit.down, ratio=audit.ratio),
            buckets=buckets,
            points=chart_points(buckets),
            skills=list(skills),
        )


class ChartPresenter:
    """
    Presenter for PNG chart export.

    Uses matplotlib for server-side rendering of the same cumulative
    series the SVG chart shows.
    """

    def render_xp_chart(self, buckets: Sequence[MonthBucket], title: str = "") -> bytes:
        """
        Render cumulative XP as a line chart over monthly bars.

        Bars show each month's (clamped) contribution, the line shows the
        running total. Uses a non-interactive backend.

        Business context: The PNG is the downloadable version of the
        profile chart, convenient for sharing progress outside the
        dashboard.

        Args:
            buckets: Buckets from calculate_cumulative, chronological.
            title: Optional chart title (e.g. the user's login).

        Returns:
            PNG image as bytes, about 800x300 pixels at 100 DPI.

        Example:
            >>> png = ChartPresenter().render_xp_chart(profile.buckets)
            >>> png[:4]
            b'\\x89PNG'
        """
        import matplotlib

        matplotlib.use("Agg")  # Non-interactive backend
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(8, 3))

        if buckets:
            labels = [f"{b.label} {b.year}" for b in buckets]
            positions = list(range(len(buckets)))
            ax.bar(positions, [b.total_amount for b in buckets], color=CHART_COLORS["bar"])
            ax.plot(
                positions,
                [b.cumulative_amount for b in buckets],
                color=CHART_COLORS["line"],
                marker="o",
            )
            ax.set_xticks(positions)
            ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
        else:
            ax.text(0.5, 0.5, "No data available", ha="center", va="center")
            ax.set_xticks([])

        ax.set_ylabel("XP")
        ax.set_title(f"Cumulative XP - {title}" if title else "Cumulative XP")
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)

        buf = io.BytesIO()
        plt.tight_layout()
        plt.savefig(buf, format="png", dpi=100, bbox_inches="tight")
        plt.close(fig)
        buf.seek(0)
        return buf.read()
