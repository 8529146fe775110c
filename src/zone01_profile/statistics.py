"""
XP aggregation for Zone01 Profile Dashboard.

PURPOSE: Turn the flat XP transaction history into a chart-ready series.
Pure data processing: no I/O, no rendering.

PIPELINE:
1. group_by_month: bucket transactions per calendar month (local time)
2. calculate_cumulative: running total, clamped to the reported total XP
3. chart_points: place each bucket on the SVG canvas

CLAMP:
The monthly history and the total XP come from two different queries and
can disagree. The cumulative curve is never allowed to exceed the
reported total: each month contributes at most what is left of the total,
so trailing months are truncated when the history sums higher.

USAGE:
    buckets = group_by_month(transactions)
    buckets = calculate_cumulative(buckets, total_xp)
    points = chart_points(buckets)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import tzinfo

from .config import Config
from .models import ChartPoint, MonthBucket, Transaction

__all__ = [
    "group_by_month",
    "calculate_cumulative",
    "chart_points",
    "audit_bar_percentages",
]


def group_by_month(
    transactions: Iterable[Transaction],
    tz: tzinfo | None = None,
) -> list[MonthBucket]:
    """
    Group XP transactions into calendar-month buckets.

    Each transaction's timestamp is converted to the given timezone (the
    machine's local timezone by default) before its year and month are
    read, so a transaction near midnight on the last day of a month lands
    in the month the user saw it in.

    Business context: The profile chart shows progress month by month.
    Months without any XP are not represented; the chart simply moves on
    to the next month that has activity.

    Args:
        transactions: XP transactions in any order.
        tz: Timezone for calendar semantics. Default: local timezone.

    Returns:
        Buckets sorted ascending by first day of month, one per
        (year, month_index), with total_amount summed and
        cumulative_amount left at 0.

    Example:
        >>> buckets = group_by_month(transactions, tz=UTC)
        >>> [(b.label, b.total_amount) for b in buckets]
        [('janv.', 150), ('févr.', 80)]
    """
    totals: dict[tuple[int, int], int] = {}
    for tx in transactions:
        moment = tx.created_at.astimezone(tz)
        key = (moment.year, moment.month - 1)
        totals[key] = totals.get(key, 0) + tx.amount

    return [
        MonthBucket(
            year=year,
            month_index=month_index,
            label=Config.month_label(month_index),
            total_amount=total,
        )
        for (year, month_index), total in sorted(totals.items())
    ]


def calculate_cumulative(
    buckets: Sequence[MonthBucket],
    total_xp: int,
) -> list[MonthBucket]:
    """
    Compute the running XP total, never exceeding total_xp.

    Walks the buckets in order. Each bucket contributes
    min(bucket.total_amount, total_xp - running_sum); the contribution
    replaces total_amount in the returned bucket and the running sum is
    stored in cumulative_amount. Input buckets are left untouched.

    Business context: Total XP is fetched by its own aggregate query and
    is the figure shown on the summary card. The chart must end at or
    below that figure even when the month-by-month history sums higher.

    Args:
        buckets: Month buckets in chronological order.
        total_xp: Independently reported total XP (>= 0).

    Returns:
        New buckets with clamped total_amount and cumulative_amount.

    Example:
        >>> jan = MonthBucket(2024, 0, "janv.", 150)
        >>> feb = MonthBucket(2024, 1, "févr.", 80)
        >>> [(b.total_amount, b.cumulative_amount)
        ...  for b in calculate_cumulative([jan, feb], 200)]
        [(150, 150), (50, 200)]
    """
    running = 0
    result: list[MonthBucket] = []
    for bucket in buckets:
        added = min(bucket.total_amount, total_xp - running)
        running += added
        result.append(replace(bucket, total_amount=added, cumulative_amount=running))
    return result


def chart_points(
    buckets: Sequence[MonthBucket],
    width: int = Config.XP_CHART_WIDTH,
    height: int = Config.XP_CHART_HEIGHT,
    margin_top: int = Config.XP_CHART_MARGIN_TOP,
    margin_right: int = Config.XP_CHART_MARGIN_RIGHT,
    margin_bottom: int = Config.XP_CHART_MARGIN_BOTTOM,
    margin_left: int = Config.XP_CHART_MARGIN_LEFT,
) -> list[ChartPoint]:
    """
    Map cumulative buckets to SVG canvas coordinates.

    x spreads bucket indexes evenly across the plot width, first bucket on
    the left margin and last on the right. y scales cumulative_amount
    against the largest cumulative value; since SVG y grows downward,
    larger amounts get smaller y.

    A single bucket sits on the left margin. When every cumulative value
    is 0 the scale uses 1 so all points rest on the baseline.

    Args:
        buckets: Buckets from calculate_cumulative.
        width: Canvas width in SVG units.
        height: Canvas height in SVG units.
        margin_top: Space above the plot area.
        margin_right: Space right of the plot area.
        margin_bottom: Space below the plot area (month labels).
        margin_left: Space left of the plot area.

    Returns:
        One ChartPoint per bucket, in bucket order.

    Example:
        >>> points = chart_points(buckets)
        >>> points[0].x, points[-1].x
        (40.0, 760.0)
    """
    if not buckets:
        return []

    plot_width = width - margin_left - margin_right
    plot_height = height - margin_top - margin_bottom
    x_step = plot_width / (len(buckets) - 1) if len(buckets) > 1 else 0.0
    max_value = max(b.cumulative_amount for b in buckets) or 1

    baseline = margin_top + plot_height
    return [
        ChartPoint(
            x=margin_left + index * x_step,
            y=baseline - bucket.cumulative_amount * plot_height / max_value,
            label=bucket.label,
            value=bucket.cumulative_amount,
        )
        for index, bucket in enumerate(buckets)
    ]


def audit_bar_percentages(up: int, down: int) -> tuple[float, float]:
    """
    Split audit points into bar percentages.

    Args:
        up: Audit points given.
        down: Audit points received.

    Returns:
        (up_percent, down_percent) summing to 100; (50.0, 50.0) when
        both are 0.

    Example:
        >>> audit_bar_percentages(75, 25)
        (75.0, 25.0)
    """
    total = up + down
    if not total:
        return 50.0, 50.0
    return up / total * 100, down / total * 100
