"""Monthly / weekly / campaign aggregation over typed input rows.

Everything here is a pure function of its arguments: no clock access and no
module-level state, so reports for different months can be built side by side.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from cpr.safe_math import ratio, sum_safe
from cpr.schema import CampaignRow, CampaignSummary, DailyRow, MonthlySummary, WeeklyRow

# Day-of-month bounds of the four fixed buckets; the last one runs to month end.
WEEK_BUCKETS: Tuple[Tuple[int, int], ...] = ((1, 7), (8, 14), (15, 21), (22, 31))


# ─────────────────────────────────────────────────────────────────────────────
# Month keys
# ─────────────────────────────────────────────────────────────────────────────


def month_key(d: Optional[date]) -> Optional[str]:
    """Format a date as ``YYYY-MM``; None stays None."""
    if d is None:
        return None
    return f"{d.year:04d}-{d.month:02d}"


def previous_month(month: str) -> str:
    """``"2025-03"`` → ``"2025-02"``, wrapping across the year boundary."""
    year, mon = (int(p) for p in month.split("-", 1))
    if mon == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{mon - 1:02d}"


def _rows_in_month(daily: Iterable[DailyRow], month: str) -> List[DailyRow]:
    # Exact key equality: rows with missing or out-of-month dates simply fall out.
    return [r for r in daily if month_key(r.date) == month]


def _totals(rows: Sequence[DailyRow]) -> Tuple[float, float, float, float]:
    return (
        sum_safe(r.impressions for r in rows),
        sum_safe(r.clicks for r in rows),
        sum_safe(r.applies for r in rows),
        sum_safe(r.cost for r in rows),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Aggregators
# ─────────────────────────────────────────────────────────────────────────────


def aggregate_monthly(daily: Iterable[DailyRow], month: str) -> MonthlySummary:
    """Reduce the daily rows of *month* into one summary.

    Derived rates fall back to 0 when undefined, so an empty month yields an
    all-zero summary rather than an error.
    """
    rows = _rows_in_month(daily, month)
    impressions, clicks, applies, cost = _totals(rows)
    return MonthlySummary(
        month=month,
        impressions=impressions,
        clicks=clicks,
        applies=applies,
        cost=cost,
        ctr=ratio(clicks, impressions) or 0.0,
        cpc=ratio(cost, clicks) or 0.0,
        cpa=ratio(cost, applies) or 0.0,
    )


def aggregate_weekly(daily: Iterable[DailyRow], month: str) -> List[WeeklyRow]:
    """Split *month* into the four fixed buckets (1–7, 8–14, 15–21, 22–end).

    Returns an empty list when the month has no rows at all; otherwise always
    four rows in chronological order, zero-filled where a bucket is empty.
    """
    within = _rows_in_month(daily, month)
    if not within:
        return []

    year, mon = (int(p) for p in month.split("-", 1))
    days_in_month = calendar.monthrange(year, mon)[1]

    weeks: List[WeeklyRow] = []
    for first_day, last_day in WEEK_BUCKETS:
        start = date(year, mon, min(first_day, days_in_month))
        end = date(year, mon, min(last_day, days_in_month))
        rows = [r for r in within if start.day <= r.date.day <= end.day]
        impressions, clicks, applies, cost = _totals(rows)
        weeks.append(
            WeeklyRow(
                label=f"{start.month}/{start.day}–{end.month}/{end.day}",
                start=start,
                end=end,
                impressions=impressions,
                clicks=clicks,
                applies=applies,
                cost=cost,
                cpc=ratio(cost, clicks) or 0.0,
                cpa=ratio(cost, applies) or 0.0,
            )
        )
    return weeks


def aggregate_campaigns(campaigns: Iterable[CampaignRow]) -> List[CampaignSummary]:
    """Project campaign rows into report rows, one-to-one and in input order."""
    return [
        CampaignSummary(
            name=c.name,
            jobs=c.jobs,
            impressions=c.impressions,
            ctr=c.ctr,
            clicks=c.clicks,
            asr=c.apply_start_rate,
            applies=c.applies,
            ar=c.apply_rate,
            cost=c.cost,
            cpc=c.cpc,
            cpa=c.cpa,
        )
        for c in campaigns
    ]
