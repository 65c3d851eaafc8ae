"""Rule-based insight text for monthly, weekly and campaign summaries.

Each generator evaluates a fixed, ordered table of :class:`InsightRule`
entries. Adding or removing an observation is a change to the table, not to
the control flow.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from cpr.safe_math import pct_change, round_half_up
from cpr.schema import CampaignSummary, MonthlySummary, WeeklyRow


class InsightRule(NamedTuple):
    """``predicate(ctx)`` decides whether ``message.format(**ctx)`` is emitted."""

    predicate: Callable[[Dict[str, Any]], bool]
    message: str


def dedupe_insights(texts: Sequence[str]) -> List[str]:
    """Drop exact duplicates, keeping the first occurrence of each text."""
    seen = set()
    kept: List[str] = []
    for t in texts:
        if t in seen:
            continue
        seen.add(t)
        kept.append(t)
    return kept


def apply_rules(rules: Sequence[InsightRule], ctx: Dict[str, Any]) -> List[str]:
    """Evaluate *rules* in order against *ctx* and return the deduped messages."""
    return dedupe_insights([r.message.format(**ctx) for r in rules if r.predicate(ctx)])


def _defined(ctx: Dict[str, Any], *keys: str) -> bool:
    return all(ctx.get(k) is not None for k in keys)


# ─────────────────────────────────────────────────────────────────────────────
# Rule tables
# ─────────────────────────────────────────────────────────────────────────────

MONTHLY_RULES: List[InsightRule] = [
    InsightRule(
        lambda c: _defined(c, "impressions_mom", "ctr_mom")
        and c["impressions_mom"] < 0
        and c["ctr_mom"] > 0,
        "impressions declined but efficiency improved: higher-quality exposure achieved.",
    ),
    InsightRule(
        lambda c: _defined(c, "cpa_mom") and c["cpa_mom"] < 0,
        "cost per application decreased, improving cost efficiency.",
    ),
    InsightRule(
        lambda c: _defined(c, "applies_mom") and c["applies_mom"] > 0,
        "applications increased, expanding acquisition volume.",
    ),
]

WEEKLY_RULES: List[InsightRule] = [
    InsightRule(
        lambda c: c["cpa_change"] is not None and c["cpa_change"] < 0,
        "cost per application improved from {first_cpa} to {last_cpa}.",
    ),
]

CAMPAIGN_RULES: List[InsightRule] = [
    InsightRule(
        lambda c: c["best"] is not None,
        "{best_name} has low cost-per-application and strong efficiency",
    ),
    InsightRule(
        lambda c: c["zero_apply_count"] > 0,
        "{zero_apply_count} campaigns had zero applications and require review",
    ),
]


# ─────────────────────────────────────────────────────────────────────────────
# Generators
# ─────────────────────────────────────────────────────────────────────────────


def build_monthly_insights(
    current: MonthlySummary,
    previous: Optional[MonthlySummary] = None,
) -> List[str]:
    """Month-over-month observations; nothing to say without a previous month."""
    if previous is None:
        return []
    ctx = {
        "impressions_mom": pct_change(current.impressions, previous.impressions),
        "ctr_mom": pct_change(current.ctr, previous.ctr),
        "cpa_mom": pct_change(current.cpa, previous.cpa),
        "applies_mom": pct_change(current.applies, previous.applies),
    }
    return apply_rules(MONTHLY_RULES, ctx)


def build_weekly_insights(weekly: Sequence[WeeklyRow]) -> List[str]:
    """Compare the first and last bucket's cost per application."""
    if not weekly:
        return []
    first, last = weekly[0], weekly[-1]
    ctx = {
        "first_cpa": round_half_up(first.cpa),
        "last_cpa": round_half_up(last.cpa),
        "cpa_change": pct_change(last.cpa, first.cpa),
    }
    return apply_rules(WEEKLY_RULES, ctx)


def build_campaign_insights(campaigns: Sequence[CampaignSummary]) -> List[str]:
    """Name the most cost-efficient campaign and count campaigns with no applies.

    Ties on cost per application go to the campaign listed first.
    """
    if not campaigns:
        return []
    candidates = [c for c in campaigns if c.cpa is not None and (c.applies or 0) > 0]
    best = min(candidates, key=lambda c: c.cpa) if candidates else None
    ctx = {
        "best": best,
        "best_name": best.name if best is not None else "",
        "zero_apply_count": sum(1 for c in campaigns if (c.applies or 0) == 0),
    }
    return apply_rules(CAMPAIGN_RULES, ctx)
