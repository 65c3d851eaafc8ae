"""Internal typed schema for daily/campaign input rows and report summaries."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


# ─────────────────────────────────────────────────────────────────────────────
# Input rows (produced by mappers, consumed by aggregators)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DailyRow:
    """One day of account-wide metrics.

    ``date`` is None when the source value could not be parsed; such rows
    never match any month and are dropped by the aggregators.
    """

    date: Optional[date]
    impressions: float = 0
    clicks: float = 0
    applies: float = 0
    cost: float = 0

    ctr: Optional[float] = None
    apply_start_rate: Optional[float] = None
    apply_starts: Optional[float] = None
    completion_rate: Optional[float] = None
    apply_rate: Optional[float] = None
    cpc: Optional[float] = None
    cost_per_apply_start: Optional[float] = None
    cpa: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["date"] = self.date.isoformat() if self.date is not None else None
        return out


@dataclass(frozen=True)
class CampaignRow:
    """One campaign's metrics for the reporting month."""

    name: str
    impressions: float = 0
    clicks: float = 0
    applies: float = 0
    cost: float = 0
    jobs: Optional[float] = None

    ctr: Optional[float] = None
    apply_start_rate: Optional[float] = None
    apply_starts: Optional[float] = None
    completion_rate: Optional[float] = None
    apply_rate: Optional[float] = None
    cpc: Optional[float] = None
    cost_per_apply_start: Optional[float] = None
    cpa: Optional[float] = None

    avg_clicks_per_job: Optional[float] = None
    avg_apply_starts_per_job: Optional[float] = None
    avg_applies_per_job: Optional[float] = None
    avg_cost_per_job: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ─────────────────────────────────────────────────────────────────────────────
# Summaries (produced by aggregators, consumed by insights + rendering)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MonthlySummary:
    month: str  # YYYY-MM
    impressions: float = 0
    clicks: float = 0
    applies: float = 0
    cost: float = 0
    ctr: float = 0.0  # clicks / impressions
    cpc: float = 0.0  # cost / clicks
    cpa: float = 0.0  # cost / applies

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WeeklyRow:
    label: str  # e.g. 3/8–3/14
    start: date
    end: date
    impressions: float = 0
    clicks: float = 0
    applies: float = 0
    cost: float = 0
    cpc: float = 0.0
    cpa: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["start"] = self.start.isoformat()
        out["end"] = self.end.isoformat()
        return out


@dataclass(frozen=True)
class CampaignSummary:
    """Per-campaign report row. Rates come straight from the campaign file."""

    name: str
    impressions: float = 0
    clicks: float = 0
    applies: float = 0
    cost: float = 0
    jobs: Optional[float] = None
    ctr: Optional[float] = None
    asr: Optional[float] = None  # application-start rate
    ar: Optional[float] = None  # application rate
    cpc: Optional[float] = None
    cpa: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Report:
    """Everything the renderer needs for one month's review."""

    month: str
    current: MonthlySummary
    previous: MonthlySummary
    weekly: List[WeeklyRow] = field(default_factory=list)
    campaigns: List[CampaignSummary] = field(default_factory=list)
    monthly_insights: List[str] = field(default_factory=list)
    weekly_insights: List[str] = field(default_factory=list)
    campaign_insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "weekly": [w.to_dict() for w in self.weekly],
            "campaigns": [c.to_dict() for c in self.campaigns],
            "monthly_insights": list(self.monthly_insights),
            "weekly_insights": list(self.weekly_insights),
            "campaign_insights": list(self.campaign_insights),
        }
