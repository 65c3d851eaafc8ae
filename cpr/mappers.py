"""Mapping utilities between exported CSV records and the internal row schema."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from cpr.schema import CampaignRow, DailyRow

# canonical field -> accepted source headers (Indeed export headers first)
METRIC_ALIASES: Dict[str, Tuple[str, ...]] = {
    "impressions": ("表示回数", "impressions"),
    "ctr": ("クリック率（CTR）", "クリック率(CTR)", "ctr"),
    "clicks": ("クリック数", "clicks"),
    "apply_start_rate": ("応募開始率 (ASR)", "応募開始率(ASR)", "asr", "apply_start_rate"),
    "apply_starts": ("応募開始数", "apply_starts"),
    "completion_rate": ("応募完了率", "completion_rate"),
    "applies": ("応募数", "applies", "applications"),
    "apply_rate": ("応募率 (AR)", "応募率(AR)", "ar", "apply_rate"),
    "cost": ("費用", "cost", "spend"),
    "cpc": ("クリック単価（CPC）", "クリック単価(CPC)", "cpc"),
    "cost_per_apply_start": ("応募開始単価（CPAS）", "応募開始単価(CPAS)", "cpas", "cost_per_apply_start"),
    "cpa": ("応募単価（CPA）", "応募単価(CPA)", "cpa"),
}

DAILY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "date": ("期間：日単位", "期間:日単位", "date", "day"),
    **METRIC_ALIASES,
}

CAMPAIGN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "name": ("キャンペーン", "campaign", "name"),
    "jobs": ("Job Count", "jobs", "job_count"),
    **METRIC_ALIASES,
    "avg_clicks_per_job": ("求人あたりの平均クリック数", "avg_clicks_per_job"),
    "avg_apply_starts_per_job": ("求人あたりの平均応募開始数", "avg_apply_starts_per_job"),
    "avg_applies_per_job": ("求人あたりの平均応募数", "avg_applies_per_job"),
    "avg_cost_per_job": ("求人あたりの平均費用", "avg_cost_per_job"),
}

RAW_METRICS = ("impressions", "clicks", "applies", "cost")
REQUIRED_DAILY_COLUMNS = {"date", *RAW_METRICS}
REQUIRED_CAMPAIGN_COLUMNS = {"name", *RAW_METRICS}

_OPTIONAL_DAILY = [k for k in METRIC_ALIASES if k not in RAW_METRICS]
_OPTIONAL_CAMPAIGN = [k for k in CAMPAIGN_ALIASES if k not in RAW_METRICS and k != "name"]


def canonical_rename(columns: Iterable[str], aliases: Dict[str, Tuple[str, ...]]) -> Dict[str, str]:
    """Return a ``{source_header: canonical_name}`` map for the headers present.

    Matching ignores surrounding whitespace and, for ASCII aliases, case. The
    first matching header wins when a file carries two aliases of one field.
    """
    lookup: Dict[str, str] = {}
    for canonical, names in aliases.items():
        for n in names:
            lookup.setdefault(n.strip().lower(), canonical)

    rename: Dict[str, str] = {}
    taken = set()
    for col in columns:
        canonical = lookup.get(str(col).strip().lower())
        if canonical is None or canonical in taken:
            continue
        rename[col] = canonical
        taken.add(canonical)
    return rename


def _to_float(v: Any) -> float:
    try:
        if pd.isna(v):
            return 0.0
    except (TypeError, ValueError):
        pass
    try:
        return float(v)
    except (TypeError, ValueError):
        return 0.0


def _to_optional_float(v: Any) -> Optional[float]:
    try:
        if pd.isna(v):
            return None
    except (TypeError, ValueError):
        pass
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def _to_text(v: Any) -> str:
    try:
        if pd.isna(v):
            return ""
    except (TypeError, ValueError):
        pass
    return str(v).strip()


def _to_date(v: Any) -> Optional[date]:
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    ts = pd.to_datetime(v, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def map_record_to_daily_row(record: Dict[str, Any]) -> DailyRow:
    return DailyRow(
        date=_to_date(record.get("date")),
        impressions=_to_float(record.get("impressions")),
        clicks=_to_float(record.get("clicks")),
        applies=_to_float(record.get("applies")),
        cost=_to_float(record.get("cost")),
        **{k: _to_optional_float(record.get(k)) for k in _OPTIONAL_DAILY},
    )


def map_record_to_campaign_row(record: Dict[str, Any]) -> CampaignRow:
    return CampaignRow(
        name=_to_text(record.get("name")),
        impressions=_to_float(record.get("impressions")),
        clicks=_to_float(record.get("clicks")),
        applies=_to_float(record.get("applies")),
        cost=_to_float(record.get("cost")),
        **{k: _to_optional_float(record.get(k)) for k in _OPTIONAL_CAMPAIGN},
    )


def map_dataframe_to_daily_rows(df: pd.DataFrame) -> List[DailyRow]:
    return [map_record_to_daily_row(r) for r in df.to_dict(orient="records")]


def map_dataframe_to_campaign_rows(df: pd.DataFrame) -> List[CampaignRow]:
    return [map_record_to_campaign_row(r) for r in df.to_dict(orient="records")]


def rows_to_dataframe(rows: Sequence[Any]) -> pd.DataFrame:
    """Flatten any schema rows/summaries (anything with ``to_dict``) to a DataFrame."""
    return pd.DataFrame([r.to_dict() for r in rows])
