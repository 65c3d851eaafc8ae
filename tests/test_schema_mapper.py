"""Tests for CSV record → schema row mapping."""
from __future__ import annotations

from datetime import date

import pandas as pd

from cpr.mappers import (
    DAILY_ALIASES,
    canonical_rename,
    map_dataframe_to_campaign_rows,
    map_dataframe_to_daily_rows,
    rows_to_dataframe,
)


def test_canonical_rename_accepts_export_and_english_headers():
    cols = ["期間：日単位", "表示回数", "Clicks", " applies ", "費用", "unknown_col"]
    assert canonical_rename(cols, DAILY_ALIASES) == {
        "期間：日単位": "date",
        "表示回数": "impressions",
        "Clicks": "clicks",
        " applies ": "applies",
        "費用": "cost",
    }


def test_canonical_rename_first_alias_wins():
    rename = canonical_rename(["cost", "spend"], DAILY_ALIASES)
    assert rename == {"cost": "cost"}


def test_map_daily_rows_parses_dates_and_optional_rates():
    df = pd.DataFrame([
        {"date": "2025/03/01", "impressions": 100.0, "clicks": 10.0, "applies": 1.0, "cost": 1000.0, "ctr": 0.1},
        {"date": "not a date", "impressions": float("nan"), "clicks": 2.0, "applies": 0.0, "cost": 5.0, "ctr": float("nan")},
    ])
    rows = map_dataframe_to_daily_rows(df)
    assert rows[0].date == date(2025, 3, 1)
    assert rows[0].ctr == 0.1
    assert rows[0].cpa is None
    assert rows[1].date is None
    assert rows[1].impressions == 0.0
    assert rows[1].ctr is None


def test_map_campaign_rows_keeps_name_and_per_job_fields():
    df = pd.DataFrame([
        {"name": " Nurses Tokyo ", "jobs": 12.0, "impressions": 5.0, "clicks": 1.0, "applies": 0.0,
         "cost": 9.0, "cpa": float("nan"), "avg_cost_per_job": 0.75},
    ])
    (row,) = map_dataframe_to_campaign_rows(df)
    assert row.name == "Nurses Tokyo"
    assert row.jobs == 12.0
    assert row.cpa is None
    assert row.avg_cost_per_job == 0.75


def test_rows_to_dataframe_has_internal_columns():
    df = pd.DataFrame([{"name": "C1", "impressions": 1.0, "clicks": 0.0, "applies": 0.0, "cost": 0.0}])
    out = rows_to_dataframe(map_dataframe_to_campaign_rows(df))
    assert {"name", "impressions", "cpa", "avg_applies_per_job"}.issubset(set(out.columns))
