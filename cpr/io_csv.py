"""CSV read-write helpers for the daily and campaign exports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Set, Tuple, Union

import pandas as pd

from cpr.mappers import (
    CAMPAIGN_ALIASES,
    DAILY_ALIASES,
    REQUIRED_CAMPAIGN_COLUMNS,
    REQUIRED_DAILY_COLUMNS,
    canonical_rename,
    map_dataframe_to_campaign_rows,
    map_dataframe_to_daily_rows,
)
from cpr.schema import CampaignRow, DailyRow

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, Any]  # path or file-like (e.g. a Streamlit upload)

_TEXT_COLUMNS = {"date", "name"}


class InputSchemaError(ValueError):
    """Raised when an input CSV is empty or missing required columns."""


def _read_raw(source: CsvSource) -> pd.DataFrame:
    # utf-8-sig swallows the BOM that spreadsheet exports tend to prepend
    df = pd.read_csv(source, dtype=str, skip_blank_lines=True, encoding="utf-8-sig")
    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df.dropna(how="all")


def _normalize_numeric_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce every non-text column to numbers.

    Thousands separators and currency marks are stripped; a trailing ``%``
    turns ``"12.3%"`` into ``0.123``. Anything unparseable becomes NaN and
    is resolved by the mappers (0 for raw metrics, None for optional ones).
    """
    out = df.copy()
    for col in out.columns:
        if col in _TEXT_COLUMNS:
            continue
        text = out[col].fillna("").astype(str).str.strip()
        is_pct = text.str.endswith("%")
        cleaned = text.str.replace(r"[,¥$%\s]", "", regex=True)
        values = pd.to_numeric(cleaned, errors="coerce").astype(float)
        values.loc[is_pct] = values.loc[is_pct] / 100
        out[col] = values
    return out


def _validate_required_columns(
    df: pd.DataFrame,
    required: Set[str],
    aliases: Dict[str, Tuple[str, ...]],
    label: str,
) -> None:
    missing = required - set(df.columns)
    if not missing:
        return

    missing_list = ", ".join(sorted(missing))
    detail = " | ".join(
        f"{m}: expected one of {', '.join(aliases.get(m, (m,)))}" for m in sorted(missing)
    )
    raise InputSchemaError(
        f"{label} CSV is missing required column(s): {missing_list}. Suggestions: {detail}"
    )


def _load_frame(
    source: CsvSource,
    required: Set[str],
    aliases: Dict[str, Tuple[str, ...]],
    label: str,
) -> pd.DataFrame:
    try:
        raw = _read_raw(source)
    except pd.errors.EmptyDataError as exc:
        raise InputSchemaError(f"{label} CSV is empty.") from exc

    df = raw.rename(columns=canonical_rename(raw.columns, aliases))
    _validate_required_columns(df, required, aliases, label)
    if df.empty:
        raise InputSchemaError(f"{label} CSV has a header but no data rows.")

    known = [c for c in df.columns if c in aliases]
    return _normalize_numeric_columns(df[known])


def read_daily_csv(source: CsvSource) -> List[DailyRow]:
    """Read + validate the daily export into typed :class:`DailyRow` records."""
    df = _load_frame(source, REQUIRED_DAILY_COLUMNS, DAILY_ALIASES, "Daily")
    rows = map_dataframe_to_daily_rows(df)

    undated = sum(1 for r in rows if r.date is None)
    if undated:
        logger.warning(
            "%d of %d daily row(s) have an unparseable date and will be left out of every period",
            undated,
            len(rows),
        )
    logger.debug("read %d daily row(s)", len(rows))
    return rows


def read_campaign_csv(source: CsvSource) -> List[CampaignRow]:
    """Read + validate the per-campaign export into typed :class:`CampaignRow` records."""
    df = _load_frame(source, REQUIRED_CAMPAIGN_COLUMNS, CAMPAIGN_ALIASES, "Campaign")
    rows = map_dataframe_to_campaign_rows(df)
    logger.debug("read %d campaign row(s)", len(rows))
    return rows


def write_summary_csv(rows: Iterable[Any], path: str | Path) -> Path:
    """Write schema rows (anything with ``to_dict``) as a UTF-8 CSV table."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([r.to_dict() for r in rows])
    df.to_csv(p, index=False, encoding="utf-8")
    return p


def write_report(text: str, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_bytes(data: bytes, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p
