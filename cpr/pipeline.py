"""Main pipeline — orchestrates ingest → aggregate → insights → render → output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from cpr.aggregate import (
    aggregate_campaigns,
    aggregate_monthly,
    aggregate_weekly,
    month_key,
    previous_month,
)
from cpr.config import AppConfig
from cpr.insights import (
    build_campaign_insights,
    build_monthly_insights,
    build_weekly_insights,
)
from cpr.io_csv import (
    CsvSource,
    read_campaign_csv,
    read_daily_csv,
    write_bytes,
    write_report,
    write_summary_csv,
)
from cpr.pdf import html_to_pdf
from cpr.rendering import render_html
from cpr.schema import CampaignRow, DailyRow, Report
from cpr.validator import parse_month

logger = logging.getLogger(__name__)


def build_report(
    daily: Iterable[DailyRow],
    campaigns: Iterable[CampaignRow],
    month: str,
) -> Report:
    """Run every aggregator and insight generator for *month*.

    Pure: the caller supplies the month, nothing here reads the clock.
    """
    ym = parse_month(month)
    daily = list(daily)

    current = aggregate_monthly(daily, ym)
    previous = aggregate_monthly(daily, previous_month(ym))
    weekly = aggregate_weekly(daily, ym)
    camps = aggregate_campaigns(campaigns)

    return Report(
        month=ym,
        current=current,
        previous=previous,
        weekly=weekly,
        campaigns=camps,
        monthly_insights=build_monthly_insights(current, previous),
        weekly_insights=build_weekly_insights(weekly),
        campaign_insights=build_campaign_insights(camps),
    )


def render_outputs(
    report: Report,
    cfg: AppConfig,
    with_pdf: bool = True,
) -> Tuple[str, Optional[bytes]]:
    """Return ``(html, pdf_bytes)``; ``pdf_bytes`` is None when PDF is off."""
    html = render_html(report, cfg)
    if not with_pdf:
        return html, None

    return html, html_to_pdf(html, cfg.pdf)


def run_pipeline(
    daily_path: CsvSource,
    campaign_path: CsvSource,
    month: str,
    output_dir,
    cfg: AppConfig,
    with_pdf: Optional[bool] = None,
) -> Dict:
    """Execute the full pipeline. Returns summary dict.

    Outputs written to *output_dir*:
    - ``report_<YYYY-MM>.html``   always
    - ``report_<YYYY-MM>.pdf``    when PDF export is enabled
    - ``summary_<YYYY-MM>.json``  when ``output.write_json`` is set
    - ``weekly_<YYYY-MM>.csv`` / ``campaigns_<YYYY-MM>.csv`` when ``output.write_tables`` is set
    """
    ym = parse_month(month)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if with_pdf is None:
        with_pdf = cfg.pdf.enabled

    # 1. Read input
    daily = read_daily_csv(daily_path)
    campaigns = read_campaign_csv(campaign_path)

    # 2. Aggregate + insights
    report = build_report(daily, campaigns, ym)
    in_month = sum(1 for r in daily if month_key(r.date) == ym)
    logger.info(
        "month=%s daily_rows=%d in_month=%d campaigns=%d",
        ym,
        len(daily),
        in_month,
        len(campaigns),
    )

    # 3. Render + write outputs
    html, pdf_bytes = render_outputs(report, cfg, with_pdf=with_pdf)
    files = {"html": str(write_report(html, output_dir / f"report_{ym}.html"))}
    if pdf_bytes is not None:
        files["pdf"] = str(write_bytes(pdf_bytes, output_dir / f"report_{ym}.pdf"))
    if cfg.output.write_tables:
        files["weekly_csv"] = str(write_summary_csv(report.weekly, output_dir / f"weekly_{ym}.csv"))
        files["campaigns_csv"] = str(
            write_summary_csv(report.campaigns, output_dir / f"campaigns_{ym}.csv")
        )

    summary = {
        "month": ym,
        "previous_month": report.previous.month,
        "daily_rows": len(daily),
        "daily_rows_in_month": in_month,
        "undated_rows": sum(1 for r in daily if r.date is None),
        "campaigns": len(campaigns),
        "weeks": len(report.weekly),
        "report": report.to_dict(),
        "files": files,
    }
    if cfg.output.write_json:
        json_path = output_dir / f"summary_{ym}.json"
        write_report(json.dumps(summary, indent=2, ensure_ascii=False), json_path)
        files["json"] = str(json_path)

    for kind, path in files.items():
        logger.info("wrote %s → %s", kind, path)
    return summary
