"""Streamlit app — Campaign Performance Report.

Upload the daily CSV (A) and the per-campaign CSV (B), pick the month and
download the review deck as PDF (or HTML when no browser is available).
Nothing uploaded is stored; every run is a one-shot batch.
"""

from __future__ import annotations

from datetime import date
from typing import List

import pandas as pd
import streamlit as st

from cpr.config import AppConfig, load_config
from cpr.config_browser import BrowserConfigError
from cpr.io_csv import InputSchemaError, read_campaign_csv, read_daily_csv
from cpr.mappers import rows_to_dataframe
from cpr.pdf import PdfRenderError
from cpr.pipeline import build_report, render_outputs
from cpr.rendering import month_label
from cpr.schema import Report
from cpr.validator import validate_uploads

MAX_PREVIEW_ROWS = 20


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _default_month() -> str:
    """Current month as YYYY-MM (UI default only; the core never reads the clock)."""
    return date.today().strftime("%Y-%m")


def _render_insights(title: str, items: List[str]) -> None:
    st.markdown(f"**{title}**")
    if not items:
        st.caption("No notable changes.")
    for item in items:
        st.markdown(f"- {item}")


def _render_preview(report: Report) -> None:
    cur, prev = report.current, report.previous
    c1, c2, c3 = st.columns(3)
    c1.metric("Impressions", f"{cur.impressions:,.0f}", f"{cur.impressions - prev.impressions:+,.0f}")
    c2.metric("Applications", f"{cur.applies:,.0f}", f"{cur.applies - prev.applies:+,.0f}")
    c3.metric(
        "Cost per application",
        f"{cur.cpa:,.0f}",
        f"{cur.cpa - prev.cpa:+,.0f}",
        delta_color="inverse",
    )

    st.subheader(f"{month_label(prev.month)} → {month_label(cur.month)}")
    st.dataframe(rows_to_dataframe([prev, cur]), use_container_width=True)
    _render_insights("Monthly insights", report.monthly_insights)

    st.subheader("Weekly")
    if report.weekly:
        st.dataframe(rows_to_dataframe(report.weekly), use_container_width=True)
    else:
        st.info("No daily rows fall in the selected month.")
    _render_insights("Weekly insights", report.weekly_insights)

    st.subheader("Campaigns")
    camp_df = rows_to_dataframe(report.campaigns)
    st.dataframe(camp_df.head(MAX_PREVIEW_ROWS) if not camp_df.empty else pd.DataFrame(), use_container_width=True)
    _render_insights("Campaign insights", report.campaign_insights)


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────


def main() -> None:
    st.set_page_config(
        page_title="Campaign Performance Report",
        page_icon="📈",
        layout="wide",
    )
    st.title("📈 Campaign Performance Report")
    st.caption(
        "Upload the target month and both CSVs "
        "(A: daily data, B: campaign totals for the month)."
    )

    cfg: AppConfig = load_config("config.yaml")

    month = st.text_input("Target month (YYYY-MM)", value=_default_month())
    daily_file = st.file_uploader("CSV A — daily data", type=["csv"], key="daily")
    campaign_file = st.file_uploader("CSV B — campaign totals", type=["csv"], key="campaign")
    with_pdf = st.checkbox("Generate PDF (needs Chromium)", value=cfg.pdf.enabled)

    if not st.button("Generate report", type="primary"):
        return

    check = validate_uploads(month, daily_file, campaign_file)
    if not check["valid"]:
        for err in check["errors"]:
            st.error(f"❌ {err}")
        return

    try:
        report = build_report(
            read_daily_csv(daily_file), read_campaign_csv(campaign_file), month
        )
    except InputSchemaError as exc:
        st.error(f"❌ **CSV schema error:** {exc}")
        return

    with st.spinner("Rendering report..."):
        try:
            html, pdf_bytes = render_outputs(report, cfg, with_pdf=with_pdf)
        except (PdfRenderError, BrowserConfigError) as exc:
            st.warning(f"⚠️ PDF unavailable ({exc}). Falling back to HTML only.")
            html, pdf_bytes = render_outputs(report, cfg, with_pdf=False)

    st.success("✅ Report ready")
    col_pdf, col_html = st.columns(2)
    if pdf_bytes is not None:
        col_pdf.download_button(
            "⬇️ Download PDF",
            data=pdf_bytes,
            file_name=f"Indeed_Report_{report.month}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
    col_html.download_button(
        "⬇️ Download HTML",
        data=html.encode("utf-8"),
        file_name=f"Indeed_Report_{report.month}.html",
        mime="text/html",
        use_container_width=True,
    )

    st.divider()
    _render_preview(report)


if __name__ == "__main__":
    main()
