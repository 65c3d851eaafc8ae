"""Render a :class:`~cpr.schema.Report` into the slide-style HTML document."""

from __future__ import annotations

import calendar
from functools import partial
from pathlib import Path
from typing import Optional

from jinja2 import Template

from cpr.config import AppConfig
from cpr.formatting import (
    PLACEHOLDER,
    format_currency,
    format_currency_or_dash,
    format_number,
    format_percent,
    format_rate_or_dash,
)
from cpr.schema import Report

_TEMPLATE_PATH = Path(__file__).parent / "templates" / "report.html.j2"


def _load_template() -> Template:
    return Template(_TEMPLATE_PATH.read_text(encoding="utf-8"), autoescape=True)


def month_label(month: str) -> str:
    """``"2025-03"`` → ``"Mar 2025"``."""
    year, mon = (int(p) for p in month.split("-", 1))
    return f"{calendar.month_abbr[mon]} {year}"


def render_title(template: str, month: str) -> str:
    year, mon = (int(p) for p in month.split("-", 1))
    return template.format(year=year, month=mon)


def render_html(report: Report, cfg: Optional[AppConfig] = None) -> str:
    """Build the full HTML document; every page is sized for PDF printing."""
    cfg = cfg or AppConfig()
    rcfg = cfg.report
    symbol = rcfg.currency_symbol

    return _load_template().render(
        title=render_title(rcfg.title_template, report.month),
        footer=rcfg.footer,
        contact=rcfg.contact,
        agenda=rcfg.agenda,
        issues=rcfg.issues,
        proposals=rcfg.proposals,
        budget_note=rcfg.budget_note,
        next_steps=rcfg.next_steps,
        width=cfg.pdf.width_px,
        height=cfg.pdf.height_px,
        current=report.current,
        monthly_rows=[
            (month_label(report.previous.month), report.previous),
            (month_label(report.current.month), report.current),
        ],
        weekly=report.weekly,
        campaigns=report.campaigns,
        monthly_insights=report.monthly_insights,
        weekly_insights=report.weekly_insights,
        campaign_insights=report.campaign_insights,
        placeholder=PLACEHOLDER,
        number=format_number,
        percent=format_percent,
        rate=format_rate_or_dash,
        currency=partial(format_currency, symbol=symbol),
        currency_or_dash=partial(format_currency_or_dash, symbol=symbol),
    )
