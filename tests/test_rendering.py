"""Tests for HTML report rendering."""
from __future__ import annotations

from datetime import date

from cpr.config import AppConfig
from cpr.pipeline import build_report
from cpr.rendering import month_label, render_html, render_title
from cpr.schema import CampaignRow, DailyRow


def _report():
    daily = [
        DailyRow(date=date(2025, 2, 3), impressions=2000, clicks=40, applies=4, cost=8000),
        DailyRow(date=date(2025, 3, 1), impressions=1500, clicks=45, applies=6, cost=6000),
        DailyRow(date=date(2025, 3, 25), impressions=500, clicks=15, applies=4, cost=1500),
    ]
    campaigns = [
        CampaignRow(name="<b>Nurses & Co</b>", applies=5, cost=1000, cpa=200.0, ctr=0.03),
        CampaignRow(name="Drivers", applies=0, cost=500),
    ]
    return build_report(daily, campaigns, "2025-03")


def test_month_label_and_title():
    assert month_label("2025-03") == "Mar 2025"
    assert render_title("{year}/{month} review", "2025-03") == "2025/3 review"


def test_render_contains_sections_and_values():
    html = render_html(_report())
    assert "2025/3 Indeed PLUS Performance Review" in html
    assert "Weekly trend and analysis" in html
    assert "3/1–3/7" in html
    assert "3/22–3/31" in html
    assert "¥750" in html  # current month cpa = 7500 / 10
    assert "Feb 2025" in html and "Mar 2025" in html
    assert "cost per application decreased, improving cost efficiency." in html
    assert "1 campaigns had zero applications and require review" in html


def test_campaign_names_are_escaped():
    html = render_html(_report())
    assert "<b>Nurses" not in html
    assert "&lt;b&gt;Nurses &amp; Co&lt;/b&gt;" in html


def test_page_size_and_footer_come_from_config():
    cfg = AppConfig()
    cfg.pdf.width_px = 1280
    cfg.report.footer = "Acme Footer"
    html = render_html(_report(), cfg)
    assert "size: 1280px 540px" in html
    assert html.count("Acme Footer") == 10  # one per page


def test_empty_month_renders_placeholder_text():
    report = build_report([], [], "2025-03")
    html = render_html(report)
    assert "No daily data for this month." in html
