"""End-to-end tests: CSV files in, report files and summary out (PDF off)."""
from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from cpr.cli import cli
from cpr.config import AppConfig, OutputConfig
from cpr.pipeline import build_report, run_pipeline
from cpr.schema import CampaignRow, DailyRow

DAILY = (
    "date,impressions,clicks,applies,cost\n"
    "2025-02-10,2000,40,4,8000\n"
    "2025-03-01,100,10,1,1000\n"
    "2025-03-20,900,20,4,2000\n"
)
CAMPAIGN = (
    "campaign,impressions,clicks,applies,cost,cpa\n"
    "A,500,5,0,700,\n"
    "B,800,12,5,1000,200\n"
)


def _inputs(tmp_path: Path):
    daily = tmp_path / "daily.csv"
    campaign = tmp_path / "campaign.csv"
    daily.write_text(DAILY, encoding="utf-8")
    campaign.write_text(CAMPAIGN, encoding="utf-8")
    return daily, campaign


class TestBuildReport:
    def test_five_outputs(self):
        from datetime import date

        daily = [DailyRow(date=date(2025, 3, 1), impressions=100, clicks=10, applies=1, cost=1000)]
        report = build_report(daily, [CampaignRow(name="A")], "2025-3")
        assert report.month == "2025-03"
        assert report.current.cpa == 1000.0
        assert report.previous.month == "2025-02"
        assert len(report.weekly) == 4
        assert [c.name for c in report.campaigns] == ["A"]
        # previous month is empty, so nothing to compare against
        assert report.monthly_insights == []


class TestRunPipeline:
    def test_writes_html_and_json(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        out = tmp_path / "out"
        summary = run_pipeline(daily, campaign, "2025-03", out, AppConfig(), with_pdf=False)

        assert summary["daily_rows"] == 3
        assert summary["daily_rows_in_month"] == 2
        assert summary["weeks"] == 4
        assert "pdf" not in summary["files"]
        assert (out / "report_2025-03.html").exists()

        saved = json.loads((out / "summary_2025-03.json").read_text(encoding="utf-8"))
        assert saved["report"]["current"]["applies"] == 5
        assert saved["report"]["campaign_insights"] == [
            "B has low cost-per-application and strong efficiency",
            "1 campaigns had zero applications and require review",
        ]
        assert "cost per application decreased, improving cost efficiency." in saved["report"]["monthly_insights"]

    def test_optional_tables(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        cfg = AppConfig(output=OutputConfig(write_tables=True, write_json=False))
        summary = run_pipeline(daily, campaign, "2025-03", tmp_path / "o", cfg, with_pdf=False)
        assert Path(summary["files"]["weekly_csv"]).exists()
        assert Path(summary["files"]["campaigns_csv"]).exists()
        assert "json" not in summary["files"]

    def test_pdf_bytes_written_when_enabled(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        with patch("cpr.pipeline.html_to_pdf", return_value=b"%PDF-1.4 fake") as fake:
            summary = run_pipeline(daily, campaign, "2025-03", tmp_path / "o", AppConfig())
        fake.assert_called_once()
        assert Path(summary["files"]["pdf"]).read_bytes().startswith(b"%PDF")


class TestCli:
    def test_run_no_pdf(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        result = CliRunner().invoke(
            cli,
            [
                "run",
                "--daily", str(daily),
                "--campaign", str(campaign),
                "--month", "2025-03",
                "--out", str(tmp_path / "out"),
                "--config", str(tmp_path / "missing.yaml"),
                "--no-pdf",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Report for 2025-03 complete" in result.output
        assert (tmp_path / "out" / "report_2025-03.html").exists()

    def test_insights_command(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        result = CliRunner().invoke(
            cli,
            ["insights", "--daily", str(daily), "--campaign", str(campaign), "--month", "2025-03"],
        )
        assert result.exit_code == 0, result.output
        assert "B has low cost-per-application" in result.output

    def test_bad_month_is_a_click_error(self, tmp_path):
        daily, campaign = _inputs(tmp_path)
        result = CliRunner().invoke(
            cli,
            ["insights", "--daily", str(daily), "--campaign", str(campaign), "--month", "March"],
        )
        assert result.exit_code != 0
        assert "YYYY-MM" in result.output

    def test_schema_error_is_a_click_error(self, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_text("date,impressions\n2025-03-01,1\n", encoding="utf-8")
        _, campaign = _inputs(tmp_path)
        result = CliRunner().invoke(
            cli,
            ["insights", "--daily", str(bad), "--campaign", str(campaign), "--month", "2025-03"],
        )
        assert result.exit_code != 0
        assert "missing required" in result.output
