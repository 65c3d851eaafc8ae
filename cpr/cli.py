"""CLI entry point for Campaign Performance Report."""

from __future__ import annotations

import logging

import click

from cpr import __version__
from cpr.config import load_config
from cpr.config_browser import BrowserConfigError
from cpr.io_csv import InputSchemaError, read_campaign_csv, read_daily_csv
from cpr.pdf import PdfRenderError
from cpr.pipeline import build_report, run_pipeline
from cpr.validator import InvalidMonthError


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="cpr")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool):
    """Campaign Performance Report — monthly ad performance review builder."""
    _setup_logging(verbose)


@cli.command()
@click.option("--daily", "daily_path", required=True, help="Path to daily CSV (A)")
@click.option("--campaign", "campaign_path", required=True, help="Path to campaign CSV (B)")
@click.option("--month", required=True, help="Target month, YYYY-MM")
@click.option("--out", "output_dir", default=None, help="Output directory")
@click.option("--config", "config_path", default="config.yaml", help="Config file path")
@click.option(
    "--pdf/--no-pdf",
    "with_pdf",
    default=None,
    help="Print a PDF with headless Chromium (default: config pdf.enabled)",
)
def run(
    daily_path: str,
    campaign_path: str,
    month: str,
    output_dir: str | None,
    config_path: str,
    with_pdf: bool | None,
):
    """Build the monthly report (HTML, optional PDF, JSON summary)."""
    cfg = load_config(config_path)
    output_dir = output_dir or cfg.output.dir

    click.echo(f"📂 Daily:    {daily_path}")
    click.echo(f"📂 Campaign: {campaign_path}")
    click.echo(f"📂 Output:   {output_dir}")

    try:
        summary = run_pipeline(
            daily_path, campaign_path, month, output_dir, cfg, with_pdf=with_pdf
        )
    except (InputSchemaError, InvalidMonthError, BrowserConfigError, PdfRenderError) as exc:
        raise click.ClickException(str(exc))

    report = summary["report"]
    click.echo("")
    click.echo(f"✅ Report for {summary['month']} complete!")
    click.echo(f"   Daily rows in month: {summary['daily_rows_in_month']} / {summary['daily_rows']}")
    if summary["undated_rows"]:
        click.echo(f"   ⚠️  Rows with unreadable dates skipped: {summary['undated_rows']}")
    click.echo(f"   Weeks:     {summary['weeks']}")
    click.echo(f"   Campaigns: {summary['campaigns']}")
    n_insights = sum(
        len(report[k]) for k in ("monthly_insights", "weekly_insights", "campaign_insights")
    )
    click.echo(f"   Insights:  {n_insights}")
    for kind, path in summary["files"].items():
        click.echo(f"   {kind:<13}→ {path}")


@cli.command()
@click.option("--daily", "daily_path", required=True, help="Path to daily CSV (A)")
@click.option("--campaign", "campaign_path", required=True, help="Path to campaign CSV (B)")
@click.option("--month", required=True, help="Target month, YYYY-MM")
def insights(daily_path: str, campaign_path: str, month: str):
    """Print the month's insights without rendering anything."""
    try:
        report = build_report(
            read_daily_csv(daily_path), read_campaign_csv(campaign_path), month
        )
    except (InputSchemaError, InvalidMonthError) as exc:
        raise click.ClickException(str(exc))

    sections = [
        ("Monthly", report.monthly_insights),
        ("Weekly", report.weekly_insights),
        ("Campaigns", report.campaign_insights),
    ]
    for title, items in sections:
        click.echo(f"## {title}")
        if not items:
            click.echo("   (none)")
        for item in items:
            click.echo(f" - {item}")


if __name__ == "__main__":
    cli()
