"""Load and validate config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml


@dataclass
class ReportConfig:
    """Fixed text of the review deck. ``{year}`` / ``{month}`` are filled per report."""

    title_template: str = "{year}/{month} Indeed PLUS Performance Review"
    footer: str = "Media House Holdings, Inc. HR Tech SBU"
    contact: str = "HR Tech SBU / Media House Holdings, Inc."
    currency_symbol: str = "¥"
    agenda: List[str] = field(
        default_factory=lambda: [
            "Monthly overview and month-over-month comparison",
            "Weekly trend and analysis",
            "Performance by campaign",
            "Issues and room for improvement",
            "Improvement proposals",
            "Budget simulation",
        ]
    )
    issues: List[str] = field(
        default_factory=lambda: [
            "Close the efficiency gap between campaigns and fix zero-application campaigns",
            "Streamline the application flow (raise completion rate)",
            "Rebalance budget toward high-efficiency campaigns",
        ]
    )
    proposals: List[str] = field(
        default_factory=lambda: [
            "Roll out winning patterns (job content, images, messaging)",
            "Shorten the application flow and optimise for mobile",
            "Optimise budget per brand / campaign",
        ]
    )
    budget_note: str = "Current vs. increased-budget plan (coefficients to be templated later)"
    next_steps: List[str] = field(
        default_factory=lambda: [
            "Agree on priority actions",
            "Weekly measurement and PDCA",
            "Reconfirm next month's target KPIs",
        ]
    )


@dataclass
class PdfConfig:
    enabled: bool = True
    width_px: int = 960
    height_px: int = 540
    print_background: bool = True
    timeout_ms: int = 30_000


@dataclass
class OutputConfig:
    dir: str = "output"
    write_json: bool = True
    write_tables: bool = False  # also dump weekly/campaign tables as CSV


@dataclass
class AppConfig:
    report: ReportConfig = field(default_factory=ReportConfig)
    pdf: PdfConfig = field(default_factory=PdfConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path = "config.yaml") -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    p = Path(path)
    raw: dict = {}
    if p.exists():
        with open(p, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    return AppConfig(
        report=ReportConfig(**raw.get("report", {})),
        pdf=PdfConfig(**raw.get("pdf", {})),
        output=OutputConfig(**raw.get("output", {})),
    )
