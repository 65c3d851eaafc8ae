"""Display formatting for report numbers. Missing values render as a dash."""

from __future__ import annotations

from typing import Optional

from cpr.safe_math import Number, is_missing, round_half_up

PLACEHOLDER = "–"


def format_percent(value: Optional[Number], digits: int = 1) -> str:
    """``0.1234`` → ``"12.3%"``."""
    if is_missing(value):
        return PLACEHOLDER
    return f"{value * 100:.{digits}f}%"


def format_currency(value: Optional[Number], symbol: str = "¥") -> str:
    """Whole currency units with thousands grouping, e.g. ``"¥1,234"``."""
    if is_missing(value):
        return PLACEHOLDER
    return f"{symbol}{round_half_up(value):,}"


def format_number(value: Optional[Number]) -> str:
    if is_missing(value):
        return PLACEHOLDER
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_rate_or_dash(value: Optional[Number], digits: int = 2) -> str:
    """Campaign table variant: a zero rate is shown as a dash too."""
    if is_missing(value) or value == 0:
        return PLACEHOLDER
    return format_percent(value, digits)


def format_currency_or_dash(value: Optional[Number], symbol: str = "¥") -> str:
    if is_missing(value) or value == 0:
        return PLACEHOLDER
    return format_currency(value, symbol)
