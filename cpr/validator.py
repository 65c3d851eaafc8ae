"""Validate request inputs before any aggregation runs."""
from __future__ import annotations

import re
from datetime import date
from typing import Any, List

_MONTH_RE = re.compile(r"^\s*(\d{4})[-/.](\d{1,2})(?:[-/.]\d{1,2})?\s*$")


class InvalidMonthError(ValueError):
    """Raised when a target month cannot be read as a calendar month."""


def parse_month(value: Any) -> str:
    """Normalise a target month to ``YYYY-MM``.

    Accepts ``date``/``datetime`` objects and strings such as ``"2025-03"``,
    ``"2025/3"`` or a full ``"2025-03-15"`` date (the day is ignored).

    Examples::

        parse_month("2025-3")          # → "2025-03"
        parse_month(date(2025, 3, 9))  # → "2025-03"
    """
    if isinstance(value, date):
        return f"{value.year:04d}-{value.month:02d}"

    m = _MONTH_RE.match(str(value or ""))
    if not m:
        raise InvalidMonthError(f"Month must look like YYYY-MM (got {value!r}).")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthError(f"Month {month} is out of range in {value!r}.")
    return f"{year:04d}-{month:02d}"


def validate_month(value: Any) -> dict:
    """Return {'valid': bool, 'month': str | None, 'errors': [...]}."""
    try:
        return {"valid": True, "month": parse_month(value), "errors": []}
    except InvalidMonthError as exc:
        return {"valid": False, "month": None, "errors": [str(exc)]}


def validate_uploads(month: Any, daily: Any, campaign: Any) -> dict:
    """Check that a report request carries a month and both CSV files.

    Returns a dict with keys:
    - ``valid``  : True only when every field is present and the month parses.
    - ``errors`` : list of human-readable problems (empty = OK).
    """
    errors: List[str] = []
    if not month:
        errors.append("Target month is required")
    else:
        errors.extend(validate_month(month)["errors"])
    if daily is None:
        errors.append("Daily CSV is required")
    if campaign is None:
        errors.append("Campaign CSV is required")
    return {"valid": len(errors) == 0, "errors": errors}
