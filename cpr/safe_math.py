"""Null-tolerant arithmetic shared by every aggregator and insight rule."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

Number = Union[int, float]


def is_missing(v: Optional[Number]) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))


def sum_safe(values: Iterable[Optional[Number]]) -> Number:
    """Sum *values*, counting None (and NaN) as zero. Empty input sums to 0."""
    total: Number = 0
    for v in values:
        if not is_missing(v):
            total += v
    return total


def ratio(numerator: Optional[Number], denominator: Optional[Number]) -> Optional[float]:
    """Return ``numerator / denominator`` or None when the denominator is 0/absent.

    This is the only place a rate is divided; it never raises.
    """
    if is_missing(denominator) or denominator == 0:
        return None
    if is_missing(numerator):
        return None
    return numerator / denominator


def pct_change(curr: Optional[Number], prev: Optional[Number]) -> Optional[float]:
    """Relative change ``(curr - prev) / prev``; None if either side is absent or prev is 0."""
    if is_missing(curr) or is_missing(prev):
        return None
    return ratio(curr - prev, prev)


def round_half_up(v: Optional[Number]) -> Optional[int]:
    """Round to the nearest integer, halves away from zero (``2.5`` → ``3``)."""
    if is_missing(v):
        return None
    return int(Decimal(str(v)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
