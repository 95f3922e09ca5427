"""Money / rounding / display helpers.

Centralized so the rate engine, conversion service, and API responses use identical
rounding semantics (half-up, never banker's rounding).
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext


def round_to(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    amount = Decimal(str(value))
    # quantize needs room for every integer digit plus the requested fraction
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def format_fixed(value: float, places: int) -> str:
    """Render `value` with exactly `places` fractional digits, no grouping."""
    if not math.isfinite(value):
        return str(value)
    return f"{round_to(value, places):f}"
