"""SDLT calculation and presentation.

``compute`` is a pure function of the purchase price: no I/O, no state.
Amounts are computed in binary floating point without intermediate
rounding; only the presentation helpers round, half away from zero, to
whole pence.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from sdlt_service.core.bands import NORMAL_RATE_BANDS, SDLTBand
from sdlt_service.core.exceptions import InvalidInputError

PENNY = Decimal("0.01")
# wide enough to quantize any finite double to pence
_MONEY_CONTEXT = Context(prec=330)


def validate_property_value(value: Any) -> float:
    """Return ``value`` as a float, or raise ``InvalidInputError``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"property value must be a number, got {type(value).__name__}")
    try:
        value = float(value)
    except OverflowError:
        raise InvalidInputError("property value is too large") from None
    if not math.isfinite(value):
        raise InvalidInputError(f"property value must be finite, got {value}")
    if value < 0:
        raise InvalidInputError(f"property value must not be negative, got {value}")
    # -0.0 -> 0.0
    return value + 0.0


def breakdown(value: float) -> list[tuple[SDLTBand, float]]:
    """Tax owed per band, lowest band first, omitting bands that contribute nothing."""
    value = validate_property_value(value)
    parts = []
    for band in NORMAL_RATE_BANDS:
        tax = band.portion(value) * band.rate
        if tax > 0:
            parts.append((band, tax))
    return parts


def compute(value: float) -> float:
    """SDLT owed on a residential purchase at the normal rates."""
    return sum((tax for _, tax in breakdown(value)), 0.0)


def round_money(amount: float) -> Decimal:
    if amount == 0:
        amount = 0.0
    return Decimal(amount).quantize(PENNY, rounding=ROUND_HALF_UP, context=_MONEY_CONTEXT)


def format_money(amount: float) -> str:
    return f"{round_money(amount):f}"


def format_result(value: float, tax: float) -> str:
    return f"SDLT for £{format_money(value)} is £{format_money(tax)}"
