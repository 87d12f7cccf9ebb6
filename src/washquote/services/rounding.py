"""Currency rounding helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
WHOLE = Decimal("1")


def _to_decimal(value: float) -> Decimal:
    # repr() gives the shortest round-tripping form, so 20.999999999999996
    # is rounded as written rather than as its binary expansion.
    return Decimal(repr(float(value)))


def round_currency(value: float) -> float:
    """Round to cents, halves away from zero."""

    return float(_to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))


def round_whole(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero."""

    return int(_to_decimal(value).quantize(WHOLE, rounding=ROUND_HALF_UP))
