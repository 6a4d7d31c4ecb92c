"""Helpers for Decimal normalization and exact arithmetic.

The default decimal context keeps 28 significant digits. Ledger balances are
arbitrary-size integers, so sums and display rounding run in a local context
sized to the operands instead.
"""

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Any


ZERO = Decimal("0")


def to_finite_decimal(value: Any) -> Decimal | None:
    """Normalize a JSON number to a finite Decimal.

    Args:
        value: Raw numeric value decoded from an API payload.

    Returns:
        Decimal | None: Normalized value, or None for booleans, strings,
        NaN, infinities and anything else that is not a number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        try:
            converted = Decimal(str(value))
        except InvalidOperation:
            return None
        return converted if converted.is_finite() else None
    return None


def shift_decimal_point(value: Decimal, places: int) -> Decimal:
    """Divide ``value`` by ``10 ** places`` without rounding."""
    sign, digits, exponent = value.as_tuple()
    return Decimal((sign, digits, exponent - places))


def exact_add(left: Decimal, right: Decimal) -> Decimal:
    """Add two finite decimals keeping every digit of the result."""
    span = max(left.adjusted(), right.adjusted()) - min(
        left.as_tuple().exponent,
        right.as_tuple().exponent,
    )
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, span + 2)
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        return left + right


def quantize_half_up(value: Decimal, places: int) -> Decimal:
    """Round ``value`` to ``places`` decimals, half up, at any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(value.adjusted(), 0) + places + 2
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        return value.quantize(
            Decimal((0, (1,), -places)),
            rounding=ROUND_HALF_UP,
        )


__all__ = [
    "to_finite_decimal",
    "shift_decimal_point",
    "exact_add",
    "quantize_half_up",
]
