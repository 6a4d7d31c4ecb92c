"""Minor-unit scaling and financial display formatting."""

from decimal import Decimal
from typing import Any, Literal

from src.domain.constants import NOT_AVAILABLE
from src.domain.models.accounts import CurrencyDefaults, CurrencyDescriptor
from src.utils.decimal_utils import (
    quantize_half_up,
    shift_decimal_point,
    to_finite_decimal,
)


NegativeStyle = Literal["parentheses", "minus"]


def to_decimal(minor_balance: Any, scale: int) -> Decimal | str:
    """Convert an integer minor-unit balance to major units.

    The division only moves the decimal point, so balances of any length
    keep every digit.

    Args:
        minor_balance: Balance in minor units (e.g. cents).
        scale: Non-negative number of decimal places of the currency.

    Returns:
        Decimal | str: Balance in major units, or ``"N/A"`` when the
        balance is not a finite number.
    """
    value = to_finite_decimal(minor_balance)
    if value is None:
        return NOT_AVAILABLE
    return shift_decimal_point(value, scale)


def to_decimal_or_none(minor_balance: Any, scale: int) -> Decimal | None:
    """Same as ``to_decimal`` with None in place of ``"N/A"``."""
    converted = to_decimal(minor_balance, scale)
    return None if isinstance(converted, str) else converted


def format_amount(
    value: Any,
    *,
    grouped: bool = True,
    negative_style: NegativeStyle = "parentheses",
    currency_symbol: str = "",
    places: int | None = None,
) -> str:
    """Render a decimal amount the way financial statements display it.

    Args:
        value: Amount in major units.
        grouped: Whether to insert thousands separators.
        negative_style: ``parentheses`` renders ``(1,234)``, ``minus``
            renders ``-1,234``.
        currency_symbol: Optional symbol prepended to the amount.
        places: Fixed decimal places; None keeps the value's own exponent.

    Returns:
        str: Display string, or ``"N/A"`` for non-numeric input.
    """
    amount = to_finite_decimal(value)
    if amount is None:
        return NOT_AVAILABLE
    if places is not None:
        amount = quantize_half_up(amount, places)
    magnitude = amount.copy_abs()
    body = f"{magnitude:,f}" if grouped else f"{magnitude:f}"
    if amount < 0:
        if negative_style == "parentheses":
            return f"{currency_symbol}({body})"
        return f"{currency_symbol}-{body}"
    return f"{currency_symbol}{body}"


def format_balance(
    minor_balance: Any,
    currency: CurrencyDescriptor | None = None,
    show_decimal: bool = True,
    currency_symbol: str = "",
    defaults: CurrencyDefaults | None = None,
) -> str:
    """Format a raw minor-unit balance using its currency scale.

    Args:
        minor_balance: Balance in minor units.
        currency: Resolved currency; the default scale applies when None.
        show_decimal: Show ``scale`` decimal places, else round to a whole
            number.
        currency_symbol: Optional symbol prepended to the amount.
        defaults: Fallback scale when no currency is given.

    Returns:
        str: Display string, or ``"N/A"`` for a non-numeric balance.
    """
    if currency is not None:
        scale = currency.scale
    else:
        scale = (defaults or CurrencyDefaults()).scale
    converted = to_decimal(minor_balance, scale)
    if isinstance(converted, str):
        return converted
    return format_amount(
        converted,
        currency_symbol=currency_symbol,
        places=scale if show_decimal else 0,
    )


__all__ = [
    "NegativeStyle",
    "to_decimal",
    "to_decimal_or_none",
    "format_amount",
    "format_balance",
]
