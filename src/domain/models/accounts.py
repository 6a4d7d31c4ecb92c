"""Domain models for canonical accounts."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_CURRENCY_SCALE,
    AccountCategory,
)


@dataclass(frozen=True)
class CurrencyDescriptor:
    """Currency code and number of minor-unit decimal places.

    Attributes:
        code: Currency code as returned by the API (e.g. USD).
        scale: Decimal places between minor and major units.
    """

    code: str
    scale: int = DEFAULT_CURRENCY_SCALE


@dataclass(frozen=True)
class CurrencyDefaults:
    """Fallback currency values applied when a record resolves none."""

    code: str = DEFAULT_CURRENCY_CODE
    scale: int = DEFAULT_CURRENCY_SCALE


@dataclass(frozen=True)
class CanonicalAccount:
    """Fully resolved account derived from one raw account record.

    Attributes:
        id: Account identifier, or None when the record carries none.
        name: Account display name.
        category: Resolved account category.
        decimal_balance: Balance in major units, None when non-numeric.
        currency: Resolved currency descriptor.
        ledger_id: Owning ledger identifier, if any.
        entity_id: Owning entity identifier, if any.
        minor_balance: Raw balance value as received.
    """

    id: Any
    name: str
    category: AccountCategory
    decimal_balance: Decimal | None
    currency: CurrencyDescriptor
    ledger_id: Any = None
    entity_id: Any = None
    minor_balance: Any = None

    @property
    def has_numeric_balance(self) -> bool:
        return self.decimal_balance is not None


__all__ = ["CurrencyDescriptor", "CurrencyDefaults", "CanonicalAccount"]
