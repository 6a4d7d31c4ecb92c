"""Domain models package."""

from .accounts import CanonicalAccount, CurrencyDefaults, CurrencyDescriptor
from .finance import (
    CategoryAmount,
    EntityAccountCount,
    RatioSet,
    RatioValue,
    Statement,
)
from .records import (
    RawAccountRecord,
    RawEntityRecord,
    RawLedgerRecord,
)

__all__ = [
    "CanonicalAccount",
    "CurrencyDefaults",
    "CurrencyDescriptor",
    "CategoryAmount",
    "EntityAccountCount",
    "RatioSet",
    "RatioValue",
    "Statement",
    "RawAccountRecord",
    "RawEntityRecord",
    "RawLedgerRecord",
]
