"""Domain package: canonical accounts, statements and ratios."""

from .constants import (
    NOT_APPLICABLE,
    NOT_AVAILABLE,
    STATEMENT_CATEGORIES,
    UNRESOLVED,
    AccountCategory,
)
from .models import (
    CanonicalAccount,
    CategoryAmount,
    CurrencyDefaults,
    CurrencyDescriptor,
    EntityAccountCount,
    RatioSet,
    Statement,
)

__all__ = [
    "NOT_APPLICABLE",
    "NOT_AVAILABLE",
    "STATEMENT_CATEGORIES",
    "UNRESOLVED",
    "AccountCategory",
    "CanonicalAccount",
    "CategoryAmount",
    "CurrencyDefaults",
    "CurrencyDescriptor",
    "EntityAccountCount",
    "RatioSet",
    "Statement",
]
