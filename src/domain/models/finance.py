"""Domain models for statements and ratios."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from src.domain.constants import AccountCategory, Marker


RatioValue = Decimal | Marker


@dataclass(frozen=True)
class Statement:
    """Aggregated category totals for one ledger.

    Attributes:
        asset_total: Sum of ASSET balances.
        liability_total: Sum of LIABILITY balances.
        equity_total: Sum of EQUITY balances.
        revenue_total: Sum of REVENUE balances.
        expense_total: Sum of EXPENSE balances.
        net_income: Revenue minus expenses.
        total_equity: Equity plus net income.
        ledger_id: Ledger the totals belong to, if known.
        currency_code: Currency of the summed balances, if known.
        account_count: Accounts that contributed to a total.
        skipped_count: Accounts left out for a non-numeric balance.
    """

    asset_total: Decimal
    liability_total: Decimal
    equity_total: Decimal
    revenue_total: Decimal
    expense_total: Decimal
    net_income: Decimal
    total_equity: Decimal
    ledger_id: Any = None
    currency_code: str | None = None
    account_count: int = 0
    skipped_count: int = 0

    @property
    def totals(self) -> dict[AccountCategory, Decimal]:
        """Return the named totals keyed by category."""
        return {
            AccountCategory.ASSET: self.asset_total,
            AccountCategory.LIABILITY: self.liability_total,
            AccountCategory.EQUITY: self.equity_total,
            AccountCategory.REVENUE: self.revenue_total,
            AccountCategory.EXPENSE: self.expense_total,
        }


@dataclass(frozen=True)
class RatioSet:
    """Financial ratios derived from a statement.

    Each value is either an unrounded Decimal or ``NOT_APPLICABLE`` when its
    denominator is zero.
    """

    current_ratio: RatioValue
    debt_to_equity_ratio: RatioValue
    net_margin: RatioValue


@dataclass(frozen=True)
class CategoryAmount:
    """Total balance and account count for one category."""

    category: AccountCategory
    amount: Decimal
    account_count: int


@dataclass(frozen=True)
class EntityAccountCount:
    """Number of accounts owned by one entity."""

    entity_id: Any
    name: str
    account_count: int


__all__ = [
    "RatioValue",
    "Statement",
    "RatioSet",
    "CategoryAmount",
    "EntityAccountCount",
]
