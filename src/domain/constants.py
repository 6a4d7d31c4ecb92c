"""Domain constants for ledger statements."""

from enum import Enum


class AccountCategory(str, Enum):
    """Closed set of account categories."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"
    CONTINGENT = "CONTINGENT"
    MEMO = "MEMO"
    OTHER = "OTHER"


class Marker(Enum):
    """Sentinels distinguishable from any real value."""

    UNRESOLVED = "unresolved"
    NOT_APPLICABLE = "not applicable"

    def __repr__(self) -> str:
        return f"<{self.value}>"


UNRESOLVED = Marker.UNRESOLVED
NOT_APPLICABLE = Marker.NOT_APPLICABLE

NOT_AVAILABLE = "N/A"

STATEMENT_CATEGORIES = (
    AccountCategory.ASSET,
    AccountCategory.LIABILITY,
    AccountCategory.EQUITY,
    AccountCategory.REVENUE,
    AccountCategory.EXPENSE,
)

CATEGORY_LABELS = {
    AccountCategory.ASSET: "Assets",
    AccountCategory.LIABILITY: "Liabilities",
    AccountCategory.EQUITY: "Equity",
    AccountCategory.REVENUE: "Revenue",
    AccountCategory.EXPENSE: "Expenses",
    AccountCategory.CONTINGENT: "Contingent",
    AccountCategory.MEMO: "Memo",
    AccountCategory.OTHER: "Other",
}

DEFAULT_CURRENCY_SCALE = 2
DEFAULT_CURRENCY_CODE = "XXX"


__all__ = [
    "AccountCategory",
    "Marker",
    "UNRESOLVED",
    "NOT_APPLICABLE",
    "NOT_AVAILABLE",
    "STATEMENT_CATEGORIES",
    "CATEGORY_LABELS",
    "DEFAULT_CURRENCY_SCALE",
    "DEFAULT_CURRENCY_CODE",
]
