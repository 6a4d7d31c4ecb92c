"""Domain services for statement aggregation."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from logging import Logger
from typing import Any

from src.domain.constants import (
    UNRESOLVED,
    AccountCategory,
    STATEMENT_CATEGORIES,
)
from src.domain.models import (
    CanonicalAccount,
    CategoryAmount,
    EntityAccountCount,
    RawEntityRecord,
    Statement,
)
from src.domain.services.filters import by_ledger, filter_records
from src.domain.services.resolution import path_accessor, resolve_first
from src.utils.decimal_utils import exact_add


UNKNOWN_ENTITY_NAME = "Unknown"


def aggregate(
    accounts: Iterable[CanonicalAccount],
    *,
    ledger_id: Any = None,
    logger: Logger | None = None,
) -> Statement:
    """Sum canonical account balances into statement totals.

    Only the five statement categories are totalled. Accounts classified as
    CONTINGENT, MEMO or OTHER, and accounts whose balance is not numeric,
    are left out of the totals. Sums keep every digit, so the order of the
    accounts does not change the result.

    Args:
        accounts: Canonical accounts of one ledger.
        ledger_id: Ledger the accounts belong to, recorded on the result.
        logger: Optional logger used for mixed-currency warnings.

    Returns:
        Statement: Category totals, net income and total equity.
    """
    totals = {category: Decimal("0") for category in STATEMENT_CATEGORIES}
    currency_codes: list[str] = []
    account_count = 0
    skipped_count = 0

    for account in accounts:
        if account.category not in totals:
            continue
        if not account.has_numeric_balance:
            skipped_count += 1
            continue
        totals[account.category] = exact_add(
            totals[account.category],
            account.decimal_balance,
        )
        account_count += 1
        if account.currency.code not in currency_codes:
            currency_codes.append(account.currency.code)

    if len(currency_codes) > 1 and logger is not None:
        logger.warning(
            f"Ledger {ledger_id} mixes currencies {sorted(currency_codes)}; "
            "totals are summed without conversion"
        )

    revenue_total = totals[AccountCategory.REVENUE]
    expense_total = totals[AccountCategory.EXPENSE]
    equity_total = totals[AccountCategory.EQUITY]
    net_income = exact_add(revenue_total, expense_total.copy_negate())
    return Statement(
        asset_total=totals[AccountCategory.ASSET],
        liability_total=totals[AccountCategory.LIABILITY],
        equity_total=equity_total,
        revenue_total=revenue_total,
        expense_total=expense_total,
        net_income=net_income,
        total_equity=exact_add(equity_total, net_income),
        ledger_id=ledger_id,
        currency_code=currency_codes[0] if len(currency_codes) == 1 else None,
        account_count=account_count,
        skipped_count=skipped_count,
    )


def select_ledger_accounts(
    accounts: Iterable[CanonicalAccount],
    ledger_id: Any,
) -> list[CanonicalAccount]:
    """Return the accounts owned by ``ledger_id`` in input order."""
    return filter_records(accounts, by_ledger(ledger_id))


def build_ledger_statement(
    accounts: Iterable[CanonicalAccount],
    ledger_id: Any,
    *,
    logger: Logger | None = None,
) -> Statement:
    """Aggregate the accounts of one ledger out of a mixed collection."""
    return aggregate(
        select_ledger_accounts(accounts, ledger_id),
        ledger_id=ledger_id,
        logger=logger,
    )


def compute_category_breakdown(
    accounts: Iterable[CanonicalAccount],
) -> list[CategoryAmount]:
    """Total every category, including those left out of statements.

    Args:
        accounts: Canonical accounts.

    Returns:
        list[CategoryAmount]: One entry per category present, in the
        declaration order of ``AccountCategory``.
    """
    amounts: dict[AccountCategory, Decimal] = {}
    counts: dict[AccountCategory, int] = {}
    for account in accounts:
        counts[account.category] = counts.get(account.category, 0) + 1
        amounts.setdefault(account.category, Decimal("0"))
        if account.has_numeric_balance:
            amounts[account.category] = exact_add(
                amounts[account.category],
                account.decimal_balance,
            )
    return [
        CategoryAmount(
            category=category,
            amount=amounts[category],
            account_count=counts[category],
        )
        for category in AccountCategory
        if category in counts
    ]


_ENTITY_NAME = (path_accessor("name"),)
_ENTITY_ID = (path_accessor("entity_id"),)


def count_accounts_by_entity(
    accounts: Iterable[CanonicalAccount],
    entities: Iterable[RawEntityRecord] = (),
) -> list[EntityAccountCount]:
    """Count accounts per owning entity.

    Args:
        accounts: Canonical accounts.
        entities: Raw entity records used to look up display names.

    Returns:
        list[EntityAccountCount]: Counts in first-seen entity order;
        accounts without an entity are not counted.
    """
    names: dict[Any, str] = {}
    for entity in entities:
        if not isinstance(entity, Mapping):
            continue
        entity_id = resolve_first(entity, _ENTITY_ID)
        name = resolve_first(entity, _ENTITY_NAME)
        if entity_id is not UNRESOLVED and name is not UNRESOLVED:
            names[str(entity_id)] = str(name)

    counts: dict[str, int] = {}
    first_ids: dict[str, Any] = {}
    for account in accounts:
        if account.entity_id is None:
            continue
        key = str(account.entity_id)
        first_ids.setdefault(key, account.entity_id)
        counts[key] = counts.get(key, 0) + 1
    return [
        EntityAccountCount(
            entity_id=first_ids[key],
            name=names.get(key, UNKNOWN_ENTITY_NAME),
            account_count=count,
        )
        for key, count in counts.items()
    ]


__all__ = [
    "aggregate",
    "select_ledger_accounts",
    "build_ledger_statement",
    "compute_category_breakdown",
    "count_accounts_by_entity",
]
