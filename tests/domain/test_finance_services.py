"""Tests for statement aggregation services."""

from decimal import Decimal
import random
from unittest.mock import MagicMock

from src.domain.constants import AccountCategory
from src.domain.models import CanonicalAccount, CurrencyDescriptor
from src.domain.services.finance import (
    aggregate,
    build_ledger_statement,
    compute_category_breakdown,
    count_accounts_by_entity,
    select_ledger_accounts,
)
from src.domain.services.normalization import normalize_accounts


def _account(category, balance, ledger_id=1, code="USD", entity_id=None):
    return CanonicalAccount(
        id=None,
        name="",
        category=category,
        decimal_balance=None if balance is None else Decimal(balance),
        currency=CurrencyDescriptor(code, 2),
        ledger_id=ledger_id,
        entity_id=entity_id,
    )


def test_aggregation_example() -> None:
    """Asset, liability and revenue records roll up into totals."""
    records = [
        {"account_type": "ASSET", "balance": 100000, "ledger_id": 1},
        {"account_type": "LIABILITY", "balance": 40000, "ledger_id": 1},
        {"account_type": "REVENUE", "balance": 20000, "ledger_id": 1},
    ]

    statement = aggregate(normalize_accounts(records), ledger_id=1)

    assert statement.asset_total == Decimal("1000.00")
    assert statement.liability_total == Decimal("400.00")
    assert statement.revenue_total == Decimal("200.00")
    assert statement.expense_total == Decimal("0")
    assert statement.net_income == Decimal("200.00")
    assert statement.total_equity == Decimal("200.00")
    assert statement.account_count == 3
    assert statement.currency_code == "XXX"


def test_empty_input_yields_zero_totals() -> None:
    """An empty list is not an error."""
    statement = aggregate([])

    assert all(total == 0 for total in statement.totals.values())
    assert statement.net_income == 0
    assert statement.total_equity == 0
    assert statement.currency_code is None


def test_excluded_categories_and_non_numeric_balances() -> None:
    """CONTINGENT, MEMO and OTHER never reach the named totals."""
    accounts = [
        _account(AccountCategory.ASSET, "5"),
        _account(AccountCategory.CONTINGENT, "100"),
        _account(AccountCategory.MEMO, "100"),
        _account(AccountCategory.OTHER, "100"),
        _account(AccountCategory.EXPENSE, None),
    ]

    statement = aggregate(accounts)

    assert statement.asset_total == Decimal("5")
    assert sum(statement.totals.values()) == Decimal("5")
    assert statement.skipped_count == 1
    assert statement.account_count == 1


def test_sum_order_does_not_change_totals() -> None:
    """Aggregation is order-independent and deterministic."""
    accounts = [
        _account(AccountCategory.ASSET, "0.1"),
        _account(AccountCategory.ASSET, "0.2"),
        _account(AccountCategory.ASSET, "1E+20"),
        _account(AccountCategory.ASSET, "-1E+20"),
        _account(AccountCategory.EXPENSE, "3.3"),
    ]
    shuffled = list(accounts)
    random.Random(7).shuffle(shuffled)

    assert aggregate(accounts) == aggregate(shuffled)
    assert aggregate(accounts).asset_total == Decimal("0.3")


def test_mixed_currencies_are_logged() -> None:
    """Mixed currencies in one ledger produce a warning."""
    logger = MagicMock()

    statement = aggregate(
        [
            _account(AccountCategory.ASSET, "1", code="USD"),
            _account(AccountCategory.ASSET, "1", code="EUR"),
        ],
        ledger_id=5,
        logger=logger,
    )

    assert statement.currency_code is None
    logger.warning.assert_called_once()


def test_ledger_statement_selects_ledger_accounts() -> None:
    """Only accounts of the selected ledger are aggregated."""
    accounts = [
        _account(AccountCategory.ASSET, "10", ledger_id=1),
        _account(AccountCategory.ASSET, "99", ledger_id=2),
        _account(AccountCategory.LIABILITY, "4", ledger_id="1"),
    ]

    assert len(select_ledger_accounts(accounts, 1)) == 2
    statement = build_ledger_statement(accounts, 1)

    assert statement.asset_total == Decimal("10")
    assert statement.liability_total == Decimal("4")
    assert statement.ledger_id == 1


def test_category_breakdown_includes_every_category() -> None:
    """The breakdown follows category order and counts N/A balances."""
    accounts = [
        _account(AccountCategory.OTHER, "1"),
        _account(AccountCategory.ASSET, "2"),
        _account(AccountCategory.ASSET, None),
    ]

    breakdown = compute_category_breakdown(accounts)

    assert [item.category for item in breakdown] == [
        AccountCategory.ASSET,
        AccountCategory.OTHER,
    ]
    assert breakdown[0].amount == Decimal("2")
    assert breakdown[0].account_count == 2


def test_count_accounts_by_entity_uses_entity_names() -> None:
    """Counts are keyed by entity with names looked up from records."""
    accounts = [
        _account(AccountCategory.ASSET, "1", entity_id=1),
        _account(AccountCategory.ASSET, "1", entity_id="1"),
        _account(AccountCategory.ASSET, "1", entity_id=2),
        _account(AccountCategory.ASSET, "1"),
    ]
    entities = [{"entity_id": 1, "name": "Acme"}, "bad"]

    counts = count_accounts_by_entity(accounts, entities)

    assert [(c.entity_id, c.name, c.account_count) for c in counts] == [
        (1, "Acme", 2),
        (2, "Unknown", 1),
    ]


def test_large_totals_are_summed_without_rounding() -> None:
    """Totals beyond 28 digits keep every digit."""
    accounts = [
        _account(AccountCategory.ASSET, "1234567890123456789012345678.91"),
        _account(AccountCategory.ASSET, "0.09"),
        _account(AccountCategory.REVENUE, "1E+40"),
        _account(AccountCategory.EXPENSE, "0.01"),
    ]

    statement = aggregate(accounts)

    assert statement.asset_total == Decimal("1234567890123456789012345679.00")
    assert statement.net_income == Decimal(
        "9999999999999999999999999999999999999999.99"
    )
    assert statement.total_equity == statement.net_income


def test_large_and_small_balances_cancel_exactly() -> None:
    """Adding and removing a huge balance leaves the small ones intact."""
    accounts = [
        _account(AccountCategory.LIABILITY, "1E+40"),
        _account(AccountCategory.LIABILITY, "0.01"),
        _account(AccountCategory.LIABILITY, "-1E+40"),
    ]

    assert aggregate(accounts).liability_total == Decimal("0.01")
    assert compute_category_breakdown(accounts)[0].amount == Decimal("0.01")
