"""Tests for raw record normalization."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.constants import AccountCategory
from src.domain.models import CanonicalAccount, CurrencyDefaults
from src.domain.services.normalization import (
    ensure_canonical,
    normalize_account,
    normalize_accounts,
)


def _raw_account(**overrides):
    record = {
        "account_id": 11,
        "name": "Operating Cash",
        "account_type": "ASSET",
        "balance": 150000,
        "r_currency": {"currency_code": "USD", "scale": 2},
        "enriched_ledger": {"ledger_id": 3, "entity_id": "E-1"},
    }
    record.update(overrides)
    return record


def test_normalize_account_resolves_every_field() -> None:
    """A complete record resolves into a canonical account."""
    account = normalize_account(_raw_account())

    assert account.id == 11
    assert account.name == "Operating Cash"
    assert account.category is AccountCategory.ASSET
    assert account.decimal_balance == Decimal("1500.00")
    assert account.currency.code == "USD"
    assert account.ledger_id == 3
    assert account.entity_id == "E-1"
    assert account.minor_balance == 150000
    assert account.has_numeric_balance


def test_normalize_account_applies_defaults() -> None:
    """Missing fields degrade to documented defaults."""
    account = normalize_account(
        {"balance": "abc"},
        CurrencyDefaults(code="EUR", scale=3),
    )

    assert account.id is None
    assert account.name == ""
    assert account.category is AccountCategory.OTHER
    assert account.decimal_balance is None
    assert account.currency.code == "EUR"
    assert account.currency.scale == 3
    assert account.ledger_id is None
    assert account.entity_id is None
    assert not account.has_numeric_balance


def test_unknown_type_is_kept_in_collection() -> None:
    """Unknown types classify to OTHER and stay in the collection."""
    accounts = normalize_accounts([_raw_account(account_type="FOO")])

    assert len(accounts) == 1
    assert accounts[0].category is AccountCategory.OTHER


def test_normalize_accounts_skips_non_mappings() -> None:
    """Malformed elements are skipped with a warning."""
    logger = MagicMock()

    accounts = normalize_accounts(
        [_raw_account(), "garbage", None, _raw_account(account_id=12)],
        logger=logger,
    )

    assert [account.id for account in accounts] == [11, 12]
    assert logger.warning.call_count == 2


def test_normalization_is_deterministic() -> None:
    """Repeated runs yield equal canonical accounts."""
    records = [_raw_account(), _raw_account(account_id=12, balance=-5)]

    assert normalize_accounts(records) == normalize_accounts(records)


def test_ensure_canonical() -> None:
    """Canonical accounts pass through and raw mappings are normalized."""
    account = normalize_account(_raw_account())

    assert ensure_canonical(account) is account
    assert isinstance(ensure_canonical(_raw_account()), CanonicalAccount)
    assert ensure_canonical(42) is None
