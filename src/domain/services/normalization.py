"""Normalization of raw account records into canonical accounts."""

from collections.abc import Iterable, Mapping
from logging import Logger
from typing import Any

from src.domain.constants import UNRESOLVED
from src.domain.models.accounts import CanonicalAccount, CurrencyDefaults
from src.domain.models.records import RawAccountRecord
from src.domain.services.classification import classify
from src.domain.services.resolution import (
    resolve_account_id,
    resolve_account_type,
    resolve_currency_or_default,
    resolve_entity_id,
    resolve_ledger_id,
)
from src.domain.services.scaling import to_decimal_or_none


def normalize_account(
    record: RawAccountRecord,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalAccount:
    """Resolve one raw account record into a canonical account.

    Args:
        record: Raw account record from the ledger API.
        defaults: Currency fallbacks for records without currency data.

    Returns:
        CanonicalAccount: Resolved account.
    """
    currency = resolve_currency_or_default(record, defaults)
    minor_balance = record.get("balance")
    name = record.get("name")
    return CanonicalAccount(
        id=_or_none(resolve_account_id(record)),
        name=name if isinstance(name, str) else "",
        category=classify(resolve_account_type(record)),
        decimal_balance=to_decimal_or_none(minor_balance, currency.scale),
        currency=currency,
        ledger_id=_or_none(resolve_ledger_id(record)),
        entity_id=_or_none(resolve_entity_id(record)),
        minor_balance=minor_balance,
    )


def normalize_accounts(
    records: Iterable[Any],
    defaults: CurrencyDefaults | None = None,
    logger: Logger | None = None,
) -> list[CanonicalAccount]:
    """Resolve a batch of raw records, keeping their order.

    Elements that are not mappings are skipped so one malformed element
    cannot abort the batch.

    Args:
        records: Raw account records.
        defaults: Currency fallbacks for records without currency data.
        logger: Optional logger used for skipped elements.

    Returns:
        list[CanonicalAccount]: Canonical accounts in input order.
    """
    accounts: list[CanonicalAccount] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            if logger is not None:
                logger.warning(
                    f"Skipping account record #{index}: "
                    f"expected an object, got {type(record).__name__}"
                )
            continue
        accounts.append(normalize_account(record, defaults))
    return accounts


def ensure_canonical(
    record: Any,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalAccount | None:
    """Return ``record`` as a canonical account when possible."""
    if isinstance(record, CanonicalAccount):
        return record
    if isinstance(record, Mapping):
        return normalize_account(record, defaults)
    return None


def _or_none(value: Any) -> Any:
    return None if value is UNRESOLVED else value


__all__ = ["normalize_account", "normalize_accounts", "ensure_canonical"]
