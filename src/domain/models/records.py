"""Typed views of the raw records returned by the ledger API.

Every key is optional: the API returns the same fact at different locations
depending on the endpoint and the enrichment level of the record.
"""

from typing import Any, TypedDict


class RawCurrency(TypedDict, total=False):
    currency_code: str
    code: str
    scale: int
    name: str


class RawAccountCode(TypedDict, total=False):
    account_code: str
    name: str
    type: str


class RawEntityRef(TypedDict, total=False):
    entity_id: Any
    name: str
    country_code: str


class RawCountry(TypedDict, total=False):
    country_code: str
    name: str


class RawEnrichedLedger(TypedDict, total=False):
    ledger_id: Any
    entity_id: Any
    name: str
    r_currency: RawCurrency
    r_entity: RawEntityRef


class RawLedgerRef(TypedDict, total=False):
    ledger_id: Any
    r_currency: RawCurrency


class RawAccountRecord(TypedDict, total=False):
    """Account payload of ``/enriched-accounts/`` endpoints."""

    account_id: Any
    account_extra_id: Any
    name: str
    balance: int
    account_type: str
    type: str
    account_code: RawAccountCode
    code: RawAccountCode
    r_currency: RawCurrency
    currency: RawCurrency
    ledger: RawLedgerRef
    enriched_ledger: RawEnrichedLedger
    currency_code: str
    ledger_id: Any
    entity_id: Any
    entity: RawEntityRef


class RawLedgerRecord(TypedDict, total=False):
    """Ledger payload of ``/enriched-ledgers/``."""

    ledger_id: Any
    name: str
    description: str
    entity_id: Any
    r_entity: RawEntityRef
    entity: RawEntityRef
    r_currency: RawCurrency
    currency_code: str
    r_country: RawCountry
    country_code: str


class RawEntityRecord(TypedDict, total=False):
    """Entity payload of ``/enriched-entities/``."""

    entity_id: Any
    name: str
    type: str
    entity_type: str
    country_code: str
    r_country: RawCountry
    description: str


__all__ = [
    "RawCurrency",
    "RawAccountCode",
    "RawEntityRef",
    "RawCountry",
    "RawEnrichedLedger",
    "RawLedgerRef",
    "RawAccountRecord",
    "RawLedgerRecord",
    "RawEntityRecord",
]
