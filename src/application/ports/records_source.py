"""Port for reading raw records from the ledger API."""

from typing import Any, Protocol

from src.domain.models import (
    RawAccountRecord,
    RawEntityRecord,
    RawLedgerRecord,
)


class LedgerRecordsSourcePort(Protocol):
    """Port exposing the decoded record arrays of the ledger service.

    Implementations validate the top-level shape of each payload and return
    the raw records unchanged.
    """

    def fetch_accounts(self) -> list[RawAccountRecord]:
        """Return every enriched account record."""

    def fetch_ledger_accounts(
        self,
        ledger_id: Any,
    ) -> list[RawAccountRecord]:
        """Return the enriched account records of one ledger."""

    def fetch_ledgers(self) -> list[RawLedgerRecord]:
        """Return every enriched ledger record."""

    def fetch_entities(self) -> list[RawEntityRecord]:
        """Return every enriched entity record."""


__all__ = ["LedgerRecordsSourcePort"]
