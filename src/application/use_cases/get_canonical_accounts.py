"""Use case to read canonical accounts for presentation layers."""

from typing import Any

from src.application.ports.records_source import LedgerRecordsSourcePort
from src.domain.models import CanonicalAccount, CurrencyDefaults
from src.domain.services.normalization import normalize_accounts
from src.infrastructure.logging.logger import get_app_logger


class GetCanonicalAccountsUseCase:
    """Fetch raw account records and resolve them into canonical accounts."""

    def __init__(
        self,
        records_source: LedgerRecordsSourcePort,
        currency_defaults: CurrencyDefaults | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_source: Port providing raw ledger API records.
            currency_defaults: Fallback code and scale for accounts without
                currency data.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_source = records_source
        self._currency_defaults = currency_defaults or CurrencyDefaults()
        self._logger = logger or get_app_logger()

    def execute(self, ledger_id: Any = None) -> list[CanonicalAccount]:
        """Return canonical accounts, optionally for a single ledger.

        Args:
            ledger_id: Optional ledger whose accounts are requested.

        Returns:
            list[CanonicalAccount]: Accounts in API order.
        """
        if ledger_id is None:
            records = self._records_source.fetch_accounts()
        else:
            records = self._records_source.fetch_ledger_accounts(ledger_id)
        accounts = normalize_accounts(
            records,
            self._currency_defaults,
            logger=self._logger,
        )
        self._logger.info(
            f"Resolved {len(accounts)} canonical accounts "
            f"from {len(records)} records"
        )
        return accounts


__all__ = ["GetCanonicalAccountsUseCase"]
