"""Use case to compute the statement and ratios of one ledger."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from src.application.ports.records_source import LedgerRecordsSourcePort
from src.domain.models import (
    CanonicalAccount,
    CurrencyDefaults,
    RatioSet,
    Statement,
)
from src.domain.services.finance import aggregate, select_ledger_accounts
from src.domain.services.normalization import normalize_accounts
from src.domain.services.ratios import compute_ratios
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerStatementView:
    """Statement, ratios and drill-down accounts of one ledger.

    Attributes:
        ledger_id: Selected ledger.
        statement: Category totals with net income and total equity.
        ratios: Unrounded ratios derived from the statement.
        accounts: Every canonical account of the ledger, including the
            categories left out of statement totals.
    """

    ledger_id: Any
    statement: Statement
    ratios: RatioSet
    accounts: tuple[CanonicalAccount, ...]


class GetLedgerStatementUseCase:
    """Aggregate one ledger into a statement and its ratios."""

    def __init__(
        self,
        records_source: LedgerRecordsSourcePort | None = None,
        currency_defaults: CurrencyDefaults | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_source: Port used when accounts must be fetched.
            currency_defaults: Fallback code and scale for raw records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_source = records_source
        self._currency_defaults = currency_defaults or CurrencyDefaults()
        self._logger = logger or get_app_logger()

    def execute(self, ledger_id: Any) -> LedgerStatementView:
        """Fetch the accounts of ``ledger_id`` and summarize them.

        Every record returned by the ledger endpoint belongs to the ledger,
        whether or not it carries its ledger id.

        Raises:
            RuntimeError: If the use case has no records source.
        """
        if self._records_source is None:
            raise RuntimeError("A records source is required to fetch accounts.")
        records = self._records_source.fetch_ledger_accounts(ledger_id)
        accounts = normalize_accounts(
            records,
            self._currency_defaults,
            logger=self._logger,
        )
        return self._build_view(accounts, ledger_id)

    def summarize(
        self,
        accounts: Iterable[CanonicalAccount],
        ledger_id: Any,
    ) -> LedgerStatementView:
        """Summarize already resolved accounts for one ledger.

        Args:
            accounts: Canonical accounts, possibly spanning several ledgers.
            ledger_id: Ledger to summarize.

        Returns:
            LedgerStatementView: Statement, ratios and ledger accounts.
        """
        return self._build_view(
            select_ledger_accounts(accounts, ledger_id),
            ledger_id,
        )

    def _build_view(
        self,
        ledger_accounts: list[CanonicalAccount],
        ledger_id: Any,
    ) -> LedgerStatementView:
        statement = aggregate(
            ledger_accounts,
            ledger_id=ledger_id,
            logger=self._logger,
        )
        ratios = compute_ratios(statement)
        if statement.skipped_count:
            self._logger.warning(
                f"Ledger {ledger_id}: {statement.skipped_count} accounts "
                "have a non-numeric balance and were left out of totals"
            )
        self._logger.info(
            f"Statement computed for ledger {ledger_id}: "
            f"assets={statement.asset_total}, "
            f"liabilities={statement.liability_total}, "
            f"net_income={statement.net_income}"
        )
        return LedgerStatementView(
            ledger_id=ledger_id,
            statement=statement,
            ratios=ratios,
            accounts=tuple(ledger_accounts),
        )


__all__ = ["GetLedgerStatementUseCase", "LedgerStatementView"]
