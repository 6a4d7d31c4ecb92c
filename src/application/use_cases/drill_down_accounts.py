"""Use case to build filtered drill-down views over accounts."""

from collections.abc import Iterable
from typing import Any

from src.domain.constants import AccountCategory
from src.domain.models import CanonicalAccount, CurrencyDefaults
from src.domain.services.filters import (
    AccountFilterCriteria,
    FilteredView,
    apply_filters,
    get_search_fields,
    search_records,
)
from src.infrastructure.logging.logger import get_app_logger


ACCOUNT_SEARCH_FIELDS = ("name", "id", "category", "currency.code")


class DrillDownAccountsUseCase:
    """Filter canonical accounts for drill-down tables and badges."""

    def __init__(
        self,
        currency_defaults: CurrencyDefaults | None = None,
        logger=None,
    ) -> None:
        self._currency_defaults = currency_defaults or CurrencyDefaults()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        accounts: Iterable[CanonicalAccount],
        criteria: AccountFilterCriteria,
        query: str | None = None,
    ) -> FilteredView:
        """Apply the criteria, then an optional free-text search.

        Args:
            accounts: Canonical accounts (raw records are normalized lazily).
            criteria: Filter inputs selected in the UI.
            query: Optional free-text search over account fields.

        Returns:
            FilteredView: Matching accounts tagged with their predicates.
        """
        view = apply_filters(
            accounts,
            criteria.predicates(self._currency_defaults),
        )
        if query:
            fields = ACCOUNT_SEARCH_FIELDS + get_search_fields("account")
            view = FilteredView(
                records=tuple(search_records(view.records, query, fields)),
                predicates=view.predicates,
            )
        self._logger.info(
            f"Drill-down kept {len(view)} accounts "
            f"with filters {view.badges}"
        )
        return view

    def by_category(
        self,
        accounts: Iterable[CanonicalAccount],
        category: AccountCategory | str,
        ledger_id: Any = None,
    ) -> FilteredView:
        """Return the accounts behind one statement line."""
        return self.execute(
            accounts,
            AccountFilterCriteria(account_type=category, ledger_id=ledger_id),
        )


__all__ = ["DrillDownAccountsUseCase", "ACCOUNT_SEARCH_FIELDS"]
