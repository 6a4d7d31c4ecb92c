"""Application use cases package."""

from .drill_down_accounts import DrillDownAccountsUseCase
from .get_canonical_accounts import GetCanonicalAccountsUseCase
from .get_ledger_statement import GetLedgerStatementUseCase, LedgerStatementView
from .refresh_dashboard import (
    DashboardSnapshot,
    RefreshDashboardUseCase,
    RefreshSequencer,
)

__all__ = [
    "DrillDownAccountsUseCase",
    "GetCanonicalAccountsUseCase",
    "GetLedgerStatementUseCase",
    "LedgerStatementView",
    "DashboardSnapshot",
    "RefreshDashboardUseCase",
    "RefreshSequencer",
]
