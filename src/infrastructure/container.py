"""Composition root for wiring infrastructure adapters."""

from src.application.ports.records_source import LedgerRecordsSourcePort
from src.application.use_cases.refresh_dashboard import (
    RefreshDashboardUseCase,
    RefreshSequencer,
)
from src.infrastructure.ledger_api import LedgerApiRecordsSource
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings


def build_settings() -> DashboardSettings:
    """Return settings read from the environment."""
    return DashboardSettings.from_env()


def build_records_source(
    settings: DashboardSettings | None = None,
) -> LedgerRecordsSourcePort:
    """Return the ledger API records source."""
    return LedgerApiRecordsSource(
        settings or build_settings(),
        logger=get_app_logger(),
    )


def build_refresh_use_case(
    sequencer: RefreshSequencer | None = None,
    settings: DashboardSettings | None = None,
) -> RefreshDashboardUseCase:
    """Return the refresh use case wired to the ledger API."""
    resolved = settings or build_settings()
    return RefreshDashboardUseCase(
        records_source=build_records_source(resolved),
        sequencer=sequencer,
        currency_defaults=resolved.currency_defaults,
        logger=get_app_logger(),
    )


__all__ = [
    "build_settings",
    "build_records_source",
    "build_refresh_use_case",
]
