"""Tests for the composition root."""

from unittest.mock import MagicMock

from src.application.use_cases.refresh_dashboard import (
    RefreshDashboardUseCase,
    RefreshSequencer,
)
from src.infrastructure import container
from src.infrastructure.ledger_api import LedgerApiRecordsSource
from src.infrastructure.settings import DashboardSettings


def test_build_records_source_uses_settings(monkeypatch) -> None:
    """The records source is the HTTP adapter bound to the settings."""
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    settings = DashboardSettings(ledger_api_base_url="http://ledger.test")

    source = container.build_records_source(settings)

    assert isinstance(source, LedgerApiRecordsSource)
    assert source._url("/x/") == "http://ledger.test/api/v1/x/"


def test_build_refresh_use_case_shares_sequencer(monkeypatch) -> None:
    """The refresh use case reuses the given sequencer."""
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        container,
        "build_settings",
        lambda: DashboardSettings(default_currency_code="USD"),
    )
    sequencer = RefreshSequencer()

    use_case = container.build_refresh_use_case(sequencer=sequencer)

    assert isinstance(use_case, RefreshDashboardUseCase)
    assert use_case.sequencer is sequencer
    assert use_case._currency_defaults.code == "USD"
