"""Tests for the statement_cli adapter."""

from unittest.mock import MagicMock

from src.adapters import statement_cli
from src.infrastructure.ledger_api import LedgerApiError
from src.infrastructure.settings import DashboardSettings


RECORDS = [
    {"account_type": "ASSET", "balance": 100000, "ledger_id": 1},
    {"account_type": "LIABILITY", "balance": 40000, "ledger_id": 1},
    {"account_type": "REVENUE", "balance": 20000, "ledger_id": 1},
    {"account_type": "ASSET", "balance": -250, "ledger_id": 2},
]


def _patch_wiring(monkeypatch, source: MagicMock) -> None:
    monkeypatch.setattr(statement_cli, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        statement_cli,
        "build_settings",
        lambda: DashboardSettings(default_currency_code="USD"),
    )
    monkeypatch.setattr(
        statement_cli,
        "build_records_source",
        lambda settings: source,
    )


def test_main_prints_every_ledger(monkeypatch, capsys) -> None:
    """Without a ledger id every ledger found in accounts is printed."""
    monkeypatch.delenv("STATEMENT_LEDGER_ID", raising=False)
    source = MagicMock()
    source.fetch_accounts.return_value = RECORDS
    _patch_wiring(monkeypatch, source)

    statement_cli.main()

    out = capsys.readouterr().out
    assert "Ledger 1 (3 accounts)" in out
    assert "1,000.00 USD" in out
    assert "Current ratio: 2.50" in out
    assert "Net margin: 100.00%" in out
    assert "Ledger 2 (1 accounts)" in out
    assert "(2.50) USD" in out
    assert "Current ratio: N/A" in out


def test_main_prints_selected_ledger(monkeypatch, capsys) -> None:
    """STATEMENT_LEDGER_ID selects the per-ledger endpoint."""
    monkeypatch.setenv("STATEMENT_LEDGER_ID", "7")
    source = MagicMock()
    source.fetch_ledger_accounts.return_value = RECORDS[:2]
    _patch_wiring(monkeypatch, source)

    statement_cli.main()

    source.fetch_ledger_accounts.assert_called_once_with("7")
    out = capsys.readouterr().out
    assert "Ledger 7 (2 accounts)" in out
    assert "Net margin: N/A" in out


def test_main_reports_api_errors(monkeypatch, capsys) -> None:
    """API failures are reported instead of raising."""
    monkeypatch.delenv("STATEMENT_LEDGER_ID", raising=False)
    source = MagicMock()
    source.fetch_accounts.side_effect = LedgerApiError("down")
    _patch_wiring(monkeypatch, source)

    statement_cli.main()

    assert "Could not load ledger data: down" in capsys.readouterr().out


def test_main_without_ledgers(monkeypatch, capsys) -> None:
    """Accounts without ledger ids produce no statements."""
    monkeypatch.delenv("STATEMENT_LEDGER_ID", raising=False)
    source = MagicMock()
    source.fetch_accounts.return_value = [{"account_type": "ASSET"}]
    _patch_wiring(monkeypatch, source)

    statement_cli.main()

    assert "No ledgers found." in capsys.readouterr().out
