"""Tests for sequenced dashboard refreshes."""

from datetime import datetime, timezone
import threading
from unittest.mock import MagicMock

from src.application.use_cases.refresh_dashboard import (
    DashboardSnapshot,
    RefreshDashboardUseCase,
    RefreshSequencer,
)


def _records_source() -> MagicMock:
    source = MagicMock()
    source.fetch_accounts.return_value = [
        {"account_id": 1, "account_type": "ASSET", "balance": 100},
    ]
    source.fetch_ledgers.return_value = [{"ledger_id": 1}]
    source.fetch_entities.return_value = [{"entity_id": "E1"}]
    return source


def _snapshot(token: int) -> DashboardSnapshot:
    return DashboardSnapshot(
        token=token,
        accounts=(),
        ledgers=(),
        entities=(),
        refreshed_at=datetime.now(timezone.utc),
    )


def test_execute_publishes_snapshot() -> None:
    """A refresh with no competitor is published."""
    logger = MagicMock()
    use_case = RefreshDashboardUseCase(_records_source(), logger=logger)

    snapshot = use_case.execute()

    assert snapshot is not None
    assert snapshot.token == 1
    assert [account.id for account in snapshot.accounts] == [1]
    assert snapshot.ledgers == ({"ledger_id": 1},)
    assert snapshot.entities == ({"entity_id": "E1"},)
    assert use_case.sequencer.snapshot is snapshot


def test_superseded_refresh_is_discarded() -> None:
    """A slow refresh never overwrites one started after it."""
    sequencer = RefreshSequencer()
    source = _records_source()
    logger = MagicMock()
    slow = RefreshDashboardUseCase(source, sequencer=sequencer, logger=logger)
    fast = RefreshDashboardUseCase(
        _records_source(),
        sequencer=sequencer,
        logger=logger,
    )
    results = {}

    def _fetch_while_newer_refresh_runs():
        results["fast"] = fast.execute()
        return [{"account_id": 99, "account_type": "ASSET", "balance": 1}]

    source.fetch_accounts.side_effect = _fetch_while_newer_refresh_runs

    stale = slow.execute()

    assert stale is None
    assert results["fast"] is not None
    assert sequencer.snapshot is results["fast"]
    assert sequencer.latest_token == 2


def test_sequencer_only_accepts_latest_token() -> None:
    """publish rejects tokens older than the latest issued one."""
    sequencer = RefreshSequencer()
    first = sequencer.issue()
    second = sequencer.issue()

    assert sequencer.publish(_snapshot(first)) is False
    assert sequencer.snapshot is None
    assert sequencer.publish(_snapshot(second)) is True
    assert sequencer.snapshot.token == second


def test_sequencer_tokens_are_unique_across_threads() -> None:
    """Tokens stay monotonic under concurrent refresh triggers."""
    sequencer = RefreshSequencer()
    tokens = []
    lock = threading.Lock()

    def _issue_many():
        for _ in range(100):
            token = sequencer.issue()
            with lock:
                tokens.append(token)

    threads = [threading.Thread(target=_issue_many) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(tokens) == list(range(1, 401))
    assert sequencer.latest_token == 400
