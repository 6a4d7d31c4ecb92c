"""Use case to refresh dashboard data with explicit sequencing.

Refreshes are triggered on a timer and are never cancelled. Each refresh
takes a token from ``RefreshSequencer``; its result is published only if no
newer refresh was started in the meantime, so a slow response can never
overwrite a fresher one.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any

from src.application.ports.records_source import LedgerRecordsSourcePort
from src.domain.models import CanonicalAccount, CurrencyDefaults
from src.domain.services.normalization import normalize_accounts
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable result of one refresh.

    Attributes:
        token: Sequence number of the refresh that produced it.
        accounts: Canonical accounts.
        ledgers: Raw ledger records.
        entities: Raw entity records.
        refreshed_at: UTC time the refresh completed.
    """

    token: int
    accounts: tuple[CanonicalAccount, ...]
    ledgers: tuple[Any, ...]
    entities: tuple[Any, ...]
    refreshed_at: datetime


class RefreshSequencer:
    """Issue monotonic refresh tokens and keep the latest snapshot."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._latest_token = 0
        self._snapshot: DashboardSnapshot | None = None

    def issue(self) -> int:
        """Start a refresh and return its token."""
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    def publish(self, snapshot: DashboardSnapshot) -> bool:
        """Publish ``snapshot`` if it comes from the latest refresh.

        Returns:
            bool: False when a newer refresh was issued after this one.
        """
        with self._lock:
            if snapshot.token != self._latest_token:
                return False
            self._snapshot = snapshot
            return True

    @property
    def latest_token(self) -> int:
        with self._lock:
            return self._latest_token

    @property
    def snapshot(self) -> DashboardSnapshot | None:
        with self._lock:
            return self._snapshot


class RefreshDashboardUseCase:
    """Fetch accounts, ledgers and entities and publish a snapshot."""

    def __init__(
        self,
        records_source: LedgerRecordsSourcePort,
        sequencer: RefreshSequencer | None = None,
        currency_defaults: CurrencyDefaults | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_source: Port providing raw ledger API records.
            sequencer: Shared sequencer; a private one is created if omitted.
            currency_defaults: Fallback code and scale for raw records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_source = records_source
        self._sequencer = sequencer or RefreshSequencer()
        self._currency_defaults = currency_defaults or CurrencyDefaults()
        self._logger = logger or get_app_logger()

    @property
    def sequencer(self) -> RefreshSequencer:
        return self._sequencer

    def execute(self) -> DashboardSnapshot | None:
        """Run one refresh.

        Returns:
            DashboardSnapshot | None: The published snapshot, or None when a
            newer refresh superseded this one.
        """
        token = self._sequencer.issue()
        accounts = normalize_accounts(
            self._records_source.fetch_accounts(),
            self._currency_defaults,
            logger=self._logger,
        )
        snapshot = DashboardSnapshot(
            token=token,
            accounts=tuple(accounts),
            ledgers=tuple(self._records_source.fetch_ledgers()),
            entities=tuple(self._records_source.fetch_entities()),
            refreshed_at=datetime.now(timezone.utc),
        )
        if not self._sequencer.publish(snapshot):
            self._logger.info(
                f"Discarding refresh #{token}: superseded by "
                f"#{self._sequencer.latest_token}"
            )
            return None
        self._logger.info(
            f"Refresh #{token} published: {len(snapshot.accounts)} accounts, "
            f"{len(snapshot.ledgers)} ledgers, "
            f"{len(snapshot.entities)} entities"
        )
        return snapshot


__all__ = [
    "DashboardSnapshot",
    "RefreshSequencer",
    "RefreshDashboardUseCase",
]
