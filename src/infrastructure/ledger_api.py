"""HTTP records source for the ledger API."""

from typing import Any

import requests
from requests import Session

from src.domain.services.validation import ensure_record_list
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings


API_PREFIX = "/api/v1"


class LedgerApiError(RuntimeError):
    """Raised when the ledger API cannot be reached or answers an error."""


class LedgerApiRecordsSource:
    """Read enriched records from the ledger service over HTTP."""

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        session: Session | None = None,
        logger=None,
    ) -> None:
        """Initialize the records source.

        Args:
            settings: API base URL and timeout.
            session: Optional preconfigured session, mainly for tests.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settings = settings or DashboardSettings.from_env()
        self._session = session or self._create_session()
        self._logger = logger or get_app_logger()

    @staticmethod
    def _create_session() -> Session:
        session = Session()
        session.headers.update({"Accept": "application/json"})
        return session

    def fetch_accounts(self) -> list[Any]:
        return self._get_records("/enriched-accounts/")

    def fetch_ledger_accounts(self, ledger_id: Any) -> list[Any]:
        return self._get_records(f"/ledgers/{ledger_id}/enriched-accounts/")

    def fetch_ledgers(self) -> list[Any]:
        return self._get_records("/enriched-ledgers/")

    def fetch_entities(self) -> list[Any]:
        return self._get_records("/enriched-entities/")

    def _url(self, path: str) -> str:
        return f"{self._settings.ledger_api_base_url}{API_PREFIX}{path}"

    def _get_records(self, path: str) -> list[Any]:
        """GET an endpoint and return its validated records array.

        Args:
            path: Endpoint path below the API prefix.

        Returns:
            list[Any]: Decoded records.

        Raises:
            LedgerApiError: On transport errors, HTTP errors or invalid JSON.
            MalformedRecordsError: If the body is not an array of records.
        """
        url = self._url(path)
        try:
            response = self._session.get(
                url,
                timeout=self._settings.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            self._logger.error(f"Ledger API request failed for {url}: {exc}")
            raise LedgerApiError(f"Ledger API request failed: {url}") from exc
        except ValueError as exc:
            self._logger.error(f"Ledger API returned invalid JSON for {url}")
            raise LedgerApiError(f"Invalid JSON from {url}") from exc
        records = ensure_record_list(payload, source=url)
        self._logger.info(f"Fetched {len(records)} records from {url}")
        return records


__all__ = ["LedgerApiError", "LedgerApiRecordsSource"]
