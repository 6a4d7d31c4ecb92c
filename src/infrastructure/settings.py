"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from src.domain.constants import DEFAULT_CURRENCY_CODE, DEFAULT_CURRENCY_SCALE
from src.domain.models import CurrencyDefaults
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_LEDGER_API_BASE_URL = "https://ledger.dev.ledgerrocket.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_AUTO_REFRESH_SECONDS = 30


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the ledger API client and the dashboard.

    Attributes:
        ledger_api_base_url: Base URL of the ledger service.
        timeout_seconds: HTTP timeout applied to every request.
        auto_refresh_seconds: Refresh period of the dashboard, 0 disables.
        default_currency_scale: Scale used when a record resolves none.
        default_currency_code: Code used when a record resolves none.
    """

    ledger_api_base_url: str = DEFAULT_LEDGER_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    auto_refresh_seconds: int = DEFAULT_AUTO_REFRESH_SECONDS
    default_currency_scale: int = DEFAULT_CURRENCY_SCALE
    default_currency_code: str = DEFAULT_CURRENCY_CODE

    @property
    def currency_defaults(self) -> CurrencyDefaults:
        return CurrencyDefaults(
            code=self.default_currency_code,
            scale=self.default_currency_scale,
        )

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        base_url = os.getenv(
            "LEDGER_API_BASE_URL",
            DEFAULT_LEDGER_API_BASE_URL,
        ).strip().rstrip("/")
        return cls(
            ledger_api_base_url=base_url or DEFAULT_LEDGER_API_BASE_URL,
            timeout_seconds=cls._read_number(
                "LEDGER_API_TIMEOUT",
                DEFAULT_TIMEOUT_SECONDS,
                float,
                logger=logger,
                minimum=0.1,
            ),
            auto_refresh_seconds=cls._read_number(
                "AUTO_REFRESH_SECONDS",
                DEFAULT_AUTO_REFRESH_SECONDS,
                int,
                logger=logger,
                minimum=0,
            ),
            default_currency_scale=cls._read_number(
                "DEFAULT_CURRENCY_SCALE",
                DEFAULT_CURRENCY_SCALE,
                int,
                logger=logger,
                minimum=0,
            ),
            default_currency_code=(
                os.getenv("DEFAULT_CURRENCY_CODE", "").strip().upper()
                or DEFAULT_CURRENCY_CODE
            ),
        )

    @staticmethod
    def _read_number(
        name: str,
        default,
        cast,
        logger,
        minimum,
    ):
        """Read a numeric environment variable.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            cast: ``int`` or ``float``.
            logger: Logger used for warnings.
            minimum: Smallest accepted value.

        Returns:
            The parsed value or ``default``.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = cast(raw.strip())
        except ValueError:
            logger.warning(
                f"Invalid {name}='{raw}'. Falling back to {default}."
            )
            return default
        if value < minimum:
            logger.warning(
                f"{name}={value} is below {minimum}. Falling back to {default}."
            )
            return default
        return value


__all__ = ["DashboardSettings"]
