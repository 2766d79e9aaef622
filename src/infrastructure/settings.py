"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.application.use_cases.cache_analysis_result import (
    DEFAULT_STORAGE_KEY,
)
from src.domain.constants import DEFAULT_RISK_FREE_RATE_PCT
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

STORE_URL_ENV = "ANALYZER_STORE_URL"
STORAGE_KEY_ENV = "ANALYZER_STORAGE_KEY"
RISK_FREE_RATE_ENV = "ANALYZER_RISK_FREE_RATE"


def default_store_url() -> str:
    """Return the SQLite URL of the local result store."""
    return f"sqlite:///{get_project_root() / 'data' / 'analyzer.db'}"


@dataclass(frozen=True)
class AnalyzerSettings:
    """Runtime settings of the analyzer.

    Attributes:
        store_url: SQLAlchemy URL of the key-value store database.
        storage_key: Key under which the last result is cached.
        risk_free_rate_pct: Annual risk-free rate used by Sharpe.
    """

    store_url: str
    storage_key: str = DEFAULT_STORAGE_KEY
    risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT

    @classmethod
    def from_env(cls) -> "AnalyzerSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            AnalyzerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        store_url = os.getenv(STORE_URL_ENV, "").strip() or default_store_url()
        storage_key = (
            os.getenv(STORAGE_KEY_ENV, "").strip() or DEFAULT_STORAGE_KEY
        )
        return cls(
            store_url=store_url,
            storage_key=storage_key,
            risk_free_rate_pct=cls._risk_free_rate(
                os.getenv(RISK_FREE_RATE_ENV)
            ),
        )

    @staticmethod
    def _risk_free_rate(raw: str | None) -> float:
        """Parse the risk-free rate, falling back on invalid input.

        Args:
            raw: Raw environment value, in percent.

        Returns:
            float: Parsed rate, or the default when missing or invalid.
        """
        if raw is None or not raw.strip():
            return DEFAULT_RISK_FREE_RATE_PCT
        try:
            return float(raw.strip().replace(",", "."))
        except ValueError:
            get_app_logger().warning(
                f"Invalid {RISK_FREE_RATE_ENV}={raw!r}, "
                f"using {DEFAULT_RISK_FREE_RATE_PCT}"
            )
            return DEFAULT_RISK_FREE_RATE_PCT


__all__ = ["AnalyzerSettings", "default_store_url"]
