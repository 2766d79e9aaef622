"""Tests for infrastructure settings."""

import pytest

from src.application.use_cases.cache_analysis_result import (
    DEFAULT_STORAGE_KEY,
)
from src.infrastructure import settings as settings_module
from src.infrastructure.settings import AnalyzerSettings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in (
        "ANALYZER_STORE_URL",
        "ANALYZER_STORAGE_KEY",
        "ANALYZER_RISK_FREE_RATE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch, tmp_path) -> None:
    """Missing variables should fall back to the local SQLite store."""
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = AnalyzerSettings.from_env()

    expected = tmp_path / "data" / "analyzer.db"
    assert settings.store_url == f"sqlite:///{expected}"
    assert settings.storage_key == "portfolio-analyzer:last-result"
    assert settings.storage_key == DEFAULT_STORAGE_KEY
    assert settings.risk_free_rate_pct == 3.0


def test_from_env_reads_variables(monkeypatch) -> None:
    """Explicit variables should be used as given."""
    monkeypatch.setenv("ANALYZER_STORE_URL", "postgresql://user@host/db")
    monkeypatch.setenv("ANALYZER_STORAGE_KEY", "team:last")
    monkeypatch.setenv("ANALYZER_RISK_FREE_RATE", "1,5")

    settings = AnalyzerSettings.from_env()

    assert settings.store_url == "postgresql://user@host/db"
    assert settings.storage_key == "team:last"
    assert settings.risk_free_rate_pct == 1.5


def test_invalid_risk_free_rate_falls_back(monkeypatch) -> None:
    """An unparseable rate should warn and use the default."""
    warnings = []

    class _Logger:
        def warning(self, message):
            warnings.append(message)

    monkeypatch.setattr(settings_module, "get_app_logger", lambda: _Logger())
    monkeypatch.setenv("ANALYZER_RISK_FREE_RATE", "three")

    settings = AnalyzerSettings.from_env()

    assert settings.risk_free_rate_pct == 3.0
    assert len(warnings) == 1
