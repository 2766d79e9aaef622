"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.key_value_store import KeyValueStorePort
from src.application.ports.workbook_reader import WorkbookReaderPort
from src.application.use_cases.analyze_performance import (
    AnalyzePerformanceUseCase,
)
from src.application.use_cases.analyze_transactions import (
    AnalyzeTransactionsUseCase,
)
from src.application.use_cases.build_snapshot_timeline import (
    BuildSnapshotTimelineUseCase,
)
from src.application.use_cases.cache_analysis_result import (
    CacheAnalysisResultUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.kv_store import (
    InMemoryKeyValueStore,
    SqlAlchemyKeyValueStore,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import AnalyzerSettings
from src.infrastructure.workbook_reader import OpenpyxlWorkbookReader


def build_database_adapter(
    settings: AnalyzerSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or AnalyzerSettings.from_env()
    return SqlAlchemyDatabaseEngineAdapter(resolved.store_url)


def build_workbook_reader() -> WorkbookReaderPort:
    """Return the workbook reader adapter."""
    return OpenpyxlWorkbookReader(logger=get_app_logger())


def build_key_value_store(
    db_port: DatabaseEnginePort | None = None,
    in_memory: bool = False,
) -> KeyValueStorePort:
    """Return the configured key-value store."""
    if in_memory:
        return InMemoryKeyValueStore()
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyKeyValueStore(resolved_db, logger=get_app_logger())


def build_analyze_transactions() -> AnalyzeTransactionsUseCase:
    """Return the transaction analysis use case."""
    return AnalyzeTransactionsUseCase(logger=get_app_logger())


def build_analyze_performance(
    settings: AnalyzerSettings | None = None,
) -> AnalyzePerformanceUseCase:
    """Return the performance use case with the configured risk-free rate."""
    resolved = settings or AnalyzerSettings.from_env()
    return AnalyzePerformanceUseCase(
        logger=get_app_logger(),
        risk_free_rate_pct=resolved.risk_free_rate_pct,
    )


def build_snapshot_timeline() -> BuildSnapshotTimelineUseCase:
    """Return the snapshot timeline use case."""
    return BuildSnapshotTimelineUseCase(logger=get_app_logger())


def build_result_cache(
    store: KeyValueStorePort | None = None,
    settings: AnalyzerSettings | None = None,
) -> CacheAnalysisResultUseCase:
    """Return the result cache use case bound to the configured store."""
    resolved = settings or AnalyzerSettings.from_env()
    resolved_store = store or build_key_value_store(
        build_database_adapter(resolved)
    )
    return CacheAnalysisResultUseCase(
        resolved_store,
        storage_key=resolved.storage_key,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_workbook_reader",
    "build_key_value_store",
    "build_analyze_transactions",
    "build_analyze_performance",
    "build_snapshot_timeline",
    "build_result_cache",
]
