"""Application use cases package."""

from .analyze_transactions import (
    AnalyzeTransactionsUseCase,
    build_empty_result,
    transaction_sheet_name,
)
from .analyze_performance import (
    AnalyzePerformanceUseCase,
    PerformanceReport,
    read_performance_points,
)
from .build_snapshot_timeline import (
    BuildSnapshotTimelineUseCase,
    master_sheet_name,
)
from .cache_analysis_result import (
    CacheAnalysisResultUseCase,
    result_from_payload,
    result_to_payload,
)

__all__ = [
    "AnalyzeTransactionsUseCase",
    "build_empty_result",
    "transaction_sheet_name",
    "AnalyzePerformanceUseCase",
    "PerformanceReport",
    "read_performance_points",
    "BuildSnapshotTimelineUseCase",
    "master_sheet_name",
    "CacheAnalysisResultUseCase",
    "result_from_payload",
    "result_to_payload",
]
