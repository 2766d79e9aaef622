"""Domain package for broker export parsing and portfolio analytics."""

from .constants import (
    CLASSIFICATION_RULES,
    DEFAULT_RISK_FREE_RATE_PCT,
    TRANSACTION_COLUMNS,
    TRANSACTION_FALLBACKS,
)
from .models import (
    AnalysisResult,
    CashFlow,
    EventKind,
    FinancialEvent,
    FormatTag,
    KPISet,
    PerformanceMetrics,
    PerformancePoint,
    Sheet,
    Workbook,
)
from .services import (
    EventFilter,
    aggregate,
    classify,
    compute_performance_metrics,
    detect_format,
    parse_flexible_date,
    parse_number,
    resolve_column,
    xirr,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "DEFAULT_RISK_FREE_RATE_PCT",
    "TRANSACTION_COLUMNS",
    "TRANSACTION_FALLBACKS",
    "AnalysisResult",
    "CashFlow",
    "EventKind",
    "FinancialEvent",
    "FormatTag",
    "KPISet",
    "PerformanceMetrics",
    "PerformancePoint",
    "Sheet",
    "Workbook",
    "EventFilter",
    "aggregate",
    "classify",
    "compute_performance_metrics",
    "detect_format",
    "parse_flexible_date",
    "parse_number",
    "resolve_column",
    "xirr",
]
