"""Domain models package."""

from .aggregates import (
    AggregateTotals,
    AnalysisResult,
    DateRange,
    FeeBreakdown,
    KPISet,
    PeriodBucket,
    Position,
)
from .events import (
    ColumnMapping,
    EventKind,
    FinancialEvent,
    FormatTag,
    KeywordRule,
    MappedRow,
)
from .performance import (
    CashFlow,
    DrawdownEpisode,
    PerformanceMetrics,
    PerformancePoint,
    Snapshot,
    SnapshotTimeline,
    TimelinePoint,
)
from .workbook import Cell, RawRow, Sheet, Workbook

__all__ = [
    "AggregateTotals",
    "AnalysisResult",
    "DateRange",
    "FeeBreakdown",
    "KPISet",
    "PeriodBucket",
    "Position",
    "ColumnMapping",
    "EventKind",
    "FinancialEvent",
    "FormatTag",
    "KeywordRule",
    "MappedRow",
    "CashFlow",
    "DrawdownEpisode",
    "PerformanceMetrics",
    "PerformancePoint",
    "Snapshot",
    "SnapshotTimeline",
    "TimelinePoint",
    "Cell",
    "RawRow",
    "Sheet",
    "Workbook",
]
