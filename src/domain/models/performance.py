"""Domain models for performance series and derived metrics."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class PerformancePoint:
    """One trading day of a broker performance export.

    Attributes:
        date: Trading day.
        twr_cumulative: Accumulated time-weighted return in percent.
        account_value: Account value at the end of the day.
        daily_return_pct: Daily return in percent, when provided.
    """

    date: date
    twr_cumulative: float
    account_value: float = 0.0
    daily_return_pct: float | None = None


@dataclass(frozen=True)
class CashFlow:
    """Dated cash flow from the investor's point of view.

    Contributions are negative; capital returned, including a terminal
    valuation, is positive.
    """

    date: date
    amount: float


@dataclass(frozen=True)
class DrawdownEpisode:
    """Contiguous run below the running peak."""

    start: date
    end: date
    depth: float
    recovered: bool = True


@dataclass(frozen=True)
class PerformanceMetrics:
    """Metrics derived from a performance series and cash flows."""

    start_date: date | None = None
    end_date: date | None = None
    days: int = 0
    twr_pct: float = 0.0
    cagr_pct: float | None = None
    xirr_pct: float | None = None
    volatility_pct: float = 0.0
    sharpe: float = 0.0
    max_drawdown_pct: float = 0.0
    final_value: float = 0.0
    episodes: list[DrawdownEpisode] = field(default_factory=list)


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time valuation read from one monthly extract.

    Attributes:
        date: Valuation date.
        total_value: Grand total of the extract.
        sub_accounts: Named sub-account values.
        source_name: File the snapshot came from.
    """

    date: date
    total_value: float
    sub_accounts: dict[str, float] = field(default_factory=dict)
    source_name: str | None = None


@dataclass(frozen=True)
class TimelinePoint:
    """Snapshot enriched with deltas versus the previous point."""

    date: date
    total_value: float
    delta: float = 0.0
    delta_pct: float = 0.0
    period_perf_pct: float = 0.0
    cumulative_twr_pct: float = 0.0
    sub_accounts: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class SnapshotTimeline:
    """Sorted snapshot series.

    ``cumulative_twr_pct`` chains simple valuation changes, so cash moved in
    or out between two snapshots shows up as performance.
    """

    points: list[TimelinePoint]
    cumulative_twr_pct: float = 0.0
    cagr_pct: float | None = None


__all__ = [
    "PerformancePoint",
    "CashFlow",
    "DrawdownEpisode",
    "PerformanceMetrics",
    "Snapshot",
    "TimelinePoint",
    "SnapshotTimeline",
]
