"""Domain services package."""

from .aggregation import aggregate, build_kpis
from .classification import classify, match_category, position_key
from .detection import (
    build_column_mapping,
    detect_format,
    find_position_sheet,
    find_sheet,
    pick_sample_row,
    resolve_column,
)
from .filtering import EventFilter, list_accounts
from .parsing import (
    bound_key,
    in_date_range,
    month_key,
    parse_flexible_date,
    parse_number,
    period_sort_key,
    quarter_key,
    to_canonical_key,
    year_key,
)
from .performance import (
    cagr,
    cash_flows_from_events,
    chain_valuations,
    compute_performance_metrics,
    daily_returns,
    drawdown_episodes,
    drawdown_series,
    max_drawdown,
    npv,
    sharpe,
    twr_from_cumulative,
    volatility,
    xirr,
)
from .timeline import SnapshotLayout, build_timeline, read_master_snapshot

__all__ = [
    "aggregate",
    "build_kpis",
    "classify",
    "match_category",
    "position_key",
    "build_column_mapping",
    "detect_format",
    "find_position_sheet",
    "find_sheet",
    "pick_sample_row",
    "resolve_column",
    "EventFilter",
    "list_accounts",
    "bound_key",
    "in_date_range",
    "month_key",
    "parse_flexible_date",
    "parse_number",
    "period_sort_key",
    "quarter_key",
    "to_canonical_key",
    "year_key",
    "cagr",
    "cash_flows_from_events",
    "chain_valuations",
    "compute_performance_metrics",
    "daily_returns",
    "drawdown_episodes",
    "drawdown_series",
    "max_drawdown",
    "npv",
    "sharpe",
    "twr_from_cumulative",
    "volatility",
    "xirr",
    "SnapshotLayout",
    "build_timeline",
    "read_master_snapshot",
]
