"""Tests for the AnalyzePerformanceUseCase."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.analyze_performance import (
    AnalyzePerformanceUseCase,
    read_performance_points,
)
from src.domain.constants import PERFORMANCE_COLUMNS, PERFORMANCE_FALLBACKS
from src.domain.models import (
    CashFlow,
    FormatTag,
    PerformanceMetrics,
    Sheet,
    Workbook,
)
from src.domain.services import build_column_mapping

PERFORMANCE_ROWS = [
    [
        "Date",
        "Accumulated time-weighted return %",
        "Account value",
        "Daily return %",
    ],
    ["2024-01-01", "10,0", "110'000", ""],
    ["2023-01-01", 0, 100000, ""],
    ["2023-07-01", -5, 95000, "-5"],
    ["Total", "", "", ""],
]


def _performance_sheet() -> Sheet:
    return Sheet(name="Performance", cells=PERFORMANCE_ROWS)


def test_read_performance_points_sorts_and_drops_undated_rows() -> None:
    """Points should be sorted and rows without date dropped."""
    records = _performance_sheet().records()
    mapping = build_column_mapping(
        records[0],
        PERFORMANCE_COLUMNS,
        PERFORMANCE_FALLBACKS,
    )

    points = read_performance_points(records, mapping)

    assert [point.date for point in points] == [
        date(2023, 1, 1),
        date(2023, 7, 1),
        date(2024, 1, 1),
    ]
    assert points[-1].twr_cumulative == pytest.approx(10.0)
    assert points[-1].account_value == pytest.approx(110000.0)
    assert points[0].daily_return_pct is None
    assert points[1].daily_return_pct == pytest.approx(-5.0)
    assert mapping.unverified == []


def test_execute_computes_metrics_with_cash_flows() -> None:
    """Deposits from the transaction sheet should feed the XIRR."""
    workbook = Workbook(
        sheets={
            "Performance": _performance_sheet(),
            "Transactions": Sheet(
                name="Transactions",
                cells=[
                    ["Date", "Description", "Montant"],
                    ["2023-01-01", "Dépôt initial", "100000"],
                ],
            ),
        }
    )

    report = AnalyzePerformanceUseCase(logger=MagicMock()).execute(workbook)

    assert report.broker == "Saxo"
    assert report.format == FormatTag.SAXO_PERFORMANCE.value
    assert report.cash_flows == [
        CashFlow(date(2023, 1, 1), -100000.0),
        CashFlow(date(2024, 1, 1), 110000.0),
    ]
    metrics = report.metrics
    assert metrics.days == 365
    assert metrics.twr_pct == pytest.approx(10.0)
    assert metrics.cagr_pct == pytest.approx(10.0)
    assert metrics.xirr_pct == pytest.approx(10.0, abs=0.1)
    assert metrics.max_drawdown_pct == pytest.approx(-5.0)
    assert metrics.final_value == pytest.approx(110000.0)


def test_execute_uses_risk_free_rate_for_sharpe() -> None:
    """Sharpe should subtract the configured risk-free rate."""
    workbook = Workbook(sheets={"Performance": _performance_sheet()})

    low = AnalyzePerformanceUseCase(
        logger=MagicMock(),
        risk_free_rate_pct=0.0,
    ).execute(workbook)
    high = AnalyzePerformanceUseCase(
        logger=MagicMock(),
        risk_free_rate_pct=5.0,
    ).execute(workbook)

    assert low.cash_flows == []
    assert low.metrics.xirr_pct is None
    assert low.metrics.sharpe > high.metrics.sharpe


def test_execute_without_performance_sheet() -> None:
    """A workbook without a series should give zero metrics."""
    workbook = Workbook(
        sheets={"A": Sheet(name="A"), "B": Sheet(name="B")},
    )

    report = AnalyzePerformanceUseCase(logger=MagicMock()).execute(workbook)

    assert report.metrics == PerformanceMetrics()
    assert report.points == []
    assert report.format == FormatTag.UNKNOWN.value
