"""Use case to compute performance metrics from a daily performance export."""

from dataclasses import dataclass, field

from src.domain.constants import (
    BROKER_SAXO,
    CLASSIFICATION_RULES,
    DEFAULT_RISK_FREE_RATE_PCT,
    PERFORMANCE_COLUMNS,
    PERFORMANCE_FALLBACKS,
    PERFORMANCE_SHEET_KEYWORDS,
    TRANSACTION_COLUMNS,
    TRANSACTION_FALLBACKS,
)
from src.domain.models import (
    CashFlow,
    ColumnMapping,
    MappedRow,
    PerformanceMetrics,
    PerformancePoint,
    Workbook,
)
from src.domain.services import (
    build_column_mapping,
    cash_flows_from_events,
    classify,
    compute_performance_metrics,
    detect_format,
    find_sheet,
    parse_flexible_date,
    parse_number,
    pick_sample_row,
)
from src.application.use_cases.analyze_transactions import (
    transaction_sheet_name,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PerformanceReport:
    """Performance series, investor cash flows, and derived metrics."""

    broker: str
    format: str
    col_mapping: dict[str, str | None]
    unverified_columns: list[str]
    metrics: PerformanceMetrics
    points: list[PerformancePoint] = field(default_factory=list)
    cash_flows: list[CashFlow] = field(default_factory=list)


def read_performance_points(
    records: list[dict],
    mapping: ColumnMapping,
) -> list[PerformancePoint]:
    """Convert performance rows into points sorted by date.

    Rows without a parseable date are dropped. A blank daily return cell
    leaves ``daily_return_pct`` empty so it can be derived later.
    """
    points = []
    for record in records:
        row = MappedRow(record, mapping)
        day = parse_flexible_date(row.get("date"))
        if day is None:
            continue
        daily = row.get("daily")
        points.append(
            PerformancePoint(
                date=day,
                twr_cumulative=parse_number(row.get("twr")),
                account_value=parse_number(row.get("value")),
                daily_return_pct=(
                    parse_number(daily) if daily not in (None, "") else None
                ),
            )
        )
    return sorted(points, key=lambda point: point.date)


class AnalyzePerformanceUseCase:
    """Compute TWR, CAGR, XIRR, volatility, Sharpe, and drawdowns."""

    def __init__(
        self,
        logger=None,
        risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT,
        broker: str = BROKER_SAXO,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            risk_free_rate_pct: Annual risk-free rate used by Sharpe.
            broker: Broker label reported in the result.
        """
        self._logger = logger or get_app_logger()
        self._risk_free_rate_pct = risk_free_rate_pct
        self._broker = broker

    def execute(self, workbook: Workbook) -> PerformanceReport:
        """Return metrics for the performance sheet of a workbook.

        Args:
            workbook: Decoded workbook with a daily performance sheet.

        Returns:
            PerformanceReport: Metrics, all zero when no dated row exists.
        """
        sheet_names = workbook.sheet_names
        format_tag = detect_format(sheet_names)
        name = find_sheet(sheet_names, PERFORMANCE_SHEET_KEYWORDS)
        if name is None and len(sheet_names) == 1:
            name = sheet_names[0]
        sheet = workbook.sheet(name) if name else None
        records = sheet.records() if sheet else []

        mapping = build_column_mapping(
            pick_sample_row(records),
            PERFORMANCE_COLUMNS,
            PERFORMANCE_FALLBACKS,
            logger=self._logger if records else None,
        )
        points = read_performance_points(records, mapping)
        flows = self._cash_flows(workbook, points, exclude=name)
        metrics = compute_performance_metrics(
            points,
            flows,
            risk_free_rate_pct=self._risk_free_rate_pct,
            logger=self._logger,
        )
        self._logger.info(
            f"Performance computed over {len(points)} points: "
            f"twr={metrics.twr_pct:.2f}%, cagr={metrics.cagr_pct}, "
            f"xirr={metrics.xirr_pct}, max_drawdown={metrics.max_drawdown_pct}"
        )
        return PerformanceReport(
            broker=self._broker,
            format=format_tag.value,
            col_mapping=mapping.as_dict(),
            unverified_columns=mapping.unverified,
            metrics=metrics,
            points=points,
            cash_flows=flows,
        )

    def _cash_flows(
        self,
        workbook: Workbook,
        points: list[PerformancePoint],
        exclude: str | None = None,
    ) -> list[CashFlow]:
        if not points:
            return []
        name = transaction_sheet_name(
            workbook.sheet_names,
            detect_format(workbook.sheet_names),
        )
        if name == exclude:
            return []
        sheet = workbook.sheet(name) if name else None
        records = sheet.records() if sheet else []
        if not records:
            return []
        mapping = build_column_mapping(
            pick_sample_row(records),
            TRANSACTION_COLUMNS,
            TRANSACTION_FALLBACKS,
            logger=self._logger,
        )
        events = [
            event
            for event in (
                classify(MappedRow(record, mapping), CLASSIFICATION_RULES)
                for record in records
            )
            if event is not None
        ]
        return cash_flows_from_events(
            events,
            valuation=points[-1].account_value,
            valuation_date=points[-1].date,
        )


__all__ = [
    "AnalyzePerformanceUseCase",
    "PerformanceReport",
    "read_performance_points",
]
