"""CLI adapter to analyze broker exports from the command line.

This module wires the analysis use cases to the concrete workbook reader
and result store, and prints a plain-text summary.
"""

import argparse
from datetime import date
from pathlib import Path

from src.application.ports.workbook_reader import WorkbookDecodeError
from src.domain.constants import PERFORMANCE_SHEET_KEYWORDS
from src.domain.services import find_sheet
from src.infrastructure.container import (
    build_analyze_performance,
    build_analyze_transactions,
    build_result_cache,
    build_snapshot_timeline,
    build_workbook_reader,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze UBS and Saxo spreadsheet exports."
    )
    parser.add_argument("paths", nargs="+", type=Path, help="Export files")
    parser.add_argument("--account", default=None, help="Sub-account filter")
    parser.add_argument("--start", default=None, help="Start date YYYY-MM-DD")
    parser.add_argument("--end", default=None, help="End date YYYY-MM-DD")
    parser.add_argument(
        "--timeline",
        action="store_true",
        help="Merge monthly master extracts into a valuation timeline",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Cache the transaction analysis in the result store",
    )
    return parser


def _print_analysis(result) -> None:
    kpis = result.kpis
    print(f"Format: {result.format} (sheets: {', '.join(result.sheet_names)})")
    if result.date_range is not None:
        print(f"Period: {result.date_range.min} -> {result.date_range.max}")
    print(f"Deposits: {kpis.deposits}")
    print(f"Withdrawals: {kpis.withdrawals}")
    print(f"Net deposits: {kpis.net_deposits}")
    print(f"Dividends: {kpis.dividends}")
    print(f"Interest: {kpis.interest}")
    print(f"Fees: {kpis.total_fees} (rebates {kpis.rebates})")
    print(f"Realized P&L: {kpis.realized}")
    print(f"Net result: {kpis.net_result} ({kpis.perf_pct:.2f}%)")
    if kpis.total_valuation:
        print(f"Valuation: {kpis.total_valuation}")
    if kpis.unclassified_count:
        print(f"Unclassified rows: {kpis.unclassified_count}")
    if result.unverified_columns:
        print(f"Unverified columns: {', '.join(result.unverified_columns)}")


def _print_metrics(report) -> None:
    metrics = report.metrics
    print(f"Performance {metrics.start_date} -> {metrics.end_date}")
    print(f"TWR: {metrics.twr_pct:.2f}%")
    if metrics.cagr_pct is not None:
        print(f"CAGR: {metrics.cagr_pct:.2f}%")
    if metrics.xirr_pct is not None:
        print(f"XIRR: {metrics.xirr_pct:.2f}%")
    print(f"Volatility: {metrics.volatility_pct:.2f}%")
    print(f"Sharpe: {metrics.sharpe:.2f}")
    print(f"Max drawdown: {metrics.max_drawdown_pct:.2f}%")


def _print_timeline(timeline) -> None:
    for point in timeline.points:
        print(
            f"{point.date.isoformat()}: {point.total_value:,.2f} "
            f"({point.delta:+,.2f}, {point.delta_pct:+.2f}%)"
        )
    print(f"Cumulative TWR (approx.): {timeline.cumulative_twr_pct:.2f}%")


def main(argv: list[str] | None = None) -> int:
    """Run the analysis and print a summary.

    Args:
        argv: Command-line arguments, defaulting to ``sys.argv``.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)
    logger = get_app_logger()
    reader = build_workbook_reader()

    workbooks = []
    for path in args.paths:
        try:
            workbooks.append(reader.read(path.read_bytes(), path.name))
        except (OSError, WorkbookDecodeError) as exc:
            logger.error(f"Cannot read {path}: {exc}")
            print(f"Cannot read {path}: {exc}")
            return 1
    get_usage_logger().info(f"Analyzed files: {[p.name for p in args.paths]}")

    if args.timeline:
        _print_timeline(build_snapshot_timeline().execute(workbooks))
        return 0

    start = _parse_date(args.start, logger)
    end = _parse_date(args.end, logger)
    analyze = build_analyze_transactions()
    for workbook in workbooks:
        result = analyze.execute(
            workbook,
            account=args.account,
            start_date=start,
            end_date=end,
        )
        _print_analysis(result)
        if find_sheet(workbook.sheet_names, PERFORMANCE_SHEET_KEYWORDS):
            _print_metrics(build_analyze_performance().execute(workbook))
        if args.save:
            build_result_cache().save(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
