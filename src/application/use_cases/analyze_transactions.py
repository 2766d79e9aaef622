"""Use case to analyze a broker transaction workbook."""

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal

from src.domain.constants import (
    BROKER_UBS,
    CLASSIFICATION_RULES,
    TRANSACTION_COLUMNS,
    TRANSACTION_FALLBACKS,
    TRANSACTION_SHEET_KEYWORDS,
    VALUATION_COLUMNS,
)
from src.domain.models import (
    AnalysisResult,
    FinancialEvent,
    FormatTag,
    KeywordRule,
    KPISet,
    MappedRow,
    Workbook,
)
from src.domain.services import (
    EventFilter,
    aggregate,
    build_column_mapping,
    classify,
    detect_format,
    find_position_sheet,
    find_sheet,
    list_accounts,
    parse_number,
    pick_sample_row,
    resolve_column,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import sum_decimals


def build_empty_result(
    format_tag: FormatTag,
    sheet_names: Sequence[str],
    broker: str = BROKER_UBS,
) -> AnalysisResult:
    """Return a zero-valued result with the populated result's shape."""
    return AnalysisResult(
        broker=broker,
        format=format_tag.value,
        sheet_names=list(sheet_names),
        col_mapping={},
        unverified_columns=[],
        kpis=KPISet(),
        positions=[],
        months=[],
        quarters=[],
        years=[],
        accounts=[],
        date_range=None,
    )


def transaction_sheet_name(
    sheet_names: Sequence[str],
    format_tag: FormatTag,
) -> str | None:
    """Return the sheet holding the transaction log."""
    if format_tag is FormatTag.SIMPLE_CSV and sheet_names:
        return sheet_names[0]
    return find_sheet(sheet_names, TRANSACTION_SHEET_KEYWORDS)


class AnalyzeTransactionsUseCase:
    """Classify and aggregate the transaction log of a workbook."""

    def __init__(
        self,
        logger=None,
        rules: Sequence[KeywordRule] = CLASSIFICATION_RULES,
        columns: Mapping[str, Sequence[str]] = TRANSACTION_COLUMNS,
        fallbacks: Mapping[str, str] = TRANSACTION_FALLBACKS,
        broker: str = BROKER_UBS,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            rules: Keyword rules tested in priority order.
            columns: Header candidates per logical field.
            fallbacks: Default header per logical field.
            broker: Broker label reported in the result.
        """
        self._logger = logger or get_app_logger()
        self._rules = tuple(rules)
        self._columns = columns
        self._fallbacks = fallbacks
        self._broker = broker

    def execute(
        self,
        workbook: Workbook,
        account: str | None = None,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> AnalysisResult:
        """Return KPIs, positions, and period buckets for the workbook.

        Args:
            workbook: Decoded workbook.
            account: Optional sub-account filter (``ALL`` keeps every one).
            start_date: Optional inclusive lower date bound.
            end_date: Optional inclusive upper date bound.

        Returns:
            AnalysisResult: Aggregated result; the empty result when the
            transaction sheet is missing, empty, or header-only.
        """
        sheet_names = workbook.sheet_names
        format_tag = detect_format(sheet_names)
        name = transaction_sheet_name(sheet_names, format_tag)
        sheet = workbook.sheet(name) if name else None
        records = sheet.records() if sheet else []
        if not records:
            self._logger.warning(
                f"No transaction rows found (format={format_tag.value}, "
                f"sheets={sheet_names})"
            )
            return build_empty_result(format_tag, sheet_names, self._broker)

        mapping = build_column_mapping(
            pick_sample_row(records),
            self._columns,
            self._fallbacks,
            logger=self._logger,
        )
        events: list[FinancialEvent] = []
        for record in records:
            event = classify(MappedRow(record, mapping), self._rules)
            if event is not None:
                events.append(event)
        skipped = len(records) - len(events)
        if skipped:
            self._logger.info(f"Skipped {skipped} rows without a valid date")

        totals = aggregate(
            events,
            EventFilter(account=account, start=start_date, end=end_date),
            total_valuation=self._total_valuation(workbook, exclude=name),
        )
        self._logger.info(
            f"Analyzed {len(events)} events from '{name}' "
            f"(format={format_tag.value}): "
            f"net_deposits={totals.kpis.net_deposits}, "
            f"net_result={totals.kpis.net_result}, "
            f"unclassified={totals.kpis.unclassified_count}"
        )
        return AnalysisResult(
            broker=self._broker,
            format=format_tag.value,
            sheet_names=sheet_names,
            col_mapping=mapping.as_dict(),
            unverified_columns=mapping.unverified,
            kpis=totals.kpis,
            positions=totals.positions,
            months=totals.months,
            quarters=totals.quarters,
            years=totals.years,
            accounts=list_accounts(events),
            date_range=totals.date_range,
        )

    def _total_valuation(
        self,
        workbook: Workbook,
        exclude: str | None = None,
    ) -> Decimal:
        name = find_position_sheet(workbook.sheet_names)
        if name == exclude:
            return Decimal("0")
        sheet = workbook.sheet(name) if name else None
        records = sheet.records() if sheet else []
        if not records:
            return Decimal("0")
        column = resolve_column(pick_sample_row(records), VALUATION_COLUMNS)
        if column is None:
            self._logger.warning(f"No valuation column found in '{name}'")
            return Decimal("0")
        return sum_decimals(parse_number(row.get(column)) for row in records)


__all__ = [
    "AnalyzeTransactionsUseCase",
    "build_empty_result",
    "transaction_sheet_name",
]
