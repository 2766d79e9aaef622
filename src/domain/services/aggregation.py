"""Single-pass aggregation of classified events into portfolio totals."""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal
from typing import TypeVar

from src.domain.models import (
    AggregateTotals,
    DateRange,
    EventKind,
    FeeBreakdown,
    FinancialEvent,
    KPISet,
    PeriodBucket,
    Position,
)
from src.domain.services.classification import position_key
from src.domain.services.filtering import EventFilter
from src.domain.services.parsing import (
    month_key,
    period_sort_key,
    quarter_key,
    year_key,
)

ZERO = Decimal("0")
_T = TypeVar("_T")


def _get_or_insert(
    mapping: dict[str, _T],
    key: str,
    factory: Callable[[str], _T],
) -> _T:
    found = mapping.get(key)
    if found is None:
        found = factory(key)
        mapping[key] = found
    return found


def _sorted_buckets(buckets: dict[str, PeriodBucket]) -> list[PeriodBucket]:
    return sorted(
        buckets.values(),
        key=lambda bucket: period_sort_key(bucket.period),
    )


def build_kpis(
    *,
    deposits: Decimal,
    withdrawals: Decimal,
    dividends: Decimal,
    interest: Decimal,
    fees: FeeBreakdown,
    rebates: Decimal,
    positions: Iterable[Position],
    total_valuation: Decimal = ZERO,
    unclassified_count: int = 0,
) -> KPISet:
    """Derive the terminal KPI set from the fold accumulators.

    Args:
        deposits: Sum of deposits.
        withdrawals: Sum of absolute withdrawals.
        dividends: Sum of dividends.
        interest: Sum of interest.
        fees: Gross fees by family.
        rebates: Commission rebates received.
        positions: Finalized positions.
        total_valuation: Market value of the portfolio, when known.
        unclassified_count: Number of rows that matched no category.

    Returns:
        KPISet: Net deposits, fees, net result, and performance figures.
    """
    net_deposits = deposits - withdrawals
    total_fees = fees.gross - rebates
    realized = sum((position.realized for position in positions), ZERO)
    net_result = dividends + interest + realized - total_fees
    perf_pct = (
        float(net_result / net_deposits * 100) if net_deposits > 0 else 0.0
    )
    unrealized = (
        total_valuation - net_deposits - net_result
        if total_valuation
        else ZERO
    )
    return KPISet(
        deposits=deposits,
        withdrawals=withdrawals,
        net_deposits=net_deposits,
        dividends=dividends,
        interest=interest,
        fees=fees,
        rebates=rebates,
        total_fees=total_fees,
        realized=realized,
        net_result=net_result,
        total_valuation=total_valuation,
        unrealized=unrealized,
        perf_pct=perf_pct,
        unclassified_count=unclassified_count,
    )


def aggregate(
    events: Iterable[FinancialEvent],
    event_filter: EventFilter | None = None,
    total_valuation: Decimal = ZERO,
) -> AggregateTotals:
    """Fold classified events into positions, period buckets, and KPIs.

    Every accepted event updates the month, quarter, and year bucket of
    its date. The date range spans every dated event, filtered or not.
    State is local to the call, so repeated calls over the same events
    return equal results.

    Args:
        events: Classified events, in any order.
        event_filter: Optional account and date-range filter.
        total_valuation: Market value used for the unrealized estimate.

    Returns:
        AggregateTotals: Sorted positions and periods plus the KPI set.
    """
    active_filter = event_filter or EventFilter()
    positions: dict[str, Position] = {}
    months: dict[str, PeriodBucket] = {}
    quarters: dict[str, PeriodBucket] = {}
    years: dict[str, PeriodBucket] = {}

    deposits = withdrawals = dividends = interest = ZERO
    commission = tax = other_fees = rebates = ZERO
    unclassified = 0
    first: date | None = None
    last: date | None = None

    for event in events:
        first = event.date if first is None else min(first, event.date)
        last = event.date if last is None else max(last, event.date)
        if not active_filter.accepts(event):
            continue
        if event.kind is EventKind.OTHER:
            unclassified += 1
            continue

        buckets = (
            _get_or_insert(months, month_key(event.date), PeriodBucket),
            _get_or_insert(quarters, quarter_key(event.date), PeriodBucket),
            _get_or_insert(years, year_key(event.date), PeriodBucket),
        )
        amount = event.amount
        magnitude = abs(amount)

        if event.kind is EventKind.DEPOSIT:
            deposits += amount
            for bucket in buckets:
                bucket.deposits += amount
        elif event.kind is EventKind.WITHDRAWAL:
            withdrawals += magnitude
            for bucket in buckets:
                bucket.withdrawals += magnitude
        elif event.kind is EventKind.DIVIDEND:
            dividends += amount
            for bucket in buckets:
                bucket.dividends += amount
            if event.symbol:
                position = _get_or_insert(
                    positions,
                    event.symbol,
                    lambda key: Position(symbol=key, name=event.description),
                )
                position.dividends += amount
        elif event.kind is EventKind.INTEREST:
            interest += amount
            for bucket in buckets:
                bucket.interest += amount
        elif event.kind is EventKind.COMMISSION:
            if event.category == "custody":
                other_fees += magnitude
            else:
                commission += magnitude
            for bucket in buckets:
                bucket.fees += magnitude
        elif event.kind is EventKind.COMMISSION_REBATE:
            rebates += amount
        elif event.kind is EventKind.TAX:
            tax += magnitude
            for bucket in buckets:
                bucket.fees += magnitude
        else:
            position = _get_or_insert(
                positions,
                position_key(event),
                lambda key: Position(symbol=key, name=event.description),
            )
            position.trade_count += 1
            if event.kind is EventKind.TRADE_BUY:
                position.buys += magnitude
            else:
                position.sells += amount
            for bucket in buckets:
                bucket.pl += amount

    ordered_positions = sorted(
        positions.values(),
        key=lambda position: (-position.realized, position.symbol),
    )
    kpis = build_kpis(
        deposits=deposits,
        withdrawals=withdrawals,
        dividends=dividends,
        interest=interest,
        fees=FeeBreakdown(commission=commission, tax=tax, other=other_fees),
        rebates=rebates,
        positions=ordered_positions,
        total_valuation=total_valuation,
        unclassified_count=unclassified,
    )
    date_range = (
        DateRange(min=first.isoformat(), max=last.isoformat())
        if first is not None and last is not None
        else None
    )
    return AggregateTotals(
        kpis=kpis,
        positions=ordered_positions,
        months=_sorted_buckets(months),
        quarters=_sorted_buckets(quarters),
        years=_sorted_buckets(years),
        date_range=date_range,
    )


__all__ = ["aggregate", "build_kpis"]
