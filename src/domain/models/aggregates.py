"""Domain models for aggregated portfolio totals."""

from dataclasses import dataclass, field
from decimal import Decimal

ZERO = Decimal("0")


@dataclass
class Position:
    """Running trade totals for one security.

    Attributes:
        symbol: Security identifier, or truncated description.
        name: First description seen for the security.
        buys: Sum of absolute buy amounts.
        sells: Sum of sell amounts.
        dividends: Dividends credited for the security.
        trade_count: Number of trade events.
    """

    symbol: str
    name: str = ""
    buys: Decimal = ZERO
    sells: Decimal = ZERO
    dividends: Decimal = ZERO
    trade_count: int = 0

    @property
    def realized(self) -> Decimal:
        """Return sells minus buys."""
        return self.sells - self.buys


@dataclass
class PeriodBucket:
    """Totals for one month, quarter, or year label."""

    period: str
    deposits: Decimal = ZERO
    withdrawals: Decimal = ZERO
    pl: Decimal = ZERO
    fees: Decimal = ZERO
    dividends: Decimal = ZERO
    interest: Decimal = ZERO


@dataclass(frozen=True)
class FeeBreakdown:
    """Gross fees by family."""

    commission: Decimal = ZERO
    tax: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def gross(self) -> Decimal:
        return self.commission + self.tax + self.other


@dataclass(frozen=True)
class DateRange:
    """Inclusive ISO 8601 date bounds."""

    min: str
    max: str


@dataclass(frozen=True)
class KPISet:
    """Terminal portfolio figures.

    Attributes:
        deposits: Sum of deposits.
        withdrawals: Sum of absolute withdrawals.
        net_deposits: Deposits minus withdrawals.
        dividends: Sum of dividends and coupons.
        interest: Sum of interest.
        fees: Gross fees by family.
        rebates: Commission rebates, offset against fees.
        total_fees: Gross fees minus rebates.
        realized: Sum of realized P&L over positions.
        net_result: Dividends + interest + realized - total fees.
        total_valuation: Market value from the positions sheet.
        unrealized: Valuation minus net deposits and net result.
        perf_pct: Net result over net deposits, in percent.
        unclassified_count: Rows that matched no category.
    """

    deposits: Decimal = ZERO
    withdrawals: Decimal = ZERO
    net_deposits: Decimal = ZERO
    dividends: Decimal = ZERO
    interest: Decimal = ZERO
    fees: FeeBreakdown = field(default_factory=FeeBreakdown)
    rebates: Decimal = ZERO
    total_fees: Decimal = ZERO
    realized: Decimal = ZERO
    net_result: Decimal = ZERO
    total_valuation: Decimal = ZERO
    unrealized: Decimal = ZERO
    perf_pct: float = 0.0
    unclassified_count: int = 0


@dataclass(frozen=True)
class AggregateTotals:
    """Output of one aggregation pass."""

    kpis: KPISet
    positions: list[Position]
    months: list[PeriodBucket]
    quarters: list[PeriodBucket]
    years: list[PeriodBucket]
    date_range: DateRange | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Result of importing a transaction workbook.

    The empty result has the same shape with zero values and empty lists.
    """

    broker: str
    format: str
    sheet_names: list[str]
    col_mapping: dict[str, str | None]
    unverified_columns: list[str]
    kpis: KPISet
    positions: list[Position]
    months: list[PeriodBucket]
    quarters: list[PeriodBucket]
    years: list[PeriodBucket]
    accounts: list[str]
    date_range: DateRange | None = None


__all__ = [
    "Position",
    "PeriodBucket",
    "FeeBreakdown",
    "DateRange",
    "KPISet",
    "AggregateTotals",
    "AnalysisResult",
]
