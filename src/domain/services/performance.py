"""Performance metrics: TWR, CAGR, XIRR, volatility, Sharpe, drawdowns."""

from collections.abc import Iterable, Sequence
from datetime import date
from logging import Logger
import math
import statistics

from src.domain.constants import (
    DEFAULT_RISK_FREE_RATE_PCT,
    DRAWDOWN_EPSILON_PCT,
    TRADING_DAYS_PER_YEAR,
)
from src.domain.models import (
    CashFlow,
    DrawdownEpisode,
    EventKind,
    FinancialEvent,
    PerformanceMetrics,
    PerformancePoint,
)

XIRR_SEED = 0.10
XIRR_MAX_NEWTON_STEPS = 100
XIRR_MAX_BISECTION_STEPS = 60
XIRR_STEP_TOLERANCE = 1e-8
XIRR_BRACKET = (-0.999, 10.0)
XIRR_DAYS_PER_YEAR = 365.25
_DERIVATIVE_STEP = 1e-6


def twr_from_cumulative(points: Sequence[PerformancePoint]) -> float:
    """Return the last cumulative TWR in percent of a provided series.

    The broker series is used as is, never recomputed.
    """
    if not points:
        return 0.0
    return points[-1].twr_cumulative


def chain_valuations(values: Sequence[float]) -> tuple[list[float], float]:
    """Approximate period returns from consecutive valuations.

    ``perf_i = (V_i - V_{i-1}) / V_{i-1}`` chained multiplicatively. Cash
    moved in or out between two valuations is counted as performance;
    periods starting from a non-positive value contribute 0.

    Args:
        values: Valuations in chronological order.

    Returns:
        tuple[list[float], float]: Period returns aligned with ``values``
        (the first is 0.0) and the cumulative return, as fractions.
    """
    returns: list[float] = []
    growth = 1.0
    previous: float | None = None
    for value in values:
        if previous is None or previous <= 0:
            returns.append(0.0)
        else:
            period = (value - previous) / previous
            returns.append(period)
            growth *= 1 + period
        previous = value
    return returns, growth - 1


def cagr(twr: float, days: int) -> float | None:
    """Annualize a TWR fraction over a calendar-day span.

    Returns:
        float | None: ``(1 + twr) ** (365 / days) - 1``, or None when
        ``days <= 0`` or ``twr <= -1``.
    """
    if days <= 0 or twr <= -1:
        return None
    return (1 + twr) ** (365 / days) - 1


def npv(rate: float, flows: Sequence[CashFlow]) -> float:
    """Net present value of dated flows, discounted from the first flow."""
    if not flows:
        return 0.0
    if rate <= -1:
        return math.inf
    origin = flows[0].date
    total = 0.0
    for flow in flows:
        years = (flow.date - origin).days / XIRR_DAYS_PER_YEAR
        try:
            total += flow.amount / (1 + rate) ** years
        except (OverflowError, ZeroDivisionError):
            return math.inf
    return total


def _bisect(
    flows: Sequence[CashFlow],
    tolerance: float,
) -> float | None:
    low, high = XIRR_BRACKET
    npv_low = npv(low, flows)
    npv_high = npv(high, flows)
    if not (math.isfinite(npv_low) and math.isfinite(npv_high)):
        return None
    if npv_low * npv_high > 0:
        return None
    for _ in range(XIRR_MAX_BISECTION_STEPS):
        middle = (low + high) / 2
        npv_middle = npv(middle, flows)
        if npv_middle == 0:
            return middle
        if (npv_middle < 0) == (npv_low < 0):
            low, npv_low = middle, npv_middle
        else:
            high = middle
    middle = (low + high) / 2
    return middle if abs(npv(middle, flows)) < tolerance else None


def xirr(
    flows: Iterable[CashFlow],
    valuation: float | None = None,
    logger: Logger | None = None,
) -> float | None:
    """Solve the annual money-weighted return of dated cash flows.

    Contributions must be negative and returned capital, including the
    terminal valuation, positive. Newton-Raphson with a finite-difference
    derivative runs first; bisection over ``[-0.999, 10]`` is the
    fallback. Both loops are capped.

    Args:
        flows: Dated cash flows, in any order.
        valuation: Portfolio valuation used to scale the NPV tolerance.
        logger: Optional logger for non-convergence.

    Returns:
        float | None: Annual rate as a fraction, or None when no root is
        found.
    """
    ordered = sorted(flows, key=lambda flow: flow.date)
    if len(ordered) < 2:
        return None
    if not any(flow.amount > 0 for flow in ordered) or not any(
        flow.amount < 0 for flow in ordered
    ):
        return None
    scale = valuation or max(abs(flow.amount) for flow in ordered)
    tolerance = max(100.0, abs(scale) * 1e-6)

    rate = XIRR_SEED
    for _ in range(XIRR_MAX_NEWTON_STEPS):
        value = npv(rate, ordered)
        shifted = npv(rate + _DERIVATIVE_STEP, ordered)
        derivative = (shifted - value) / _DERIVATIVE_STEP
        if derivative == 0 or not math.isfinite(derivative):
            break
        next_rate = rate - value / derivative
        if not math.isfinite(next_rate) or next_rate <= -1:
            break
        if abs(next_rate - rate) < XIRR_STEP_TOLERANCE:
            if abs(npv(next_rate, ordered)) < tolerance:
                return next_rate
            break
        rate = next_rate

    result = _bisect(ordered, tolerance)
    if result is None and logger is not None:
        logger.warning(
            f"XIRR did not converge for {len(ordered)} cash flows"
        )
    return result


def cash_flows_from_events(
    events: Iterable[FinancialEvent],
    valuation: float = 0.0,
    valuation_date: date | None = None,
) -> list[CashFlow]:
    """Build investor cash flows from transfer events.

    Deposits become negative flows, withdrawals positive ones, and a
    positive terminal flow equal to the valuation is appended.
    """
    flows = []
    for event in events:
        if event.kind is EventKind.DEPOSIT:
            flows.append(
                CashFlow(date=event.date, amount=-float(event.amount))
            )
        elif event.kind is EventKind.WITHDRAWAL:
            flows.append(
                CashFlow(date=event.date, amount=float(abs(event.amount)))
            )
    if valuation > 0 and valuation_date is not None:
        flows.append(CashFlow(date=valuation_date, amount=float(valuation)))
    return sorted(flows, key=lambda flow: flow.date)


def daily_returns(points: Sequence[PerformancePoint]) -> list[float]:
    """Return daily percent returns, derived from the series when absent."""
    returns: list[float] = []
    for index, point in enumerate(points):
        if point.daily_return_pct is not None:
            returns.append(point.daily_return_pct)
            continue
        if index == 0:
            continue
        base = 1 + points[index - 1].twr_cumulative / 100
        if base <= 0:
            continue
        returns.append(((1 + point.twr_cumulative / 100) / base - 1) * 100)
    return returns


def volatility(returns_pct: Iterable[float]) -> float:
    """Annualized sample standard deviation of non-zero daily returns."""
    observations = [value for value in returns_pct if value != 0]
    if len(observations) < 2:
        return 0.0
    return statistics.stdev(observations) * math.sqrt(TRADING_DAYS_PER_YEAR)


def sharpe(
    annual_return_pct: float,
    volatility_pct: float,
    risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT,
) -> float:
    """Excess annual return per unit of volatility; 0 without volatility."""
    if volatility_pct == 0:
        return 0.0
    return (annual_return_pct - risk_free_rate_pct) / volatility_pct


def drawdown_series(cumulative: Sequence[float]) -> list[float]:
    """Distance of each point below the running peak (always <= 0)."""
    series: list[float] = []
    peak: float | None = None
    for value in cumulative:
        peak = value if peak is None else max(peak, value)
        series.append(value - peak)
    return series


def max_drawdown(cumulative: Sequence[float]) -> float:
    return min(drawdown_series(cumulative), default=0.0)


def drawdown_episodes(
    dates: Sequence[date],
    cumulative: Sequence[float],
    epsilon: float = DRAWDOWN_EPSILON_PCT,
) -> list[DrawdownEpisode]:
    """Split the drawdown series into maximal runs below ``-epsilon``.

    Args:
        dates: Dates aligned with ``cumulative``.
        cumulative: Cumulative performance in percent.
        epsilon: Noise threshold in percentage points.

    Returns:
        list[DrawdownEpisode]: Episodes in chronological order; an episode
        still open at the end of the series is marked as not recovered.
    """
    episodes: list[DrawdownEpisode] = []
    start: date | None = None
    end: date | None = None
    depth = 0.0
    for day, drawdown in zip(dates, drawdown_series(cumulative)):
        if drawdown < -epsilon:
            if start is None:
                start, depth = day, drawdown
            depth = min(depth, drawdown)
            end = day
        elif start is not None and end is not None:
            episodes.append(DrawdownEpisode(start=start, end=end, depth=depth))
            start = end = None
    if start is not None and end is not None:
        episodes.append(
            DrawdownEpisode(start=start, end=end, depth=depth, recovered=False)
        )
    return episodes


def compute_performance_metrics(
    points: Iterable[PerformancePoint],
    cash_flows: Iterable[CashFlow] = (),
    risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT,
    logger: Logger | None = None,
) -> PerformanceMetrics:
    """Compute every metric of a performance series.

    A failed XIRR only leaves ``xirr_pct`` empty.

    Args:
        points: Daily performance points, in any order.
        cash_flows: Investor cash flows including the terminal valuation.
        risk_free_rate_pct: Annual risk-free rate in percent.
        logger: Optional logger for warnings.

    Returns:
        PerformanceMetrics: Metrics, all zero for an empty series.
    """
    ordered = sorted(points, key=lambda point: point.date)
    if not ordered:
        return PerformanceMetrics()

    start, end = ordered[0].date, ordered[-1].date
    days = (end - start).days
    twr_pct = twr_from_cumulative(ordered)
    annual = cagr(twr_pct / 100, days)
    cagr_pct = annual * 100 if annual is not None else None
    vol = volatility(daily_returns(ordered))
    cumulative = [point.twr_cumulative for point in ordered]
    final_value = ordered[-1].account_value

    flows = list(cash_flows)
    rate = xirr(flows, valuation=final_value, logger=logger) if flows else None

    return PerformanceMetrics(
        start_date=start,
        end_date=end,
        days=days,
        twr_pct=twr_pct,
        cagr_pct=cagr_pct,
        xirr_pct=rate * 100 if rate is not None else None,
        volatility_pct=vol,
        sharpe=sharpe(
            cagr_pct if cagr_pct is not None else twr_pct,
            vol,
            risk_free_rate_pct,
        ),
        max_drawdown_pct=max_drawdown(cumulative),
        final_value=final_value,
        episodes=drawdown_episodes(
            [point.date for point in ordered],
            cumulative,
        ),
    )


__all__ = [
    "twr_from_cumulative",
    "chain_valuations",
    "cagr",
    "npv",
    "xirr",
    "cash_flows_from_events",
    "daily_returns",
    "volatility",
    "sharpe",
    "drawdown_series",
    "max_drawdown",
    "drawdown_episodes",
    "compute_performance_metrics",
]
