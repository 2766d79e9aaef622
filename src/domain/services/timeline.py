"""Merge monthly point-in-time extracts into a valuation timeline."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from logging import Logger

from src.domain.models import Sheet, Snapshot, SnapshotTimeline, TimelinePoint
from src.domain.services.parsing import parse_flexible_date, parse_number
from src.domain.services.performance import cagr, chain_valuations


@dataclass(frozen=True)
class SnapshotLayout:
    """Fixed cell offsets of a master valuation sheet.

    Attributes:
        date_cell: (row, column) of the valuation date.
        total_cell: (row, column) of the grand total.
        sub_accounts: Label to (row, column) of sub-account values.
    """

    date_cell: tuple[int, int] = (0, 1)
    total_cell: tuple[int, int] = (1, 2)
    sub_accounts: dict[str, tuple[int, int]] = field(
        default_factory=lambda: {"mandate": (44, 2)}
    )


def read_master_snapshot(
    sheet: Sheet,
    layout: SnapshotLayout | None = None,
    source_name: str | None = None,
) -> Snapshot | None:
    """Read one valuation snapshot from a fixed-layout sheet.

    Args:
        sheet: Master sheet, read positionally.
        layout: Cell offsets; defaults to the UBS "Client" layout.
        source_name: File the sheet came from.

    Returns:
        Snapshot | None: Snapshot, or None when the date cell is unusable.
    """
    active = layout or SnapshotLayout()
    snapshot_date = parse_flexible_date(sheet.cell(*active.date_cell))
    if snapshot_date is None:
        return None
    return Snapshot(
        date=snapshot_date,
        total_value=parse_number(sheet.cell(*active.total_cell)),
        sub_accounts={
            label: parse_number(sheet.cell(*position))
            for label, position in active.sub_accounts.items()
        },
        source_name=source_name,
    )


def build_timeline(
    snapshots: Iterable[Snapshot],
    logger: Logger | None = None,
) -> SnapshotTimeline:
    """Sort snapshots and derive deltas and an approximate TWR.

    When two snapshots share a date, the one given last wins. Period
    performance is the simple change between consecutive totals, so
    deposits and withdrawals between extracts count as performance.

    Args:
        snapshots: Snapshots in any order.
        logger: Optional logger for duplicate dates.

    Returns:
        SnapshotTimeline: Chronological points with deltas.
    """
    by_date: dict = {}
    for snapshot in snapshots:
        if snapshot.date in by_date and logger is not None:
            logger.warning(
                f"Duplicate snapshot for {snapshot.date.isoformat()}, "
                f"keeping {snapshot.source_name or 'the latest'}"
            )
        by_date[snapshot.date] = snapshot
    ordered = [by_date[key] for key in sorted(by_date)]
    if not ordered:
        return SnapshotTimeline(points=[])

    period_returns, _ = chain_valuations(
        [snapshot.total_value for snapshot in ordered]
    )
    points: list[TimelinePoint] = []
    growth = 1.0
    previous: Snapshot | None = None
    for snapshot, period in zip(ordered, period_returns):
        delta = (
            snapshot.total_value - previous.total_value if previous else 0.0
        )
        delta_pct = (
            delta / previous.total_value * 100
            if previous and previous.total_value > 0
            else 0.0
        )
        growth *= 1 + period
        points.append(
            TimelinePoint(
                date=snapshot.date,
                total_value=snapshot.total_value,
                delta=delta,
                delta_pct=delta_pct,
                period_perf_pct=period * 100,
                cumulative_twr_pct=(growth - 1) * 100,
                sub_accounts=dict(snapshot.sub_accounts),
            )
        )
        previous = snapshot

    cumulative = growth - 1
    annual = cagr(cumulative, (ordered[-1].date - ordered[0].date).days)
    return SnapshotTimeline(
        points=points,
        cumulative_twr_pct=cumulative * 100,
        cagr_pct=annual * 100 if annual is not None else None,
    )


__all__ = ["SnapshotLayout", "read_master_snapshot", "build_timeline"]
