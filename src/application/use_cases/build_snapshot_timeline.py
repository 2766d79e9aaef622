"""Use case to merge monthly master extracts into a valuation timeline."""

from collections.abc import Iterable

from src.domain.constants import MASTER_SHEET_PREFIX
from src.domain.models import Snapshot, SnapshotTimeline, Workbook
from src.domain.services import (
    SnapshotLayout,
    build_timeline,
    read_master_snapshot,
)
from src.infrastructure.logging.logger import get_app_logger


def master_sheet_name(sheet_names: Iterable[str]) -> str | None:
    """Return the "Client <id>" sheet of a master extract."""
    for name in sheet_names:
        if str(name).lower().startswith(MASTER_SHEET_PREFIX):
            return name
    return None


class BuildSnapshotTimelineUseCase:
    """Read one snapshot per workbook and build the sorted timeline."""

    def __init__(self, logger=None, layout: SnapshotLayout | None = None):
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            layout: Cell offsets of the master sheet.
        """
        self._logger = logger or get_app_logger()
        self._layout = layout or SnapshotLayout()

    def execute(self, workbooks: Iterable[Workbook]) -> SnapshotTimeline:
        """Return the timeline of every readable extract.

        Workbooks without a master sheet or a usable date are skipped with
        a warning.

        Args:
            workbooks: One decoded workbook per monthly extract.

        Returns:
            SnapshotTimeline: Chronological points with deltas.
        """
        snapshots: list[Snapshot] = []
        for workbook in workbooks:
            label = workbook.source_name or "<workbook>"
            name = master_sheet_name(workbook.sheet_names)
            if name is None:
                self._logger.warning(f"No client sheet in {label}, skipped")
                continue
            snapshot = read_master_snapshot(
                workbook.sheet(name),
                self._layout,
                source_name=workbook.source_name,
            )
            if snapshot is None:
                self._logger.warning(
                    f"No valuation date in {label}, skipped"
                )
                continue
            snapshots.append(snapshot)

        timeline = build_timeline(snapshots, logger=self._logger)
        self._logger.info(
            f"Built timeline of {len(timeline.points)} snapshots: "
            f"cumulative_twr={timeline.cumulative_twr_pct:.2f}%"
        )
        return timeline


__all__ = ["BuildSnapshotTimelineUseCase", "master_sheet_name"]
