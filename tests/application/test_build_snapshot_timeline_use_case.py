"""Tests for the BuildSnapshotTimelineUseCase."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.build_snapshot_timeline import (
    BuildSnapshotTimelineUseCase,
    master_sheet_name,
)
from src.domain.models import Sheet, Workbook
from src.domain.services import SnapshotLayout


def _extract(day, total, name="Client 123456", source="extract.xlsx"):
    cells = [[None, None, None] for _ in range(45)]
    cells[0][1] = day
    cells[1][2] = total
    cells[44][2] = total / 2 if isinstance(total, float) else None
    return Workbook(
        sheets={
            "Summary": Sheet(name="Summary"),
            name: Sheet(name=name, cells=cells),
        },
        source_name=source,
    )


def test_master_sheet_name() -> None:
    """The client sheet should be found by its prefix."""
    assert master_sheet_name(["Summary", "Client 42"]) == "Client 42"
    assert master_sheet_name(["Clients list"]) is None


def test_execute_builds_sorted_timeline() -> None:
    """Extracts given in any order should produce a sorted timeline."""
    logger = MagicMock()
    workbooks = [
        _extract("29.02.2024", 110000.0, source="feb.xlsx"),
        _extract("31.01.2024", 100000.0, source="jan.xlsx"),
    ]

    timeline = BuildSnapshotTimelineUseCase(logger=logger).execute(workbooks)

    assert [point.date for point in timeline.points] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
    ]
    assert timeline.points[1].delta == pytest.approx(10000.0)
    assert timeline.points[1].sub_accounts == {"mandate": 55000.0}
    assert timeline.cumulative_twr_pct == pytest.approx(10.0)
    logger.warning.assert_not_called()


def test_execute_skips_unreadable_extracts() -> None:
    """Workbooks without client sheet or date should be skipped."""
    logger = MagicMock()
    workbooks = [
        _extract("31.01.2024", 100000.0),
        _extract("31.01.2024", 1.0, name="Summary 2"),
        _extract(None, 1.0, source="nodate.xlsx"),
    ]

    timeline = BuildSnapshotTimelineUseCase(logger=logger).execute(workbooks)

    assert len(timeline.points) == 1
    assert logger.warning.call_count == 2


def test_execute_uses_custom_layout() -> None:
    """A custom layout should be applied to every extract."""
    workbook = Workbook(
        sheets={"Client 1": Sheet(name="Client 1", cells=[["2024-03-31", 7]])}
    )
    layout = SnapshotLayout(
        date_cell=(0, 0),
        total_cell=(0, 1),
        sub_accounts={},
    )

    timeline = BuildSnapshotTimelineUseCase(
        logger=MagicMock(),
        layout=layout,
    ).execute([workbook])

    assert timeline.points[0].total_value == 7.0
