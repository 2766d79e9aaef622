"""Tests for the in-memory workbook models."""

from datetime import date

from src.domain.models import ColumnMapping, MappedRow, Sheet, Workbook


def test_records_use_first_non_blank_row_as_header() -> None:
    """Leading blank rows and blank data rows should be skipped."""
    sheet = Sheet(
        name="Transactions",
        cells=[
            [None, ""],
            ["Date", "Montant", None],
            ["", "  ", None],
            [date(2024, 1, 2), "100", "ignored"],
            ["03.01.2024"],
        ],
    )

    assert sheet.records() == [
        {"Date": date(2024, 1, 2), "Montant": "100"},
        {"Date": "03.01.2024", "Montant": None},
    ]


def test_records_of_empty_or_header_only_sheet() -> None:
    """Empty and header-only sheets should give no records."""
    assert Sheet(name="Empty").records() == []
    assert Sheet(name="Header", cells=[["Date", "Montant"]]).records() == []


def test_records_suffix_repeated_headers() -> None:
    """A repeated header should not hide the earlier column."""
    sheet = Sheet(
        name="Mouvements",
        cells=[
            ["Date", "Montant", "Date", "Date_1", "Date"],
            ["2024-01-15", "100", "2024-01-17", "x", "y"],
        ],
    )

    assert sheet.records() == [
        {
            "Date": "2024-01-15",
            "Montant": "100",
            "Date_1": "2024-01-17",
            "Date_1_1": "x",
            "Date_2": "y",
        }
    ]


def test_cell_out_of_range_is_none() -> None:
    """Positional access outside the grid should give None."""
    sheet = Sheet(name="Client 1", cells=[["a", "b"], ["c"]])

    assert sheet.cell(0, 1) == "b"
    assert sheet.cell(1, 1) is None
    assert sheet.cell(5, 0) is None
    assert sheet.cell(-1, 0) is None


def test_workbook_lists_sheets_in_order() -> None:
    """Sheet names should keep workbook order."""
    workbook = Workbook(
        sheets={"B": Sheet(name="B"), "A": Sheet(name="A")},
        source_name="export.xlsx",
    )

    assert workbook.sheet_names == ["B", "A"]
    assert workbook.sheet("A").name == "A"
    assert workbook.sheet("missing") is None


def test_mapped_row_reads_through_fallbacks() -> None:
    """Unresolved fields should read the fallback header."""
    mapping = ColumnMapping(
        resolved={"date": "Datum", "desc": None},
        fallbacks={"desc": "Description"},
    )
    row = MappedRow({"Datum": "x", "Description": "  Achat  "}, mapping)

    assert row.get("date") == "x"
    assert row.text("desc") == "Achat"
    assert row.text("missing") == ""
    assert mapping.unverified == ["desc"]
