"""Domain models for in-memory spreadsheet workbooks."""

from dataclasses import dataclass, field
from datetime import date, datetime

Cell = str | int | float | date | datetime | None
RawRow = dict[str, Cell]


def _is_blank(value: Cell) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _unique_headers(headers: list[str]) -> list[str]:
    """Suffix repeated headers with ``_1``, ``_2``... in column order."""
    taken: set[str] = set()
    unique = []
    for header in headers:
        candidate = header
        suffix = 0
        while candidate and candidate in taken:
            suffix += 1
            candidate = f"{header}_{suffix}"
        taken.add(candidate)
        unique.append(candidate)
    return unique


@dataclass(frozen=True)
class Sheet:
    """Row-major grid of cells with header-keyed and positional access.

    Attributes:
        name: Sheet name as found in the workbook.
        cells: Rows of cells, as decoded from the source file.
    """

    name: str
    cells: list[list[Cell]] = field(default_factory=list)

    def cell(self, row: int, col: int) -> Cell:
        """Return the cell at a fixed offset, or None when out of range."""
        if row < 0 or col < 0 or row >= len(self.cells):
            return None
        values = self.cells[row]
        if col >= len(values):
            return None
        return values[col]

    def records(self) -> list[RawRow]:
        """Return header-keyed rows.

        The first non-blank row is the header row. Blank rows are skipped
        and missing trailing cells default to None. A repeated header gets
        a numeric suffix (``Date``, ``Date_1``) so no column is hidden.

        Returns:
            list[RawRow]: One mapping per data row.
        """
        header_index = next(
            (
                index
                for index, values in enumerate(self.cells)
                if any(not _is_blank(value) for value in values)
            ),
            None,
        )
        if header_index is None:
            return []
        headers = _unique_headers(
            [
                str(value).strip() if value is not None else ""
                for value in self.cells[header_index]
            ]
        )
        records: list[RawRow] = []
        for values in self.cells[header_index + 1:]:
            if all(_is_blank(value) for value in values):
                continue
            record: RawRow = {}
            for position, header in enumerate(headers):
                if not header:
                    continue
                record[header] = (
                    values[position] if position < len(values) else None
                )
            records.append(record)
        return records


@dataclass(frozen=True)
class Workbook:
    """Decoded workbook: ordered sheet names and their grids."""

    sheets: dict[str, Sheet]
    source_name: str | None = None

    @property
    def sheet_names(self) -> list[str]:
        return list(self.sheets)

    def sheet(self, name: str) -> Sheet | None:
        return self.sheets.get(name)


__all__ = ["Cell", "RawRow", "Sheet", "Workbook"]
