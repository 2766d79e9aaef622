"""Workbook reader decoding xlsx files with openpyxl and CSV text files."""

import csv
from io import BytesIO, StringIO
from pathlib import PurePath
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.application.ports.workbook_reader import (
    WorkbookDecodeError,
    WorkbookReaderPort,
)
from src.domain.models import Cell, Sheet, Workbook
from src.infrastructure.logging.logger import get_app_logger

TEXT_SUFFIXES = (".csv", ".tsv", ".txt")
CSV_DELIMITERS = ",;\t"
TEXT_ENCODINGS = ("utf-8-sig", "cp1252")
SNIFF_LINES = 30
_ZIP_MAGIC = b"PK"


def sniff_delimiter(text: str) -> str:
    """Guess the delimiter from the first lines, defaulting to a comma."""
    sample = "\n".join(text.splitlines()[:SNIFF_LINES])
    if not sample:
        return ","
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter or ","


def _decode_text(data: bytes) -> str:
    if b"\x00" in data:
        raise WorkbookDecodeError("Binary content is not a readable workbook")
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise WorkbookDecodeError("File is neither a workbook nor readable text")


def _sheet_label(source_name: str | None) -> str:
    if not source_name:
        return "Sheet1"
    return PurePath(source_name).stem or "Sheet1"


class OpenpyxlWorkbookReader(WorkbookReaderPort):
    """Decode xlsx bytes through openpyxl and CSV bytes through ``csv``.

    Cached formula values are read, so dates arrive as ``datetime`` and
    numbers as ``int``/``float``. CSV cells stay strings and are parsed
    later by the domain parsers.
    """

    def __init__(self, logger=None) -> None:
        """Initialize the reader.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def read(self, data: bytes, source_name: str | None = None) -> Workbook:
        """Decode raw file bytes.

        Args:
            data: File content.
            source_name: File name, used to pick the decoder and to name
                the single sheet of a CSV file.

        Returns:
            Workbook: Decoded sheets in file order.

        Raises:
            WorkbookDecodeError: If the bytes are empty or unreadable.
        """
        if not data:
            raise WorkbookDecodeError("Empty file")
        suffix = PurePath(source_name).suffix.lower() if source_name else ""
        if suffix in TEXT_SUFFIXES or not data.startswith(_ZIP_MAGIC):
            workbook = self._read_csv(data, source_name)
        else:
            workbook = self._read_xlsx(data, source_name)
        self._logger.info(
            f"Decoded {source_name or '<bytes>'}: "
            f"sheets={workbook.sheet_names}"
        )
        return workbook

    def _read_xlsx(self, data: bytes, source_name: str | None) -> Workbook:
        try:
            book = load_workbook(
                filename=BytesIO(data),
                read_only=True,
                data_only=True,
            )
        except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
            self._logger.error(f"Unable to open workbook {source_name}: {exc}")
            raise WorkbookDecodeError(
                f"Unable to open workbook {source_name or ''}".strip()
            ) from exc
        try:
            sheets = {
                worksheet.title: Sheet(
                    name=worksheet.title,
                    cells=[
                        list(row)
                        for row in worksheet.iter_rows(values_only=True)
                    ],
                )
                for worksheet in book.worksheets
            }
        finally:
            book.close()
        return Workbook(sheets=sheets, source_name=source_name)

    def _read_csv(self, data: bytes, source_name: str | None) -> Workbook:
        text = _decode_text(data)
        delimiter = sniff_delimiter(text)
        try:
            cells: list[list[Cell]] = [
                list(row)
                for row in csv.reader(StringIO(text), delimiter=delimiter)
            ]
        except csv.Error as exc:
            raise WorkbookDecodeError(
                f"Unable to parse CSV {source_name or ''}".strip()
            ) from exc
        name = _sheet_label(source_name)
        return Workbook(
            sheets={name: Sheet(name=name, cells=cells)},
            source_name=source_name,
        )


__all__ = ["OpenpyxlWorkbookReader", "sniff_delimiter"]
