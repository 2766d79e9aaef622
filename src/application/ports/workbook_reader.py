"""Port for decoding spreadsheet bytes into an in-memory workbook."""

from typing import Protocol

from src.domain.models import Workbook


class WorkbookDecodeError(RuntimeError):
    """Raised when workbook bytes cannot be decoded at all."""


class WorkbookReaderPort(Protocol):
    """Port exposing workbook decoding to the use cases."""

    def read(self, data: bytes, source_name: str | None = None) -> Workbook:
        """Decode raw file bytes.

        Args:
            data: File content.
            source_name: File name, used to pick the decoder and label
                single-sheet files.

        Returns:
            Workbook: Decoded sheets.

        Raises:
            WorkbookDecodeError: If the bytes are not a readable workbook.
        """


__all__ = ["WorkbookDecodeError", "WorkbookReaderPort"]
