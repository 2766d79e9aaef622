"""Application ports package."""

from .database import DatabaseEnginePort
from .key_value_store import KeyValueStorePort, StoredValue
from .workbook_reader import WorkbookDecodeError, WorkbookReaderPort

__all__ = [
    "DatabaseEnginePort",
    "KeyValueStorePort",
    "StoredValue",
    "WorkbookDecodeError",
    "WorkbookReaderPort",
]
