"""Broker export format detection and column resolution."""

from collections.abc import Iterable, Mapping, Sequence
from logging import Logger

from src.domain.constants import (
    MASTER_SHEET_PREFIX,
    PERFORMANCE_SHEET_KEYWORDS,
    POSITION_SHEET_KEYWORDS,
)
from src.domain.models import ColumnMapping, FormatTag, RawRow


def detect_format(sheet_names: Sequence[str]) -> FormatTag:
    """Infer the export variant from the workbook sheet names.

    Args:
        sheet_names: Sheet names in workbook order.

    Returns:
        FormatTag: Detected export shape.
    """
    lowered = [str(name).lower() for name in sheet_names]
    if any("transaction" in name for name in lowered) and any(
        "position" in name for name in lowered
    ):
        return FormatTag.KEY4_EXCEL
    if any(
        keyword in name
        for name in lowered
        for keyword in PERFORMANCE_SHEET_KEYWORDS
    ):
        return FormatTag.SAXO_PERFORMANCE
    if any("portfolio" in name or "portefeuille" in name for name in lowered):
        return FormatTag.ADVISOR_EXCEL
    if any(name.startswith(MASTER_SHEET_PREFIX) for name in lowered):
        return FormatTag.UBS_MASTER
    if len(lowered) == 1:
        return FormatTag.SIMPLE_CSV
    return FormatTag.UNKNOWN


def find_sheet(
    sheet_names: Sequence[str],
    keywords: Iterable[str],
) -> str | None:
    """Return the first sheet whose lower-cased name contains a keyword."""
    words = tuple(keywords)
    for name in sheet_names:
        lowered = str(name).lower()
        if any(word in lowered for word in words):
            return name
    return None


def find_position_sheet(sheet_names: Sequence[str]) -> str | None:
    return find_sheet(sheet_names, POSITION_SHEET_KEYWORDS)


def pick_sample_row(records: Sequence[RawRow]) -> RawRow | None:
    """Return the first row holding any value, else the first row."""
    for record in records:
        if any(value is not None and value != "" for value in record.values()):
            return record
    return records[0] if records else None


def resolve_column(
    sample_row: Mapping[str, object] | None,
    candidates: Sequence[str],
) -> str | None:
    """Resolve a logical field to an actual header.

    Pass 1 requires an exact case-insensitive match; pass 2 accepts a
    header containing the candidate. Candidates are tried in order within
    each pass.

    Args:
        sample_row: Header-keyed row used to list available headers.
        candidates: Candidate header names for the logical field.

    Returns:
        str | None: Matching header, or None when unresolved.
    """
    headers = [str(key) for key in (sample_row or {})]
    for candidate in candidates:
        wanted = candidate.lower()
        for header in headers:
            if header.strip().lower() == wanted:
                return header
    for candidate in candidates:
        wanted = candidate.lower()
        for header in headers:
            if wanted in header.lower():
                return header
    return None


def build_column_mapping(
    sample_row: Mapping[str, object] | None,
    candidates: Mapping[str, Sequence[str]],
    fallbacks: Mapping[str, str],
    logger: Logger | None = None,
) -> ColumnMapping:
    """Resolve every logical field of a sheet.

    Unresolved fields keep their fallback header and are reported as
    unverified.

    Args:
        sample_row: Header-keyed row used to list available headers.
        candidates: Candidate headers per logical field.
        fallbacks: Default header per logical field.
        logger: Optional logger for unverified fields.

    Returns:
        ColumnMapping: Immutable mapping for the sheet.
    """
    mapping = ColumnMapping(
        resolved={
            field: resolve_column(sample_row, names)
            for field, names in candidates.items()
        },
        fallbacks=dict(fallbacks),
    )
    if mapping.unverified and logger is not None:
        logger.warning(
            "Unverified column mapping, using default headers for: "
            + ", ".join(
                f"{field}={mapping.header(field)}"
                for field in mapping.unverified
            )
        )
    return mapping


__all__ = [
    "detect_format",
    "find_sheet",
    "find_position_sheet",
    "pick_sample_row",
    "resolve_column",
    "build_column_mapping",
]
