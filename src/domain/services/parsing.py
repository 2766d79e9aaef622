"""Locale-aware parsing of spreadsheet numbers, dates, and period labels."""

from datetime import date, datetime, timedelta
import math
import re

from src.domain.constants import SPREADSHEET_EPOCH

_IGNORED_CHARS = str.maketrans(
    "",
    "",
    " \t\r\n\u00a0\u2009\u202f'\u2019",
)
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_SERIAL = re.compile(r"\d{1,5}(?:\.\d+)?")
_MINUS_SIGNS = str.maketrans({"\u2212": "-", "\u2013": "-"})
_DATE_SEPARATORS = re.compile(r"[-/.]")
_MAX_SERIAL = 2958465  # 9999-12-31
_COMPACT_RANGE = (10_000_000, 99_999_999)


def _normalize_separators(text: str) -> str:
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if text.count(",") > 1:
        return text.replace(",", "")
    if text.count(".") > 1:
        return text.replace(".", "")
    return text.replace(",", ".")


def parse_number(raw) -> float:
    """Parse a spreadsheet cell into a float.

    Handles thousands separators (spaces, apostrophes, dots or commas),
    decimal commas, accounting parentheses and typographic minus signs
    for negatives. Text after the number, such as a currency code, is
    ignored.

    Args:
        raw: Cell value from a workbook.

    Returns:
        float: Parsed value, or 0.0 when the cell is blank or unparseable.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    text = str(raw).translate(_IGNORED_CHARS).translate(_MINUS_SIGNS)
    if not text:
        return 0.0
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    match = _NUMBER.search(_normalize_separators(text))
    if match is None:
        return 0.0
    value = float(match.group(0))
    return -value if negative else value


def _from_serial(value: float) -> date | None:
    if not math.isfinite(value) or value < 1 or value > _MAX_SERIAL:
        return None
    return SPREADSHEET_EPOCH + timedelta(days=int(value))


def parse_flexible_date(raw) -> date | None:
    """Parse a spreadsheet cell into a calendar date.

    Accepts native dates, spreadsheet serials (day 0 is 1899-12-30),
    compact ``YYYYMMDD`` strings or integers, and ``YYYY-MM-DD`` or
    ``DD-MM-YYYY`` strings using ``-``, ``/`` or ``.`` separators. A time
    part after a space or ``T`` is ignored.

    Args:
        raw: Cell value from a workbook.

    Returns:
        date | None: Parsed date, or None when every format fails.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, (int, float)):
        low, high = _COMPACT_RANGE
        if low <= raw <= high and float(raw).is_integer():
            return parse_flexible_date(str(int(raw)))
        return _from_serial(float(raw))

    text = str(raw).strip()
    if not text:
        return None
    token = re.split(r"[ T]", text, maxsplit=1)[0]
    if len(token) == 8 and token.isdigit():
        token = f"{token[:4]}-{token[4:6]}-{token[6:]}"
    elif _SERIAL.fullmatch(token):
        return _from_serial(float(token))

    parts = _DATE_SEPARATORS.split(token)
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None
    if len(parts[0]) == 4:
        year, month, day = parts
    elif len(parts[2]) == 4:
        day, month, year = parts
    else:
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def to_canonical_key(value: date) -> str:
    """Format a date as ``YYYYMMDD`` for sorting and range filters."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def bound_key(raw) -> str | None:
    """Return the canonical key of an optional range bound."""
    if raw is None or raw == "":
        return None
    parsed = parse_flexible_date(raw)
    return to_canonical_key(parsed) if parsed else None


def in_date_range(key: str, start: str | None, end: str | None) -> bool:
    """Return True when ``start <= key <= end``; bounds are optional."""
    if start and key < start:
        return False
    if end and key > end:
        return False
    return True


def month_key(value: date) -> str:
    return f"{value.month:02d}/{value.year}"


def quarter_key(value: date) -> str:
    return f"Q{(value.month - 1) // 3 + 1} {value.year}"


def year_key(value: date) -> str:
    return str(value.year)


def period_sort_key(label: str) -> tuple[int, int, str]:
    """Return a chronological sort key for a period label.

    Supports ``YYYY``, ``Qn YYYY`` and ``MM/YYYY``. Unknown labels sort
    last.
    """
    text = label.strip()
    if text.isdigit():
        return (int(text), 0, text)
    if text.startswith("Q") and " " in text:
        quarter, year = text[1:].split(" ", 1)
        if quarter.isdigit() and year.isdigit():
            return (int(year), int(quarter), text)
    if "/" in text:
        month, year = text.split("/", 1)
        if month.isdigit() and year.isdigit():
            return (int(year), int(month), text)
    return (10_000, 0, text)


__all__ = [
    "parse_number",
    "parse_flexible_date",
    "to_canonical_key",
    "bound_key",
    "in_date_range",
    "month_key",
    "quarter_key",
    "year_key",
    "period_sort_key",
]
