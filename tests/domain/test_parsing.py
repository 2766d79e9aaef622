"""Tests for the locale-aware number and date parsers."""

from datetime import date, datetime

import pytest

from src.domain.services.parsing import (
    bound_key,
    in_date_range,
    month_key,
    parse_flexible_date,
    parse_number,
    period_sort_key,
    quarter_key,
    to_canonical_key,
    year_key,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1'234.50", 1234.5),
        ("1 234,56", 1234.56),
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("1.234.567", 1234567.0),
        (" 1 000,50", 1000.5),
        ("(1,234.56)", -1234.56),
        ("-500.00 CHF", -500.0),
        ("CHF -500", -500.0),
        (42, 42.0),
        (-3.5, -3.5),
    ],
)
def test_parse_number_handles_locale_formats(raw, expected) -> None:
    """Separators, decimal commas, and parentheses should be understood."""
    assert parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\u2212100,50", -100.5),
        ("\u20131'000 EUR", -1000.0),
        ("\u22120.25", -0.25),
    ],
)
def test_parse_number_reads_unicode_minus_as_negative(raw, expected) -> None:
    """Typographic minus signs should keep the amount negative."""
    assert parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "n/a", float("nan")])
def test_parse_number_defaults_to_zero(raw) -> None:
    """Blank and unparseable cells should read as 0.0."""
    assert parse_number(raw) == 0.0


@pytest.mark.parametrize(
    "raw",
    [
        45306,
        45306.75,
        "45306",
        "2024-01-15",
        "15/01/2024",
        "15.01.2024",
        "15-01-2024",
        "20240115",
        20240115,
        20240115.0,
        "2024-01-15T10:30:00",
        "2024-01-15 10:30",
        datetime(2024, 1, 15, 9, 30),
        date(2024, 1, 15),
    ],
)
def test_parse_flexible_date_encodings_are_equivalent(raw) -> None:
    """Every supported encoding of the same day should give one date."""
    assert parse_flexible_date(raw) == date(2024, 1, 15)


@pytest.mark.parametrize(
    "raw",
    [None, "", "not a date", "31/02/2024", "15/01/24", 0, -5, True, 20241399],
)
def test_parse_flexible_date_returns_none_when_unusable(raw) -> None:
    """Unparseable cells should give None rather than raising."""
    assert parse_flexible_date(raw) is None


def test_canonical_keys_and_range_bounds() -> None:
    """Range checks should be inclusive and accept open bounds."""
    key = to_canonical_key(date(2024, 3, 5))

    assert key == "20240305"
    assert bound_key("05/03/2024") == "20240305"
    assert bound_key("") is None
    assert bound_key(None) is None
    assert in_date_range(key, "20240305", "20240305")
    assert in_date_range(key, None, None)
    assert not in_date_range(key, "20240306", None)
    assert not in_date_range(key, None, "20240304")


def test_period_labels() -> None:
    """Period labels should follow the month, quarter, and year formats."""
    day = date(2024, 11, 5)

    assert month_key(day) == "11/2024"
    assert quarter_key(day) == "Q4 2024"
    assert year_key(day) == "2024"


def test_period_sort_key_is_chronological_across_years() -> None:
    """Q4 2024 should sort before Q1 2025 and 12/2024 before 01/2025."""
    assert sorted(["Q1 2025", "Q4 2024"], key=period_sort_key) == [
        "Q4 2024",
        "Q1 2025",
    ]
    assert sorted(["01/2025", "12/2024", "02/2024"], key=period_sort_key) == [
        "02/2024",
        "12/2024",
        "01/2025",
    ]
    assert sorted(["other", "2025", "2024"], key=period_sort_key) == [
        "2024",
        "2025",
        "other",
    ]
