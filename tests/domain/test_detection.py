"""Tests for format detection and column resolution."""

from unittest.mock import MagicMock

import pytest

from src.domain.constants import TRANSACTION_COLUMNS, TRANSACTION_FALLBACKS
from src.domain.models import FormatTag
from src.domain.services.detection import (
    build_column_mapping,
    detect_format,
    find_position_sheet,
    find_sheet,
    pick_sample_row,
    resolve_column,
)


@pytest.mark.parametrize(
    ("sheet_names", "expected"),
    [
        (["Transactions", "Positions"], FormatTag.KEY4_EXCEL),
        (["Performance"], FormatTag.SAXO_PERFORMANCE),
        (["Portefeuille", "Notes"], FormatTag.ADVISOR_EXCEL),
        (["Portfolio overview", "Notes"], FormatTag.ADVISOR_EXCEL),
        (["Client 123456"], FormatTag.UBS_MASTER),
        (["export"], FormatTag.SIMPLE_CSV),
        (["Feuil1", "Feuil2"], FormatTag.UNKNOWN),
        ([], FormatTag.UNKNOWN),
    ],
)
def test_detect_format(sheet_names, expected) -> None:
    """Sheet name heuristics should pick the export shape."""
    assert detect_format(sheet_names) is expected


def test_find_sheet_is_case_insensitive() -> None:
    """Sheet lookup should match lower-cased substrings in order."""
    names = ["Résumé", "Mouvements 2024", "Positions"]

    assert find_sheet(names, ("transaction", "mouvement")) == "Mouvements 2024"
    assert find_position_sheet(names) == "Positions"
    assert find_sheet(names, ("performance",)) is None


def test_resolve_column_prefers_exact_match() -> None:
    """An exact header should win over a containing header."""
    row = {"Montant en CHF": 1, "Montant": 2}

    assert resolve_column(row, ["Montant"]) == "Montant"


def test_resolve_column_falls_back_to_substring() -> None:
    """A header containing a candidate should be accepted in pass two."""
    row = {" date comptable ": "01.01.2024", "Montant en CHF": 1}

    assert resolve_column(row, ["Date", "Datum"]) == " date comptable "
    assert resolve_column(row, ["Amount", "Montant"]) == "Montant en CHF"
    assert resolve_column(row, ["ISIN"]) is None
    assert resolve_column(None, ["Date"]) is None


def test_pick_sample_row_skips_empty_rows() -> None:
    """The first row holding a value should be the sample."""
    records = [{"Date": None, "Montant": ""}, {"Date": "x", "Montant": ""}]

    assert pick_sample_row(records) == records[1]
    assert pick_sample_row([]) is None


def test_build_column_mapping_reports_unverified_fields() -> None:
    """Unresolved fields should keep fallbacks and be logged."""
    logger = MagicMock()
    sample = {"Date": "x", "Libellé": "y", "Amount": 1}

    mapping = build_column_mapping(
        sample,
        TRANSACTION_COLUMNS,
        TRANSACTION_FALLBACKS,
        logger=logger,
    )

    assert mapping.header("desc") == "Libellé"
    assert mapping.header("amount") == "Amount"
    assert mapping.header("symbol") == "Titre"
    assert mapping.unverified == ["currency", "type", "symbol", "account"]
    assert mapping.as_dict()["account"] == "Compte"
    logger.warning.assert_called_once()
