"""Tests for keyword classification of transaction rows."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.constants import TRANSACTION_COLUMNS, TRANSACTION_FALLBACKS
from src.domain.models import EventKind, FinancialEvent, MappedRow
from src.domain.services.classification import (
    classify,
    match_category,
    position_key,
)
from src.domain.services.detection import build_column_mapping

HEADERS = {"Date": None, "Description": None, "Montant": None, "Titre": None}
MAPPING = build_column_mapping(
    HEADERS,
    TRANSACTION_COLUMNS,
    TRANSACTION_FALLBACKS,
)


def _row(description: str, amount, symbol: str = "", day="15.01.2024"):
    return MappedRow(
        {
            "Date": day,
            "Description": description,
            "Montant": amount,
            "Titre": symbol,
        },
        MAPPING,
    )


@pytest.mark.parametrize(
    ("description", "amount", "symbol", "kind"),
    [
        ("Virement SEPA", "1'000.00", "", EventKind.DEPOSIT),
        ("Virement SEPA", "-500.00", "", EventKind.WITHDRAWAL),
        ("Dividende Nestlé", "50,00", "NESN", EventKind.DIVIDEND),
        ("Coupon obligation", "12", "", EventKind.DIVIDEND),
        ("Intérêts créditeurs", "1.20", "", EventKind.INTEREST),
        ("Frais de courtage", "-10", "", EventKind.COMMISSION),
        ("Rétrocession commission", "4", "", EventKind.COMMISSION_REBATE),
        ("Droits de garde T4", "-20", "", EventKind.COMMISSION),
        ("Droit de timbre fédéral", "-3", "", EventKind.TAX),
        ("Impôt anticipé", "-17.50", "", EventKind.TAX),
        ("Achat 10 Nestlé", "-1000", "NESN", EventKind.TRADE_BUY),
        ("Vente 10 Nestlé", "1200", "NESN", EventKind.TRADE_SELL),
        ("Ordre bourse", "-300", "ROG", EventKind.TRADE_BUY),
        ("Ajustement", "7", "", EventKind.OTHER),
    ],
)
def test_classify_assigns_kind(description, amount, symbol, kind) -> None:
    """Rows should be classified by keyword priority and amount sign."""
    event = classify(_row(description, amount, symbol))

    assert event is not None
    assert event.kind is kind


def test_classify_keeps_signed_amount_and_fields() -> None:
    """The event should carry the parsed date, Decimal amount, and text."""
    event = classify(_row("Vente 10 Nestlé", "1'200.50", "NESN"))

    assert event == FinancialEvent(
        date=date(2024, 1, 15),
        kind=EventKind.TRADE_SELL,
        amount=Decimal("1200.5"),
        symbol="NESN",
        account=None,
        description="Vente 10 Nestlé",
        category="trade",
    )


def test_classify_skips_rows_without_date() -> None:
    """Rows with a blank or invalid date should be skipped."""
    assert classify(_row("Solde reporté", "100", day="")) is None
    assert classify(_row("Solde reporté", "100", day="total")) is None


def test_custody_category_is_kept_for_fee_split() -> None:
    """Custody fees should keep their own category."""
    event = classify(_row("Droits de garde", "-20"))

    assert event.category == "custody"


def test_match_category_excludes_stamp_duty_from_commission() -> None:
    """Stamp duty mentioning fees should be a tax, not a commission."""
    assert match_category("frais de timbre", "") == "tax"
    assert match_category("frais divers", "") == "commission"
    assert match_category("sans mot clé", "") == "other"
    assert match_category("sans mot clé", "NESN") == "trade"


def test_position_key_falls_back_to_description() -> None:
    """Events without symbol should be keyed on the truncated description."""
    event = FinancialEvent(
        date=date(2024, 1, 1),
        kind=EventKind.TRADE_BUY,
        amount=Decimal("-1"),
        description="Achat fonds de placement immobilier suisse",
    )

    assert position_key(event) == "Achat fonds de place"
    assert len(position_key(event)) == 20
