"""Keyword-based classification of transaction rows."""

from collections.abc import Sequence

from src.domain.constants import (
    CLASSIFICATION_RULES,
    POSITION_KEY_LENGTH,
    TRADE_RULE,
)
from src.domain.models import (
    EventKind,
    FinancialEvent,
    KeywordRule,
    MappedRow,
)
from src.domain.services.parsing import parse_flexible_date, parse_number
from src.utils.decimal_utils import coerce_decimal


def _signed_kind(category: str, amount: float) -> EventKind:
    if category == "transfer":
        return EventKind.DEPOSIT if amount > 0 else EventKind.WITHDRAWAL
    if category == "dividend":
        return EventKind.DIVIDEND
    if category == "interest":
        return EventKind.INTEREST
    if category in ("commission", "custody"):
        return (
            EventKind.COMMISSION if amount < 0 else EventKind.COMMISSION_REBATE
        )
    if category == "tax":
        return EventKind.TAX
    if category == "trade":
        return EventKind.TRADE_BUY if amount < 0 else EventKind.TRADE_SELL
    return EventKind.OTHER


def match_category(
    text: str,
    symbol: str,
    rules: Sequence[KeywordRule] = CLASSIFICATION_RULES,
) -> str:
    """Return the category of a lower-cased description.

    Args:
        text: Lower-cased description and type text.
        symbol: Security identifier of the row, possibly empty.
        rules: Keyword rules tested in priority order.

    Returns:
        str: Matching category, ``trade`` as the catch-all when a symbol or
        buy/sell keyword is present, else ``other``.
    """
    for rule in rules:
        if rule.matches(text):
            return rule.category
    if symbol or TRADE_RULE.matches(text):
        return TRADE_RULE.category
    return "other"


def classify(
    row: MappedRow,
    rules: Sequence[KeywordRule] = CLASSIFICATION_RULES,
) -> FinancialEvent | None:
    """Turn one mapped row into a financial event.

    Args:
        row: Transaction row read through the sheet column mapping.
        rules: Keyword rules tested in priority order.

    Returns:
        FinancialEvent | None: Classified event, or None when the row has
        no parseable date. Rows matching no category yield an OTHER event.
    """
    booked = parse_flexible_date(row.get("date"))
    if booked is None:
        return None
    amount = parse_number(row.get("amount"))
    description = " ".join(
        part for part in (row.text("desc"), row.text("type")) if part
    )
    symbol = row.text("symbol")
    category = match_category(description.lower(), symbol, rules)
    return FinancialEvent(
        date=booked,
        kind=_signed_kind(category, amount),
        amount=coerce_decimal(amount),
        symbol=symbol or None,
        account=row.text("account") or None,
        description=description,
        category=category,
    )


def position_key(event: FinancialEvent) -> str:
    """Return the position key: symbol, or truncated description."""
    return event.symbol or event.description[:POSITION_KEY_LENGTH]


__all__ = ["classify", "match_category", "position_key"]
