"""Domain models for column mappings and classified financial events."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from .workbook import Cell, RawRow


class FormatTag(str, Enum):
    """Known broker export shapes."""

    KEY4_EXCEL = "KEY4_EXCEL"
    SAXO_PERFORMANCE = "SAXO_PERFORMANCE"
    ADVISOR_EXCEL = "ADVISOR_EXCEL"
    UBS_MASTER = "UBS_MASTER"
    SIMPLE_CSV = "SIMPLE_CSV"
    UNKNOWN = "UNKNOWN"


class EventKind(str, Enum):
    """Fixed set of event kinds produced by the row classifier."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    COMMISSION = "commission"
    COMMISSION_REBATE = "commission_rebate"
    TAX = "tax"
    TRADE_BUY = "trade_buy"
    TRADE_SELL = "trade_sell"
    OTHER = "other"


@dataclass(frozen=True)
class ColumnMapping:
    """Logical field to header resolution for one sheet.

    Attributes:
        resolved: Header found for each logical field, or None.
        fallbacks: Hard-coded default header per logical field.
    """

    resolved: dict[str, str | None]
    fallbacks: dict[str, str] = field(default_factory=dict)

    def header(self, logical_field: str) -> str | None:
        """Return the resolved header or its fallback."""
        found = self.resolved.get(logical_field)
        if found:
            return found
        return self.fallbacks.get(logical_field)

    @property
    def unverified(self) -> list[str]:
        """Fields that were not found and use the fallback header."""
        return [name for name, found in self.resolved.items() if not found]

    def as_dict(self) -> dict[str, str | None]:
        return {name: self.header(name) for name in self.resolved}


@dataclass(frozen=True)
class MappedRow:
    """Raw row read through a column mapping."""

    raw: RawRow
    mapping: ColumnMapping

    def get(self, logical_field: str) -> Cell:
        header = self.mapping.header(logical_field)
        if header is None:
            return None
        return self.raw.get(header)

    def text(self, logical_field: str) -> str:
        value = self.get(logical_field)
        if value is None:
            return ""
        return str(value).strip()


@dataclass(frozen=True)
class KeywordRule:
    """Keyword set mapping description text to a classification category.

    Attributes:
        category: Label of the rule (transfer, dividend, custody, ...).
        keywords: Lower-case substrings, any of which selects the rule.
        excludes: Lower-case substrings that veto the rule.
    """

    category: str
    keywords: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if any(word in text for word in self.excludes):
            return False
        return any(word in text for word in self.keywords)


@dataclass(frozen=True)
class FinancialEvent:
    """Classified transaction row.

    Attributes:
        date: Booking date of the row.
        kind: Event kind assigned by the classifier.
        amount: Signed amount as recorded in the account currency.
        symbol: Security identifier, when present.
        account: Sub-account identifier, when present.
        description: Free text used for classification.
        category: Keyword rule that matched.
    """

    date: date
    kind: EventKind
    amount: Decimal
    symbol: str | None = None
    account: str | None = None
    description: str = ""
    category: str = ""


__all__ = [
    "FormatTag",
    "EventKind",
    "ColumnMapping",
    "MappedRow",
    "KeywordRule",
    "FinancialEvent",
]
