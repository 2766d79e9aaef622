"""Account and date-range filtering of classified events."""

from dataclasses import dataclass
from datetime import date

from src.domain.constants import ALL_ACCOUNTS
from src.domain.models import FinancialEvent
from src.domain.services.parsing import (
    bound_key,
    in_date_range,
    to_canonical_key,
)


@dataclass(frozen=True)
class EventFilter:
    """Active filter of one aggregation.

    Attributes:
        account: Sub-account to keep; None or ``ALL`` keeps every account.
        start: Inclusive lower bound (date or date string).
        end: Inclusive upper bound (date or date string).
    """

    account: str | None = None
    start: date | str | None = None
    end: date | str | None = None

    def accepts(self, event: FinancialEvent) -> bool:
        """Return True when the event passes the account and date bounds."""
        if self.account and self.account != ALL_ACCOUNTS:
            if event.account != self.account:
                return False
        return in_date_range(
            to_canonical_key(event.date),
            bound_key(self.start),
            bound_key(self.end),
        )


def list_accounts(events: list[FinancialEvent]) -> list[str]:
    """Return the sorted distinct sub-accounts referenced by events."""
    return sorted({event.account for event in events if event.account})


__all__ = ["EventFilter", "list_accounts"]
