"""LedgerEvent domain model."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from trade_journal.domain.models.enums import EventType

ZERO = Decimal("0")


@dataclass(frozen=True)
class LedgerEvent:
    """
    One journal record: a trade confirmation or a daily account summary.

    Events are immutable; the store only inserts or deletes whole records.
    - TRADE_CONFIRMATION carries ticker, cost_at_open and credit_at_close
    - DAILY_SUMMARY carries end_of_day_balance
    - Both carry change_value and change_percentage
    """

    event_type: EventType
    date: date
    change_value: Decimal = ZERO
    change_percentage: Decimal = ZERO
    ticker: str = ""
    cost_at_open: Decimal = ZERO
    credit_at_close: Decimal = ZERO
    end_of_day_balance: Decimal = ZERO
    event_id: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.event_type, str):
            object.__setattr__(self, "event_type", EventType(self.event_type))

    @classmethod
    def trade_confirmation(
        cls,
        date: date,
        ticker: str,
        cost_at_open: Decimal,
        credit_at_close: Decimal,
        change_value: Decimal,
        change_percentage: Decimal,
    ) -> "LedgerEvent":
        """Build a trade confirmation event (not yet stored)."""
        return cls(
            event_type=EventType.TRADE_CONFIRMATION,
            date=date,
            ticker=ticker,
            cost_at_open=cost_at_open,
            credit_at_close=credit_at_close,
            change_value=change_value,
            change_percentage=change_percentage,
        )

    @classmethod
    def daily_summary(
        cls,
        date: date,
        change_value: Decimal,
        change_percentage: Decimal,
        end_of_day_balance: Decimal,
    ) -> "LedgerEvent":
        """Build a daily summary event (not yet stored)."""
        return cls(
            event_type=EventType.DAILY_SUMMARY,
            date=date,
            change_value=change_value,
            change_percentage=change_percentage,
            end_of_day_balance=end_of_day_balance,
        )

    @property
    def is_summary(self) -> bool:
        """Return True if this is a DAILY_SUMMARY event."""
        return self.event_type == EventType.DAILY_SUMMARY

    @property
    def is_confirmation(self) -> bool:
        """Return True if this is a TRADE_CONFIRMATION event."""
        return self.event_type == EventType.TRADE_CONFIRMATION

    def with_identity(self, event_id: str, created_at: datetime) -> "LedgerEvent":
        """Return a copy carrying store-assigned identity."""
        return replace(self, event_id=event_id, created_at=created_at)
