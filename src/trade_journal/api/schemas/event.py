"""Pydantic schemas for event endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from trade_journal.domain.models import EventType, LedgerEvent

# Manual entry accepts the same loose formats as extracted records ("$1,250.00", "-3.2%")
LooseNumber = Optional[Union[Decimal, str]]


class EventCreateRequest(BaseModel):
    """Request schema for manually entering an event."""

    type: str = Field(..., description="TRADE_CONFIRMATION or DAILY_SUMMARY")
    date: Optional[str] = Field(default=None, description="Event date; defaults to today")
    ticker: Optional[str] = Field(default=None, max_length=20)
    cost_at_open: LooseNumber = None
    credit_at_close: LooseNumber = None
    change_value: LooseNumber = None
    change_percentage: LooseNumber = None
    end_of_day_balance: LooseNumber = None

    def to_raw(self) -> dict[str, Any]:
        """Raw record for the normalization step."""
        return self.model_dump()


class EventResponse(BaseModel):
    """Response schema for a single event."""

    event_id: Optional[str] = None
    date: dt.date
    event_type: EventType
    ticker: str = ""
    cost_at_open: Decimal
    credit_at_close: Decimal
    change_value: Decimal
    change_percentage: Decimal
    end_of_day_balance: Decimal
    created_at: Optional[dt.datetime] = None

    @classmethod
    def from_event(cls, event: LedgerEvent) -> "EventResponse":
        return cls(
            event_id=event.event_id,
            date=event.date,
            event_type=event.event_type,
            ticker=event.ticker,
            cost_at_open=event.cost_at_open,
            credit_at_close=event.credit_at_close,
            change_value=event.change_value,
            change_percentage=event.change_percentage,
            end_of_day_balance=event.end_of_day_balance,
            created_at=event.created_at,
        )


class EventListResponse(BaseModel):
    """Response schema for listing events."""

    events: list[EventResponse]
    count: int


class ImportSummaryResponse(BaseModel):
    """Response schema for image extraction results."""

    imported_count: int
    error_count: int
    errors: list[str]
    events: list[EventResponse]
