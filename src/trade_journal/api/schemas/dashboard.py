"""Pydantic schemas for dashboard endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from trade_journal.api.schemas.event import EventResponse


class SummaryResponse(BaseModel):
    """Response schema for account-wide statistics."""

    starting_capital: Decimal
    total_realized_pnl: Decimal
    current_balance: Decimal
    win_rate: Decimal
    trading_days: int
    winning_days: int


class HistoryEntryResponse(BaseModel):
    """Response schema for one history row."""

    event: EventResponse
    running_balance: Decimal


class HistoryResponse(BaseModel):
    """Response schema for account history (most recent first)."""

    entries: list[HistoryEntryResponse]
    count: int


class ProjectionResponse(BaseModel):
    """Response schema for the what-if compounding calculator."""

    starting_amount: Decimal
    final_balance: Decimal
    total_profit: Decimal
    total_percentage: Decimal


class CalendarDayResponse(BaseModel):
    """Response schema for one calendar cell."""

    date: dt.date
    change_value: Optional[Decimal] = None
    change_percentage: Optional[Decimal] = None
    event_count: int = 0


class CalendarResponse(BaseModel):
    """Response schema for a month calendar."""

    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDayResponse]
    net_change: Decimal
