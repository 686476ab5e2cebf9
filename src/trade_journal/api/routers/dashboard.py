"""Dashboard endpoints: statistics, history, projection and calendar."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from fastapi import APIRouter, Depends, Query

from trade_journal.api.deps import get_journal_service
from trade_journal.api.schemas import (
    CalendarDayResponse,
    CalendarResponse,
    EventResponse,
    HistoryEntryResponse,
    HistoryResponse,
    ProjectionResponse,
    SummaryResponse,
)
from trade_journal.config.settings import get_settings
from trade_journal.core.timezone import today_eastern
from trade_journal.services import JournalService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

CENTS = Decimal("0.01")


def _cents(value: Decimal) -> Decimal:
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Wider than the decimal context allows at cent precision
        return value


def _starting_capital(value: Optional[Decimal]) -> Decimal:
    return value if value is not None else get_settings().starting_capital


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    starting_capital: Optional[Decimal] = Query(None, description="Defaults to configured capital"),
    journal: JournalService = Depends(get_journal_service),
) -> SummaryResponse:
    """Realized P/L, current balance and win rate."""
    capital = _starting_capital(starting_capital)
    stats = journal.summary(capital)
    return SummaryResponse(
        starting_capital=_cents(capital),
        total_realized_pnl=_cents(stats.total_realized_pnl),
        current_balance=_cents(stats.current_balance),
        win_rate=_cents(stats.win_rate),
        trading_days=stats.trading_days,
        winning_days=stats.winning_days,
    )


@router.get("/history", response_model=HistoryResponse)
def get_history(
    starting_capital: Optional[Decimal] = Query(None, description="Defaults to configured capital"),
    journal: JournalService = Depends(get_journal_service),
) -> HistoryResponse:
    """Events with running balance, most recent first."""
    entries = journal.history(_starting_capital(starting_capital))
    return HistoryResponse(
        entries=[
            HistoryEntryResponse(
                event=EventResponse.from_event(entry.event),
                running_balance=_cents(entry.running_balance),
            )
            for entry in entries
        ],
        count=len(entries),
    )


@router.get("/projection", response_model=ProjectionResponse)
def get_projection(
    starting_amount: Optional[str] = Query(None, description="Hypothetical starting amount"),
    journal: JournalService = Depends(get_journal_service),
) -> ProjectionResponse:
    """
    Replay historical daily percentages against a hypothetical amount.

    Invalid or negative amounts return zeros rather than an error.
    """
    amount = starting_amount if starting_amount is not None else get_settings().starting_capital
    projection = journal.projection(amount)
    return ProjectionResponse(
        starting_amount=_cents(projection.starting_amount),
        final_balance=_cents(projection.final_balance),
        total_profit=_cents(projection.total_profit),
        total_percentage=_cents(projection.total_percentage),
    )


@router.get("/calendar", response_model=CalendarResponse)
def get_calendar(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    journal: JournalService = Depends(get_journal_service),
) -> CalendarResponse:
    """Month grid of resolved daily P/L (defaults to the current month)."""
    today = today_eastern()
    calendar_month = journal.calendar(
        year if year is not None else today.year,
        month if month is not None else today.month,
    )
    return CalendarResponse(
        year=calendar_month.year,
        month=calendar_month.month,
        leading_blanks=calendar_month.leading_blanks,
        days=[
            CalendarDayResponse(
                date=day.date,
                change_value=_cents(day.resolution.change_value) if day.resolution else None,
                change_percentage=_cents(day.resolution.change_percentage) if day.resolution else None,
                event_count=day.event_count,
            )
            for day in calendar_month.days
        ],
        net_change=_cents(calendar_month.net_change),
    )
