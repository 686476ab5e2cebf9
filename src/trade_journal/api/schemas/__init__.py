"""Pydantic schemas for API request/response."""

from trade_journal.api.schemas.event import (
    EventCreateRequest,
    EventResponse,
    EventListResponse,
    ImportSummaryResponse,
)
from trade_journal.api.schemas.dashboard import (
    SummaryResponse,
    HistoryEntryResponse,
    HistoryResponse,
    ProjectionResponse,
    CalendarDayResponse,
    CalendarResponse,
)

__all__ = [
    "EventCreateRequest",
    "EventResponse",
    "EventListResponse",
    "ImportSummaryResponse",
    "SummaryResponse",
    "HistoryEntryResponse",
    "HistoryResponse",
    "ProjectionResponse",
    "CalendarDayResponse",
    "CalendarResponse",
]
