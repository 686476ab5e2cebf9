"""Journal service for recording events and reading aggregates."""

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from trade_journal.domain.models import LedgerEvent
from trade_journal.domain.views import (
    AggregateStats,
    CalendarMonth,
    DashboardSnapshot,
    HistoryEntry,
    ProjectionResult,
)
from trade_journal.repositories.protocols import EventStore
from trade_journal.services import ledger_engine
from trade_journal.services.normalization import normalize_event

logger = logging.getLogger(__name__)


class JournalService:
    """
    Service for managing the trade journal.

    Every write goes through normalization; every read recomputes from the
    full event list held by the store.
    """

    def __init__(self, event_store: EventStore):
        self._store = event_store

    def record_event(self, raw: Mapping[str, Any]) -> LedgerEvent:
        """
        Normalize a raw record and insert it.

        Returns the event as stored, with its assigned ID and timestamp.
        """
        event = normalize_event(raw)
        event_id = self._store.insert(event)
        logger.debug("Recorded %s event %s", event.event_type.value, event_id)
        stored = self._store.get_by_id(event_id)
        return stored if stored is not None else replace(event, event_id=event_id)

    def delete_event(self, event_id: str) -> None:
        """Delete an event by ID."""
        self._store.delete_by_id(event_id)

    def list_events(self) -> list[LedgerEvent]:
        """List all events ascending by date."""
        return self._store.list_all_ordered_by_date()

    def summary(self, starting_capital: Any) -> AggregateStats:
        """Account-wide realized P/L, current balance and win rate."""
        return ledger_engine.compute_stats(self.list_events(), starting_capital)

    def history(self, starting_capital: Any) -> list[HistoryEntry]:
        """Events with running balance, most recent first."""
        return ledger_engine.annotate_history(self.list_events(), starting_capital)

    def projection(self, starting_amount: Any) -> ProjectionResult:
        """What-if compounding replay from an arbitrary amount."""
        return ledger_engine.project_compounding(self.list_events(), starting_amount)

    def calendar(self, year: int, month: int) -> CalendarMonth:
        """Month grid of resolved daily P/L."""
        return ledger_engine.month_calendar(self.list_events(), year, month)

    def snapshot(
        self,
        starting_capital: Any,
        projection_amount: Optional[Any] = None,
    ) -> DashboardSnapshot:
        """All dashboard figures from a single read of the store."""
        return ledger_engine.recompute(self.list_events(), starting_capital, projection_amount)
