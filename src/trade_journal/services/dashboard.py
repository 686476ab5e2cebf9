"""Dashboard state driven by store snapshots."""

import logging
from decimal import Decimal
from typing import Any, Optional

from trade_journal.domain.models import LedgerEvent
from trade_journal.domain.views import DashboardSnapshot
from trade_journal.repositories.protocols import EventStore
from trade_journal.repositories.snapshot_feed import Subscription
from trade_journal.services import ledger_engine

logger = logging.getLogger(__name__)


class JournalDashboard:
    """
    Holds the latest event snapshot and the figures derived from it.

    The store pushes full snapshots after every change; changing the
    starting capital or projection amount recomputes from the snapshot
    already held. Store failures never reach here, so the last good
    snapshot stays on screen.
    """

    def __init__(
        self,
        store: EventStore,
        starting_capital: Any = Decimal("0"),
        projection_amount: Optional[Any] = None,
    ):
        self._store = store
        self._starting_capital = starting_capital
        self._projection_amount = projection_amount
        self._events: list[LedgerEvent] = []
        self._snapshot = ledger_engine.recompute([], starting_capital, projection_amount)
        self._subscription: Optional[Subscription] = None

    def start(self) -> None:
        """Subscribe to the store (receives the current snapshot immediately)."""
        if self._subscription is not None:
            return
        self._subscription = self._store.subscribe(self._on_snapshot)

    def stop(self) -> None:
        """Unsubscribe from the store."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    @property
    def is_running(self) -> bool:
        return self._subscription is not None

    @property
    def events(self) -> list[LedgerEvent]:
        return list(self._events)

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    def set_starting_capital(self, value: Any) -> None:
        self._starting_capital = value
        self._refresh()

    def set_projection_amount(self, value: Optional[Any]) -> None:
        self._projection_amount = value
        self._refresh()

    def _on_snapshot(self, events: list[LedgerEvent]) -> None:
        self._events = list(events)
        self._refresh()

    def _refresh(self) -> None:
        self._snapshot = ledger_engine.recompute(
            self._events,
            self._starting_capital,
            self._projection_amount,
        )
        logger.debug("Dashboard recomputed over %d events", len(self._events))
