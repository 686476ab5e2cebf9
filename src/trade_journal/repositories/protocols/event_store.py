"""Event store protocol."""

from typing import Callable, Optional, Protocol, TYPE_CHECKING

from trade_journal.domain.models import LedgerEvent

if TYPE_CHECKING:
    from trade_journal.repositories.snapshot_feed import Subscription

SnapshotCallback = Callable[[list[LedgerEvent]], None]


class EventStore(Protocol):
    """Interface for ledger event storage."""

    def insert(self, event: LedgerEvent) -> str:
        """Persist a new event and return its assigned ID."""
        ...

    def get_by_id(self, event_id: str) -> Optional[LedgerEvent]:
        """Retrieve a stored event by ID."""
        ...

    def list_all_ordered_by_date(self) -> list[LedgerEvent]:
        """List all events ascending by date, then insertion order."""
        ...

    def delete_by_id(self, event_id: str) -> None:
        """Delete an event (hard delete)."""
        ...

    def subscribe(self, callback: SnapshotCallback) -> "Subscription":
        """Receive the full event list now and after every change."""
        ...
