"""Fan-out of full event snapshots to subscribers."""

import logging
import uuid
from typing import Optional

from trade_journal.domain.models import LedgerEvent
from trade_journal.repositories.protocols.event_store import SnapshotCallback

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by SnapshotFeed.subscribe."""

    def __init__(self, feed: "SnapshotFeed", subscription_id: str):
        self._feed = feed
        self.subscription_id = subscription_id

    @property
    def active(self) -> bool:
        return self._feed.is_subscribed(self.subscription_id)

    def cancel(self) -> None:
        """Stop receiving snapshots (idempotent)."""
        self._feed.unsubscribe(self.subscription_id)


class SnapshotFeed:
    """
    In-process change notification for the event store.

    Owned by whoever wires the store (application context or API lifespan)
    and injected into each repository. Subscribers always receive the whole
    event list, never a delta.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, SnapshotCallback] = {}
        self._last_snapshot: Optional[list[LedgerEvent]] = None

    @property
    def last_snapshot(self) -> Optional[list[LedgerEvent]]:
        """Most recently published snapshot, if any."""
        return None if self._last_snapshot is None else list(self._last_snapshot)

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """Register a callback for future snapshots."""
        subscription_id = str(uuid.uuid4())
        self._callbacks[subscription_id] = callback
        return Subscription(self, subscription_id)

    def unsubscribe(self, subscription_id: str) -> None:
        self._callbacks.pop(subscription_id, None)

    def is_subscribed(self, subscription_id: str) -> bool:
        return subscription_id in self._callbacks

    def deliver(self, subscription: Subscription, events: list[LedgerEvent]) -> None:
        """Send a snapshot to a single subscriber."""
        callback = self._callbacks.get(subscription.subscription_id)
        if callback is not None:
            self._notify(subscription.subscription_id, callback, events)

    def publish(self, events: list[LedgerEvent]) -> None:
        """Send a snapshot to every subscriber."""
        self._last_snapshot = list(events)
        for subscription_id, callback in list(self._callbacks.items()):
            self._notify(subscription_id, callback, events)

    def clear(self) -> None:
        """Drop all subscribers."""
        self._callbacks.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    @staticmethod
    def _notify(subscription_id: str, callback: SnapshotCallback, events: list[LedgerEvent]) -> None:
        try:
            callback(list(events))
        except Exception:
            logger.exception("Snapshot subscriber %s failed", subscription_id)
