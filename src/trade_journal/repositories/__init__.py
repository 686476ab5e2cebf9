"""Repository layer - data access abstractions and implementations."""

from trade_journal.repositories.protocols import EventStore, SnapshotCallback
from trade_journal.repositories.snapshot_feed import SnapshotFeed, Subscription

__all__ = [
    "EventStore",
    "SnapshotCallback",
    "SnapshotFeed",
    "Subscription",
]
