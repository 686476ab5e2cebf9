"""Repository protocol definitions (interfaces)."""

from trade_journal.repositories.protocols.event_store import EventStore, SnapshotCallback

__all__ = [
    "EventStore",
    "SnapshotCallback",
]
