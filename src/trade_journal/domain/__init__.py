"""Domain layer - pure business models with no external dependencies."""

from trade_journal.domain.models import EventType, LedgerEvent

__all__ = [
    "EventType",
    "LedgerEvent",
]
