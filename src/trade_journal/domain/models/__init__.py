"""Domain models package."""

from trade_journal.domain.models.enums import EventType
from trade_journal.domain.models.event import LedgerEvent

__all__ = [
    "EventType",
    "LedgerEvent",
]
