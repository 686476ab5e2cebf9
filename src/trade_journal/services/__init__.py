"""Service layer - business logic orchestration."""

from trade_journal.services.journal_service import JournalService
from trade_journal.services.extraction_service import ExtractionService
from trade_journal.services.dashboard import JournalDashboard

__all__ = [
    "JournalService",
    "ExtractionService",
    "JournalDashboard",
]
