"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from trade_journal.config.settings import get_settings
from trade_journal.csv import CsvExporter
from trade_journal.providers import ExtractionProvider, provider_from_settings
from trade_journal.repositories.snapshot_feed import SnapshotFeed
from trade_journal.repositories.sqlalchemy import SqlAlchemyEventRepository, get_db
from trade_journal.services import ExtractionService, JournalService


def get_snapshot_feed(request: Request) -> SnapshotFeed:
    """Provide the feed owned by the running application."""
    feed = getattr(request.app.state, "snapshot_feed", None)
    if feed is None:
        feed = SnapshotFeed()
        request.app.state.snapshot_feed = feed
    return feed


def get_event_repo(
    db: Session = Depends(get_db),
    feed: SnapshotFeed = Depends(get_snapshot_feed),
) -> SqlAlchemyEventRepository:
    """Provide EventStore instance."""
    return SqlAlchemyEventRepository(db, feed)


def get_journal_service(
    event_repo: SqlAlchemyEventRepository = Depends(get_event_repo),
) -> JournalService:
    """Provide JournalService instance."""
    return JournalService(event_store=event_repo)


def get_extraction_provider() -> ExtractionProvider:
    """Provide the vision provider, or the stub when no API key is configured."""
    return provider_from_settings(get_settings())


def get_extraction_service(
    provider: ExtractionProvider = Depends(get_extraction_provider),
    journal_service: JournalService = Depends(get_journal_service),
) -> ExtractionService:
    """Provide ExtractionService instance."""
    return ExtractionService(provider=provider, journal_service=journal_service)


def get_csv_exporter(
    journal_service: JournalService = Depends(get_journal_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(journal_service=journal_service)
