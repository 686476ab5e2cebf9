"""Application context for in-process service management.

Owns the database engine, session and snapshot feed, and hands out services
wired to them. Used by scripts and embedding UIs that talk to the journal
without going through HTTP.
"""

import logging
from typing import Any, Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from trade_journal.config.settings import Settings, get_settings
from trade_journal.csv import CsvExporter
from trade_journal.providers import ExtractionProvider, provider_from_settings
from trade_journal.repositories.snapshot_feed import SnapshotFeed
from trade_journal.repositories.sqlalchemy import SqlAlchemyEventRepository
from trade_journal.repositories.sqlalchemy.database import create_sqlite_engine, create_tables
from trade_journal.services import ExtractionService, JournalDashboard, JournalService

logger = logging.getLogger(__name__)


class JournalContext:
    """
    Explicitly owned connection to the journal.

    Lifecycle: connect() -> use store/journal/extraction/dashboard -> close().
    Dashboards created here are stopped on close.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[ExtractionProvider] = None,
    ):
        self._settings = settings or get_settings()
        self._provider = provider
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None
        self._feed = SnapshotFeed()
        self._store: Optional[SqlAlchemyEventRepository] = None
        self._dashboards: list[JournalDashboard] = []

    def connect(self) -> "JournalContext":
        """Open the database and create tables if needed."""
        if self._engine is not None:
            return self
        database_url = self._settings.get_database_url()
        self._engine = create_sqlite_engine(database_url)
        create_tables(self._engine)
        self._session = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)()
        self._store = SqlAlchemyEventRepository(self._session, self._feed)
        logger.info("Journal connected to %s", database_url)
        return self

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def store(self) -> SqlAlchemyEventRepository:
        """The event store (connect() first)."""
        if self._store is None:
            raise RuntimeError("JournalContext is not connected")
        return self._store

    @property
    def journal(self) -> JournalService:
        return JournalService(event_store=self.store)

    @property
    def extraction(self) -> ExtractionService:
        return ExtractionService(provider=self._get_provider(), journal_service=self.journal)

    @property
    def csv_exporter(self) -> CsvExporter:
        return CsvExporter(journal_service=self.journal)

    def dashboard(
        self,
        starting_capital: Optional[Any] = None,
        projection_amount: Optional[Any] = None,
    ) -> JournalDashboard:
        """Create and start a dashboard subscribed to the store."""
        capital = starting_capital if starting_capital is not None else self._settings.starting_capital
        dashboard = JournalDashboard(self.store, capital, projection_amount)
        dashboard.start()
        self._dashboards.append(dashboard)
        return dashboard

    def close(self) -> None:
        """Stop dashboards, drop subscriptions and release the database."""
        for dashboard in self._dashboards:
            dashboard.stop()
        self._dashboards.clear()
        self._feed.clear()
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._store = None

    def __enter__(self) -> "JournalContext":
        return self.connect()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_provider(self) -> ExtractionProvider:
        if self._provider is None:
            self._provider = provider_from_settings(self._settings)
        return self._provider
