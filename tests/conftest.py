"""
Pytest configuration and fixtures for trade journal tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for trade confirmations and daily summaries
- Scripted extraction providers
- Service and repository fixtures
- FastAPI test client
"""

import os

# Keep the app's own engine off the user's data directory
os.environ["TRADE_JOURNAL_DATABASE_URL"] = "sqlite://"
os.environ["TRADE_JOURNAL_EXTRACTION_API_KEY"] = ""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, Union

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from trade_journal.main import app
from trade_journal.api.deps import get_extraction_provider
from trade_journal.repositories.sqlalchemy.database import Base, get_db
# Import ORM models to register them with Base before creating tables
from trade_journal.repositories.sqlalchemy import orm_models  # noqa: F401
from trade_journal.repositories.sqlalchemy import SqlAlchemyEventRepository
from trade_journal.repositories.snapshot_feed import SnapshotFeed
from trade_journal.services import JournalService, ExtractionService
from trade_journal.domain.models import LedgerEvent
from trade_journal.domain.views import ImageUpload
from trade_journal.core.exceptions import ExtractionError
from trade_journal.config.settings import reset_settings


# =============================================================================
# DATE AND EVENT HELPERS
# =============================================================================


def d(value: str) -> date:
    """Shorthand for date.fromisoformat."""
    return date.fromisoformat(value)


def confirmation(
    day: str,
    cost: Union[str, int] = "100",
    credit: Union[str, int] = "110",
    change: Union[str, int] = "10",
    percentage: Union[str, int] = "10",
    ticker: str = "AAPL",
    event_id: Optional[str] = None,
) -> LedgerEvent:
    """Build a TRADE_CONFIRMATION event."""
    event = LedgerEvent.trade_confirmation(
        date=d(day),
        ticker=ticker,
        cost_at_open=Decimal(str(cost)),
        credit_at_close=Decimal(str(credit)),
        change_value=Decimal(str(change)),
        change_percentage=Decimal(str(percentage)),
    )
    if event_id:
        event = replace(event, event_id=event_id)
    return event


def summary(
    day: str,
    change: Union[str, int] = "0",
    percentage: Union[str, int] = "0",
    balance: Union[str, int] = "0",
    event_id: Optional[str] = None,
) -> LedgerEvent:
    """Build a DAILY_SUMMARY event."""
    event = LedgerEvent.daily_summary(
        date=d(day),
        change_value=Decimal(str(change)),
        change_percentage=Decimal(str(percentage)),
        end_of_day_balance=Decimal(str(balance)),
    )
    if event_id:
        event = replace(event, event_id=event_id)
    return event


def image(name: str = "shot.png", content: bytes = b"\x89PNG fake") -> ImageUpload:
    """Build an ImageUpload."""
    return ImageUpload(filename=name, content=content, content_type="image/png")


# =============================================================================
# EXTRACTION PROVIDERS
# =============================================================================


class ScriptedExtractionProvider:
    """
    Extraction provider returning canned records keyed by filename.

    A value that is an Exception instance is raised instead of returned.
    """

    def __init__(self, responses: dict[str, Any]):
        self._responses = responses
        self.calls: list[str] = []

    def extract(self, image: ImageUpload) -> dict[str, Any]:
        self.calls.append(image.filename)
        response = self._responses.get(image.filename)
        if response is None:
            raise ExtractionError(f"no record for {image.filename}")
        if isinstance(response, Exception):
            raise response
        return response


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def snapshot_feed() -> SnapshotFeed:
    """Provide a fresh SnapshotFeed."""
    return SnapshotFeed()


@pytest.fixture
def event_repo(test_session, snapshot_feed) -> SqlAlchemyEventRepository:
    """Provide test EventStore."""
    return SqlAlchemyEventRepository(test_session, snapshot_feed)


@pytest.fixture
def journal_service(event_repo) -> JournalService:
    """Provide test JournalService."""
    return JournalService(event_store=event_repo)


@pytest.fixture
def scripted_provider() -> ScriptedExtractionProvider:
    """Provider with one readable trade, one readable summary, one failure."""
    return ScriptedExtractionProvider({
        "trade.png": {
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "ticker": " tsla ",
            "costAtOpen": "$1,000.00",
            "creditAtClose": "$1,100.00",
            "changeValue": "+$100.00",
            "changePercentage": "10%",
        },
        "summary.png": {
            "imageType": "dailySummary",
            "date": "2024-01-02",
            "changeValue": "-50",
            "changePercentage": "-4.55",
            "endOfDayBalance": "1,050.00",
        },
        "broken.png": ExtractionError("Extraction service error 500: boom"),
        "nonsense.png": {"imageType": "receipt", "total": "12.00"},
    })


@pytest.fixture
def extraction_service(scripted_provider, journal_service) -> ExtractionService:
    """Provide test ExtractionService."""
    return ExtractionService(provider=scripted_provider, journal_service=journal_service)


@pytest.fixture
def event_factory(event_repo) -> Callable[[LedgerEvent], str]:
    """Insert an event into the test store and return its ID."""

    def _insert(event: LedgerEvent) -> str:
        return event_repo.insert(event)

    return _insert


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_provider(client, scripted_provider) -> TestClient:
    """Test client whose extraction endpoint uses the scripted provider."""
    app.dependency_overrides[get_extraction_provider] = lambda: scripted_provider
    return client
