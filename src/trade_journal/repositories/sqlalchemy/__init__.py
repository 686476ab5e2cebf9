"""SQLAlchemy repository implementations."""

from trade_journal.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from trade_journal.repositories.sqlalchemy.event_repo import SqlAlchemyEventRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyEventRepository",
]
