"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    Enum as SqlEnum,
)

from trade_journal.repositories.sqlalchemy.database import Base
from trade_journal.domain.models.enums import EventType


class LedgerEventORM(Base):
    """SQLAlchemy model for LedgerEvent."""

    __tablename__ = "ledger_events"

    # Insertion sequence; orders events that share a date
    seq = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), unique=True, nullable=False, index=True)
    event_date = Column(Date, nullable=False, index=True)
    event_type = Column(SqlEnum(EventType), nullable=False)
    ticker = Column(String(20), nullable=False, default="")
    cost_at_open = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    credit_at_close = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    change_value = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    change_percentage = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    end_of_day_balance = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
