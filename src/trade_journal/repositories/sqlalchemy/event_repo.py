"""SQLAlchemy implementation of EventStore."""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trade_journal.core.exceptions import NotFoundError, StoreError
from trade_journal.core.timezone import now_eastern
from trade_journal.domain.models import LedgerEvent
from trade_journal.repositories.protocols.event_store import SnapshotCallback
from trade_journal.repositories.snapshot_feed import SnapshotFeed, Subscription
from trade_journal.repositories.sqlalchemy.orm_models import LedgerEventORM

logger = logging.getLogger(__name__)


class SqlAlchemyEventRepository:
    """SQLAlchemy-backed event store publishing snapshots to a SnapshotFeed."""

    def __init__(self, db: Session, feed: Optional[SnapshotFeed] = None):
        self._db = db
        self._feed = feed if feed is not None else SnapshotFeed()

    def insert(self, event: LedgerEvent) -> str:
        """Persist a new event and return its assigned ID."""
        event_id = str(uuid.uuid4())
        stored = event.with_identity(event_id, now_eastern().replace(tzinfo=None))
        try:
            self._db.add(self._to_orm(stored))
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Failed to insert %s event for %s: %s", event.event_type.value, event.date, exc)
            raise StoreError(f"Could not save event: {exc}") from exc

        logger.info("Inserted %s event %s for %s", event.event_type.value, event_id, event.date)
        self._publish()
        return event_id

    def get_by_id(self, event_id: str) -> Optional[LedgerEvent]:
        """Retrieve event by ID."""
        try:
            orm_event = self._db.query(LedgerEventORM).filter(
                LedgerEventORM.event_id == event_id
            ).first()
        except SQLAlchemyError as exc:
            logger.error("Failed to load event %s: %s", event_id, exc)
            raise StoreError(f"Could not load event: {exc}") from exc
        return self._to_domain(orm_event) if orm_event else None

    def list_all_ordered_by_date(self) -> list[LedgerEvent]:
        """List all events ascending by date, then insertion order."""
        try:
            rows = (
                self._db.query(LedgerEventORM)
                .order_by(LedgerEventORM.event_date, LedgerEventORM.seq)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.error("Failed to list events: %s", exc)
            raise StoreError(f"Could not list events: {exc}") from exc
        return [self._to_domain(row) for row in rows]

    def delete_by_id(self, event_id: str) -> None:
        """Delete an event (hard delete)."""
        try:
            orm_event = self._db.query(LedgerEventORM).filter(
                LedgerEventORM.event_id == event_id
            ).first()
            if orm_event is None:
                raise NotFoundError("Event", event_id)
            self._db.delete(orm_event)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Failed to delete event %s: %s", event_id, exc)
            raise StoreError(f"Could not delete event: {exc}") from exc

        logger.info("Deleted event %s", event_id)
        self._publish()

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """Register for snapshots and receive the current one immediately."""
        subscription = self._feed.subscribe(callback)
        try:
            snapshot = self.list_all_ordered_by_date()
        except StoreError:
            subscription.cancel()
            raise
        self._feed.deliver(subscription, snapshot)
        return subscription

    def _publish(self) -> None:
        if self._feed.subscriber_count == 0:
            return
        try:
            snapshot = self.list_all_ordered_by_date()
        except StoreError:
            # Subscribers keep their last good snapshot
            return
        self._feed.publish(snapshot)

    @staticmethod
    def _to_orm(event: LedgerEvent) -> LedgerEventORM:
        """Convert domain model to ORM model."""
        return LedgerEventORM(
            event_id=event.event_id,
            event_date=event.date,
            event_type=event.event_type,
            ticker=event.ticker,
            cost_at_open=event.cost_at_open,
            credit_at_close=event.credit_at_close,
            change_value=event.change_value,
            change_percentage=event.change_percentage,
            end_of_day_balance=event.end_of_day_balance,
            created_at=event.created_at,
        )

    @staticmethod
    def _to_domain(orm: LedgerEventORM) -> LedgerEvent:
        """Convert ORM model to domain model."""
        return LedgerEvent(
            event_id=orm.event_id,
            date=orm.event_date,
            event_type=orm.event_type,
            ticker=orm.ticker or "",
            cost_at_open=_decimal(orm.cost_at_open),
            credit_at_close=_decimal(orm.credit_at_close),
            change_value=_decimal(orm.change_value),
            change_percentage=_decimal(orm.change_percentage),
            end_of_day_balance=_decimal(orm.end_of_day_balance),
            created_at=orm.created_at,
        )


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    number = Decimal(str(value))
    try:
        return number.quantize(Decimal("0.01"))
    except InvalidOperation:
        return number
