"""Event repository: loads logged events as ``TaggedEvent`` snapshots."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from babylog.models.custom_event import CustomEvent
from babylog.models.diaper_change import DiaperChange
from babylog.models.feed_session import FeedSession
from babylog.services.events import DateInterval, EventKind, TaggedEvent

logger = logging.getLogger(__name__)

_MODELS = {
    EventKind.FEED: (FeedSession, FeedSession.start_time),
    EventKind.DIAPER: (DiaperChange, DiaperChange.timestamp),
    EventKind.CUSTOM_EVENT: (CustomEvent, CustomEvent.timestamp),
}


class EventRepository:
    """Reads feeds, diaper changes and custom events from the database."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_events(
        self,
        kind: EventKind,
        interval: DateInterval,
        subject_id: UUID | None = None,
    ) -> list[TaggedEvent]:
        """Fetch non-deleted events of one kind with a timestamp in ``[start, end)``.

        Args:
            kind: Which table to read
            interval: Half-open time range
            subject_id: Only events of this profile, if given

        Returns:
            Events ordered by timestamp. A database failure is logged and
            reported as an empty list so callers can carry on with partial data.
        """
        model, time_column = _MODELS[kind]

        query = (
            select(model)
            .where(time_column >= interval.start)
            .where(time_column < interval.end)
            .where(model.deleted_at.is_(None))
        )
        if subject_id is not None:
            query = query.where(model.profile_id == subject_id)
        query = query.order_by(time_column.asc())

        try:
            rows = self.db.scalars(query).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch {kind.value} events: {e}")
            return []

        return [row.to_tagged_event() for row in rows]
