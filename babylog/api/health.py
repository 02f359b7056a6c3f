"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from babylog.database import get_db
from babylog.models.custom_event import CustomEvent
from babylog.models.diaper_change import DiaperChange
from babylog.models.feed_session import FeedSession
from babylog.services.events import EventKind

router = APIRouter(tags=["health"])

_EVENT_MODELS = {
    EventKind.FEED: FeedSession,
    EventKind.DIAPER: DiaperChange,
    EventKind.CUSTOM_EVENT: CustomEvent,
}


@router.get("/health")
def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/db")
def db_health_check(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Database health check, with the number of live events of each kind."""
    try:
        events = {
            kind.value: db.scalar(
                select(func.count()).select_from(model).where(model.deleted_at.is_(None))
            )
            for kind, model in _EVENT_MODELS.items()
        }
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "database": str(e)}
    return {"status": "healthy", "database": "connected", "events": events}
