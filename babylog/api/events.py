"""Event logging API endpoints: feeds, diaper changes and custom events."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Query, Session

from babylog.database import get_db
from babylog.models.custom_event import CustomEvent as CustomEventModel
from babylog.models.custom_event import CustomEventType as CustomEventTypeModel
from babylog.models.diaper_change import DiaperChange as DiaperChangeModel
from babylog.models.feed_session import FeedSession as FeedSessionModel
from babylog.models.profile import BabyProfile
from babylog.schemas.event import (
    CustomEvent,
    CustomEventCreate,
    DiaperChange,
    DiaperChangeCreate,
    FeedSession,
    FeedSessionCreate,
)
from babylog.services.events import ensure_utc

router = APIRouter(prefix="/api/v1/events", tags=["events"])

_MODELS_BY_PATH = {
    "feeds": FeedSessionModel,
    "diapers": DiaperChangeModel,
    "custom": CustomEventModel,
}


def _require_profile(db: Session, profile_id: UUID) -> BabyProfile:
    profile = db.get(BabyProfile, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


def _filter_range(
    query: Query,
    column,
    profile_column,
    profile_id: UUID | None,
    start: datetime | None,
    end: datetime | None,
) -> Query:
    if profile_id:
        query = query.filter(profile_column == profile_id)
    if start:
        query = query.filter(column >= ensure_utc(start))
    if end:
        query = query.filter(column < ensure_utc(end))
    return query


@router.post("/feeds/", response_model=FeedSession, status_code=201)
def create_feed(feed: FeedSessionCreate, db: Session = Depends(get_db)) -> FeedSessionModel:
    """Log a feed session."""
    _require_profile(db, feed.profile_id)
    if feed.end_time and feed.end_time < feed.start_time:
        raise HTTPException(status_code=422, detail="end_time must not be before start_time")

    db_feed = FeedSessionModel(**feed.model_dump())
    db.add(db_feed)
    db.commit()
    db.refresh(db_feed)
    return db_feed


@router.get("/feeds/", response_model=list[FeedSession])
def list_feeds(
    profile_id: UUID | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[FeedSessionModel]:
    """List feed sessions, newest first."""
    query = db.query(FeedSessionModel).filter(FeedSessionModel.deleted_at.is_(None))
    query = _filter_range(
        query, FeedSessionModel.start_time, FeedSessionModel.profile_id, profile_id, start, end
    )
    return query.order_by(FeedSessionModel.start_time.desc()).offset(skip).limit(limit).all()


@router.post("/diapers/", response_model=DiaperChange, status_code=201)
def create_diaper_change(
    diaper: DiaperChangeCreate, db: Session = Depends(get_db)
) -> DiaperChangeModel:
    """Log a diaper change."""
    _require_profile(db, diaper.profile_id)

    db_diaper = DiaperChangeModel(**diaper.model_dump())
    db.add(db_diaper)
    db.commit()
    db.refresh(db_diaper)
    return db_diaper


@router.get("/diapers/", response_model=list[DiaperChange])
def list_diaper_changes(
    profile_id: UUID | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[DiaperChangeModel]:
    """List diaper changes, newest first."""
    query = db.query(DiaperChangeModel).filter(DiaperChangeModel.deleted_at.is_(None))
    query = _filter_range(
        query, DiaperChangeModel.timestamp, DiaperChangeModel.profile_id, profile_id, start, end
    )
    return query.order_by(DiaperChangeModel.timestamp.desc()).offset(skip).limit(limit).all()


@router.post("/custom/", response_model=CustomEvent, status_code=201)
def create_custom_event(
    event: CustomEventCreate, db: Session = Depends(get_db)
) -> CustomEventModel:
    """Log a custom event. The event copies its type's name and emoji."""
    _require_profile(db, event.profile_id)
    event_type = (
        db.query(CustomEventTypeModel)
        .filter(CustomEventTypeModel.emoji == event.event_type_emoji)
        .first()
    )
    if not event_type:
        raise HTTPException(status_code=404, detail="Custom event type not found")

    db_event = CustomEventModel(
        profile_id=event.profile_id,
        timestamp=event.timestamp,
        event_type_name=event_type.name,
        event_type_emoji=event_type.emoji,
        memo_text=event.memo_text,
    )
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


@router.get("/custom/", response_model=list[CustomEvent])
def list_custom_events(
    profile_id: UUID | None = None,
    event_type_emoji: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[CustomEventModel]:
    """List custom events, newest first."""
    query = db.query(CustomEventModel).filter(CustomEventModel.deleted_at.is_(None))
    query = _filter_range(
        query, CustomEventModel.timestamp, CustomEventModel.profile_id, profile_id, start, end
    )
    if event_type_emoji:
        query = query.filter(CustomEventModel.event_type_emoji == event_type_emoji)
    return query.order_by(CustomEventModel.timestamp.desc()).offset(skip).limit(limit).all()


@router.delete("/{kind}/{event_id}", status_code=204)
def delete_event(kind: str, event_id: UUID, db: Session = Depends(get_db)) -> None:
    """Soft delete a logged event. ``kind`` is one of feeds, diapers, custom."""
    model = _MODELS_BY_PATH.get(kind)
    if model is None:
        raise HTTPException(status_code=404, detail=f"Unknown event kind: {kind}")

    event = db.query(model).filter(model.id == event_id).filter(model.deleted_at.is_(None)).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    event.soft_delete()
    db.commit()
