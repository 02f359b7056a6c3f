"""Custom event type API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from babylog.database import get_db
from babylog.models.custom_event import CustomEventType as CustomEventTypeModel
from babylog.schemas.event import CustomEventType, CustomEventTypeCreate

router = APIRouter(prefix="/api/v1/custom-event-types", tags=["custom-event-types"])


@router.post("/", response_model=CustomEventType, status_code=201)
def create_custom_event_type(
    event_type: CustomEventTypeCreate, db: Session = Depends(get_db)
) -> CustomEventTypeModel:
    """Define a new custom event type."""
    existing = (
        db.query(CustomEventTypeModel)
        .filter(CustomEventTypeModel.emoji == event_type.emoji)
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="Custom event type with this emoji already exists")

    db_event_type = CustomEventTypeModel(**event_type.model_dump())
    db.add(db_event_type)
    db.commit()
    db.refresh(db_event_type)
    return db_event_type


@router.get("/", response_model=list[CustomEventType])
def list_custom_event_types(db: Session = Depends(get_db)) -> list[CustomEventTypeModel]:
    """List all custom event types."""
    return db.query(CustomEventTypeModel).order_by(CustomEventTypeModel.name).all()


@router.delete("/{event_type_id}", status_code=204)
def delete_custom_event_type(event_type_id: UUID, db: Session = Depends(get_db)) -> None:
    """Delete a custom event type. Logged events keep their copied emoji and name."""
    event_type = db.get(CustomEventTypeModel, event_type_id)
    if not event_type:
        raise HTTPException(status_code=404, detail="Custom event type not found")

    db.delete(event_type)
    db.commit()
