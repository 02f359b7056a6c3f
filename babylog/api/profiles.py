"""Baby profile API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from babylog.database import get_db
from babylog.models.profile import BabyProfile as ProfileModel
from babylog.schemas.profile import Profile, ProfileCreate, ProfileUpdate

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.post("/", response_model=Profile, status_code=201)
def create_profile(profile: ProfileCreate, db: Session = Depends(get_db)) -> ProfileModel:
    """Create a new baby profile."""
    db_profile = ProfileModel(**profile.model_dump())
    db.add(db_profile)
    db.commit()
    db.refresh(db_profile)
    return db_profile


@router.get("/", response_model=list[Profile])
def list_profiles(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)) -> list[ProfileModel]:
    """List all profiles."""
    return db.query(ProfileModel).order_by(ProfileModel.name).offset(skip).limit(limit).all()


@router.get("/{profile_id}", response_model=Profile)
def get_profile(profile_id: UUID, db: Session = Depends(get_db)) -> ProfileModel:
    """Get a profile by ID."""
    profile = db.get(ProfileModel, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.patch("/{profile_id}", response_model=Profile)
def update_profile(
    profile_id: UUID, profile_update: ProfileUpdate, db: Session = Depends(get_db)
) -> ProfileModel:
    """Update a profile."""
    profile = db.get(ProfileModel, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    update_data = profile_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile


@router.delete("/{profile_id}", status_code=204)
def delete_profile(profile_id: UUID, db: Session = Depends(get_db)) -> None:
    """Delete a profile and everything logged for it."""
    profile = db.get(ProfileModel, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    db.delete(profile)
    db.commit()
