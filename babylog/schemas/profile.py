"""Baby profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileBase(BaseModel):
    """Base profile schema."""

    name: str = Field(min_length=1)
    feed_term_seconds: float = Field(default=3 * 60 * 60, gt=0)


class ProfileCreate(ProfileBase):
    """Schema for creating a profile."""

    pass


class ProfileUpdate(BaseModel):
    """Schema for updating a profile."""

    name: str | None = Field(default=None, min_length=1)
    feed_term_seconds: float | None = Field(default=None, gt=0)


class Profile(ProfileBase):
    """Schema for profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
