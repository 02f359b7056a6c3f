"""Schemas for logged events."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from babylog.models.diaper_change import DiaperType
from babylog.services.events import VolumeUnit, ensure_utc


class _UTCTimes(BaseModel):
    """Normalizes every datetime field to aware UTC.

    SQLite hands back naive values; they are UTC wall-clock times.
    """

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("*", mode="after")
    @classmethod
    def _to_utc(cls, value):
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value


class FeedSessionCreate(_UTCTimes):
    """Schema for logging a feed."""

    profile_id: UUID
    start_time: datetime
    end_time: datetime | None = None
    amount_value: float | None = Field(default=None, ge=0)
    amount_unit_symbol: VolumeUnit | None = None
    memo_text: str | None = None


class FeedSession(_UTCTimes):
    """Schema for feed output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID | None
    start_time: datetime
    end_time: datetime | None = None
    amount_value: float | None = None
    amount_unit_symbol: str | None = None
    memo_text: str | None = None
    hashtags: list[str]

    @field_validator("hashtags", mode="before")
    @classmethod
    def _sorted(cls, value):
        return sorted(value)


class DiaperChangeCreate(_UTCTimes):
    """Schema for logging a diaper change."""

    profile_id: UUID
    timestamp: datetime
    diaper_type: DiaperType = DiaperType.PEE
    memo_text: str | None = None


class DiaperChange(_UTCTimes):
    """Schema for diaper change output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID | None
    timestamp: datetime
    diaper_type: str
    memo_text: str | None = None
    hashtags: list[str]

    @field_validator("hashtags", mode="before")
    @classmethod
    def _sorted(cls, value):
        return sorted(value)


class CustomEventTypeCreate(BaseModel):
    """Schema for defining a custom event type."""

    name: str = Field(min_length=1)
    emoji: str = Field(min_length=1)


class CustomEventType(CustomEventTypeCreate):
    """Schema for custom event type output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID


class CustomEventCreate(_UTCTimes):
    """Schema for logging a custom event. The type is referenced by emoji."""

    profile_id: UUID
    timestamp: datetime
    event_type_emoji: str = Field(min_length=1)
    memo_text: str | None = None


class CustomEvent(_UTCTimes):
    """Schema for custom event output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID | None
    timestamp: datetime
    event_type_name: str
    event_type_emoji: str
    memo_text: str | None = None
    hashtags: list[str]

    @field_validator("hashtags", mode="before")
    @classmethod
    def _sorted(cls, value):
        return sorted(value)
