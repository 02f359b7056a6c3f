"""Custom event models."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from babylog.database import Base
from babylog.models.mixins import SoftDeleteMixin, TimestampMixin
from babylog.services.events import EventKind, TaggedEvent, extract_hashtags


class CustomEventType(Base, TimestampMixin):
    """A user-defined kind of event, e.g. "Vomit" or "Bath".

    The emoji is the stable identifier: events copy it so they survive the
    type being renamed or deleted.
    """

    __tablename__ = "custom_event_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    emoji: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<CustomEventType(id={self.id}, name='{self.name}')>"


class CustomEvent(Base, TimestampMixin, SoftDeleteMixin):
    """An occurrence of a custom event type."""

    __tablename__ = "custom_events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("baby_profiles.id"), nullable=True
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_type_name: Mapped[str] = mapped_column(String(100), nullable=False)
    event_type_emoji: Mapped[str] = mapped_column(String(32), nullable=False)
    memo_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    profile: Mapped["BabyProfile | None"] = relationship(back_populates="custom_events")  # noqa: F821

    __table_args__ = (
        Index("idx_custom_events_timestamp", "timestamp"),
        Index("idx_custom_events_profile_id", "profile_id"),
        Index("idx_custom_events_event_type_emoji", "event_type_emoji"),
    )

    @property
    def hashtags(self) -> frozenset[str]:
        return extract_hashtags(self.memo_text)

    def to_tagged_event(self) -> TaggedEvent:
        return TaggedEvent.from_memo(
            EventKind.CUSTOM_EVENT,
            self.timestamp,
            self.memo_text,
            subject_id=self.profile_id,
            custom_event_type=self.event_type_emoji,
        )

    def __repr__(self) -> str:
        return f"<CustomEvent(id={self.id}, event_type='{self.event_type_name}')>"
