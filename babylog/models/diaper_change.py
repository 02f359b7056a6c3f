"""Diaper change model."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from babylog.database import Base
from babylog.models.mixins import SoftDeleteMixin, TimestampMixin
from babylog.services.events import EventKind, TaggedEvent, extract_hashtags


class DiaperType(str, Enum):
    """What the diaper contained."""

    PEE = "pee"
    POO = "poo"


class DiaperChange(Base, TimestampMixin, SoftDeleteMixin):
    """A diaper change."""

    __tablename__ = "diaper_changes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("baby_profiles.id"), nullable=True
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    diaper_type: Mapped[str] = mapped_column(String(16), default=DiaperType.PEE.value)
    memo_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    profile: Mapped["BabyProfile | None"] = relationship(back_populates="diaper_changes")  # noqa: F821

    __table_args__ = (
        Index("idx_diaper_changes_timestamp", "timestamp"),
        Index("idx_diaper_changes_profile_id", "profile_id"),
    )

    @property
    def hashtags(self) -> frozenset[str]:
        return extract_hashtags(self.memo_text)

    def to_tagged_event(self) -> TaggedEvent:
        return TaggedEvent.from_memo(
            EventKind.DIAPER, self.timestamp, self.memo_text, subject_id=self.profile_id
        )

    def __repr__(self) -> str:
        return f"<DiaperChange(id={self.id}, diaper_type='{self.diaper_type}')>"
