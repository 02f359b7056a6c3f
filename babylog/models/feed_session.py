"""Feed session model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from babylog.database import Base
from babylog.models.mixins import SoftDeleteMixin, TimestampMixin
from babylog.services.events import EventKind, TaggedEvent, extract_hashtags, to_milliliters


class FeedSession(Base, TimestampMixin, SoftDeleteMixin):
    """A feed, anchored to its start time. The amount is optional."""

    __tablename__ = "feed_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("baby_profiles.id"), nullable=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    amount_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    amount_unit_symbol: Mapped[str | None] = mapped_column(String(16), nullable=True)
    memo_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    profile: Mapped["BabyProfile | None"] = relationship(back_populates="feed_sessions")  # noqa: F821

    __table_args__ = (
        Index("idx_feed_sessions_start_time", "start_time"),
        Index("idx_feed_sessions_profile_id", "profile_id"),
    )

    @property
    def hashtags(self) -> frozenset[str]:
        return extract_hashtags(self.memo_text)

    @property
    def amount_ml(self) -> float | None:
        """Amount in milliliters, or None when no amount was recorded."""
        if self.amount_value is None:
            return None
        return to_milliliters(self.amount_value, self.amount_unit_symbol)

    def to_tagged_event(self) -> TaggedEvent:
        return TaggedEvent.from_memo(
            EventKind.FEED,
            self.start_time,
            self.memo_text,
            subject_id=self.profile_id,
            amount_ml=self.amount_ml,
        )

    def __repr__(self) -> str:
        return f"<FeedSession(id={self.id}, start_time={self.start_time})>"
