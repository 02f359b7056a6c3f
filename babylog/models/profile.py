"""Baby profile model."""

import uuid

from sqlalchemy import Float, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from babylog.database import Base
from babylog.models.mixins import TimestampMixin

DEFAULT_FEED_TERM_SECONDS = 3 * 60 * 60


class BabyProfile(Base, TimestampMixin):
    """A tracked baby. Every logged event belongs to one profile."""

    __tablename__ = "baby_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    feed_term_seconds: Mapped[float] = mapped_column(Float, default=DEFAULT_FEED_TERM_SECONDS)

    # Relationships
    feed_sessions: Mapped[list["FeedSession"]] = relationship(  # noqa: F821
        back_populates="profile", cascade="all, delete-orphan"
    )
    diaper_changes: Mapped[list["DiaperChange"]] = relationship(  # noqa: F821
        back_populates="profile", cascade="all, delete-orphan"
    )
    custom_events: Mapped[list["CustomEvent"]] = relationship(  # noqa: F821
        back_populates="profile", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<BabyProfile(id={self.id}, name='{self.name}')>"
