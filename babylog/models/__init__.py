"""SQLAlchemy ORM models."""

from babylog.models.custom_event import CustomEvent, CustomEventType
from babylog.models.diaper_change import DiaperChange, DiaperType
from babylog.models.feed_session import FeedSession
from babylog.models.profile import BabyProfile

__all__ = [
    "BabyProfile",
    "CustomEvent",
    "CustomEventType",
    "DiaperChange",
    "DiaperType",
    "FeedSession",
]
