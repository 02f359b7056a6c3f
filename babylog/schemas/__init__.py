"""Pydantic schemas for request/response validation."""

from babylog.schemas.analysis import (
    AnalysisTaskQueued,
    CorrelationRequest,
    CorrelationResponse,
    CorrelationResultOut,
    HashtagsResponse,
)
from babylog.schemas.event import (
    CustomEvent,
    CustomEventCreate,
    CustomEventType,
    CustomEventTypeCreate,
    DiaperChange,
    DiaperChangeCreate,
    FeedSession,
    FeedSessionCreate,
)
from babylog.schemas.profile import Profile, ProfileCreate, ProfileUpdate

__all__ = [
    "AnalysisTaskQueued",
    "CorrelationRequest",
    "CorrelationResponse",
    "CorrelationResultOut",
    "CustomEvent",
    "CustomEventCreate",
    "CustomEventType",
    "CustomEventTypeCreate",
    "DiaperChange",
    "DiaperChangeCreate",
    "FeedSession",
    "FeedSessionCreate",
    "HashtagsResponse",
    "Profile",
    "ProfileCreate",
    "ProfileUpdate",
]
