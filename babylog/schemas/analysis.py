"""Correlation analysis schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from babylog.services.events import CorrelationResult, CorrelationTarget, ensure_utc

# Longest matching window accepted over the API: one year
MAX_WINDOW_MINUTES = 365 * 24 * 60


class CorrelationRequest(BaseModel):
    """Request body for a correlation analysis.

    ``window_minutes`` has no default: the caller must say how long after a
    tagged event an outcome still counts.
    """

    hashtags: list[str]
    target: CorrelationTarget
    window_minutes: float = Field(gt=0, le=MAX_WINDOW_MINUTES)
    start: datetime | None = None
    end: datetime | None = None
    profile_id: UUID | None = None

    @field_validator("start", "end")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class CorrelationResultOut(BaseModel):
    """One analyzed hashtag."""

    hashtag: str
    total_count: int
    correlated_count: int
    percentage: float
    average_value: float | None = None
    correlation_coefficient: float
    p_value: float
    is_significant: bool

    @classmethod
    def from_result(cls, result: CorrelationResult, alpha: float) -> "CorrelationResultOut":
        return cls(
            hashtag=result.hashtag,
            total_count=result.total_count,
            correlated_count=result.correlated_count,
            percentage=result.percentage,
            average_value=result.average_value,
            correlation_coefficient=result.correlation_coefficient,
            p_value=result.p_value,
            is_significant=result.is_significant(alpha),
        )


class CorrelationResponse(BaseModel):
    """Ranked analysis results."""

    target: CorrelationTarget
    window_minutes: float
    start: datetime
    end: datetime
    results: list[CorrelationResultOut]


class HashtagsResponse(BaseModel):
    """Hashtags seen in a date range."""

    start: datetime
    end: datetime
    hashtags: list[str]


class AnalysisTaskQueued(BaseModel):
    """Handle for an analysis running in the background."""

    task_id: str
    status: str = "queued"
