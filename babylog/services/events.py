"""Event model consumed by the correlation engine.

Logged feeds, diaper changes and custom events are flattened into
``TaggedEvent`` records before analysis. Hashtags are pulled out of the
free-text memo once, when the record is built.
"""

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

HASHTAG_PATTERN = re.compile(r"(?<!\w)#(\w+)")

MILLILITERS_PER_FLUID_OUNCE = 29.5735295625


def extract_hashtags(text: str | None) -> frozenset[str]:
    """Extract the lowercase hashtags from a memo.

    A hashtag is ``#`` followed by letters, digits or underscores, not glued to
    a preceding word (``mail#tag`` is not a tag). Never raises.
    """
    if not text:
        return frozenset()
    return frozenset(match.group(1).casefold() for match in HASHTAG_PATTERN.finditer(text))


def normalize_hashtag(tag: str) -> str:
    """Normalize a user-supplied hashtag: strip ``#`` and whitespace, case-fold."""
    return tag.strip().lstrip("#").casefold()


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class VolumeUnit(str, Enum):
    """Units a feed amount can be recorded in."""

    MILLILITERS = "ml"
    FLUID_OUNCES = "fl oz"


def to_milliliters(value: float, unit_symbol: str | None) -> float:
    """Convert a recorded amount to milliliters.

    Unknown or missing symbols are treated as milliliters.
    """
    if unit_symbol == VolumeUnit.FLUID_OUNCES.value:
        return value * MILLILITERS_PER_FLUID_OUNCE
    return value


class EventKind(str, Enum):
    """Kinds of logged events."""

    FEED = "feed"
    DIAPER = "diaper"
    CUSTOM_EVENT = "custom_event"


class DateInterval(BaseModel):
    """Half-open time range ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def extended(self, by: timedelta) -> "DateInterval":
        """Same start, end pushed out by ``by``."""
        return DateInterval(start=self.start, end=self.end + by)


class TaggedEvent(BaseModel):
    """One logged occurrence, reduced to what the matcher needs."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    timestamp: datetime
    subject_id: UUID | None = None
    hashtags: frozenset[str] = frozenset()
    custom_event_type: str | None = None  # emoji of the custom event type
    amount_ml: float | None = None  # feeds only, canonical unit

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @classmethod
    def from_memo(cls, kind: EventKind, timestamp: datetime, memo: str | None, **kwargs) -> "TaggedEvent":
        """Build an event, extracting hashtags from its memo text."""
        return cls(kind=kind, timestamp=timestamp, hashtags=extract_hashtags(memo), **kwargs)

    def is_custom_event_of(self, type_id: str) -> bool:
        return self.kind == EventKind.CUSTOM_EVENT and self.custom_event_type == type_id


class CustomEventTarget(BaseModel):
    """Outcome: a custom event of the given type occurred."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom_event"] = "custom_event"
    type_id: str = Field(min_length=1)


class CustomEventWithHashtagTarget(BaseModel):
    """Outcome: a custom event of the given type carrying ``hashtag`` occurred."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom_event_with_hashtag"] = "custom_event_with_hashtag"
    type_id: str = Field(min_length=1)
    hashtag: str = Field(min_length=1)

    @field_validator("hashtag")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_hashtag(value)


class FeedAmountTarget(BaseModel):
    """Outcome: the amount of the matched feed, in milliliters."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["feed_amount"] = "feed_amount"


CorrelationTarget = Annotated[
    CustomEventTarget | CustomEventWithHashtagTarget | FeedAmountTarget,
    Field(discriminator="kind"),
]


class CorrelationResult(BaseModel):
    """Association between one hashtag and the analysis target."""

    model_config = ConfigDict(frozen=True)

    hashtag: str
    total_count: int = Field(ge=0)
    correlated_count: int = Field(ge=0)
    average_value: float | None = None
    correlation_coefficient: float = 0.0  # Phi or point-biserial, -1 to 1
    p_value: float = 1.0

    @model_validator(mode="after")
    def _correlated_within_total(self) -> "CorrelationResult":
        if self.correlated_count > self.total_count:
            raise ValueError(
                f"correlated_count {self.correlated_count} exceeds total_count {self.total_count}"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.correlated_count / self.total_count

    def is_significant(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

    @classmethod
    def empty(cls, hashtag: str) -> "CorrelationResult":
        """Result for a hashtag with no source events: no evidence either way."""
        return cls(hashtag=hashtag, total_count=0, correlated_count=0)
