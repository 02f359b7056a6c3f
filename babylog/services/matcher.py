"""Time-window matching between tagged events and analysis outcomes.

The join between the event population and the outcome stream does not depend
on the hashtag being analyzed, so it is computed once per analysis. Splitting
the joined population by hashtag is then a cheap fold.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import NamedTuple

from babylog.services.events import (
    CorrelationTarget,
    CustomEventTarget,
    CustomEventWithHashtagTarget,
    DateInterval,
    EventKind,
    FeedAmountTarget,
    TaggedEvent,
)


class ContingencyTable(NamedTuple):
    """2x2 counts: rows are tag / no tag, columns are outcome / no outcome."""

    a: int = 0  # tag, outcome
    b: int = 0  # tag, no outcome
    c: int = 0  # no tag, outcome
    d: int = 0  # no tag, no outcome

    def add(self, tagged: bool, outcome: bool) -> "ContingencyTable":
        if tagged:
            return self._replace(a=self.a + 1) if outcome else self._replace(b=self.b + 1)
        return self._replace(c=self.c + 1) if outcome else self._replace(d=self.d + 1)


class BinarySample(NamedTuple):
    """Matcher output for custom-event targets."""

    hashtag: str
    total_count: int
    table: ContingencyTable


class AmountSample(NamedTuple):
    """Matcher output for the feed amount target."""

    hashtag: str
    total_count: int
    group1: tuple[float, ...]  # matched amounts of tagged sources
    group0: tuple[float, ...]  # matched amounts of untagged events


class _Window:
    """Sorted timestamps of candidate outcomes, searchable by time range."""

    def __init__(self, candidates: Iterable[TaggedEvent]) -> None:
        self.events = sorted(candidates, key=lambda event: event.timestamp)
        self.timestamps = [event.timestamp for event in self.events]

    def first_after(self, moment: datetime, window: timedelta) -> TaggedEvent | None:
        """Earliest candidate in ``(moment, moment + window]``."""
        index = bisect_right(self.timestamps, moment)
        if index < len(self.events) and self.timestamps[index] <= moment + window:
            return self.events[index]
        return None

    def first_from(self, moment: datetime, window: timedelta) -> TaggedEvent | None:
        """Earliest candidate in ``[moment, moment + window]``."""
        index = bisect_left(self.timestamps, moment)
        if index < len(self.events) and self.timestamps[index] <= moment + window:
            return self.events[index]
        return None


def _is_outcome(event: TaggedEvent, target: CustomEventTarget | CustomEventWithHashtagTarget) -> bool:
    if not event.is_custom_event_of(target.type_id):
        return False
    if isinstance(target, CustomEventWithHashtagTarget):
        return target.hashtag in event.hashtags
    return True


class TimeWindowMatcher:
    """Joins an event snapshot to a correlation target within a time window.

    Args:
        events: Snapshot covering ``[interval.start, interval.end + window)``
        interval: Analysis range; sources must fall inside it
        target: What counts as an outcome
        window: How long after a source an outcome may occur
    """

    def __init__(
        self,
        events: Sequence[TaggedEvent],
        interval: DateInterval,
        target: CorrelationTarget,
        window: timedelta,
    ) -> None:
        self.interval = interval
        self.target = target
        self.window = window

        in_range = [event for event in events if interval.contains(event.timestamp)]

        match target:
            case CustomEventTarget() | CustomEventWithHashtagTarget():
                outcomes = _Window(event for event in events if _is_outcome(event, target))
                # An outcome event cannot also be a source
                self._outcome_flags = [
                    (event, outcomes.first_after(event.timestamp, window) is not None)
                    for event in in_range
                    if not event.is_custom_event_of(target.type_id)
                ]
                self._measurements: list[tuple[TaggedEvent, float | None]] = []
            case FeedAmountTarget():
                feeds = _Window(
                    event
                    for event in events
                    if event.kind == EventKind.FEED and event.amount_ml is not None
                )
                self._outcome_flags = []
                self._measurements = [
                    (event, _amount(feeds.first_from(event.timestamp, window)))
                    for event in in_range
                ]
            case _:
                raise TypeError(f"Unsupported correlation target: {target!r}")

    @property
    def is_binary(self) -> bool:
        return not isinstance(self.target, FeedAmountTarget)

    def sample(self, hashtag: str) -> BinarySample | AmountSample:
        """Build the statistical sample for one hashtag."""
        if self.is_binary:
            return self.binary_sample(hashtag)
        return self.amount_sample(hashtag)

    def binary_sample(self, hashtag: str) -> BinarySample:
        table = ContingencyTable()
        for event, outcome in self._outcome_flags:
            table = table.add(hashtag in event.hashtags, outcome)
        return BinarySample(hashtag=hashtag, total_count=table.a + table.b, table=table)

    def amount_sample(self, hashtag: str) -> AmountSample:
        total_count = 0
        group1: list[float] = []
        group0: list[float] = []
        for event, amount in self._measurements:
            tagged = hashtag in event.hashtags
            if tagged:
                total_count += 1
            if amount is None:
                continue
            (group1 if tagged else group0).append(amount)
        return AmountSample(
            hashtag=hashtag,
            total_count=total_count,
            group1=tuple(group1),
            group0=tuple(group0),
        )


def _amount(feed: TaggedEvent | None) -> float | None:
    return feed.amount_ml if feed is not None else None
