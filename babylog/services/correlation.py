"""Hashtag correlation analysis.

For each requested hashtag, decides whether events bearing that tag are
followed by the chosen outcome more (or less) often than untagged events, or
are followed by larger (or smaller) feeds.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import timedelta
from uuid import UUID

from babylog.services import statistics
from babylog.services.events import (
    CorrelationResult,
    CorrelationTarget,
    DateInterval,
    EventKind,
    TaggedEvent,
    normalize_hashtag,
)
from babylog.services.matcher import AmountSample, BinarySample, TimeWindowMatcher
from babylog.services.repository import EventRepository

logger = logging.getLogger(__name__)


class AnalysisValidationError(ValueError):
    """Raised when analysis parameters are invalid."""


def _normalize_hashtags(hashtags: Iterable[str]) -> list[str]:
    """Case-fold, strip ``#`` and drop duplicates or blanks, keeping input order."""
    seen: dict[str, None] = {}
    for tag in hashtags:
        normalized = normalize_hashtag(tag)
        if normalized:
            seen.setdefault(normalized, None)
    return list(seen)


def _binary_result(sample: BinarySample) -> CorrelationResult:
    table = sample.table
    return CorrelationResult(
        hashtag=sample.hashtag,
        total_count=sample.total_count,
        correlated_count=table.a,
        correlation_coefficient=statistics.phi_coefficient(*table),
        p_value=statistics.chi_square_p_value(*table),
    )


def _amount_result(sample: AmountSample) -> CorrelationResult:
    average = sum(sample.group1) / len(sample.group1) if sample.group1 else None

    if not sample.group0:
        # Nothing to compare against
        coefficient, p_value = 0.0, 1.0
    else:
        coefficient = statistics.point_biserial_correlation(sample.group1, sample.group0)
        p_value = statistics.welch_t_test_p_value(sample.group1, sample.group0)

    return CorrelationResult(
        hashtag=sample.hashtag,
        total_count=sample.total_count,
        correlated_count=len(sample.group1),
        average_value=average,
        correlation_coefficient=coefficient,
        p_value=p_value,
    )


class CorrelationAnalyzer:
    """Runs hashtag correlation analyses against an event repository."""

    def __init__(self, repository: EventRepository):
        self.repository = repository

    def fetch_all_hashtags(
        self, date_interval: DateInterval, subject_id: UUID | None = None
    ) -> list[str]:
        """All hashtags used on any event in the interval, sorted."""
        tags: set[str] = set()
        for kind in EventKind:
            for event in self.repository.fetch_events(kind, date_interval, subject_id):
                tags |= event.hashtags
        return sorted(tags)

    def analyze(
        self,
        source_hashtags: Iterable[str],
        target: CorrelationTarget,
        window: timedelta,
        date_interval: DateInterval,
        subject_id: UUID | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> list[CorrelationResult]:
        """Analyze each hashtag against the target.

        Args:
            source_hashtags: Hashtags to analyze (with or without ``#``)
            target: Outcome to correlate with
            window: How long after a tagged event the outcome may occur
            date_interval: Range the tagged events must fall in
            subject_id: Restrict to one profile
            should_cancel: Polled once per hashtag; returning True stops the
                analysis and returns the results computed so far

        Returns:
            One result per hashtag, best first: by percentage for event
            targets, by average amount for the feed amount target.

        Raises:
            AnalysisValidationError: If the window is not positive or runs
                past the last representable date, or the interval is reversed.
        """
        if not isinstance(window, timedelta) or window <= timedelta(0):
            raise AnalysisValidationError(f"Time window must be a positive duration, got {window!r}")
        if date_interval.start > date_interval.end:
            raise AnalysisValidationError(
                f"Interval start {date_interval.start.isoformat()} is after end "
                f"{date_interval.end.isoformat()}"
            )
        try:
            snapshot_interval = date_interval.extended(window)
        except OverflowError as e:
            raise AnalysisValidationError(
                f"Time window {window} reaches past the last representable date"
            ) from e

        hashtags = _normalize_hashtags(source_hashtags)
        if not hashtags:
            return []

        events = self._snapshot(snapshot_interval, subject_id)
        matcher = TimeWindowMatcher(events, date_interval, target, window)
        logger.info(
            f"Analyzing {len(hashtags)} hashtags against {target.kind} "
            f"over {len(events)} events (window {window})"
        )

        results: list[CorrelationResult] = []
        for hashtag in hashtags:
            if should_cancel is not None and should_cancel():
                logger.info(f"Analysis cancelled after {len(results)}/{len(hashtags)} hashtags")
                break

            sample = matcher.sample(hashtag)
            if sample.total_count == 0:
                results.append(CorrelationResult.empty(hashtag))
            elif isinstance(sample, BinarySample):
                results.append(_binary_result(sample))
            else:
                results.append(_amount_result(sample))

        if matcher.is_binary:
            return sorted(results, key=lambda r: r.percentage, reverse=True)
        return sorted(results, key=lambda r: r.average_value or 0.0, reverse=True)

    def _snapshot(
        self, interval: DateInterval, subject_id: UUID | None
    ) -> tuple[TaggedEvent, ...]:
        """Immutable copy of every event in the interval, ordered by time."""
        events: list[TaggedEvent] = []
        for kind in EventKind:
            events.extend(self.repository.fetch_events(kind, interval, subject_id))
        return tuple(sorted(events, key=lambda event: event.timestamp))

