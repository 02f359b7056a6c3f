"""Tests for the event model: hashtags, units, intervals and targets."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from babylog.services.events import (
    CorrelationResult,
    CorrelationTarget,
    CustomEventTarget,
    CustomEventWithHashtagTarget,
    DateInterval,
    EventKind,
    FeedAmountTarget,
    TaggedEvent,
    VolumeUnit,
    extract_hashtags,
    normalize_hashtag,
    to_milliliters,
)


class TestExtractHashtags:
    """Tests for hashtag extraction from memo text."""

    def test_extracts_lowercase_tags(self):
        assert extract_hashtags("Milk #BrandA and #night_feed") == {"branda", "night_feed"}

    def test_case_variants_collapse(self):
        assert extract_hashtags("#Morning #morning #MORNING") == {"morning"}

    def test_is_idempotent(self):
        memo = "Fussy after #formula, #Formula again #gas2"
        assert extract_hashtags(memo) == extract_hashtags(memo)

    def test_unicode_letters(self):
        assert extract_hashtags("#ミルク #café") == {"ミルク", "café"}

    @pytest.mark.parametrize("memo", [None, "", "no tags here", "# alone", "##", "mail#tag"])
    def test_ill_formed_input_yields_nothing(self, memo):
        assert extract_hashtags(memo) == frozenset()

    def test_tag_stops_at_punctuation(self):
        assert extract_hashtags("(#bath), #sleep.") == {"bath", "sleep"}

    def test_normalize_hashtag(self):
        assert normalize_hashtag("  #BrandA ") == "branda"
        assert normalize_hashtag("branda") == "branda"


class TestUnits:
    """Tests for volume normalization."""

    def test_milliliters_unchanged(self):
        assert to_milliliters(120, VolumeUnit.MILLILITERS.value) == 120

    def test_fluid_ounces_converted(self):
        assert to_milliliters(4, "fl oz") == pytest.approx(118.29411825)

    def test_unknown_unit_treated_as_milliliters(self):
        assert to_milliliters(80, "cups") == 80
        assert to_milliliters(80, None) == 80


class TestDateInterval:
    """Tests for the half-open date interval."""

    def test_contains_is_half_open(self, base_time):
        interval = DateInterval(start=base_time, end=base_time + timedelta(hours=1))
        assert interval.contains(base_time)
        assert interval.contains(base_time + timedelta(minutes=59))
        assert not interval.contains(base_time + timedelta(hours=1))

    def test_extended(self, base_time):
        interval = DateInterval(start=base_time, end=base_time + timedelta(days=1))
        extended = interval.extended(timedelta(hours=2))
        assert extended.start == base_time
        assert extended.end == base_time + timedelta(days=1, hours=2)

    def test_naive_datetimes_are_utc(self):
        interval = DateInterval(start=datetime(2026, 1, 1), end=datetime(2026, 1, 2))
        assert interval.start.tzinfo == timezone.utc


class TestTaggedEvent:
    """Tests for TaggedEvent construction."""

    def test_from_memo_extracts_hashtags_once(self, base_time):
        event = TaggedEvent.from_memo(EventKind.FEED, base_time, "#A #a #b", amount_ml=90.0)
        assert event.hashtags == {"a", "b"}
        assert event.amount_ml == 90.0

    def test_empty_memo_has_no_hashtags(self, base_time):
        event = TaggedEvent.from_memo(EventKind.DIAPER, base_time, None)
        assert event.hashtags == frozenset()

    def test_timestamp_converted_to_utc(self):
        eastern = timezone(timedelta(hours=-5))
        event = TaggedEvent(kind=EventKind.DIAPER, timestamp=datetime(2026, 1, 1, 7, tzinfo=eastern))
        assert event.timestamp == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)

    def test_is_custom_event_of(self, base_time):
        vomit = TaggedEvent(kind=EventKind.CUSTOM_EVENT, timestamp=base_time, custom_event_type="🤮")
        feed = TaggedEvent(kind=EventKind.FEED, timestamp=base_time)
        assert vomit.is_custom_event_of("🤮")
        assert not vomit.is_custom_event_of("🛁")
        assert not feed.is_custom_event_of("🤮")


class TestCorrelationTarget:
    """Tests for the target union."""

    adapter = TypeAdapter(CorrelationTarget)

    def test_parses_each_variant(self):
        assert isinstance(
            self.adapter.validate_python({"kind": "custom_event", "type_id": "🤮"}), CustomEventTarget
        )
        tagged = self.adapter.validate_python(
            {"kind": "custom_event_with_hashtag", "type_id": "🤮", "hashtag": "#Severe"}
        )
        assert isinstance(tagged, CustomEventWithHashtagTarget)
        assert tagged.hashtag == "severe"
        assert isinstance(self.adapter.validate_python({"kind": "feed_amount"}), FeedAmountTarget)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "sleep_duration"})


class TestCorrelationResult:
    """Tests for result helpers."""

    def test_percentage(self):
        result = CorrelationResult(hashtag="a", total_count=4, correlated_count=3)
        assert result.percentage == 0.75

    def test_empty_result(self):
        result = CorrelationResult.empty("a")
        assert result.percentage == 0.0
        assert result.correlation_coefficient == 0.0
        assert result.p_value == 1.0
        assert result.average_value is None

    def test_correlated_count_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            CorrelationResult(hashtag="a", total_count=2, correlated_count=3)

    def test_is_significant(self):
        result = CorrelationResult(hashtag="a", total_count=10, correlated_count=10, p_value=0.01)
        assert result.is_significant()
        assert not result.is_significant(alpha=0.005)
