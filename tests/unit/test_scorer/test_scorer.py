"""Unit tests for feed scoring."""

import math
from datetime import timedelta

import pytest

from feed_composer.scorer.constants import RECENT_DOMAIN_PENALTY
from feed_composer.scorer.scorer import FeedScorer, score_items
from tests.helpers.factories import make_content, make_source
from tests.helpers.time import FIXED_NOW


class TestFeedScorerScore:
    """Tests for single item scoring."""

    def test_log_of_elapsed_seconds(self) -> None:
        """Score is the natural log of seconds since publication."""
        scorer = FeedScorer(now=FIXED_NOW)
        item = make_content(published_at=FIXED_NOW - timedelta(hours=1))
        assert scorer.score(item) == pytest.approx(math.log(3600))

    def test_fresher_scores_lower(self) -> None:
        """Newer items rank ahead of older ones."""
        scorer = FeedScorer(now=FIXED_NOW)
        fresh = make_content("fresh", published_at=FIXED_NOW - timedelta(minutes=5))
        old = make_content("old", published_at=FIXED_NOW - timedelta(days=2))
        assert scorer.score(fresh) < scorer.score(old)

    def test_future_or_now_scores_zero(self) -> None:
        """Items not older than now score zero."""
        scorer = FeedScorer(now=FIXED_NOW)
        assert scorer.score(make_content(published_at=FIXED_NOW)) == 0.0
        future = make_content(published_at=FIXED_NOW + timedelta(hours=3))
        assert scorer.score(future) == 0.0

    def test_recent_domain_penalty(self) -> None:
        """Items from recently visited domains get a lower score."""
        item = make_content(url="https://www.example.com/story")
        plain = FeedScorer(now=FIXED_NOW).score(item)
        visited = FeedScorer(recent_domains=["example.com"], now=FIXED_NOW).score(item)
        assert visited == pytest.approx(plain - RECENT_DOMAIN_PENALTY)

    def test_recent_domains_case_insensitive(self) -> None:
        """Domain snapshot entries are normalized to lowercase."""
        item = make_content(url="https://example.com/story")
        scorer = FeedScorer(recent_domains=["Example.COM"], now=FIXED_NOW)
        assert scorer.score(item) == pytest.approx(
            math.log(3600) - RECENT_DOMAIN_PENALTY
        )

    def test_other_domain_not_penalized(self) -> None:
        """Only matching registrable domains are penalized."""
        item = make_content(url="https://other.org/story")
        scorer = FeedScorer(recent_domains=["example.com"], now=FIXED_NOW)
        assert scorer.score(item) == pytest.approx(math.log(3600))

    def test_missing_url_not_penalized(self) -> None:
        """Items without a usable URL receive no penalty."""
        item = make_content().model_copy(update={"url": None})
        scorer = FeedScorer(recent_domains=["example.com"], now=FIXED_NOW)
        assert scorer.score(item) == pytest.approx(math.log(3600))

    def test_naive_now_treated_as_utc(self) -> None:
        """A naive reference time is read as UTC."""
        naive_now = FIXED_NOW.replace(tzinfo=None)
        scorer = FeedScorer(now=naive_now)
        assert scorer.score(make_content()) == pytest.approx(math.log(3600))

    def test_naive_now_in_batch(self) -> None:
        """Batch scoring accepts a naive reference time."""
        scored = score_items(
            [make_content("a")], [make_source()], now=FIXED_NOW.replace(tzinfo=None)
        )
        assert scored[0].score == pytest.approx(math.log(3600))


class TestScoreItems:
    """Tests for scoring batches with source resolution."""

    def test_resolves_sources(self) -> None:
        """Each scored item carries its publisher's source."""
        source = make_source("pub-1", name="Daily")
        scored = score_items([make_content("a")], [source], now=FIXED_NOW)
        assert len(scored) == 1
        assert scored[0].source.name == "Daily"
        assert scored[0].content.id == "a"

    def test_unknown_publisher_dropped(self) -> None:
        """Items without a matching source are dropped."""
        items = [make_content("a"), make_content("b", publisher_id="ghost")]
        scored = score_items(items, [make_source("pub-1")], now=FIXED_NOW)
        assert [s.content.id for s in scored] == ["a"]

    def test_keeps_input_order(self) -> None:
        """Results are not sorted by the scorer."""
        items = [
            make_content("old", published_at=FIXED_NOW - timedelta(days=1)),
            make_content("new", published_at=FIXED_NOW - timedelta(minutes=1)),
        ]
        scored = score_items(items, [make_source()], now=FIXED_NOW)
        assert [s.content.id for s in scored] == ["old", "new"]
        assert [s.content.id for s in sorted(scored)] == ["new", "old"]

    def test_disabled_sources_still_scored(self) -> None:
        """Enablement is applied by the sequencer, not the scorer."""
        scored = score_items(
            [make_content("a")], [make_source(enabled=False)], now=FIXED_NOW
        )
        assert len(scored) == 1
        assert scored[0].source.enabled is False

    def test_empty_input(self) -> None:
        """No items yields no scored items."""
        assert score_items([], [make_source()], now=FIXED_NOW) == []
