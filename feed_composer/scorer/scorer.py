"""Scoring engine for feed content."""

import math
from collections.abc import Iterable
from datetime import UTC, datetime

import structlog

from feed_composer.content.models import ContentItem, ScoredItem, Source
from feed_composer.scorer.constants import RECENT_DOMAIN_PENALTY
from feed_composer.scorer.domains import base_domain


logger = structlog.get_logger()


class FeedScorer:
    """Computes ranking scores for content items.

    Scoring formula:
        score = ln(seconds_since_published) - recency_penalty

    Where:
        - ln(...) is 0 when the item is not older than now
        - recency_penalty is RECENT_DOMAIN_PENALTY when the item's
          registrable domain is among the recently visited domains

    Lower scores rank first, so fresher items and items from domains the
    user already reads move toward the front of the feed.
    """

    def __init__(
        self,
        recent_domains: Iterable[str] = (),
        now: datetime | None = None,
        session_id: str = "pure",
    ) -> None:
        """Initialize the scorer.

        Args:
            recent_domains: Snapshot of recently visited registrable domains.
            now: Current time for elapsed-time calculation; naive values
                are treated as UTC.
            session_id: Session identifier for logging.
        """
        self._recent_domains = frozenset(d.lower() for d in recent_domains)
        now = now or datetime.now(UTC)
        self._now = now if now.tzinfo is not None else now.replace(tzinfo=UTC)
        self._log = logger.bind(
            component="scorer",
            session_id=session_id,
        )

    def score(self, content: ContentItem) -> float:
        """Compute the score of a single content item.

        Args:
            content: Item to score.

        Returns:
            Score; lower is more relevant.
        """
        elapsed = (self._now - content.published_at).total_seconds()
        score = math.log(elapsed) if elapsed > 0 else 0.0

        domain = base_domain(content.url)
        if domain is not None and domain in self._recent_domains:
            score -= RECENT_DOMAIN_PENALTY

        return score

    def score_items(
        self,
        items: Iterable[ContentItem],
        sources: Iterable[Source],
    ) -> list[ScoredItem]:
        """Score items and resolve their sources.

        Items whose publisher has no matching source are dropped. The result
        keeps input order; callers sort it before sequencing.

        Args:
            items: Content items to score.
            sources: Known sources.

        Returns:
            List of ScoredItem objects.
        """
        by_id: dict[str, Source] = {}
        for source in sources:
            by_id.setdefault(source.id, source)

        scored: list[ScoredItem] = []
        dropped = 0
        for content in items:
            source = by_id.get(content.publisher_id)
            if source is None:
                dropped += 1
                continue
            scored.append(
                ScoredItem(content=content, source=source, score=self.score(content))
            )

        self._log.info(
            "scoring_complete",
            items_scored=len(scored),
            items_dropped=dropped,
            recent_domains=len(self._recent_domains),
            min_score=min((s.score for s in scored), default=0.0),
            max_score=max((s.score for s in scored), default=0.0),
        )
        return scored


def score_items(
    items: Iterable[ContentItem],
    sources: Iterable[Source],
    recent_domains: Iterable[str] = (),
    now: datetime | None = None,
) -> list[ScoredItem]:
    """Pure function API for scoring content items.

    Args:
        items: Content items to score.
        sources: Known sources.
        recent_domains: Recently visited registrable domains.
        now: Current time; defaults to now in UTC.

    Returns:
        Unsorted list of ScoredItem objects.
    """
    return FeedScorer(recent_domains=recent_domains, now=now).score_items(
        items, sources
    )
