"""Scorer module ranking content by freshness and browsing signals."""

from feed_composer.scorer.constants import RECENT_DOMAIN_PENALTY
from feed_composer.scorer.domains import base_domain
from feed_composer.scorer.scorer import FeedScorer, score_items


__all__ = [
    "RECENT_DOMAIN_PENALTY",
    "FeedScorer",
    "base_domain",
    "score_items",
]
