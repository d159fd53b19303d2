"""Sequencer module turning sorted items into display cards.

Items are split into sponsor, deal, and article pools and consumed by a fixed
grammar of rule elements. Each item lands in at most one card.
"""

from feed_composer.sequencer.metrics import SequencerMetrics
from feed_composer.sequencer.pools import ItemPools
from feed_composer.sequencer.rules import (
    DEFAULT_RULES,
    BrandedGroup,
    CategoryGroup,
    Deals,
    Group,
    Headline,
    Repeating,
    RuleElement,
    Sponsor,
)
from feed_composer.sequencer.sequencer import CardSequencer, evaluate, generate_cards


__all__ = [
    "DEFAULT_RULES",
    "BrandedGroup",
    "CardSequencer",
    "CategoryGroup",
    "Deals",
    "Group",
    "Headline",
    "ItemPools",
    "Repeating",
    "RuleElement",
    "SequencerMetrics",
    "Sponsor",
    "evaluate",
    "generate_cards",
]
