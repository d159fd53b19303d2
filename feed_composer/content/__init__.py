"""Content model: sources, content items, scored items, and display cards."""

from feed_composer.content.cards import (
    Axis,
    Card,
    CardHeights,
    DealsCard,
    GroupCard,
    HeadlineCard,
    HeadlinePairCard,
    NumberedCard,
    SponsorCard,
    card_items,
    card_to_dict,
    estimated_height,
    replacing,
)
from feed_composer.content.layout import LayoutConfigError, load_card_heights
from feed_composer.content.models import ContentItem, ContentKind, ScoredItem, Source


__all__ = [
    "Axis",
    "Card",
    "CardHeights",
    "ContentItem",
    "ContentKind",
    "DealsCard",
    "GroupCard",
    "HeadlineCard",
    "HeadlinePairCard",
    "LayoutConfigError",
    "NumberedCard",
    "ScoredItem",
    "Source",
    "SponsorCard",
    "card_items",
    "card_to_dict",
    "estimated_height",
    "load_card_heights",
    "replacing",
]
