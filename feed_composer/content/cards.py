"""Display cards produced by the sequencer.

A card is one renderable grouping of scored items. The set of card kinds is
closed; the helpers in this module match over every variant.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from feed_composer.content.constants import (
    GROUP_CARD_HEIGHT,
    HEADLINE_PAIR_HEIGHT,
    HEADLINE_TEXT_HEIGHT,
    THUMBNAIL_ASPECT_RATIO,
)
from feed_composer.content.models import ScoredItem
from feed_composer.data_model import StrictBaseModel


class Axis(str, Enum):
    """Layout direction for grouped cards."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class SponsorCard:
    """A single sponsored item."""

    item: ScoredItem


@dataclass(frozen=True)
class DealsCard:
    """Up to three offer items displayed horizontally."""

    items: tuple[ScoredItem, ...]
    title: str


@dataclass(frozen=True)
class HeadlineCard:
    """A single image-bearing item displayed prominently."""

    item: ScoredItem


@dataclass(frozen=True)
class HeadlinePairCard:
    """Two image-bearing items displayed side by side with equal sizes."""

    first: ScoredItem
    second: ScoredItem


@dataclass(frozen=True)
class GroupCard:
    """Up to three items in a generic grouping."""

    items: tuple[ScoredItem, ...]
    title: str = ""
    axis: Axis = Axis.VERTICAL
    display_brand: bool = False


@dataclass(frozen=True)
class NumberedCard:
    """Up to three items from one publisher shown as a numbered list."""

    items: tuple[ScoredItem, ...]
    title: str = ""


Card = (
    SponsorCard | DealsCard | HeadlineCard | HeadlinePairCard | GroupCard | NumberedCard
)


class CardHeights(StrictBaseModel):
    """Presentation policy for estimated card heights."""

    thumbnail_aspect_ratio: float = THUMBNAIL_ASPECT_RATIO
    headline_text_height: float = HEADLINE_TEXT_HEIGHT
    headline_pair_height: float = HEADLINE_PAIR_HEIGHT
    group_height: float = GROUP_CARD_HEIGHT


_DEFAULT_HEIGHTS = CardHeights()


def card_items(card: Card) -> list[ScoredItem]:
    """Flatten every item a card references, in display order."""
    match card:
        case SponsorCard(item=item) | HeadlineCard(item=item):
            return [item]
        case HeadlinePairCard(first=first, second=second):
            return [first, second]
        case (
            DealsCard(items=items) | GroupCard(items=items) | NumberedCard(items=items)
        ):
            return list(items)
    raise TypeError(f"Unknown card type: {type(card).__name__}")


def estimated_height(
    card: Card,
    width: float,
    heights: CardHeights | None = None,
) -> float:
    """Estimate the rendered height of a card for a given width.

    Args:
        card: Card to measure.
        width: Width the card will be displayed with.
        heights: Height policy; defaults to ``CardHeights()``.

    Returns:
        Estimated height in points.
    """
    policy = heights or _DEFAULT_HEIGHTS
    match card:
        case SponsorCard():
            return width * policy.thumbnail_aspect_ratio
        case HeadlineCard():
            return width * policy.thumbnail_aspect_ratio + policy.headline_text_height
        case HeadlinePairCard():
            return policy.headline_pair_height
        case GroupCard() | NumberedCard() | DealsCard():
            return policy.group_height
    raise TypeError(f"Unknown card type: {type(card).__name__}")


def _replace_in(
    items: tuple[ScoredItem, ...], item: ScoredItem, replacement: ScoredItem
) -> tuple[ScoredItem, ...]:
    index = items.index(item)
    return items[:index] + (replacement,) + items[index + 1 :]


def replacing(card: Card, item: ScoredItem, replacement: ScoredItem) -> Card:
    """Create a card with one of its items swapped for a replacement.

    If ``item`` is not displayed by ``card``, the same card is returned.

    Args:
        card: Card to transform.
        item: Item to look for.
        replacement: Item to put in its place.

    Returns:
        New card value, or ``card`` itself when ``item`` is absent.
    """
    if item not in card_items(card):
        return card

    match card:
        case SponsorCard():
            return SponsorCard(replacement)
        case HeadlineCard():
            return HeadlineCard(replacement)
        case HeadlinePairCard(first=first):
            if first == item:
                return replace(card, first=replacement)
            return replace(card, second=replacement)
        case (
            DealsCard(items=items) | GroupCard(items=items) | NumberedCard(items=items)
        ):
            return replace(card, items=_replace_in(items, item, replacement))
    raise TypeError(f"Unknown card type: {type(card).__name__}")


def _item_to_dict(item: ScoredItem) -> dict[str, Any]:
    content = item.content
    return {
        "id": content.id,
        "title": content.title,
        "kind": content.kind.value,
        "url": content.url,
        "image_url": content.image_url,
        "category": content.category,
        "published_at": content.published_at.isoformat(),
        "publisher_id": item.source.id,
        "publisher_name": item.source.name,
        "source_enabled": item.source.enabled,
        "score": round(item.score, 6),
    }


def card_to_dict(card: Card) -> dict[str, Any]:
    """Serialize a card for JSON output.

    Args:
        card: Card to serialize.

    Returns:
        Dictionary with a ``type`` tag, the card's attributes, and its items.
    """
    data: dict[str, Any]
    match card:
        case SponsorCard():
            data = {"type": "sponsor"}
        case HeadlineCard():
            data = {"type": "headline"}
        case HeadlinePairCard():
            data = {"type": "headline_pair"}
        case DealsCard(title=title):
            data = {"type": "deals", "title": title}
        case GroupCard(title=title, axis=axis, display_brand=display_brand):
            data = {
                "type": "group",
                "title": title,
                "axis": axis.value,
                "display_brand": display_brand,
            }
        case NumberedCard(title=title):
            data = {"type": "numbered", "title": title}
        case _:
            raise TypeError(f"Unknown card type: {type(card).__name__}")
    data["items"] = [_item_to_dict(i) for i in card_items(card)]
    return data
