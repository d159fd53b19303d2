"""Greedy card sequencing over the composition grammar."""

import time
from collections.abc import Sequence

import structlog

from feed_composer.content.cards import (
    Axis,
    Card,
    DealsCard,
    GroupCard,
    HeadlineCard,
    HeadlinePairCard,
    NumberedCard,
    SponsorCard,
    card_items,
)
from feed_composer.content.constants import DEALS_TITLE, MAX_GROUP_ITEMS
from feed_composer.content.models import ScoredItem
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


logger = structlog.get_logger()


def _repeat(element: Repeating, pools: ItemPools) -> list[Card]:
    cards: list[Card] = []
    passes = 0
    while True:
        pass_cards: list[Card] = []
        for child in element.elements:
            pass_cards.extend(evaluate(child, pools))
        if not pass_cards:
            # Nothing could be filled, further passes would not either
            break
        cards.extend(pass_cards)
        passes += 1
        if not pools.articles:
            break
        if element.times is not None and passes >= element.times:
            break
    return cards


def evaluate(element: RuleElement, pools: ItemPools) -> list[Card]:  # noqa: PLR0911
    """Evaluate one rule element against the pools.

    Items placed into returned cards are removed from ``pools``. An element
    whose pool cannot satisfy it yields no cards and leaves the pools as-is.

    Args:
        element: Rule element to evaluate.
        pools: Pools to draw from; mutated in place.

    Returns:
        Cards produced, in order.
    """
    match element:
        case Sponsor():
            item = pools.pop_sponsor()
            return [SponsorCard(item)] if item is not None else []

        case Deals():
            deals = pools.take_deals(MAX_GROUP_ITEMS)
            return [DealsCard(tuple(deals), title=DEALS_TITLE)] if deals else []

        case Headline(paired=False):
            item = pools.pop_headline()
            return [HeadlineCard(item)] if item is not None else []

        case Headline(paired=True):
            pair = pools.pop_headline_pair()
            return [HeadlinePairCard(*pair)] if pair is not None else []

        case CategoryGroup():
            group = pools.take_category_group(MAX_GROUP_ITEMS)
            if group is None:
                return []
            category, items = group
            return [GroupCard(tuple(items), title=category, axis=Axis.VERTICAL)]

        case BrandedGroup(numbered=numbered):
            items = pools.take_branded_group(MAX_GROUP_ITEMS)
            if not items:
                return []
            if numbered:
                return [NumberedCard(tuple(items), title=items[0].source.name)]
            return [GroupCard(tuple(items), axis=Axis.VERTICAL, display_brand=True)]

        case Group():
            items = pools.take_articles(MAX_GROUP_ITEMS)
            return [GroupCard(tuple(items), axis=Axis.VERTICAL)] if items else []

        case Repeating():
            return _repeat(element, pools)

    raise TypeError(f"Unknown rule element: {type(element).__name__}")


class CardSequencer:
    """Arranges scored items into cards following a fixed grammar.

    The input must already be sorted by priority (ascending score). Pools are
    rebuilt on every call, so the sequencer holds no state between calls
    besides its metrics.
    """

    def __init__(
        self,
        rules: Sequence[RuleElement] = DEFAULT_RULES,
        session_id: str = "pure",
        metrics: SequencerMetrics | None = None,
    ) -> None:
        """Initialize the sequencer.

        Args:
            rules: Top-level rule elements, evaluated in order.
            session_id: Session identifier for logging.
            metrics: Optional metrics instance.
        """
        self._rules = tuple(rules)
        self._metrics = metrics or SequencerMetrics()
        self._log = logger.bind(component="sequencer", session_id=session_id)

    @property
    def metrics(self) -> SequencerMetrics:
        """Get the sequencer metrics."""
        return self._metrics

    def generate(self, items: Sequence[ScoredItem]) -> list[Card]:
        """Generate cards from sorted items.

        Args:
            items: Scored items sorted ascending by score.

        Returns:
            Cards in rule-evaluation order.
        """
        start = time.perf_counter()
        pools = ItemPools.from_items(items)
        self._metrics.items_in += pools.remaining

        cards: list[Card] = []
        for rule in self._rules:
            cards.extend(evaluate(rule, pools))

        for card in cards:
            self._metrics.record_card(type(card).__name__, len(card_items(card)))
        duration_ms = (time.perf_counter() - start) * 1000
        self._metrics.duration_ms += duration_ms

        self._log.info(
            "cards_generated",
            items_in=len(items),
            cards=len(cards),
            sponsors_left=len(pools.sponsors),
            deals_left=len(pools.deals),
            articles_left=len(pools.articles),
            duration_ms=round(duration_ms, 2),
        )
        return cards


def generate_cards(
    items: Sequence[ScoredItem],
    rules: Sequence[RuleElement] = DEFAULT_RULES,
) -> list[Card]:
    """Pure function API for card generation.

    Args:
        items: Scored items sorted ascending by score.
        rules: Top-level rule elements.

    Returns:
        Generated cards.
    """
    return CardSequencer(rules=rules).generate(items)
