"""Working pools of not-yet-placed items consumed during sequencing."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from feed_composer.content.models import ContentKind, ScoredItem


def _take_matching(
    pool: list[ScoredItem],
    predicate: Callable[[ScoredItem], bool],
    limit: int,
) -> list[ScoredItem]:
    """Remove and return up to ``limit`` items matching ``predicate``."""
    indices = [i for i, item in enumerate(pool) if predicate(item)][:limit]
    taken = [pool[i] for i in indices]
    for i in reversed(indices):
        del pool[i]
    return taken


@dataclass
class ItemPools:
    """Ordered pools of items from enabled sources, split by content kind.

    Earlier items have priority. Every ``take_*``/``pop_*`` method removes
    what it returns, so an item is handed out at most once.

    Attributes:
        sponsors: ``offer`` items.
        deals: ``product`` items.
        articles: ``article`` items.
    """

    sponsors: list[ScoredItem] = field(default_factory=list)
    deals: list[ScoredItem] = field(default_factory=list)
    articles: list[ScoredItem] = field(default_factory=list)

    @classmethod
    def from_items(cls, items: Iterable[ScoredItem]) -> "ItemPools":
        """Partition sorted items into pools, skipping disabled sources.

        Items repeating an earlier content id are dropped, so the first
        (best-scored) occurrence wins.

        Args:
            items: Items sorted by priority.

        Returns:
            Fresh pools; the input is not modified.
        """
        seen: set[str] = set()
        enabled: list[ScoredItem] = []
        for item in items:
            if not item.source.enabled or item.content.id in seen:
                continue
            seen.add(item.content.id)
            enabled.append(item)
        return cls(
            sponsors=[i for i in enabled if i.content.kind == ContentKind.OFFER],
            deals=[i for i in enabled if i.content.kind == ContentKind.PRODUCT],
            articles=[i for i in enabled if i.content.kind == ContentKind.ARTICLE],
        )

    @property
    def remaining(self) -> int:
        """Total number of items not yet placed."""
        return len(self.sponsors) + len(self.deals) + len(self.articles)

    def pop_sponsor(self) -> ScoredItem | None:
        """Remove and return the first sponsor item."""
        if not self.sponsors:
            return None
        return self.sponsors.pop(0)

    def take_deals(self, limit: int) -> list[ScoredItem]:
        """Remove and return up to ``limit`` deal items from the front."""
        taken = self.deals[:limit]
        del self.deals[:limit]
        return taken

    def pop_headline(self) -> ScoredItem | None:
        """Remove and return the first image-bearing article."""
        taken = _take_matching(self.articles, lambda item: item.has_image, 1)
        return taken[0] if taken else None

    def pop_headline_pair(self) -> tuple[ScoredItem, ScoredItem] | None:
        """Remove and return the first two image-bearing articles.

        The pool is left unchanged when fewer than two are available.
        """
        if sum(1 for item in self.articles if item.has_image) < 2:  # noqa: PLR2004
            return None
        first, second = _take_matching(self.articles, lambda item: item.has_image, 2)
        return first, second

    def take_category_group(self, limit: int) -> tuple[str, list[ScoredItem]] | None:
        """Remove up to ``limit`` articles sharing the first article's category.

        Returns:
            Tuple of (category, items), or None when the pool is empty or the
            first article has no category.
        """
        if not self.articles:
            return None
        category = self.articles[0].content.category
        if category is None:
            return None
        items = _take_matching(
            self.articles, lambda item: item.content.category == category, limit
        )
        return category, items

    def take_branded_group(self, limit: int) -> list[ScoredItem]:
        """Remove up to ``limit`` articles from the first article's source."""
        if not self.articles:
            return []
        source = self.articles[0].source
        return _take_matching(self.articles, lambda item: item.source == source, limit)

    def take_articles(self, limit: int) -> list[ScoredItem]:
        """Remove and return up to ``limit`` articles from the front."""
        taken = self.articles[:limit]
        del self.articles[:limit]
        return taken
