"""Builders for sources, content items, and scored items."""

from datetime import datetime, timedelta

from feed_composer.content.models import ContentItem, ContentKind, ScoredItem, Source
from tests.helpers.time import FIXED_NOW


def make_source(
    source_id: str = "pub-1",
    name: str | None = None,
    enabled: bool = True,
    category: str | None = None,
) -> Source:
    """Create a test Source."""
    return Source(
        id=source_id,
        name=name or f"Publisher {source_id}",
        enabled=enabled,
        category=category,
    )


def make_content(  # noqa: PLR0913
    item_id: str = "item-1",
    publisher_id: str = "pub-1",
    kind: ContentKind = ContentKind.ARTICLE,
    published_at: datetime | None = None,
    image: bool = True,
    category: str | None = None,
    url: str | None = None,
) -> ContentItem:
    """Create a test ContentItem."""
    return ContentItem(
        id=item_id,
        publisher_id=publisher_id,
        kind=kind,
        published_at=published_at or FIXED_NOW - timedelta(hours=1),
        title=f"Title {item_id}",
        image_url=f"https://img.example.com/{item_id}.jpg" if image else None,
        category=category,
        url=url or f"https://news.example.com/{item_id}",
    )


def make_scored(  # noqa: PLR0913
    item_id: str,
    score: float = 0.0,
    source: Source | None = None,
    kind: ContentKind = ContentKind.ARTICLE,
    image: bool = True,
    category: str | None = None,
) -> ScoredItem:
    """Create a test ScoredItem."""
    source = source or make_source()
    return ScoredItem(
        content=make_content(
            item_id=item_id,
            publisher_id=source.id,
            kind=kind,
            image=image,
            category=category,
        ),
        source=source,
        score=score,
    )
