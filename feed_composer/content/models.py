"""Value types for publishers, content items, and scored items."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator

from feed_composer.content.constants import WIRE_DATE_FORMAT
from feed_composer.data_model import WireModel


class ContentKind(str, Enum):
    """Kind of a content item.

    - article: Regular editorial content, sequenced into headlines and groups
    - offer: Sponsored content shown in sponsor cards
    - product: Deals shown in horizontal deal cards
    """

    ARTICLE = "article"
    OFFER = "offer"
    PRODUCT = "product"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Source(WireModel):
    """A content publisher with a user-controlled enabled flag.

    Identity is the publisher identifier: two sources with the same ``id``
    compare equal even if their names or enabled flags differ.
    """

    id: Annotated[
        str,
        Field(
            min_length=1,
            validation_alias=AliasChoices("id", "publisher_id"),
            description="Stable publisher identifier",
        ),
    ]
    name: Annotated[
        str,
        Field(
            validation_alias=AliasChoices("name", "publisher_name"),
            description="Display name",
        ),
    ]
    enabled: bool = True
    category: str | None = None
    site_url: str | None = None

    normalize_blank_strings = field_validator("category", "site_url", mode="before")(
        _blank_to_none
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Source):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_enabled(self, enabled: bool) -> "Source":
        """Return a copy of this source with the enabled flag changed."""
        return self.model_copy(update={"enabled": enabled})


class ContentItem(WireModel):
    """A single piece of fetched content. Immutable once decoded."""

    id: Annotated[
        str,
        Field(min_length=1, validation_alias=AliasChoices("id", "url_hash")),
    ]
    publisher_id: Annotated[str, Field(min_length=1)]
    kind: Annotated[
        ContentKind, Field(validation_alias=AliasChoices("kind", "content_type"))
    ]
    published_at: Annotated[
        datetime,
        Field(validation_alias=AliasChoices("published_at", "publish_time")),
    ]
    title: str = ""
    description: str | None = None
    image_url: Annotated[
        str | None, Field(validation_alias=AliasChoices("image_url", "img"))
    ] = None
    category: str | None = None
    url: str | None = None
    publisher_name: str | None = None

    normalize_blank_strings = field_validator(
        "description", "image_url", "category", "url", "publisher_name", mode="before"
    )(_blank_to_none)

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, v: Any) -> Any:
        """Accept content kinds regardless of case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("published_at", mode="before")
    @classmethod
    def parse_published_at(cls, v: Any) -> Any:
        """Parse the feed's space-separated UTC timestamp format."""
        if isinstance(v, str):
            try:
                return datetime.strptime(v, WIRE_DATE_FORMAT).replace(tzinfo=UTC)
            except ValueError:
                return v
        return v

    @field_validator("published_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


@dataclass(frozen=True)
class ScoredItem:
    """A content item paired with its resolved source and ranking score.

    Lower scores are more relevant; items sort ascending by score.

    Attributes:
        content: The underlying content item.
        source: Source resolved from ``content.publisher_id``.
        score: Computed ranking score.
    """

    content: ContentItem
    source: Source
    score: float

    def __lt__(self, other: "ScoredItem") -> bool:
        if not isinstance(other, ScoredItem):
            return NotImplemented
        return self.score < other.score

    @property
    def has_image(self) -> bool:
        """Whether the item can be displayed as a headline."""
        return self.content.image_url is not None

    def with_source(self, source: Source) -> "ScoredItem":
        """Return a copy of this item carrying a different source value."""
        return replace(self, source=source)
