"""Collaborator interfaces consumed by the feed session."""

from typing import Protocol, runtime_checkable

from feed_composer.content.models import ContentItem, Source


@runtime_checkable
class FeedFetcher(Protocol):
    """Fetches publisher sources and content items.

    Implementations skip individually malformed records and raise
    ``FeedFetchError`` only when a whole batch cannot be obtained.
    """

    def fetch_sources(self) -> list[Source]:
        """Fetch all known sources."""
        ...

    def fetch_content(self) -> list[ContentItem]:
        """Fetch all current content items."""
        ...


@runtime_checkable
class EnablementStore(Protocol):
    """Persists user overrides of source enablement."""

    def load_overrides(self) -> dict[str, bool]:
        """Return the persisted enabled flag per publisher id."""
        ...

    def set_enabled(self, publisher_id: str, enabled: bool) -> None:
        """Persist the enabled flag for a publisher."""
        ...


@runtime_checkable
class RecentDomainsProvider(Protocol):
    """Supplies a snapshot of recently visited registrable domains."""

    def recent_domains(self, limit: int) -> list[str]:
        """Return domains from at most ``limit`` recent visits."""
        ...
