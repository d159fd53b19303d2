"""Metrics collection for the feed session."""

from dataclasses import dataclass


@dataclass
class SessionMetrics:
    """Metrics for feed session operations.

    Attributes:
        loads_started: Loads that reached LOADING.
        loads_succeeded: Loads that reached SUCCESS.
        loads_failed: Loads that reached FAILURE.
        loads_skipped: Load calls ignored because a load was in flight or done.
        sources_fetched: Sources in the last successful fetch.
        content_fetched: Content items in the last successful fetch.
        toggles_applied: Source toggles applied to the feed.
        toggles_ignored: Source toggles ignored (wrong state or unknown source).
        cards_relabeled: Cards rewritten by source toggles.
        last_load_duration_ms: Duration of the last completed load.
    """

    loads_started: int = 0
    loads_succeeded: int = 0
    loads_failed: int = 0
    loads_skipped: int = 0
    sources_fetched: int = 0
    content_fetched: int = 0
    toggles_applied: int = 0
    toggles_ignored: int = 0
    cards_relabeled: int = 0
    last_load_duration_ms: float = 0.0

    def record_fetch(self, sources: int, content: int) -> None:
        """Record the sizes of a successful fetch.

        Args:
            sources: Number of sources fetched.
            content: Number of content items fetched.
        """
        self.sources_fetched = sources
        self.content_fetched = content

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "loads_started": self.loads_started,
            "loads_succeeded": self.loads_succeeded,
            "loads_failed": self.loads_failed,
            "loads_skipped": self.loads_skipped,
            "sources_fetched": self.sources_fetched,
            "content_fetched": self.content_fetched,
            "toggles_applied": self.toggles_applied,
            "toggles_ignored": self.toggles_ignored,
            "cards_relabeled": self.cards_relabeled,
            "last_load_duration_ms": self.last_load_duration_ms,
        }
