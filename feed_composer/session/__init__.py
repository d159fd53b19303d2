"""Feed session: load lifecycle, source list, and live source toggling."""

from feed_composer.session.errors import FeedErrorClass, FeedFetchError
from feed_composer.session.metrics import SessionMetrics
from feed_composer.session.protocols import (
    EnablementStore,
    FeedFetcher,
    RecentDomainsProvider,
)
from feed_composer.session.session import FeedSession, FeedSnapshot, SessionConfig
from feed_composer.session.state_machine import (
    FeedSessionStateMachine,
    FeedState,
    FeedStateError,
)


__all__ = [
    "EnablementStore",
    "FeedErrorClass",
    "FeedFetchError",
    "FeedFetcher",
    "FeedSession",
    "FeedSessionStateMachine",
    "FeedSnapshot",
    "FeedState",
    "FeedStateError",
    "RecentDomainsProvider",
    "SessionConfig",
    "SessionMetrics",
]
