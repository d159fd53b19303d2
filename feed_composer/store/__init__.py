"""Persistence and history collaborators for the feed session."""

from feed_composer.store.errors import StoreConnectionError, StoreError
from feed_composer.store.history import VisitHistory
from feed_composer.store.overrides import SourceOverrideStore


__all__ = [
    "SourceOverrideStore",
    "StoreConnectionError",
    "StoreError",
    "VisitHistory",
]
