"""Unit tests for the source override store."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from feed_composer.session.protocols import EnablementStore
from feed_composer.store.errors import StoreConnectionError
from feed_composer.store.overrides import SourceOverrideStore


@pytest.fixture
def store() -> Iterator[SourceOverrideStore]:
    with SourceOverrideStore(":memory:") as s:
        yield s


class TestSourceOverrideStore:
    """Tests for SourceOverrideStore."""

    def test_satisfies_protocol(self, store: SourceOverrideStore) -> None:
        """The store can back a feed session."""
        assert isinstance(store, EnablementStore)

    def test_empty(self, store: SourceOverrideStore) -> None:
        """A new store has no overrides."""
        assert store.load_overrides() == {}

    def test_set_and_load(self, store: SourceOverrideStore) -> None:
        """Saved flags are loaded back."""
        store.set_enabled("a", False)
        store.set_enabled("b", True)
        assert store.load_overrides() == {"a": False, "b": True}

    def test_upsert(self, store: SourceOverrideStore) -> None:
        """Saving again replaces the flag."""
        store.set_enabled("a", False)
        store.set_enabled("a", True)
        assert store.load_overrides() == {"a": True}

    def test_clear(self, store: SourceOverrideStore) -> None:
        """Clearing removes the override."""
        store.set_enabled("a", False)
        store.clear("a")
        assert store.load_overrides() == {}

    def test_requires_connection(self) -> None:
        """Operations fail before connecting."""
        store = SourceOverrideStore(":memory:")
        assert not store.is_connected
        with pytest.raises(StoreConnectionError):
            store.load_overrides()

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        """File-backed stores survive reopening."""
        db_path = tmp_path / "nested" / "feed.sqlite"
        with SourceOverrideStore(db_path) as first:
            first.set_enabled("a", False)
        with SourceOverrideStore(db_path) as second:
            assert second.load_overrides() == {"a": False}
