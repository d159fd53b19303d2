"""Unit tests for content value types."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from feed_composer.content.models import ContentItem, ContentKind, ScoredItem, Source
from tests.helpers.factories import make_content, make_scored, make_source


class TestSource:
    """Tests for Source identity and mutation."""

    def test_equality_by_id(self) -> None:
        """Sources with the same id are equal regardless of other fields."""
        a = Source(id="pub", name="A", enabled=True)
        b = Source(id="pub", name="B", enabled=False)
        assert a == b
        assert hash(a) == hash(b)

    def test_different_ids_not_equal(self) -> None:
        """Sources with different ids are not equal."""
        assert make_source("a") != make_source("b")

    def test_with_enabled_returns_copy(self) -> None:
        """with_enabled leaves the original untouched."""
        source = make_source(enabled=True)
        disabled = source.with_enabled(False)
        assert source.enabled is True
        assert disabled.enabled is False
        assert disabled.name == source.name

    def test_frozen(self) -> None:
        """Sources cannot be mutated in place."""
        source = make_source()
        with pytest.raises(ValidationError):
            source.enabled = False  # type: ignore[misc]

    def test_decodes_wire_names(self) -> None:
        """publisher_id/publisher_name map onto id/name."""
        source = Source.model_validate(
            {
                "publisher_id": "abc",
                "publisher_name": "ABC News",
                "category": "",
                "unknown": 1,
            }
        )
        assert source.id == "abc"
        assert source.name == "ABC News"
        assert source.enabled is True
        assert source.category is None

    def test_missing_id_rejected(self) -> None:
        """A source without an id is invalid."""
        with pytest.raises(ValidationError):
            Source.model_validate({"publisher_name": "No Id"})


class TestContentItem:
    """Tests for ContentItem decoding."""

    def _record(self, **overrides: object) -> dict[str, object]:
        record: dict[str, object] = {
            "url_hash": "h1",
            "publisher_id": "pub",
            "content_type": "article",
            "publish_time": "2021-03-01 10:30:00",
            "title": "Hello",
            "img": "https://img.example.com/a.jpg",
            "url": "https://www.example.com/a",
        }
        record.update(overrides)
        return record

    def test_decodes_wire_record(self) -> None:
        """Wire field names are accepted."""
        item = ContentItem.model_validate(self._record())
        assert item.id == "h1"
        assert item.kind == ContentKind.ARTICLE
        assert item.image_url == "https://img.example.com/a.jpg"
        assert item.published_at == datetime(2021, 3, 1, 10, 30, tzinfo=UTC)

    def test_blank_image_is_none(self) -> None:
        """An empty image string means no image."""
        item = ContentItem.model_validate(self._record(img=""))
        assert item.image_url is None

    def test_kind_case_insensitive(self) -> None:
        """Content types are matched case-insensitively."""
        item = ContentItem.model_validate(self._record(content_type="Product"))
        assert item.kind == ContentKind.PRODUCT

    def test_unknown_kind_rejected(self) -> None:
        """Unknown content types fail validation."""
        with pytest.raises(ValidationError):
            ContentItem.model_validate(self._record(content_type="video"))

    def test_iso_timestamp_accepted(self) -> None:
        """ISO timestamps are parsed too."""
        item = ContentItem.model_validate(
            self._record(publish_time="2021-03-01T10:30:00+00:00")
        )
        assert item.published_at == datetime(2021, 3, 1, 10, 30, tzinfo=UTC)

    def test_naive_datetime_assumed_utc(self) -> None:
        """Naive datetimes are treated as UTC."""
        item = make_content(published_at=datetime(2021, 1, 1, 0, 0))
        assert item.published_at.tzinfo is UTC

    def test_invalid_timestamp_rejected(self) -> None:
        """Unparseable timestamps fail validation."""
        with pytest.raises(ValidationError):
            ContentItem.model_validate(self._record(publish_time="yesterday"))


class TestScoredItem:
    """Tests for ScoredItem ordering and helpers."""

    def test_sorts_ascending_by_score(self) -> None:
        """Lower scores sort first."""
        items = [make_scored("a", 3.0), make_scored("b", -1.0), make_scored("c", 1.0)]
        assert [i.content.id for i in sorted(items)] == ["b", "c", "a"]

    def test_has_image(self) -> None:
        """has_image reflects the image URL."""
        assert make_scored("a", image=True).has_image
        assert not make_scored("b", image=False).has_image

    def test_with_source_keeps_content_and_score(self) -> None:
        """with_source swaps only the source."""
        item = make_scored("a", 2.5, source=make_source("pub", enabled=True))
        relabeled = item.with_source(item.source.with_enabled(False))
        assert relabeled.content is item.content
        assert relabeled.score == 2.5
        assert relabeled.source.enabled is False
        assert isinstance(relabeled, ScoredItem)
