"""Unit tests for sources and feed payload decoding."""

import json

import pytest

from feed_composer.content.models import ContentKind
from feed_composer.fetch.decode import decode_content, decode_sources
from feed_composer.session.errors import FeedErrorClass, FeedFetchError


FEED_RECORD = {
    "url_hash": "abc123",
    "publisher_id": "pub-1",
    "publisher_name": "Daily",
    "content_type": "article",
    "publish_time": "2021-03-01 10:30:00",
    "title": "Hello",
    "url": "https://daily.example.com/hello",
    "img": "https://daily.example.com/hello.jpg",
    "category": "Top News",
    "score": 12.5,
}


class TestDecodeSources:
    """Tests for decode_sources."""

    def test_decodes_records(self) -> None:
        """Source records decode with wire field names."""
        payload = json.dumps(
            [
                {"publisher_id": "a", "publisher_name": "A", "enabled": True},
                {"publisher_id": "b", "publisher_name": "B", "enabled": False},
            ]
        )
        sources, skipped = decode_sources(payload)
        assert skipped == 0
        assert [(s.id, s.enabled) for s in sources] == [("a", True), ("b", False)]

    def test_skips_malformed_records(self) -> None:
        """Invalid records are skipped and counted."""
        payload = json.dumps(
            [
                {"publisher_id": "a", "publisher_name": "A"},
                {"publisher_name": "no id"},
                "not an object",
            ]
        )
        sources, skipped = decode_sources(payload)
        assert [s.id for s in sources] == ["a"]
        assert skipped == 2

    def test_accepts_bytes(self) -> None:
        """Raw response bytes are accepted."""
        sources, _ = decode_sources(b'[{"publisher_id": "a", "publisher_name": "A"}]')
        assert sources[0].name == "A"

    @pytest.mark.parametrize("payload", ["{not json", '{"sources": []}', "42"])
    def test_malformed_payload(self, payload: str) -> None:
        """Payloads that are not a JSON list fail as a whole."""
        with pytest.raises(FeedFetchError) as exc_info:
            decode_sources(payload, url="https://x.example.com/sources.json")
        assert exc_info.value.error_class == FeedErrorClass.DECODE
        assert exc_info.value.url == "https://x.example.com/sources.json"


class TestDecodeContent:
    """Tests for decode_content."""

    def test_decodes_feed_record(self) -> None:
        """Feed records decode with wire field names."""
        items, skipped = decode_content(json.dumps([FEED_RECORD]))
        assert skipped == 0
        item = items[0]
        assert item.id == "abc123"
        assert item.kind == ContentKind.ARTICLE
        assert item.published_at.hour == 10
        assert item.image_url == "https://daily.example.com/hello.jpg"

    def test_skips_unknown_kind(self) -> None:
        """Records with an unknown content type are skipped."""
        video = {**FEED_RECORD, "url_hash": "v", "content_type": "video"}
        items, skipped = decode_content(json.dumps([FEED_RECORD, video]))
        assert [i.id for i in items] == ["abc123"]
        assert skipped == 1

    def test_empty_list(self) -> None:
        """An empty list decodes to nothing."""
        assert decode_content("[]") == ([], 0)
