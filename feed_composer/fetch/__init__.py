"""HTTP fetch adapter for sources and feed content."""

from feed_composer.fetch.client import HttpFeedFetcher
from feed_composer.fetch.config import FetchConfig
from feed_composer.fetch.decode import decode_content, decode_sources


__all__ = [
    "FetchConfig",
    "HttpFeedFetcher",
    "decode_content",
    "decode_sources",
]
