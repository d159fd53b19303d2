"""HTTP fetcher for sources and feed content."""

import time

import httpx
import structlog

from feed_composer.content.models import ContentItem, Source
from feed_composer.fetch.config import FetchConfig
from feed_composer.fetch.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from feed_composer.fetch.decode import decode_content, decode_sources
from feed_composer.session.errors import FeedErrorClass, FeedFetchError


logger = structlog.get_logger()


class HttpFeedFetcher:
    """Fetches the sources and feed JSON documents over HTTP.

    Transport, status, and top-level JSON failures raise ``FeedFetchError``.
    Malformed individual records are skipped. Retrying is left to the caller,
    which may simply load again.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        session_id: str = "default",
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Fetch configuration.
            transport: Optional httpx transport (used to stub the network).
            session_id: Session identifier for logging.
        """
        self._config = config or FetchConfig()
        self._transport = transport
        self._log = logger.bind(component="fetch", session_id=session_id)

    def fetch_sources(self) -> list[Source]:
        """Fetch and decode all sources.

        Returns:
            Decoded sources.

        Raises:
            FeedFetchError: If the document cannot be fetched or parsed.
        """
        url = self._config.sources_url
        sources, skipped = decode_sources(self._get(url), url)
        self._log.info("sources_decoded", count=len(sources), skipped=skipped)
        return sources

    def fetch_content(self) -> list[ContentItem]:
        """Fetch and decode all feed content items.

        Returns:
            Decoded content items.

        Raises:
            FeedFetchError: If the document cannot be fetched or parsed.
        """
        url = self._config.feed_url
        items, skipped = decode_content(self._get(url), url)
        self._log.info("content_decoded", count=len(items), skipped=skipped)
        return items

    def _get(self, url: str) -> bytes:
        """Execute a single GET request.

        Args:
            url: URL to fetch.

        Returns:
            Response body.

        Raises:
            FeedFetchError: On transport errors or non-2xx status.
        """
        start_ns = time.perf_counter_ns()
        log = self._log.bind(url=url)
        headers = {"User-Agent": self._config.user_agent, "Accept": "application/json"}

        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise FeedFetchError(
                error_class=FeedErrorClass.NETWORK_TIMEOUT,
                message=f"Request timed out: {e}",
                url=url,
            ) from e
        except httpx.ConnectError as e:
            raise FeedFetchError(
                error_class=FeedErrorClass.CONNECTION_ERROR,
                message=f"Connection failed: {e}",
                url=url,
            ) from e
        except httpx.HTTPError as e:
            raise FeedFetchError(
                error_class=FeedErrorClass.UNKNOWN,
                message=f"Unexpected error: {e}",
                url=url,
            ) from e

        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        log.info(
            "fetch_complete",
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )

        if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
            raise FeedFetchError(
                error_class=FeedErrorClass.HTTP_STATUS,
                message=f"Unexpected status ({response.status_code})",
                url=url,
                status_code=response.status_code,
            )
        return response.content
