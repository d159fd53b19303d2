"""Constants for the HTTP fetch adapter."""

DEFAULT_SOURCES_URL: str = "https://pcdn.brave.software/brave-today/sources.json"
DEFAULT_FEED_URL: str = "https://pcdn.brave.software/brave-today/feed.json"

DEFAULT_USER_AGENT: str = "feed-composer/0.1"
DEFAULT_TIMEOUT_SECONDS: float = 30.0

HTTP_STATUS_OK_MIN: int = 200
HTTP_STATUS_OK_MAX: int = 300
