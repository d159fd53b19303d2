"""Error types surfaced by feed loading."""

from enum import Enum


class FeedErrorClass(str, Enum):
    """Classification of batch-level fetch failures.

    - NETWORK_TIMEOUT: Request timed out
    - CONNECTION_ERROR: Could not establish connection
    - HTTP_STATUS: Server answered with a non-2xx status
    - DECODE: Payload was not a JSON list of records
    - UNKNOWN: Unclassified error
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    DECODE = "DECODE"
    UNKNOWN = "UNKNOWN"


class FeedFetchError(Exception):
    """Raised when sources or content cannot be fetched as a whole.

    Individual malformed records never raise this; they are skipped.
    """

    def __init__(
        self,
        error_class: FeedErrorClass,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the fetch error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            url: URL that was being fetched.
            status_code: HTTP status code if available.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.url = url
        self.status_code = status_code

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "url": self.url,
            "status_code": self.status_code,
        }
