"""Tolerant decoding of sources and feed payloads.

Each record is validated on its own; a record that fails validation is
skipped rather than failing the whole payload.
"""

import json
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from feed_composer.content.models import ContentItem, Source
from feed_composer.session.errors import FeedErrorClass, FeedFetchError


logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def _load_records(payload: bytes | str, url: str | None) -> list[Any]:
    """Parse a payload that must be a JSON list.

    Raises:
        FeedFetchError: If the payload is not JSON or not a list.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FeedFetchError(
            error_class=FeedErrorClass.DECODE,
            message=f"Invalid JSON payload: {e}",
            url=url,
        ) from e

    if not isinstance(data, list):
        raise FeedFetchError(
            error_class=FeedErrorClass.DECODE,
            message=f"Expected a JSON list, got {type(data).__name__}",
            url=url,
        )
    return data


def _decode_each(
    records: list[Any],
    model: type[ModelT],
    url: str | None,
) -> tuple[list[ModelT], int]:
    decoded: list[ModelT] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            decoded.append(model.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.debug(
                "record_skipped",
                component="fetch",
                model=model.__name__,
                index=index,
                url=url,
                errors=e.error_count(),
            )
    return decoded, skipped


def decode_sources(
    payload: bytes | str, url: str | None = None
) -> tuple[list[Source], int]:
    """Decode a sources payload.

    Args:
        payload: Raw JSON list of source records.
        url: Origin URL for error reporting.

    Returns:
        Tuple of (sources, skipped record count).

    Raises:
        FeedFetchError: If the payload as a whole is malformed.
    """
    return _decode_each(_load_records(payload, url), Source, url)


def decode_content(
    payload: bytes | str, url: str | None = None
) -> tuple[list[ContentItem], int]:
    """Decode a feed payload.

    Args:
        payload: Raw JSON list of content records.
        url: Origin URL for error reporting.

    Returns:
        Tuple of (content items, skipped record count).

    Raises:
        FeedFetchError: If the payload as a whole is malformed.
    """
    return _decode_each(_load_records(payload, url), ContentItem, url)
