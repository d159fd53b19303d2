"""Structured logging setup for the CLI and feed sessions."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog


# Third-party loggers that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Configure structlog for feed composition.

    Logs go to stderr by default so that card JSON printed on stdout stays
    machine readable. Request logging from the HTTP client is capped at
    WARNING unless debug logging is requested.

    Args:
        level: Minimum level for feed events.
        output: Stream for log lines; defaults to the current stderr.
        json_format: Emit one JSON object per event instead of console text.
    """
    stream = output or sys.stderr
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=stream.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=level)
    client_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)


@contextmanager
def session_log_context(session_id: str) -> Iterator[None]:
    """Tag every event logged in this context with a feed session id.

    Collaborators called on the loading thread, such as the override store,
    log through their own loggers; their events carry the id too.

    Args:
        session_id: Feed session identifier.
    """
    with structlog.contextvars.bound_contextvars(session_id=session_id):
        yield
