"""Observability module for structured logging."""

from feed_composer.observability.logging import configure_logging, session_log_context


__all__ = [
    "configure_logging",
    "session_log_context",
]
