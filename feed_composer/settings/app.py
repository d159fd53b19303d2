"""Application settings powered by Pydantic BaseSettings."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feed_composer.fetch.config import FetchConfig
from feed_composer.fetch.constants import (
    DEFAULT_FEED_URL,
    DEFAULT_SOURCES_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from feed_composer.scorer.constants import DEFAULT_HISTORY_LIMIT
from feed_composer.session.session import SessionConfig


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FEED_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sources_url: str = DEFAULT_SOURCES_URL
    feed_url: str = DEFAULT_FEED_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=1.0)
    state_path: Path = Path("state/feed.sqlite")
    layout_path: Path | None = None
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=0)
    json_logs: bool = False
    log_level: str = "INFO"

    def fetch_config(self) -> FetchConfig:
        """Build the HTTP fetch configuration."""
        return FetchConfig(
            sources_url=self.sources_url,
            feed_url=self.feed_url,
            user_agent=self.user_agent,
            timeout_seconds=self.request_timeout_seconds,
        )

    def session_config(self) -> SessionConfig:
        """Build the feed session configuration."""
        return SessionConfig(history_limit=self.history_limit)

    def logging_level(self) -> int:
        """Resolve ``log_level`` to a logging module level."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
