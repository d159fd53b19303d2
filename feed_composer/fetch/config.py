"""Configuration model for the HTTP fetch adapter."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feed_composer.fetch.constants import (
    DEFAULT_FEED_URL,
    DEFAULT_SOURCES_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)


class FetchConfig(BaseModel):
    """Configuration for fetching sources and feed content."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sources_url: Annotated[str, Field(min_length=1)] = DEFAULT_SOURCES_URL
    feed_url: Annotated[str, Field(min_length=1)] = DEFAULT_FEED_URL
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )

    @field_validator("sources_url", "feed_url")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        """Require http or https URLs."""
        if not v.startswith(("http://", "https://")):
            msg = f"URL must use http or https: {v}"
            raise ValueError(msg)
        return v
