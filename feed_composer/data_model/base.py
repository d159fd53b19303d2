"""Shared Pydantic base models."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class WireModel(BaseModel):
    """Immutable base for records decoded from remote JSON.

    Unknown keys are ignored since upstream payloads carry fields the
    composer has no use for.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)
