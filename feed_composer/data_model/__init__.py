"""Shared data model helpers."""

from feed_composer.data_model.base import StrictBaseModel, WireModel


__all__ = ["StrictBaseModel", "WireModel"]
