"""Command line interface for the feed composer."""

from feed_composer.cli.main import cli


__all__ = ["cli"]
