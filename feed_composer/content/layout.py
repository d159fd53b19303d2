"""Loading of card height policy from YAML."""

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from feed_composer.content.cards import CardHeights


logger = structlog.get_logger()


class LayoutConfigError(Exception):
    """Raised when a layout file cannot be parsed or validated."""

    def __init__(self, file_path: str, message: str) -> None:
        """Initialize the error.

        Args:
            file_path: Path to the layout file.
            message: Description of the failure.
        """
        self.file_path = file_path
        super().__init__(f"Invalid layout config {file_path}: {message}")


def load_card_heights(path: Path | None) -> CardHeights:
    """Load card height policy from a YAML file.

    The file holds a mapping under a ``card_heights`` key; missing keys keep
    their defaults. A ``None`` path yields the default policy.

    Args:
        path: Path to the YAML layout file.

    Returns:
        Validated CardHeights.

    Raises:
        LayoutConfigError: If the file is unreadable or fails validation.
    """
    if path is None:
        return CardHeights()

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise LayoutConfigError(str(path), str(e)) from e

    if not isinstance(parsed, dict):
        raise LayoutConfigError(str(path), "top level must be a mapping")

    try:
        heights = CardHeights.model_validate(parsed.get("card_heights") or {})
    except ValidationError as e:
        message = f"{e.error_count()} validation errors"
        raise LayoutConfigError(str(path), message) from e

    logger.info("layout_loaded", component="content", path=str(path))
    return heights
