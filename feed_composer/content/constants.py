"""Constants for the content model."""

# Timestamp format used by the remote feed and sources payloads (UTC).
WIRE_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# Maximum number of items shown in any multi-item card.
MAX_GROUP_ITEMS: int = 3

# Fixed heights for cards whose size does not depend on width.
HEADLINE_PAIR_HEIGHT: float = 300.0
GROUP_CARD_HEIGHT: float = 400.0

# Thumbnail aspect ratio (height / width) for sponsor and headline images.
THUMBNAIL_ASPECT_RATIO: float = 9 / 16

# Height of the title, brand, and date block under a headline image.
HEADLINE_TEXT_HEIGHT: float = 120.0

DEALS_TITLE: str = "Deals"
