"""Metrics collection for the sequencer module."""

from dataclasses import dataclass, field


@dataclass
class SequencerMetrics:
    """Metrics for card generation.

    Attributes:
        items_in: Number of pooled items offered to the sequencer.
        items_placed: Number of items placed into cards.
        cards_generated: Number of cards produced.
        cards_by_type: Card count per card type.
        duration_ms: Time spent generating cards.
    """

    items_in: int = 0
    items_placed: int = 0
    cards_generated: int = 0
    cards_by_type: dict[str, int] = field(default_factory=dict)
    duration_ms: float = 0.0

    def record_card(self, card_type: str, item_count: int) -> None:
        """Record a generated card.

        Args:
            card_type: Card type name.
            item_count: Number of items in the card.
        """
        self.cards_generated += 1
        self.items_placed += item_count
        self.cards_by_type[card_type] = self.cards_by_type.get(card_type, 0) + 1

    @property
    def items_unplaced(self) -> int:
        """Items left in the pools after generation."""
        return max(self.items_in - self.items_placed, 0)

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "items_in": self.items_in,
            "items_placed": self.items_placed,
            "items_unplaced": self.items_unplaced,
            "cards_generated": self.cards_generated,
            "cards_by_type": dict(self.cards_by_type),
            "duration_ms": self.duration_ms,
        }
