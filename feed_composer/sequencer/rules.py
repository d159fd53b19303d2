"""Composition grammar for the feed.

Rule elements form a small tree: leaf elements draw cards from the item
pools, and ``Repeating`` runs its children as a pass, possibly nested.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Sponsor:
    """Display one sponsored ``offer`` item."""


@dataclass(frozen=True)
class Deals:
    """Display up to three ``product`` items as a deals card."""


@dataclass(frozen=True)
class Headline:
    """Display an image-bearing article, or two side by side when paired."""

    paired: bool = False


@dataclass(frozen=True)
class CategoryGroup:
    """Display up to three articles sharing the first article's category."""


@dataclass(frozen=True)
class BrandedGroup:
    """Display up to three articles from the first article's source."""

    numbered: bool = False


@dataclass(frozen=True)
class Group:
    """Display the next articles regardless of category or source."""


@dataclass(frozen=True)
class Repeating:
    """Run ``elements`` as one pass, repeatedly.

    Attributes:
        elements: Child elements evaluated in order on every pass.
        times: Maximum number of passes; None repeats until articles run
            out or a pass yields no cards.
    """

    elements: tuple["RuleElement", ...]
    times: int | None = None


RuleElement = (
    Sponsor | Deals | Headline | CategoryGroup | BrandedGroup | Group | Repeating
)


DEFAULT_RULES: tuple[RuleElement, ...] = (
    Sponsor(),
    Headline(paired=False),
    Deals(),
    Repeating(
        (
            Repeating((Headline(paired=False),), times=2),
            Repeating((Headline(paired=True),), times=2),
            CategoryGroup(),
            Headline(paired=False),
            Deals(),
            Headline(paired=False),
            Headline(paired=True),
            BrandedGroup(numbered=True),
            Group(),
            Headline(paired=False),
            Headline(paired=True),
        )
    ),
)
