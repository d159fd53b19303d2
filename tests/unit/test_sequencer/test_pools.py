"""Unit tests for sequencing item pools."""

from feed_composer.content.models import ContentKind
from feed_composer.sequencer.pools import ItemPools
from tests.helpers.factories import make_scored, make_source


def _ids(items: list) -> list[str]:
    return [item.content.id for item in items]


class TestFromItems:
    """Tests for partitioning items into pools."""

    def test_partitions_by_kind(self) -> None:
        """Offers, products, and articles land in their own pools."""
        pools = ItemPools.from_items(
            [
                make_scored("o", kind=ContentKind.OFFER),
                make_scored("p", kind=ContentKind.PRODUCT),
                make_scored("a", kind=ContentKind.ARTICLE),
            ]
        )
        assert _ids(pools.sponsors) == ["o"]
        assert _ids(pools.deals) == ["p"]
        assert _ids(pools.articles) == ["a"]
        assert pools.remaining == 3

    def test_skips_disabled_sources(self) -> None:
        """Items from disabled sources never enter the pools."""
        off = make_source("off", enabled=False)
        pools = ItemPools.from_items(
            [make_scored("a"), make_scored("b", source=off)]
        )
        assert _ids(pools.articles) == ["a"]

    def test_drops_repeated_content_ids(self) -> None:
        """Repeated content ids keep only their first occurrence."""
        pools = ItemPools.from_items(
            [make_scored("a1", 1.0), make_scored("a1", 1.5), make_scored("a2", 2.0)]
        )
        assert _ids(pools.articles) == ["a1", "a2"]
        assert pools.articles[0].score == 1.0

    def test_disabled_copy_does_not_shadow_enabled(self) -> None:
        """A skipped disabled copy leaves later enabled copies eligible."""
        off = make_source("off", enabled=False)
        pools = ItemPools.from_items(
            [make_scored("a", 1.0, source=off), make_scored("a", 2.0)]
        )
        assert _ids(pools.articles) == ["a"]
        assert pools.articles[0].source.enabled is True

    def test_input_not_modified(self) -> None:
        """Consuming pools leaves the caller's list intact."""
        items = [make_scored("a"), make_scored("b")]
        pools = ItemPools.from_items(items)
        pools.take_articles(2)
        assert len(items) == 2


class TestHeadlines:
    """Tests for headline selection."""

    def test_pop_headline_skips_imageless(self) -> None:
        """Headlines need an image."""
        pools = ItemPools(
            articles=[make_scored("t", image=False), make_scored("i", image=True)]
        )
        item = pools.pop_headline()
        assert item is not None
        assert item.content.id == "i"
        assert _ids(pools.articles) == ["t"]

    def test_pop_headline_none_available(self) -> None:
        """No image-bearing article yields None."""
        pools = ItemPools(articles=[make_scored("t", image=False)])
        assert pools.pop_headline() is None
        assert len(pools.articles) == 1

    def test_pop_pair_takes_first_two_with_images(self) -> None:
        """Pairs use the first two image-bearing articles in order."""
        pools = ItemPools(
            articles=[
                make_scored("a"),
                make_scored("t", image=False),
                make_scored("b"),
                make_scored("c"),
            ]
        )
        pair = pools.pop_headline_pair()
        assert pair is not None
        assert _ids(list(pair)) == ["a", "b"]
        assert _ids(pools.articles) == ["t", "c"]

    def test_pop_pair_needs_two(self) -> None:
        """With one image-bearing article the pool is left unchanged."""
        pools = ItemPools(articles=[make_scored("a"), make_scored("t", image=False)])
        assert pools.pop_headline_pair() is None
        assert _ids(pools.articles) == ["a", "t"]


class TestGroups:
    """Tests for grouped selections."""

    def test_take_deals_limit(self) -> None:
        """Deals are taken from the front up to the limit."""
        pools = ItemPools(
            deals=[make_scored(str(i), kind=ContentKind.PRODUCT) for i in range(5)]
        )
        assert _ids(pools.take_deals(3)) == ["0", "1", "2"]
        assert _ids(pools.deals) == ["3", "4"]

    def test_category_group_matches_first_category(self) -> None:
        """Category groups follow the first article's category."""
        pools = ItemPools(
            articles=[
                make_scored("a", category="Tech"),
                make_scored("b", category="Sports"),
                make_scored("c", category="Tech"),
            ]
        )
        group = pools.take_category_group(3)
        assert group is not None
        category, items = group
        assert category == "Tech"
        assert _ids(items) == ["a", "c"]
        assert _ids(pools.articles) == ["b"]

    def test_category_group_without_category(self) -> None:
        """A first article with no category yields nothing."""
        pools = ItemPools(articles=[make_scored("a"), make_scored("b", category="X")])
        assert pools.take_category_group(3) is None
        assert len(pools.articles) == 2

    def test_category_group_empty_pool(self) -> None:
        """An empty pool yields nothing."""
        assert ItemPools().take_category_group(3) is None

    def test_branded_group_matches_first_source(self) -> None:
        """Branded groups follow the first article's source."""
        one, two = make_source("one"), make_source("two")
        pools = ItemPools(
            articles=[
                make_scored("a", source=one),
                make_scored("b", source=two),
                make_scored("c", source=one),
                make_scored("d", source=one),
                make_scored("e", source=one),
            ]
        )
        assert _ids(pools.take_branded_group(3)) == ["a", "c", "d"]
        assert _ids(pools.articles) == ["b", "e"]

    def test_take_articles(self) -> None:
        """Plain groups take articles in order."""
        pools = ItemPools(articles=[make_scored("a"), make_scored("b")])
        assert _ids(pools.take_articles(3)) == ["a", "b"]
        assert pools.articles == []
