"""Tests for category grouping."""

from datetime import datetime, timedelta, timezone

from devops_digest.digest.classifier import group_by_category
from devops_digest.news.models import Category, NewsItem

BASE_TIME = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_item(title: str, category: str | None = None, hours_ago: int = 0) -> NewsItem:
    return NewsItem(
        title=title,
        url=f"https://example.com/{title.lower().replace(' ', '-')}",
        source="Example",
        published_at=BASE_TIME - timedelta(hours=hours_ago),
        excerpt=f"{title} excerpt",
        category=category,
    )


class TestGroupByCategory:
    """Test grouping items into the fixed categories."""

    def test_empty_input_has_every_category(self) -> None:
        """Test every category is present even with no items."""
        grouped = group_by_category([])

        assert list(grouped) == [category.value for category in Category]
        assert all(items == [] for items in grouped.values())

    def test_one_item_per_category_plus_fallbacks(self) -> None:
        """Test unknown and missing categories both land in Misc."""
        items = [
            make_item(f"Item {category.value}", category.value)
            for category in Category
            if category is not Category.MISC
        ]
        items.append(make_item("Unknown item", "Unknown"))
        items.append(make_item("Uncategorized item"))

        grouped = group_by_category(items)

        assert len(grouped["Misc"]) == 2
        for category in Category:
            if category is not Category.MISC:
                assert len(grouped[category.value]) == 1

    def test_no_items_gained_or_lost(self) -> None:
        """Test the grouped total equals the input length."""
        items = [
            make_item("A", "Kubernetes"),
            make_item("B", "Kubernetes", 3),
            make_item("C", "Security"),
            make_item("D", "Nope"),
            make_item("E"),
        ]

        grouped = group_by_category(items)

        assert sum(len(v) for v in grouped.values()) == len(items)
        grouped_items = [item for v in grouped.values() for item in v]
        assert sorted(i.title for i in grouped_items) == ["A", "B", "C", "D", "E"]

    def test_items_sorted_most_recent_first(self) -> None:
        """Test items inside a category are ordered newest first."""
        items = [
            make_item("Old", "IaC", hours_ago=48),
            make_item("New", "IaC", hours_ago=1),
            make_item("Middle", "IaC", hours_ago=10),
        ]

        grouped = group_by_category(items)

        assert [item.title for item in grouped["IaC"]] == ["New", "Middle", "Old"]
        dates = [item.published_at for item in grouped["IaC"]]
        assert all(a >= b for a, b in zip(dates, dates[1:]))

    def test_input_items_are_reused_not_copied(self) -> None:
        """Test grouping keeps references to the original items."""
        item = make_item("Same", "Databases")

        grouped = group_by_category([item])

        assert grouped["Databases"][0] is item

    def test_mixed_naive_and_aware_timestamps(self) -> None:
        """Test naive timestamps sort alongside aware ones as UTC."""
        naive = NewsItem(
            title="Naive",
            url="https://example.com/naive",
            source="Example",
            published_at=datetime(2025, 1, 1),
            category="Security",
        )
        aware = NewsItem(
            title="Aware",
            url="https://example.com/aware",
            source="Example",
            published_at=datetime(2025, 1, 2, tzinfo=timezone.utc),
            category="Security",
        )

        grouped = group_by_category([naive, aware])

        assert [item.title for item in grouped["Security"]] == ["Aware", "Naive"]
