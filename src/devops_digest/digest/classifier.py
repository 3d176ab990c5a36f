"""Grouping of news items into the fixed digest categories."""

from collections.abc import Iterable

from devops_digest.news.models import Category, NewsItem


def group_by_category(items: Iterable[NewsItem]) -> dict[str, list[NewsItem]]:
    """Group items by category, most recent first within each category.

    Every category is present in the result, in declaration order, even when
    it holds no items. Items with a missing or unknown category land in Misc.

    Args:
        items: News items to group

    Returns:
        Mapping of category name to its items
    """
    categories: dict[str, list[NewsItem]] = {
        category.value: [] for category in Category
    }

    for item in items:
        categories[Category.from_label(item.category).value].append(item)

    for category_items in categories.values():
        category_items.sort(key=lambda item: item.published_at, reverse=True)

    return categories
