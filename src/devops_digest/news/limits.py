"""Recency filtering and per-group caps for a batch of news items."""

from collections.abc import Callable, Iterable
from datetime import datetime

from devops_digest.news.models import Category, NewsItem
from devops_digest.utils.dates import is_within_last_days


def _limit_per_group(
    items: Iterable[NewsItem], key: Callable[[NewsItem], str], limit: int
) -> list[NewsItem]:
    groups: dict[str, list[NewsItem]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)

    limited: list[NewsItem] = []
    for group in groups.values():
        group.sort(key=lambda item: item.published_at, reverse=True)
        limited.extend(group[:limit])
    return limited


def limit_per_source(
    items: Iterable[NewsItem], max_per_source: int = 4
) -> list[NewsItem]:
    """Keep the most recent items from each source."""
    return _limit_per_group(items, lambda item: item.source, max_per_source)


def limit_per_category(
    items: Iterable[NewsItem], max_per_category: int = 12
) -> list[NewsItem]:
    """Keep the most recent items from each category."""
    return _limit_per_group(
        items, lambda item: Category.from_label(item.category).value, max_per_category
    )


def apply_limits(
    items: Iterable[NewsItem], max_per_source: int = 4, max_per_category: int = 12
) -> list[NewsItem]:
    """Apply the per-source cap, then the per-category cap."""
    return limit_per_category(
        limit_per_source(items, max_per_source), max_per_category
    )


def filter_recent(
    items: Iterable[NewsItem], days: int = 7, now: datetime | None = None
) -> list[NewsItem]:
    """Keep items published within the last ``days`` days."""
    return [item for item in items if is_within_last_days(item.published_at, days, now)]
