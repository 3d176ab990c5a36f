"""Cleanup of gathered news items before assembly."""

import html
import re
from collections.abc import Iterable
from dataclasses import replace
from typing import Final

from bs4 import BeautifulSoup

from devops_digest.news.models import NewsItem

MAX_EXCERPT_LENGTH: Final = 500


def normalize_title(title: str) -> str:
    """Collapse whitespace, decode entities and drop bracketed tags."""
    cleaned = html.unescape(" ".join(title.split()))
    cleaned = re.sub(r"\[.*?\]", "", cleaned)
    return " ".join(cleaned.split())


def normalize_excerpt(excerpt: str) -> str:
    """Strip markup from an excerpt and cap its length."""
    if not excerpt:
        return ""
    text = BeautifulSoup(excerpt, "html.parser").get_text(" ")
    return " ".join(text.split())[:MAX_EXCERPT_LENGTH].strip()


def normalize_item(item: NewsItem) -> NewsItem:
    """Return a cleaned copy of a news item."""
    return replace(
        item,
        title=normalize_title(item.title),
        url=item.url.strip(),
        excerpt=normalize_excerpt(item.excerpt),
    )


def normalize_items(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Normalize every item in a batch."""
    return [normalize_item(item) for item in items]
