"""Duplicate removal for a batch of gathered news items."""

import re
import urllib.parse
from collections.abc import Iterable

from devops_digest.news.models import NewsItem
from devops_digest.utils.logging import get_logger

logger = get_logger("news.deduplicator")

TRACKING_PREFIXES = ("utm_", "fb_", "gclid", "ref_", "campaign")
TRACKING_PARAMS = {"ref"}


def normalize_url(url: str) -> str:
    """Normalize URL for comparison.

    Args:
        url: Original URL

    Returns:
        Normalized URL
    """
    parsed = urllib.parse.urlparse(url.strip())

    # Remove common tracking parameters
    query_params = urllib.parse.parse_qs(parsed.query)
    filtered_params = {
        k: v
        for k, v in query_params.items()
        if not k.lower().startswith(TRACKING_PREFIXES)
        and k.lower() not in TRACKING_PARAMS
    }
    new_query = urllib.parse.urlencode(filtered_params, doseq=True)

    # Normalize domain (remove www, ensure lowercase)
    domain = parsed.netloc.lower()
    if domain.startswith("www."):
        domain = domain[4:]

    path = parsed.path.rstrip("/")

    return urllib.parse.urlunparse(
        (parsed.scheme.lower(), domain, path, parsed.params, new_query, "")
    )


def normalize_title(title: str) -> str:
    """Normalize title for comparison.

    Args:
        title: Original title

    Returns:
        Lower-cased title without punctuation
    """
    without_punctuation = re.sub(r"[^\w\s]", "", title.lower())
    return " ".join(without_punctuation.split())


def deduplicate_by_url(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Drop items whose normalized URL was already seen."""
    seen: set[str] = set()
    unique: list[NewsItem] = []

    for item in items:
        key = normalize_url(item.url)
        if key in seen:
            logger.debug(f"Skipping duplicate URL: {item.url}")
            continue
        seen.add(key)
        unique.append(item)

    return unique


def deduplicate(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Remove duplicates by URL, then by title keeping the most recent item.

    The surviving items keep the position of the first item with their title.
    """
    by_title: dict[str, NewsItem] = {}

    for item in deduplicate_by_url(items):
        key = normalize_title(item.title)
        existing = by_title.get(key)
        if existing is None:
            by_title[key] = item
        elif item.published_at > existing.published_at:
            logger.debug(f"Replacing older duplicate title: {existing.title}")
            by_title[key] = item

    return list(by_title.values())
