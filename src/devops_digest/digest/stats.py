"""Summary counts over an assembled digest."""

import logging
from dataclasses import dataclass

from devops_digest.digest.assembler import Digest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigestStats:
    """Item counts for operator visibility."""

    total_items: int
    category_counts: dict[str, int]
    sources: list[str]


def get_digest_stats(digest: Digest) -> DigestStats:
    """Count items per category and collect distinct sources."""
    category_counts: dict[str, int] = {}
    sources: dict[str, None] = {}

    for category, items in digest.categories.items():
        category_counts[category] = len(items)
        for item in items:
            sources.setdefault(item.source, None)

    return DigestStats(
        total_items=sum(category_counts.values()),
        category_counts=category_counts,
        sources=list(sources),
    )


def print_stats(digest: Digest) -> None:
    """Log digest statistics."""
    stats = get_digest_stats(digest)

    logger.info("📊 Digest Statistics:")
    logger.info(f"  Total items: {stats.total_items}")
    logger.info(f"  Unique sources: {len(stats.sources)}")
    logger.info("  By category:")

    for category, count in stats.category_counts.items():
        if count > 0:
            logger.info(f"    {category}: {count}")
