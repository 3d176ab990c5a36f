"""Keyword-based category assignment for items that arrive without one."""

import re
from collections.abc import Iterable
from dataclasses import replace
from typing import Final

from devops_digest.news.models import Category, NewsItem
from devops_digest.utils.logging import get_logger

logger = get_logger("news.categorizer")

EVENT_PATTERN: Final = re.compile(r"\b(conference|event|meetup)\s+\d{4}\b")

# Checked in order, first match wins
CATEGORY_KEYWORDS: Final[list[tuple[Category, re.Pattern[str]]]] = [
    (Category.KUBERNETES, re.compile(r"\b(kubernetes|k8s|kubectl|helm|kube)\b")),
    (
        Category.CLOUD_NATIVE,
        re.compile(r"\b(docker|container|cncf|cloud native|service mesh|istio|envoy)\b"),
    ),
    (
        Category.CI_CD,
        re.compile(r"\b(ci/cd|cicd|github actions|gitlab|jenkins|argo|flux)\b"),
    ),
    (
        Category.IAC,
        re.compile(r"\b(terraform|pulumi|ansible|iac|infrastructure as code)\b"),
    ),
    (
        Category.OBSERVABILITY,
        re.compile(
            r"\b(monitoring|observability|prometheus|grafana|datadog|logging|tracing)\b"
        ),
    ),
    (
        Category.SECURITY,
        re.compile(r"\b(security|vulnerability|cve|secrets|compliance)\b"),
    ),
    (Category.DATABASES, re.compile(r"\b(database|postgres|mysql|mongodb|redis|sql)\b")),
    (Category.PLATFORMS, re.compile(r"\b(aws|azure|gcp|cloud|platform)\b")),
]


def is_event_announcement(item: NewsItem) -> bool:
    """Check whether an item only announces a conference or meetup."""
    title = item.title.lower()
    return "is coming!" in title or EVENT_PATTERN.search(title) is not None


def guess_category(item: NewsItem) -> Category:
    """Pick a category from keywords in the title and excerpt."""
    text = f"{item.title} {item.excerpt}".lower()
    for category, pattern in CATEGORY_KEYWORDS:
        if pattern.search(text):
            return category
    return Category.MISC


def classify_items(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Drop event announcements and fill in missing categories.

    Items that already carry a category label keep it unchanged.
    """
    classified: list[NewsItem] = []

    for item in items:
        if is_event_announcement(item):
            logger.debug(f"Skipping event announcement: {item.title}")
            continue

        if not item.category:
            item = replace(item, category=guess_category(item).value)
        classified.append(item)

    return classified
