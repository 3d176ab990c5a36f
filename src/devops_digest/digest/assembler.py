"""Assembly of news items and run metadata into a digest."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from devops_digest.digest.classifier import group_by_category
from devops_digest.news.models import NewsItem
from devops_digest.utils.dates import current_week, current_year, format_iso_date

DIGEST_SUMMARY: Final = (
    "⚡ Curated updates from Kubernetes, cloud native tooling, CI/CD, IaC, "
    "observability, and security - handpicked for DevOps professionals!"
)


@dataclass(frozen=True)
class DigestMetadata:
    """Describes one digest run."""

    title: str
    date: str
    week: int
    year: int
    summary: str


@dataclass(frozen=True)
class Digest:
    """Categorized items plus metadata, ready for rendering."""

    metadata: DigestMetadata
    categories: dict[str, list[NewsItem]]


def generate_title(week: int, year: int) -> str:
    """Generate the digest title for a given week."""
    return f"DevOps Weekly Digest - Week {week}, {year}"


def generate_summary() -> str:
    """Generate the digest summary line."""
    return DIGEST_SUMMARY


def assemble_digest(
    items: Iterable[NewsItem], week: int | None = None, year: int | None = None
) -> Digest:
    """Assemble a digest from gathered items.

    Args:
        items: News items to include
        week: Week number, defaults to the current week
        year: Year, defaults to the current year

    Returns:
        Digest with metadata and every category populated
    """
    week = week if week is not None else current_week()
    year = year if year is not None else current_year()

    metadata = DigestMetadata(
        title=generate_title(week, year),
        date=format_iso_date(),
        week=week,
        year=year,
        summary=generate_summary(),
    )

    return Digest(metadata=metadata, categories=group_by_category(items))
