"""Core data models for digest assembly."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Final, Iterator

import tomli_w

EXCERPT_DISPLAY_LENGTH: Final = 200


class Category(str, Enum):
    """Closed set of digest categories, in rendering order."""

    KUBERNETES = "Kubernetes"
    CLOUD_NATIVE = "Cloud Native"
    CI_CD = "CI/CD"
    IAC = "IaC"
    OBSERVABILITY = "Observability"
    SECURITY = "Security"
    DATABASES = "Databases"
    PLATFORMS = "Platforms"
    MISC = "Misc"

    @classmethod
    def from_label(cls, label: str | None) -> "Category":
        """Map a free-form category label to a member, falling back to Misc."""
        if not label:
            return cls.MISC
        try:
            return cls(label)
        except ValueError:
            return cls.MISC


@dataclass(frozen=True)
class NewsItem:
    """Represents a single gathered news article."""

    title: str
    url: str
    source: str
    published_at: datetime
    excerpt: str = ""
    summary: str | None = None
    category: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store naive timestamps as UTC so items always compare."""
        if self.published_at.tzinfo is None:
            object.__setattr__(
                self, "published_at", self.published_at.replace(tzinfo=timezone.utc)
            )

    @property
    def display_text(self) -> str:
        """Summary if present, otherwise the leading slice of the excerpt."""
        return self.summary or self.excerpt[:EXCERPT_DISPLAY_LENGTH]

    def to_toml_dict(self) -> dict[str, str | list[str]]:
        """Convert to dictionary suitable for TOML serialization."""
        result: dict[str, str | list[str]] = {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "published_at": self.published_at.isoformat(),
            "excerpt": self.excerpt,
        }
        if self.summary:
            result["summary"] = self.summary
        if self.category:
            result["category"] = self.category
        if self.tags:
            result["tags"] = list(self.tags)
        return result


@dataclass
class NewsCollection:
    """Collection of news items with TOML serialization support."""

    news: Final[list[NewsItem]]

    def __init__(self, news: Iterable[NewsItem] | None = None) -> None:
        self.news = list(news) if news is not None else []

    def to_toml_string(self) -> str:
        """Convert collection to TOML string format."""
        toml_data = {"news": [item.to_toml_dict() for item in self.news]}
        return tomli_w.dumps(toml_data)

    def __len__(self) -> int:
        """Return number of news items."""
        return len(self.news)

    def __iter__(self) -> Iterator[NewsItem]:
        """Make collection iterable."""
        yield from self.news

    def add_item(self, item: NewsItem) -> None:
        """Add a news item to the collection."""
        self.news.append(item)

    def get_urls(self) -> set[str]:
        """Get all unique URLs from the collection."""
        return {item.url for item in self.news}
