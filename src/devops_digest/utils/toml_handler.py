"""TOML handling utilities."""

import tomllib
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from devops_digest.news.models import NewsCollection, NewsItem
from devops_digest.utils.dates import parse_date
from devops_digest.utils.logging import get_logger

logger = get_logger("utils.toml_handler")


def _coerce_timestamp(value: Any) -> datetime:
    """Turn a TOML date, datetime or string into an aware datetime."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return parse_date(str(value))


class TOMLHandler:
    """Handles TOML parsing and writing operations."""

    @staticmethod
    def load_config(config_path: str | Path) -> dict[str, Any]:
        """Load configuration from TOML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            return {}

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    @staticmethod
    def parse_news_toml(toml_content: str) -> NewsCollection:
        """Parse a gathered batch of ``[[news]]`` tables into a NewsCollection.

        Entries without a title or URL are skipped.
        """
        try:
            data = tomllib.loads(toml_content)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse TOML content: {e}")

        news_items: list[NewsItem] = []
        for index, item_data in enumerate(data.get("news", [])):
            title = str(item_data.get("title", "")).strip()
            url = str(item_data.get("url", "")).strip()
            if not title or not url:
                logger.warning(f"Skipping news entry {index}: missing title or url")
                continue

            news_items.append(
                NewsItem(
                    title=title,
                    url=url,
                    source=str(item_data.get("source", "")),
                    published_at=_coerce_timestamp(item_data.get("published_at", "")),
                    excerpt=str(item_data.get("excerpt", "")),
                    summary=item_data.get("summary") or None,
                    category=item_data.get("category") or None,
                    tags=tuple(str(tag) for tag in item_data.get("tags", [])),
                )
            )

        return NewsCollection(news=news_items)

    @staticmethod
    def load_news_toml(input_path: str | Path) -> NewsCollection:
        """Read a gathered batch from a TOML file."""
        content = Path(input_path).read_text(encoding="utf-8")
        return TOMLHandler.parse_news_toml(content)

    @staticmethod
    def write_news_toml(
        news_collection: NewsCollection, output_path: str | Path
    ) -> None:
        """Write NewsCollection to TOML file."""
        output_path = Path(output_path)
        toml_content = news_collection.to_toml_string()

        # Ensure directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(toml_content)

    @staticmethod
    def validate_toml_syntax(toml_content: str) -> bool:
        """Validate TOML syntax without full parsing."""
        try:
            tomllib.loads(toml_content)
            return True
        except tomllib.TOMLDecodeError:
            return False
