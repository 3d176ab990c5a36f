"""Markdown rendering of an assembled digest."""

from typing import Final

from devops_digest.digest.assembler import Digest, DigestMetadata
from devops_digest.news.models import Category, NewsItem
from devops_digest.utils.dates import format_display_date

DEFAULT_EMOJI: Final = "📰"

CATEGORY_EMOJIS: Final[dict[str, str]] = {
    Category.KUBERNETES.value: "⚓",
    Category.CLOUD_NATIVE.value: "☁️",
    Category.CI_CD.value: "🔄",
    Category.IAC.value: "🏗️",
    Category.OBSERVABILITY.value: "📊",
    Category.SECURITY.value: "🔐",
    Category.DATABASES.value: "💾",
    Category.PLATFORMS.value: "🌐",
    Category.MISC.value: "📰",
}

INTRO: Final = """
> 📌 **Handpicked by DevOps Daily** - Your weekly dose of curated DevOps news and updates!

---
"""

SECTION_SEPARATOR: Final = "\n\n---\n\n"


def _quote(value: str) -> str:
    """Render a value as a double-quoted YAML scalar."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_front_matter(metadata: DigestMetadata) -> str:
    """Build the front matter block from digest metadata."""
    return "\n".join(
        [
            "---",
            f"title: {_quote(metadata.title)}",
            f"date: {_quote(metadata.date)}",
            f"summary: {_quote(metadata.summary)}",
            "---",
        ]
    )


def format_news_item(item: NewsItem) -> str:
    """Format a single news item as a markdown block."""
    tags_section = ""
    if item.tags:
        tags_section = "\n  🏷️ *" + ", ".join(f"`{tag}`" for tag in item.tags) + "*"

    return (
        f"### 📄 {item.title}\n"
        f"\n"
        f"{item.display_text}\n"
        f"\n"
        f"**📅 {format_display_date(item.published_at)}** • **📰 {item.source}**"
        f"{tags_section}\n"
        f"\n"
        f"[**🔗 Read more**]({item.url})"
    )


def format_category_section(category: str, items: list[NewsItem]) -> str:
    """Format a category header followed by its items."""
    emoji = CATEGORY_EMOJIS.get(category, DEFAULT_EMOJI)
    items_list = "\n\n".join(format_news_item(item) for item in items)
    return f"## {emoji} {category}\n\n{items_list}"


def generate_markdown(digest: Digest) -> str:
    """Render a digest as markdown with front matter.

    Empty categories are skipped; a digest with no items renders only the
    front matter and the intro.
    """
    sections = SECTION_SEPARATOR.join(
        format_category_section(category, items)
        for category, items in digest.categories.items()
        if items
    )

    return f"{format_front_matter(digest.metadata)}\n{INTRO}\n{sections}\n"
