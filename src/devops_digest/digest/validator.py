"""Structural and link checks for a rendered digest document."""

import logging
import re
import urllib.parse
from pathlib import Path
from typing import Any, Final

import yaml

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: Final = ("title", "date", "summary")
TITLE_PATTERN: Final = re.compile(r"DevOps Weekly Digest - Week \d+, \d{4}")
DATE_PATTERN: Final = re.compile(r"\d{4}-\d{2}-\d{2}")
LINK_PATTERN: Final = re.compile(r"\[[^\]]*\]\(([^)]*)\)")
FRONT_MATTER_PATTERN: Final = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL
)


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split a document into its raw front matter block and body, without parsing."""
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return None, text
    header, body = match.groups()
    return header, body


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its front matter fields and body.

    A document without a leading front matter block yields no fields and the
    whole text as body.

    Raises:
        yaml.YAMLError: If the front matter is not valid YAML
    """
    header, body = split_front_matter(text)
    if header is None:
        return {}, body

    data = yaml.safe_load(header)
    if not isinstance(data, dict):
        return {}, body
    return data, body


def title_matches(title: str) -> bool:
    """Check a digest title against the expected format."""
    return TITLE_PATTERN.fullmatch(title) is not None


def date_matches(date: str) -> bool:
    """Check a YYYY-MM-DD date string (format only, not calendar validity)."""
    return DATE_PATTERN.fullmatch(date) is not None


def validate_markdown(file_path: str | Path) -> bool:
    """Validate a rendered digest file.

    Args:
        file_path: Path to the markdown document

    Returns:
        True if the front matter and body pass every check
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to read {file_path}: {e}")
        return False

    try:
        data, body = parse_front_matter(content)

        if not all(data.get(field) for field in REQUIRED_FIELDS):
            logger.error("Missing required front matter fields")
            return False

        if not title_matches(str(data["title"])):
            logger.error(f"Invalid title format: {data['title']}")
            return False

        if not date_matches(str(data["date"])):
            logger.error(f"Invalid date format: {data['date']}")
            return False

        if not body.strip():
            logger.error("Empty content")
            return False

    except Exception as e:
        logger.error(f"Validation error: {e}")
        return False

    logger.info("✓ Markdown validation passed")
    return True


def extract_urls(content: str) -> list[str]:
    """Extract every markdown link target from the document body, in order."""
    _, body = split_front_matter(content)
    return [match.strip() for match in LINK_PATTERN.findall(body)]


def is_valid_url(url: str) -> bool:
    """Check that a string is a well-formed absolute URL."""
    if not url or any(char.isspace() for char in url):
        return False
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def validate_urls(content: str) -> bool:
    """Check that every link target in a document is a well-formed URL."""
    urls = extract_urls(content)

    if not urls:
        logger.warning("No URLs found in content")
        return True

    logger.info(f"Found {len(urls)} URLs to validate")

    invalid_urls = [url for url in urls if not is_valid_url(url)]
    if invalid_urls:
        logger.error(f"Invalid URLs found: {invalid_urls}")
        return False

    logger.info("✓ All URLs are valid")
    return True


def check_duplicate_urls(content: str) -> list[str]:
    """Return each link target that appears more than once in a document."""
    seen: set[str] = set()
    duplicates: dict[str, None] = {}

    for url in extract_urls(content):
        if url in seen:
            duplicates.setdefault(url, None)
        seen.add(url)

    return list(duplicates)
