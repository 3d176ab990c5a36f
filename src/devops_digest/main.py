"""Main application orchestrator for the weekly digest generator."""

import sys
from pathlib import Path

from devops_digest.config.settings import Config
from devops_digest.digest.assembler import assemble_digest
from devops_digest.digest.stats import print_stats
from devops_digest.digest.template import generate_markdown
from devops_digest.digest.validator import (
    check_duplicate_urls,
    validate_markdown,
    validate_urls,
)
from devops_digest.news.categorizer import classify_items
from devops_digest.news.deduplicator import deduplicate
from devops_digest.news.limits import apply_limits, filter_recent
from devops_digest.news.models import NewsItem
from devops_digest.news.normalizer import normalize_items
from devops_digest.utils.dates import current_week, current_year
from devops_digest.utils.logging import main_logger, setup_logging
from devops_digest.utils.toml_handler import TOMLHandler


class DigestBuilder:
    """Turns a gathered batch of news items into a validated digest file."""

    def __init__(self, config: Config):
        """Initialize the digest builder.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.logger = main_logger

    def output_path(self, week: int, year: int) -> Path:
        """Compute where the digest for a given week is written."""
        return self.config.output_dir / str(year) / f"week-{week}.md"

    def prepare_items(self, items: list[NewsItem]) -> list[NewsItem]:
        """Normalize, de-duplicate, filter, classify and cap a gathered batch."""
        self.logger.info("Normalizing items...")
        prepared = normalize_items(items)

        self.logger.info("Removing duplicates...")
        prepared = deduplicate(prepared)
        self.logger.info(f"{len(prepared)} unique items")

        self.logger.info(
            f"Filtering by date (last {self.config.max_age_days} days)..."
        )
        prepared = filter_recent(prepared, self.config.max_age_days)
        self.logger.info(f"{len(prepared)} recent items")

        self.logger.info("Classifying items with keywords...")
        prepared = classify_items(prepared)
        self.logger.info(f"{len(prepared)} classified items")

        prepared = apply_limits(
            prepared, self.config.max_per_source, self.config.max_per_category
        )
        self.logger.info(f"{len(prepared)} items after limits")

        return prepared

    def run(
        self,
        items_file: str | Path,
        week: int | None = None,
        year: int | None = None,
        dry_run: bool = False,
    ) -> bool:
        """Run the complete digest generation workflow.

        Args:
            items_file: TOML file holding the gathered ``[[news]]`` entries
            week: Week number, defaults to the current week
            year: Year, defaults to the current year
            dry_run: If True, render without writing the file

        Returns:
            True if workflow completed successfully
        """
        self.logger.info("Starting digest generation workflow")

        try:
            is_valid, errors = self.config.validate()
            if not is_valid:
                self.logger.error("Configuration validation failed:")
                for error in errors:
                    self.logger.error(f"  - {error}")
                return False

            self.logger.info(f"Loading items from {items_file}")
            collection = TOMLHandler.load_news_toml(items_file)
            self.logger.info(f"Loaded {len(collection)} items")

            items = self.prepare_items(list(collection))
            if not items:
                self.logger.warning("No recent items found, nothing to publish")
                return True

            week = week if week is not None else current_week()
            year = year if year is not None else current_year()

            self.logger.info("Assembling digest...")
            digest = assemble_digest(items, week, year)
            print_stats(digest)

            self.logger.info("Generating markdown...")
            markdown = generate_markdown(digest)

            duplicate_urls = check_duplicate_urls(markdown)
            if duplicate_urls:
                self.logger.warning(
                    f"Found {len(duplicate_urls)} duplicate URLs: {duplicate_urls}"
                )

            if not validate_urls(markdown):
                self.logger.warning("Digest contains malformed links")

            if dry_run:
                self.logger.info("[DRY RUN] Skipping file write")
                self.logger.debug(markdown)
                return True

            file_path = self.output_path(week, year)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(markdown, encoding="utf-8")
            self.logger.info(f"Written to: {file_path}")

            if not validate_markdown(file_path):
                self.logger.error("Markdown validation failed")
                return False

            self.logger.info(f"Generated digest for Week {week}, {year}")
            return True

        except Exception as e:
            self.logger.error(f"Workflow failed: {e}")
            self.logger.exception("Full error details:")
            return False


def main() -> None:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="DevOps Weekly Digest - Render gathered news into markdown"
    )
    parser.add_argument(
        "items_file", nargs="?", help="TOML file with gathered [[news]] entries"
    )
    parser.add_argument("--config", type=str, help="Path to configuration file")
    parser.add_argument("--week", type=int, help="Week number (default: current)")
    parser.add_argument("--year", type=int, help="Year (default: current)")
    parser.add_argument(
        "--dry-run", action="store_true", help="Render without writing the file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file", type=str, help="Log to file in addition to console"
    )
    parser.add_argument(
        "--validate", type=str, metavar="FILE", help="Validate a rendered digest and exit"
    )

    args = parser.parse_args()

    config = Config(args.config)
    setup_logging(
        level=args.log_level or config.log_level,
        log_file=args.log_file or config.log_file,
    )

    if args.validate:
        sys.exit(0 if validate_markdown(args.validate) else 1)

    if not args.items_file:
        parser.print_help()
        sys.exit(1)

    try:
        builder = DigestBuilder(config)
        success = builder.run(
            args.items_file, week=args.week, year=args.year, dry_run=args.dry_run
        )
    except KeyboardInterrupt:
        main_logger.info("Interrupted by user")
        sys.exit(1)

    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
