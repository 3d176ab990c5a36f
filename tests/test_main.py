"""Tests for the digest generation workflow."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from devops_digest.config.settings import Config
from devops_digest.digest.validator import validate_markdown
from devops_digest.main import DigestBuilder, main
from devops_digest.news.models import NewsCollection, NewsItem
from devops_digest.utils.toml_handler import TOMLHandler


def recent_item(title: str, category: str | None, source: str = "Blog") -> NewsItem:
    return NewsItem(
        title=title,
        url=f"https://example.com/{title.lower().replace(' ', '-')}",
        source=source,
        published_at=datetime.now(timezone.utc) - timedelta(days=1),
        excerpt=f"<p>{title} details</p>",
        category=category,
    )


class TestDigestBuilder:
    """Test DigestBuilder workflow."""

    @pytest.fixture
    def workspace(self):
        """Create a temporary directory for items and output."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)

    @pytest.fixture
    def config(self, workspace: Path) -> Config:
        """Create a configuration writing into the workspace."""
        config_path = workspace / "config.toml"
        config_path.write_text(
            f'[digest]\noutput_dir = "{(workspace / "news").as_posix()}"\n',
            encoding="utf-8",
        )
        return Config(config_path)

    def write_items(self, workspace: Path, items: list[NewsItem]) -> Path:
        items_file = workspace / "items.toml"
        TOMLHandler.write_news_toml(NewsCollection(items), items_file)
        return items_file

    def test_output_path(self, config: Config, workspace: Path) -> None:
        """Test the digest file location."""
        builder = DigestBuilder(config)

        assert builder.output_path(3, 2025) == workspace / "news" / "2025" / "week-3.md"

    def test_run_writes_valid_digest(self, config: Config, workspace: Path) -> None:
        """Test a full run writes a document that passes validation."""
        items = [
            recent_item("Helm release", "Kubernetes"),
            recent_item("Vault update", "Security", source="HashiCorp"),
            recent_item("Random news", None),
        ]
        items_file = self.write_items(workspace, items)

        builder = DigestBuilder(config)
        assert builder.run(items_file, week=3, year=2025) is True

        output = workspace / "news" / "2025" / "week-3.md"
        assert output.exists()
        content = output.read_text(encoding="utf-8")
        assert 'title: "DevOps Weekly Digest - Week 3, 2025"' in content
        assert "## ⚓ Kubernetes" in content
        assert "## 🔐 Security" in content
        assert "## 📰 Misc" in content
        assert "<p>" not in content
        assert validate_markdown(output) is True

    def test_run_drops_duplicates_and_old_items(
        self, config: Config, workspace: Path
    ) -> None:
        """Test preparation removes duplicate and stale items."""
        fresh = recent_item("Fresh news", "IaC")
        duplicate = NewsItem(
            title="Fresh news copy",
            url=fresh.url + "/?utm_source=rss",
            source="Mirror",
            published_at=fresh.published_at,
            category="IaC",
        )
        stale = NewsItem(
            title="Stale news",
            url="https://example.com/stale",
            source="Blog",
            published_at=datetime.now(timezone.utc) - timedelta(days=30),
            category="IaC",
        )

        prepared = DigestBuilder(config).prepare_items([fresh, duplicate, stale])

        assert [item.title for item in prepared] == ["Fresh news"]

    def test_prepare_items_classifies_uncategorized(self, config: Config) -> None:
        """Test missing categories are guessed and event posts dropped."""
        items = [
            recent_item("Terraform 2.0 ships", None),
            recent_item("Observability Meetup 2025", None),
        ]

        prepared = DigestBuilder(config).prepare_items(items)

        assert [(item.title, item.category) for item in prepared] == [
            ("Terraform 2.0 ships", "IaC")
        ]

    def test_logger_is_in_package_hierarchy(self, config: Config) -> None:
        """Test workflow logs go through the configured package logger."""
        assert DigestBuilder(config).logger.name == "devops_digest.main"

    def test_run_dry_run_writes_nothing(self, config: Config, workspace: Path) -> None:
        """Test dry runs render without writing."""
        items_file = self.write_items(workspace, [recent_item("News", "IaC")])

        assert DigestBuilder(config).run(items_file, 3, 2025, dry_run=True) is True
        assert not (workspace / "news").exists()

    def test_run_without_recent_items(self, config: Config, workspace: Path) -> None:
        """Test an empty batch completes without writing a digest."""
        items_file = self.write_items(workspace, [])

        assert DigestBuilder(config).run(items_file, 3, 2025) is True
        assert not (workspace / "news").exists()

    def test_run_missing_items_file(self, config: Config, workspace: Path) -> None:
        """Test a missing input file fails the workflow."""
        assert DigestBuilder(config).run(workspace / "missing.toml") is False

    def test_run_invalid_config(self, workspace: Path) -> None:
        """Test invalid configuration stops the workflow."""
        config = MagicMock(spec=Config)
        config.validate.return_value = (False, ["max_per_source must be greater than 0"])

        assert DigestBuilder(config).run(workspace / "items.toml") is False

    def test_run_fails_when_validation_fails(
        self, config: Config, workspace: Path
    ) -> None:
        """Test a failing validation of the written file fails the run."""
        items_file = self.write_items(workspace, [recent_item("News", "IaC")])

        with patch("devops_digest.main.validate_markdown", return_value=False):
            assert DigestBuilder(config).run(items_file, 3, 2025) is False


class TestMain:
    """Test the command line entry point."""

    def test_validate_flag(self) -> None:
        """Test --validate exits according to the validation result."""
        with tempfile.TemporaryDirectory() as temp_dir:
            document = Path(temp_dir) / "week-3.md"
            document.write_text("no front matter\n", encoding="utf-8")

            with patch("sys.argv", ["devops-digest", "--validate", str(document)]):
                with pytest.raises(SystemExit) as exc_info:
                    main()

        assert exc_info.value.code == 1

    def test_run_failure_exits_nonzero(self) -> None:
        """Test a failed run exits with status 1."""
        with patch("sys.argv", ["devops-digest", "/path/that/does/not/exist.toml"]):
            with patch("devops_digest.main.DigestBuilder") as builder_class:
                builder_class.return_value.run.return_value = False
                with pytest.raises(SystemExit) as exc_info:
                    main()

        assert exc_info.value.code == 1
