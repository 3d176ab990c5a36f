"""Configuration management for the digest generator."""

import copy
import sys
from functools import cached_property
from pathlib import Path
from typing import Any, Final, TypedDict, cast

from devops_digest.utils.toml_handler import TOMLHandler

LOG_LEVELS: Final = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DigestConfig(TypedDict):
    output_dir: str
    max_age_days: int


class LimitsConfig(TypedDict):
    max_per_source: int
    max_per_category: int


class LoggingConfig(TypedDict):
    level: str
    file: str


class ConfigDict(TypedDict):
    digest: DigestConfig
    limits: LimitsConfig
    logging: LoggingConfig


DEFAULT_CONFIG: Final[ConfigDict] = {
    "digest": {
        "output_dir": "content/news",
        "max_age_days": 7,
    },
    "limits": {
        "max_per_source": 4,
        "max_per_category": 12,
    },
    "logging": {
        "level": "INFO",
        "file": "",
    },
}


class Config:
    """Configuration management using TOML files."""

    _config_path: Final[Path]
    _data: Final[dict[str, Any]]

    def __init__(
        self,
        config_path: str | Path | None = None,
    ) -> None:
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. Defaults to config/config.toml
        """
        if config_path is None:
            # Default to config/config.toml relative to project root
            project_root = Path(__file__).parent.parent.parent.parent
            config_path = project_root / "config" / "config.toml"

        self._config_path = Path(config_path)
        self._data = self._get_config_data(self._config_path)

    def _get_config_data(self, config_path: Path) -> dict[str, Any]:
        """Load configuration data from the specified TOML file."""
        data = TOMLHandler.load_config(config_path)
        return deep_merge_dicts(cast(dict[str, Any], DEFAULT_CONFIG), data)

    @cached_property
    def output_dir(self) -> Path:
        """Directory that receives rendered digests, one subdirectory per year."""
        return Path(self._data.get("digest", {}).get("output_dir", "content/news"))

    @cached_property
    def max_age_days(self) -> int:
        """Only items published within this many days are kept."""
        return int(self._data.get("digest", {}).get("max_age_days", 7))

    @cached_property
    def max_per_source(self) -> int:
        """Maximum number of items taken from one source."""
        return int(self._data.get("limits", {}).get("max_per_source", 4))

    @cached_property
    def max_per_category(self) -> int:
        """Maximum number of items rendered per category."""
        return int(self._data.get("limits", {}).get("max_per_category", 12))

    @cached_property
    def log_level(self) -> str:
        """Logging level name."""
        return str(self._data.get("logging", {}).get("level", "INFO")).upper()

    @cached_property
    def log_file(self) -> str | None:
        """Optional log file path."""
        return str(self._data.get("logging", {}).get("file", "")) or None

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration values.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors: list[str] = []

        if self.max_per_source <= 0:
            errors.append("max_per_source must be greater than 0")

        if self.max_per_category <= 0:
            errors.append("max_per_category must be greater than 0")

        if self.max_age_days < 0:
            errors.append("max_age_days cannot be negative")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown logging level: {self.log_level}")

        return len(errors) == 0, errors


def deep_merge_dicts(dict1: dict[str, Any], dict2: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively combine two dictionaries where dict2 overrides values in dict1 for common keys.
    For nested dictionaries, performs a deep merge rather than simple replacement.

    Args:
        dict1 (dict): The base dictionary
        dict2 (dict): The dictionary with overriding values

    Returns:
        dict: A new dictionary with the deeply combined key-value pairs
    """
    result = copy.deepcopy(dict1)

    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dicts(result[key], cast(dict[str, Any], value))
        else:
            result[key] = copy.deepcopy(value)
    return result


def main() -> None:
    """CLI entry point for configuration validation."""
    import argparse

    parser = argparse.ArgumentParser(description="Configuration management")
    parser.add_argument(
        "--validate", action="store_true", help="Validate configuration"
    )
    parser.add_argument("--config", type=str, help="Path to configuration file")

    args = parser.parse_args()

    if args.validate:
        config = Config(args.config)
        is_valid, errors = config.validate()

        if is_valid:
            print("✅ Configuration is valid")
            sys.exit(0)
        else:
            print("❌ Configuration validation failed:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
