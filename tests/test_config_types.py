"""Tests for configuration TypedDict structures."""

from typing import get_type_hints

from devops_digest.config.settings import (
    DEFAULT_CONFIG,
    ConfigDict,
    DigestConfig,
    LimitsConfig,
    LoggingConfig,
)


def test_config_dict_structure():
    """Test that ConfigDict has the expected structure."""
    hints = get_type_hints(ConfigDict)

    assert hints["digest"] == DigestConfig
    assert hints["limits"] == LimitsConfig
    assert hints["logging"] == LoggingConfig


def test_digest_config_structure():
    """Test that DigestConfig has the expected fields."""
    hints = get_type_hints(DigestConfig)

    assert hints["output_dir"] is str
    assert hints["max_age_days"] is int


def test_limits_config_structure():
    """Test that LimitsConfig has the expected fields."""
    hints = get_type_hints(LimitsConfig)

    assert hints["max_per_source"] is int
    assert hints["max_per_category"] is int


def test_default_config_matches_structure():
    """Test that DEFAULT_CONFIG provides every section and field."""
    for section, section_type in get_type_hints(ConfigDict).items():
        assert section in DEFAULT_CONFIG
        for field in get_type_hints(section_type):
            assert field in DEFAULT_CONFIG[section]
