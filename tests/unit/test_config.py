"""Tests for environment configuration loading."""

import logging
from pathlib import Path

import pytest

from qa_harness.config import HarnessConfig, load_environment_config
from qa_harness.errors import DataParseError


class TestLoadEnvironmentConfig:
    """Tests for load_environment_config."""

    def test_missing_file_uses_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Falls back to defaults and warns when the file is absent."""
        with caplog.at_level(logging.WARNING):
            config = load_environment_config("staging", tmp_path)

        assert config.environment == "staging"
        assert config.timeout_seconds == 10.0
        assert config.headless is False
        assert config.slack_webhook_url is None
        assert "Environment config not found" in caplog.text

    def test_prod_defaults_to_headless(self, tmp_path: Path) -> None:
        """The prod environment runs headless unless configured otherwise."""
        assert load_environment_config("prod", tmp_path).headless is True

    def test_reads_yaml_values(self, tmp_path: Path) -> None:
        """Values in <env>.yaml override the defaults."""
        (tmp_path / "dev.yaml").write_text(
            "base_url: https://dev.example.com\n"
            "timeout_seconds: 5\n"
            "pause_between_tests: 0\n"
            "slack_webhook_url: https://hooks.slack.test/abc\n"
            "quality_gates:\n"
            "  min_success_rate: 90\n"
        )

        config = load_environment_config("dev", tmp_path)

        assert config.base_url == "https://dev.example.com"
        assert config.timeout_seconds == 5.0
        assert config.pause_between_tests == 0.0
        assert config.slack_webhook_url is not None
        assert config.slack_webhook_url.get_secret_value() == (
            "https://hooks.slack.test/abc"
        )
        assert config.quality_gates.min_success_rate == 90.0
        assert config.quality_gates.max_failures == 1

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """An empty file behaves like an empty mapping."""
        (tmp_path / "dev.yaml").write_text("")

        assert load_environment_config("dev", tmp_path) == HarnessConfig()

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Malformed YAML raises DataParseError."""
        (tmp_path / "dev.yaml").write_text("base_url: [unclosed\n")

        with pytest.raises(DataParseError, match="Invalid YAML"):
            load_environment_config("dev", tmp_path)

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        """A config file that is not UTF-8 raises DataParseError."""
        (tmp_path / "dev.yaml").write_bytes(b"base_url: \xff\xfe\x81\n")

        with pytest.raises(DataParseError, match="not valid UTF-8"):
            load_environment_config("dev", tmp_path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        """A YAML list is not a valid config."""
        (tmp_path / "dev.yaml").write_text("- a\n- b\n")

        with pytest.raises(DataParseError, match="Expected a mapping"):
            load_environment_config("dev", tmp_path)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        """Values of the wrong type raise DataParseError."""
        (tmp_path / "dev.yaml").write_text("timeout_seconds: soon\n")

        with pytest.raises(DataParseError, match="Invalid config"):
            load_environment_config("dev", tmp_path)


def test_default_thresholds() -> None:
    """Default gates and performance limits."""
    config = HarnessConfig()

    assert config.quality_gates.min_success_rate == 98.0
    assert config.quality_gates.max_duration_seconds == 900.0
    assert config.quality_gates.max_failures == 1
    assert config.performance_thresholds.max_average_response_ms == 2000.0
    assert config.performance_thresholds.max_p95_response_ms == 3000.0
    assert config.performance_thresholds.max_error_rate == 1.0
    assert config.performance_thresholds.min_throughput == 10.0
