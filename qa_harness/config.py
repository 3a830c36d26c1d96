"""Environment-specific configuration loaded from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError

from qa_harness.errors import DataParseError

log = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "dev"
HEADLESS_ENVIRONMENTS = frozenset({"prod"})


class QualityGateThresholds(BaseModel):
    """Criteria a run must meet to pass its quality gates."""

    min_success_rate: float = 98.0
    max_duration_seconds: float = 900.0
    max_failures: int = 1


class PerformanceThresholds(BaseModel):
    """Limits a load test must stay within."""

    max_average_response_ms: float = 2000.0
    max_p95_response_ms: float = 3000.0
    max_error_rate: float = 1.0
    min_throughput: float = 10.0


class HarnessConfig(BaseModel):
    """Settings for one environment.

    Built once at startup and passed to the components that need it.
    """

    environment: str = DEFAULT_ENVIRONMENT
    base_url: str | None = None
    timeout_seconds: float = 10.0
    screenshot_enabled: bool = True
    screenshot_dir: Path = Path("screenshots")
    headless: bool = False
    pause_between_tests: float = 2.0
    slack_webhook_url: SecretStr | None = None
    quality_gates: QualityGateThresholds = Field(default_factory=QualityGateThresholds)
    performance_thresholds: PerformanceThresholds = Field(
        default_factory=PerformanceThresholds
    )


def load_environment_config(environment: str, config_dir: Path) -> HarnessConfig:
    """Load ``<config_dir>/<environment>.yaml``.

    Falls back to defaults when the file does not exist.

    Raises:
        DataParseError: If the file is not valid YAML or has invalid values

    """
    config_file = config_dir / f"{environment}.yaml"
    defaults: dict[str, Any] = {
        "environment": environment,
        "headless": environment in HEADLESS_ENVIRONMENTS,
    }

    if not config_file.exists():
        log.warning("Environment config not found: %s, using defaults", config_file)
        return HarnessConfig(**defaults)

    try:
        content = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise DataParseError(f"Invalid YAML in {config_file}: {e}") from e
    except UnicodeDecodeError as e:
        raise DataParseError(f"{config_file} is not valid UTF-8: {e}") from e

    if not isinstance(content, dict):
        raise DataParseError(f"Expected a mapping in {config_file}")

    try:
        config = HarnessConfig(**{**defaults, **content})
    except ValidationError as e:
        raise DataParseError(f"Invalid config in {config_file}: {e}") from e

    log.info("Loaded environment config: %s", config_file)
    return config
