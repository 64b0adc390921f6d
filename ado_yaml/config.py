"""Configuration management for ado-yaml with structured settings and validation."""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import AdoYamlConfigurationError

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TelemetryConfig:
    """Configuration for telemetry and observability."""

    enabled: bool = True
    service_name: str = "ado-yaml"
    service_version: str = "0.1.0"
    trace_sampling_rate: float = 1.0
    metrics_enabled: bool = True

    def __post_init__(self):
        """Validate telemetry configuration values."""
        if not 0.0 <= self.trace_sampling_rate <= 1.0:
            raise AdoYamlConfigurationError(
                "trace_sampling_rate must be between 0.0 and 1.0",
                context={"trace_sampling_rate": self.trace_sampling_rate},
            )


@dataclass
class SourceConfig:
    """Configuration for reading pipeline definition files from disk."""

    max_file_bytes: int = 1_048_576
    encoding: str = "utf-8"

    def __post_init__(self):
        """Validate source configuration values."""
        if self.max_file_bytes <= 0:
            raise AdoYamlConfigurationError(
                "max_file_bytes must be positive",
                context={"max_file_bytes": self.max_file_bytes},
            )

        if not self.encoding:
            raise AdoYamlConfigurationError(
                "encoding must not be empty", context={"encoding": self.encoding}
            )


@dataclass
class AdoYamlConfig:
    """
    Main configuration class for ado-yaml.

    Consolidates all settings and applies environment variable overrides.
    """

    log_level: str = "INFO"

    # Sub-configurations
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    source: SourceConfig = field(default_factory=SourceConfig)

    def __post_init__(self):
        """Load configuration from environment variables and validate."""
        self.log_level = os.getenv("ADO_YAML_LOG_LEVEL", self.log_level).upper()

        # Override telemetry config from environment
        self.telemetry.enabled = os.getenv("ADO_YAML_TELEMETRY_ENABLED", "true").lower() == "true"
        self.telemetry.service_name = os.getenv(
            "ADO_YAML_TELEMETRY_SERVICE_NAME", self.telemetry.service_name
        )
        self.telemetry.service_version = os.getenv(
            "ADO_YAML_TELEMETRY_SERVICE_VERSION", self.telemetry.service_version
        )
        self.telemetry.trace_sampling_rate = float(
            os.getenv("ADO_YAML_TELEMETRY_TRACE_SAMPLING_RATE", self.telemetry.trace_sampling_rate)
        )
        self.telemetry.metrics_enabled = (
            os.getenv("ADO_YAML_TELEMETRY_METRICS_ENABLED", "true").lower() == "true"
        )

        # Override source config from environment
        self.source.max_file_bytes = int(
            os.getenv("ADO_YAML_MAX_FILE_BYTES", self.source.max_file_bytes)
        )
        self.source.encoding = os.getenv("ADO_YAML_ENCODING", self.source.encoding)

        # Validate configuration
        self._validate()

        logger.info(
            f"Configuration loaded: log_level={self.log_level}, "
            f"telemetry_enabled={self.telemetry.enabled}, "
            f"max_file_bytes={self.source.max_file_bytes}"
        )

    def _validate(self):
        """Validate the complete configuration."""
        if self.log_level not in VALID_LOG_LEVELS:
            raise AdoYamlConfigurationError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}",
                context={"log_level": self.log_level},
            )

        # Sub-configurations were mutated after their own __post_init__ ran
        self.telemetry.__post_init__()
        self.source.__post_init__()

    @classmethod
    def from_env(cls, **overrides) -> "AdoYamlConfig":
        """
        Create configuration from environment variables with optional overrides.

        Args:
            **overrides: Configuration values to override

        Returns:
            AdoYamlConfig: Configured instance
        """
        return cls(**overrides)
