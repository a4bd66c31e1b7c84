"""
Centralized configuration for the revenue forecasting engine.

Configuration is loaded from environment variables with sensible defaults.

Usage:
    from revenue_forecast.config import config

    artifact_dir = config.artifacts.directory
    log_level = config.logging.level
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_ARTIFACT_DIR = Path(__file__).parent.parent / "data" / "ml"


@dataclass(frozen=True)
class ArtifactConfig:
    """Location of the optional precomputed forecast artifacts."""

    directory: Path = field(
        default_factory=lambda: Path(os.getenv("FORECAST_ARTIFACT_DIR", str(DEFAULT_ARTIFACT_DIR)))
    )
    components_file: str = field(
        default_factory=lambda: os.getenv("FORECAST_COMPONENTS_FILE", "model_components.json")
    )
    precomputed_file: str = field(
        default_factory=lambda: os.getenv("FORECAST_PRECOMPUTED_FILE", "next_3_months_forecast.csv")
    )

    @property
    def components_path(self) -> Path:
        return self.directory / self.components_file

    @property
    def precomputed_path(self) -> Path:
        return self.directory / self.precomputed_file


@dataclass(frozen=True)
class HistoryConfig:
    """Historical series aggregation settings."""

    months_back: int = field(
        default_factory=lambda: int(os.getenv("FORECAST_HISTORY_MONTHS", "36"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging output settings."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    json_format: bool = field(
        default_factory=lambda: os.getenv("LOG_JSON", "false").lower() == "true"
    )


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""

    version: str = "1.0.0"
    artifacts: ArtifactConfig = field(default_factory=ArtifactConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigurationError(Exception):
    """Raised when configuration values are invalid."""
    pass


def validate_config(cfg: "AppConfig" = None) -> None:
    """
    Validate configuration values.

    Call this on application startup to fail fast with clear error messages
    instead of silently degraded forecasts.

    Raises:
        ConfigurationError: If a value is out of range
    """
    cfg = cfg or config
    errors = []

    if cfg.history.months_back < 1:
        errors.append("FORECAST_HISTORY_MONTHS must be a positive integer")

    if cfg.logging.level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        errors.append(f"LOG_LEVEL has unknown value: {cfg.logging.level}")

    if cfg.artifacts.directory.exists() and not cfg.artifacts.directory.is_dir():
        errors.append(f"FORECAST_ARTIFACT_DIR is not a directory: {cfg.artifacts.directory}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)


# Global config instance
config = AppConfig()
