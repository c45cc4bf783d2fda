"""
Configuration for agrisignal
=============================
Runtime settings for the signal evaluation engine, loaded from
environment variables. Sets up the logging configuration as well.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path

from agrisignal.domain.exceptions import ConfigurationError
from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE, MetricProfile, load_metric_profile


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer.") from None


def _env_optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return _env_int(name, 0)


@dataclass
class EngineConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("AGRISIGNAL_ENV", "development"))
    log_level: str = field(default_factory=lambda: os.getenv("AGRISIGNAL_LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("AGRISIGNAL_LOG_FILE", ""))

    # Metric profile (ranges, status bands, weights)
    metric_profile_path: str = field(default_factory=lambda: os.getenv("AGRISIGNAL_METRIC_PROFILE_PATH", ""))
    strict_profile: bool = field(default_factory=lambda: _env_bool("AGRISIGNAL_STRICT_PROFILE", True))

    # Reading utilities
    history_size: int = field(default_factory=lambda: _env_int("AGRISIGNAL_HISTORY_SIZE", 24))
    simulator_seed: int | None = field(default_factory=lambda: _env_optional_int("AGRISIGNAL_SIMULATOR_SEED"))

    # Image heuristic sample grid edge; the thresholds are calibrated for 100
    image_sample_size: int = field(default_factory=lambda: _env_int("AGRISIGNAL_IMAGE_SAMPLE_SIZE", 100))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.history_size <= 0:
            raise ConfigurationError(f"AGRISIGNAL_HISTORY_SIZE must be positive, got {self.history_size}")
        if self.image_sample_size <= 0:
            raise ConfigurationError(f"AGRISIGNAL_IMAGE_SAMPLE_SIZE must be positive, got {self.image_sample_size}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")


def validate_config(config: EngineConfig) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Args:
        config: EngineConfig instance

    Returns:
        List of warning messages (empty if all valid)
    """
    warnings = []

    if config.image_sample_size != 100:
        warnings.append(
            f"Image sample size ({config.image_sample_size}) differs from 100. "
            "Heuristic thresholds are calibrated for a 100x100 grid."
        )

    if config.metric_profile_path and not Path(config.metric_profile_path).is_file():
        warnings.append(f"Metric profile file does not exist: {config.metric_profile_path}")

    if not config.strict_profile:
        warnings.append("Strict profile validation is disabled; degenerate ranges will only be logged")

    if config.environment == "production" and config.simulator_seed is not None:
        warnings.append("Simulator seed is set in production")

    return warnings


def load_profile(config: EngineConfig) -> MetricProfile:
    """Return the metric profile named by ``config`` (defaults when no file is set)."""
    if not config.metric_profile_path:
        DEFAULT_METRIC_PROFILE.validate(strict=config.strict_profile)
        return DEFAULT_METRIC_PROFILE
    return load_metric_profile(config.metric_profile_path, strict=config.strict_profile)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Setup logging configuration."""
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when called repeatedly
    has_console = any(getattr(h, "name", "") == "agrisignal_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "agrisignal_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 so unit symbols render on Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "agrisignal_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if log_file and not has_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "agrisignal_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"agrisignal_console", "agrisignal_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))


def load_config() -> EngineConfig:
    """Helper for callers to load configuration, apply logging and report warnings."""
    config = EngineConfig()
    setup_logging(config.log_level, config.log_file or None)
    logger = logging.getLogger("config_loader")
    for warning in validate_config(config):
        logger.warning(warning)
    return config
