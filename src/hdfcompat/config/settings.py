"""
Configuration settings management for hdfcompat.

This module handles loading, validating, and saving configuration settings
from YAML files with support for environment variable overrides.

Configuration is loaded from ~/.hdfcompat/config.yaml by default, with the
path overridable via the HDFCOMPAT_CONFIG environment variable.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Default configuration directory
DEFAULT_CONFIG_DIR = Path.home() / ".hdfcompat"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_OUTPUT_FORMATS = {"table", "json", "csv"}


@dataclass
class ReportingConfig:
    """Reporting settings."""

    format: str = "table"
    include_finding_details: bool = True
    output_dir: str = str(DEFAULT_CONFIG_DIR / "reports")


@dataclass
class Settings:
    """
    Complete hdfcompat configuration settings.

    Settings are loaded from a YAML configuration file and can be overridden
    by environment variables prefixed with HDFCOMPAT_.

    Attributes:
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR).
        reporting: Report and export settings.
    """

    log_level: str = "INFO"
    reporting: ReportingConfig = field(default_factory=ReportingConfig)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


def get_config_path() -> Path:
    """
    Get the configuration file path.

    Returns the path from HDFCOMPAT_CONFIG environment variable if set,
    otherwise returns the default path (~/.hdfcompat/config.yaml).

    Returns:
        Path to the configuration file.
    """
    env_path = os.environ.get("HDFCOMPAT_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def load_config(config_path: Path | None = None) -> Settings:
    """
    Load configuration from YAML file.

    Reads configuration from the specified path (or default if not provided),
    applies environment variable overrides, and validates the configuration.
    A missing file yields the defaults.

    Args:
        config_path: Optional path to configuration file. If not provided,
                    uses HDFCOMPAT_CONFIG environment variable or default path.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the configuration file cannot be read or
                          contains invalid settings.
    """
    if config_path is None:
        config_path = get_config_path()

    settings = Settings()

    if config_path.exists():
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError("Config file must contain a mapping")

        settings = _apply_config_data(settings, config_data)

    settings = _apply_environment_overrides(settings)

    _validate_config(settings)

    return settings


def save_config(settings: Settings, config_path: Path | None = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        settings: Settings instance to save.
        config_path: Optional path to configuration file.

    Raises:
        ConfigurationError: If the configuration cannot be written.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_data = _settings_to_dict(settings)

    try:
        with open(config_path, "w") as f:
            yaml.safe_dump(config_data, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigurationError(f"Cannot write config file: {e}") from e


def _apply_config_data(settings: Settings, data: dict[str, Any]) -> Settings:
    """Apply configuration data from parsed YAML to settings."""
    core = data.get("hdfcompat") or {}
    if "log_level" in core:
        settings.log_level = str(core["log_level"]).upper()

    reporting = data.get("reporting") or {}
    if "format" in reporting:
        settings.reporting.format = str(reporting["format"]).lower()
    if "include_finding_details" in reporting:
        settings.reporting.include_finding_details = bool(
            reporting["include_finding_details"]
        )
    if "output_dir" in reporting:
        settings.reporting.output_dir = str(reporting["output_dir"])

    return settings


def _apply_environment_overrides(settings: Settings) -> Settings:
    """Apply environment variable overrides to settings."""
    env_map: dict[str, tuple[str, Callable[[str], Any]]] = {
        "HDFCOMPAT_LOG_LEVEL": ("log_level", lambda x: x.upper()),
        "HDFCOMPAT_OUTPUT_FORMAT": ("reporting.format", lambda x: x.lower()),
        "HDFCOMPAT_OUTPUT_DIR": ("reporting.output_dir", str),
    }

    for env_var, (attr_path, converter) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested_attr(settings, attr_path, converter(value))

    return settings


def _set_nested_attr(obj: Any, path: str, value: Any) -> None:
    """Set a nested attribute on an object using dot notation."""
    parts = path.split(".")
    for part in parts[:-1]:
        obj = getattr(obj, part)
    setattr(obj, parts[-1], value)


def _validate_config(settings: Settings) -> None:
    """
    Validate configuration settings.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    if settings.log_level not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid log_level: {settings.log_level}. "
            f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    if settings.reporting.format not in VALID_OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid output format: {settings.reporting.format}. "
            f"Must be one of: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings instance to dictionary for YAML serialization."""
    return {
        "hdfcompat": {
            "log_level": settings.log_level,
        },
        "reporting": {
            "format": settings.reporting.format,
            "include_finding_details": settings.reporting.include_finding_details,
            "output_dir": settings.reporting.output_dir,
        },
    }
