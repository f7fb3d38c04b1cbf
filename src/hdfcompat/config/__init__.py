"""
Configuration management for hdfcompat.

This module handles loading, validating, and saving configuration settings.
"""

from hdfcompat.config.settings import (
    ConfigurationError,
    ReportingConfig,
    Settings,
    load_config,
    save_config,
)

__all__ = [
    "Settings",
    "ReportingConfig",
    "load_config",
    "save_config",
    "ConfigurationError",
]
