"""Tests for configuration settings."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from hdfcompat.config.settings import (
    DEFAULT_CONFIG_FILE,
    ConfigurationError,
    ReportingConfig,
    Settings,
    _apply_environment_overrides,
    _set_nested_attr,
    _settings_to_dict,
    _validate_config,
    get_config_path,
    load_config,
    save_config,
)

_ENV_VARS = (
    "HDFCOMPAT_CONFIG",
    "HDFCOMPAT_LOG_LEVEL",
    "HDFCOMPAT_OUTPUT_FORMAT",
    "HDFCOMPAT_OUTPUT_DIR",
)


def _clean_environ() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _ENV_VARS}


class TestSettingsDefaults(unittest.TestCase):
    """Tests for default settings values."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = Settings()

        self.assertEqual(settings.log_level, "INFO")
        self.assertIsInstance(settings.reporting, ReportingConfig)
        self.assertEqual(settings.reporting.format, "table")
        self.assertTrue(settings.reporting.include_finding_details)

    def test_reporting_not_shared(self) -> None:
        """Test that each Settings gets its own reporting config."""
        a = Settings()
        b = Settings()
        a.reporting.format = "json"

        self.assertEqual(b.reporting.format, "table")


class TestConfigPath(unittest.TestCase):
    """Tests for get_config_path."""

    def test_default_path(self) -> None:
        """Test the default path without environment override."""
        with patch.dict(os.environ, _clean_environ(), clear=True):
            self.assertEqual(get_config_path(), DEFAULT_CONFIG_FILE)

    def test_env_override(self) -> None:
        """Test HDFCOMPAT_CONFIG override."""
        with patch.dict(os.environ, {"HDFCOMPAT_CONFIG": "/tmp/custom.yaml"}):
            self.assertEqual(get_config_path(), Path("/tmp/custom.yaml"))


class TestLoadConfig(unittest.TestCase):
    """Tests for load_config and save_config."""

    def setUp(self) -> None:
        """Create a temporary directory and a clean environment."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "config.yaml"
        self.env_patch = patch.dict(os.environ, _clean_environ(), clear=True)
        self.env_patch.start()

    def tearDown(self) -> None:
        """Restore the environment and clean up."""
        self.env_patch.stop()
        self.temp_dir.cleanup()

    def test_missing_file_gives_defaults(self) -> None:
        """Test loading when the file does not exist."""
        settings = load_config(self.config_path)

        self.assertEqual(settings.log_level, "INFO")
        self.assertEqual(settings.reporting.format, "table")

    def test_load_values(self) -> None:
        """Test loading values from YAML."""
        self.config_path.write_text(
            "hdfcompat:\n"
            "  log_level: debug\n"
            "reporting:\n"
            "  format: JSON\n"
            "  include_finding_details: false\n"
            "  output_dir: /tmp/exports\n"
        )

        settings = load_config(self.config_path)

        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.reporting.format, "json")
        self.assertFalse(settings.reporting.include_finding_details)
        self.assertEqual(settings.reporting.output_dir, "/tmp/exports")

    def test_empty_file(self) -> None:
        """Test that an empty file gives defaults."""
        self.config_path.write_text("")

        self.assertEqual(load_config(self.config_path).log_level, "INFO")

    def test_invalid_yaml(self) -> None:
        """Test that malformed YAML raises ConfigurationError."""
        self.config_path.write_text("hdfcompat: [unclosed\n")

        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_non_mapping(self) -> None:
        """Test that a YAML list is rejected."""
        self.config_path.write_text("- one\n- two\n")

        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_invalid_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        self.config_path.write_text("hdfcompat:\n  log_level: LOUD\n")

        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_environment_overrides_file(self) -> None:
        """Test that environment variables win over the file."""
        self.config_path.write_text("reporting:\n  format: json\n")

        with patch.dict(
            os.environ,
            {"HDFCOMPAT_OUTPUT_FORMAT": "CSV", "HDFCOMPAT_LOG_LEVEL": "warning"},
        ):
            settings = load_config(self.config_path)

        self.assertEqual(settings.reporting.format, "csv")
        self.assertEqual(settings.log_level, "WARNING")

    def test_save_and_load(self) -> None:
        """Test that saved settings load back unchanged."""
        settings = Settings(log_level="ERROR")
        settings.reporting.format = "csv"
        settings.reporting.include_finding_details = False

        save_config(settings, self.config_path)
        loaded = load_config(self.config_path)

        self.assertEqual(loaded.log_level, "ERROR")
        self.assertEqual(loaded.reporting.format, "csv")
        self.assertFalse(loaded.reporting.include_finding_details)

    def test_save_creates_directory(self) -> None:
        """Test that save_config creates missing parent directories."""
        path = Path(self.temp_dir.name) / "nested" / "config.yaml"

        save_config(Settings(), path)

        self.assertTrue(path.exists())


class TestConfigHelpers(unittest.TestCase):
    """Tests for private configuration helpers."""

    def test_set_nested_attr(self) -> None:
        """Test setting a dotted attribute path."""
        settings = Settings()

        _set_nested_attr(settings, "reporting.output_dir", "/data")

        self.assertEqual(settings.reporting.output_dir, "/data")

    def test_apply_environment_overrides(self) -> None:
        """Test applying HDFCOMPAT_ variables."""
        with patch.dict(os.environ, {"HDFCOMPAT_OUTPUT_DIR": "/srv/out"}):
            settings = _apply_environment_overrides(Settings())

        self.assertEqual(settings.reporting.output_dir, "/srv/out")

    def test_validate_output_format(self) -> None:
        """Test that unknown output formats are rejected."""
        settings = Settings()
        settings.reporting.format = "xml"

        with self.assertRaises(ConfigurationError):
            _validate_config(settings)

    def test_settings_to_dict(self) -> None:
        """Test conversion to the YAML layout."""
        result = _settings_to_dict(Settings())

        self.assertEqual(result["hdfcompat"]["log_level"], "INFO")
        self.assertEqual(result["reporting"]["format"], "table")


if __name__ == "__main__":
    unittest.main()
