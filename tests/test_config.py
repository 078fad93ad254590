"""Tests for settings and logging setup."""

import structlog

from py_spiderfy.config import Settings
from py_spiderfy.core import SynthesizerOptions
from py_spiderfy.logging_config import configure_logging


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self):
        """Test default settings values."""
        config = Settings(_env_file=None)

        assert config.spiderfy_radius == 30.0
        assert config.jitter_factor == 0.00001
        assert config.search_limit == 50
        assert (config.lon_min, config.lon_max) == (-1.6, -0.8)
        assert (config.lat_min, config.lat_max) == (37.5, 38.2)
        assert config.coordinate_precision == 6

    def test_env_override(self, monkeypatch):
        """Test SPIDERFY_ environment overrides."""
        monkeypatch.setenv("SPIDERFY_SPIDERFY_RADIUS", "12.5")
        monkeypatch.setenv("SPIDERFY_LOG_FORMAT", "json")

        config = Settings(_env_file=None)
        assert config.spiderfy_radius == 12.5
        assert config.log_format == "json"

    def test_synthesizer_options_follow_settings(self, monkeypatch):
        """Test SynthesizerOptions.from_settings."""
        from py_spiderfy.config import settings

        monkeypatch.setattr(settings, "lon_min", 0.0)
        monkeypatch.setattr(settings, "lon_max", 1.0)
        monkeypatch.setattr(settings, "coordinate_precision", 3)
        options = SynthesizerOptions.from_settings()

        assert options.bounds.lon_min == 0.0
        assert options.bounds.lon_max == 1.0
        assert options.precision == 3


class TestLogging:
    """Test structlog configuration."""

    def test_configure_json(self):
        """Test JSON logging configuration."""
        configure_logging("DEBUG", "json")
        assert structlog.is_configured()
        structlog.get_logger().info("Logging configured", fmt="json")

    def test_configure_console(self):
        """Test console logging configuration."""
        configure_logging("INFO", "console")
        assert structlog.is_configured()
