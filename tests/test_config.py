"""
Tests for configuration loading and validation.
"""

import pytest

from moodtrace.config.settings import (
    AppConfig,
    ConfigManager,
    ConfigValidationError,
    DEFAULT_CONFIG_PATH,
)


class TestConfigManager:
    """Test suite for ConfigManager."""

    def setup_method(self):
        self.manager = ConfigManager()

    def test_packaged_default(self):
        """Test that the shipped YAML matches the dataclass defaults."""
        assert DEFAULT_CONFIG_PATH.exists()
        config = self.manager.load()
        assert config == AppConfig()
        assert config.engine.baseline_learning_rate == 0.1
        assert config.engine.anomaly_threshold == 0.35
        assert config.history.capacity == 20

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("engine:\n  anomaly_threshold: 0.5\n")
        config = self.manager.load(str(path))
        assert config.engine.anomaly_threshold == 0.5
        assert config.engine.baseline_learning_rate == 0.1
        assert config.logging.level == "INFO"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert self.manager.load(str(path)) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            self.manager.load(str(tmp_path / "missing.yaml"))

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test that MOODTRACE_* variables win over the file."""
        path = tmp_path / "config.yaml"
        path.write_text("engine:\n  baseline_learning_rate: 0.2\n")
        monkeypatch.setenv("MOODTRACE_LEARNING_RATE", "0.3")
        monkeypatch.setenv("MOODTRACE_HISTORY_CAPACITY", "50")
        monkeypatch.setenv("MOODTRACE_LOG_FORMAT", "text")
        config = self.manager.load(str(path))
        assert config.engine.baseline_learning_rate == 0.3
        assert config.history.capacity == 50
        assert config.logging.format == "text"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("MOODTRACE_HISTORY_CAPACITY", "many")
        with pytest.raises(ConfigValidationError):
            self.manager.load()

    def test_validation_collects_all_errors(self, tmp_path):
        """Test that every invalid value is reported in one error."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            "engine:\n"
            "  baseline_learning_rate: 0\n"
            "  anomaly_threshold: -1\n"
            "classifier:\n"
            "  low_threshold: 0.7\n"
            "  high_threshold: 0.3\n"
            "logging:\n"
            "  format: xml\n"
        )
        with pytest.raises(ConfigValidationError) as excinfo:
            self.manager.load(str(path))
        message = str(excinfo.value)
        assert "baseline_learning_rate" in message
        assert "anomaly_threshold" in message
        assert "Classifier thresholds" in message
        assert "format" in message

    def test_learning_rate_of_one_is_valid(self):
        config = AppConfig()
        config.engine.baseline_learning_rate = 1.0
        assert self.manager.validate(config)

    def test_config_property_requires_load(self):
        with pytest.raises(RuntimeError):
            self.manager.config
