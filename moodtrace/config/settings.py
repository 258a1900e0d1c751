"""
Configuration management for MoodTrace.

Provides centralized configuration loading, validation, and environment variable overrides.
"""

import os
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
from pathlib import Path


DEFAULT_CONFIG_PATH = Path(__file__).with_name("default_config.yaml")


@dataclass
class EngineConfig:
    """Tunables of the baseline/anomaly engine."""
    baseline_learning_rate: float = 0.1
    anomaly_threshold: float = 0.35


@dataclass
class HistoryConfig:
    capacity: int = 20


@dataclass
class ClassifierConfig:
    """Cut points of the valence/energy mood quantization."""
    low_threshold: float = 0.4
    high_threshold: float = 0.6


@dataclass
class PollingConfig:
    """Configuration for the playback polling driver."""
    interval_seconds: float = 5.0
    submit_placeholders: bool = False
    reset_on_disconnect: bool = True


@dataclass
class CalibrationConfig:
    target_samples: int = 50


@dataclass
class LoggingConfig:
    """Configuration for logging parameters."""
    level: str = "INFO"
    format: str = "json"


@dataclass
class VersioningConfig:
    version: str = "0.1.0"


@dataclass
class AppConfig:
    """Main application configuration containing all sub-configurations."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    versioning: VersioningConfig = field(default_factory=VersioningConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    'MOODTRACE_LEARNING_RATE': ('engine', 'baseline_learning_rate', float),
    'MOODTRACE_ANOMALY_THRESHOLD': ('engine', 'anomaly_threshold', float),
    'MOODTRACE_HISTORY_CAPACITY': ('history', 'capacity', int),
    'MOODTRACE_POLL_INTERVAL': ('polling', 'interval_seconds', float),
    'MOODTRACE_LOG_LEVEL': ('logging', 'level', str),
    'MOODTRACE_LOG_FORMAT': ('logging', 'format', str),
}


class ConfigManager:
    """Manages application configuration loading, validation, and environment overrides."""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def load(self, config_path: Optional[str] = None) -> AppConfig:
        """
        Load configuration from YAML file with environment variable overrides.

        Args:
            config_path: Path to the YAML configuration file. The packaged
                default configuration is used when omitted.

        Returns:
            AppConfig: Loaded and validated configuration

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_file = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        config_data = self._apply_env_overrides(config_data)
        config = self.from_dict(config_data)
        self.validate(config)

        self._config = config
        return config

    @staticmethod
    def from_dict(config_data: Dict[str, Any]) -> AppConfig:
        """Create AppConfig from dictionary data, falling back to defaults per key."""
        sections = {
            'engine': EngineConfig,
            'history': HistoryConfig,
            'classifier': ClassifierConfig,
            'polling': PollingConfig,
            'calibration': CalibrationConfig,
            'logging': LoggingConfig,
            'versioning': VersioningConfig,
        }
        built = {}
        for name, section_cls in sections.items():
            section_data = config_data.get(name) or {}
            defaults = section_cls()
            known = {
                key: section_data.get(key, value)
                for key, value in asdict(defaults).items()
            }
            built[name] = section_cls(**known)
        return AppConfig(**built)

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration data."""
        for env_var, (section, key, cast) in ENV_OVERRIDES.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            try:
                value = cast(env_value)
            except ValueError as e:
                raise ConfigValidationError(
                    f"Invalid value for {env_var}: {env_value!r}"
                ) from e
            config_data.setdefault(section, {})
            if config_data[section] is None:
                config_data[section] = {}
            config_data[section][key] = value
        return config_data

    def validate(self, config: AppConfig) -> bool:
        """
        Validate configuration values.

        Args:
            config: Configuration to validate

        Returns:
            bool: True if valid

        Raises:
            ConfigValidationError: If validation fails
        """
        errors = []

        rate = config.engine.baseline_learning_rate
        if not (0.0 < rate <= 1.0):
            errors.append("Engine baseline_learning_rate must be in (0.0, 1.0]")

        if config.engine.anomaly_threshold <= 0:
            errors.append("Engine anomaly_threshold must be positive")

        if config.history.capacity <= 0:
            errors.append("History capacity must be positive")

        low = config.classifier.low_threshold
        high = config.classifier.high_threshold
        if not (0.0 <= low <= high <= 1.0):
            errors.append("Classifier thresholds must satisfy 0 <= low <= high <= 1")

        if config.polling.interval_seconds <= 0:
            errors.append("Polling interval_seconds must be positive")

        if config.calibration.target_samples <= 0:
            errors.append("Calibration target_samples must be positive")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.logging.level.upper() not in valid_log_levels:
            errors.append(f"Logging level must be one of: {valid_log_levels}")

        if config.logging.format not in ['json', 'text']:
            errors.append("Logging format must be 'json' or 'text'")

        if not config.versioning.version:
            errors.append("Version cannot be empty")

        if errors:
            raise ConfigValidationError(f"Configuration validation failed: {'; '.join(errors)}")

        return True
