"""
Configuration module for MoodTrace.
"""

from .settings import (
    AppConfig,
    ConfigManager,
    ConfigValidationError,
    DEFAULT_CONFIG_PATH,
    EngineConfig,
)

__all__ = [
    'AppConfig',
    'ConfigManager',
    'ConfigValidationError',
    'DEFAULT_CONFIG_PATH',
    'EngineConfig',
]
