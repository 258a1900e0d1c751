"""
FastAPI dependency injection for MoodTrace.
"""
from typing import Optional

from fastapi import Request

from ..config.settings import ConfigManager, AppConfig
from ..data.validator import FeatureValidator
from ..engine.session import MoodSession
from ..utils.logging import StructuredLogger


class AppState:
    """Everything the API needs: configuration, logger and the mood session."""

    def __init__(self, config: Optional[AppConfig] = None,
                 session: Optional[MoodSession] = None,
                 logger: Optional[StructuredLogger] = None):
        self.config = config or (session.config if session else AppConfig())
        self.logger = logger or StructuredLogger(
            "moodtrace.api",
            level=self.config.logging.level,
            format=self.config.logging.format
        )
        self.session = session or MoodSession(self.config)
        self.validator = FeatureValidator()

    @classmethod
    def from_config_path(cls, config_path: Optional[str] = None) -> "AppState":
        """Load configuration from YAML and build a fresh session."""
        config = ConfigManager().load(config_path)
        state = cls(config=config)
        state.logger.info("MoodTrace API initialized", version=config.versioning.version)
        return state


def get_app_state(request: Request) -> AppState:
    return request.app.state.moodtrace


def get_session(request: Request) -> MoodSession:
    return get_app_state(request).session
