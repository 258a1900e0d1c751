"""
API module for the MoodTrace REST API.
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import AppState
from .routes import router
from .schemas import (
    SampleInput,
    StateResponse,
    HistoryResponse,
    SubmitResponse,
    HealthResponse
)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """
    Create a FastAPI application around a mood session.

    Args:
        state: Application state; built from the default configuration when omitted

    Returns:
        Configured FastAPI application
    """
    state = state or AppState.from_config_path()
    app = FastAPI(
        title="MoodTrace",
        description="Listening-mood classification and baseline shift detection",
        version=state.config.versioning.version,
    )
    app.state.moodtrace = state
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api/v1")
    app.include_router(router)
    return app


__all__ = [
    "AppState",
    "create_app",
    "router",
    "SampleInput",
    "StateResponse",
    "HistoryResponse",
    "SubmitResponse",
    "HealthResponse"
]
