"""
MoodTrace REST API Server

Run the server with:
    python api.py

Or with uvicorn directly:
    uvicorn api:app --reload --host 0.0.0.0 --port 8000

Set MOODTRACE_CONFIG to load a configuration file other than the packaged default.
"""
import os

from moodtrace.api import AppState, create_app


app = create_app(AppState.from_config_path(os.getenv("MOODTRACE_CONFIG")))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
