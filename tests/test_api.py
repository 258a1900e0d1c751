"""
End-to-end tests for the MoodTrace REST API.
"""

import math

import pytest
from fastapi.testclient import TestClient

from moodtrace.api import AppState, create_app
from moodtrace.config.settings import AppConfig


class TestAPI:
    """Integration tests driving a session through HTTP."""

    def setup_method(self):
        """Set up a fresh app around a new session for each test."""
        self.state = AppState(config=AppConfig())
        self.app = create_app(self.state)

    def test_health(self):
        with TestClient(self.app) as client:
            response = client.get("/health")
            assert response.status_code == 200
            body = response.json()
            assert body["status"] == "healthy"
            assert body["version"] == "0.1.0"
            assert body["samples_seen"] == 0

    def test_initial_state(self):
        """Test the neutral state before any sample."""
        with TestClient(self.app) as client:
            body = client.get("/state").json()
            assert body["emotion"] == {"label": "Neutral", "score": 0.5}
            assert body["anomalous"] is False
            assert body["anomaly_state"] == "stable"
            assert body["baseline"] == {"valence": 0.5, "energy": 0.5}
            assert body["last_distance"] is None

    def test_complete_workflow(self):
        """Test submit -> state -> history -> acknowledge."""
        with TestClient(self.app) as client:
            response = client.post(
                "/samples",
                json={"label": "Rainy Day Jazz", "valence": 0.2, "energy": 0.3, "tempo": 70}
            )
            assert response.status_code == 200
            body = response.json()
            assert body["entry"]["label"] == "Rainy Day Jazz"
            assert body["entry"]["mood_index"] == pytest.approx(0.25)
            assert body["state"]["emotion"]["label"] == "Sad/Melancholic"
            assert body["state"]["anomalous"] is True
            assert body["state"]["last_distance"] == pytest.approx(math.sqrt(0.13))
            assert body["warnings"] == []

            state = client.get("/state").json()
            assert state["baseline"]["valence"] == pytest.approx(0.47)
            assert state["baseline"]["energy"] == pytest.approx(0.48)

            history = client.get("/history").json()
            assert history["capacity"] == 20
            assert [e["label"] for e in history["entries"]] == ["Rainy Day Jazz"]

            acknowledged = client.post("/anomaly/acknowledge").json()
            assert acknowledged["anomalous"] is False
            assert acknowledged["baseline"] == state["baseline"]

    def test_submit_repairs_features(self):
        """Test that bad features are clamped or defaulted with warnings."""
        with TestClient(self.app) as client:
            response = client.post("/samples", json={"label": "Loud", "valence": 1.7})
            assert response.status_code == 200
            body = response.json()
            assert body["entry"]["valence"] == 1.0
            assert body["entry"]["energy"] == 0.5
            assert body["entry"]["tempo"] == 120.0
            assert len(body["warnings"]) == 2

    def test_submit_requires_label(self):
        with TestClient(self.app) as client:
            response = client.post("/samples", json={"label": "", "valence": 0.3})
            assert response.status_code == 422

    def test_history_is_bounded(self):
        with TestClient(self.app) as client:
            for i in range(22):
                client.post("/samples", json={"label": f"t{i}", "valence": 0.5, "energy": 0.5})
            history = client.get("/history").json()
            assert len(history["entries"]) == 20
            assert history["entries"][0]["label"] == "t2"
            assert client.get("/health").json()["samples_seen"] == 22

    def test_versioned_prefix(self):
        with TestClient(self.app) as client:
            client.post("/api/v1/samples", json={"label": "x", "valence": 0.9, "energy": 0.9})
            assert client.get("/api/v1/state").json()["emotion"]["label"] == "Happy/Excited"
            assert len(client.get("/history").json()["entries"]) == 1
