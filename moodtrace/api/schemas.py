"""
Pydantic schemas for the MoodTrace REST API.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ..data.schemas import SessionEntry
from ..engine.session import MoodSession


class SampleInput(BaseModel):
    """Audio features of one track.

    Values are repaired at the ingestion boundary rather than rejected:
    missing valence/energy become 0.5 and out-of-range values are clamped.
    """
    label: str = Field(
        min_length=1,
        description="Display name of the source track"
    )
    valence: Optional[float] = Field(
        default=None,
        description="Musical positivity (0.0-1.0)"
    )
    energy: Optional[float] = Field(
        default=None,
        description="Intensity and arousal (0.0-1.0)"
    )
    tempo: Optional[float] = Field(
        default=None,
        description="Tempo in BPM"
    )


class BaselineResponse(BaseModel):
    valence: float
    energy: float


class EmotionResponse(BaseModel):
    label: str
    score: float = Field(ge=0.0, le=1.0)


class StateResponse(BaseModel):
    """Current observable state of the session."""
    emotion: EmotionResponse
    anomalous: bool
    anomaly_state: str = Field(description="'stable' or 'shifted'")
    baseline: BaselineResponse
    last_distance: Optional[float] = Field(
        default=None,
        description="Distance of the latest sample from the pre-update baseline"
    )
    calibration_progress: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_session(cls, session: MoodSession) -> "StateResponse":
        emotion = session.latest_emotion_state()
        return cls(
            emotion=EmotionResponse(label=emotion.label.value, score=emotion.score),
            anomalous=session.is_anomalous(),
            anomaly_state=session.anomaly_state().value,
            baseline=BaselineResponse(**session.baseline_snapshot()),
            last_distance=session.last_distance(),
            calibration_progress=session.calibration_progress()
        )


class EntryResponse(BaseModel):
    """One history entry, ready for charting."""
    timestamp: str
    time_label: str
    label: str
    valence: float
    energy: float
    tempo: float
    mood_index: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_entry(cls, entry: SessionEntry) -> "EntryResponse":
        return cls(**entry.to_dict())


class HistoryResponse(BaseModel):
    entries: List[EntryResponse]
    capacity: int


class SubmitResponse(BaseModel):
    entry: EntryResponse
    state: StateResponse
    warnings: List[str] = Field(
        default_factory=list,
        description="Corrections applied to the submitted features"
    )


class HealthResponse(BaseModel):
    status: str
    version: str
    samples_seen: int
