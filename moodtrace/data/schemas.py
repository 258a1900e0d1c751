"""
Data schemas for the MoodTrace system.

This module contains dataclasses that define the structure of data
used throughout the system, from raw audio-feature samples to the
session history and the events raised on a mood shift.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional, List
import numpy as np


NEUTRAL_FEATURE_VALUE = 0.5
DEFAULT_TEMPO = 120.0


@dataclass(frozen=True)
class FeatureSample:
    """One observation of a track's acoustic character"""
    valence: float      # Positivity, [0, 1]
    energy: float       # Intensity/arousal, [0, 1]
    tempo: float = DEFAULT_TEMPO  # BPM, descriptive only

    @property
    def mood_index(self) -> float:
        return (self.valence + self.energy) / 2

    def to_array(self) -> np.ndarray:
        """Point in the (valence, energy) unit square"""
        return np.array([self.valence, self.energy], dtype=float)

    @classmethod
    def placeholder(cls) -> 'FeatureSample':
        """Neutral sample used when a track's features are unavailable"""
        return cls(valence=NEUTRAL_FEATURE_VALUE, energy=NEUTRAL_FEATURE_VALUE)


@dataclass(frozen=True)
class SessionEntry:
    """One history record; immutable once appended"""
    timestamp: datetime
    label: str
    features: FeatureSample
    mood_index: float

    @property
    def time_label(self) -> str:
        return self.timestamp.strftime("%H:%M:%S")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'time_label': self.time_label,
            'label': self.label,
            'valence': self.features.valence,
            'energy': self.features.energy,
            'tempo': self.features.tempo,
            'mood_index': self.mood_index,
        }


@dataclass(frozen=True)
class Baseline:
    """Running estimate of the user's typical (valence, energy)"""
    valence: float = NEUTRAL_FEATURE_VALUE
    energy: float = NEUTRAL_FEATURE_VALUE

    def to_array(self) -> np.ndarray:
        return np.array([self.valence, self.energy], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Baseline':
        if len(arr) != 2:
            raise ValueError(f"Expected array of length 2, got {len(arr)}")
        return cls(valence=float(arr[0]), energy=float(arr[1]))

    def to_dict(self) -> Dict[str, float]:
        return {'valence': self.valence, 'energy': self.energy}


class EmotionLabel(str, Enum):
    HAPPY_EXCITED = "Happy/Excited"
    SAD_MELANCHOLIC = "Sad/Melancholic"
    ANXIOUS_TENSE = "Anxious/Tense"
    CALM_RELAXED = "Calm/Relaxed"
    NEUTRAL = "Neutral"


LABEL_SCORES = {
    EmotionLabel.HAPPY_EXCITED: 0.9,
    EmotionLabel.SAD_MELANCHOLIC: 0.2,
    EmotionLabel.ANXIOUS_TENSE: 0.3,
    EmotionLabel.CALM_RELAXED: 0.8,
    EmotionLabel.NEUTRAL: 0.5,
}


@dataclass(frozen=True)
class EmotionState:
    """Mood category of the latest sample with its fixed representative score"""
    label: EmotionLabel
    score: float

    @classmethod
    def for_label(cls, label: EmotionLabel) -> 'EmotionState':
        return cls(label=label, score=LABEL_SCORES[label])

    @classmethod
    def neutral(cls) -> 'EmotionState':
        return cls.for_label(EmotionLabel.NEUTRAL)


class AnomalyState(Enum):
    STABLE = "stable"
    SHIFTED = "shifted"


class FeatureStatus(Enum):
    """Resolution state of the audio features of the track being played"""
    UNKNOWN = "unknown"
    PLACEHOLDER = "placeholder"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class JournalPrompt:
    """Raised when a sample lands too far from the pre-update baseline"""
    timestamp: datetime
    track_label: str
    emotion: EmotionState
    distance: float
    baseline: Baseline


@dataclass(frozen=True)
class JournalEntry:
    """User reflection written in answer to a JournalPrompt"""
    created_at: datetime
    text: str
    trigger_track: str
    detected_emotion: EmotionLabel

    @classmethod
    def from_prompt(cls, prompt: JournalPrompt, text: str,
                    created_at: Optional[datetime] = None) -> 'JournalEntry':
        if not text or not text.strip():
            raise ValueError("Journal text cannot be blank")
        return cls(
            created_at=created_at or prompt.timestamp,
            text=text,
            trigger_track=prompt.track_label,
            detected_emotion=prompt.emotion.label
        )


@dataclass
class ValidationResult:
    """Result of data validation operations"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
