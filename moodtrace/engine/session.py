"""
Mood session for MoodTrace.

A MoodSession is the explicit context that owns the rolling history, the
personal baseline and the current emotion/anomaly state. Several sessions can
live side by side; nothing here is global.
"""
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional
from ..config.settings import AppConfig
from ..data.history import SessionHistory
from ..data.schemas import (
    AnomalyState,
    Baseline,
    EmotionState,
    FeatureSample,
    JournalPrompt,
    SessionEntry,
)
from ..models.emotion_classifier import EmotionClassifier
from ..utils.logging import StructuredLogger
from .anomaly import assess_sample
from .distance import DistanceCalculator


Clock = Callable[[], datetime]
PromptListener = Callable[[JournalPrompt], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MoodSession:
    """Drives classification, baseline tracking and anomaly detection for one user."""

    def __init__(self, config: Optional[AppConfig] = None, clock: Optional[Clock] = None,
                 logger: Optional[StructuredLogger] = None):
        """Initialize a session.

        Args:
            config: Application configuration, defaults when omitted
            clock: Returns the ingestion timestamp of each sample
            logger: Structured logger instance
        """
        self.config = config or AppConfig()
        self.clock = clock or utc_now
        # One stdlib logger per session.
        self.logger = logger or StructuredLogger(
            f"{__name__}.{id(self):x}",
            level=self.config.logging.level,
            format=self.config.logging.format
        )
        self.classifier = EmotionClassifier(
            self.config.classifier.low_threshold,
            self.config.classifier.high_threshold
        )
        self.history = SessionHistory(self.config.history.capacity)
        self._distance = DistanceCalculator()
        self._baseline = Baseline()
        self._emotion = EmotionState.neutral()
        self._anomalous = False
        self._last_distance: Optional[float] = None
        self._listeners: List[PromptListener] = []

    def submit_sample(self, features: FeatureSample, label: str) -> SessionEntry:
        """Append a sample and update baseline, emotion and anomaly state.

        Listeners receive a JournalPrompt after the new state is in place,
        so a listener reading the session sees the post-sample state.

        Args:
            features: Validated feature sample
            label: Display string of the source track

        Returns:
            The appended SessionEntry
        """
        previous_baseline = self._baseline
        entry = self.history.append(features, label, self.clock())
        assessment = assess_sample(
            self.history, previous_baseline, self.config.engine, self.classifier
        )
        was_anomalous = self._anomalous

        self._baseline = assessment.baseline
        self._emotion = assessment.emotion
        self._anomalous = assessment.anomalous
        self._last_distance = assessment.distance

        self.logger.debug(
            "Sample processed",
            track=label,
            emotion=assessment.emotion.label.value,
            distance=assessment.distance,
            anomalous=assessment.anomalous,
            baseline=assessment.baseline.to_dict()
        )
        relative = self._distance.relative_distance(
            features.to_array(), previous_baseline.to_array()
        )
        self.logger.metric(
            "baseline_distance",
            assessment.distance,
            tags={"relative": f"{relative:.3f}"}
        )
        if assessment.anomalous != was_anomalous:
            self.logger.info(
                "Anomaly state changed",
                state=self.anomaly_state().value,
                track=label,
                distance=assessment.distance,
                threshold=self.config.engine.anomaly_threshold
            )

        if assessment.anomalous:
            prompt = JournalPrompt(
                timestamp=entry.timestamp,
                track_label=label,
                emotion=assessment.emotion,
                distance=assessment.distance,
                baseline=previous_baseline
            )
            for listener in list(self._listeners):
                listener(prompt)
        return entry

    def latest_emotion_state(self) -> EmotionState:
        return self._emotion

    def is_anomalous(self) -> bool:
        return self._anomalous

    def anomaly_state(self) -> AnomalyState:
        return AnomalyState.SHIFTED if self._anomalous else AnomalyState.STABLE

    def baseline_snapshot(self) -> Dict[str, float]:
        return self._baseline.to_dict()

    @property
    def baseline(self) -> Baseline:
        return self._baseline

    def history_snapshot(self) -> List[SessionEntry]:
        return self.history.all()

    def last_distance(self) -> Optional[float]:
        return self._last_distance

    def add_listener(self, listener: PromptListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: PromptListener) -> None:
        self._listeners.remove(listener)

    def acknowledge_anomaly(self) -> None:
        """Clear the anomaly flag once the user has answered a prompt."""
        if self._anomalous:
            self.logger.info("Anomaly acknowledged", state=AnomalyState.STABLE.value)
        self._anomalous = False

    def calibration_progress(self) -> float:
        """Fraction of the calibration target seen so far, capped at 1."""
        target = self.config.calibration.target_samples
        return min(1.0, self.history.total_appended / target)

    def reset(self, clear_baseline: bool = False) -> None:
        """Drop history and current state, e.g. after the source disconnects.

        Args:
            clear_baseline: Also return the baseline to its neutral start
        """
        self.history.clear()
        self._emotion = EmotionState.neutral()
        self._anomalous = False
        self._last_distance = None
        if clear_baseline:
            self._baseline = Baseline()
        self.logger.info("Session reset", baseline_cleared=clear_baseline)
