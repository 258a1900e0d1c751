"""
Baseline update and anomaly detection for MoodTrace.

The baseline is an exponential moving average of (valence, energy). Each new
sample is judged against the baseline as it stood *before* the sample was
folded in, then the baseline moves toward the sample by the learning rate.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from ..config.settings import EngineConfig
from ..data.history import SessionHistory
from ..data.schemas import Baseline, EmotionState
from ..models.emotion_classifier import EmotionClassifier
from .distance import DistanceCalculator


@dataclass(frozen=True)
class SampleAssessment:
    """Everything derived from one sample."""
    baseline: Baseline
    emotion: EmotionState
    anomalous: bool
    distance: float


_distance_calculator = DistanceCalculator()
_default_classifier = EmotionClassifier()


def update_baseline(baseline: Baseline, sample_point, learning_rate: float) -> Baseline:
    """One exponential smoothing step: b * (1 - a) + s * a."""
    updated = baseline.to_array() * (1 - learning_rate) + sample_point * learning_rate
    return Baseline.from_array(updated)


def assess_sample(history: SessionHistory, baseline: Baseline,
                  config: Optional[EngineConfig] = None,
                  classifier: Optional[EmotionClassifier] = None) -> SampleAssessment:
    """Classify the latest history entry and update the baseline.

    Args:
        history: Session history; only the last entry is read
        baseline: Baseline before this sample
        config: Learning rate and anomaly threshold
        classifier: Classifier to use, default cut points when omitted

    Returns:
        SampleAssessment with the updated baseline, the emotion state,
        the anomaly flag and the distance from the pre-update baseline

    Raises:
        ValueError: If the history is empty
    """
    config = config or EngineConfig()
    classifier = classifier or _default_classifier
    entry = history.latest()
    if entry is None:
        raise ValueError("Cannot assess a sample from an empty history")

    sample = entry.features
    emotion = classifier.classify(sample)
    point = sample.to_array()
    distance = _distance_calculator.euclidean_distance(point, baseline.to_array())
    updated = update_baseline(baseline, point, config.baseline_learning_rate)
    return SampleAssessment(
        baseline=updated,
        emotion=emotion,
        anomalous=distance > config.anomaly_threshold,
        distance=distance
    )


def on_new_sample(history: SessionHistory, baseline: Baseline,
                  config: Optional[EngineConfig] = None) -> Tuple[Baseline, EmotionState, bool]:
    assessment = assess_sample(history, baseline, config)
    return assessment.baseline, assessment.emotion, assessment.anomalous
