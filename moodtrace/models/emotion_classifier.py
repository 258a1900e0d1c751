"""
Emotion classification module for MoodTrace.
Quantizes a track's valence/energy into one of five mood categories.
"""
from typing import Optional
from ..data.schemas import EmotionLabel, EmotionState, FeatureSample


class EmotionClassifier:
    """Classifies a feature sample by comparing valence and energy to two cut points."""

    def __init__(self, low_threshold: float = 0.4, high_threshold: float = 0.6):
        """Initialize the classifier.

        Args:
            low_threshold: Values strictly below this count as low
            high_threshold: Values strictly above this count as high
        """
        if not (0.0 <= low_threshold <= high_threshold <= 1.0):
            raise ValueError("Thresholds must satisfy 0 <= low <= high <= 1")
        self.low = low_threshold
        self.high = high_threshold

    def classify(self, features: Optional[FeatureSample]) -> EmotionState:
        """Classify a sample's mood.

        Rules are checked in order and the first match wins. Values equal
        to a cut point are neither high nor low, so anything on or inside
        the [low, high] band on either axis falls through to Neutral.

        Args:
            features: Sample to classify; None yields Neutral

        Returns:
            EmotionState with the label's fixed score
        """
        if features is None:
            return EmotionState.neutral()
        valence = features.valence
        energy = features.energy
        if valence > self.high and energy > self.high:
            return EmotionState.for_label(EmotionLabel.HAPPY_EXCITED)
        if valence < self.low and energy < self.low:
            return EmotionState.for_label(EmotionLabel.SAD_MELANCHOLIC)
        if valence < self.low and energy > self.high:
            return EmotionState.for_label(EmotionLabel.ANXIOUS_TENSE)
        if valence > self.high and energy < self.low:
            return EmotionState.for_label(EmotionLabel.CALM_RELAXED)
        return EmotionState.neutral()


_default_classifier = EmotionClassifier()


def classify(features: Optional[FeatureSample]) -> EmotionState:
    return _default_classifier.classify(features)
