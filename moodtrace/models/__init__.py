"""
Classification models for MoodTrace.
"""

from .emotion_classifier import EmotionClassifier, classify

__all__ = [
    'EmotionClassifier',
    'classify'
]
