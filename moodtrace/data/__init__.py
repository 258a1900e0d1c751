"""
Data module for MoodTrace.

This module provides the sample and history schemas, the rolling session
history, ingestion-boundary validation and recorded sample log loading.
"""

from .schemas import (
    FeatureSample,
    SessionEntry,
    Baseline,
    EmotionLabel,
    EmotionState,
    AnomalyState,
    FeatureStatus,
    JournalPrompt,
    JournalEntry,
    ValidationResult
)
from .history import SessionHistory
from .validator import FeatureValidator
from .processor import SampleLoader

__all__ = [
    'FeatureSample',
    'SessionEntry',
    'Baseline',
    'EmotionLabel',
    'EmotionState',
    'AnomalyState',
    'FeatureStatus',
    'JournalPrompt',
    'JournalEntry',
    'ValidationResult',
    'SessionHistory',
    'FeatureValidator',
    'SampleLoader'
]
