"""
Baseline tracking and anomaly detection for MoodTrace.
"""

from .anomaly import SampleAssessment, assess_sample, on_new_sample, update_baseline
from .distance import DistanceCalculator
from .session import MoodSession

__all__ = [
    'SampleAssessment',
    'assess_sample',
    'on_new_sample',
    'update_baseline',
    'DistanceCalculator',
    'MoodSession'
]
