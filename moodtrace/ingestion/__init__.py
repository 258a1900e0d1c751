"""
Ingestion module for MoodTrace.

Turns playback polls into feature samples: source protocol and errors,
pending-features tracking and the polling driver.
"""

from .source import (
    PlaybackResult,
    PlaybackSource,
    IngestionError,
    SourceUnavailableError,
    SourceDisconnectedError
)
from .tracker import PlaybackTracker
from .poller import SamplePoller

__all__ = [
    'PlaybackResult',
    'PlaybackSource',
    'IngestionError',
    'SourceUnavailableError',
    'SourceDisconnectedError',
    'PlaybackTracker',
    'SamplePoller'
]
