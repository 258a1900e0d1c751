"""
Pending-features tracking for MoodTrace.

Decides which poll results become samples. Each track moves through
UNKNOWN -> PLACEHOLDER/RESOLVED, and a track yields its real sample only
once, no matter how many polls see it playing.
"""
import logging
from typing import Optional, Tuple
from ..data.schemas import FeatureSample, FeatureStatus
from ..data.validator import FeatureValidator
from .source import PlaybackResult


class PlaybackTracker:
    """Suppresses duplicate samples for the track currently playing."""

    def __init__(self, validator: Optional[FeatureValidator] = None,
                 submit_placeholders: bool = False):
        """Initialize the tracker.

        Args:
            validator: Ingestion boundary validator
            submit_placeholders: Emit a neutral sample for tracks whose
                features are not available yet
        """
        self.validator = validator or FeatureValidator()
        self.submit_placeholders = submit_placeholders
        self.logger = logging.getLogger(__name__)
        self.current_track_id: Optional[str] = None
        self.status = FeatureStatus.UNKNOWN

    def observe(self, result: Optional[PlaybackResult]) -> Optional[Tuple[FeatureSample, str]]:
        """Fold one poll result into the tracker.

        Args:
            result: Poll result, None when nothing is playing

        Returns:
            (sample, label) when the poll should be submitted, otherwise None
        """
        if result is None:
            return None
        if not result.is_track:
            self.logger.debug(f"Skipping non-track item {result.track_id} ({result.item_type})")
            return None

        if result.track_id != self.current_track_id:
            self.current_track_id = result.track_id
            self.status = FeatureStatus.UNKNOWN

        if self.status is FeatureStatus.RESOLVED:
            return None

        if result.features is None:
            if self.status is FeatureStatus.PLACEHOLDER:
                return None
            self.status = FeatureStatus.PLACEHOLDER
            if self.submit_placeholders:
                return FeatureSample.placeholder(), result.label
            return None

        sample, validation = self.validator.validate_payload(result.features)
        for warning in validation.warnings:
            self.logger.warning(f"{result.track_id}: {warning}")
        self.status = FeatureStatus.RESOLVED
        return sample, result.label

    def forget(self) -> None:
        self.current_track_id = None
        self.status = FeatureStatus.UNKNOWN
