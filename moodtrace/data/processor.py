"""
Recorded sample log loading for the MoodTrace system.
"""
import logging
import os
from typing import List, Optional, Tuple
import pandas as pd
from .schemas import FeatureSample
from .validator import FeatureValidator


class SampleLoader:
    """Loads recorded listening samples from CSV for offline replay."""

    def __init__(self, validator: Optional[FeatureValidator] = None):
        self.validator = validator or FeatureValidator()
        self.logger = logging.getLogger(__name__)

    def load_frame(self, path: str) -> pd.DataFrame:
        """Load and schema-check a sample log.

        Args:
            path: Path to a CSV file with label, valence, energy[, tempo]

        Returns:
            Loaded DataFrame

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the CSV cannot be parsed or fails schema validation
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Sample log not found: {path}")
        try:
            df = pd.read_csv(path)
        except Exception as e:
            raise ValueError(f"Failed to load CSV file: {e}") from e
        validation_result = self.validator.validate_frame(df)
        if validation_result.has_errors():
            raise ValueError(
                "Sample log validation failed:\n" + "\n".join(validation_result.errors)
            )
        for warning in validation_result.warnings:
            self.logger.warning(warning)
        return df

    def to_samples(self, df: pd.DataFrame) -> List[Tuple[FeatureSample, str]]:
        """Convert validated rows into (sample, label) pairs, repairing bad values."""
        samples = []
        for row in df.to_dict(orient='records'):
            raw = {
                key: None if pd.isna(row.get(key)) else row.get(key)
                for key in ('valence', 'energy', 'tempo')
                if key in row
            }
            sample, _ = self.validator.validate_payload(raw)
            label = row.get('label')
            samples.append((sample, "" if pd.isna(label) else str(label)))
        return samples

    def load_csv(self, path: str) -> List[Tuple[FeatureSample, str]]:
        return self.to_samples(self.load_frame(path))
