"""
Ingestion boundary validation for the MoodTrace system.

Malformed feature values never reach the engine: missing values are
defaulted to the neutral midpoint and out-of-range values are clamped,
with every correction reported as a warning.
"""
import math
from typing import Any, Mapping, Optional, Tuple
import pandas as pd
from .schemas import (
    DEFAULT_TEMPO,
    NEUTRAL_FEATURE_VALUE,
    FeatureSample,
    ValidationResult,
)


class FeatureValidator:
    """Validates and repairs audio-feature payloads and recorded sample logs."""

    REQUIRED_COLUMNS = {'label', 'valence', 'energy'}
    OPTIONAL_COLUMNS = {'tempo'}

    FEATURE_RANGES = {
        'valence': (0.0, 1.0),
        'energy': (0.0, 1.0),
        'tempo': (0.0, 250.0),
    }

    def validate_payload(self, raw: Optional[Mapping[str, Any]]) -> Tuple[FeatureSample, ValidationResult]:
        """Turn a raw audio-features mapping into a FeatureSample.

        Args:
            raw: Mapping with 'valence', 'energy' and optionally 'tempo';
                may be None when the features request failed

        Returns:
            Tuple of the repaired FeatureSample and the ValidationResult
            listing every correction applied
        """
        result = ValidationResult(is_valid=True)
        raw = raw or {}
        valence = self._unit_value(raw, 'valence', result)
        energy = self._unit_value(raw, 'energy', result)
        tempo = self._coerce(raw.get('tempo'))
        if tempo is None or tempo <= 0:
            # A zero tempo means the analysis found no beat; treat it as missing.
            if 'tempo' in raw:
                result.add_warning(f"Invalid tempo {raw.get('tempo')!r}, using {DEFAULT_TEMPO}")
            tempo = DEFAULT_TEMPO
        result.metadata = {'corrections': len(result.warnings)}
        return FeatureSample(valence=valence, energy=energy, tempo=tempo), result

    def _unit_value(self, raw: Mapping[str, Any], name: str, result: ValidationResult) -> float:
        value = self._coerce(raw.get(name))
        if value is None:
            result.add_warning(f"Missing {name}, defaulting to {NEUTRAL_FEATURE_VALUE}")
            return NEUTRAL_FEATURE_VALUE
        min_val, max_val = self.FEATURE_RANGES[name]
        if value < min_val or value > max_val:
            clamped = max(min_val, min(max_val, value))
            result.add_warning(
                f"{name} {value} outside valid range [{min_val}, {max_val}], clamped to {clamped}"
            )
            return clamped
        return value

    @staticmethod
    def _coerce(value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return number

    def validate_frame(self, df: pd.DataFrame) -> ValidationResult:
        """Validate a recorded sample log before replay.

        Args:
            df: DataFrame with one row per sample

        Returns:
            ValidationResult; missing required columns are errors,
            unexpected columns and out-of-range values are warnings
        """
        result = ValidationResult(is_valid=True)
        missing_columns = self.REQUIRED_COLUMNS - set(df.columns)
        for col in sorted(missing_columns):
            result.add_error(f"Missing required column: {col}")
        extra_columns = set(df.columns) - self.REQUIRED_COLUMNS - self.OPTIONAL_COLUMNS
        for col in sorted(extra_columns):
            result.add_warning(f"Unexpected column found: {col}")
        for col, (min_val, max_val) in self.FEATURE_RANGES.items():
            if col not in df.columns:
                continue
            values = pd.to_numeric(df[col], errors='coerce')
            missing = int(values.isna().sum())
            if missing:
                result.add_warning(f"Column {col} has {missing} missing or non-numeric values")
            valid = values.dropna()
            out_of_range = valid[(valid < min_val) | (valid > max_val)]
            if len(out_of_range) > 0:
                result.add_warning(
                    f"Column {col} has {len(out_of_range)} values "
                    f"outside valid range [{min_val}, {max_val}]"
                )
        result.metadata = {
            'total_rows': len(df),
            'total_columns': len(df.columns),
            'missing_columns_count': len(missing_columns),
        }
        return result
