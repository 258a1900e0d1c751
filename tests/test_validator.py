"""
Tests for ingestion boundary validation and sample log loading.
"""

import pandas as pd
import pytest

from moodtrace.data.processor import SampleLoader
from moodtrace.data.validator import FeatureValidator


class TestValidatePayload:
    """Test suite for repairing raw feature payloads."""

    def setup_method(self):
        self.validator = FeatureValidator()

    def test_clean_payload(self):
        """Test that valid values pass through untouched."""
        sample, result = self.validator.validate_payload(
            {'valence': 0.31, 'energy': 0.72, 'tempo': 128.0, 'danceability': 0.5}
        )
        assert (sample.valence, sample.energy, sample.tempo) == (0.31, 0.72, 128.0)
        assert result.is_valid
        assert not result.has_warnings()

    def test_missing_values_default_to_midpoint(self):
        """Test that absent valence/energy become 0.5 with a warning each."""
        sample, result = self.validator.validate_payload({'tempo': 90})
        assert (sample.valence, sample.energy) == (0.5, 0.5)
        assert len(result.warnings) == 2

    def test_none_payload(self):
        """Test that a failed features request yields the neutral sample."""
        sample, _ = self.validator.validate_payload(None)
        assert (sample.valence, sample.energy, sample.tempo) == (0.5, 0.5, 120.0)

    def test_out_of_range_values_are_clamped(self):
        """Test clamping to the unit interval."""
        sample, result = self.validator.validate_payload({'valence': 1.4, 'energy': -0.2})
        assert sample.valence == 1.0
        assert sample.energy == 0.0
        assert result.has_warnings()
        assert result.is_valid

    @pytest.mark.parametrize("bad", ["high", float("nan"), True, [0.3]])
    def test_non_numeric_values_default(self, bad):
        """Test that garbage values are treated as missing."""
        sample, result = self.validator.validate_payload({'valence': bad, 'energy': 0.7})
        assert sample.valence == 0.5
        assert sample.energy == 0.7
        assert result.has_warnings()

    def test_numeric_strings_are_accepted(self):
        sample, _ = self.validator.validate_payload({'valence': "0.25", 'energy': "0.75"})
        assert (sample.valence, sample.energy) == (0.25, 0.75)

    def test_zero_tempo_defaults(self):
        sample, result = self.validator.validate_payload({'valence': 0.5, 'energy': 0.5, 'tempo': 0})
        assert sample.tempo == 120.0
        assert result.has_warnings()


class TestValidateFrame:
    """Test suite for recorded sample log validation."""

    def setup_method(self):
        self.validator = FeatureValidator()

    def test_missing_required_column(self):
        df = pd.DataFrame({'label': ['a'], 'valence': [0.3]})
        result = self.validator.validate_frame(df)
        assert not result.is_valid
        assert "Missing required column: energy" in result.errors

    def test_warnings_for_extra_and_out_of_range(self):
        df = pd.DataFrame({
            'label': ['a', 'b'],
            'valence': [0.3, 1.2],
            'energy': [0.4, None],
            'artist': ['x', 'y'],
        })
        result = self.validator.validate_frame(df)
        assert result.is_valid
        assert any("artist" in w for w in result.warnings)
        assert any("valence" in w and "outside" in w for w in result.warnings)
        assert any("energy" in w and "missing" in w for w in result.warnings)
        assert result.metadata['total_rows'] == 2


class TestSampleLoader:
    """Test suite for SampleLoader."""

    def test_load_csv(self, tmp_path):
        path = tmp_path / "log.csv"
        path.write_text(
            "label,valence,energy,tempo\n"
            "Rainy Day Jazz,0.2,0.3,70\n"
            "Happy Pop Hits,0.9,,120\n"
            "Loud,1.3,0.8,\n"
        )
        samples = SampleLoader().load_csv(str(path))
        assert [label for _, label in samples] == ["Rainy Day Jazz", "Happy Pop Hits", "Loud"]
        assert samples[0][0].tempo == 70.0
        assert samples[1][0].energy == 0.5
        assert samples[2][0].valence == 1.0
        assert samples[2][0].tempo == 120.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SampleLoader().load_csv(str(tmp_path / "nope.csv"))

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("name,valence\nx,0.2\n")
        with pytest.raises(ValueError, match="validation failed"):
            SampleLoader().load_csv(str(path))
