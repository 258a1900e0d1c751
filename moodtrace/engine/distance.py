"""
Distance calculation module for MoodTrace.
"""
import numpy as np


class DistanceCalculator:
    """Measures how far a sample sits from the baseline in feature space."""

    def euclidean_distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        """Calculate Euclidean distance between two vectors.

        Args:
            v1: First vector (numpy array)
            v2: Second vector (numpy array)

        Returns:
            Euclidean distance (non-negative float)

        Raises:
            ValueError: If vectors have different shapes
        """
        if v1.shape != v2.shape:
            raise ValueError(f"Vector dimensions must match: {v1.shape} vs {v2.shape}")
        return float(np.linalg.norm(v1 - v2))

    def max_distance(self, dimensions: int = 2) -> float:
        """Diagonal of the unit hypercube, the largest possible distance."""
        return float(np.sqrt(dimensions))

    def relative_distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        """Distance as a fraction of the unit-cube diagonal, in [0, 1]."""
        return self.euclidean_distance(v1, v2) / self.max_distance(v1.shape[0])
