"""Inverse-power distance weighting."""

import math

import numpy as np

from holefill.errors import InvalidConfigurationError
from holefill.grid import Coordinate


class WeightFunction:
    """``w(p1, p2) = 1 / (|p1 - p2| ** power + epsilon)``.

    A larger ``power`` makes nearby boundary pixels dominate. ``epsilon``
    caps the weight when the distance is tiny.
    """

    def __init__(self, power: float = 2.0, epsilon: float = 0.01):
        if not power > 0 or not math.isfinite(power):
            raise InvalidConfigurationError(f"power must be positive, got {power}")
        if not epsilon > 0 or not math.isfinite(epsilon):
            raise InvalidConfigurationError(f"epsilon must be positive, got {epsilon}")
        self.power = float(power)
        self.epsilon = float(epsilon)

    def __call__(self, p1: Coordinate, p2: Coordinate) -> float:
        return self.weight(p1, p2)

    def weight(self, p1: Coordinate, p2: Coordinate) -> float:
        distance = math.hypot(p1[0] - p2[0], p1[1] - p2[1])
        return 1.0 / (distance**self.power + self.epsilon)

    def matrix(self, points: np.ndarray, boundary: np.ndarray) -> np.ndarray:
        """Weights between every point and every boundary pixel.

        Args:
            points: Array of (row, col) pairs, shape (M, 2).
            boundary: Array of (row, col) pairs, shape (N, 2).

        Returns:
            Array of shape (M, N), dtype float64.
        """
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        boundary = np.asarray(boundary, dtype=np.float64).reshape(-1, 2)
        diff = points[:, np.newaxis, :] - boundary[np.newaxis, :, :]
        distance = np.sqrt((diff**2).sum(axis=-1))
        return 1.0 / (distance**self.power + self.epsilon)

    def __repr__(self) -> str:
        return f"WeightFunction(power={self.power}, epsilon={self.epsilon})"
