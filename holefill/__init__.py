"""Boundary-erosion hole filling for grayscale images."""

from holefill.engine import FillConfig, FillResult, InpaintingEngine, Outcome, run
from holefill.errors import (
    HoleFillError,
    InvalidConfigurationError,
    OutOfBoundsError,
    UnenclosedHoleError,
)
from holefill.grid import Coordinate, PixelGrid
from holefill.neighborhood import Connectivity

__all__ = [
    "Connectivity",
    "Coordinate",
    "FillConfig",
    "FillResult",
    "HoleFillError",
    "InpaintingEngine",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "Outcome",
    "PixelGrid",
    "UnenclosedHoleError",
    "run",
]
