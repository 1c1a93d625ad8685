"""Inverse-distance weighted boundary erosion behind the Inpainter interface."""

import numpy as np

from holefill.engine import FillConfig, InpaintingEngine, Outcome
from holefill.grid import PixelGrid
from holefill.inpainters.base import Inpainter
from holefill.neighborhood import Connectivity


class WeightedInpainter(Inpainter):
    """Fills the hole layer by layer from its boundary."""

    def __init__(
        self,
        connectivity: Connectivity | int | str = 4,
        power: float = 2.0,
        epsilon: float = 0.01,
    ):
        """Initialize the weighted inpainter.

        Args:
            connectivity: Neighbour topology, 4 or 8.
            power: Distance exponent. Larger values favour nearby pixels.
            epsilon: Smoothing constant added to every weight denominator.
        """
        self._config = FillConfig(connectivity, power, epsilon)
        self.last_outcome: Outcome | None = None
        self.last_iterations = 0

    @property
    def name(self) -> str:
        c = self._config
        return f"weighted(c={c.connectivity.value}, z={c.power:g}, eps={c.epsilon:g})"

    @property
    def config(self) -> FillConfig:
        return self._config

    def _inpaint(self, image: np.ndarray, mask: np.ndarray) -> np.ndarray:
        grid = PixelGrid.from_image_and_mask(image, mask)
        result = InpaintingEngine(self._config).fill(grid)
        self.last_outcome = result.outcome
        self.last_iterations = result.iterations
        if result.outcome is Outcome.UNENCLOSED:
            print("  Warning: hole touches the image border, leaving image unchanged.")
            return image.copy()
        return grid.to_image()
