"""Boundary-erosion hole filling.

Starting from the known pixels that touch the hole, every iteration fills the
hole cells adjacent to the current boundary with an inverse-distance weighted
average of the whole current boundary. The freshly filled cells become the
next boundary, so the hole is eroded one layer at a time until nothing is
left.

Usage:
    grid = PixelGrid.from_image_and_mask(image, mask)
    grid, outcome = run(grid, connectivity=4, power=2.0, epsilon=0.01)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from holefill.boundary import locate_boundary
from holefill.errors import InvalidConfigurationError, UnenclosedHoleError
from holefill.grid import Coordinate, PixelGrid
from holefill.neighborhood import Connectivity, neighbors
from holefill.weights import WeightFunction

logger = logging.getLogger(__name__)

# Discovered cells per weight-matrix evaluation.
_CHUNK_SIZE = 1024


class Outcome(Enum):
    FILLED = "filled"
    UNENCLOSED = "unenclosed"


class EngineState(Enum):
    ACTIVE = "active"
    DONE = "done"


@dataclass(frozen=True)
class FillConfig:
    """Run configuration, validated on construction."""

    connectivity: Connectivity = Connectivity.FOUR
    power: float = 2.0
    epsilon: float = 0.01

    def __post_init__(self):
        object.__setattr__(self, "connectivity", Connectivity.parse(self.connectivity))
        # Raises InvalidConfigurationError for bad power/epsilon.
        WeightFunction(self.power, self.epsilon)

    @property
    def weight_function(self) -> WeightFunction:
        return WeightFunction(self.power, self.epsilon)


@dataclass
class FillResult:
    grid: PixelGrid
    outcome: Outcome
    iterations: int = 0
    filled: int = 0
    boundary_sizes: list[int] = field(default_factory=list)


class InpaintingEngine:
    """Runs the erosion loop on a grid, mutating it in place.

    The engine is a two-state machine. ``start`` locates the initial boundary
    and enters ``ACTIVE``, or goes straight to ``DONE`` when there is nothing
    to fill or the hole is unenclosed. Each ``step`` performs one erosion
    iteration and moves to ``DONE`` once the boundary is empty.
    """

    def __init__(self, config: FillConfig | None = None, chunk_size: int = _CHUNK_SIZE):
        if chunk_size <= 0:
            raise InvalidConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        self.config = config or FillConfig()
        self._weight = self.config.weight_function
        self._chunk_size = chunk_size
        self._grid: PixelGrid | None = None
        self.state = EngineState.DONE
        self.outcome: Outcome | None = None
        self.boundary: list[Coordinate] = []
        self.iterations = 0
        self.remaining = 0

    @property
    def connectivity(self) -> Connectivity:
        return self.config.connectivity

    def start(self, grid: PixelGrid) -> EngineState:
        """Bind ``grid`` and locate its initial boundary."""
        self._grid = grid
        self.iterations = 0
        self.remaining = grid.hole_count
        try:
            self.boundary = locate_boundary(grid, self.connectivity)
        except UnenclosedHoleError as exc:
            logger.debug("No fill: %s", exc)
            self.boundary = []
            self.outcome = Outcome.UNENCLOSED
        else:
            self.outcome = Outcome.FILLED
        self.state = EngineState.ACTIVE if self.boundary else EngineState.DONE
        return self.state

    def step(self) -> int:
        """Fill the hole cells next to the current boundary.

        Returns:
            Number of cells filled in this iteration.

        Raises:
            RuntimeError: If the engine is not active.
        """
        if self.state is not EngineState.ACTIVE or self._grid is None:
            raise RuntimeError("Engine is not active. Call start() first.")
        grid = self._grid

        discovered = self._discover(grid)
        if discovered:
            # Every value is computed from the current boundary before any
            # cell is written.
            values = self._weighted_values(grid, discovered)
            grid.set_many(np.array(discovered, dtype=np.intp), values)

        self.iterations += 1
        self.remaining -= len(discovered)
        logger.debug(
            "Iteration %d: boundary %d pixels, filled %d",
            self.iterations,
            len(self.boundary),
            len(discovered),
        )
        # Nothing left to erode once the last hole cell is written.
        self.boundary = discovered if self.remaining > 0 else []
        if not self.boundary:
            self.state = EngineState.DONE
        return len(discovered)

    def _discover(self, grid: PixelGrid) -> list[Coordinate]:
        # dict keeps first-discovery order and drops repeats.
        found: dict[Coordinate, None] = {}
        for pixel in self.boundary:
            for n in neighbors(pixel, self.connectivity):
                if n not in found and grid.contains(n) and grid.is_hole(n):
                    found[n] = None
        return list(found)

    def _weighted_values(self, grid: PixelGrid, targets: list[Coordinate]) -> np.ndarray:
        boundary = np.array(self.boundary, dtype=np.intp)
        boundary_values = grid.values[boundary[:, 0], boundary[:, 1]].astype(np.float64)
        points = np.array(targets, dtype=np.intp)
        # Averaging offsets from the minimum keeps a uniform boundary exact and
        # every result inside [lo, hi].
        lo, hi = boundary_values.min(), boundary_values.max()
        offsets = boundary_values - lo
        values = np.empty(len(points), dtype=np.float64)
        for start in range(0, len(points), self._chunk_size):
            chunk = slice(start, start + self._chunk_size)
            weights = self._weight.matrix(points[chunk], boundary)
            values[chunk] = lo + weights @ offsets / weights.sum(axis=1)
        return np.clip(values, lo, hi)

    def fill(self, grid: PixelGrid) -> FillResult:
        """Run to completion on ``grid``."""
        self.start(grid)
        filled = 0
        sizes = []
        while self.state is EngineState.ACTIVE:
            sizes.append(len(self.boundary))
            filled += self.step()
        if grid.has_holes and self.outcome is Outcome.FILLED:
            # Every enclosed hole cell is reachable from the boundary.
            raise AssertionError(f"{grid.hole_count} hole cells left after filling")
        return FillResult(grid, self.outcome, self.iterations, filled, sizes)


def run(
    grid: PixelGrid,
    connectivity: Connectivity | int | str = Connectivity.FOUR,
    power: float = 2.0,
    epsilon: float = 0.01,
) -> tuple[PixelGrid, Outcome]:
    """Fill the hole in ``grid`` in place.

    Returns:
        Tuple of (grid, outcome). For ``Outcome.UNENCLOSED`` the grid is
        untouched.

    Raises:
        InvalidConfigurationError: For a bad connectivity, power or epsilon.
    """
    config = FillConfig(connectivity, power, epsilon)
    result = InpaintingEngine(config).fill(grid)
    return result.grid, result.outcome
