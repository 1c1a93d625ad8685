"""Single-channel pixel grid with an explicit hole channel.

Hole-state lives in its own boolean array, so every intensity value stays
usable as real image data.
"""

from typing import NamedTuple

import numpy as np

from holefill.errors import OutOfBoundsError


class Coordinate(NamedTuple):
    row: int
    col: int


class PixelGrid:
    """A ``rows x cols`` grid of intensities plus a boolean hole mask.

    The grid is mutated in place by the engine. Writing a cell always clears
    its hole flag.
    """

    def __init__(self, values: np.ndarray, hole_mask: np.ndarray | None = None):
        values = np.asarray(values)
        if values.ndim == 3 and values.shape[2] == 1:
            values = values[:, :, 0]
        if values.ndim != 2:
            raise ValueError(
                f"Expected a single-channel image, got shape {values.shape}"
            )
        if hole_mask is None:
            hole_mask = np.zeros(values.shape, dtype=bool)
        hole_mask = np.asarray(hole_mask, dtype=bool)
        if hole_mask.shape != values.shape:
            raise ValueError(
                f"Hole mask shape {hole_mask.shape} does not match "
                f"image shape {values.shape}"
            )
        self._values = values.copy()
        self._holes = hole_mask.copy()

    @classmethod
    def from_image_and_mask(
        cls, image: np.ndarray, mask: np.ndarray, invert: bool = False
    ) -> "PixelGrid":
        """Build a grid from an image and a same-sized binary mask.

        Args:
            image: Grayscale image, shape (H, W).
            mask: Mask, shape (H, W). Pixels > 127 mark the hole, or pixels
                <= 127 when ``invert`` is set.
        """
        mask = np.asarray(mask)
        if mask.ndim == 3:
            mask = mask[:, :, 0]
        holes = mask <= 127 if invert else mask > 127
        return cls(image, holes)

    @classmethod
    def from_marked(cls, image: np.ndarray, hole_value: float) -> "PixelGrid":
        """Build a grid where every cell equal to ``hole_value`` is a hole."""
        image = np.asarray(image)
        return cls(image, image == hole_value)

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape

    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def cols(self) -> int:
        return self._values.shape[1]

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the intensities, hole cells included."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    @property
    def hole_mask(self) -> np.ndarray:
        view = self._holes.view()
        view.flags.writeable = False
        return view

    @property
    def hole_count(self) -> int:
        return int(np.count_nonzero(self._holes))

    @property
    def has_holes(self) -> bool:
        return bool(self._holes.any())

    def contains(self, coord: Coordinate) -> bool:
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, coord: Coordinate) -> tuple[int, int]:
        if not self.contains(coord):
            raise OutOfBoundsError(
                f"Coordinate {tuple(coord)} outside grid of shape {self.shape}"
            )
        return coord[0], coord[1]

    def is_hole(self, coord: Coordinate) -> bool:
        return bool(self._holes[self._check(coord)])

    def get(self, coord: Coordinate) -> float | None:
        """Return the intensity at ``coord``, or None if it is a hole."""
        idx = self._check(coord)
        if self._holes[idx]:
            return None
        return self._values[idx].item()

    def set(self, coord: Coordinate, intensity: float) -> None:
        """Write ``intensity`` and clear the hole flag at ``coord``."""
        idx = self._check(coord)
        self._values[idx] = self._conform(np.asarray([intensity]))[0]
        self._holes[idx] = False

    def set_many(self, coords: np.ndarray, intensities: np.ndarray) -> None:
        """Write many cells at once.

        Args:
            coords: Integer array, shape (N, 2), of (row, col) pairs.
            intensities: Array, shape (N,).
        """
        coords = np.asarray(coords, dtype=np.intp).reshape(-1, 2)
        if len(coords) == 0:
            return
        rows, cols = coords[:, 0], coords[:, 1]
        inside = (rows >= 0) & (rows < self.rows) & (cols >= 0) & (cols < self.cols)
        if not inside.all():
            bad = coords[~inside][0]
            raise OutOfBoundsError(
                f"Coordinate {tuple(int(v) for v in bad)} outside grid of shape {self.shape}"
            )
        self._values[rows, cols] = self._conform(np.asarray(intensities))
        self._holes[rows, cols] = False

    def _conform(self, intensities: np.ndarray) -> np.ndarray:
        # Integer grids store the nearest representable value.
        if np.issubdtype(self.dtype, np.integer):
            info = np.iinfo(self.dtype)
            return np.clip(np.rint(intensities), info.min, info.max).astype(self.dtype)
        return intensities.astype(self.dtype)

    def copy(self) -> "PixelGrid":
        return PixelGrid(self._values, self._holes)

    def to_image(self) -> np.ndarray:
        """Return the intensities as a new array, remaining holes set to 0."""
        image = self._values.copy()
        image[self._holes] = 0
        return image

    def __repr__(self) -> str:
        return (
            f"PixelGrid(shape={self.shape}, dtype={self.dtype}, "
            f"holes={self.hole_count})"
        )
