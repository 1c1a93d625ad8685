"""Locate the bounding box of the hole and its initial boundary.

The box is found with four directional scans. Each scan returns the cell one
step outside the first hole cell it meets, so the box already includes the
ring of known pixels around the hole. If any of those cells falls outside the
image the hole touches the border and cannot be enclosed.
"""

import logging
from typing import NamedTuple

import numpy as np

from holefill.errors import UnenclosedHoleError
from holefill.grid import Coordinate, PixelGrid
from holefill.neighborhood import Connectivity, neighbors

logger = logging.getLogger(__name__)


class BoundingBox(NamedTuple):
    """Inclusive row/column limits of the region around the hole."""

    top: int
    left: int
    bottom: int
    right: int

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def width(self) -> int:
        return self.right - self.left + 1


def _first(flags: np.ndarray) -> int | None:
    hits = np.flatnonzero(flags)
    return int(hits[0]) if len(hits) else None


def scan_top(grid: PixelGrid) -> Coordinate | None:
    """Rows top to bottom, columns left to right."""
    holes = grid.hole_mask
    row = _first(holes.any(axis=1))
    if row is None:
        return None
    return Coordinate(row - 1, _first(holes[row]))


def scan_left(grid: PixelGrid) -> Coordinate | None:
    """Columns left to right, rows top to bottom."""
    holes = grid.hole_mask
    col = _first(holes.any(axis=0))
    if col is None:
        return None
    return Coordinate(_first(holes[:, col]), col - 1)


def scan_bottom(grid: PixelGrid) -> Coordinate | None:
    """Rows bottom to top, columns left to right."""
    holes = grid.hole_mask
    rows = np.flatnonzero(holes.any(axis=1))
    if not len(rows):
        return None
    row = int(rows[-1])
    return Coordinate(row + 1, _first(holes[row]))


def scan_right(grid: PixelGrid) -> Coordinate | None:
    """Columns right to left, rows top to bottom."""
    holes = grid.hole_mask
    cols = np.flatnonzero(holes.any(axis=0))
    if not len(cols):
        return None
    col = int(cols[-1])
    return Coordinate(_first(holes[:, col]), col + 1)


def find_bounding_box(grid: PixelGrid) -> BoundingBox | None:
    """Return the box enclosing the hole plus a one-pixel ring.

    Returns:
        The bounding box, or None if the grid has no hole cell.

    Raises:
        UnenclosedHoleError: If the hole touches the image border.
    """
    if not grid.has_holes:
        return None
    top, left, bottom, right = (
        scan_top(grid),
        scan_left(grid),
        scan_bottom(grid),
        scan_right(grid),
    )
    for name, found in (("top", top), ("left", left), ("bottom", bottom), ("right", right)):
        if found is None or not grid.contains(found):
            raise UnenclosedHoleError(
                f"Hole reaches the {name} edge of a {grid.rows}x{grid.cols} image"
            )
    return BoundingBox(top.row, left.col, bottom.row, right.col)


def is_boundary(grid: PixelGrid, coord: Coordinate, connectivity: Connectivity) -> bool:
    """A known cell with at least one in-bounds hole neighbour."""
    if grid.is_hole(coord):
        return False
    return any(
        grid.contains(n) and grid.is_hole(n) for n in neighbors(coord, connectivity)
    )


def locate_boundary(grid: PixelGrid, connectivity: Connectivity) -> list[Coordinate]:
    """Return the initial boundary in row-major order.

    Returns an empty list when the grid has no hole.

    Raises:
        UnenclosedHoleError: If the hole touches the image border.
    """
    box = find_bounding_box(grid)
    if box is None:
        return []
    boundary = [
        Coordinate(row, col)
        for row in range(box.top, box.bottom + 1)
        for col in range(box.left, box.right + 1)
        if is_boundary(grid, Coordinate(row, col), connectivity)
    ]
    logger.debug("Bounding box %s holds %d boundary pixels", tuple(box), len(boundary))
    return boundary
