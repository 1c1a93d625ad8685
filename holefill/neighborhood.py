"""Neighbour topology for 4- and 8-connected grids."""

from enum import Enum

from holefill.errors import InvalidConfigurationError
from holefill.grid import Coordinate

# (row, col) offsets. Four: up, right, down, left.
# Eight: clockwise starting at the upper-left diagonal.
_OFFSETS = {
    4: ((-1, 0), (0, 1), (1, 0), (0, -1)),
    8: ((-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1)),
}


class Connectivity(Enum):
    FOUR = 4
    EIGHT = 8

    @property
    def offsets(self) -> tuple[tuple[int, int], ...]:
        return _OFFSETS[self.value]

    @classmethod
    def parse(cls, value: "Connectivity | int | str") -> "Connectivity":
        """Accept a member, 4/8, or their string spellings."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            names = {"4": cls.FOUR, "four": cls.FOUR, "8": cls.EIGHT, "eight": cls.EIGHT}
            if key in names:
                return names[key]
        elif isinstance(value, int) and not isinstance(value, bool):
            if value in (4, 8):
                return cls(value)
        raise InvalidConfigurationError(
            f"Unsupported connectivity {value!r}. Use 4 or 8."
        )


def neighbors(coord: Coordinate, connectivity: Connectivity) -> tuple[Coordinate, ...]:
    """Return the neighbours of ``coord`` in fixed order.

    The result is not bounds-checked; callers filter with ``PixelGrid.contains``.
    """
    row, col = coord
    return tuple(Coordinate(row + dr, col + dc) for dr, dc in connectivity.offsets)
