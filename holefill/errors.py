"""Exception types raised by the hole filling core."""


class HoleFillError(Exception):
    """Base class for all hole filling errors."""


class InvalidConfigurationError(HoleFillError, ValueError):
    """Raised for a bad power, epsilon, connectivity or input combination.

    Always raised before any pixel is touched.
    """


class OutOfBoundsError(HoleFillError, IndexError):
    """Raised when a grid cell outside ``[0, rows) x [0, cols)`` is accessed.

    This signals a bug in neighbour enumeration or bounding box computation,
    not bad user input.
    """


class UnenclosedHoleError(HoleFillError):
    """Raised by the boundary locator when the hole touches the image border."""
