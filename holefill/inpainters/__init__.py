"""Inpainter registry."""

from holefill.inpainters.base import Inpainter
from holefill.inpainters.opencv import OpenCVInpainter
from holefill.inpainters.weighted import WeightedInpainter

INPAINTERS: dict[str, type[Inpainter]] = {
    "weighted": WeightedInpainter,
    "opencv": OpenCVInpainter,
}


def get_inpainter(name: str, **kwargs) -> Inpainter:
    """Instantiate an inpainter by name."""
    if name not in INPAINTERS:
        available = ", ".join(INPAINTERS.keys())
        raise ValueError(f"Unknown inpainter '{name}'. Available: {available}")
    return INPAINTERS[name](**kwargs)


__all__ = [
    "Inpainter",
    "INPAINTERS",
    "get_inpainter",
    "OpenCVInpainter",
    "WeightedInpainter",
]
