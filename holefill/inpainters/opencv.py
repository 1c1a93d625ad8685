"""Fills the hole with one of OpenCV's built-in inpainting flags.

Used to compare against the boundary-erosion fill on the same image and
mask. These also fill holes touching the image border, which the weighted
inpainter leaves alone.
"""

import cv2
import numpy as np

from holefill.inpainters.base import Inpainter

_FLAGS = {
    "telea": cv2.INPAINT_TELEA,
    "ns": cv2.INPAINT_NS,
}


class OpenCVInpainter(Inpainter):
    def __init__(self, method: str = "telea", radius: int = 3):
        """
        Args:
            method: Key of ``_FLAGS``, "telea" (fast marching) or "ns"
                (Navier-Stokes).
            radius: Pixels around each hole pixel that OpenCV samples.
        """
        if method not in _FLAGS:
            choices = ", ".join(_FLAGS)
            raise ValueError(f"Unknown OpenCV method '{method}'. Choose from: {choices}")
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        self._method = method
        self._radius = radius

    @property
    def name(self) -> str:
        return f"opencv({self._method}, r={self._radius})"

    def _inpaint(self, image: np.ndarray, mask: np.ndarray) -> np.ndarray:
        return cv2.inpaint(image, mask, self._radius, _FLAGS[self._method])
