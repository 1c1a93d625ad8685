from abc import ABC, abstractmethod

import numpy as np

from holefill.utils import binarize_mask, conform_mask


class Inpainter(ABC):
    """Fills the masked region of a single-channel image.

    ``inpaint`` accepts any grayscale mask where light pixels mark the hole.
    Subclasses receive it resized to the image and thresholded to 0/255.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def _inpaint(self, image: np.ndarray, mask: np.ndarray) -> np.ndarray: ...

    def inpaint(self, image: np.ndarray, mask: np.ndarray) -> np.ndarray:
        if image.ndim != 2:
            raise ValueError(f"Expected a single-channel image, got shape {image.shape}")
        mask = binarize_mask(conform_mask(mask, image))
        return self._inpaint(image, mask)
