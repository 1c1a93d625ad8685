"""Pipeline orchestration: load an image and its hole, fill, save."""

import time
from pathlib import Path

import numpy as np

from holefill.errors import InvalidConfigurationError
from holefill.inpainters import get_inpainter
from holefill.inpainters.base import Inpainter
from holefill.utils import (
    binarize_mask,
    conform_mask,
    load_image,
    load_mask,
    mask_from_marked,
    mask_stats,
    save_image,
)

DEFAULT_OUTPUT_NAME = "fixed.jpg"


def default_output_path(image_path: str | Path) -> Path:
    """Result path used when none is given: ``fixed.jpg`` beside the input."""
    return Path(image_path).parent / DEFAULT_OUTPUT_NAME


def load_hole_mask(
    image: np.ndarray,
    mask_path: str | Path | None = None,
    hole_value: int | None = None,
    invert_mask: bool = False,
) -> np.ndarray:
    """Build the 0/255 hole mask from a mask file or a marker value.

    Raises:
        InvalidConfigurationError: Unless exactly one of ``mask_path`` and
            ``hole_value`` is given.
    """
    if (mask_path is None) == (hole_value is None):
        raise InvalidConfigurationError(
            "Provide exactly one of a mask file or a hole value."
        )
    if mask_path is not None:
        return binarize_mask(load_mask(mask_path), invert=invert_mask)
    return mask_from_marked(image, hole_value)


class Pipeline:
    """Loads an image, fills its hole and writes the result.

    Usage:
        pipeline = Pipeline(inpainter="weighted", inpainter_kwargs={"power": 3})
        result = pipeline.run("input.png", "output.png", mask_path="mask.png")

        # Accept a pre-built instance:
        pipeline = Pipeline(inpainter=WeightedInpainter(connectivity=8))
    """

    def __init__(
        self,
        inpainter: str | Inpainter = "weighted",
        inpainter_kwargs: dict | None = None,
    ):
        if isinstance(inpainter, Inpainter):
            self._inpainter = inpainter
        else:
            self._inpainter = get_inpainter(inpainter, **(inpainter_kwargs or {}))

    @property
    def inpainter(self) -> Inpainter:
        return self._inpainter

    def fill(self, image: np.ndarray, mask: np.ndarray) -> tuple[np.ndarray, float]:
        """Fill a loaded image.

        Returns:
            Tuple of (result, elapsed_seconds).
        """
        print(f"  Inpainting with {self._inpainter.name}...")
        t0 = time.time()
        result = self._inpainter.inpaint(image, mask)
        elapsed = time.time() - t0
        print(f"  Inpainting done in {elapsed:.1f}s")
        return result, elapsed

    def run(
        self,
        image_path: str | Path,
        output_path: str | Path | None = None,
        mask_path: str | Path | None = None,
        hole_value: int | None = None,
        invert_mask: bool = False,
    ) -> np.ndarray:
        """Run the full pipeline.

        Args:
            image_path: Path to the input image, read as grayscale.
            output_path: Where to save the result. Defaults to ``fixed.jpg``
                next to the input.
            mask_path: Mask image marking the hole.
            hole_value: Pixel value marking the hole in the input itself.
            invert_mask: Treat dark mask pixels as the hole.

        Returns:
            Filled image array.
        """
        image = load_image(image_path)
        mask = conform_mask(load_hole_mask(image, mask_path, hole_value, invert_mask), image)
        output_path = Path(output_path) if output_path else default_output_path(image_path)

        n_masked, _, pct = mask_stats(mask)
        print(f"  Hole: {n_masked} pixels ({pct:.1f}% of image)")

        if n_masked == 0:
            print("  No hole found, skipping inpainting.")
            save_image(image, output_path)
            return image

        result, _ = self.fill(image, mask)

        save_image(result, output_path)
        print(f"  Result saved to {output_path}")
        return result
