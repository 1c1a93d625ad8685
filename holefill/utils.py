"""Utility functions for image I/O, masks and boundary visualization."""

from pathlib import Path

import cv2
import numpy as np

from holefill.grid import Coordinate


def mask_stats(mask: np.ndarray) -> tuple[int, int, float]:
    """Compute basic statistics about a binary mask.

    Returns:
        Tuple of (n_masked, total, percentage).
    """
    n_masked = int(np.count_nonzero(mask))
    total = mask.shape[0] * mask.shape[1]
    pct = n_masked / total * 100 if total > 0 else 0.0
    return n_masked, total, pct


def load_image(path: str | Path) -> np.ndarray:
    """Load an image from disk as grayscale.

    Returns:
        Image as numpy array, shape (H, W), dtype uint8.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be read as an image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise ValueError(f"Could not read image: {path}")
    return image


def load_mask(path: str | Path) -> np.ndarray:
    """Load a mask from disk.

    Returns:
        Mask as numpy array, shape (H, W), dtype uint8.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mask not found: {path}")
    mask = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if mask is None:
        raise ValueError(f"Could not read mask: {path}")
    return mask


def save_image(image: np.ndarray, path: str | Path) -> None:
    """Save an image to disk.

    Args:
        image: Image array (grayscale or BGR).
        path: Output path. Parent directories are created if needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ok = cv2.imwrite(str(path), to_uint8(image))
    if not ok:
        raise IOError(f"Failed to write image: {path}")


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Round and clip to 0..255 uint8, no copy if already uint8."""
    if image.dtype == np.uint8:
        return image
    return np.clip(np.rint(image), 0, 255).astype(np.uint8)


def binarize_mask(mask: np.ndarray, invert: bool = False) -> np.ndarray:
    """Threshold a mask to 0/255 where 255 marks the hole.

    Args:
        mask: Grayscale mask, shape (H, W).
        invert: Mark pixels <= 127 as the hole instead of pixels > 127.
    """
    if mask.ndim == 3:
        mask = mask[:, :, 0]
    holes = mask <= 127 if invert else mask > 127
    return np.where(holes, 255, 0).astype(np.uint8)


def mask_from_marked(image: np.ndarray, hole_value: int) -> np.ndarray:
    """Mask every pixel whose value equals ``hole_value``."""
    return np.where(image == hole_value, 255, 0).astype(np.uint8)


def conform_mask(mask: np.ndarray, image: np.ndarray) -> np.ndarray:
    """Ensure a mask has the same spatial dimensions as an image.

    If dimensions differ, the mask is resized using nearest-neighbor
    interpolation (to keep it binary) and a warning is printed.
    """
    img_h, img_w = image.shape[:2]
    mask_h, mask_w = mask.shape[:2]
    if (mask_h, mask_w) == (img_h, img_w):
        return mask
    print(
        f"  Warning: mask size ({mask_w}x{mask_h}) differs from image "
        f"({img_w}x{img_h}), resizing mask to match."
    )
    return cv2.resize(mask, (img_w, img_h), interpolation=cv2.INTER_NEAREST)


def overlay_boundary(
    image: np.ndarray,
    mask: np.ndarray,
    boundary: list[Coordinate],
    hole_color=(0, 0, 255),
    boundary_color=(0, 255, 0),
) -> np.ndarray:
    """Draw the hole and its boundary on a grayscale image.

    Returns:
        BGR visualization image, shape (H, W, 3).
    """
    vis = cv2.cvtColor(to_uint8(image), cv2.COLOR_GRAY2BGR)
    vis[mask > 127] = hole_color
    if boundary:
        rows, cols = np.array(boundary, dtype=np.intp).T
        vis[rows, cols] = boundary_color
    return vis
