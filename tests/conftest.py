import cv2
import numpy as np
import pytest

from holefill.grid import PixelGrid


def make_grid(shape, fill, holes, dtype=np.uint8):
    """Uniform grid with hole cells at the given (row, col) positions."""
    values = np.full(shape, fill, dtype=dtype)
    mask = np.zeros(shape, dtype=bool)
    for row, col in holes:
        mask[row, col] = True
    return PixelGrid(values, mask)


@pytest.fixture
def single_hole_grid():
    return make_grid((5, 5), 100, [(2, 2)])


@pytest.fixture
def gradient_image():
    rows, cols = np.mgrid[0:9, 0:9]
    return (rows * 20 + cols * 5).astype(np.uint8)


@pytest.fixture
def image_files(tmp_path):
    """A 9x9 uniform image and a mask with a 3x3 hole in the middle."""
    image = np.full((9, 9), 120, dtype=np.uint8)
    image[3:6, 3:6] = 7
    mask = np.zeros((9, 9), dtype=np.uint8)
    mask[3:6, 3:6] = 255
    image_path = tmp_path / "input.png"
    mask_path = tmp_path / "mask.png"
    cv2.imwrite(str(image_path), image)
    cv2.imwrite(str(mask_path), mask)
    return image_path, mask_path
