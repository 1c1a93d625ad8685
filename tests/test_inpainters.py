import numpy as np
import pytest

from holefill.engine import Outcome
from holefill.errors import InvalidConfigurationError
from holefill.inpainters import INPAINTERS, get_inpainter
from holefill.inpainters.opencv import OpenCVInpainter
from holefill.inpainters.weighted import WeightedInpainter


def _hole(shape, rows, cols):
    mask = np.zeros(shape, dtype=np.uint8)
    mask[rows, cols] = 255
    return mask


def test_weighted_fills_masked_region():
    image = np.full((12, 12), 90, dtype=np.uint8)
    image[4:8, 4:8] = 3
    inpainter = WeightedInpainter(connectivity=8, power=2, epsilon=0.01)

    result = inpainter.inpaint(image, _hole((12, 12), slice(4, 8), slice(4, 8)))

    assert np.all(result == 90)
    assert result.dtype == np.uint8
    assert inpainter.last_outcome is Outcome.FILLED
    assert inpainter.last_iterations == 2
    assert image[5, 5] == 3


def test_weighted_returns_copy_for_unenclosed_hole(capsys):
    image = np.arange(36, dtype=np.uint8).reshape(6, 6)
    inpainter = WeightedInpainter()

    result = inpainter.inpaint(image, _hole((6, 6), slice(0, 2), slice(2, 4)))

    assert np.array_equal(result, image)
    assert result is not image
    assert inpainter.last_outcome is Outcome.UNENCLOSED
    assert "touches the image border" in capsys.readouterr().out


def test_mismatched_mask_is_resized(capsys):
    image = np.full((20, 20), 40, dtype=np.uint8)
    mask = _hole((10, 10), slice(4, 6), slice(4, 6))

    result = WeightedInpainter().inpaint(image, mask)

    assert np.all(result == 40)
    assert "resizing mask" in capsys.readouterr().out


def test_rejects_colour_image():
    with pytest.raises(ValueError):
        WeightedInpainter().inpaint(
            np.zeros((5, 5, 3), dtype=np.uint8), np.zeros((5, 5), dtype=np.uint8)
        )


def test_weighted_validates_configuration():
    with pytest.raises(InvalidConfigurationError):
        WeightedInpainter(power=-2)
    assert WeightedInpainter(connectivity="8").config.connectivity.value == 8


def test_weighted_name_reports_parameters():
    assert WeightedInpainter(8, 3, 0.5).name == "weighted(c=8, z=3, eps=0.5)"


@pytest.mark.parametrize("method", ["telea", "ns"])
def test_opencv_baseline_fills_uniform_image(method):
    image = np.full((16, 16), 128, dtype=np.uint8)
    image[6:9, 6:9] = 0
    inpainter = OpenCVInpainter(method=method)

    result = inpainter.inpaint(image, _hole((16, 16), slice(6, 9), slice(6, 9)))

    assert inpainter.name == f"opencv({method}, r=3)"
    assert np.abs(result.astype(int) - 128).max() <= 2


def test_opencv_rejects_unknown_method():
    with pytest.raises(ValueError):
        OpenCVInpainter(method="fast")


def test_registry():
    assert set(INPAINTERS) == {"weighted", "opencv"}
    assert isinstance(get_inpainter("weighted", power=3), WeightedInpainter)
    with pytest.raises(ValueError, match="Available: weighted, opencv"):
        get_inpainter("lama")


class _Recorder(WeightedInpainter):
    def _inpaint(self, image, mask):
        self.seen = mask
        return super()._inpaint(image, mask)


def test_subclasses_receive_binary_mask_at_image_size():
    image = np.full((20, 20), 64, dtype=np.uint8)
    mask = np.zeros((10, 10), dtype=np.uint8)
    mask[4:6, 4:6] = 200
    mask[0, 0] = 90
    inpainter = _Recorder()

    result = inpainter.inpaint(image, mask)

    assert inpainter.seen.shape == (20, 20)
    assert set(np.unique(inpainter.seen)) == {0, 255}
    assert np.count_nonzero(inpainter.seen) == 16
    assert np.all(result == 64)


@pytest.mark.parametrize("method", ["telea", "ns"])
def test_opencv_accepts_soft_mask(method):
    image = np.full((16, 16), 90, dtype=np.uint8)
    mask = np.zeros((16, 16), dtype=np.uint8)
    mask[6:9, 6:9] = 180

    result = OpenCVInpainter(method=method, radius=2).inpaint(image, mask)

    assert np.abs(result.astype(int) - 90).max() <= 2
