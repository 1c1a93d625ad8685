import pytest

from holefill.boundary import (
    BoundingBox,
    find_bounding_box,
    locate_boundary,
    scan_bottom,
    scan_left,
    scan_right,
    scan_top,
)
from holefill.errors import UnenclosedHoleError
from holefill.neighborhood import Connectivity

from conftest import make_grid


def test_scans_step_outside_the_hole(single_hole_grid):
    assert scan_top(single_hole_grid) == (1, 2)
    assert scan_left(single_hole_grid) == (2, 1)
    assert scan_bottom(single_hole_grid) == (3, 2)
    assert scan_right(single_hole_grid) == (2, 3)


def test_scans_use_first_cell_in_scan_order():
    grid = make_grid((6, 6), 0, [(2, 3), (3, 1), (3, 2)])
    assert scan_top(grid) == (1, 3)
    assert scan_left(grid) == (3, 0)
    assert scan_bottom(grid) == (4, 1)
    assert scan_right(grid) == (2, 4)
    assert find_bounding_box(grid) == BoundingBox(top=1, left=0, bottom=4, right=4)


def test_scans_without_hole_return_none():
    grid = make_grid((4, 4), 0, [])
    assert scan_top(grid) is None
    assert scan_left(grid) is None
    assert scan_bottom(grid) is None
    assert scan_right(grid) is None
    assert find_bounding_box(grid) is None
    assert locate_boundary(grid, Connectivity.FOUR) == []


def test_single_hole_four_connected_boundary(single_hole_grid):
    assert find_bounding_box(single_hole_grid) == BoundingBox(1, 1, 3, 3)
    assert locate_boundary(single_hole_grid, Connectivity.FOUR) == [
        (1, 2),
        (2, 1),
        (2, 3),
        (3, 2),
    ]


def test_single_hole_eight_connected_boundary(single_hole_grid):
    assert locate_boundary(single_hole_grid, Connectivity.EIGHT) == [
        (1, 1),
        (1, 2),
        (1, 3),
        (2, 1),
        (2, 3),
        (3, 1),
        (3, 2),
        (3, 3),
    ]


def test_square_hole_boundary_sizes():
    holes = [(r, c) for r in range(2, 5) for c in range(2, 5)]
    grid = make_grid((7, 7), 10, holes)
    box = find_bounding_box(grid)
    assert (box.height, box.width) == (5, 5)
    assert len(locate_boundary(grid, Connectivity.FOUR)) == 12
    assert len(locate_boundary(grid, Connectivity.EIGHT)) == 16


def test_boundary_on_image_edge_skips_outside_neighbors():
    grid = make_grid((3, 3), 10, [(1, 1)])
    assert find_bounding_box(grid) == BoundingBox(0, 0, 2, 2)
    assert len(locate_boundary(grid, Connectivity.EIGHT)) == 8


@pytest.mark.parametrize("hole", [(0, 2), (4, 2), (2, 0), (2, 4), (0, 0)])
def test_hole_touching_border_is_unenclosed(hole):
    grid = make_grid((5, 5), 10, [hole])
    with pytest.raises(UnenclosedHoleError):
        find_bounding_box(grid)
    with pytest.raises(UnenclosedHoleError):
        locate_boundary(grid, Connectivity.FOUR)
