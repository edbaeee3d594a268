import random

import pytest

from schemas.placement import LatLng, Polygon
from modules.placement.geometry import (
    bounding_box,
    coverage_grid,
    point_in_polygon,
    random_point_in_box,
)


@pytest.fixture
def square():
    return Polygon.from_pairs([(0, 0), (0, 10), (10, 10), (10, 0)])


def test_square_containment(square):
    assert point_in_polygon(LatLng(5, 5), square)
    assert not point_in_polygon(LatLng(15, 15), square)


def test_concave_polygon():
    # L shape: the notch at (7, 7) is outside
    ell = Polygon.from_pairs([(0, 0), (0, 10), (4, 10), (4, 4), (10, 4), (10, 0)])
    assert point_in_polygon(LatLng(2, 8), ell)
    assert point_in_polygon(LatLng(8, 2), ell)
    assert not point_in_polygon(LatLng(7, 7), ell)


def test_explicitly_closed_ring_behaves_the_same(square):
    closed = Polygon(square.coordinates + [square.coordinates[0]])
    for p in (LatLng(5, 5), LatLng(15, 15), LatLng(-1, 3)):
        assert point_in_polygon(p, closed) == point_in_polygon(p, square)


@pytest.mark.parametrize("pairs", [[], [(1, 1)], [(0, 0), (5, 5)]])
def test_degenerate_polygons_contain_nothing(pairs):
    assert not point_in_polygon(LatLng(1, 1), Polygon.from_pairs(pairs))


def test_bounding_box():
    box = bounding_box(Polygon.from_pairs([(2, -3), (5, 1), (-1, 0)]))
    assert (box.south, box.west, box.north, box.east) == (-1, -3, 5, 1)


def test_bounding_box_of_empty_polygon():
    with pytest.raises(ValueError, match="empty polygon"):
        bounding_box(Polygon())


def test_random_point_stays_in_box(square):
    box = bounding_box(square)
    rng = random.Random(3)
    for _ in range(100):
        p = random_point_in_box(box, rng)
        assert box.south <= p.lat <= box.north
        assert box.west <= p.lng <= box.east


def test_coverage_grid_is_lazy_and_inside(square):
    grid = coverage_grid(square, 1.0)
    first = next(grid)
    assert point_in_polygon(first, square)

    points = [first] + list(grid)
    assert all(point_in_polygon(p, square) for p in points)
    # even-odd rule: lower/left edges count as inside, upper/right do not
    assert len(points) == 100


def test_coverage_grid_empty_for_degenerate_polygon():
    assert list(coverage_grid(Polygon(), 0.1)) == []
    assert list(coverage_grid(Polygon.from_pairs([(1, 1), (1, 1), (1, 1)]), 0.1)) == []


@pytest.mark.parametrize("step", [0.0, -0.5])
def test_coverage_grid_rejects_non_positive_step(square, step):
    with pytest.raises(ValueError, match="Grid step must be positive"):
        list(coverage_grid(square, step))
