"""Tests for circle and segment primitives."""

import math

import pytest

from venncv.layout.constants import GOLDEN_ANGLE
from venncv.layout.geometry import (
    circle_contains_circle,
    circle_disjoint_from_circle,
    closest_point_on_segment,
    distance,
    point_near_segment,
    spiral_point,
    unit_vector,
)


def test_distance():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)


def test_contains_with_margin():
    # 170 + 20 = 190 fits inside 200 - 5, 180 + 20 does not
    assert circle_contains_circle((0, 0), 200, (170, 0), 20, margin=5)
    assert not circle_contains_circle((0, 0), 200, (180, 0), 20, margin=5)


def test_contains_boundary_is_inclusive():
    assert circle_contains_circle((0, 0), 200, (175, 0), 20, margin=5)


def test_disjoint():
    assert circle_disjoint_from_circle((0, 0), 200, (220, 0), 20)
    assert not circle_disjoint_from_circle((0, 0), 200, (219, 0), 20)
    assert not circle_disjoint_from_circle((0, 0), 200, (230, 0), 20, margin=15)


def test_closest_point_clamped_to_segment():
    assert closest_point_on_segment((5, 10), (0, 0), (10, 0)) == pytest.approx((5, 0))
    assert closest_point_on_segment((-5, 3), (0, 0), (10, 0)) == pytest.approx((0, 0))
    assert closest_point_on_segment((25, -1), (0, 0), (10, 0)) == pytest.approx((10, 0))


def test_closest_point_degenerate_segment():
    assert closest_point_on_segment((3, 4), (1, 1), (1, 1)) == (1, 1)


def test_point_near_segment():
    assert point_near_segment((5, 4), (0, 0), (10, 0), threshold=5)
    assert not point_near_segment((5, 6), (0, 0), (10, 0), threshold=5)


def test_unit_vector():
    ux, uy = unit_vector((0, 0), (0, -7))
    assert (ux, uy) == pytest.approx((0, -1))
    assert unit_vector((2, 2), (2, 2)) is None


def test_spiral_radius_grows_with_sqrt_index():
    origin = (100.0, 50.0)
    assert spiral_point(origin, 0, 20, 0.0, GOLDEN_ANGLE) == pytest.approx(origin)
    for i in (1, 4, 9):
        p = spiral_point(origin, i, 20, 0.3, GOLDEN_ANGLE)
        assert distance(origin, p) == pytest.approx(20 * math.sqrt(i))
