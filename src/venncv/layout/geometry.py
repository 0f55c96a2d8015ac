"""Circle and segment primitives for the layout core."""

from __future__ import annotations

import math

Point = tuple[float, float]


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def circle_contains_circle(
    outer_center: Point,
    outer_r: float,
    inner_center: Point,
    inner_r: float,
    margin: float = 0.0,
) -> bool:
    """True if the inner circle stays within ``outer_r - margin`` of the outer centre."""
    return distance(outer_center, inner_center) + inner_r <= outer_r - margin


def circle_disjoint_from_circle(
    c1: Point,
    r1: float,
    c2: Point,
    r2: float,
    margin: float = 0.0,
) -> bool:
    """True if the circles do not overlap, keeping ``margin`` between them."""
    return distance(c1, c2) - margin >= r1 + r2


def closest_point_on_segment(p: Point, a: Point, b: Point) -> Point:
    """Foot of the perpendicular from ``p`` onto segment ``ab``, clamped to it."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return a
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return (a[0] + t * dx, a[1] + t * dy)


def point_near_segment(p: Point, a: Point, b: Point, threshold: float) -> bool:
    return distance(p, closest_point_on_segment(p, a, b)) < threshold


def unit_vector(frm: Point, to: Point) -> Point | None:
    """Unit vector pointing from ``frm`` to ``to``, or None if they coincide."""
    d = distance(frm, to)
    if d < 1e-9:
        return None
    return ((to[0] - frm[0]) / d, (to[1] - frm[1]) / d)


def spiral_point(origin: Point, index: int, step: float, angle_offset: float,
                 golden_angle: float) -> Point:
    """Point ``index`` of a golden-angle spiral whose radius grows as sqrt(index)."""
    radius = step * math.sqrt(index)
    angle = angle_offset + index * golden_angle
    return (origin[0] + radius * math.cos(angle), origin[1] + radius * math.sin(angle))
