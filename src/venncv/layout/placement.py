"""Placement search: choose a position for a single project.

Strategy depends on how many (existing) fields the project belongs to:

- none: golden-angle spiral outward from the fields' bounding box,
  first fit;
- one: golden-angle spiral inside the field, scored by clearance to the
  nearest project sharing the field, biased away from the other fields;
- two or more: an intersection anchor is relaxed into the common region,
  then the same scored spiral runs around it.

Every search is bounded and always returns a coordinate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from venncv.layout.constants import (
    ANCHOR_ITERATIONS,
    ANCHOR_STEP,
    CANVAS_CENTER,
    CONTAINMENT_MARGIN,
    DIRECTION_BIAS,
    GOLDEN_ANGLE,
    MOVE_EPSILON,
    NEAREST_ATTEMPTS,
    NEAREST_SPIRAL_STEP,
    OUTSIDE_GAP,
    OUTSIDE_SPIRAL_STEP,
    SCORE_CAP_FACTOR,
    SEARCH_ATTEMPTS,
)
from venncv.layout.geometry import Point, distance, spiral_point, unit_vector
from venncv.layout.regions import (
    ArrowSegment,
    arrow_segments,
    is_clear_of_arrows,
    is_clear_of_projects,
    is_position_valid,
    is_valid_region,
    split_fields,
)
from venncv.parser.model import Document, Field, Project

logger = logging.getLogger(__name__)


def find_position(project: Project, doc: Document) -> Point:
    """Return a region-valid position for ``project``.

    The project does not have to be part of ``doc`` yet; if it is, its own
    entry is ignored for clearance checks.
    """
    targets, others = split_fields(project, doc)
    segments = arrow_segments(doc)

    if not targets:
        return _place_outside(project, doc)
    if len(targets) == 1:
        return _place_in_field(project, doc, targets[0], others, segments)
    return _place_in_intersection(project, doc, targets, others, segments)


def nearest_valid_position(
    project: Project,
    doc: Document,
    position: Point | None = None,
) -> Point:
    """Closest position to ``position`` that is valid (region and clearance).

    Falls back to the closest region-valid point, then to a full search.
    """
    origin = project.center if position is None else position
    if is_position_valid(project, doc, origin):
        return origin

    first_region_valid = None
    for i in range(1, NEAREST_ATTEMPTS):
        candidate = spiral_point(origin, i, NEAREST_SPIRAL_STEP, 0.0, GOLDEN_ANGLE)
        if not is_valid_region(project, doc, candidate):
            continue
        if is_clear_of_projects(project, doc, candidate):
            return candidate
        if first_region_valid is None:
            first_region_valid = candidate

    if first_region_valid is not None:
        return first_region_valid
    logger.debug("No valid point near %s for %s, running full search",
                 origin, project.id)
    return find_position(project, doc)


def nearest_region_valid_position(
    project: Project,
    doc: Document,
    position: Point | None = None,
) -> Point:
    """Closest region-valid position, ignoring clearance from other projects."""
    origin = project.center if position is None else position
    if is_valid_region(project, doc, origin):
        return origin
    for i in range(1, NEAREST_ATTEMPTS):
        candidate = spiral_point(origin, i, NEAREST_SPIRAL_STEP, 0.0, GOLDEN_ANGLE)
        if is_valid_region(project, doc, candidate):
            return candidate
    return find_position(project, doc)


# ---------------------------------------------------------------------------
# Zero fields
# ---------------------------------------------------------------------------


def _outside_start(project: Project, doc: Document) -> Point:
    """Start point just right of the bounding box of all fields."""
    if not doc.fields:
        return CANVAS_CENTER
    max_x = max(f.x + f.radius for f in doc.fields.values())
    min_y = min(f.y - f.radius for f in doc.fields.values())
    max_y = max(f.y + f.radius for f in doc.fields.values())
    return (max_x + OUTSIDE_GAP + project.radius, (min_y + max_y) / 2)


def _place_outside(project: Project, doc: Document) -> Point:
    start = _outside_start(project, doc)
    for i in range(SEARCH_ATTEMPTS):
        candidate = spiral_point(start, i, OUTSIDE_SPIRAL_STEP, 0.0, GOLDEN_ANGLE)
        if is_valid_region(project, doc, candidate) and is_clear_of_projects(
            project, doc, candidate
        ):
            return candidate
    logger.debug("Outside search exhausted for %s, using start point", project.id)
    return start


# ---------------------------------------------------------------------------
# One field
# ---------------------------------------------------------------------------


def _preferred_direction(fld: Field, others: list[Field]) -> Point:
    """Direction pointing away from the centroid of the other fields."""
    if others:
        cx = sum(f.x for f in others) / len(others)
        cy = sum(f.y for f in others) / len(others)
        direction = unit_vector((cx, cy), fld.center)
        if direction is not None:
            return direction
    return (0.0, -1.0)


def _place_in_field(
    project: Project,
    doc: Document,
    fld: Field,
    others: list[Field],
    segments: list[ArrowSegment],
) -> Point:
    extent = fld.radius - CONTAINMENT_MARGIN - project.radius
    if extent <= 0:
        logger.debug("Field %s too small for %s, using its centre", fld.id, project.id)
        return fld.center

    direction = _preferred_direction(fld, others)
    angle_offset = math.atan2(direction[1], direction[0])

    def alignment(candidate: Point) -> float:
        dx = candidate[0] - fld.x
        dy = candidate[1] - fld.y
        return (dx * direction[0] + dy * direction[1]) / extent

    peers = _peers(project, doc, [fld])
    for strict in (True, False):
        best = _scored_spiral_search(
            project, doc, fld.center, extent, angle_offset, peers, segments,
            alignment, strict,
        )
        if best is not None:
            return best

    logger.debug("No region-valid point for %s in %s", project.id, fld.id)
    return fld.center


# ---------------------------------------------------------------------------
# Two or more fields
# ---------------------------------------------------------------------------


def intersection_anchor(
    project: Project,
    targets: list[Field],
    others: list[Field],
) -> Point:
    """Approximate a point inside every target and outside every other field.

    Starts at the centroid of the target centres, then repeatedly pulls
    the point into targets it escapes and pushes it out of non-targets it
    intrudes on.
    """
    x = sum(f.x for f in targets) / len(targets)
    y = sum(f.y for f in targets) / len(targets)
    r = project.radius

    for _ in range(ANCHOR_ITERATIONS):
        fx = fy = 0.0
        for fld in targets:
            d = distance((x, y), fld.center)
            excess = d + r - (fld.radius - CONTAINMENT_MARGIN)
            if excess > 0 and d > 0:
                fx += (fld.x - x) / d * excess
                fy += (fld.y - y) / d * excess
        for fld in others:
            d = distance((x, y), fld.center)
            intrusion = fld.radius + r - d
            if intrusion > 0:
                if d > 0:
                    fx += (x - fld.x) / d * intrusion
                    fy += (y - fld.y) / d * intrusion
                else:
                    fy -= intrusion
        if math.hypot(fx, fy) * ANCHOR_STEP < MOVE_EPSILON:
            break
        x += fx * ANCHOR_STEP
        y += fy * ANCHOR_STEP

    return (x, y)


def _place_in_intersection(
    project: Project,
    doc: Document,
    targets: list[Field],
    others: list[Field],
    segments: list[ArrowSegment],
) -> Point:
    anchor = intersection_anchor(project, targets, others)
    extent = min(f.radius for f in targets) - CONTAINMENT_MARGIN - project.radius
    if extent <= 0:
        return anchor

    def closeness(candidate: Point) -> float:
        return -distance(candidate, anchor) / extent

    peers = _peers(project, doc, targets)
    for strict in (True, False):
        best = _scored_spiral_search(
            project, doc, anchor, extent, 0.0, peers, segments, closeness, strict,
        )
        if best is not None:
            return best

    logger.debug("Intersection search exhausted for %s, using anchor", project.id)
    return anchor


# ---------------------------------------------------------------------------
# Shared search
# ---------------------------------------------------------------------------


def _peers(project: Project, doc: Document, fields: list[Field]) -> list[Project]:
    """Other projects sharing at least one of ``fields`` with the project."""
    field_ids = {f.id for f in fields}
    return [
        p for p in doc.projects.values()
        if p.id != project.id and field_ids.intersection(p.field_ids)
    ]


def _clearance(candidate: Point, radius: float, peers: list[Project], cap: float) -> float:
    best = cap
    for peer in peers:
        gap = distance(candidate, peer.center) - radius - peer.radius
        if gap < best:
            best = gap
    return best


def _scored_spiral_search(
    project: Project,
    doc: Document,
    origin: Point,
    extent: float,
    angle_offset: float,
    peers: list[Project],
    segments: list[ArrowSegment],
    preference: Callable[[Point], float],
    strict: bool,
) -> Point | None:
    """Best-scoring golden-angle spiral candidate within ``extent`` of ``origin``.

    Candidates must be region-valid. In strict mode they must also clear
    other projects and unrelated arrows. Score is clearance to the nearest
    peer plus a directional preference bonus.
    """
    cap = SCORE_CAP_FACTOR * extent
    best: Point | None = None
    best_score = -math.inf

    for i in range(SEARCH_ATTEMPTS):
        radius = extent * math.sqrt((i + 0.5) / SEARCH_ATTEMPTS)
        angle = angle_offset + i * GOLDEN_ANGLE
        candidate = (origin[0] + radius * math.cos(angle),
                     origin[1] + radius * math.sin(angle))

        if not is_valid_region(project, doc, candidate):
            continue
        if strict and not (
            is_clear_of_projects(project, doc, candidate)
            and is_clear_of_arrows(project, segments, candidate)
        ):
            continue

        score = _clearance(candidate, project.radius, peers, cap)
        score += DIRECTION_BIAS * preference(candidate)
        if score > best_score:
            best = candidate
            best_score = score

    return best
