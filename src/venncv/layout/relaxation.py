"""Relaxation: iterative positional repulsion between placed projects.

Each iteration accumulates project-project and project-arrow forces for
every node, damps them, and commits each move only if the node stays
region-valid (falling back to x-only, then y-only moves). There is no
velocity or momentum; the pass stops once nothing moves.
"""

from __future__ import annotations

import logging
import math

from venncv.layout.constants import (
    ARROW_CLEARANCE,
    ARROW_REPULSION,
    DAMPING,
    GOLDEN_ANGLE,
    MOVE_EPSILON,
    PROJECT_GAP,
    PROJECT_REPULSION,
    RELAX_ITERATIONS,
    RELAX_SLACK,
)
from venncv.layout.geometry import Point, closest_point_on_segment, distance
from venncv.layout.regions import ArrowSegment, arrow_segments, is_valid_region
from venncv.parser.model import Document, Project

logger = logging.getLogger(__name__)


def relax(
    doc: Document,
    iterations: int = RELAX_ITERATIONS,
    damping: float = DAMPING,
    slack: float = RELAX_SLACK,
) -> int:
    """Resolve overlaps among projects and arrow corridors in place.

    Returns the number of iterations that moved at least one project.
    """
    projects = list(doc.projects.values())
    if not projects:
        return 0

    active = 0
    for _ in range(iterations):
        segments = arrow_segments(doc)
        forces = _accumulate_forces(projects, segments, slack)
        moved = False
        for project in projects:
            fx, fy = forces[project.id]
            if _commit_move(project, doc, fx * damping, fy * damping):
                moved = True
        if not moved:
            break
        active += 1

    logger.debug("Relaxation settled after %d active iterations", active)
    return active


def _accumulate_forces(
    projects: list[Project],
    segments: list[ArrowSegment],
    slack: float,
) -> dict[str, list[float]]:
    forces = {p.id: [0.0, 0.0] for p in projects}

    for i in range(len(projects)):
        a = projects[i]
        for j in range(i + 1, len(projects)):
            b = projects[j]
            d = distance(a.center, b.center)
            overlap = a.radius + b.radius + PROJECT_GAP + slack - d
            if overlap <= 0:
                continue
            if d > 1e-9:
                ux = (b.x - a.x) / d
                uy = (b.y - a.y) / d
            else:
                # Coincident centres: split along a fixed per-pair angle
                angle = (i * len(projects) + j) * GOLDEN_ANGLE
                ux, uy = math.cos(angle), math.sin(angle)
            push = PROJECT_REPULSION * overlap
            forces[a.id][0] -= ux * push
            forces[a.id][1] -= uy * push
            forces[b.id][0] += ux * push
            forces[b.id][1] += uy * push

    for project in projects:
        threshold = project.radius + ARROW_CLEARANCE + slack
        for seg in segments:
            if seg.touches(project.id):
                continue
            nearest = closest_point_on_segment(project.center, seg.start, seg.end)
            d = distance(project.center, nearest)
            penetration = threshold - d
            if penetration <= 0:
                continue
            ux, uy = _away_from_segment(project.center, nearest, seg, d)
            push = ARROW_REPULSION * penetration
            forces[project.id][0] += ux * push
            forces[project.id][1] += uy * push

    return forces


def _away_from_segment(pos: Point, nearest: Point, seg: ArrowSegment, d: float) -> Point:
    if d > 1e-9:
        return ((pos[0] - nearest[0]) / d, (pos[1] - nearest[1]) / d)
    # On the segment itself: push along its left normal
    sx = seg.end[0] - seg.start[0]
    sy = seg.end[1] - seg.start[1]
    length = math.hypot(sx, sy)
    if length < 1e-9:
        return (0.0, -1.0)
    return (-sy / length, sx / length)


def _commit_move(project: Project, doc: Document, dx: float, dy: float) -> bool:
    """Apply a move if it keeps the project region-valid.

    Tries the full move, then x-only, then y-only. Returns True if the
    project moved.
    """
    candidates = ((dx, dy), (dx, 0.0), (0.0, dy))
    for mx, my in candidates:
        if math.hypot(mx, my) < MOVE_EPSILON:
            continue
        target = (project.x + mx, project.y + my)
        if is_valid_region(project, doc, target):
            project.move_to(target)
            return True
    return False
