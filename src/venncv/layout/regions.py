"""Region classification: where a project may sit given its memberships.

Region membership is a hard constraint: a project must lie inside every
field it belongs to and outside every other field. Clearance from other
projects and from relation arrows is soft and layered on top.
"""

from __future__ import annotations

from dataclasses import dataclass

from venncv.layout.constants import (
    ARROW_CLEARANCE,
    CONTAINMENT_MARGIN,
    PROJECT_GAP,
)
from venncv.layout.geometry import (
    Point,
    circle_contains_circle,
    circle_disjoint_from_circle,
    distance,
    point_near_segment,
)
from venncv.parser.model import Document, Field, Project


@dataclass
class ArrowSegment:
    """Straight corridor between the centres of two related projects."""

    from_id: str
    to_id: str
    start: Point
    end: Point

    def touches(self, project_id: str) -> bool:
        return project_id in (self.from_id, self.to_id)


def split_fields(project: Project, doc: Document) -> tuple[list[Field], list[Field]]:
    """Return (target, non_target) fields for a project.

    Dangling field ids are ignored, so a project whose ids all dangle has
    no targets at all.
    """
    targets = doc.member_fields(project)
    target_ids = {f.id for f in targets}
    others = [f for fid, f in doc.fields.items() if fid not in target_ids]
    return targets, others


def is_valid_region(
    project: Project,
    doc: Document,
    position: Point | None = None,
    margin: float = CONTAINMENT_MARGIN,
) -> bool:
    """Check field containment and exclusion for a project.

    ``position`` overrides the project's current centre.
    """
    pos = project.center if position is None else position
    targets, others = split_fields(project, doc)
    for fld in targets:
        if not circle_contains_circle(fld.center, fld.radius, pos, project.radius, margin):
            return False
    for fld in others:
        if not circle_disjoint_from_circle(fld.center, fld.radius, pos, project.radius):
            return False
    return True


def is_clear_of_projects(
    project: Project,
    doc: Document,
    position: Point | None = None,
    gap: float = PROJECT_GAP,
) -> bool:
    pos = project.center if position is None else position
    for other in doc.projects.values():
        if other.id == project.id:
            continue
        if not circle_disjoint_from_circle(pos, project.radius, other.center,
                                           other.radius, gap):
            return False
    return True


def is_position_valid(
    project: Project,
    doc: Document,
    position: Point | None = None,
) -> bool:
    """Region-valid and at least PROJECT_GAP away from every other project."""
    return is_valid_region(project, doc, position) and is_clear_of_projects(
        project, doc, position
    )


def arrow_segments(doc: Document) -> list[ArrowSegment]:
    """Corridors of relations whose endpoints both exist.

    Dangling relations and self-relations produce no corridor.
    """
    segments = []
    for src, tgt in doc.relation_graph().edges():
        if src == tgt:
            continue
        segments.append(
            ArrowSegment(src, tgt, doc.projects[src].center, doc.projects[tgt].center)
        )
    return segments


def is_clear_of_arrows(
    project: Project,
    segments: list[ArrowSegment],
    position: Point | None = None,
    clearance: float = ARROW_CLEARANCE,
) -> bool:
    """True if the project keeps ``radius + clearance`` from unrelated arrows."""
    pos = project.center if position is None else position
    threshold = project.radius + clearance
    for seg in segments:
        if seg.touches(project.id):
            continue
        if point_near_segment(pos, seg.start, seg.end, threshold):
            return False
    return True


def overlapping_pairs(
    doc: Document,
    gap: float = PROJECT_GAP,
) -> list[tuple[str, str]]:
    """Pairs of projects closer than ``r1 + r2 + gap``."""
    projects = list(doc.projects.values())
    pairs = []
    for i in range(len(projects)):
        a = projects[i]
        for j in range(i + 1, len(projects)):
            b = projects[j]
            if distance(a.center, b.center) < a.radius + b.radius + gap:
                pairs.append((a.id, b.id))
    return pairs
