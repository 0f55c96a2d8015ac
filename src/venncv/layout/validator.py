"""Consistency validation: detect and repair invalid layouts.

``validate_and_fix`` restores region validity, relaxes overlaps, re-places
projects that relaxation leaves overlapping and grows fields when a
project has no valid region or overlap cannot be resolved.
``check_layout`` only reports problems as Violation records.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from venncv.layout.constants import (
    FIELD_GROWTH,
    FOOTPRINT_RATIO,
    MAX_EXPANSION_ROUNDS,
    PROJECT_GAP,
    SEPARATION_PASSES,
)
from venncv.layout.geometry import distance
from venncv.layout.placement import find_position, nearest_region_valid_position
from venncv.layout.regions import (
    arrow_segments,
    is_clear_of_arrows,
    is_position_valid,
    is_valid_region,
    overlapping_pairs,
)
from venncv.layout.relaxation import relax
from venncv.parser.model import Document

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Violation:
    check: str
    severity: Severity
    message: str
    context: dict = field(default_factory=dict)


def validate_and_fix(doc: Document) -> bool:
    """Bring a document into a region-valid, best-effort overlap-free state.

    Returns True if any project position or field geometry changed.
    """
    before = _geometry(doc)

    _settle(doc)

    for round_no in range(MAX_EXPANSION_ROUNDS):
        infeasible = [p.id for p in doc.projects.values() if not is_valid_region(p, doc)]
        if not infeasible and not overlapping_pairs(doc):
            break
        grown = grow_infeasible_fields(doc, infeasible)
        if overlapping_pairs(doc):
            grown += [fid for fid in grow_crowded_fields(doc) if fid not in grown]
        if not grown:
            break
        logger.info("Expanded fields %s (round %d)", grown, round_no + 1)
        _settle(doc)

    return _geometry(doc) != before


def restore_regions(doc: Document) -> list[str]:
    """Re-place every project that is not region-valid.

    Returns the ids of the projects that were moved.
    """
    moved = []
    for project in doc.projects.values():
        if is_valid_region(project, doc):
            continue
        position = find_position(project, doc)
        if not is_valid_region(project, doc, position):
            position = nearest_region_valid_position(project, doc)
        if position != project.center:
            logger.debug("Re-placed %s from %s to %s", project.id, project.center, position)
            project.move_to(position)
            moved.append(project.id)
    return moved


def separate_overlaps(doc: Document) -> list[str]:
    """Re-place the second project of every pair that still overlaps.

    Relaxation cannot separate projects whose forces cancel out, such as
    a row pinned against a field rim. A project only moves to a position
    that clears every other project, so each move removes overlaps
    without creating new ones.
    """
    moved = []
    for a_id, b_id in overlapping_pairs(doc):
        a = doc.projects[a_id]
        b = doc.projects[b_id]
        if distance(a.center, b.center) >= a.radius + b.radius + PROJECT_GAP:
            continue
        position = find_position(b, doc)
        if position != b.center and is_position_valid(b, doc, position):
            logger.debug("Separated %s from %s", b_id, a_id)
            b.move_to(position)
            moved.append(b_id)
    return moved


def grow_infeasible_fields(doc: Document, project_ids: list[str]) -> list[str]:
    """Grow every field that a region-invalid project belongs to.

    Used when no position satisfies a project's memberships, typically
    when its fields barely intersect.
    """
    grown = []
    for pid in project_ids:
        for fld in doc.member_fields(doc.projects[pid]):
            if fld.id not in grown:
                fld.radius += FIELD_GROWTH
                grown.append(fld.id)
    return grown


def grow_crowded_fields(doc: Document) -> list[str]:
    """Grow fields whose member footprint exceeds FOOTPRINT_RATIO of their area."""
    grown = []
    for fid, fld in doc.fields.items():
        footprint = sum(math.pi * p.radius ** 2 for p in doc.projects_in_field(fid))
        if footprint > FOOTPRINT_RATIO * math.pi * fld.radius ** 2:
            fld.radius += FIELD_GROWTH
            grown.append(fid)
    return grown


def check_layout(doc: Document) -> list[Violation]:
    """Report region, overlap, arrow and reference problems without fixing them."""
    violations: list[Violation] = []
    violations.extend(check_regions(doc))
    violations.extend(check_overlaps(doc))
    violations.extend(check_arrow_corridors(doc))
    violations.extend(check_references(doc))
    return violations


def check_regions(doc: Document) -> list[Violation]:
    violations = []
    for pid, project in doc.projects.items():
        if not is_valid_region(project, doc):
            violations.append(
                Violation(
                    check="region",
                    severity=Severity.ERROR,
                    message=(
                        f"Project '{pid}' at ({project.x:.1f},{project.y:.1f}) "
                        f"is not in the region of fields {project.field_ids}"
                    ),
                    context={"project": pid},
                )
            )
    return violations


def check_overlaps(doc: Document) -> list[Violation]:
    return [
        Violation(
            check="overlap",
            severity=Severity.WARNING,
            message=f"Projects '{a}' and '{b}' overlap",
            context={"project_a": a, "project_b": b},
        )
        for a, b in overlapping_pairs(doc)
    ]


def check_arrow_corridors(doc: Document) -> list[Violation]:
    violations = []
    segments = arrow_segments(doc)
    for pid, project in doc.projects.items():
        if not is_clear_of_arrows(project, segments):
            violations.append(
                Violation(
                    check="arrow_corridor",
                    severity=Severity.WARNING,
                    message=f"Project '{pid}' sits on an unrelated relation arrow",
                    context={"project": pid},
                )
            )
    return violations


def check_references(doc: Document) -> list[Violation]:
    violations = []
    for pid, project in doc.projects.items():
        for fid in project.field_ids:
            if fid not in doc.fields:
                violations.append(
                    Violation(
                        check="dangling_field",
                        severity=Severity.WARNING,
                        message=f"Project '{pid}' references unknown field '{fid}'",
                        context={"project": pid, "field": fid},
                    )
                )
    for relation in doc.dangling_relations():
        violations.append(
            Violation(
                check="dangling_relation",
                severity=Severity.WARNING,
                message=(
                    f"Relation '{relation.from_id}' -> '{relation.to_id}' "
                    f"references an unknown project"
                ),
                context={"from": relation.from_id, "to": relation.to_id},
            )
        )
    return violations


def _settle(doc: Document) -> None:
    restore_regions(doc)
    relax(doc)
    for _ in range(SEPARATION_PASSES):
        if not overlapping_pairs(doc) or not separate_overlaps(doc):
            break
        relax(doc)


def _geometry(doc: Document) -> tuple:
    return (
        tuple((p.x, p.y) for p in doc.projects.values()),
        tuple((f.x, f.y, f.radius) for f in doc.fields.values()),
    )
