"""Layout coordinator: the entry points the application calls on mutations.

A mutation places the affected project(s), relaxes every node, then
validates the whole document (growing fields when the layout cannot be
made overlap-free). Every function operates on the document passed in.
"""

from __future__ import annotations

import logging
import random

from venncv.layout.balance import balance_fields
from venncv.layout.geometry import Point
from venncv.layout.placement import find_position, nearest_valid_position
from venncv.layout.regions import is_position_valid, is_valid_region
from venncv.layout.validator import validate_and_fix
from venncv.parser.model import Document, Field, Project

logger = logging.getLogger(__name__)

JITTER: float = 10.0
"""Maximum per-axis offset applied by reshuffle_layout."""

__all__ = [
    "add_field",
    "balance_three_fields",
    "compute_layout",
    "compute_position",
    "end_drag",
    "is_position_valid",
    "nearest_valid_position",
    "new_project",
    "place_project",
    "relax_and_validate",
    "remove_field",
    "reorder_field",
    "reshuffle_layout",
    "set_membership",
]


def compute_position(project: Project, doc: Document) -> Point:
    """Position for a new project or one whose memberships changed."""
    return find_position(project, doc)


def relax_and_validate(doc: Document) -> bool:
    """Relax and repair the whole document. Returns True if anything moved."""
    changed = validate_and_fix(doc)
    if changed:
        logger.debug("Layout changed during validation")
    return changed


def balance_three_fields(doc: Document) -> bool:
    """Resize and reposition fields for the three-field Venn layout."""
    return balance_fields(doc)


def compute_layout(doc: Document) -> None:
    """Place every project in insertion order, then relax and validate."""
    _place_in_order(doc, list(doc.projects.values()))
    relax_and_validate(doc)


def new_project(
    doc: Document,
    name: str = "New project",
    field_ids: list[str] | None = None,
    **attrs,
) -> Project:
    """Create a project with an auto id, place it and add it to the document."""
    project = Project(id=doc.new_project_id(), name=name,
                      field_ids=list(field_ids or []), **attrs)
    place_project(doc, project)
    return project


def place_project(doc: Document, project: Project) -> None:
    """Insert a project, rebalance three-field maps, then place and settle it."""
    doc.add_project(project)
    balance_three_fields(doc)
    project.move_to(compute_position(project, doc))
    relax_and_validate(doc)


def set_membership(doc: Document, project_id: str, field_id: str, member: bool) -> None:
    """Toggle a field membership and re-place the project."""
    doc.set_membership(project_id, field_id, member)
    project = doc.projects[project_id]
    project.move_to(compute_position(project, doc))
    relax_and_validate(doc)


def add_field(doc: Document, name: str = "New field", description: str = "") -> Field:
    fld = doc.new_field(name, description)
    balance_three_fields(doc)
    relax_and_validate(doc)
    return fld


def remove_field(doc: Document, field_id: str) -> None:
    """Delete a field (cascading to memberships) and re-settle the layout."""
    doc.remove_field(field_id)
    balance_three_fields(doc)
    relax_and_validate(doc)


def reorder_field(doc: Document, field_id: str, new_index: int) -> None:
    doc.reorder_field(field_id, new_index)
    balance_three_fields(doc)
    relax_and_validate(doc)


def end_drag(doc: Document, project_id: str, position: Point) -> bool:
    """Finish a free drag: keep the drop point if valid, else the nearest valid one.

    Returns True if the drop point had to be corrected.
    """
    project = doc.projects[project_id]
    project.move_to(position)
    corrected = nearest_valid_position(project, doc)
    project.move_to(corrected)
    relax_and_validate(doc)
    return project.center != position


def reshuffle_layout(
    doc: Document,
    rng: random.Random,
    jitter: float = JITTER,
) -> None:
    """Re-place projects in a random order with small random offsets.

    Randomness comes only from ``rng``, so a seeded generator gives a
    reproducible layout.
    """
    order = list(doc.projects.values())
    rng.shuffle(order)
    _place_in_order(doc, order, rng=rng, jitter=jitter)
    relax_and_validate(doc)


def _place_in_order(
    doc: Document,
    order: list[Project],
    rng: random.Random | None = None,
    jitter: float = 0.0,
) -> None:
    """Place projects one by one, each seeing only the ones placed before it.

    The document's own project order is left untouched.
    """
    scratch = Document(fields=doc.fields, projects={}, relations=doc.relations,
                       tags=doc.tags)
    for project in order:
        position = find_position(project, scratch)
        if rng is not None and jitter > 0:
            offset = (position[0] + rng.uniform(-jitter, jitter),
                      position[1] + rng.uniform(-jitter, jitter))
            if is_valid_region(project, scratch, offset):
                position = offset
        project.move_to(position)
        scratch.add_project(project)
    logger.debug("Placed %d projects", len(order))
