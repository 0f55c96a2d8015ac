"""Three-field balancing: size and place the canonical three-circle Venn.

Field radii grow with the share of projects touching each field. The
three centres sit on an equilateral triangle that shrinks as more
projects are shared by all three fields, clamped so every pair of
circles still intersects.
"""

from __future__ import annotations

import logging
import math
from collections import Counter

from venncv.layout.constants import (
    BALANCE_CENTER,
    BASE_FIELD_RADIUS,
    BASE_TRIANGLE_SIZE,
    DENSITY_GROWTH,
    MAX_SIDE_RATIO,
    MIN_FIELD_RADIUS,
    MIN_TRIANGLE_SIZE,
    SHARED_SHRINK,
)
from venncv.parser.model import Document

logger = logging.getLogger(__name__)

# Region keys of a three-set Venn diagram, as membership flags (A, B, C)
REGIONS: dict[tuple[bool, bool, bool], str] = {
    (True, False, False): "A",
    (False, True, False): "B",
    (False, False, True): "C",
    (True, True, False): "AB",
    (True, False, True): "AC",
    (False, True, True): "BC",
    (True, True, True): "ABC",
}

SQRT3 = math.sqrt(3.0)


def count_regions(doc: Document) -> Counter:
    """Count projects per non-empty Venn region of the first three fields."""
    field_ids = list(doc.fields)[:3]
    counts: Counter = Counter()
    for project in doc.projects.values():
        key = tuple(fid in project.field_ids for fid in field_ids)
        region = REGIONS.get(key)
        if region is not None:
            counts[region] += 1
    return counts


def triangle_size(radii: list[float], shared_fraction: float) -> float:
    """Centre-to-vertex distance of the field triangle.

    Shrinks linearly with the share of projects in all three fields, then
    is clamped so the triangle side stays within MAX_SIDE_RATIO of the
    smallest pairwise radius sum.
    """
    size = BASE_TRIANGLE_SIZE * (1.0 - shared_fraction * SHARED_SHRINK)
    side = size * SQRT3
    min_pair_sum = min(
        radii[0] + radii[1], radii[1] + radii[2], radii[0] + radii[2]
    )
    if side > min_pair_sum * MAX_SIDE_RATIO:
        size = max(min_pair_sum * MAX_SIDE_RATIO / SQRT3, MIN_TRIANGLE_SIZE)
    return size


def balance_fields(doc: Document) -> bool:
    """Resize and reposition exactly three fields from project membership.

    Returns True if the document was changed. Documents with any other
    number of fields, or without projects, are left untouched.
    """
    if len(doc.fields) != 3:
        return False
    total = len(doc.projects)
    if total == 0:
        return False

    counts = count_regions(doc)
    memberships = (
        ("A", "AB", "AC", "ABC"),
        ("B", "AB", "BC", "ABC"),
        ("C", "AC", "BC", "ABC"),
    )
    base = max(BASE_FIELD_RADIUS, MIN_FIELD_RADIUS)
    radii = [
        base + sum(counts[r] for r in regions) / total * DENSITY_GROWTH
        for regions in memberships
    ]

    shared_fraction = min(counts["ABC"] / total, 1.0)
    size = triangle_size(radii, shared_fraction)

    changed = False
    cx, cy = BALANCE_CENTER
    for i, fld in enumerate(doc.fields.values()):
        # Vertices at -90, 30 and 150 degrees: top, bottom-right, bottom-left
        angle = -math.pi / 2 + i * 2 * math.pi / 3
        x = cx + size * math.cos(angle)
        y = cy + size * math.sin(angle)
        if (x, y, radii[i]) != (fld.x, fld.y, fld.radius):
            fld.x, fld.y, fld.radius = x, y, radii[i]
            changed = True

    logger.debug("Balanced fields: radii=%s triangle=%.1f shared=%.2f",
                 [round(r, 1) for r in radii], size, shared_fraction)
    return changed
