"""Layout constants used across layout modules.

Centralizes the margins, force factors and attempt caps of placement,
relaxation, validation and field balancing.
"""

import math

# ---------------------------------------------------------------------------
# Clearances
# ---------------------------------------------------------------------------
CONTAINMENT_MARGIN: float = 5.0
"""Gap kept between a project circle and the rim of every field it belongs to."""

PROJECT_GAP: float = 15.0
"""Minimum gap between two project circles."""

ARROW_CLEARANCE: float = 25.0
"""Extra distance (beyond the project radius) kept from relation arrows."""

RELAX_SLACK: float = 0.5
"""Extra separation relaxation aims for beyond PROJECT_GAP and ARROW_CLEARANCE,
so a converged relaxation clears both."""

# ---------------------------------------------------------------------------
# Placement search
# ---------------------------------------------------------------------------
GOLDEN_ANGLE: float = math.pi * (3.0 - math.sqrt(5.0))
"""Angular step of the golden-angle spiral (about 137.5 degrees)."""

SEARCH_ATTEMPTS: int = 200
"""Candidates sampled per placement search."""

OUTSIDE_SPIRAL_STEP: float = 20.0
"""Radial growth factor of the spiral used for field-less projects."""

OUTSIDE_GAP: float = 20.0
"""Gap between the field bounding box and the start of the outside spiral."""

DIRECTION_BIAS: float = 10.0
"""Score bonus for candidates lying along the preferred direction."""

SCORE_CAP_FACTOR: float = 2.0
"""Clearance score cap, as a multiple of the usable field radius."""

ANCHOR_ITERATIONS: int = 100
"""Iterations of the intersection anchor estimate."""

ANCHOR_STEP: float = 0.5
"""Fraction of the violation corrected per anchor iteration."""

NEAREST_ATTEMPTS: int = 500
"""Candidates sampled when looking for the nearest valid position."""

NEAREST_SPIRAL_STEP: float = 4.0
"""Radial growth factor of the nearest-valid-position spiral."""

CANVAS_CENTER: tuple[float, float] = (400.0, 400.0)
"""Canonical canvas centre, used when a document has no fields."""

# ---------------------------------------------------------------------------
# Relaxation
# ---------------------------------------------------------------------------
RELAX_ITERATIONS: int = 50
"""Maximum relaxation iterations."""

PROJECT_REPULSION: float = 0.5
"""Share of a pairwise overlap each project moves away per iteration."""

ARROW_REPULSION: float = 0.3
"""Share of an arrow-corridor penetration a project moves away per iteration."""

DAMPING: float = 0.8
"""Damping applied to accumulated forces before a move is committed."""

MOVE_EPSILON: float = 0.01
"""Moves shorter than this are treated as no movement."""

# ---------------------------------------------------------------------------
# Validation / field growth
# ---------------------------------------------------------------------------
FOOTPRINT_RATIO: float = 0.4
"""Project footprint share of field area above which a field grows."""

FIELD_GROWTH: float = 30.0
"""Radius added to a field per expansion round."""

MAX_EXPANSION_ROUNDS: int = 3
"""Expansion rounds attempted by a single validation."""

SEPARATION_PASSES: int = 3
"""Re-placement passes for projects that relaxation left overlapping."""

# ---------------------------------------------------------------------------
# Three-field balancing
# ---------------------------------------------------------------------------
BALANCE_CENTER: tuple[float, float] = (400.0, 400.0)
"""Centre of the equilateral triangle holding the three field centres."""

BASE_FIELD_RADIUS: float = 180.0
"""Radius of a field before density growth."""

MIN_FIELD_RADIUS: float = 150.0
"""Lower bound on the base radius."""

DENSITY_GROWTH: float = 80.0
"""Radius added for a field holding every project."""

BASE_TRIANGLE_SIZE: float = 120.0
"""Centre-to-vertex distance of the triangle with no shared projects."""

SHARED_SHRINK: float = 0.4
"""Triangle shrink at 100% three-way shared projects."""

MAX_SIDE_RATIO: float = 0.8
"""Triangle side limit as a share of the smallest pairwise radius sum."""

MIN_TRIANGLE_SIZE: float = 80.0
"""Floor of the clamped triangle size."""
