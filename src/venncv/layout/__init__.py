"""Layout core: placement, relaxation, validation and field balancing."""

from venncv.layout.engine import (
    add_field,
    balance_three_fields,
    compute_layout,
    compute_position,
    end_drag,
    is_position_valid,
    nearest_valid_position,
    new_project,
    place_project,
    relax_and_validate,
    remove_field,
    reorder_field,
    reshuffle_layout,
    set_membership,
)
from venncv.layout.regions import is_valid_region
from venncv.layout.validator import Severity, Violation, check_layout

__all__ = [
    "Severity",
    "Violation",
    "add_field",
    "balance_three_fields",
    "check_layout",
    "compute_layout",
    "compute_position",
    "end_drag",
    "is_position_valid",
    "is_valid_region",
    "nearest_valid_position",
    "new_project",
    "place_project",
    "relax_and_validate",
    "remove_field",
    "reorder_field",
    "reshuffle_layout",
    "set_membership",
]
