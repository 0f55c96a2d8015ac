"""Render constants used across render modules.

Theme-dependent values remain in style.py.
"""

CANVAS_PADDING: float = 60.0
"""Padding around the drawn content."""

FIELD_LABEL_OFFSET: float = 25.0
"""Distance of a field name outside its circle."""

FIELD_LABEL_NEIGHBOR_FACTOR: float = 1.5
"""Fields closer than this multiple of their radius sum push labels away."""

PROJECT_LABEL_GAP: float = 6.0
"""Gap between a project circle and its name."""

ARROW_HEAD_SIZE: float = 4.0
"""Arrowhead size, in multiples of the relation stroke width."""

LEGEND_LINE_HEIGHT: float = 22.0
"""Vertical height per legend entry."""

LEGEND_PADDING: float = 10.0
"""Internal padding of the legend box."""

LEGEND_SWATCH_RADIUS: float = 7.0
"""Radius of the status swatch circle."""

LEGEND_CHAR_WIDTH_RATIO: float = 0.55
"""Character width as a fraction of font size for legend sizing."""
