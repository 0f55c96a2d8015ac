"""Legend for project status colours and completion rims."""

from __future__ import annotations

import drawsvg as draw

from venncv.parser.model import ProjectStatus
from venncv.render.constants import (
    LEGEND_CHAR_WIDTH_RATIO,
    LEGEND_LINE_HEIGHT,
    LEGEND_PADDING,
    LEGEND_SWATCH_RADIUS,
)
from venncv.render.style import Theme, completion_color, rgb_hex

_COMPLETION_STOPS = (0.0, 50.0, 100.0)


def _entries() -> list[tuple[str, str, str]]:
    """(label, fill, stroke) for every legend row."""
    rows = [
        (status.display_name, rgb_hex(status.color), "#666666")
        for status in ProjectStatus
    ]
    rows += [
        (f"{int(p)}% complete", "none", rgb_hex(completion_color(p)))
        for p in _COMPLETION_STOPS
    ]
    return rows


def compute_legend_dimensions(theme: Theme) -> tuple[float, float]:
    """Width and height of the legend box."""
    rows = _entries()
    max_len = max(len(label) for label, _, _ in rows)
    text_offset = LEGEND_SWATCH_RADIUS * 2 + LEGEND_PADDING
    width = LEGEND_PADDING * 2 + text_offset + max_len * theme.legend_font_size * LEGEND_CHAR_WIDTH_RATIO
    height = LEGEND_PADDING * 2 + len(rows) * LEGEND_LINE_HEIGHT
    return (width, height)


def render_legend(drawing: draw.Drawing, theme: Theme, x: float, y: float) -> None:
    width, height = compute_legend_dimensions(theme)
    drawing.append(draw.Rectangle(
        x, y, width, height,
        rx=6, ry=6,
        fill=theme.legend_background,
    ))

    for i, (label, fill, stroke) in enumerate(_entries()):
        cy = y + LEGEND_PADDING + LEGEND_LINE_HEIGHT * (i + 0.5)
        cx = x + LEGEND_PADDING + LEGEND_SWATCH_RADIUS
        drawing.append(draw.Circle(
            cx, cy, LEGEND_SWATCH_RADIUS,
            fill=fill,
            stroke=stroke,
            stroke_width=2.0,
        ))
        drawing.append(draw.Text(
            label,
            theme.legend_font_size,
            cx + LEGEND_SWATCH_RADIUS + LEGEND_PADDING, cy,
            fill=theme.legend_text_color,
            font_family=theme.label_font_family,
            dominant_baseline="central",
        ))
