"""SVG generation for research maps using drawsvg.

Consumes the geometry computed by the layout core; never moves anything.
"""

from __future__ import annotations

import math

import drawsvg as draw

from venncv.layout.geometry import distance
from venncv.parser.model import Document, Field, RelationType
from venncv.render.constants import (
    ARROW_HEAD_SIZE,
    CANVAS_PADDING,
    FIELD_LABEL_NEIGHBOR_FACTOR,
    FIELD_LABEL_OFFSET,
    PROJECT_LABEL_GAP,
)
from venncv.render.legend import compute_legend_dimensions, render_legend
from venncv.render.style import Theme, completion_color, rgb_hex, rgba_css


def render_svg(
    doc: Document,
    theme: Theme,
    width: int | None = None,
    height: int | None = None,
    padding: float = CANVAS_PADDING,
) -> str:
    """Render a laid-out document to an SVG string."""
    if not doc.fields and not doc.projects:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    min_x, min_y, max_x, max_y = _content_bounds(doc)
    # Field labels sit outside the circles
    margin = padding + FIELD_LABEL_OFFSET + theme.field_label_font_size
    ox = margin - min_x
    oy = margin - min_y

    legend_w, legend_h = compute_legend_dimensions(theme)
    auto_width = (max_x - min_x) + margin * 2
    auto_height = (max_y - min_y) + margin * 2 + legend_h + padding / 2
    svg_width = width or int(max(auto_width, legend_w + padding * 2))
    svg_height = height or int(auto_height)

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    _render_fields(d, doc, theme, ox, oy)
    _render_relations(d, doc, theme, ox, oy)
    _render_projects(d, doc, theme, ox, oy)

    render_legend(d, theme, padding, (max_y - min_y) + margin * 2)
    return d.as_svg()


def _content_bounds(doc: Document) -> tuple[float, float, float, float]:
    circles = [(f.x, f.y, f.radius) for f in doc.fields.values()]
    circles += [(p.x, p.y, p.radius) for p in doc.projects.values()]
    return (
        min(x - r for x, _, r in circles),
        min(y - r for _, y, r in circles),
        max(x + r for x, _, r in circles),
        max(y + r for _, y, r in circles),
    )


def field_label_angle(fld: Field, doc: Document) -> float:
    """Angle at which to place a field's name.

    Points away from the nearest neighbouring field that overlaps or
    nearly touches it; straight up otherwise.
    """
    best_angle = -math.pi / 2
    min_distance = math.inf
    for other in doc.fields.values():
        if other.id == fld.id:
            continue
        d = distance(fld.center, other.center)
        if d < (fld.radius + other.radius) * FIELD_LABEL_NEIGHBOR_FACTOR and d < min_distance:
            min_distance = d
            best_angle = math.atan2(other.y - fld.y, other.x - fld.x) + math.pi
    return best_angle


def _render_fields(d: draw.Drawing, doc: Document, theme: Theme, ox: float, oy: float) -> None:
    for fld in doc.fields.values():
        d.append(draw.Circle(
            fld.x + ox, fld.y + oy, fld.radius,
            fill=theme.field_fill,
            stroke=theme.field_stroke,
            stroke_width=theme.field_stroke_width,
        ))

    for fld in doc.fields.values():
        angle = field_label_angle(fld, doc)
        reach = fld.radius + FIELD_LABEL_OFFSET
        d.append(draw.Text(
            fld.name,
            theme.field_label_font_size,
            fld.x + ox + reach * math.cos(angle),
            fld.y + oy + reach * math.sin(angle),
            fill=theme.field_label_color,
            font_family=theme.label_font_family,
            font_weight="bold",
            text_anchor="middle",
            dominant_baseline="central",
        ))


def _render_relations(d: draw.Drawing, doc: Document, theme: Theme, ox: float, oy: float) -> None:
    """Render relation arrows between project rims. Dangling relations are skipped."""
    for relation in doc.relations:
        src = doc.projects.get(relation.from_id)
        tgt = doc.projects.get(relation.to_id)
        if src is None or tgt is None or src.id == tgt.id:
            continue
        d_centers = distance(src.center, tgt.center)
        if d_centers <= src.radius + tgt.radius:
            continue

        ux = (tgt.x - src.x) / d_centers
        uy = (tgt.y - src.y) / d_centers
        color = rgba_css(relation.color)

        arrow = draw.Marker(-0.1, -0.5, 0.9, 0.5, scale=ARROW_HEAD_SIZE, orient="auto")
        arrow.append(draw.Lines(-0.1, 0.5, -0.1, -0.5, 0.9, 0, fill=color, close=True))

        extra = {}
        if relation.kind == RelationType.INDIRECT:
            extra["stroke_dasharray"] = theme.arrow_dash
        d.append(draw.Line(
            src.x + ox + ux * src.radius, src.y + oy + uy * src.radius,
            tgt.x + ox - ux * (tgt.radius + relation.width * ARROW_HEAD_SIZE),
            tgt.y + oy - uy * (tgt.radius + relation.width * ARROW_HEAD_SIZE),
            stroke=color,
            stroke_width=relation.width,
            marker_end=arrow,
            **extra,
        ))


def _render_projects(d: draw.Drawing, doc: Document, theme: Theme, ox: float, oy: float) -> None:
    """Render projects: fill by status, rim by completion."""
    for number, project in enumerate(doc.projects.values(), start=1):
        cx = project.x + ox
        cy = project.y + oy
        d.append(draw.Circle(
            cx, cy, project.radius,
            fill=rgb_hex(project.status.color),
            stroke=rgb_hex(completion_color(project.completion)),
            stroke_width=theme.project_stroke_width,
        ))
        if theme.show_project_numbers:
            d.append(draw.Text(
                str(number),
                theme.label_font_size,
                cx, cy,
                fill="#000000",
                font_family=theme.label_font_family,
                font_weight="bold",
                text_anchor="middle",
                dominant_baseline="central",
            ))
        if theme.show_project_names and project.name:
            d.append(draw.Text(
                project.name,
                theme.label_font_size,
                cx, cy + project.radius + PROJECT_LABEL_GAP,
                fill=theme.label_color,
                font_family=theme.label_font_family,
                text_anchor="middle",
                dominant_baseline="hanging",
            ))
