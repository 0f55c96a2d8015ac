"""Theme and colour helpers for research map rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a research map."""

    name: str
    background_color: str
    field_fill: str
    field_stroke: str
    field_stroke_width: float
    field_label_color: str
    field_label_font_size: float
    project_stroke_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    legend_background: str
    legend_text_color: str
    legend_font_size: float
    show_project_numbers: bool = True
    show_project_names: bool = True
    arrow_dash: str = "6,4"  # stroke pattern of indirect relations


def rgb_hex(rgb: tuple[int, ...]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb[:3])


def rgba_css(rgba: tuple[int, int, int, int]) -> str:
    r, g, b, a = rgba
    return f"rgba({r}, {g}, {b}, {a / 255:.3f})"


def completion_color(percentage: float) -> tuple[int, int, int]:
    """Border colour for a completion percentage.

    0% is red, 50% yellow and 100% green, linear in between.
    """
    p = min(max(percentage, 0.0), 100.0) / 100.0
    if p <= 0.5:
        return (255, int(255 * p * 2), 0)
    return (int(255 * (1.0 - (p - 0.5) * 2)), 255, 0)
