"""Light theme (white canvas, grey field rims)."""

from venncv.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="#ffffff",
    field_fill="rgba(0, 0, 0, 0.03)",
    field_stroke="#888888",
    field_stroke_width=2.0,
    field_label_color="#111111",
    field_label_font_size=16.0,
    project_stroke_width=3.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    legend_background="rgba(255, 255, 255, 0.85)",
    legend_text_color="#333333",
    legend_font_size=12.0,
)
