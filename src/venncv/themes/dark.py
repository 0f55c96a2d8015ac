"""Dark editor-style theme."""

from venncv.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#1e1e1e",
    field_fill="rgba(255, 255, 255, 0.05)",
    field_stroke="#9e9e9e",
    field_stroke_width=2.0,
    field_label_color="#e0e0e0",
    field_label_font_size=16.0,
    project_stroke_width=3.0,
    label_color="#cccccc",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    legend_background="rgba(0, 0, 0, 0.4)",
    legend_text_color="#e0e0e0",
    legend_font_size=12.0,
)
