"""SVG rendering of laid-out research maps."""

from venncv.render.svg import render_svg

__all__ = ["render_svg"]
