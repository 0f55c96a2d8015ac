"""Theme definitions for research maps."""

from venncv.themes.dark import DARK_THEME
from venncv.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "LIGHT_THEME", "DARK_THEME"]
