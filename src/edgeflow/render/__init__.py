"""SVG rendering of edge tiers, nodes, pins and the connection line."""

from edgeflow.render.style import DARK_THEME, LIGHT_THEME, THEMES, Theme
from edgeflow.render.svg import connection_line, render_svg

__all__ = [
    "DARK_THEME",
    "LIGHT_THEME",
    "THEMES",
    "Theme",
    "connection_line",
    "render_svg",
]
