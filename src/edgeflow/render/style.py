"""Visual themes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    name: str
    background_color: str
    node_fill: str
    node_stroke: str
    edge_color: str
    edge_selected_color: str
    edge_width: float
    label_color: str
    label_font_size: float
    font_family: str
    pin_color: str
    pin_connecting_color: str
    pin_valid_color: str
    connection_color: str
    connection_valid_color: str
    connection_invalid_color: str


LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    node_fill="#ffffff",
    node_stroke="#1a192b",
    edge_color="#b1b1b7",
    edge_selected_color="#555555",
    edge_width=1.0,
    label_color="#333333",
    label_font_size=10.0,
    font_family="Helvetica, Arial, sans-serif",
    pin_color="#1a192b",
    pin_connecting_color="#ff6060",
    pin_valid_color="#55dd99",
    connection_color="#b1b1b7",
    connection_valid_color="#55dd99",
    connection_invalid_color="#ff6060",
)

DARK_THEME = Theme(
    name="dark",
    background_color="#141414",
    node_fill="#1e1e1e",
    node_stroke="#e0e0e0",
    edge_color="#7a7a80",
    edge_selected_color="#f0f0f0",
    edge_width=1.0,
    label_color="#e0e0e0",
    label_font_size=10.0,
    font_family="Helvetica, Arial, sans-serif",
    pin_color="#e0e0e0",
    pin_connecting_color="#ff6060",
    pin_valid_color="#55dd99",
    connection_color="#7a7a80",
    connection_valid_color="#55dd99",
    connection_invalid_color="#ff6060",
)

THEMES = {theme.name: theme for theme in (LIGHT_THEME, DARK_THEME)}
