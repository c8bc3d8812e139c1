"""Animation support: marching dashes along animated edges."""

from __future__ import annotations

__all__ = ["render_animated_edge", "compute_path_length"]

import math
import re
from html import escape

import drawsvg as draw

from edgeflow.render.constants import (
    ANIMATION_DASH,
    ANIMATION_SPEED,
    MIN_ANIMATION_DURATION,
)

_TOKEN = re.compile(r"[MLQC]|[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")


def render_animated_edge(
    group: draw.Group,
    d_attr: str,
    stroke: str,
    stroke_width: float,
    css_class: str,
    speed: float = ANIMATION_SPEED,
    data_id: str | None = None,
    marker_end: str | None = None,
) -> None:
    """Append an edge path whose dashes travel from output to input.

    Every animated edge moves at the same speed. Paths shorter than one
    dash period are drawn dashed but static.
    """
    period = ANIMATION_DASH * 2
    dur = max(period / speed, MIN_ANIMATION_DURATION)
    extra = ""
    if data_id is not None:
        extra += f'data-id="{escape(data_id)}" '
    if marker_end is not None:
        extra += f'marker-end="{marker_end}" '
    opening = (
        f'<path d="{d_attr}" class="{css_class}" fill="none" {extra}'
        f'stroke="{stroke}" stroke-width="{stroke_width}" '
        f'stroke-dasharray="{ANIMATION_DASH:g}">'
    )
    if compute_path_length(d_attr) < period:
        group.append(draw.Raw(opening + "</path>"))
        return

    group.append(
        draw.Raw(
            opening
            + f'<animate attributeName="stroke-dashoffset" '
            f'from="{period:g}" to="0" dur="{dur:.2f}s" '
            f'repeatCount="indefinite"/>'
            "</path>"
        )
    )


def compute_path_length(d_attr: str) -> float:
    """Approximate the length of an SVG path from its commands.

    Parses M, L, Q and C commands. Curves are approximated by the average
    of their chord and their control polygon.
    """
    tokens = _TOKEN.findall(d_attr)

    total = 0.0
    cx, cy = 0.0, 0.0
    command = None
    i = 0

    while i < len(tokens):
        token = tokens[i]
        if token in "MLQC":
            command = token
            i += 1
            continue

        if command == "M":
            cx, cy = float(tokens[i]), float(tokens[i + 1])
            # implicit repeats of M are line-tos
            command = "L"
            i += 2
        elif command == "L":
            nx, ny = float(tokens[i]), float(tokens[i + 1])
            total += math.hypot(nx - cx, ny - cy)
            cx, cy = nx, ny
            i += 2
        elif command == "Q":
            qx, qy = float(tokens[i]), float(tokens[i + 1])
            ex, ey = float(tokens[i + 2]), float(tokens[i + 3])
            polygon = math.hypot(qx - cx, qy - cy) + math.hypot(ex - qx, ey - qy)
            total += (math.hypot(ex - cx, ey - cy) + polygon) / 2
            cx, cy = ex, ey
            i += 4
        elif command == "C":
            ax, ay = float(tokens[i]), float(tokens[i + 1])
            bx, by = float(tokens[i + 2]), float(tokens[i + 3])
            ex, ey = float(tokens[i + 4]), float(tokens[i + 5])
            polygon = (
                math.hypot(ax - cx, ay - cy)
                + math.hypot(bx - ax, by - ay)
                + math.hypot(ex - bx, ey - by)
            )
            total += (math.hypot(ex - cx, ey - cy) + polygon) / 2
            cx, cy = ex, ey
            i += 6
        else:
            i += 1

    return total
