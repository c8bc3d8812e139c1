"""Viewport culling and z-level tiering of edges."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from edgeflow.layout.constants import DEGENERATE_AXIS_PADDING
from edgeflow.model import Edge, Node, Point, Transform


@dataclass
class EdgeTier:
    """Edges sharing one rendering z-level."""

    level: int
    edges: list[Edge] = field(default_factory=list)
    is_topmost: bool = False


def viewport_box(
    width: float, height: float, transform: Transform
) -> tuple[float, float, float, float]:
    """World-space visible rectangle as ``(x, y, x2, y2)``."""
    tx, ty, zoom = transform
    x = -tx / zoom
    y = -ty / zoom
    return x, y, x + width / zoom, y + height / zoom


def is_edge_visible(
    output_pos: Point,
    input_pos: Point,
    output_size: tuple[float, float],
    input_size: tuple[float, float],
    width: float,
    height: float,
    transform: Transform,
) -> bool:
    """True when the edge's node-expanded bounding box overlaps the viewport."""
    x = min(output_pos.x, input_pos.x)
    y = min(output_pos.y, input_pos.y)
    x2 = max(output_pos.x + output_size[0], input_pos.x + input_size[0])
    y2 = max(output_pos.y + output_size[1], input_pos.y + input_size[1])

    if x == x2:
        x2 += DEGENERATE_AXIS_PADDING
    if y == y2:
        y2 += DEGENERATE_AXIS_PADDING

    vx, vy, vx2, vy2 = viewport_box(width, height, transform)

    x_overlap = max(0.0, min(vx2, x2) - max(vx, x))
    y_overlap = max(0.0, min(vy2, y2) - max(vy, y))
    return math.ceil(x_overlap * y_overlap) > 0


def cull_invisible(
    edges: Iterable[Edge],
    nodes: Mapping[str, Node],
    viewport: tuple[float, float, Transform],
) -> list[Edge]:
    """Keep edges whose measured endpoint nodes make them visible."""
    width, height, transform = viewport
    visible: list[Edge] = []
    for edge in edges:
        output_node = nodes.get(edge.output)
        input_node = nodes.get(edge.input)
        if not (output_node and input_node):
            continue
        if not (output_node.is_measured and input_node.is_measured):
            continue
        if is_edge_visible(
            Point(output_node.x, output_node.y),
            Point(input_node.x, input_node.y),
            (output_node.width, output_node.height),
            (input_node.width, input_node.height),
            width,
            height,
            transform,
        ):
            visible.append(edge)
    return visible


def group_by_tier(
    edges: Iterable[Edge],
    nodes: Mapping[str, Node],
    elevate_on_select: bool = False,
) -> list[EdgeTier]:
    """Group edges into ascending z-level tiers.

    The level is the edge's explicit ``z_index``, else 0, else (when
    elevating) the higher z of its two endpoint nodes. The last tier is
    flagged topmost. An empty edge set still yields one tier at level 0.
    """
    levels: dict[int, list[Edge]] = {}
    for edge in edges:
        if edge.z_index is not None:
            z = edge.z_index
        elif elevate_on_select:
            output_node = nodes.get(edge.output)
            input_node = nodes.get(edge.input)
            z = max(
                output_node.z if output_node else 0,
                input_node.z if input_node else 0,
            )
        else:
            z = 0
        levels.setdefault(z, []).append(edge)

    if not levels:
        return [EdgeTier(level=0, edges=[], is_topmost=True)]

    top = max(levels)
    return [
        EdgeTier(level=level, edges=levels[level], is_topmost=level == top)
        for level in sorted(levels)
    ]
