"""Orthogonal (step / smoothstep) edge routing.

Mimics orthogonal routing with a fixed corner budget: each endpoint is
pushed out of its node by ``offset`` along its facing direction, the gapped
points are joined with one or two corners, and every interior vertex is
optionally rounded with a quadratic curve. Not a real obstacle-avoiding
router, but O(1) and stable under small moves.
"""

from __future__ import annotations

import math

from edgeflow.layout.constants import BORDER_RADIUS, STEP_OFFSET
from edgeflow.layout.routing.common import EdgeGeometry, edge_center, fmt
from edgeflow.model import Point, Position


def _travel_direction(
    output_gapped: Point, output_position: Position, input_gapped: Point
) -> tuple[int, int]:
    """Net travel direction between the gapped points on the output's axis."""
    if output_position.is_horizontal:
        return (1, 0) if output_gapped.x < input_gapped.x else (-1, 0)
    return (0, 1) if output_gapped.y < input_gapped.y else (0, -1)


def orthogonal_points(
    output: Point,
    output_position: Position,
    input: Point,
    input_position: Position,
    center_x: float | None = None,
    center_y: float | None = None,
    offset: float = STEP_OFFSET,
) -> tuple[list[Point], float, float, float, float]:
    """Compute the routed polyline and its label anchor.

    Returns ``(points, label_x, label_y, offset_x, offset_y)`` where points
    is ``[output, output_gapped, *corners, input_gapped, input]``.
    """
    out_dir = output_position.vector
    in_dir = input_position.vector
    output_gapped = Point(
        output.x + out_dir[0] * offset, output.y + out_dir[1] * offset
    )
    input_gapped = Point(input.x + in_dir[0] * offset, input.y + in_dir[1] * offset)

    travel = _travel_direction(output_gapped, output_position, input_gapped)
    axis = 0 if travel[0] != 0 else 1
    current = travel[axis]

    default_cx, default_cy, default_offset_x, default_offset_y = edge_center(
        output, input
    )

    if out_dir[axis] * in_dir[axis] == -1:
        # Opposite facing on the routing axis: split with a bisector
        label_x = center_x or default_cx
        label_y = center_y or default_cy
        vertical_split = [
            Point(label_x, output_gapped.y),
            Point(label_x, input_gapped.y),
        ]
        horizontal_split = [
            Point(output_gapped.x, label_y),
            Point(input_gapped.x, label_y),
        ]
        if out_dir[axis] == current:
            corners = vertical_split if axis == 0 else horizontal_split
        else:
            corners = horizontal_split if axis == 0 else vertical_split
    else:
        # Single corner, x from output and y from input or the reverse
        output_input = [Point(output_gapped.x, input_gapped.y)]
        input_output = [Point(input_gapped.x, output_gapped.y)]
        if axis == 0:
            corners = input_output if out_dir[0] == current else output_input
        else:
            corners = output_input if out_dir[1] == current else input_output

        if output_position is not input_position:
            # Mixed pin positions, e.g. RIGHT -> BOTTOM
            other = 1 - axis
            is_same_dir = out_dir[axis] == in_dir[other]
            output_gt = output_gapped[other] > input_gapped[other]
            output_lt = output_gapped[other] < input_gapped[other]
            flip = (
                out_dir[axis] == 1
                and ((not is_same_dir and output_gt) or (is_same_dir and output_lt))
            ) or (
                out_dir[axis] != 1
                and ((not is_same_dir and output_lt) or (is_same_dir and output_gt))
            )
            if flip:
                corners = output_input if axis == 0 else input_output

        label_x, label_y = corners[0]

    points = [output, output_gapped, *corners, input_gapped, input]
    return points, label_x, label_y, default_offset_x, default_offset_y


def _distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def bend(a: Point, b: Point, c: Point, size: float) -> str:
    """Path segment for vertex ``b`` between ``a`` and ``c``.

    A colinear vertex is a plain line; otherwise a short lead-in line is
    followed by a quadratic curve through the corner.
    """
    bend_size = min(_distance(a, b) / 2, _distance(b, c) / 2, size)
    x, y = b

    if (a.x == x == c.x) or (a.y == y == c.y):
        return f"L{fmt(x)} {fmt(y)}"

    # first segment is horizontal
    if a.y == y:
        x_dir = -1 if a.x < c.x else 1
        y_dir = 1 if a.y < c.y else -1
        return (
            f"L {fmt(x + bend_size * x_dir)},{fmt(y)}"
            f"Q {fmt(x)},{fmt(y)} {fmt(x)},{fmt(y + bend_size * y_dir)}"
        )

    x_dir = 1 if a.x < c.x else -1
    y_dir = -1 if a.y < c.y else 1
    return (
        f"L {fmt(x)},{fmt(y + bend_size * y_dir)}"
        f"Q {fmt(x)},{fmt(y)} {fmt(x + bend_size * x_dir)},{fmt(y)}"
    )


def smooth_step_path(
    output: Point,
    output_position: Position,
    input: Point,
    input_position: Position,
    border_radius: float = BORDER_RADIUS,
    center_x: float | None = None,
    center_y: float | None = None,
    offset: float = STEP_OFFSET,
) -> EdgeGeometry:
    points, label_x, label_y, offset_x, offset_y = orthogonal_points(
        output,
        output_position,
        input,
        input_position,
        center_x=center_x,
        center_y=center_y,
        offset=offset,
    )

    segments = []
    last = len(points) - 1
    for i, p in enumerate(points):
        if 0 < i < last:
            segments.append(bend(points[i - 1], p, points[i + 1], border_radius))
        else:
            segments.append(f"{'M' if i == 0 else 'L'}{fmt(p.x)} {fmt(p.y)}")

    return EdgeGeometry("".join(segments), label_x, label_y, offset_x, offset_y)


def step_path(
    output: Point,
    output_position: Position,
    input: Point,
    input_position: Position,
    center_x: float | None = None,
    center_y: float | None = None,
    offset: float = STEP_OFFSET,
) -> EdgeGeometry:
    """Right-angle variant of :func:`smooth_step_path`."""
    return smooth_step_path(
        output,
        output_position,
        input,
        input_position,
        border_radius=0,
        center_x=center_x,
        center_y=center_y,
        offset=offset,
    )
