"""Straight and bezier edge paths."""

from __future__ import annotations

import math

from edgeflow.layout.constants import CURVATURE, CURVATURE_SCALE
from edgeflow.layout.routing.common import (
    EdgeGeometry,
    bezier_edge_center,
    edge_center,
    fmt,
)
from edgeflow.model import Point, Position


def straight_path(output: Point, input: Point) -> EdgeGeometry:
    """A single line segment; the label sits at the midpoint."""
    label_x, label_y, offset_x, offset_y = edge_center(output, input)
    path = f"M {fmt(output.x)},{fmt(output.y)}L {fmt(input.x)},{fmt(input.y)}"
    return EdgeGeometry(path, label_x, label_y, offset_x, offset_y)


# ---------------------------------------------------------------------------
# Simple bezier
# ---------------------------------------------------------------------------


def _simple_control(position: Position, point: Point, other: Point) -> Point:
    if position.is_horizontal:
        return Point(0.5 * (point.x + other.x), point.y)
    return Point(point.x, 0.5 * (point.y + other.y))


def simple_bezier_path(
    output: Point,
    output_position: Position,
    input: Point,
    input_position: Position,
) -> EdgeGeometry:
    """Cubic bezier whose control points sit halfway between the endpoints
    along each endpoint's facing axis."""
    output_control = _simple_control(output_position, output, input)
    input_control = _simple_control(input_position, input, output)
    return _cubic(output, output_control, input_control, input)


# ---------------------------------------------------------------------------
# Curvature-weighted bezier
# ---------------------------------------------------------------------------


def control_offset(gap: float, curvature: float) -> float:
    """Distance of a control point from its endpoint along the facing axis.

    A non-negative gap means the endpoints already face each other and the
    control point goes halfway. A negative gap (facing away) overshoots by
    ``curvature * 25 * sqrt(-gap)`` so the curve loops instead of kinking.
    """
    if gap >= 0:
        return 0.5 * gap
    return curvature * CURVATURE_SCALE * math.sqrt(-gap)


def _curvature_control(
    position: Position, point: Point, other: Point, curvature: float
) -> Point:
    if position is Position.LEFT:
        return Point(point.x - control_offset(point.x - other.x, curvature), point.y)
    if position is Position.RIGHT:
        return Point(point.x + control_offset(other.x - point.x, curvature), point.y)
    if position is Position.TOP:
        return Point(point.x, point.y - control_offset(point.y - other.y, curvature))
    return Point(point.x, point.y + control_offset(other.y - point.y, curvature))


def bezier_path(
    output: Point,
    output_position: Position,
    input: Point,
    input_position: Position,
    curvature: float = CURVATURE,
) -> EdgeGeometry:
    """Cubic bezier with curvature-weighted control points (the default edge)."""
    output_control = _curvature_control(output_position, output, input, curvature)
    input_control = _curvature_control(input_position, input, output, curvature)
    return _cubic(output, output_control, input_control, input)


def _cubic(
    output: Point, output_control: Point, input_control: Point, input: Point
) -> EdgeGeometry:
    label_x, label_y, offset_x, offset_y = bezier_edge_center(
        output, output_control, input_control, input
    )
    path = (
        f"M{fmt(output.x)},{fmt(output.y)} "
        f"C{fmt(output_control.x)},{fmt(output_control.y)} "
        f"{fmt(input_control.x)},{fmt(input_control.y)} "
        f"{fmt(input.x)},{fmt(input.y)}"
    )
    return EdgeGeometry(path, label_x, label_y, offset_x, offset_y)
