"""Shared pieces of the geometry kernel: result type, label anchors, number
formatting for path strings."""

from __future__ import annotations

from dataclasses import dataclass

from edgeflow.model import Point


@dataclass(frozen=True)
class EdgeGeometry:
    """Renderable result of routing one edge."""

    path: str
    label_x: float
    label_y: float
    label_offset_x: float
    label_offset_y: float

    @property
    def label(self) -> Point:
        return Point(self.label_x, self.label_y)


def fmt(value: float) -> str:
    """Format a coordinate for a path string; integral values drop the '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def edge_center(output: Point, input: Point) -> tuple[float, float, float, float]:
    """Midpoint of the straight segment plus the absolute half-deltas.

    Used for straight edges and as the default centre of step routing.
    """
    x_offset = abs(input.x - output.x) / 2
    center_x = input.x + x_offset if input.x < output.x else input.x - x_offset

    y_offset = abs(input.y - output.y) / 2
    center_y = input.y + y_offset if input.y < output.y else input.y - y_offset

    return center_x, center_y, x_offset, y_offset


def bezier_edge_center(
    output: Point,
    output_control: Point,
    input_control: Point,
    input: Point,
) -> tuple[float, float, float, float]:
    """Label anchor at the cubic bezier point for t=0.5.

    This is the curve parameter midpoint, not the arc-length midpoint,
    which is close enough for label placement and O(1).
    """
    center_x = (
        output.x * 0.125
        + output_control.x * 0.375
        + input_control.x * 0.375
        + input.x * 0.125
    )
    center_y = (
        output.y * 0.125
        + output_control.y * 0.375
        + input_control.y * 0.375
        + input.y * 0.125
    )
    return center_x, center_y, abs(center_x - output.x), abs(center_y - output.y)
