"""Geometry kernel: point-to-point edge routing.

Public API:
- straight_path, simple_bezier_path, bezier_path: curve routers
- smooth_step_path, step_path: orthogonal routers
- route_edge: dispatch by edge type
- connection_line_path: path of the in-progress connection line
- EdgeGeometry: path string plus label anchor
"""

from edgeflow.layout.routing.common import EdgeGeometry
from edgeflow.layout.routing.core import (
    EdgeStyle,
    connection_line_path,
    edge_routers,
    route_edge,
)
from edgeflow.layout.routing.curves import (
    bezier_path,
    control_offset,
    simple_bezier_path,
    straight_path,
)
from edgeflow.layout.routing.step import orthogonal_points, smooth_step_path, step_path

__all__ = [
    "EdgeGeometry",
    "EdgeStyle",
    "bezier_path",
    "connection_line_path",
    "control_offset",
    "edge_routers",
    "orthogonal_points",
    "route_edge",
    "simple_bezier_path",
    "smooth_step_path",
    "step_path",
    "straight_path",
]
