"""Routing dispatcher: maps an edge type to its path function."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping

from edgeflow.layout.routing.common import EdgeGeometry, fmt
from edgeflow.layout.routing.curves import (
    bezier_path,
    simple_bezier_path,
    straight_path,
)
from edgeflow.layout.routing.step import smooth_step_path, step_path
from edgeflow.model import Point, Position

EdgeRouter = Callable[..., EdgeGeometry]


class EdgeStyle(str, Enum):
    """Built-in edge types. ``DEFAULT`` is the curvature-weighted bezier."""

    DEFAULT = "default"
    STRAIGHT = "straight"
    STEP = "step"
    SMOOTHSTEP = "smoothstep"
    SIMPLEBEZIER = "simplebezier"


def _straight(output, output_position, input, input_position):
    return straight_path(output, input)


BUILTIN_ROUTERS: dict[str, EdgeRouter] = {
    EdgeStyle.DEFAULT.value: bezier_path,
    EdgeStyle.STRAIGHT.value: _straight,
    EdgeStyle.STEP.value: step_path,
    EdgeStyle.SMOOTHSTEP.value: smooth_step_path,
    EdgeStyle.SIMPLEBEZIER.value: simple_bezier_path,
}

# Per-style path options taken from Edge.path_options; anything else is
# ignored so stale options never break a render.
_ACCEPTED_OPTIONS: dict[str, tuple[str, ...]] = {
    EdgeStyle.DEFAULT.value: ("curvature",),
    EdgeStyle.STRAIGHT.value: (),
    EdgeStyle.STEP.value: ("offset", "center_x", "center_y"),
    EdgeStyle.SMOOTHSTEP.value: ("border_radius", "offset", "center_x", "center_y"),
    EdgeStyle.SIMPLEBEZIER.value: (),
}


def edge_routers(
    custom: Mapping[str, EdgeRouter] | None = None,
) -> dict[str, EdgeRouter]:
    """Built-in routers overlaid with custom ones."""
    routers = dict(BUILTIN_ROUTERS)
    if custom:
        routers.update(custom)
    return routers


def route_edge(
    style: str | EdgeStyle,
    output: Point,
    output_position: Position | None,
    input: Point,
    input_position: Position | None,
    path_options: Mapping[str, Any] | None = None,
    routers: Mapping[str, EdgeRouter] | None = None,
) -> EdgeGeometry:
    """Route one edge with the router registered for ``style``.

    Missing positions default to BOTTOM for the output end and TOP for the
    input end. Unknown styles are the caller's concern (see the engine);
    here they fall back to the default router.
    """
    key = style.value if isinstance(style, EdgeStyle) else style
    routers = routers if routers is not None else BUILTIN_ROUTERS
    router = routers.get(key) or routers[EdgeStyle.DEFAULT.value]

    options: dict[str, Any] = {}
    if path_options:
        accepted = _ACCEPTED_OPTIONS.get(key)
        options = {
            k: v
            for k, v in path_options.items()
            if v is not None and (accepted is None or k in accepted)
        }

    return router(
        output,
        output_position or Position.BOTTOM,
        input,
        input_position or Position.TOP,
        **options,
    )


def connection_line_path(
    line_type: str | EdgeStyle,
    from_point: Point,
    from_position: Position,
    to_point: Point,
) -> str:
    """Path of the in-progress connection line.

    The free end is assumed to face the opposite side of the origin pin.
    """
    key = line_type.value if isinstance(line_type, EdgeStyle) else line_type
    to_position = from_position.opposite

    if key == EdgeStyle.DEFAULT.value:
        return bezier_path(from_point, from_position, to_point, to_position).path
    if key == EdgeStyle.STEP.value:
        return step_path(from_point, from_position, to_point, to_position).path
    if key == EdgeStyle.SMOOTHSTEP.value:
        return smooth_step_path(from_point, from_position, to_point, to_position).path
    if key == EdgeStyle.SIMPLEBEZIER.value:
        return simple_bezier_path(from_point, from_position, to_point, to_position).path
    return (
        f"M{fmt(from_point.x)},{fmt(from_point.y)} "
        f"{fmt(to_point.x)},{fmt(to_point.y)}"
    )
