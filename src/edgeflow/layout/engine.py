"""Render pass: cull, tier and route every edge of a diagram.

Consumes the current edge list and node geometry once per render and feeds
the geometry kernel with resolved endpoint coordinates and facing
directions per visible edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from edgeflow.errors import ErrorHandler, report_error
from edgeflow.layout.pins import edge_positions, find_pin, node_data
from edgeflow.layout.routing import EdgeGeometry, EdgeStyle, edge_routers, route_edge
from edgeflow.layout.routing.core import EdgeRouter
from edgeflow.layout.visibility import cull_invisible, group_by_tier
from edgeflow.model import (
    ConnectionMode,
    DiagramGraph,
    Edge,
    Position,
    Transform,
)


@dataclass
class RoutedEdge:
    """An edge with its resolved endpoints and routed geometry."""

    edge: Edge
    style: str
    output_position: Position
    input_position: Position
    geometry: EdgeGeometry


@dataclass
class RenderedTier:
    level: int
    is_topmost: bool
    routes: list[RoutedEdge] = field(default_factory=list)


def route_tiers(
    graph: DiagramGraph,
    width: float,
    height: float,
    transform: Transform = Transform(),
    *,
    only_render_visible: bool = False,
    elevate_edges_on_select: bool = False,
    connection_mode: ConnectionMode = ConnectionMode.STRICT,
    edge_types: Mapping[str, EdgeRouter] | None = None,
    on_error: ErrorHandler | None = None,
) -> list[RenderedTier]:
    """Route all renderable edges, grouped into z-level tiers.

    Returns an empty list when the container has no width (nothing can be
    drawn yet). Edges whose nodes are not measured are skipped silently;
    unresolvable pins and unknown edge types are reported.
    """
    if not width:
        report_error("004", on_error=on_error)
        return []

    edges = [e for e in graph.edges if not e.hidden]
    if only_render_visible:
        edges = cull_invisible(edges, graph.nodes, (width, height, transform))

    routers = edge_routers(edge_types)
    tiers = group_by_tier(edges, graph.nodes, elevate_edges_on_select)

    rendered: list[RenderedTier] = []
    for tier in tiers:
        routes = []
        for edge in tier.edges:
            routed = _route_one(graph, edge, routers, connection_mode, on_error)
            if routed is not None:
                routes.append(routed)
        rendered.append(
            RenderedTier(level=tier.level, is_topmost=tier.is_topmost, routes=routes)
        )
    return rendered


def _route_one(
    graph: DiagramGraph,
    edge: Edge,
    routers: Mapping[str, EdgeRouter],
    connection_mode: ConnectionMode,
    on_error: ErrorHandler | None,
) -> RoutedEdge | None:
    output_rect, output_bounds, output_ok = node_data(graph.node(edge.output))
    input_rect, input_bounds, input_ok = node_data(graph.node(edge.input))
    if not output_ok or not input_ok:
        return None

    style = edge.type or EdgeStyle.DEFAULT.value
    if style not in routers:
        report_error("011", style, on_error=on_error)
        style = EdgeStyle.DEFAULT.value

    # Under loose mode an edge may end on an output pin of the input node
    if connection_mode is ConnectionMode.STRICT:
        input_candidates = input_bounds.input
    else:
        input_candidates = list(input_bounds.input) + list(input_bounds.output)

    output_pin = find_pin(output_bounds.output, edge.output_pin)
    input_pin = find_pin(input_candidates, edge.input_pin)
    if output_pin is None or input_pin is None:
        report_error("008", output_pin, edge, on_error=on_error)
        return None

    output_position = output_pin.position or Position.BOTTOM
    input_position = input_pin.position or Position.TOP
    output_point, input_point = edge_positions(
        output_rect, output_pin, output_position, input_rect, input_pin, input_position
    )

    geometry = route_edge(
        style,
        output_point,
        output_position,
        input_point,
        input_position,
        path_options=edge.path_options,
        routers=routers,
    )
    return RoutedEdge(
        edge=edge,
        style=style,
        output_position=output_position,
        input_position=input_position,
        geometry=geometry,
    )
