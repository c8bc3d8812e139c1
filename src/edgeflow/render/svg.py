"""SVG rendering of a diagram surface with drawsvg."""

from __future__ import annotations

__all__ = ["render_svg", "connection_line"]

from typing import Mapping

import drawsvg as draw

from edgeflow.errors import report_error
from edgeflow.interaction.decorations import pin_decorations
from edgeflow.interaction.state import ViewState
from edgeflow.layout.engine import RenderedTier, RoutedEdge, route_tiers
from edgeflow.layout.routing import EdgeStyle, connection_line_path
from edgeflow.layout.routing.core import EdgeRouter
from edgeflow.model import ConnectionMode, PinRole, Point, pin_key
from edgeflow.render.animate import render_animated_edge
from edgeflow.render.constants import (
    CLASS_PREFIX,
    MARKER_SIZE,
    MARKER_TYPES,
    MIN_PIN_SIZE,
)
from edgeflow.render.style import LIGHT_THEME, Theme


def render_svg(
    view: ViewState,
    theme: Theme = LIGHT_THEME,
    *,
    only_render_visible: bool = False,
    elevate_edges_on_select: bool = False,
    edge_types: Mapping[str, EdgeRouter] | None = None,
    connection_line_type: str | EdgeStyle = EdgeStyle.DEFAULT,
) -> str:
    """Render nodes, pins, edge tiers and the live connection line.

    Tiers are drawn as separate groups in ascending level order; marker
    definitions are attached once, while drawing the topmost tier.
    """
    width = view.width or 1
    height = view.height or 1
    d = draw.Drawing(width, height)

    if theme.background_color != "none":
        d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    tx, ty, zoom = view.transform
    viewport = draw.Group(
        class_=f"{CLASS_PREFIX}__viewport",
        transform=f"translate({tx},{ty}) scale({zoom})",
    )
    d.append(viewport)

    tiers = route_tiers(
        view.graph,
        view.width,
        view.height,
        view.transform,
        only_render_visible=only_render_visible,
        elevate_edges_on_select=elevate_edges_on_select,
        connection_mode=view.connection_mode,
        edge_types=edge_types,
        on_error=view.handlers.on_error,
    )
    for tier in tiers:
        if tier.is_topmost:
            _define_markers(d, theme)
        viewport.append(_render_tier(tier, theme, view))

    viewport.append(_render_nodes(view, theme))

    line = connection_line(view, connection_line_type)
    if line is not None:
        status = view.connection.status
        color = {
            "valid": theme.connection_valid_color,
            "invalid": theme.connection_invalid_color,
        }.get(status, theme.connection_color)
        classes = f"{CLASS_PREFIX}__connection"
        if status:
            classes = f"{classes} {status}"
        viewport.append(
            draw.Path(
                d=line,
                fill="none",
                stroke=color,
                stroke_width=theme.edge_width,
                class_=classes,
            )
        )

    return d.as_svg()


def _marker_id(marker_type: str) -> str:
    return f"{CLASS_PREFIX}__{marker_type}"


def _define_markers(d: draw.Drawing, theme: Theme) -> None:
    for marker_type in MARKER_TYPES:
        marker = draw.Marker(
            -1,
            -1,
            1,
            1,
            scale=MARKER_SIZE,
            orient="auto-start-reverse",
            id=_marker_id(marker_type),
        )
        closed = marker_type == "arrowclosed"
        marker.append(
            draw.Lines(
                -0.5,
                -0.4,
                0,
                0,
                -0.5,
                0.4,
                close=closed,
                fill=theme.edge_color if closed else "none",
                stroke=theme.edge_color,
                stroke_width=0.1,
            )
        )
        d.append_def(marker)


def _render_tier(tier: RenderedTier, theme: Theme, view: ViewState) -> draw.Group:
    group = draw.Group(class_=f"{CLASS_PREFIX}__edges", data_level=tier.level)
    for route in tier.routes:
        _render_edge(group, route, theme, view)
    return group


def _render_edge(
    group: draw.Group, route: RoutedEdge, theme: Theme, view: ViewState
) -> None:
    edge = route.edge
    stroke = theme.edge_selected_color if edge.selected else theme.edge_color
    css_class = f"{CLASS_PREFIX}__edge-path {CLASS_PREFIX}__edge-{route.style}"
    path = route.geometry.path

    marker_end = None
    if edge.marker_end:
        if edge.marker_end in MARKER_TYPES:
            marker_end = f"url(#{_marker_id(edge.marker_end)})"
        else:
            report_error("009", edge.marker_end, on_error=view.handlers.on_error)

    if edge.animated:
        render_animated_edge(
            group,
            path,
            stroke,
            theme.edge_width,
            css_class,
            data_id=edge.id,
            marker_end=marker_end,
        )
    else:
        attrs = {"marker_end": marker_end} if marker_end else {}
        group.append(
            draw.Path(
                d=path,
                fill="none",
                stroke=stroke,
                stroke_width=theme.edge_width,
                class_=css_class,
                data_id=edge.id,
                **attrs,
            )
        )

    if edge.label:
        group.append(
            draw.Text(
                edge.label,
                theme.label_font_size,
                route.geometry.label_x,
                route.geometry.label_y,
                fill=theme.label_color,
                font_family=theme.font_family,
                text_anchor="middle",
                dominant_baseline="central",
                class_=f"{CLASS_PREFIX}__edge-label",
            )
        )


def _render_nodes(view: ViewState, theme: Theme) -> draw.Group:
    group = draw.Group(class_=f"{CLASS_PREFIX}__nodes")
    decorations = pin_decorations(view.connection)

    for node in sorted(view.graph.nodes.values(), key=lambda n: n.z):
        if not node.is_measured:
            continue
        group.append(
            draw.Rectangle(
                node.x,
                node.y,
                node.width,
                node.height,
                rx=3,
                fill=theme.node_fill,
                stroke=theme.node_stroke,
                class_=f"{CLASS_PREFIX}__node",
                data_id=node.id,
            )
        )
        if node.pin_bounds is None:
            continue
        for role in (PinRole.OUTPUT, PinRole.INPUT):
            for bounds in node.pin_bounds.for_role(role):
                key = pin_key(node.id, bounds.id, role)
                tokens = decorations.get((node.id, bounds.id, role), frozenset())
                fill = theme.pin_color
                if "valid" in tokens:
                    fill = theme.pin_valid_color
                elif "connecting" in tokens:
                    fill = theme.pin_connecting_color
                classes = [f"{CLASS_PREFIX}__pin", role.value, bounds.position.value]
                group.append(
                    draw.Rectangle(
                        node.x + bounds.x,
                        node.y + bounds.y,
                        bounds.width or MIN_PIN_SIZE,
                        bounds.height or MIN_PIN_SIZE,
                        fill=fill,
                        class_=" ".join(classes + sorted(tokens)),
                        data_id=key,
                    )
                )
    return group


def connection_line(
    view: ViewState, line_type: str | EdgeStyle = EdgeStyle.DEFAULT
) -> str | None:
    """Path of the in-progress connection, in model coordinates."""
    start = view.connection.start_pin
    if start is None:
        return None
    node = view.graph.node(start.node_id)
    if node is None or node.pin_bounds is None:
        return None

    bounds = node.pin_bounds.for_role(start.role)
    if view.connection_mode is ConnectionMode.LOOSE and not bounds:
        bounds = node.pin_bounds.for_role(start.role.opposite)
    if not bounds:
        return None

    if start.pin_id:
        pin = next((b for b in bounds if b.id == start.pin_id), None)
    else:
        pin = bounds[0]
    if pin is None:
        return None

    from_point = Point(node.x + pin.x + pin.width / 2, node.y + pin.y + pin.height / 2)
    to_point = view.transform.to_model(view.connection.position)
    return connection_line_path(line_type, from_point, pin.position, to_point)
