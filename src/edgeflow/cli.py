"""Command-line entry point: route single edges and render style previews."""

from __future__ import annotations

from pathlib import Path

import click

from edgeflow import __version__
from edgeflow.interaction.state import ViewState
from edgeflow.layout.routing import EdgeStyle, route_edge
from edgeflow.model import (
    DiagramGraph,
    Edge,
    Node,
    NodePinBounds,
    PinBounds,
    Point,
    Position,
    Rect,
)
from edgeflow.render.style import THEMES
from edgeflow.render.svg import render_svg

_STYLES = [style.value for style in EdgeStyle]
_SIDES = [position.value for position in Position]


def _parse_point(ctx, param, value: str) -> Point:
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError:
        raise click.BadParameter(f"expected X,Y, got {value!r}") from None
    return Point(x, y)


@click.group()
@click.version_option(version=__version__)
def cli():
    """edgeflow: edge routing for node-graph diagrams."""


@cli.command()
@click.argument("style", type=click.Choice(_STYLES))
@click.option("--from", "from_", required=True, callback=_parse_point,
              help="Output endpoint as X,Y.")
@click.option("--from-side", type=click.Choice(_SIDES), default="bottom",
              show_default=True, help="Side the output pin faces.")
@click.option("--to", "to", required=True, callback=_parse_point,
              help="Input endpoint as X,Y.")
@click.option("--to-side", type=click.Choice(_SIDES), default="top",
              show_default=True, help="Side the input pin faces.")
@click.option("--curvature", type=float, default=None,
              help="Bezier curvature (default style only).")
@click.option("--offset", type=float, default=None,
              help="Minimum leg length of step styles.")
@click.option("--border-radius", type=float, default=None,
              help="Corner radius of the smoothstep style.")
def path(style, from_, from_side, to, to_side, curvature, offset, border_radius):
    """Print the SVG path and label anchor of one edge."""
    geometry = route_edge(
        style,
        from_,
        Position(from_side),
        to,
        Position(to_side),
        path_options={
            "curvature": curvature,
            "offset": offset,
            "border_radius": border_radius,
        },
    )
    click.echo(geometry.path)
    click.echo(
        f"label: {geometry.label_x:g},{geometry.label_y:g} "
        f"offset: {geometry.label_offset_x:g},{geometry.label_offset_y:g}"
    )


def _preview_view() -> ViewState:
    """One node pair per built-in style, laid out in a row."""
    graph = DiagramGraph()
    column = 160
    for i, style in enumerate(_STYLES):
        x = 20 + i * column
        pins = NodePinBounds(
            output=[PinBounds("out", Position.BOTTOM, 37, 36, 6, 6)],
            input=[PinBounds("in", Position.TOP, 37, -6, 6, 6)],
        )
        graph.add_node(Node(f"{style}-a", x, 20, 80, 36, pin_bounds=pins))
        graph.add_node(Node(f"{style}-b", x + 50, 160, 80, 36, pin_bounds=pins))
        graph.edges.append(
            Edge(
                id=style,
                output=f"{style}-a",
                input=f"{style}-b",
                output_pin="out",
                input_pin="in",
                type=style,
                label=style,
                marker_end="arrowclosed",
            )
        )
    width = 40 + column * len(_STYLES)
    return ViewState(
        graph=graph,
        width=width,
        height=240,
        container_bounds=Rect(0, 0, width, 240),
    )


@cli.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              required=True, help="Output SVG file.")
@click.option("--theme", type=click.Choice(sorted(THEMES)), default="light",
              show_default=True, help="Visual theme.")
@click.option("--animated", is_flag=True, help="Animate every edge.")
def preview(output, theme, animated):
    """Render every built-in edge style side by side."""
    view = _preview_view()
    if animated:
        for edge in view.graph.edges:
            edge.animated = True
    svg = render_svg(view, THEMES[theme])
    output.write_text(svg)
    click.echo(f"Wrote {output} ({len(view.graph.edges)} edges)")
