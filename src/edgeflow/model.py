"""Data model for the diagram surface: nodes, pins, edges and connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, NamedTuple


class Point(NamedTuple):
    """A 2D coordinate in diagram (model) space."""

    x: float
    y: float


class Transform(NamedTuple):
    """Viewport pan/zoom: screen = model * zoom + (x, y)."""

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0

    def to_model(self, point: Point) -> Point:
        return Point((point.x - self.x) / self.zoom, (point.y - self.y) / self.zoom)

    def to_screen(self, point: Point) -> Point:
        return Point(point.x * self.zoom + self.x, point.y * self.zoom + self.y)


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Position(Enum):
    """Outward-facing side of a pin."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def vector(self) -> tuple[int, int]:
        return _POSITION_VECTORS[self]

    @property
    def opposite(self) -> Position:
        return _OPPOSITE_POSITIONS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Position.LEFT, Position.RIGHT)


_POSITION_VECTORS = {
    Position.LEFT: (-1, 0),
    Position.RIGHT: (1, 0),
    Position.TOP: (0, -1),
    Position.BOTTOM: (0, 1),
}

_OPPOSITE_POSITIONS = {
    Position.LEFT: Position.RIGHT,
    Position.RIGHT: Position.LEFT,
    Position.TOP: Position.BOTTOM,
    Position.BOTTOM: Position.TOP,
}


class PinRole(Enum):
    OUTPUT = "output"
    INPUT = "input"

    @property
    def opposite(self) -> PinRole:
        return PinRole.INPUT if self is PinRole.OUTPUT else PinRole.OUTPUT


class ConnectionMode(Enum):
    """Strict forbids output->output and input->input links; loose allows them."""

    STRICT = "strict"
    LOOSE = "loose"


ConnectionStatus = Literal["valid", "invalid"] | None
PinIdentity = tuple[str, str | None, PinRole]


@dataclass(frozen=True)
class PinBounds:
    """Measured pin rectangle, relative to its owning node."""

    id: str | None
    position: Position
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    connectable: bool = True
    connectable_start: bool = True
    connectable_end: bool = True


@dataclass(frozen=True)
class NodePinBounds:
    output: list[PinBounds] = field(default_factory=list)
    input: list[PinBounds] = field(default_factory=list)

    def for_role(self, role: PinRole) -> list[PinBounds]:
        return self.output if role is PinRole.OUTPUT else self.input


@dataclass
class Node:
    """A node on the surface.

    ``width``/``height`` and ``pin_bounds`` stay None until the node has
    been measured by the rendering layer.
    """

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    z: int = 0
    selected: bool = False
    pin_bounds: NodePinBounds | None = None

    @property
    def is_measured(self) -> bool:
        return bool(self.width) and bool(self.height)


@dataclass
class Edge:
    """An edge as read from the graph document. Never mutated here."""

    id: str
    output: str
    input: str
    output_pin: str | None = None
    input_pin: str | None = None
    type: str | None = None
    z_index: int | None = None
    selected: bool = False
    hidden: bool = False
    animated: bool = False
    label: str | None = None
    marker_end: str | None = None
    path_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Connection:
    output: str | None
    output_pin: str | None
    input: str | None
    input_pin: str | None


NULL_CONNECTION = Connection(output=None, output_pin=None, input=None, input_pin=None)


@dataclass(frozen=True)
class ConnectingPin:
    """Identity of a pin taking part in a connection gesture."""

    node_id: str
    pin_id: str | None
    role: PinRole

    @property
    def key(self) -> str:
        return pin_key(self.node_id, self.pin_id, self.role)

    @property
    def identity(self) -> PinIdentity:
        return (self.node_id, self.pin_id, self.role)


@dataclass(frozen=True)
class ConnectionPin:
    """A pin with its absolute position, as used by hit-testing."""

    node_id: str
    id: str | None
    role: PinRole
    x: float
    y: float

    @property
    def key(self) -> str:
        return pin_key(self.node_id, self.id, self.role)

    @property
    def identity(self) -> PinIdentity:
        return (self.node_id, self.id, self.role)


def pin_key(node_id: str, pin_id: str | None, role: PinRole) -> str:
    """``node-pin-role`` string for one pin, used as its SVG ``data-id``.

    Ids containing ``-`` can collide, so lookups go through ``PinIdentity``.
    """
    return f"{node_id}-{pin_id}-{role.value}"


@dataclass
class DiagramGraph:
    """Nodes and edges consumed by the render pass and the gesture."""

    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def node(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        return self.nodes.get(node_id)
