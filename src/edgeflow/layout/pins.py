"""Pin registry, hit-testing and edge endpoint resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from edgeflow.model import (
    ConnectionPin,
    Node,
    NodePinBounds,
    PinBounds,
    PinIdentity,
    PinRole,
    Point,
    Position,
    Rect,
    pin_key,
)

# ---------------------------------------------------------------------------
# Candidate list and nearest-pin search
# ---------------------------------------------------------------------------


def _node_pins(
    node: Node, pin_bounds: NodePinBounds, role: PinRole, exclude: PinIdentity
) -> list[ConnectionPin]:
    pins: list[ConnectionPin] = []
    for bounds in pin_bounds.for_role(role):
        if (node.id, bounds.id, role) == exclude:
            continue
        pins.append(
            ConnectionPin(
                node_id=node.id,
                id=bounds.id,
                role=role,
                x=node.x + bounds.x + bounds.width / 2,
                y=node.y + bounds.y + bounds.height / 2,
            )
        )
    return pins


def build_candidate_list(
    nodes: Iterable[Node],
    exclude_node_id: str,
    exclude_pin_id: str | None,
    exclude_role: PinRole,
) -> list[ConnectionPin]:
    """Absolute centres of every measured pin, minus the gesture's origin pin.

    Output pins of a node come before its input pins.
    """
    exclude = (exclude_node_id, exclude_pin_id, exclude_role)
    candidates: list[ConnectionPin] = []
    for node in nodes:
        if node.pin_bounds is None:
            continue
        for role in (PinRole.OUTPUT, PinRole.INPUT):
            candidates.extend(_node_pins(node, node.pin_bounds, role, exclude))
    return candidates


def find_closest(
    point: Point, radius: float, candidates: Iterable[ConnectionPin]
) -> ConnectionPin | None:
    """Nearest candidate within ``radius`` of ``point``.

    Equidistant candidates accumulate; when several remain the first input
    pin wins, since a stacked input/output pair is usually dragged onto
    for its input.
    """
    closest: list[ConnectionPin] = []
    min_distance = math.inf

    for pin in candidates:
        distance = math.hypot(pin.x - point.x, pin.y - point.y)
        if distance > radius:
            continue
        if distance < min_distance:
            closest = [pin]
            min_distance = distance
        elif distance == min_distance:
            closest.append(pin)

    if not closest:
        return None
    if len(closest) == 1:
        return closest[0]
    return next((p for p in closest if p.role is PinRole.INPUT), closest[0])


# ---------------------------------------------------------------------------
# Spatial index: which pin is directly under the pointer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IndexedPin:
    """A pin's absolute hit area together with its measured bounds."""

    node_id: str
    role: PinRole
    bounds: PinBounds
    rect: Rect

    @property
    def id(self) -> str | None:
        return self.bounds.id

    @property
    def key(self) -> str:
        return pin_key(self.node_id, self.bounds.id, self.role)

    @property
    def identity(self) -> PinIdentity:
        return (self.node_id, self.bounds.id, self.role)

    @property
    def center(self) -> Point:
        x, y, w, h = self.rect
        return Point(x + w / 2, y + h / 2)

    def contains(self, point: Point) -> bool:
        x, y, w, h = self.rect
        return x <= point.x <= x + w and y <= point.y <= y + h


class PinIndex:
    """Flat index of absolute pin rectangles.

    Lookups are point-in-rect (``pin_at``) and by identity (``get``).
    Pins indexed later are considered on top of earlier ones.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._pins: list[IndexedPin] = []
        self._by_identity: dict[PinIdentity, IndexedPin] = {}
        for node in sorted(nodes, key=lambda n: n.z):
            self.add_node(node)

    def add_node(self, node: Node) -> None:
        if node.pin_bounds is None:
            return
        for role in (PinRole.OUTPUT, PinRole.INPUT):
            for bounds in node.pin_bounds.for_role(role):
                indexed = IndexedPin(
                    node_id=node.id,
                    role=role,
                    bounds=bounds,
                    rect=Rect(
                        node.x + bounds.x,
                        node.y + bounds.y,
                        bounds.width,
                        bounds.height,
                    ),
                )
                self._pins.append(indexed)
                self._by_identity[indexed.identity] = indexed

    def __len__(self) -> int:
        return len(self._pins)

    def get(self, node_id: str, pin_id: str | None, role: PinRole) -> IndexedPin | None:
        return self._by_identity.get((node_id, pin_id, role))

    def pin_at(self, point: Point) -> IndexedPin | None:
        for indexed in reversed(self._pins):
            if indexed.contains(point):
                return indexed
        return None


# ---------------------------------------------------------------------------
# Endpoint resolution for the render pass
# ---------------------------------------------------------------------------


def pin_position(
    position: Position, node_rect: Rect, pin: PinBounds | None = None
) -> Point:
    """Anchor point on the facing side of a pin (or of the node if no pin)."""
    x = (pin.x if pin else 0) + node_rect.x
    y = (pin.y if pin else 0) + node_rect.y
    width = (pin.width if pin else 0) or node_rect.width
    height = (pin.height if pin else 0) or node_rect.height

    if position is Position.TOP:
        return Point(x + width / 2, y)
    if position is Position.RIGHT:
        return Point(x + width, y + height / 2)
    if position is Position.BOTTOM:
        return Point(x + width / 2, y + height)
    return Point(x, y + height / 2)


def find_pin(
    bounds: list[PinBounds] | None, pin_id: str | None = None
) -> PinBounds | None:
    """Resolve a pin reference; an absent id means the node's sole pin."""
    if not bounds:
        return None
    if len(bounds) == 1 or not pin_id:
        return bounds[0]
    return next((b for b in bounds if b.id == pin_id), None)


def edge_positions(
    output_rect: Rect,
    output_pin: PinBounds,
    output_position: Position,
    input_rect: Rect,
    input_pin: PinBounds,
    input_position: Position,
) -> tuple[Point, Point]:
    return (
        pin_position(output_position, output_rect, output_pin),
        pin_position(input_position, input_rect, input_pin),
    )


def node_data(node: Node | None) -> tuple[Rect, NodePinBounds | None, bool]:
    """Rect, pin bounds and whether the node is measured enough to route."""
    if node is None:
        return Rect(0, 0, 0, 0), None, False
    rect = Rect(node.x, node.y, node.width or 0, node.height or 0)
    is_valid = node.pin_bounds is not None and node.is_measured
    return rect, node.pin_bounds, is_valid
