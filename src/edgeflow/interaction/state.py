"""Shared view state for one diagram surface.

A single source of truth read by render passes and written by the
connection gesture. Connection fields live in a frozen ``ConnectionState``
that is replaced as a whole on every write, so readers always see a
consistent snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable

from edgeflow.errors import ErrorHandler
from edgeflow.layout.constants import CONNECTION_RADIUS
from edgeflow.model import (
    Connection,
    ConnectingPin,
    ConnectionMode,
    ConnectionStatus,
    DiagramGraph,
    Edge,
    Node,
    Point,
    Rect,
    Transform,
)

Listener = Callable[["ViewState"], None]
ConnectionValidator = Callable[[Connection], bool]


@dataclass(frozen=True)
class ConnectionState:
    """Live feedback of the connection gesture.

    ``position`` is container-relative (screen pixels), snapped to the
    target pin while a valid target is locked.
    """

    position: Point = Point(0, 0)
    start_pin: ConnectingPin | None = None
    end_pin: ConnectingPin | None = None
    status: ConnectionStatus = None
    hovered_pin: ConnectingPin | None = None
    hovered_valid: bool = False
    click_start_pin: ConnectingPin | None = None

    @property
    def in_progress(self) -> bool:
        return self.start_pin is not None


@dataclass
class ConnectionHandlers:
    """External hooks. Any of them may be replaced mid-gesture."""

    on_connect: Callable[[Connection], Any] | None = None
    on_connect_start: Callable[[Any, ConnectingPin], Any] | None = None
    on_connect_end: Callable[[Any], Any] | None = None
    on_click_connect_start: Callable[[Any, ConnectingPin], Any] | None = None
    on_click_connect_end: Callable[[Any], Any] | None = None
    is_valid_connection: ConnectionValidator | None = None
    on_error: ErrorHandler | None = None


@dataclass
class ViewState:
    """Explicit state container with one setter per concern."""

    graph: DiagramGraph = field(default_factory=DiagramGraph)
    width: float = 0.0
    height: float = 0.0
    transform: Transform = Transform()
    container_bounds: Rect | None = None
    connection_mode: ConnectionMode = ConnectionMode.STRICT
    connection_radius: float = CONNECTION_RADIUS
    auto_pan_on_connect: bool = True
    handlers: ConnectionHandlers = field(default_factory=ConnectionHandlers)
    connection: ConnectionState = field(default_factory=ConnectionState)
    _listeners: list[Listener] = field(default_factory=list, init=False, repr=False)

    # --- subscription -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- viewport ---------------------------------------------------------

    def set_transform(self, transform: Transform) -> None:
        self.transform = Transform(*transform)
        self._notify()

    def pan_by(self, dx: float, dy: float) -> bool:
        """Shift the viewport; returns False (and stays silent) for a zero move."""
        if not dx and not dy:
            return False
        x, y, zoom = self.transform
        self.transform = Transform(x + dx, y + dy, zoom)
        self._notify()
        return True

    def set_dimensions(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self._notify()

    def set_container_bounds(self, bounds: Rect | None) -> None:
        self.container_bounds = bounds
        self._notify()

    # --- graph ------------------------------------------------------------

    def set_graph(self, graph: DiagramGraph) -> None:
        self.graph = graph
        self._notify()

    def set_nodes(self, nodes: Iterable[Node]) -> None:
        self.graph = DiagramGraph(
            nodes={node.id: node for node in nodes}, edges=self.graph.edges
        )
        self._notify()

    def set_edges(self, edges: Iterable[Edge]) -> None:
        self.graph = DiagramGraph(nodes=self.graph.nodes, edges=list(edges))
        self._notify()

    def set_handlers(self, **handlers: Any) -> None:
        """Replace individual hooks, e.g. ``set_handlers(on_connect_end=f)``."""
        self.handlers = replace(self.handlers, **handlers)
        self._notify()

    # --- connection -------------------------------------------------------

    def _set_connection(self, connection: ConnectionState) -> None:
        self.connection = connection
        self._notify()

    def begin_connection(self, start_pin: ConnectingPin, position: Point) -> None:
        self._set_connection(
            replace(
                self.connection,
                position=position,
                start_pin=start_pin,
                end_pin=None,
                status=None,
                hovered_pin=None,
                hovered_valid=False,
            )
        )

    def update_connection(
        self,
        position: Point,
        status: ConnectionStatus,
        end_pin: ConnectingPin | None,
        hovered_pin: ConnectingPin | None,
        hovered_valid: bool,
    ) -> None:
        self._set_connection(
            replace(
                self.connection,
                position=position,
                status=status,
                end_pin=end_pin,
                hovered_pin=hovered_pin,
                hovered_valid=hovered_valid,
            )
        )

    def cancel_connection(self) -> None:
        """Clear gesture feedback; a pending click-connect start is kept."""
        self._set_connection(
            ConnectionState(click_start_pin=self.connection.click_start_pin)
        )

    def set_click_start_pin(self, pin: ConnectingPin | None) -> None:
        self._set_connection(replace(self.connection, click_start_pin=pin))
