"""Drag-to-connect gesture.

One ``ConnectionGesture`` owns one pointer-down -> move -> up interaction:

    IDLE -> DRAGGING -> COMMITTED | ABORTED -> IDLE

While dragging, every move hit-tests the pin under the pointer (preferred)
or the nearest pin within the connection radius, validates the candidate
connection, and writes live feedback into the view state. Teardown always
runs on end or cancel, so no listener or frame request outlives a gesture.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from edgeflow.errors import report_error
from edgeflow.interaction.autopan import FrameQueue, FrameScheduler, calc_auto_pan
from edgeflow.interaction.state import ConnectionValidator, ViewState
from edgeflow.interaction.surface import (
    END_EVENTS,
    MOVE_EVENTS,
    EventSurface,
    PointerEvent,
    event_position,
)
from edgeflow.interaction.validation import PinCheck, check_pin, connection_status
from edgeflow.layout.constants import PRIMARY_BUTTON
from edgeflow.layout.pins import (
    IndexedPin,
    PinIndex,
    build_candidate_list,
    find_closest,
)
from edgeflow.model import (
    Connection,
    ConnectingPin,
    ConnectionPin,
    Edge,
    PinRole,
    Point,
    Rect,
)

OnConnect = Callable[[Connection], Any]
EdgeUpdateHook = Callable[[PointerEvent, Edge, PinRole], Any]
PointerListener = Callable[[PointerEvent], None]


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    ABORTED = "aborted"


class Validity(Enum):
    NONE = "none"
    INVALID = "invalid"
    VALID = "valid"


@dataclass
class ConnectionCandidate:
    """Ephemeral state of the gesture in progress."""

    source_node: str
    source_pin: str | None
    source_role: PinRole
    pointer_position: Point
    target_pin: ConnectingPin | None = None
    validity: Validity = Validity.NONE
    connection: Connection | None = None
    closest: ConnectionPin | None = None
    hit: IndexedPin | None = None


class ConnectionGesture:
    """Explicit state machine for drag-to-connect and edge-endpoint updates."""

    def __init__(
        self,
        view: ViewState,
        surface: EventSurface,
        scheduler: FrameScheduler | None = None,
    ):
        self.view = view
        self.surface = surface
        self.scheduler = scheduler if scheduler is not None else FrameQueue()
        self.state = GestureState.IDLE
        self.outcome: GestureState | None = None
        self.candidate: ConnectionCandidate | None = None

        self._bounds: Rect | None = None
        self._index: PinIndex | None = None
        self._candidates: list[ConnectionPin] = []
        self._validator: ConnectionValidator | None = None
        self._on_connect: OnConnect | None = None
        self._on_edge_update_end: Callable[[PointerEvent], Any] | None = None
        self._is_edge_update = False
        self._frame_handle: int | None = None
        self._auto_pan_started = False
        self._listeners: list[tuple[str, PointerListener]] = []

    @property
    def is_active(self) -> bool:
        return self.state is GestureState.DRAGGING

    # --- transitions ------------------------------------------------------

    def start(
        self,
        event: PointerEvent,
        node_id: str,
        pin_id: str | None,
        *,
        on_connect: OnConnect | None = None,
        is_valid_connection: ConnectionValidator | None = None,
        edge_updater_role: PinRole | None = None,
        on_edge_update_end: Callable[[PointerEvent], Any] | None = None,
    ) -> bool:
        """Begin a gesture from the pin pressed by ``event``.

        Returns False without touching any state when the gesture cannot
        start: a non-primary mouse button, a container with no measurable
        bounds, no resolvable pin role, or a gesture already in progress.
        """
        if self.is_active:
            return False
        if event.is_mouse and event.button != PRIMARY_BUTTON:
            return False

        bounds = self.view.container_bounds
        if bounds is None or not bounds.width or not bounds.height:
            return False

        nodes = list(self.view.graph.nodes.values())
        index = PinIndex(nodes)
        position = event_position(event, bounds)
        pressed = index.pin_at(self.view.transform.to_model(position))
        role = edge_updater_role or (pressed.role if pressed else None)
        if role is None:
            return False
        if edge_updater_role is None and not pressed.bounds.connectable_start:
            return False

        self._bounds = bounds
        self._index = index
        self._candidates = build_candidate_list(nodes, node_id, pin_id, role)
        self._validator = is_valid_connection or self.view.handlers.is_valid_connection
        self._on_connect = on_connect
        self._on_edge_update_end = on_edge_update_end
        self._is_edge_update = edge_updater_role is not None
        self._auto_pan_started = False
        self.candidate = ConnectionCandidate(
            source_node=node_id,
            source_pin=pin_id,
            source_role=role,
            pointer_position=position,
        )
        self.state = GestureState.DRAGGING
        self.outcome = None

        start_pin = ConnectingPin(node_id=node_id, pin_id=pin_id, role=role)
        self.view.begin_connection(start_pin, position)
        for event_type in MOVE_EVENTS:
            self._listen(event_type, self.move)
        for event_type in END_EVENTS:
            self._listen(event_type, self.end)

        if self.view.handlers.on_connect_start:
            try:
                self.view.handlers.on_connect_start(event, start_pin)
            except Exception:
                self._teardown(GestureState.ABORTED)
                raise
        return True

    def start_edge_update(
        self,
        event: PointerEvent,
        edge_id: str,
        grabbed_end: PinRole,
        on_edge_update: Callable[[Edge, Connection], Any],
        *,
        on_edge_update_start: EdgeUpdateHook | None = None,
        on_edge_update_end: EdgeUpdateHook | None = None,
    ) -> bool:
        """Drag one end of an existing edge to a new pin.

        The gesture originates from the edge's fixed end; committing calls
        ``on_edge_update(edge, connection)`` instead of the connect hook.
        """
        if event.is_mouse and event.button != PRIMARY_BUTTON:
            return False

        edge = next((e for e in self.view.graph.edges if e.id == edge_id), None)
        if edge is None:
            report_error("007", edge_id, on_error=self.view.handlers.on_error)
            return False

        role = grabbed_end.opposite
        if role is PinRole.INPUT:
            node_id, pin_id = edge.input, edge.input_pin
        else:
            node_id, pin_id = edge.output, edge.output_pin

        def _update_end(evt: PointerEvent) -> None:
            if on_edge_update_end:
                on_edge_update_end(evt, edge, role)

        started = self.start(
            event,
            node_id,
            pin_id,
            on_connect=lambda connection: on_edge_update(edge, connection),
            is_valid_connection=self.view.handlers.is_valid_connection,
            edge_updater_role=role,
            on_edge_update_end=_update_end,
        )
        if started and on_edge_update_start:
            try:
                on_edge_update_start(event, edge, role)
            except Exception:
                self._teardown(GestureState.ABORTED)
                raise
        return started

    def move(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        candidate = self.candidate
        transform = self.view.transform

        position = event_position(event, self._bounds)
        candidate.pointer_position = position
        pointer = transform.to_model(position)
        closest = find_closest(pointer, self.view.connection_radius, self._candidates)

        if not self._auto_pan_started:
            self._auto_pan_started = True
            self._auto_pan()

        # The pin directly under the pointer beats the nearest one: another
        # pin's centre can be closer than the edge of the pin being hovered.
        under = self._index.pin_at(pointer)
        if under is None and closest is not None:
            under = self._index.get(closest.node_id, closest.id, closest.role)

        result = check_pin(
            under,
            self.view.connection_mode,
            candidate.source_node,
            candidate.source_pin,
            candidate.source_role,
            self._validator,
            self.view.handlers.on_error,
        )
        self._record(candidate, result, closest)

        if closest is not None and result.is_valid:
            position = transform.to_screen(result.pin.center)

        hovered = self.view.connection.hovered_pin
        hovered_valid = self.view.connection.hovered_valid
        if closest is None and not result.is_valid and result.pin is None:
            hovered, hovered_valid = None, False
        elif (
            result.pin is not None
            and result.connection.output != result.connection.input
        ):
            hovered = ConnectingPin(result.pin.node_id, result.pin.id, result.pin.role)
            hovered_valid = result.is_valid

        self.view.update_connection(
            position=position,
            status=connection_status(closest is not None, result.is_valid),
            end_pin=result.end_pin,
            hovered_pin=hovered,
            hovered_valid=hovered_valid,
        )

    def end(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        candidate = self.candidate
        committed = (
            (candidate.closest is not None or candidate.hit is not None)
            and candidate.connection is not None
            and candidate.validity is Validity.VALID
        )
        on_connect = self._on_connect or self.view.handlers.on_connect
        on_edge_update_end = self._on_edge_update_end if self._is_edge_update else None
        try:
            if committed and on_connect:
                on_connect(candidate.connection)
        finally:
            try:
                # Read the hook now: it may have been replaced since the
                # gesture began
                on_connect_end = self.view.handlers.on_connect_end
                if on_connect_end:
                    on_connect_end(event)
                if on_edge_update_end:
                    on_edge_update_end(event)
            finally:
                self._teardown(
                    GestureState.COMMITTED if committed else GestureState.ABORTED
                )

    def cancel(self) -> None:
        """Abort the gesture in progress; a no-op when idle."""
        if not self.is_active:
            return
        self._teardown(GestureState.ABORTED)

    # --- internals --------------------------------------------------------

    def _record(
        self,
        candidate: ConnectionCandidate,
        result: PinCheck,
        closest: ConnectionPin | None,
    ) -> None:
        candidate.closest = closest
        candidate.hit = result.pin
        candidate.target_pin = result.end_pin
        candidate.connection = result.connection if result.pin is not None else None
        if result.is_valid:
            candidate.validity = Validity.VALID
        elif closest is not None or result.pin is not None:
            candidate.validity = Validity.INVALID
        else:
            candidate.validity = Validity.NONE

    def _auto_pan(self) -> None:
        if not self.view.auto_pan_on_connect or not self.is_active:
            return
        dx, dy = calc_auto_pan(self.candidate.pointer_position, self._bounds)
        self.view.pan_by(dx, dy)
        self._frame_handle = self.scheduler.request(self._auto_pan)

    def _listen(self, event_type: str, listener: PointerListener) -> None:
        self.surface.add_listener(event_type, listener)
        self._listeners.append((event_type, listener))

    def _teardown(self, outcome: GestureState) -> None:
        self.view.cancel_connection()
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None
        for event_type, listener in self._listeners:
            self.surface.remove_listener(event_type, listener)
        self._listeners = []

        self._auto_pan_started = False
        self._index = None
        self._candidates = []
        self._validator = None
        self._on_connect = None
        self._on_edge_update_end = None
        self._is_edge_update = False
        self.candidate = None
        self.outcome = outcome
        self.state = GestureState.IDLE


def click_connect(
    view: ViewState,
    event: PointerEvent,
    node_id: str,
    pin_id: str | None,
    role: PinRole,
    *,
    is_valid_connection: ConnectionValidator | None = None,
    on_connect: OnConnect | None = None,
    is_connectable_start: bool | None = None,
) -> Connection | None:
    """Click-to-connect: the first click picks a start pin, the second one
    validates and emits the connection. Returns the emitted connection.

    ``is_connectable_start`` defaults to the clicked pin's own flag.
    """
    start = view.connection.click_start_pin
    pin = PinIndex(view.graph.nodes.values()).get(node_id, pin_id, role)
    if is_connectable_start is None:
        is_connectable_start = pin is not None and pin.bounds.connectable_start
    if start is None and not is_connectable_start:
        return None

    handlers = view.handlers
    clicked = ConnectingPin(node_id=node_id, pin_id=pin_id, role=role)
    if start is None:
        if handlers.on_click_connect_start:
            handlers.on_click_connect_start(event, clicked)
        view.set_click_start_pin(clicked)
        return None

    result = check_pin(
        pin,
        view.connection_mode,
        start.node_id,
        start.pin_id,
        start.role,
        is_valid_connection or handlers.is_valid_connection,
        handlers.on_error,
    )
    emitted = None
    if result.is_valid:
        emitted = result.connection
        target = on_connect or handlers.on_connect
        if target:
            target(emitted)

    if handlers.on_click_connect_end:
        handlers.on_click_connect_end(event)
    view.set_click_start_pin(None)
    return emitted
