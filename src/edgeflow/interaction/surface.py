"""Pointer events and the surface that dispatches them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Literal

from edgeflow.model import Point, Rect

PointerKind = Literal["mouse", "touch"]
PointerListener = Callable[["PointerEvent"], None]

MOVE_EVENTS = ("mousemove", "touchmove")
END_EVENTS = ("mouseup", "touchend")


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in client (page) coordinates."""

    x: float
    y: float
    button: int = 0
    pointer: PointerKind = "mouse"

    @property
    def is_mouse(self) -> bool:
        return self.pointer == "mouse"


def event_position(event: PointerEvent, bounds: Rect | None = None) -> Point:
    """Event position, relative to ``bounds`` when given."""
    if bounds is None:
        return Point(event.x, event.y)
    return Point(event.x - bounds.x, event.y - bounds.y)


class EventSurface:
    """The ambient rendering surface gestures attach their listeners to.

    Hosts feed raw input through :meth:`dispatch`.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[PointerListener]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: PointerListener) -> None:
        self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: PointerListener) -> None:
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(v) for v in self._listeners.values())

    def dispatch(self, event_type: str, event: PointerEvent) -> None:
        for listener in list(self._listeners.get(event_type, [])):
            listener(event)
