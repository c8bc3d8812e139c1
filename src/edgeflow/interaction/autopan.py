"""Auto-pan while dragging near the container edge, and frame scheduling."""

from __future__ import annotations

from typing import Callable, Protocol

from edgeflow.layout.constants import (
    AUTO_PAN_EDGE_DISTANCE,
    AUTO_PAN_RAMP,
    AUTO_PAN_SPEED,
)
from edgeflow.model import Point, Rect


def _velocity(value: float, low: float, high: float) -> float:
    if value < low:
        return min(max(abs(value - low), 1), AUTO_PAN_RAMP) / AUTO_PAN_RAMP
    if value > high:
        return -min(max(abs(value - high), 1), AUTO_PAN_RAMP) / AUTO_PAN_RAMP
    return 0.0


def calc_auto_pan(
    position: Point,
    bounds: Rect,
    edge_distance: float = AUTO_PAN_EDGE_DISTANCE,
    speed: float = AUTO_PAN_SPEED,
) -> tuple[float, float]:
    """Viewport pan step for a container-relative pointer position.

    Zero inside the container's inner margin; grows with proximity to (or
    distance past) each edge, capped at ``speed`` per frame. Pans towards
    the content hidden behind the nearby edge.
    """
    x = _velocity(position.x, edge_distance, bounds.width - edge_distance) * speed
    y = _velocity(position.y, edge_distance, bounds.height - edge_distance) * speed
    return x, y


class FrameScheduler(Protocol):
    """Animation-frame style scheduling."""

    def request(self, callback: Callable[[], None]) -> int: ...

    def cancel(self, handle: int) -> None: ...


class FrameQueue:
    """Manually driven frame scheduler.

    Callbacks requested during :meth:`run_frame` are deferred to the next
    frame, like ``requestAnimationFrame``.
    """

    def __init__(self) -> None:
        self._next_handle = 1
        self._pending: dict[int, Callable[[], None]] = {}

    def request(self, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self) -> int:
        """Run every callback pending at call time; returns how many ran."""
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback()
        return len(due)
