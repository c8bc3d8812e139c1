"""Connection interaction: view state, hit-testing feedback and gestures.

Public API:
- ViewState, ConnectionState, ConnectionHandlers: shared view state
- ConnectionGesture, GestureState: drag-to-connect state machine
- click_connect: click-to-connect
- pin_decorations: hover feedback as data
- EventSurface, PointerEvent: input plumbing
- FrameQueue, calc_auto_pan: auto-pan while dragging
"""

from edgeflow.interaction.autopan import FrameQueue, FrameScheduler, calc_auto_pan
from edgeflow.interaction.decorations import pin_decorations
from edgeflow.interaction.gesture import (
    ConnectionCandidate,
    ConnectionGesture,
    GestureState,
    Validity,
    click_connect,
)
from edgeflow.interaction.state import ConnectionHandlers, ConnectionState, ViewState
from edgeflow.interaction.surface import EventSurface, PointerEvent
from edgeflow.interaction.validation import check_pin, connection_status

__all__ = [
    "ConnectionCandidate",
    "ConnectionGesture",
    "ConnectionHandlers",
    "ConnectionState",
    "EventSurface",
    "FrameQueue",
    "FrameScheduler",
    "GestureState",
    "PointerEvent",
    "Validity",
    "ViewState",
    "calc_auto_pan",
    "check_pin",
    "click_connect",
    "connection_status",
    "pin_decorations",
]
