"""Hover feedback as data: which pin shows which decoration tokens."""

from __future__ import annotations

from edgeflow.interaction.state import ConnectionState
from edgeflow.model import PinIdentity

CONNECTING = "connecting"
VALID = "valid"


def pin_decorations(
    connection: ConnectionState,
) -> dict[PinIdentity, frozenset[str]]:
    """Map pin identity -> decoration tokens for the current gesture snapshot.

    At most one pin is decorated: the one currently hovered. It always
    carries ``connecting`` and additionally ``valid`` when the candidate
    connection is accepted.
    """
    pin = connection.hovered_pin
    if pin is None:
        return {}
    tokens = {CONNECTING, VALID} if connection.hovered_valid else {CONNECTING}
    return {pin.identity: frozenset(tokens)}
