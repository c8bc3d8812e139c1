"""Non-fatal error channel.

Configuration problems (unknown edge type, unresolvable pin) are reported
with a stable code and the affected element is degraded or skipped. Nothing
here raises.
"""

from __future__ import annotations

import warnings
from typing import Callable

ErrorHandler = Callable[[str, str], None]

ERROR_MESSAGES: dict[str, Callable[..., str]] = {
    "004": lambda: (
        "The diagram container needs a width and a height to render the graph."
    ),
    "007": lambda edge_id: f"The old edge with id={edge_id} does not exist.",
    "008": lambda output_pin, edge: (
        "Couldn't create edge for "
        f"{'output' if output_pin is None else 'input'} pin id: "
        f'"{edge.output_pin if output_pin is None else edge.input_pin}", '
        f"edge id: {edge.id}."
    ),
    "009": lambda marker: f'Marker type "{marker}" doesn\'t exist.',
    "011": lambda edge_type: (
        f'Edge type "{edge_type}" not found. Using fallback type "default".'
    ),
    "012": lambda exc: (
        f"Connection validator raised {exc!r}; treating the connection as valid."
    ),
}


class EdgeflowWarning(UserWarning):
    """Warning category for reported configuration errors."""

    def __init__(self, code: str, message: str):
        super().__init__(f"[edgeflow {code}]: {message}")
        self.code = code
        self.message = message


def report_error(code: str, *args, on_error: ErrorHandler | None = None) -> str:
    """Report a non-fatal error and return its message.

    The message goes to ``on_error`` when supplied, else it is emitted as
    an ``EdgeflowWarning``.
    """
    message = ERROR_MESSAGES[code](*args)
    if on_error is not None:
        on_error(code, message)
    else:
        warnings.warn(EdgeflowWarning(code, message), stacklevel=2)
    return message

