"""Resolving and validating the target pin of a connection."""

from __future__ import annotations

from dataclasses import dataclass

from edgeflow.errors import ErrorHandler, report_error
from edgeflow.interaction.state import ConnectionValidator
from edgeflow.layout.pins import IndexedPin
from edgeflow.model import (
    NULL_CONNECTION,
    Connection,
    ConnectingPin,
    ConnectionMode,
    ConnectionStatus,
    PinRole,
)


@dataclass(frozen=True)
class PinCheck:
    """Outcome of checking one hit-tested pin against the gesture origin."""

    pin: IndexedPin | None
    is_valid: bool
    connection: Connection
    end_pin: ConnectingPin | None


def run_validator(
    validator: ConnectionValidator | None,
    connection: Connection,
    on_error: ErrorHandler | None = None,
) -> bool:
    """Ask the external validator; absent or failing validators allow."""
    if validator is None:
        return True
    try:
        return bool(validator(connection))
    except Exception as exc:
        report_error("012", exc, on_error=on_error)
        return True


def check_pin(
    pin: IndexedPin | None,
    connection_mode: ConnectionMode,
    from_node_id: str,
    from_pin_id: str | None,
    from_role: PinRole,
    validator: ConnectionValidator | None = None,
    on_error: ErrorHandler | None = None,
) -> PinCheck:
    """Assemble and validate the connection from the origin pin to ``pin``.

    Under strict mode the target must have the opposite role; under loose
    mode anything but the origin pin itself qualifies. The validator only
    runs for pins that pass those rules.
    """
    if pin is None:
        return PinCheck(
            pin=None, is_valid=False, connection=NULL_CONNECTION, end_pin=None
        )

    from_input = from_role is PinRole.INPUT
    connection = Connection(
        output=pin.node_id if from_input else from_node_id,
        output_pin=pin.id if from_input else from_pin_id,
        input=from_node_id if from_input else pin.node_id,
        input_pin=from_pin_id if from_input else pin.id,
    )

    connectable = pin.bounds.connectable and pin.bounds.connectable_end
    if connection_mode is ConnectionMode.STRICT:
        allowed = pin.role is not from_role
    else:
        allowed = pin.node_id != from_node_id or pin.id != from_pin_id

    if not (connectable and allowed):
        return PinCheck(pin=pin, is_valid=False, connection=connection, end_pin=None)

    end_pin = ConnectingPin(node_id=pin.node_id, pin_id=pin.id, role=pin.role)
    is_valid = run_validator(validator, connection, on_error)
    return PinCheck(pin=pin, is_valid=is_valid, connection=connection, end_pin=end_pin)


def connection_status(inside_radius: bool, is_valid: bool) -> ConnectionStatus:
    if is_valid:
        return "valid"
    if inside_radius:
        return "invalid"
    return None
