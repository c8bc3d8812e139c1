"""Ready-made connection validators.

Each factory returns a ``Connection -> bool`` predicate suitable for
``ConnectionHandlers.is_valid_connection``. Graph-aware validators read the
graph at call time, so they stay correct as edges are added.
"""

from __future__ import annotations

from typing import Callable

import networkx as nx

from edgeflow.model import Connection, DiagramGraph

Validator = Callable[[Connection], bool]


def _edge_graph(graph: DiagramGraph) -> nx.DiGraph:
    g = nx.DiGraph()
    g.add_nodes_from(graph.nodes)
    g.add_edges_from((e.output, e.input) for e in graph.edges)
    return g


def prevent_self_connections() -> Validator:
    """Reject connections from a node to itself."""

    def validate(connection: Connection) -> bool:
        return connection.output != connection.input

    return validate


def prevent_cycles(graph: DiagramGraph) -> Validator:
    """Reject connections that would close a cycle in the edge graph."""

    def validate(connection: Connection) -> bool:
        if connection.output is None or connection.input is None:
            return False
        if connection.output == connection.input:
            return False
        g = _edge_graph(graph)
        if connection.input not in g or connection.output not in g:
            return True
        return not nx.has_path(g, connection.input, connection.output)

    return validate


def prevent_duplicates(graph: DiagramGraph) -> Validator:
    """Reject a connection identical to an existing edge (pins included)."""

    def validate(connection: Connection) -> bool:
        return not any(
            e.output == connection.output
            and e.input == connection.input
            and e.output_pin == connection.output_pin
            and e.input_pin == connection.input_pin
            for e in graph.edges
        )

    return validate


def all_of(*validators: Validator) -> Validator:
    """Accept only when every validator accepts."""

    def validate(connection: Connection) -> bool:
        return all(v(connection) for v in validators)

    return validate
