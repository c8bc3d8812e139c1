"""Shared test fixtures and helpers for the edgeflow test suite."""

from __future__ import annotations

import pytest
from graph_helpers import make_graph

from edgeflow.interaction.autopan import FrameQueue
from edgeflow.interaction.state import ConnectionHandlers, ViewState
from edgeflow.interaction.surface import EventSurface
from edgeflow.model import DiagramGraph, Edge, Rect

# --- Pytest fixtures ---


@pytest.fixture
def graph() -> DiagramGraph:
    return make_graph(
        Edge(id="e1", output="a", input="b", output_pin="out", input_pin="in")
    )


@pytest.fixture
def view(graph) -> ViewState:
    return ViewState(
        graph=graph,
        width=800,
        height=600,
        container_bounds=Rect(0, 0, 800, 600),
        handlers=ConnectionHandlers(),
    )


@pytest.fixture
def surface() -> EventSurface:
    return EventSurface()


@pytest.fixture
def frames() -> FrameQueue:
    return FrameQueue()


class ErrorLog(list):
    """An ``on_error`` handler that records ``(code, message)`` pairs."""

    def __call__(self, code: str, message: str) -> None:
        self.append((code, message))

    @property
    def codes(self) -> list[str]:
        return [code for code, _ in self]


@pytest.fixture
def errors() -> ErrorLog:
    return ErrorLog()
