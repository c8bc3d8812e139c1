"""Tests for the view state container, the event surface and auto-pan."""

import pytest

from edgeflow.interaction.autopan import FrameQueue, calc_auto_pan
from edgeflow.interaction.state import ConnectionState, ViewState
from edgeflow.interaction.surface import EventSurface, PointerEvent, event_position
from edgeflow.model import (
    ConnectingPin,
    Edge,
    Node,
    PinRole,
    Point,
    Rect,
    Transform,
)

BOUNDS = Rect(0, 0, 800, 600)


class TestCalcAutoPan:
    @pytest.mark.parametrize(
        "position,expected",
        [
            (Point(400, 300), (0, 0)),
            (Point(35, 300), (0, 0)),
            (Point(765, 300), (0, 0)),
            (Point(0, 300), (14, 0)),
            (Point(800, 300), (-14, 0)),
            (Point(400, 0), (0, 14)),
            (Point(400, 600), (0, -14)),
            (Point(0, 0), (14, 14)),
        ],
    )
    def test_velocity(self, position, expected):
        dx, dy = calc_auto_pan(position, BOUNDS)
        assert dx == pytest.approx(expected[0])
        assert dy == pytest.approx(expected[1])

    def test_capped_past_the_edge(self):
        assert calc_auto_pan(Point(-500, 300), BOUNDS) == (20, 0)

    def test_minimum_step_just_inside_margin(self):
        # distance 0.5 is clamped up to 1
        dx, _ = calc_auto_pan(Point(34.5, 300), BOUNDS)
        assert dx == pytest.approx(0.4)

    def test_custom_distance_and_speed(self):
        dx, _ = calc_auto_pan(Point(0, 300), BOUNDS, edge_distance=50, speed=10)
        assert dx == pytest.approx(10)


class TestFrameQueue:
    def test_handles_increase(self):
        frames = FrameQueue()
        assert frames.request(lambda: None) == 1
        assert frames.request(lambda: None) == 2
        assert frames.pending == 2

    def test_cancel(self):
        frames = FrameQueue()
        ran = []
        handle = frames.request(lambda: ran.append(1))
        frames.cancel(handle)
        frames.cancel(handle)
        assert frames.run_frame() == 0
        assert ran == []

    def test_requests_during_frame_are_deferred(self):
        frames = FrameQueue()
        ran = []

        def tick():
            ran.append(len(ran))
            frames.request(tick)

        frames.request(tick)
        assert frames.run_frame() == 1
        assert frames.run_frame() == 1
        assert ran == [0, 1]
        assert frames.pending == 1


class TestEventSurface:
    def test_dispatch_and_remove(self):
        surface = EventSurface()
        seen = []
        surface.add_listener("mousemove", seen.append)
        event = PointerEvent(1, 2)
        surface.dispatch("mousemove", event)
        surface.dispatch("mouseup", event)
        assert seen == [event]

        surface.remove_listener("mousemove", seen.append)
        surface.remove_listener("mousemove", seen.append)
        surface.dispatch("mousemove", event)
        assert seen == [event]
        assert surface.listener_count() == 0

    def test_listener_count_by_type(self):
        surface = EventSurface()
        surface.add_listener("mousemove", print)
        surface.add_listener("mouseup", print)
        assert surface.listener_count("mousemove") == 1
        assert surface.listener_count("touchend") == 0
        assert surface.listener_count() == 2

    def test_event_position(self):
        event = PointerEvent(150, 90)
        assert event_position(event) == Point(150, 90)
        assert event_position(event, Rect(100, 50, 10, 10)) == Point(50, 40)


class TestTransform:
    def test_round_trip(self):
        transform = Transform(10, -20, 2)
        assert transform.to_screen(Point(5, 5)) == Point(20, -10)
        assert transform.to_model(Point(20, -10)) == Point(5, 5)


class TestViewState:
    def test_subscribers_see_every_write(self):
        view = ViewState()
        snapshots = []
        unsubscribe = view.subscribe(lambda v: snapshots.append(v.transform))

        view.set_transform((5, 5, 2))
        assert view.pan_by(1, 0)
        unsubscribe()
        view.set_dimensions(10, 10)

        assert snapshots == [Transform(5, 5, 2), Transform(6, 5, 2)]

    def test_zero_pan_is_silent(self):
        view = ViewState()
        calls = []
        view.subscribe(calls.append)
        assert not view.pan_by(0, 0)
        assert calls == []

    def test_connection_snapshots_are_replaced(self):
        view = ViewState()
        pin = ConnectingPin("a", "out", PinRole.OUTPUT)
        before = view.connection

        view.begin_connection(pin, Point(1, 2))
        assert before == ConnectionState()
        assert view.connection.in_progress
        assert view.connection.position == Point(1, 2)

        view.update_connection(Point(3, 4), "invalid", None, pin, False)
        assert view.connection.start_pin == pin
        assert view.connection.status == "invalid"

    def test_cancel_keeps_click_start(self):
        view = ViewState()
        pin = ConnectingPin("a", "out", PinRole.OUTPUT)
        view.set_click_start_pin(pin)
        view.begin_connection(pin, Point(1, 2))
        view.cancel_connection()
        assert view.connection == ConnectionState(click_start_pin=pin)

    def test_set_handlers_replaces_only_named_hooks(self):
        view = ViewState()
        view.set_handlers(on_connect=print)
        view.set_handlers(on_connect_end=len)
        assert view.handlers.on_connect is print
        assert view.handlers.on_connect_end is len

    def test_set_nodes_and_edges_replace_graph(self):
        view = ViewState()
        graph = view.graph
        view.set_nodes([Node("a"), Node("b")])
        view.set_edges([Edge("e1", "a", "b")])

        assert view.graph is not graph
        assert list(view.graph.nodes) == ["a", "b"]
        assert [e.id for e in view.graph.edges] == ["e1"]
        assert graph.nodes == {}
