"""Tests for the geometry kernel: straight, bezier and orthogonal routing."""

import pytest

from edgeflow.layout.routing import (
    EdgeStyle,
    bezier_path,
    connection_line_path,
    control_offset,
    orthogonal_points,
    route_edge,
    simple_bezier_path,
    smooth_step_path,
    step_path,
    straight_path,
)
from edgeflow.layout.routing.common import EdgeGeometry, fmt
from edgeflow.layout.routing.step import bend
from edgeflow.model import Point, Position

ORIGIN = Point(0, 0)


# --- Number formatting ---


@pytest.mark.parametrize(
    "value,expected",
    [(0, "0"), (12.0, "12"), (-3.0, "-3"), (2.5, "2.5"), (162.5, "162.5")],
)
def test_fmt_drops_trailing_zero(value, expected):
    assert fmt(value) == expected


# --- Straight ---


class TestStraight:
    def test_path_and_label(self):
        geo = straight_path(ORIGIN, Point(100, 100))
        assert geo.path == "M 0,0L 100,100"
        assert geo.label == Point(50, 50)
        assert (geo.label_offset_x, geo.label_offset_y) == (50, 50)

    def test_label_midpoint_when_input_is_behind(self):
        geo = straight_path(Point(100, 40), Point(0, 0))
        assert geo.label == Point(50, 20)


# --- Symmetry ---

ALL_POSITIONS = list(Position)


def _cubic_points(path):
    """Split "Mx,y Cx,y x,y x,y" into its four points."""
    tokens = path.replace("M", "").replace("C", "").split()
    return [tuple(token.split(",")) for token in tokens]


@pytest.mark.parametrize("output_position", ALL_POSITIONS)
@pytest.mark.parametrize("input_position", ALL_POSITIONS)
def test_simple_bezier_symmetric(output_position, input_position):
    a, b = Point(10, 20), Point(130, 90)
    forward = simple_bezier_path(a, output_position, b, input_position)
    backward = simple_bezier_path(b, input_position, a, output_position)
    assert _cubic_points(backward.path) == _cubic_points(forward.path)[::-1]
    assert backward.label == pytest.approx(forward.label)


@pytest.mark.parametrize(
    "a,b",
    [(Point(10, 20), Point(130, 90)), (Point(130, 90), Point(10, 20))],
)
def test_straight_symmetric(a, b):
    forward = straight_path(a, b)
    backward = straight_path(b, a)
    assert backward.label == forward.label
    assert backward.path == f"M {fmt(b.x)},{fmt(b.y)}L {fmt(a.x)},{fmt(a.y)}"


# --- Bezier ---


class TestControlOffset:
    def test_facing_each_other_goes_halfway(self):
        assert control_offset(100, 0.25) == 50

    def test_facing_away_overshoots(self):
        # 0.25 * 25 * sqrt(100)
        assert control_offset(-100, 0.25) == pytest.approx(62.5)

    def test_zero_gap(self):
        assert control_offset(0, 0.25) == 0

    def test_zero_curvature_has_no_overshoot(self):
        assert control_offset(-1e-9, 0) == 0
        assert control_offset(-400, 0) == 0


class TestBezier:
    def test_vertical_default(self):
        geo = bezier_path(ORIGIN, Position.BOTTOM, Point(0, 100), Position.TOP)
        assert geo.path == "M0,0 C0,50 0,50 0,100"
        assert geo.label == Point(0, 50)

    def test_facing_away_loops(self):
        """An input above its output pushes both controls outward."""
        geo = bezier_path(Point(0, 100), Position.BOTTOM, ORIGIN, Position.TOP)
        assert geo.path == "M0,100 C0,162.5 0,-62.5 0,0"
        assert geo.label_y == pytest.approx(50)

    def test_curvature_only_matters_when_facing_away(self):
        a = bezier_path(ORIGIN, Position.RIGHT, Point(100, 50), Position.LEFT)
        b = bezier_path(
            ORIGIN, Position.RIGHT, Point(100, 50), Position.LEFT, curvature=1.0
        )
        assert a.path == b.path

        c = bezier_path(Point(100, 0), Position.RIGHT, ORIGIN, Position.LEFT)
        d = bezier_path(
            Point(100, 0), Position.RIGHT, ORIGIN, Position.LEFT, curvature=1.0
        )
        assert c.path != d.path

    def test_label_is_parametric_midpoint(self):
        geo = bezier_path(ORIGIN, Position.RIGHT, Point(100, 100), Position.LEFT)
        # controls (50, 0) and (50, 100)
        assert geo.label == Point(50, 50)
        assert (geo.label_offset_x, geo.label_offset_y) == (50, 50)


class TestSimpleBezier:
    def test_horizontal_controls(self):
        geo = simple_bezier_path(
            ORIGIN, Position.RIGHT, Point(100, 100), Position.LEFT
        )
        assert geo.path == "M0,0 C50,0 50,100 100,100"
        assert geo.label == Point(50, 50)

    def test_vertical_controls(self):
        geo = simple_bezier_path(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP
        )
        assert geo.path == "M0,0 C0,50 100,50 100,100"


# --- Orthogonal ---


class TestOrthogonalPoints:
    def test_opposite_facing_splits_at_center(self):
        points, label_x, label_y, off_x, off_y = orthogonal_points(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP
        )
        assert points == [
            Point(0, 0),
            Point(0, 20),
            Point(0, 50),
            Point(100, 50),
            Point(100, 80),
            Point(100, 100),
        ]
        assert (label_x, label_y) == (50, 50)
        assert (off_x, off_y) == (50, 50)

    def test_explicit_center(self):
        points, _, label_y, _, _ = orthogonal_points(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP, center_y=30
        )
        assert points[2:4] == [Point(0, 30), Point(100, 30)]
        assert label_y == 30

    def test_zero_center_means_default(self):
        points, _, label_y, _, _ = orthogonal_points(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP, center_y=0
        )
        assert label_y == 50

    def test_mixed_positions_single_corner(self):
        points, label_x, label_y, _, _ = orthogonal_points(
            ORIGIN, Position.RIGHT, Point(100, 100), Position.TOP
        )
        assert points == [
            Point(0, 0),
            Point(20, 0),
            Point(100, 0),
            Point(100, 80),
            Point(100, 100),
        ]
        assert (label_x, label_y) == (100, 0)

    @pytest.mark.parametrize(
        "output_position,input,input_position,corner",
        [
            # horizontal axis, input faces across the travel direction
            (Position.RIGHT, Point(100, -100), Position.TOP, Point(20, -120)),
            (Position.RIGHT, Point(100, 100), Position.TOP, Point(100, 0)),
            # horizontal axis, input faces along the output direction
            (Position.RIGHT, Point(100, 100), Position.BOTTOM, Point(20, 120)),
            (Position.RIGHT, Point(100, -100), Position.BOTTOM, Point(100, 0)),
            # output facing against the positive axis
            (Position.LEFT, Point(-100, -100), Position.TOP, Point(-20, -120)),
            # vertical axis
            (Position.BOTTOM, Point(100, 100), Position.LEFT, Point(0, 100)),
            (Position.BOTTOM, Point(-100, 100), Position.LEFT, Point(-120, 20)),
        ],
    )
    def test_mixed_positions_corner(
        self, output_position, input, input_position, corner
    ):
        points, label_x, label_y, _, _ = orthogonal_points(
            ORIGIN, output_position, input, input_position
        )
        assert len(points) == 5
        assert points[2] == corner
        assert (label_x, label_y) == corner

    def test_offset_controls_gap(self):
        points, *_ = orthogonal_points(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP, offset=5
        )
        assert points[1] == Point(0, 5)
        assert points[-2] == Point(100, 95)

    @pytest.mark.parametrize(
        "output_position,input_position",
        [
            (Position.BOTTOM, Position.TOP),
            (Position.RIGHT, Position.LEFT),
            (Position.RIGHT, Position.TOP),
            (Position.BOTTOM, Position.LEFT),
            (Position.TOP, Position.TOP),
        ],
    )
    def test_segments_are_axis_aligned(self, output_position, input_position):
        points, *_ = orthogonal_points(
            ORIGIN, output_position, Point(160, 90), input_position
        )
        for a, b in zip(points, points[1:]):
            assert a.x == b.x or a.y == b.y


class TestBend:
    def test_colinear_is_a_line(self):
        assert bend(Point(0, 0), Point(0, 20), Point(0, 50), 5) == "L0 20"

    def test_vertical_then_horizontal(self):
        assert (
            bend(Point(0, 20), Point(0, 50), Point(100, 50), 5)
            == "L 0,45Q 0,50 5,50"
        )

    def test_horizontal_then_vertical(self):
        assert (
            bend(Point(0, 50), Point(100, 50), Point(100, 80), 5)
            == "L 95,50Q 100,50 100,55"
        )

    def test_radius_clamped_to_half_segment(self):
        # shortest neighbouring segment is 4 long, so the bend is 2
        assert (
            bend(Point(0, 46), Point(0, 50), Point(100, 50), 10)
            == "L 0,48Q 0,50 2,50"
        )


class TestStepPaths:
    def test_smooth_step(self):
        geo = smooth_step_path(ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP)
        assert geo.path == (
            "M0 0L0 20L 0,45Q 0,50 5,50L 95,50Q 100,50 100,55L100 80L100 100"
        )
        assert geo.label == Point(50, 50)

    def test_step_has_square_corners(self):
        geo = step_path(ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP)
        assert geo.path == (
            "M0 0L0 20L 0,50Q 0,50 0,50L 100,50Q 100,50 100,50L100 80L100 100"
        )


# --- Dispatch ---


class TestRouteEdge:
    def test_default_positions(self):
        geo = route_edge("default", ORIGIN, None, Point(0, 100), None)
        assert geo.path == "M0,0 C0,50 0,50 0,100"

    def test_enum_and_string_agree(self):
        a = route_edge(EdgeStyle.SMOOTHSTEP, ORIGIN, None, Point(100, 100), None)
        b = route_edge("smoothstep", ORIGIN, None, Point(100, 100), None)
        assert a == b

    def test_unknown_style_falls_back_to_default(self):
        geo = route_edge("wobbly", ORIGIN, None, Point(0, 100), None)
        assert geo.path.startswith("M0,0 C")

    def test_path_options_filtered_per_style(self):
        options = {"curvature": 1.0, "border_radius": 0, "offset": 10}
        straight = route_edge(
            "straight", ORIGIN, None, Point(0, 100), None, path_options=options
        )
        assert straight.path == "M 0,0L 0,100"

        smooth = route_edge(
            "smoothstep", ORIGIN, None, Point(100, 100), None, path_options=options
        )
        assert "Q 0,50 0,50" in smooth.path
        assert smooth.path.startswith("M0 0L0 10")

    def test_custom_router(self):
        def diagonal(output, output_position, input, input_position):
            return EdgeGeometry("M0 0", 1, 2, 3, 4)

        geo = route_edge(
            "diagonal",
            ORIGIN,
            Position.RIGHT,
            Point(10, 10),
            Position.LEFT,
            routers={"diagonal": diagonal, "default": bezier_path},
        )
        assert geo == EdgeGeometry("M0 0", 1, 2, 3, 4)


class TestConnectionLine:
    def test_free_end_faces_opposite_side(self):
        path = connection_line_path(
            EdgeStyle.DEFAULT, ORIGIN, Position.BOTTOM, Point(0, 100)
        )
        assert path == "M0,0 C0,50 0,50 0,100"

    def test_straight(self):
        path = connection_line_path("straight", ORIGIN, Position.RIGHT, Point(30, 40))
        assert path == "M0,0 30,40"

    def test_step_styles(self):
        path = connection_line_path(
            "smoothstep", ORIGIN, Position.BOTTOM, Point(100, 100)
        )
        assert path == smooth_step_path(
            ORIGIN, Position.BOTTOM, Point(100, 100), Position.TOP
        ).path


class TestCornerCounts:
    def test_facing_each_other_runs_straight(self):
        geo = smooth_step_path(ORIGIN, Position.RIGHT, Point(100, 0), Position.LEFT)
        assert "Q" not in geo.path
        points, *_ = orthogonal_points(
            ORIGIN, Position.RIGHT, Point(100, 0), Position.LEFT
        )
        assert all(p.y == 0 for p in points)

    def test_same_direction_has_one_corner(self):
        points, *_ = orthogonal_points(
            ORIGIN, Position.BOTTOM, Point(100, 50), Position.BOTTOM
        )
        # output, output gap, corner, input gap, input
        assert len(points) == 5
        assert points[2] == Point(0, 70)
