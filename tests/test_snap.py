import math

import pytest

from geosketch.shapes import get_edges
from geosketch.snap import (
    find_basic_snap_target,
    find_perpendicular_preview,
    find_point_placement,
    find_point_to_point_snap,
    find_snap_with_perpendicular_correction,
    is_valid_connection,
    resolve_line_start,
    resolve_snap,
)
from geosketch.types import Circle, GeometryPoint, LineSegment, Point2D, Rectangle, Segment

RECT = Rectangle("rect", 0.0, 0.0, 100.0, 100.0)


def _point(pid, x, y, kind="edge", vertex_index=None, label="A"):
    return GeometryPoint(pid, Point2D(x, y), label, RECT.id, kind, vertex_index)


def _line(lid, start, end):
    return LineSegment(lid, Point2D(*start), Point2D(*end), "free", "free")


def test_basic_snap_prefers_vertex_over_edge():
    result = find_basic_snap_target((5, 1), [RECT], [], [])
    assert result.type == "vertex"
    assert result.vertex_index == 0
    assert result.reference == "rect"
    assert result.point == (0, 0)


def test_basic_snap_prefers_existing_point_over_edge():
    point = _point("p1", 50, 0)
    result = find_basic_snap_target((52, 3), [RECT], [point], [])
    assert result.type == "point"
    assert result.reference == "p1"
    assert result.point == (50, 0)


def test_basic_snap_falls_through_edge_line_and_free():
    point = _point("p1", 50, 0)
    edge = find_basic_snap_target((30, 5), [RECT], [point], [])
    assert edge.type == "edge"
    assert edge.point == pytest.approx((30.0, 0.0))

    line = _line("l1", (200, 200), (300, 200))
    on_line = find_basic_snap_target((250, 205), [RECT], [point], [line])
    assert on_line.type == "line"
    assert on_line.reference == "l1"
    assert on_line.point == pytest.approx((250.0, 200.0))

    free = find_basic_snap_target((500, 500), [RECT], [point], [line])
    assert free.is_free
    assert free.reference is None
    assert free.point == (500, 500)


def test_resolver_without_line_start_is_the_basic_resolver():
    assert resolve_snap((5, 1), [RECT], [], []) == find_basic_snap_target((5, 1), [RECT], [], [])


def test_point_to_point_snaps_onto_shape_vertex():
    result = resolve_snap((95, 5), [RECT], [], [], line_start=(50, 50))
    assert result.is_point_to_point
    assert result.type == "vertex"
    assert result.vertex_index == 1
    assert result.point == (100, 0)


def test_point_to_point_prefers_existing_point_on_tie():
    corner = _point("p1", 100, 0, kind="vertex", vertex_index=1)
    result = resolve_snap((95, 5), [RECT], [corner], [], line_start=(50, 50))
    assert result.is_point_to_point
    assert result.type == "point"
    assert result.reference == "p1"


def test_point_to_point_rejects_the_line_start():
    snap = find_point_to_point_snap((0, 0), (2, 2), [], [RECT])
    assert snap is None
    result = resolve_snap((2, 2), [RECT], [], [], line_start=(0, 0))
    assert not result.is_point_to_point
    assert result.point != (0, 0)


def test_is_valid_connection():
    assert not is_valid_connection((0, 0), (3, 4))
    assert is_valid_connection((0, 0), (30, 40))


def test_perpendicular_correction_snaps_to_exact_foot_on_edge():
    result = resolve_snap((101, 41), [RECT], [], [], line_start=(150, 40))
    assert result.is_perpendicular
    assert result.type == "edge"
    assert result.reference == "rect"
    assert result.point == pytest.approx((100.0, 40.0))
    assert result.edge_info == Segment((100, 0), (100, 100))


def test_edge_snap_without_right_angle_is_ordinary():
    result = resolve_snap((101, 80), [RECT], [], [], line_start=(150, 40))
    assert not result.is_perpendicular
    assert result.type == "edge"
    assert result.point == pytest.approx((100.0, 80.0))


def test_perpendicular_correction_on_lines():
    line = _line("l1", (0, 0), (100, 0))
    result = find_snap_with_perpendicular_correction((52, 3), [], [line], (50, 60))
    assert result is not None
    assert result.is_perpendicular
    assert result.type == "line"
    assert result.reference == "l1"
    assert result.point == pytest.approx((50.0, 0.0))
    assert result.edge_info == line.segment


def test_perpendicular_preview_onto_line():
    line = _line("l1", (0, 0), (100, 0))
    result = resolve_snap((300, 300), [], [], [line], line_start=(50, 60))
    assert result.is_perpendicular_preview
    assert result.reference == "l1"
    assert result.point == pytest.approx((50.0, 0.0))


def test_perpendicular_preview_respects_distance_band():
    line = _line("l1", (0, 0), (100, 0))
    result = resolve_snap((300, 300), [], [], [line], line_start=(50, 10))
    assert not result.is_perpendicular_preview
    assert result.is_free
    assert result.point == (300, 300)


def test_perpendicular_preview_picks_nearest_edge():
    preview = find_perpendicular_preview((150, 50), [RECT], [])
    assert preview is not None
    assert preview.target_type == "edge"
    assert preview.target_id == "rect"
    assert preview.point == pytest.approx((100.0, 50.0))
    assert preview.distance == pytest.approx(50.0)


def test_preview_ignores_feet_off_the_segment():
    line = _line("l1", (0, 0), (100, 0))
    assert find_perpendicular_preview((150, 60), [], [line]) is None


def test_cursor_at_snap_tolerance_from_edge_gets_preview():
    result = resolve_snap((115, 50), [RECT], [], [], line_start=(150, 50))
    assert result.is_perpendicular_preview
    assert not result.is_perpendicular
    assert result.type == "edge"
    assert result.reference == "rect"
    assert result.point == pytest.approx((100.0, 50.0))
    assert result.edge_info == Segment((100, 0), (100, 100))

    inside = resolve_snap((114, 50), [RECT], [], [], line_start=(150, 50))
    assert inside.is_perpendicular
    assert not inside.is_perpendicular_preview


def test_preview_records_carry_their_target():
    line = _line("l1", (0, 0), (100, 0))
    to_line = find_perpendicular_preview((50, 60), [], [line])
    assert (to_line.target_type, to_line.target_id) == ("line", "l1")
    assert to_line.target == line.segment
    assert to_line.source == (50, 60)

    to_edge = find_perpendicular_preview((150, 50), [RECT], [])
    assert (to_edge.target_type, to_edge.target_id) == ("edge", "rect")
    assert to_edge.target == Segment((100, 0), (100, 100))


def test_perpendicular_correction_on_large_circle_mid_chord():
    circle = Circle("c", 0.0, 0.0, 600.0, 600.0)
    half_step = math.pi / 16
    direction = (math.cos(half_step), math.sin(half_step))
    cursor = (300 + 300 * direction[0], 300 + 300 * direction[1])
    start = (300 + 400 * direction[0], 300 + 400 * direction[1])

    result = find_snap_with_perpendicular_correction(cursor, [circle], [], start)

    inset = 300 * math.cos(half_step)
    assert result is not None
    assert result.is_perpendicular
    assert result.reference == "c"
    assert result.edge_info == get_edges(circle)[0]
    assert result.point == pytest.approx((300 + inset * direction[0], 300 + inset * direction[1]))


def test_line_start_requires_an_anchor():
    assert resolve_line_start((500, 500), [RECT], [], []) is None
    assert resolve_line_start((50, 3), [RECT], [], []) is None
    start = resolve_line_start((2, 2), [RECT], [], [])
    assert start is not None
    assert start.type == "vertex"


def test_point_placement():
    on_edge = find_point_placement((50, 5), [RECT])
    assert on_edge.type == "edge"
    assert on_edge.point == pytest.approx((50.0, 0.0))
    on_vertex = find_point_placement((3, 3), [RECT])
    assert on_vertex.type == "vertex"
    assert on_vertex.vertex_index == 0
    assert find_point_placement((50, 30), [RECT]) is None
