import pytest

from geosketch.measure import compute_angle, find_common_vertex, format_length, measure_length, orient_from
from geosketch.types import GeometryPoint, LineSegment, Point2D


def _line(lid, start, end, start_type="free", end_type="free", start_ref=None, end_ref=None):
    return LineSegment(lid, Point2D(*start), Point2D(*end), start_type, end_type, start_ref, end_ref)


def test_right_angle_between_lines_sharing_a_vertex():
    first = _line("l1", (50, 0), (50, 50))
    second = _line("l2", (50, 50), (100, 50))
    angle = compute_angle(first, second)
    assert angle is not None
    assert angle.value == pytest.approx(90.0)
    assert angle.vertex == (50, 50)
    assert angle.lines[0].start_point == (50, 50)
    assert angle.lines[1].start_point == (50, 50)
    assert first.start_point == (50, 0)


def test_orientation_carries_endpoint_metadata():
    line = _line("l1", (50, 0), (50, 50), "edge", "point", "shape", "p1")
    flipped = orient_from(line, (50, 50))
    assert flipped.start_point == (50, 50)
    assert flipped.start_type == "point"
    assert flipped.start_reference == "p1"
    assert flipped.end_reference == "shape"
    assert orient_from(line, (50, 0)) is line


def test_common_vertex_falls_back_to_nearest_endpoints():
    first = _line("l1", (50, 0), (50, 48))
    second = _line("l2", (52, 50), (100, 50))
    common = find_common_vertex(first, second)
    assert common is not None
    assert common.vertex == (50, 48)
    assert common.line2.start_point == (52, 50)


def test_lines_that_do_not_meet_have_no_angle():
    first = _line("l1", (0, 0), (10, 0))
    second = _line("l2", (100, 100), (200, 100))
    assert find_common_vertex(first, second) is None
    assert compute_angle(first, second) is None


def test_zero_length_arm_has_no_angle():
    stub = _line("l1", (50, 50), (50, 50))
    arm = _line("l2", (50, 50), (100, 50))
    assert compute_angle(stub, arm) is None


def test_angle_records_point_on_vertex():
    first = _line("l1", (50, 0), (50, 50))
    second = _line("l2", (50, 50), (100, 50))
    vertex_point = GeometryPoint("p1", Point2D(50, 50), "C", "rect", "center")
    angle = compute_angle(first, second, [vertex_point])
    assert angle.vertex_label == "C"
    assert angle.shape_id == "rect"


def test_measure_length():
    measurement = measure_length(_line("l1", (0, 0), (30, 40)))
    assert measurement.value == pytest.approx(50.0)
    assert measurement.label == "50.0"
    assert measurement.line_id == "l1"


def test_format_length_accepts_template():
    assert format_length(12.3456) == "12.3"
    assert format_length(12.3456, "{value:.2f} cm") == "12.35 cm"
