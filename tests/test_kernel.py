import math

import pytest

from geosketch.kernel import (
    angle_between,
    barycentric,
    barycentric_to_point,
    closest_point_on_segment,
    distance,
    distance_to_segment,
    ellipse_chords,
    is_perpendicular,
    lerp,
    midpoint,
    perpendicular_snap_info,
    point_in_polygon,
    point_on_ellipse,
    polygon_area,
    polygon_centroid,
    project_point_on_line,
    vertex_mean,
)

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


def test_distance_and_interpolation():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert lerp((0, 0), (10, 20), 0.25) == pytest.approx((2.5, 5.0))
    assert midpoint((0, 0), (10, 20)) == pytest.approx((5.0, 10.0))


def test_projection_is_unclamped():
    param, projected = project_point_on_line((15, 5), (0, 0), (10, 0))
    assert param == pytest.approx(1.5)
    assert projected == pytest.approx((15.0, 0.0))


def test_projection_on_collapsed_segment_returns_start():
    param, projected = project_point_on_line((1, 1), (2, 2), (2, 2))
    assert param == 0.0
    assert projected == (2.0, 2.0)


def test_closest_point_on_segment_clamps_to_endpoints():
    assert closest_point_on_segment((15, 5), (0, 0), (10, 0)) == pytest.approx((10.0, 0.0))
    assert closest_point_on_segment((-3, 5), (0, 0), (10, 0)) == pytest.approx((0.0, 0.0))
    assert closest_point_on_segment((4, 5), (0, 0), (10, 0)) == pytest.approx((4.0, 0.0))
    assert distance_to_segment((4, 5), (0, 0), (10, 0)) == pytest.approx(5.0)


def test_perpendicular_snap_info_reports_foot_and_offsets():
    info = perpendicular_snap_info((5, 10), (0, 0), (10, 0))
    assert info.foot == pytest.approx((5.0, 0.0))
    assert info.distance_to_segment == pytest.approx(0.0)
    assert info.distance == pytest.approx(10.0)

    beyond = perpendicular_snap_info((20, 10), (0, 0), (10, 0))
    assert beyond.foot == pytest.approx((20.0, 0.0))
    assert beyond.closest_on_segment == pytest.approx((10.0, 0.0))
    assert beyond.distance_to_segment == pytest.approx(10.0)


def test_is_perpendicular():
    assert is_perpendicular((0, 0), (0, 10), (-5, 5), (5, 5))
    assert is_perpendicular((0, 0), (0.3, 10), (-5, 5), (5, 5))
    assert not is_perpendicular((0, 0), (10, 10), (-5, 5), (5, 5))


def test_zero_length_vectors_are_never_perpendicular():
    assert not is_perpendicular((0, 0), (0, 0), (-5, 5), (5, 5))
    assert not is_perpendicular((0, 0), (0, 10), (5, 5), (5, 5))


def test_point_in_polygon():
    assert point_in_polygon((5, 5), SQUARE)
    assert not point_in_polygon((15, 5), SQUARE)
    assert not point_in_polygon((5, -1), SQUARE)


def test_polygon_area_and_centroid():
    assert polygon_area(SQUARE) == pytest.approx(100.0)
    assert polygon_area(list(reversed(SQUARE))) == pytest.approx(-100.0)
    assert polygon_centroid([(0, 0), (6, 0), (0, 6)]) == pytest.approx((2.0, 2.0))
    assert vertex_mean(SQUARE) == pytest.approx((5.0, 5.0))


def test_centroid_of_collinear_points_falls_back_to_mean():
    assert polygon_centroid([(0, 0), (5, 0), (10, 0)]) == pytest.approx((5.0, 0.0))


def test_barycentric_round_trip():
    v1, v2, v3 = (0.0, 0.0), (10.0, 0.0), (0.0, 10.0)
    coeffs = barycentric((2, 3), v1, v2, v3)
    assert coeffs is not None
    assert coeffs.u == pytest.approx(0.5)
    assert coeffs.v == pytest.approx(0.2)
    assert coeffs.w == pytest.approx(0.3)
    assert barycentric_to_point(coeffs, v1, v2, v3) == pytest.approx((2.0, 3.0))


def test_barycentric_rejects_outside_and_degenerate():
    assert barycentric((20, 20), (0, 0), (10, 0), (0, 10)) is None
    assert barycentric((1, 1), (0, 0), (5, 5), (10, 10)) is None


def test_ellipse_helpers():
    samples = ellipse_chords((0, 0), 10.0, 5.0, 16)
    assert samples.shape == (17, 2)
    assert samples[0] == pytest.approx(samples[-1])
    assert point_on_ellipse((0, 0), 10.0, 5.0, (0, 10)) == pytest.approx((0.0, 5.0))
    assert point_on_ellipse((0, 0), 10.0, 5.0, (-3, 0)) == pytest.approx((-10.0, 0.0))


def test_angle_between():
    assert angle_between((50, 50), (50, 0), (100, 50)) == pytest.approx(90.0)
    assert angle_between((0, 0), (1, 0), (-1, 0)) == pytest.approx(180.0)
    assert math.isclose(angle_between((0, 0), (1, 0), (1, 1)), 45.0)
    assert angle_between((0, 0), (0, 0), (1, 1)) is None
