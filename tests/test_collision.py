import pytest

from geosketch.collision import (
    distance_to_line,
    find_line_at,
    find_point_at,
    find_shape_at,
    point_in_shape,
)
from geosketch.shapes import get_vertices, make_transformed
from geosketch.types import Circle, GeometryPoint, LineSegment, Point2D, Rectangle, Triangle


def _line(lid, start, end):
    return LineSegment(lid, Point2D(*start), Point2D(*end), "free", "free")


def test_rectangle_and_circle_containment():
    rect = Rectangle("r", 0, 0, 100, 50)
    assert point_in_shape((10, 10), rect)
    assert point_in_shape((100, 50), rect)
    assert not point_in_shape((101, 10), rect)

    circle = Circle("c", 0, 0, 100, 50)
    assert point_in_shape((50, 25), circle)
    assert point_in_shape((99, 25), circle)
    assert not point_in_shape((2, 2), circle)


def test_regular_triangle_uses_bounding_box_but_transformed_uses_polygon():
    tri = Triangle("t", 0, 0, 100, 50)
    assert point_in_shape((2, 2), tri)
    transformed = make_transformed(tri, get_vertices(tri))
    assert not point_in_shape((2, 2), transformed)
    assert point_in_shape((50, 40), transformed)


def test_distance_to_line():
    line = _line("l", (0, 0), (100, 0))
    assert distance_to_line((50, 7), line) == pytest.approx(7.0)
    assert distance_to_line((110, 0), line) == pytest.approx(10.0)


def test_find_line_at_returns_topmost():
    bottom = _line("l1", (0, 0), (100, 0))
    top = _line("l2", (50, -50), (50, 50))
    assert find_line_at((50, 2), [bottom, top]) is top
    assert find_line_at((80, 4), [bottom, top]) is bottom
    assert find_line_at((80, 6), [bottom, top]) is None


def test_find_point_at_uses_point_radius_margin():
    point = GeometryPoint("p", Point2D(10, 10), "A", "r", "vertex", 0)
    assert find_point_at((18, 10), [point]) is point
    assert find_point_at((20, 10), [point]) is None


def test_find_shape_at_returns_topmost():
    lower = Rectangle("r1", 0, 0, 100, 100)
    upper = Rectangle("r2", 50, 50, 100, 100)
    assert find_shape_at((75, 75), [lower, upper]) is upper
    assert find_shape_at((25, 25), [lower, upper]) is lower
    assert find_shape_at((500, 500), [lower, upper]) is None
