import pytest

from geosketch.kernel import angle_between
from geosketch.shapes import get_vertices
from geosketch.transform import (
    find_nearest_vertex,
    find_right_angle_position,
    is_horizontal_parallelogram,
    parallelogram_candidates,
    repair_parallelogram,
    transform_vertex,
)
from geosketch.types import Circle, Point2D, Rectangle, TransformedRectangle, TransformedTriangle, Triangle

RECT = Rectangle("rect", 0.0, 0.0, 100.0, 100.0)
TRI = Triangle("tri", 0.0, 0.0, 100.0, 50.0)


def _bbox(shape):
    return (shape.x, shape.y, shape.width, shape.height)


def test_find_nearest_vertex():
    hit = find_nearest_vertex((98, 2), RECT)
    assert hit is not None
    assert hit.vertex_index == 1
    assert hit.vertex == (100, 0)
    assert find_nearest_vertex((50, 50), RECT) is None
    assert find_nearest_vertex((50, 50), Circle("c", 0, 0, 100, 100)) is None


def test_unconstrained_drag_moves_only_the_vertex():
    moved = transform_vertex(RECT, 1, (120, -20))
    assert isinstance(moved, TransformedRectangle)
    assert moved.id == RECT.id
    assert get_vertices(moved) == [(0, 0), (120, -20), (100, 100), (0, 100)]
    assert _bbox(moved) == (0, -20, 120, 120)


def test_circles_and_bad_indices_are_returned_unchanged():
    circle = Circle("c", 0.0, 0.0, 100.0, 100.0)
    assert transform_vertex(circle, 0, (5, 5)) is circle
    assert transform_vertex(RECT, 4, (5, 5)) is RECT
    assert transform_vertex(RECT, -1, (5, 5)) is RECT


def test_transformed_shapes_can_be_dragged_again():
    once = transform_vertex(RECT, 1, (120, -20))
    twice = transform_vertex(once, 3, (-10, 110))
    assert get_vertices(twice) == [(0, 0), (120, -20), (100, 100), (-10, 110)]
    assert _bbox(twice) == (-10, -20, 130, 130)


def test_constrained_rectangle_repairs_the_opposite_top_vertex():
    moved = transform_vertex(RECT, 1, (120, -20), constrained=True)
    assert get_vertices(moved) == [(20, -20), (120, -20), (100, 100), (0, 100)]
    assert is_horizontal_parallelogram(get_vertices(moved))


@pytest.mark.parametrize(
    "vertex_index, target",
    [(1, (80, 10)), (0, (10, 5)), (2, (130, 120)), (3, (-15, 90))],
)
def test_constrained_rectangle_keeps_horizontal_parallelogram(vertex_index, target):
    moved = transform_vertex(RECT, vertex_index, target, constrained=True)
    vertices = get_vertices(moved)
    assert vertices[vertex_index] == target
    v0, v1, v2, v3 = vertices
    assert v1.y == pytest.approx(v0.y, abs=1e-3)
    assert v2.y == pytest.approx(v3.y, abs=1e-3)
    assert abs(v1.x - v0.x) == pytest.approx(abs(v2.x - v3.x), abs=1e-3)
    assert abs(v1.x - v0.x) >= 10
    assert abs(v0.y - v3.y) >= 10


def test_constrained_rectangle_falls_back_when_no_repair_is_valid():
    moved = transform_vertex(RECT, 1, (100, 95), constrained=True)
    assert get_vertices(moved) == [(0, 0), (100, 95), (100, 100), (0, 100)]


def test_repair_rejects_flat_results():
    base = [Point2D(0, 0), Point2D(100, 95), Point2D(100, 100), Point2D(0, 100)]
    assert repair_parallelogram(base, 0) is None
    assert parallelogram_candidates(get_vertices(RECT), 1, (100, 95)) == []


def test_constrained_triangle_right_angle_at_dragged_vertex():
    moved = transform_vertex(TRI, 0, (50, -5), constrained=True)
    assert isinstance(moved, TransformedTriangle)
    apex, left, right = get_vertices(moved)
    assert apex == pytest.approx((50.0, 0.0))
    assert angle_between(apex, left, right) == pytest.approx(90.0)


def test_constrained_triangle_right_angle_at_fixed_vertex():
    moved = transform_vertex(TRI, 0, (5, 10), constrained=True)
    apex, left, right = get_vertices(moved)
    assert apex == pytest.approx((0.0, 10.0))
    assert angle_between(left, apex, right) == pytest.approx(90.0)
    assert _bbox(moved) == pytest.approx((0.0, 10.0, 100.0, 40.0))


def test_right_angle_position_falls_back_to_cursor():
    degenerate = [Point2D(0, 0), Point2D(10, 10), Point2D(10, 10)]
    assert find_right_angle_position(degenerate, 0, (3, 4)) == (3, 4)
