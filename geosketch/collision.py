"""Hit testing used by the delete, angle and length tools.

Collections are ordered bottom to top, so every ``find_*_at`` helper scans
them in reverse and returns the topmost hit.
"""

from __future__ import annotations

from typing import Optional, Sequence

from . import config
from .kernel import distance, distance_to_segment, point_in_polygon
from .types import GeometryPoint, LineSegment, Shape, TransformedRectangle, TransformedTriangle


def point_in_shape(p: Sequence[float], shape: Shape) -> bool:
    """Containment test.

    Transformed polygons use ray casting; regular rectangles and triangles
    use their bounding box; circles the ellipse equation.
    """

    x, y = float(p[0]), float(p[1])
    if isinstance(shape, (TransformedTriangle, TransformedRectangle)):
        return point_in_polygon((x, y), shape.vertices)
    if shape.kind == "circle":
        radius_x = shape.width / 2.0
        radius_y = shape.height / 2.0
        if radius_x == 0.0 or radius_y == 0.0:
            return False
        dx = (x - (shape.x + radius_x)) / radius_x
        dy = (y - (shape.y + radius_y)) / radius_y
        return dx * dx + dy * dy <= 1.0
    return shape.x <= x <= shape.x + shape.width and shape.y <= y <= shape.y + shape.height


def distance_to_line(p: Sequence[float], line: LineSegment) -> float:
    return distance_to_segment(p, line.start_point, line.end_point)


def find_line_at(
    cursor: Sequence[float], lines: Sequence[LineSegment], tolerance: Optional[float] = None
) -> Optional[LineSegment]:
    tol = config.resolve(tolerance, "line_hit_tolerance")
    for line in reversed(lines):
        if distance_to_line(cursor, line) <= tol:
            return line
    return None


def find_point_at(
    cursor: Sequence[float], points: Sequence[GeometryPoint], tolerance: Optional[float] = None
) -> Optional[GeometryPoint]:
    tol = config.resolve(tolerance, "point_hit_tolerance")
    for point in reversed(points):
        if distance(cursor, point.position) <= tol:
            return point
    return None


def find_shape_at(cursor: Sequence[float], shapes: Sequence[Shape]) -> Optional[Shape]:
    for shape in reversed(shapes):
        if point_in_shape(cursor, shape):
            return shape
    return None


__all__ = [
    "distance_to_line",
    "find_line_at",
    "find_point_at",
    "find_shape_at",
    "point_in_shape",
]
