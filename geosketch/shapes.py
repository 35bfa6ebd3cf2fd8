"""Shape model: canonical vertices, edges, snap points and factories."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from . import config
from .constants import CIRCLE_SEGMENTS
from .ids import new_id
from .kernel import (
    closest_point_on_segment,
    distance,
    ellipse_chords,
    point_on_ellipse,
    polygon_centroid,
    vertex_mean,
)
from .types import (
    Circle,
    Point2D,
    PointKind,
    Rectangle,
    Segment,
    Shape,
    ShapeKind,
    ShapeKindError,
    TransformedRectangle,
    TransformedShape,
    TransformedTriangle,
    Triangle,
)

logger = logging.getLogger(__name__)

_TRANSFORMED_TYPES = (TransformedTriangle, TransformedRectangle)


class SnapPoint(NamedTuple):
    point: Point2D
    type: PointKind
    vertex_index: Optional[int] = None


class ShapeSnapPoint(NamedTuple):
    point: Point2D
    type: PointKind
    shape_id: str
    vertex_index: Optional[int] = None


def is_transformed(shape: Shape) -> bool:
    return isinstance(shape, _TRANSFORMED_TYPES)


def is_transformable(shape: Shape) -> bool:
    return shape.kind in ("triangle", "rectangle")


def equilateral_height(side: float) -> float:
    return side * math.sqrt(3.0) / 2.0


def triangle_vertices(x: float, y: float, width: float, height: float) -> List[Point2D]:
    """Apex-up triangle inscribed in the box; square boxes give an equilateral one."""

    if width == height:
        tri_height = equilateral_height(width)
        top = y + (height - tri_height) / 2.0
        bottom = top + tri_height
        return [
            Point2D(x + width / 2.0, top),
            Point2D(x, bottom),
            Point2D(x + width, bottom),
        ]
    return [
        Point2D(x + width / 2.0, y),
        Point2D(x, y + height),
        Point2D(x + width, y + height),
    ]


def rectangle_vertices(x: float, y: float, width: float, height: float) -> List[Point2D]:
    return [
        Point2D(x, y),
        Point2D(x + width, y),
        Point2D(x + width, y + height),
        Point2D(x, y + height),
    ]


def get_vertices(shape: Shape) -> List[Point2D]:
    """Return the ordered polygon vertices of ``shape`` (empty for circles)."""

    if isinstance(shape, _TRANSFORMED_TYPES):
        return list(shape.vertices)
    if isinstance(shape, Rectangle):
        return rectangle_vertices(shape.x, shape.y, shape.width, shape.height)
    if isinstance(shape, Triangle):
        return triangle_vertices(shape.x, shape.y, shape.width, shape.height)
    return []


def shape_center(shape: Shape) -> Point2D:
    return Point2D(shape.x + shape.width / 2.0, shape.y + shape.height / 2.0)


def shape_centroid(shape: Shape) -> Point2D:
    """Centroid used for ``center`` points.

    Triangles use the area-weighted centroid, rectangles the vertex mean and
    circles their bounding-box centre.
    """

    if shape.kind == "triangle":
        return polygon_centroid(get_vertices(shape))
    if shape.kind == "rectangle":
        return vertex_mean(get_vertices(shape))
    return shape_center(shape)


def _circle_edges(shape: Shape) -> List[Segment]:
    center = shape_center(shape)
    samples = ellipse_chords(center, shape.width / 2.0, shape.height / 2.0, CIRCLE_SEGMENTS)
    edges: List[Segment] = []
    for idx in range(CIRCLE_SEGMENTS):
        start = Point2D(float(samples[idx][0]), float(samples[idx][1]))
        end = Point2D(float(samples[idx + 1][0]), float(samples[idx + 1][1]))
        edges.append(Segment(start, end))
    return edges


def polygon_edges(vertices: Sequence[Point2D]) -> List[Segment]:
    count = len(vertices)
    if count < 2:
        return []
    return [Segment(vertices[i], vertices[(i + 1) % count]) for i in range(count)]


def get_edges(shape: Shape) -> List[Segment]:
    if shape.kind == "circle":
        return _circle_edges(shape)
    return polygon_edges(get_vertices(shape))


def get_snap_points(shape: Shape) -> List[SnapPoint]:
    """Return the centre followed by the vertices (quadrant points for circles)."""

    if shape.kind == "circle":
        center = shape_center(shape)
        return [
            SnapPoint(center, "center"),
            SnapPoint(Point2D(center.x, shape.y), "vertex", 0),
            SnapPoint(Point2D(center.x, shape.y + shape.height), "vertex", 1),
            SnapPoint(Point2D(shape.x, center.y), "vertex", 2),
            SnapPoint(Point2D(shape.x + shape.width, center.y), "vertex", 3),
        ]
    snaps = [SnapPoint(shape_centroid(shape), "center")]
    for idx, vertex in enumerate(get_vertices(shape)):
        snaps.append(SnapPoint(vertex, "vertex", idx))
    return snaps


def find_nearest_snap_point(
    cursor: Sequence[float],
    shapes: Iterable[Shape],
    tolerance: Optional[float] = None,
) -> Optional[ShapeSnapPoint]:
    """Return the nearest centre/vertex of any shape within ``tolerance``."""

    best: Optional[ShapeSnapPoint] = None
    best_dist = config.resolve(tolerance, "snap_tolerance")
    for shape in shapes:
        for snap in get_snap_points(shape):
            dist = distance(cursor, snap.point)
            if dist <= best_dist:
                best = ShapeSnapPoint(snap.point, snap.type, shape.id, snap.vertex_index)
                best_dist = dist
    return best


def closest_point_on_edges(
    cursor: Sequence[float], edges: Iterable[Segment], tolerance: float
) -> Optional[Tuple[Point2D, int, float]]:
    """Return ``(point, edge_index, distance)`` of the nearest edge within ``tolerance``.

    A cursor exactly ``tolerance`` away is not a hit.
    """

    best: Optional[Tuple[Point2D, int, float]] = None
    best_dist = tolerance
    for idx, edge in enumerate(edges):
        candidate = closest_point_on_segment(cursor, edge.start, edge.end)
        dist = distance(cursor, candidate)
        if dist < best_dist:
            best = (candidate, idx, dist)
            best_dist = dist
    return best


def closest_point_on_shape_edge(
    cursor: Sequence[float], shape: Shape, tolerance: Optional[float] = None
) -> Optional[Point2D]:
    """Return the outline point of ``shape`` nearest ``cursor`` within ``tolerance``.

    Circles are treated as ellipses: the cursor must lie within ``tolerance``
    of the mean radius and the result is the ellipse point in its direction.
    """

    tol = config.resolve(tolerance, "edge_tolerance")
    if shape.kind == "circle":
        center = shape_center(shape)
        radius_x = shape.width / 2.0
        radius_y = shape.height / 2.0
        avg_radius = (radius_x + radius_y) / 2.0
        if abs(distance(cursor, center) - avg_radius) <= tol:
            return point_on_ellipse(center, radius_x, radius_y, cursor)
        return None
    hit = closest_point_on_edges(cursor, get_edges(shape), tol)
    return hit[0] if hit is not None else None


def label_position(point: Sequence[float], shape: Shape, offset: float = 15.0) -> Point2D:
    """Place a point label ``offset`` units away from the shape's centre."""

    center = shape_center(shape)
    dx = float(point[0]) - center.x
    dy = float(point[1]) - center.y
    length = math.hypot(dx, dy)
    if length == 0.0:
        return Point2D(float(point[0]), float(point[1]) - offset)
    return Point2D(float(point[0]) + dx / length * offset, float(point[1]) + dy / length * offset)


def bounding_box(vertices: Sequence[Point2D], min_size: Optional[float] = None) -> Tuple[float, float, float, float]:
    """Return ``(x, y, width, height)`` of ``vertices`` with each side floored."""

    floor = config.resolve(min_size, "min_shape_size")
    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return min_x, min_y, max(max_x - min_x, floor), max(max_y - min_y, floor)


def make_transformed(shape: Shape, vertices: Sequence[Sequence[float]]) -> TransformedShape:
    """Build the explicit-vertex variant of ``shape`` with a fresh bounding box."""

    pts = tuple(Point2D(float(v[0]), float(v[1])) for v in vertices)
    x, y, width, height = bounding_box(pts)
    if shape.kind == "triangle":
        if len(pts) != 3:
            raise ValueError(f"triangle needs 3 vertices, got {len(pts)}")
        return TransformedTriangle(shape.id, x, y, width, height, pts)  # type: ignore[arg-type]
    if shape.kind == "rectangle":
        if len(pts) != 4:
            raise ValueError(f"rectangle needs 4 vertices, got {len(pts)}")
        return TransformedRectangle(shape.id, x, y, width, height, pts)  # type: ignore[arg-type]
    raise ShapeKindError(f"{shape.kind} shapes cannot carry explicit vertices")


def regular_shape_end(start: Sequence[float], current: Sequence[float]) -> Point2D:
    """Square the drag ``start -> current`` along its shorter side."""

    dx = float(current[0]) - float(start[0])
    dy = float(current[1]) - float(start[1])
    size = min(abs(dx), abs(dy))
    return Point2D(
        float(start[0]) + (size if dx >= 0 else -size),
        float(start[1]) + (size if dy >= 0 else -size),
    )


def create_shape(
    start: Sequence[float],
    end: Sequence[float],
    kind: ShapeKind,
    *,
    regular: bool = False,
    min_size: Optional[float] = None,
    shape_id: Optional[str] = None,
) -> Optional[Shape]:
    """Create a shape from a drag gesture.

    Returns ``None`` when either side of the box is under ``min_size``.
    """

    if kind not in ("circle", "triangle", "rectangle"):
        raise ShapeKindError(f"unknown shape kind {kind!r}")
    if regular:
        end = regular_shape_end(start, end)
    x = min(float(start[0]), float(end[0]))
    y = min(float(start[1]), float(end[1]))
    width = abs(float(end[0]) - float(start[0]))
    height = abs(float(end[1]) - float(start[1]))
    floor = config.resolve(min_size, "min_shape_size")
    if width < floor or height < floor:
        logger.debug("create_shape: %s drag %.2fx%.2f under minimum %.2f", kind, width, height, floor)
        return None
    ident = shape_id or new_id("shape")
    if kind == "circle":
        return Circle(ident, x, y, width, height)
    if kind == "triangle":
        return Triangle(ident, x, y, width, height)
    return Rectangle(ident, x, y, width, height)


__all__ = [
    "ShapeSnapPoint",
    "SnapPoint",
    "bounding_box",
    "closest_point_on_edges",
    "closest_point_on_shape_edge",
    "create_shape",
    "equilateral_height",
    "find_nearest_snap_point",
    "get_edges",
    "get_snap_points",
    "get_vertices",
    "is_transformable",
    "is_transformed",
    "label_position",
    "make_transformed",
    "polygon_edges",
    "rectangle_vertices",
    "regular_shape_end",
    "shape_center",
    "shape_centroid",
    "triangle_vertices",
]
