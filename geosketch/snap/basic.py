"""Baseline snapping: points, shape vertices/centres, edges, lines, free space."""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Sequence, Tuple

from .. import config
from ..kernel import closest_point_on_segment, distance
from ..shapes import closest_point_on_shape_edge, find_nearest_snap_point
from ..types import GeometryPoint, LineSegment, Point2D, PointKind, Shape, as_point
from .model import SnapResult, free

logger = logging.getLogger(__name__)


class PointPlacement(NamedTuple):
    point: Point2D
    shape_id: str
    type: PointKind
    vertex_index: Optional[int] = None


def nearest_existing_point(
    cursor: Point2D, points: Sequence[GeometryPoint], tolerance: float
) -> Optional[Tuple[GeometryPoint, float]]:
    best: Optional[Tuple[GeometryPoint, float]] = None
    best_dist = tolerance
    for point in points:
        dist = distance(cursor, point.position)
        if dist <= best_dist:
            best = (point, dist)
            best_dist = dist
    return best


def nearest_shape_edge_point(
    cursor: Point2D, shapes: Sequence[Shape], tolerance: float
) -> Optional[Tuple[Point2D, Shape]]:
    """Return the outline point nearest ``cursor`` over all shapes."""

    best: Optional[Tuple[Point2D, Shape]] = None
    best_dist = tolerance
    for shape in shapes:
        edge_point = closest_point_on_shape_edge(cursor, shape, tolerance)
        if edge_point is None:
            continue
        dist = distance(cursor, edge_point)
        if dist <= best_dist:
            best = (edge_point, shape)
            best_dist = dist
    return best


def nearest_line_point(
    cursor: Point2D, lines: Sequence[LineSegment], tolerance: float
) -> Optional[Tuple[Point2D, LineSegment]]:
    best: Optional[Tuple[Point2D, LineSegment]] = None
    best_dist = tolerance
    for line in lines:
        candidate = closest_point_on_segment(cursor, line.start_point, line.end_point)
        dist = distance(cursor, candidate)
        if dist <= best_dist:
            best = (candidate, line)
            best_dist = dist
    return best


def find_basic_snap_target(
    cursor: Sequence[float],
    shapes: Sequence[Shape],
    points: Sequence[GeometryPoint],
    lines: Sequence[LineSegment],
    tolerance: Optional[float] = None,
) -> SnapResult:
    """Resolve ``cursor`` against the scene without any line-drawing context.

    Order: existing point, shape vertex/centre, shape edge, line, free.
    """

    cursor = as_point(cursor)
    tol = config.resolve(tolerance, "snap_tolerance")

    hit_point = nearest_existing_point(cursor, points, tol)
    if hit_point is not None:
        point, _ = hit_point
        return SnapResult(
            point=point.position,
            type="point",
            reference=point.id,
            vertex_index=point.vertex_index,
        )

    snap = find_nearest_snap_point(cursor, shapes, tol)
    if snap is not None:
        return SnapResult(
            point=snap.point,
            type=snap.type,
            reference=snap.shape_id,
            vertex_index=snap.vertex_index,
        )

    edge_hit = nearest_shape_edge_point(cursor, shapes, tol)
    if edge_hit is not None:
        edge_point, shape = edge_hit
        return SnapResult(point=edge_point, type="edge", reference=shape.id)

    line_hit = nearest_line_point(cursor, lines, tol)
    if line_hit is not None:
        line_point, line = line_hit
        return SnapResult(point=line_point, type="line", reference=line.id)

    return free(cursor)


def find_point_placement(
    cursor: Sequence[float],
    shapes: Sequence[Shape],
    *,
    snap_tolerance: Optional[float] = None,
    edge_tolerance: Optional[float] = None,
) -> Optional[PointPlacement]:
    """Where the point tool would drop a point, or ``None`` off every shape."""

    cursor = as_point(cursor)
    snap = find_nearest_snap_point(cursor, shapes, config.resolve(snap_tolerance, "snap_tolerance"))
    if snap is not None:
        return PointPlacement(snap.point, snap.shape_id, snap.type, snap.vertex_index)

    edge_tol = config.resolve(edge_tolerance, "edge_tolerance")
    for shape in shapes:
        edge_point = closest_point_on_shape_edge(cursor, shape, edge_tol)
        if edge_point is not None:
            return PointPlacement(edge_point, shape.id, "edge")
    return None


__all__ = [
    "PointPlacement",
    "find_basic_snap_target",
    "find_point_placement",
    "nearest_existing_point",
    "nearest_line_point",
    "nearest_shape_edge_point",
]
