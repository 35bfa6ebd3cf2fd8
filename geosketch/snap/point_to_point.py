from __future__ import annotations

from typing import Optional, Sequence

from .. import config
from ..kernel import distance
from ..shapes import get_snap_points
from ..types import GeometryPoint, Point2D, Shape, as_point
from .model import PointToPointSnap


def is_valid_connection(
    source: Sequence[float], target: Sequence[float], tolerance: Optional[float] = None
) -> bool:
    """A line may not end on the point it started from."""

    return distance(source, target) > config.resolve(tolerance, "coincident_tolerance")


def find_point_to_point_snap(
    source: Sequence[float],
    cursor: Sequence[float],
    points: Sequence[GeometryPoint],
    shapes: Sequence[Shape],
    tolerance: Optional[float] = None,
    coincident_tolerance: Optional[float] = None,
) -> Optional[PointToPointSnap]:
    """Snap the end of an in-progress line onto a concrete point.

    Existing points are checked first and win ties against live shape
    centres/vertices at the same distance.
    """

    source = as_point(source)
    cursor = as_point(cursor)
    tol = config.resolve(tolerance, "point_to_point_tolerance")
    coincident = config.resolve(coincident_tolerance, "coincident_tolerance")

    best: Optional[PointToPointSnap] = None
    best_dist = tol

    for point in points:
        if not is_valid_connection(source, point.position, coincident):
            continue
        dist = distance(cursor, point.position)
        if dist <= best_dist:
            best = PointToPointSnap(
                point=point.position,
                type="point",
                reference=point.id,
                distance=dist,
                target_point=point,
                vertex_index=point.vertex_index,
            )
            best_dist = dist

    for shape in shapes:
        for snap in get_snap_points(shape):
            if not is_valid_connection(source, snap.point, coincident):
                continue
            dist = distance(cursor, snap.point)
            if dist < best_dist or (best is None and dist <= best_dist):
                best = PointToPointSnap(
                    point=Point2D(snap.point.x, snap.point.y),
                    type=snap.type,
                    reference=shape.id,
                    distance=dist,
                    vertex_index=snap.vertex_index,
                )
                best_dist = dist

    return best


__all__ = ["find_point_to_point_snap", "is_valid_connection"]
