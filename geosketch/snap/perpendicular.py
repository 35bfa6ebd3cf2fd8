"""Right-angle aware snapping for the end of an in-progress line.

Two mechanisms live here.  *Correction* kicks in when the cursor already sits
on an edge or line and the drawn segment is nearly perpendicular to it: the
end point is pulled onto the exact perpendicular foot.  *Preview* searches
every line and edge for a perpendicular foot reachable from the line start,
so the user sees the right-angle option before reaching the target.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from .. import config
from ..constants import CIRCLE_SEGMENTS
from ..kernel import (
    PerpendicularInfo,
    closest_point_on_segment,
    distance,
    is_perpendicular,
    perpendicular_snap_info,
    project_point_on_line,
)
from ..shapes import get_edges
from ..types import LineSegment, Point2D, Segment, Shape, as_point
from .basic import nearest_line_point, nearest_shape_edge_point
from .model import PerpendicularSnap, SnapResult

logger = logging.getLogger(__name__)


def _chord_sagitta(shape: Shape) -> float:
    radius = max(shape.width, shape.height) / 2.0
    return radius * (1.0 - math.cos(math.pi / CIRCLE_SEGMENTS))


def edge_containing(
    point: Point2D, shape: Shape, tolerance: Optional[float] = None
) -> Optional[Segment]:
    """Return the edge of ``shape`` that ``point`` lies on, if any.

    For circles the edges are the chords of the sampled ellipse.  Points on
    the true outline sit up to one chord sagitta away from their chord, so
    circles widen the tolerance by that amount.
    """

    tol = config.resolve(tolerance, "edge_membership_tolerance")
    if shape.kind == "circle":
        tol += _chord_sagitta(shape)
    best: Optional[Segment] = None
    best_dist = tol
    for edge in get_edges(shape):
        dist = distance(point, closest_point_on_segment(point, edge.start, edge.end))
        if dist <= best_dist:
            best = edge
            best_dist = dist
    return best


def find_snap_with_perpendicular_correction(
    cursor: Sequence[float],
    shapes: Sequence[Shape],
    lines: Sequence[LineSegment],
    line_start: Sequence[float],
    tolerance: Optional[float] = None,
) -> Optional[SnapResult]:
    """Edge/line snap that straightens to the perpendicular foot when close.

    Shape edges take precedence over lines.  Returns ``None`` when the cursor
    is near neither.
    """

    cursor = as_point(cursor)
    line_start = as_point(line_start)
    tol = config.resolve(tolerance, "snap_tolerance")
    dot_tol = config.current().perpendicular_dot_tolerance

    edge_hit = nearest_shape_edge_point(cursor, shapes, tol)
    if edge_hit is not None:
        edge_point, shape = edge_hit
        edge = edge_containing(edge_point, shape)
        if edge is not None and is_perpendicular(line_start, edge_point, edge.start, edge.end, dot_tol):
            _, foot = project_point_on_line(line_start, edge.start, edge.end)
            logger.debug("perpendicular correction onto edge of %s at (%.2f, %.2f)", shape.id, foot.x, foot.y)
            return SnapResult(
                point=foot,
                type="edge",
                reference=shape.id,
                is_perpendicular=True,
                edge_info=edge,
            )
        return SnapResult(point=edge_point, type="edge", reference=shape.id)

    line_hit = nearest_line_point(cursor, lines, tol)
    if line_hit is not None:
        line_point, line = line_hit
        if is_perpendicular(line_start, line_point, line.start_point, line.end_point, dot_tol):
            _, foot = project_point_on_line(line_start, line.start_point, line.end_point)
            logger.debug("perpendicular correction onto line %s at (%.2f, %.2f)", line.id, foot.x, foot.y)
            return SnapResult(
                point=foot,
                type="line",
                reference=line.id,
                is_perpendicular=True,
                edge_info=line.segment,
            )
        return SnapResult(point=line_point, type="line", reference=line.id)

    return None


def _accept_preview(source: Point2D, target: Segment) -> Optional[PerpendicularInfo]:
    cfg = config.current()
    info = perpendicular_snap_info(source, target.start, target.end)
    if info.distance_to_segment > cfg.perpendicular_segment_slack:
        return None
    if not cfg.perpendicular_preview_min <= info.distance <= cfg.perpendicular_preview_max:
        return None
    return info


def find_perpendicular_to_lines(
    source: Sequence[float], lines: Sequence[LineSegment]
) -> Optional[PerpendicularSnap]:
    source = as_point(source)
    best: Optional[PerpendicularSnap] = None
    for line in lines:
        candidate = _accept_preview(source, line.segment)
        if candidate is None:
            continue
        if best is None or candidate.distance < best.distance:
            best = PerpendicularSnap(
                point=candidate.foot,
                target_type="line",
                target_id=line.id,
                target=line.segment,
                source=source,
                distance=candidate.distance,
            )
    return best


def find_perpendicular_to_edges(
    source: Sequence[float], shapes: Sequence[Shape]
) -> Optional[PerpendicularSnap]:
    source = as_point(source)
    best: Optional[PerpendicularSnap] = None
    for shape in shapes:
        for edge in get_edges(shape):
            candidate = _accept_preview(source, edge)
            if candidate is None:
                continue
            if best is None or candidate.distance < best.distance:
                best = PerpendicularSnap(
                    point=candidate.foot,
                    target_type="edge",
                    target_id=shape.id,
                    target=edge,
                    source=source,
                    distance=candidate.distance,
                )
    return best


def find_perpendicular_preview(
    source: Sequence[float], shapes: Sequence[Shape], lines: Sequence[LineSegment]
) -> Optional[PerpendicularSnap]:
    """Closest admissible perpendicular foot from ``source`` on any line or edge."""

    to_line = find_perpendicular_to_lines(source, lines)
    to_edge = find_perpendicular_to_edges(source, shapes)
    if to_line is None:
        return to_edge
    if to_edge is None:
        return to_line
    return to_line if to_line.distance <= to_edge.distance else to_edge


def find_perpendicular_snap_target(
    line_start: Sequence[float], shapes: Sequence[Shape], lines: Sequence[LineSegment]
) -> Optional[SnapResult]:
    preview = find_perpendicular_preview(line_start, shapes, lines)
    if preview is None:
        return None
    return SnapResult(
        point=preview.point,
        type=preview.target_type,
        reference=preview.target_id,
        is_perpendicular_preview=True,
        edge_info=preview.target,
    )


__all__ = [
    "edge_containing",
    "find_perpendicular_preview",
    "find_perpendicular_snap_target",
    "find_perpendicular_to_edges",
    "find_perpendicular_to_lines",
    "find_snap_with_perpendicular_correction",
]
