"""Keep points, lines and angles anchored to a shape in step with its vertices.

Edge-anchored positions are stored implicitly: the nearest original edge and
the fractional distance along it are recomputed from the position and
re-evaluated on the transformed edge with the same index.  Triangle centre
points keep their barycentric coordinates.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from . import config
from .kernel import (
    angle_between,
    barycentric,
    barycentric_to_point,
    closest_point_on_segment,
    distance,
    lerp,
)
from .measure import orient_from
from .shapes import get_vertices, shape_centroid
from .types import Angle, EndpointKind, GeometryPoint, LineSegment, Point2D, Shape

logger = logging.getLogger(__name__)


class EdgeRatio(NamedTuple):
    edge_index: int
    ratio: float


class PropagationResult(NamedTuple):
    points: List[GeometryPoint]
    lines: List[LineSegment]
    angles: List[Angle]
    moved_point_ids: Tuple[str, ...]


def relative_position_on_shape(position: Sequence[float], shape: Shape) -> Optional[EdgeRatio]:
    """Locate ``position`` on the nearest edge of ``shape`` as an :class:`EdgeRatio`.

    Returns ``None`` for circles and for a degenerate nearest edge.
    """

    vertices = get_vertices(shape)
    count = len(vertices)
    if count == 0:
        return None

    best_index = 0
    best_dist = float("inf")
    best_on_edge: Optional[Point2D] = None
    for idx in range(count):
        on_edge = closest_point_on_segment(position, vertices[idx], vertices[(idx + 1) % count])
        dist = distance(position, on_edge)
        if dist < best_dist:
            best_index, best_dist, best_on_edge = idx, dist, on_edge

    start = vertices[best_index]
    end = vertices[(best_index + 1) % count]
    length = distance(start, end)
    if best_on_edge is None or length == 0.0:
        return None
    ratio = distance(start, best_on_edge) / length
    return EdgeRatio(best_index, min(max(ratio, 0.0), 1.0))


def position_from_relative(relative: EdgeRatio, shape: Shape) -> Optional[Point2D]:
    vertices = get_vertices(shape)
    if relative.edge_index >= len(vertices):
        return None
    start = vertices[relative.edge_index]
    end = vertices[(relative.edge_index + 1) % len(vertices)]
    return lerp(start, end, relative.ratio)


def transformed_edge_position(
    position: Sequence[float], original: Shape, transformed: Shape
) -> Optional[Point2D]:
    if len(get_vertices(original)) != len(get_vertices(transformed)):
        return None
    relative = relative_position_on_shape(position, original)
    if relative is None:
        return None
    return position_from_relative(relative, transformed)


def transformed_center_position(
    position: Sequence[float], original: Shape, transformed: Shape
) -> Point2D:
    """Triangles keep the barycentric weights of ``position``; anything else uses the centroid."""

    if transformed.kind == "triangle":
        before = get_vertices(original)
        after = get_vertices(transformed)
        if len(before) == 3 and len(after) == 3:
            coeffs = barycentric(position, *before)
            if coeffs is not None:
                return barycentric_to_point(coeffs, *after)
            logger.debug("centre of %s has no barycentric form, using centroid", original.id)
    return shape_centroid(transformed)


def transformed_vertex_position(
    position: Sequence[float], original: Shape, transformed: Shape, vertex_index: Optional[int] = None
) -> Optional[Point2D]:
    after = get_vertices(transformed)
    if vertex_index is None:
        before = get_vertices(original)
        if not before:
            return None
        vertex_index = min(range(len(before)), key=lambda idx: distance(position, before[idx]))
    if not 0 <= vertex_index < len(after):
        return None
    return after[vertex_index]


def transformed_point_position(
    point: GeometryPoint, original: Shape, transformed: Shape
) -> Optional[Point2D]:
    """New position of ``point`` after ``original`` became ``transformed``.

    ``None`` means the point stays where it is.
    """

    if point.shape_id != original.id:
        return None
    if point.type == "center":
        return transformed_center_position(point.position, original, transformed)
    if point.type == "vertex":
        if point.vertex_index is None:
            return None
        return transformed_vertex_position(point.position, original, transformed, point.vertex_index)
    if point.type == "edge":
        return transformed_edge_position(point.position, original, transformed)
    return None


def _endpoint_position(
    position: Point2D,
    kind: EndpointKind,
    reference: Optional[str],
    original: Shape,
    transformed: Shape,
    moved: Dict[str, Point2D],
) -> Optional[Point2D]:
    if reference is None:
        return None
    if reference == original.id:
        if kind == "edge":
            return transformed_edge_position(position, original, transformed)
        if kind == "vertex":
            return transformed_vertex_position(position, original, transformed)
        if kind == "center":
            return transformed_center_position(position, original, transformed)
        return None
    if kind in ("point", "vertex", "center"):
        return moved.get(reference)
    return None


def transformed_line(
    line: LineSegment,
    original: Shape,
    transformed: Shape,
    moved: Optional[Dict[str, Point2D]] = None,
) -> Optional[LineSegment]:
    """Return ``line`` with re-anchored endpoints, or ``None`` when nothing moves."""

    moved = moved or {}
    new_start = _endpoint_position(
        line.start_point, line.start_type, line.start_reference, original, transformed, moved
    )
    new_end = _endpoint_position(
        line.end_point, line.end_type, line.end_reference, original, transformed, moved
    )
    if new_start is None and new_end is None:
        return None
    return dataclasses.replace(
        line,
        start_point=new_start if new_start is not None else line.start_point,
        end_point=new_end if new_end is not None else line.end_point,
    )


def _transformed_angle(
    angle: Angle,
    vertex_by_owner: Dict[Tuple[str, str], Point2D],
    lines_by_id: Dict[str, LineSegment],
) -> Optional[Angle]:
    if angle.shape_id is None or angle.vertex_label is None:
        return None
    new_vertex = vertex_by_owner.get((angle.shape_id, angle.vertex_label))
    if new_vertex is None:
        return None
    lines = tuple(
        orient_from(lines_by_id.get(line.id, line), new_vertex) for line in angle.lines
    )
    value = angle.value
    if config.current().recompute_angles_on_transform:
        recomputed = angle_between(new_vertex, lines[0].end_point, lines[1].end_point)
        if recomputed is not None:
            value = recomputed
    return dataclasses.replace(angle, vertex=new_vertex, lines=lines, value=value)


def propagate(
    original: Shape,
    transformed: Shape,
    points: Iterable[GeometryPoint],
    lines: Iterable[LineSegment],
    angles: Iterable[Angle] = (),
) -> PropagationResult:
    """Carry dependants of ``original`` over to ``transformed``.

    Inputs are never mutated; the result holds fresh lists in input order.
    """

    new_points: List[GeometryPoint] = []
    moved: Dict[str, Point2D] = {}
    vertex_by_owner: Dict[Tuple[str, str], Point2D] = {}
    for point in points:
        position = transformed_point_position(point, original, transformed)
        if position is None:
            new_points.append(point)
            continue
        moved[point.id] = position
        vertex_by_owner[(point.shape_id, point.label)] = position
        new_points.append(dataclasses.replace(point, position=position))

    new_lines: List[LineSegment] = []
    lines_by_id: Dict[str, LineSegment] = {}
    for line in lines:
        updated = transformed_line(line, original, transformed, moved)
        if updated is not None:
            lines_by_id[line.id] = updated
            new_lines.append(updated)
        else:
            new_lines.append(line)

    new_angles: List[Angle] = []
    for angle in angles:
        updated_angle = _transformed_angle(angle, vertex_by_owner, lines_by_id)
        new_angles.append(updated_angle if updated_angle is not None else angle)

    logger.debug(
        "propagated %s: %d point(s) moved, %d line(s) re-anchored",
        original.id,
        len(moved),
        len(lines_by_id),
    )
    return PropagationResult(new_points, new_lines, new_angles, tuple(moved))


__all__ = [
    "EdgeRatio",
    "PropagationResult",
    "position_from_relative",
    "propagate",
    "relative_position_on_shape",
    "transformed_center_position",
    "transformed_edge_position",
    "transformed_line",
    "transformed_point_position",
    "transformed_vertex_position",
]
