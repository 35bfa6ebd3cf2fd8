"""Length and angle measurement between line segments."""

from __future__ import annotations

import dataclasses
import logging
from typing import NamedTuple, Optional, Sequence

from . import config
from .constants import EXACT_VERTEX_TOLERANCE
from .ids import new_id
from .kernel import angle_between, distance, midpoint
from .types import Angle, GeometryPoint, LengthMeasurement, LineSegment, Point2D

logger = logging.getLogger(__name__)


class CommonVertex(NamedTuple):
    vertex: Point2D
    line1: LineSegment
    line2: LineSegment


def orient_from(line: LineSegment, vertex: Sequence[float]) -> LineSegment:
    """Return ``line`` with its endpoint nearest ``vertex`` as the start.

    Endpoint metadata (type, reference) travels with the coordinates.
    """

    if distance(line.start_point, vertex) <= distance(line.end_point, vertex):
        return line
    return dataclasses.replace(
        line,
        start_point=line.end_point,
        end_point=line.start_point,
        start_type=line.end_type,
        end_type=line.start_type,
        start_reference=line.end_reference,
        end_reference=line.start_reference,
    )


def find_common_vertex(
    line1: LineSegment, line2: LineSegment, tolerance: Optional[float] = None
) -> Optional[CommonVertex]:
    """Find where two lines meet, returning both lines oriented away from it.

    Exact coincidence (within 1e-6) is tried first; otherwise the closest pair
    of endpoints within ``tolerance`` is used and the vertex is the point on
    ``line1``.
    """

    tol = config.resolve(tolerance, "common_vertex_tolerance")
    pairs = [
        (a, b)
        for a in (line1.start_point, line1.end_point)
        for b in (line2.start_point, line2.end_point)
    ]

    for a, b in pairs:
        if distance(a, b) <= EXACT_VERTEX_TOLERANCE:
            return CommonVertex(a, orient_from(line1, a), orient_from(line2, b))

    a, b = min(pairs, key=lambda pair: distance(*pair))
    if distance(a, b) > tol:
        return None
    return CommonVertex(a, orient_from(line1, a), orient_from(line2, b))


def compute_angle(
    line1: LineSegment,
    line2: LineSegment,
    points: Sequence[GeometryPoint] = (),
    tolerance: Optional[float] = None,
) -> Optional[Angle]:
    """Build the :class:`Angle` between two lines, or ``None`` if they do not meet.

    When a point of ``points`` sits on the shared vertex its label and shape
    are recorded so shape transforms can refresh the vertex later.
    """

    common = find_common_vertex(line1, line2, tolerance)
    if common is None:
        logger.debug("no common vertex between %s and %s", line1.id, line2.id)
        return None
    value = angle_between(common.vertex, common.line1.end_point, common.line2.end_point)
    if value is None:
        logger.debug("zero-length arm at (%.2f, %.2f)", common.vertex.x, common.vertex.y)
        return None

    owner: Optional[GeometryPoint] = None
    hit_tol = config.current().coincident_tolerance
    for point in points:
        if distance(point.position, common.vertex) <= hit_tol:
            owner = point
            break

    return Angle(
        id=new_id("angle"),
        lines=(common.line1, common.line2),
        value=value,
        vertex=common.vertex,
        vertex_label=owner.label if owner is not None else None,
        shape_id=owner.shape_id if owner is not None else None,
    )


def format_length(value: float, template: Optional[str] = None) -> str:
    template = template if template is not None else config.current().length_label_format
    return template.format(value=value)


def measure_length(line: LineSegment) -> LengthMeasurement:
    value = distance(line.start_point, line.end_point)
    return LengthMeasurement(
        id=new_id("length"),
        line_id=line.id,
        value=value,
        label=format_length(value),
    )


def label_anchor(line: LineSegment) -> Point2D:
    """Where a length label is drawn: the midpoint of the line."""

    return midpoint(line.start_point, line.end_point)


__all__ = [
    "CommonVertex",
    "compute_angle",
    "find_common_vertex",
    "format_length",
    "label_anchor",
    "measure_length",
    "orient_from",
]
