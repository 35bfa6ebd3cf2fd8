"""Top-level snap resolution for every cursor move."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .. import config
from ..logging_utils import apply_debug_logging
from ..types import GeometryPoint, LineSegment, Shape, as_point
from .basic import find_basic_snap_target
from .model import SnapResult
from .perpendicular import find_perpendicular_snap_target, find_snap_with_perpendicular_correction
from .point_to_point import find_point_to_point_snap

logger = logging.getLogger(__name__)


def resolve_snap(
    cursor: Sequence[float],
    shapes: Sequence[Shape],
    points: Sequence[GeometryPoint],
    lines: Sequence[LineSegment],
    line_start: Optional[Sequence[float]] = None,
    tolerance: Optional[float] = None,
) -> SnapResult:
    """Decide what ``cursor`` attaches to.

    Without ``line_start`` this is the basic resolver.  With it, the
    following are tried first, in order: point-to-point, perpendicular
    correction on an edge/line under the cursor, and the perpendicular
    preview from ``line_start``.
    """

    cursor = as_point(cursor)
    tol = config.resolve(tolerance, "snap_tolerance")

    if line_start is not None:
        start = as_point(line_start)

        direct = find_point_to_point_snap(start, cursor, points, shapes)
        if direct is not None:
            return SnapResult(
                point=direct.point,
                type=direct.type,
                reference=direct.reference,
                vertex_index=direct.vertex_index,
                is_point_to_point=True,
            )

        corrected = find_snap_with_perpendicular_correction(cursor, shapes, lines, start, tol)
        if corrected is not None:
            return corrected

        preview = find_perpendicular_snap_target(start, shapes, lines)
        if preview is not None:
            return preview

    return find_basic_snap_target(cursor, shapes, points, lines, tol)


def resolve_line_start(
    cursor: Sequence[float],
    shapes: Sequence[Shape],
    points: Sequence[GeometryPoint],
    lines: Sequence[LineSegment],
    tolerance: Optional[float] = None,
) -> Optional[SnapResult]:
    """Return the snap a line may start from, or ``None`` if the cursor is not on an anchor."""

    result = resolve_snap(cursor, shapes, points, lines, None, tolerance)
    if not result.is_anchor:
        logger.debug("line start rejected: cursor resolved to %s", result.type)
        return None
    return result


apply_debug_logging(globals(), logger=logger)


__all__ = ["resolve_line_start", "resolve_snap"]
