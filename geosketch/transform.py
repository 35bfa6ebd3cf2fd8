"""Vertex dragging for triangles and rectangles.

A drag moves one vertex and yields a transformed shape whose bounding box is
recomputed from the vertices.  With ``constrained=True`` the move is
corrected so the result is either a right triangle or a parallelogram whose
top and bottom edges stay horizontal.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Sequence

from . import config
from .constants import PARALLELOGRAM_EPS
from .kernel import distance, midpoint
from .logging_utils import apply_debug_logging
from .shapes import get_vertices, is_transformable, make_transformed
from .types import Point2D, Shape, as_point

logger = logging.getLogger(__name__)

_COINCIDENT_EPS = 1e-9


class VertexHit(NamedTuple):
    vertex_index: int
    vertex: Point2D


class ParallelogramCandidate(NamedTuple):
    vertices: List[Point2D]
    adjusted_index: int


def find_nearest_vertex(
    cursor: Sequence[float], shape: Shape, tolerance: Optional[float] = None
) -> Optional[VertexHit]:
    best: Optional[VertexHit] = None
    best_dist = config.resolve(tolerance, "vertex_tolerance")
    for idx, vertex in enumerate(get_vertices(shape)):
        dist = distance(cursor, vertex)
        if dist <= best_dist:
            best = VertexHit(idx, vertex)
            best_dist = dist
    return best


def _right_angle_at(corner: Point2D, other: Point2D, cursor: Point2D) -> Optional[Point2D]:
    """Project ``cursor`` onto the line through ``corner`` perpendicular to ``corner-other``."""

    nx = -(other.y - corner.y)
    ny = other.x - corner.x
    len_sq = nx * nx + ny * ny
    if len_sq == 0.0:
        return None
    scale = ((cursor.x - corner.x) * nx + (cursor.y - corner.y) * ny) / len_sq
    return Point2D(corner.x + nx * scale, corner.y + ny * scale)


def _right_angle_at_dragged(a: Point2D, b: Point2D, cursor: Point2D) -> Optional[Point2D]:
    """Project ``cursor`` onto the Thales circle over ``a-b``."""

    center = midpoint(a, b)
    radius = distance(a, b) / 2.0
    reach = distance(cursor, center)
    if radius == 0.0 or reach == 0.0:
        return None
    return Point2D(
        center.x + (cursor.x - center.x) / reach * radius,
        center.y + (cursor.y - center.y) / reach * radius,
    )


def right_angle_candidates(
    vertices: Sequence[Point2D], vertex_index: int, cursor: Sequence[float]
) -> List[Point2D]:
    """Positions of the dragged vertex that put a right angle at some corner.

    Candidates that are uncomputable or collapse onto a fixed vertex are left
    out.
    """

    cursor = as_point(cursor)
    a = vertices[(vertex_index + 1) % 3]
    b = vertices[(vertex_index + 2) % 3]
    candidates: List[Point2D] = []
    for candidate in (
        _right_angle_at(a, b, cursor),
        _right_angle_at(b, a, cursor),
        _right_angle_at_dragged(a, b, cursor),
    ):
        if candidate is None:
            continue
        if distance(candidate, a) <= _COINCIDENT_EPS or distance(candidate, b) <= _COINCIDENT_EPS:
            continue
        candidates.append(candidate)
    return candidates


def find_right_angle_position(
    vertices: Sequence[Point2D], vertex_index: int, cursor: Sequence[float]
) -> Point2D:
    """Nearest right-angle position to ``cursor``; the cursor itself if none exists."""

    cursor = as_point(cursor)
    candidates = right_angle_candidates(vertices, vertex_index, cursor)
    if not candidates:
        logger.debug("no right-angle candidate for vertex %d, keeping cursor", vertex_index)
        return cursor
    best = min(candidates, key=lambda candidate: distance(candidate, cursor))
    logger.debug(
        "right-angle position for vertex %d: (%.2f, %.2f) out of %d candidate(s)",
        vertex_index,
        best.x,
        best.y,
        len(candidates),
    )
    return best


def is_horizontal_parallelogram(
    vertices: Sequence[Point2D], min_edge: Optional[float] = None
) -> bool:
    """Check the TL, TR, BR, BL quad has horizontal, equal top and bottom edges."""

    v0, v1, v2, v3 = vertices
    floor = config.resolve(min_edge, "min_parallelogram_edge")
    if abs(v1.y - v0.y) >= PARALLELOGRAM_EPS or abs(v2.y - v3.y) >= PARALLELOGRAM_EPS:
        return False
    top_width = abs(v1.x - v0.x)
    bottom_width = abs(v2.x - v3.x)
    if abs(top_width - bottom_width) > PARALLELOGRAM_EPS:
        return False
    return top_width >= floor and abs(v0.y - v3.y) >= floor


def repair_parallelogram(vertices: Sequence[Point2D], adjust_index: int) -> Optional[List[Point2D]]:
    """Move ``vertices[adjust_index]`` so the quad becomes a horizontal parallelogram."""

    v0, v1, v2, v3 = vertices
    repaired = list(vertices)
    if adjust_index == 0:
        repaired[0] = Point2D(v1.x - (v2.x - v3.x), v1.y)
    elif adjust_index == 1:
        repaired[1] = Point2D(v0.x + (v2.x - v3.x), v0.y)
    elif adjust_index == 2:
        repaired[2] = Point2D(v3.x + (v1.x - v0.x), v3.y)
    elif adjust_index == 3:
        repaired[3] = Point2D(v2.x - (v1.x - v0.x), v2.y)
    else:
        return None
    if not is_horizontal_parallelogram(repaired):
        return None
    return repaired


def parallelogram_candidates(
    vertices: Sequence[Point2D], vertex_index: int, cursor: Sequence[float]
) -> List[ParallelogramCandidate]:
    base = list(vertices)
    base[vertex_index] = as_point(cursor)
    candidates: List[ParallelogramCandidate] = []
    for adjust_index in range(4):
        if adjust_index == vertex_index:
            continue
        repaired = repair_parallelogram(base, adjust_index)
        if repaired is not None:
            candidates.append(ParallelogramCandidate(repaired, adjust_index))
    return candidates


def create_parallelogram_transform(
    vertices: Sequence[Point2D], vertex_index: int, cursor: Sequence[float]
) -> List[Point2D]:
    """Return the quad after dragging ``vertex_index`` under the parallelogram constraint.

    Falls back to a plain vertex move when no repair is valid.
    """

    cursor = as_point(cursor)
    candidates = parallelogram_candidates(vertices, vertex_index, cursor)
    if not candidates:
        logger.debug("no parallelogram repair for vertex %d, moving freely", vertex_index)
        moved = list(vertices)
        moved[vertex_index] = cursor
        return moved
    best = min(candidates, key=lambda c: distance(c.vertices[c.adjusted_index], cursor))
    logger.debug(
        "parallelogram repair adjusts vertex %d (%d candidate(s))",
        best.adjusted_index,
        len(candidates),
    )
    return best.vertices


def transform_vertex(
    shape: Shape,
    vertex_index: int,
    new_position: Sequence[float],
    constrained: bool = False,
) -> Shape:
    """Move one vertex of ``shape`` and return the transformed shape.

    Circles and out-of-range indices return ``shape`` unchanged.
    """

    if not is_transformable(shape):
        return shape
    vertices = get_vertices(shape)
    if not 0 <= vertex_index < len(vertices):
        logger.debug("vertex index %d out of range for %s", vertex_index, shape.id)
        return shape

    target = as_point(new_position)
    if constrained and shape.kind == "rectangle":
        new_vertices = create_parallelogram_transform(vertices, vertex_index, target)
    else:
        if constrained:
            target = find_right_angle_position(vertices, vertex_index, target)
        new_vertices = list(vertices)
        new_vertices[vertex_index] = target
    return make_transformed(shape, new_vertices)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "ParallelogramCandidate",
    "VertexHit",
    "create_parallelogram_transform",
    "find_nearest_vertex",
    "find_right_angle_position",
    "is_horizontal_parallelogram",
    "parallelogram_candidates",
    "repair_parallelogram",
    "right_angle_candidates",
    "transform_vertex",
]
