"""Planar geometry primitives used by the snapping and transform layers.

All helpers are pure and accept any 2-sequence as a point.  Degenerate
inputs (collapsed segments, zero-area triangles) never raise: projections fall
back to the segment start and the barycentric conversion returns ``None``.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence

import numpy as np

from .constants import BARYCENTRIC_SUM_TOLERANCE, PERPENDICULAR_DOT_TOLERANCE
from .types import Point2D

_EPS = 1e-12


class LineProjection(NamedTuple):
    param: float
    projected_point: Point2D


class PerpendicularInfo(NamedTuple):
    foot: Point2D
    closest_on_segment: Point2D
    distance_to_segment: float
    distance: float


class Barycentric(NamedTuple):
    u: float
    v: float
    w: float


def _sub(a: Sequence[float], b: Sequence[float]) -> Point2D:
    return Point2D(float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(a[0]) * float(b[0]) + float(a[1]) * float(b[1])


def _cross(a: Sequence[float], b: Sequence[float]) -> float:
    return float(a[0]) * float(b[1]) - float(a[1]) * float(b[0])


def _norm(vec: Sequence[float]) -> float:
    return math.hypot(float(vec[0]), float(vec[1]))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def lerp(a: Sequence[float], b: Sequence[float], t: float) -> Point2D:
    return Point2D(
        float(a[0]) + (float(b[0]) - float(a[0])) * t,
        float(a[1]) + (float(b[1]) - float(a[1])) * t,
    )


def midpoint(a: Sequence[float], b: Sequence[float]) -> Point2D:
    return lerp(a, b, 0.5)


def project_point_on_line(
    p: Sequence[float], a: Sequence[float], b: Sequence[float]
) -> LineProjection:
    """Project ``p`` onto the infinite line through ``a`` and ``b``.

    ``param`` is the unclamped scalar along ``a -> b``; a collapsed segment
    yields ``(0, a)``.
    """

    ab = _sub(b, a)
    len_sq = _dot(ab, ab)
    start = Point2D(float(a[0]), float(a[1]))
    if len_sq == 0.0:
        return LineProjection(0.0, start)
    param = _dot(_sub(p, a), ab) / len_sq
    return LineProjection(param, Point2D(start.x + param * ab.x, start.y + param * ab.y))


def closest_point_on_segment(
    p: Sequence[float], a: Sequence[float], b: Sequence[float]
) -> Point2D:
    param, projected = project_point_on_line(p, a, b)
    clamped = min(max(param, 0.0), 1.0)
    if clamped == param:
        return projected
    return lerp(a, b, clamped)


def distance_to_segment(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    return distance(p, closest_point_on_segment(p, a, b))


def perpendicular_snap_info(
    source: Sequence[float], a: Sequence[float], b: Sequence[float]
) -> PerpendicularInfo:
    """Return the perpendicular foot from ``source`` and how it relates to ``a-b``."""

    _, foot = project_point_on_line(source, a, b)
    closest = closest_point_on_segment(foot, a, b)
    return PerpendicularInfo(
        foot=foot,
        closest_on_segment=closest,
        distance_to_segment=distance(foot, closest),
        distance=distance(source, foot),
    )


def is_perpendicular(
    source: Sequence[float],
    target: Sequence[float],
    a: Sequence[float],
    b: Sequence[float],
    tolerance: float = PERPENDICULAR_DOT_TOLERANCE,
) -> bool:
    """Return ``True`` when ``source -> target`` is (nearly) perpendicular to ``a -> b``."""

    line_vec = _sub(b, a)
    probe = _sub(target, source)
    line_len = _norm(line_vec)
    probe_len = _norm(probe)
    if line_len == 0.0 or probe_len == 0.0:
        return False
    return abs(_dot(line_vec, probe) / (line_len * probe_len)) <= tolerance


def point_in_polygon(p: Sequence[float], vertices: Sequence[Sequence[float]]) -> bool:
    """Even-odd ray casting test."""

    x, y = float(p[0]), float(p[1])
    inside = False
    count = len(vertices)
    j = count - 1
    for i in range(count):
        xi, yi = float(vertices[i][0]), float(vertices[i][1])
        xj, yj = float(vertices[j][0]), float(vertices[j][1])
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def polygon_area(vertices: Sequence[Sequence[float]]) -> float:
    """Signed shoelace area."""

    if len(vertices) < 3:
        return 0.0
    pts = np.asarray(vertices, dtype=float)
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_centroid(vertices: Sequence[Sequence[float]]) -> Point2D:
    """Area-weighted centroid, or the vertex mean for degenerate polygons."""

    pts = np.asarray(vertices, dtype=float)
    if pts.size == 0:
        return Point2D(0.0, 0.0)
    area = polygon_area(vertices)
    if abs(area) <= _EPS:
        mean = pts.mean(axis=0)
        return Point2D(float(mean[0]), float(mean[1]))
    x = pts[:, 0]
    y = pts[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    cross = x * y_next - x_next * y
    cx = float(np.sum((x + x_next) * cross) / (6.0 * area))
    cy = float(np.sum((y + y_next) * cross) / (6.0 * area))
    return Point2D(cx, cy)


def vertex_mean(vertices: Sequence[Sequence[float]]) -> Point2D:
    pts = np.asarray(vertices, dtype=float)
    if pts.size == 0:
        return Point2D(0.0, 0.0)
    mean = pts.mean(axis=0)
    return Point2D(float(mean[0]), float(mean[1]))


def _triangle_area(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    return abs(_cross(_sub(b, a), _sub(c, a))) * 0.5


def barycentric(
    p: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
) -> Optional[Barycentric]:
    """Return area-ratio barycentric coordinates of ``p`` in ``(v1, v2, v3)``.

    Sub-areas are unsigned, so the weights only sum to one for points inside
    (or on) the triangle; anything else is rejected with ``None``.
    """

    total = _triangle_area(v1, v2, v3)
    if total == 0.0:
        return None
    u = _triangle_area(p, v2, v3) / total
    v = _triangle_area(v1, p, v3) / total
    w = _triangle_area(v1, v2, p) / total
    if abs(u + v + w - 1.0) > BARYCENTRIC_SUM_TOLERANCE:
        return None
    return Barycentric(u, v, w)


def barycentric_to_point(
    coeffs: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
) -> Point2D:
    weights = np.asarray(coeffs, dtype=float)
    basis = np.asarray([v1, v2, v3], dtype=float)
    x, y = weights @ basis
    return Point2D(float(x), float(y))


def ellipse_chords(
    center: Sequence[float], radius_x: float, radius_y: float, segments: int
) -> np.ndarray:
    """Return ``segments + 1`` samples around an ellipse, closing on the first."""

    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    xs = float(center[0]) + radius_x * np.cos(angles)
    ys = float(center[1]) + radius_y * np.sin(angles)
    return np.stack([xs, ys], axis=1)


def point_on_ellipse(
    center: Sequence[float], radius_x: float, radius_y: float, direction: Sequence[float]
) -> Point2D:
    """Return the ellipse point in the direction of ``direction`` from ``center``."""

    dx = float(direction[0]) - float(center[0])
    dy = float(direction[1]) - float(center[1])
    length = math.hypot(dx, dy)
    if length == 0.0:
        return Point2D(float(center[0]) + radius_x, float(center[1]))
    return Point2D(
        float(center[0]) + dx / length * radius_x,
        float(center[1]) + dy / length * radius_y,
    )


def angle_between(
    vertex: Sequence[float], a: Sequence[float], b: Sequence[float]
) -> Optional[float]:
    """Return the angle ``a-vertex-b`` in degrees, ``None`` for zero-length arms."""

    va = _sub(a, vertex)
    vb = _sub(b, vertex)
    na = _norm(va)
    nb = _norm(vb)
    if na <= _EPS or nb <= _EPS:
        return None
    cos_t = max(-1.0, min(1.0, _dot(va, vb) / (na * nb)))
    return math.degrees(math.acos(cos_t))


__all__ = [
    "Barycentric",
    "LineProjection",
    "PerpendicularInfo",
    "angle_between",
    "barycentric",
    "barycentric_to_point",
    "closest_point_on_segment",
    "distance",
    "distance_to_segment",
    "ellipse_chords",
    "is_perpendicular",
    "lerp",
    "midpoint",
    "perpendicular_snap_info",
    "point_in_polygon",
    "point_on_ellipse",
    "polygon_area",
    "polygon_centroid",
    "project_point_on_line",
    "vertex_mean",
]
