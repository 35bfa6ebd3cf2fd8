"""Scene aggregate: the editor's shapes and everything anchored to them."""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Sequence, Set, Tuple

from .collision import find_line_at, find_point_at, find_shape_at
from .ids import new_id, next_label
from .measure import compute_angle, measure_length
from .propagation import PropagationResult, propagate
from .snap.basic import find_point_placement
from .snap.model import SnapResult
from .types import (
    Angle,
    GeometryPoint,
    LengthMeasurement,
    LineSegment,
    PointKind,
    SceneLookupError,
    Shape,
    as_point,
)

logger = logging.getLogger(__name__)


class SceneSnapshot(NamedTuple):
    shapes: Tuple[Shape, ...]
    points: Tuple[GeometryPoint, ...]
    lines: Tuple[LineSegment, ...]
    angles: Tuple[Angle, ...]
    lengths: Tuple[LengthMeasurement, ...]


def create_point(
    position: Sequence[float],
    shape_id: str,
    kind: PointKind,
    existing_points: Sequence[GeometryPoint] = (),
    vertex_index: Optional[int] = None,
) -> GeometryPoint:
    """Create a labeled point on ``shape_id`` using the next free label."""

    return GeometryPoint(
        id=new_id("point"),
        position=as_point(position),
        label=next_label(existing_points, shape_id),
        shape_id=shape_id,
        type=kind,
        vertex_index=vertex_index,
    )


def create_line(start: SnapResult, end: SnapResult) -> LineSegment:
    """Build a line from the snap results of its two clicks.

    An end taken from the perpendicular preview has no anchor: it is stored
    as a ``free`` endpoint that still records the right angle.
    """

    end_type = end.type
    end_reference = end.reference
    if end.is_perpendicular_preview:
        end_type = "free"
        end_reference = None
    is_right_angle = end.is_perpendicular or end.is_perpendicular_preview
    return LineSegment(
        id=new_id("line"),
        start_point=start.point,
        end_point=end.point,
        start_type=start.type,
        end_type=end_type,
        start_reference=start.reference,
        end_reference=end_reference,
        is_right_angle=is_right_angle,
        right_angle_target=end.edge_info if is_right_angle else None,
    )


class Scene:
    """Mutable container for one drawing.

    Collections are ordered bottom to top.  Readers should work from
    :meth:`snapshot`; mutations go through the methods below so dependants
    stay consistent.
    """

    def __init__(self) -> None:
        self.shapes: List[Shape] = []
        self.points: List[GeometryPoint] = []
        self.lines: List[LineSegment] = []
        self.angles: List[Angle] = []
        self.lengths: List[LengthMeasurement] = []

    def snapshot(self) -> SceneSnapshot:
        return SceneSnapshot(
            tuple(self.shapes),
            tuple(self.points),
            tuple(self.lines),
            tuple(self.angles),
            tuple(self.lengths),
        )

    def is_empty(self) -> bool:
        return not (self.shapes or self.points or self.lines or self.angles or self.lengths)

    # shapes

    def shape_by_id(self, shape_id: str) -> Optional[Shape]:
        for shape in self.shapes:
            if shape.id == shape_id:
                return shape
        return None

    def require_shape(self, shape_id: str) -> Shape:
        shape = self.shape_by_id(shape_id)
        if shape is None:
            raise SceneLookupError(f"no shape with id {shape_id!r}")
        return shape

    def add_shape(self, shape: Shape) -> Shape:
        self.shapes.append(shape)
        logger.info("Added %s %s", shape.kind, shape.id)
        return shape

    def replace_shape(self, shape: Shape) -> None:
        for idx, existing in enumerate(self.shapes):
            if existing.id == shape.id:
                self.shapes[idx] = shape
                return
        raise SceneLookupError(f"no shape with id {shape.id!r}")

    def apply_transform(self, original: Shape, transformed: Shape) -> PropagationResult:
        """Swap ``transformed`` in for ``original`` and carry its dependants along."""

        result = propagate(original, transformed, self.points, self.lines, self.angles)
        before = {line.id: line for line in self.lines}
        self.replace_shape(transformed)
        self.points = result.points
        self.lines = result.lines
        self.angles = result.angles
        moved_lines = {line.id for line in result.lines if before.get(line.id) is not line}
        if moved_lines:
            self._refresh_lengths(moved_lines)
        return result

    def delete_shape(self, shape_id: str) -> None:
        """Remove a shape together with its points and the lines anchored to either."""

        self.shapes = [s for s in self.shapes if s.id != shape_id]
        doomed_points = {p.id for p in self.points if p.shape_id == shape_id}
        self.points = [p for p in self.points if p.id not in doomed_points]
        self._drop_lines_referencing({shape_id} | doomed_points)
        self.angles = [a for a in self.angles if a.shape_id != shape_id]
        logger.info("Deleted shape %s with %d point(s)", shape_id, len(doomed_points))

    # points

    def add_point(self, point: GeometryPoint) -> GeometryPoint:
        self.points.append(point)
        logger.info("Created point %s on %s (%s)", point.label, point.shape_id, point.type)
        return point

    def try_create_point(self, cursor: Sequence[float]) -> Optional[GeometryPoint]:
        """Place a point where the point tool would, or return ``None`` off every shape."""

        placement = find_point_placement(cursor, self.shapes)
        if placement is None:
            return None
        point = create_point(
            placement.point,
            placement.shape_id,
            placement.type,
            self.points,
            placement.vertex_index,
        )
        return self.add_point(point)

    def delete_point(self, point_id: str) -> None:
        self.points = [p for p in self.points if p.id != point_id]
        self._drop_lines_referencing({point_id})
        logger.info("Deleted point %s", point_id)

    # lines

    def line_by_id(self, line_id: str) -> Optional[LineSegment]:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def add_line(self, line: LineSegment) -> LineSegment:
        self.lines.append(line)
        logger.info(
            "Created line %s (%s -> %s%s)",
            line.id,
            line.start_type,
            line.end_type,
            ", right angle" if line.is_right_angle else "",
        )
        return line

    def delete_line(self, line_id: str) -> None:
        self._drop_lines({line_id})
        logger.info("Deleted line %s", line_id)

    def _drop_lines_referencing(self, references: Set[str]) -> None:
        doomed = {
            line.id
            for line in self.lines
            if line.start_reference in references or line.end_reference in references
        }
        if doomed:
            self._drop_lines(doomed)

    def _drop_lines(self, line_ids: Set[str]) -> None:
        self.lines = [line for line in self.lines if line.id not in line_ids]
        self.angles = [a for a in self.angles if not any(line.id in line_ids for line in a.lines)]
        self.lengths = [m for m in self.lengths if m.line_id not in line_ids]

    # measurements

    def add_angle(self, line1: LineSegment, line2: LineSegment) -> Optional[Angle]:
        angle = compute_angle(line1, line2, self.points)
        if angle is None:
            return None
        self.angles.append(angle)
        logger.info("Measured angle %.2f deg at (%.2f, %.2f)", angle.value, angle.vertex.x, angle.vertex.y)
        return angle

    def add_length(self, line: LineSegment) -> LengthMeasurement:
        measurement = measure_length(line)
        self.lengths = [m for m in self.lengths if m.line_id != line.id]
        self.lengths.append(measurement)
        logger.info("Measured length %s of line %s", measurement.label, line.id)
        return measurement

    def _refresh_lengths(self, line_ids: Set[str]) -> None:
        refreshed: List[LengthMeasurement] = []
        for measurement in self.lengths:
            line = self.line_by_id(measurement.line_id) if measurement.line_id in line_ids else None
            if line is None:
                refreshed.append(measurement)
                continue
            updated = measure_length(line)
            refreshed.append(LengthMeasurement(measurement.id, line.id, updated.value, updated.label))
        self.lengths = refreshed

    # tools

    def delete_at(self, cursor: Sequence[float]) -> Optional[str]:
        """Delete the line, point or topmost shape under ``cursor``; return the deleted id."""

        line = find_line_at(cursor, self.lines)
        if line is not None:
            self.delete_line(line.id)
            return line.id
        point = find_point_at(cursor, self.points)
        if point is not None:
            self.delete_point(point.id)
            return point.id
        shape = find_shape_at(cursor, self.shapes)
        if shape is not None:
            self.delete_shape(shape.id)
            return shape.id
        return None

    def clear(self) -> None:
        self.shapes = []
        self.points = []
        self.lines = []
        self.angles = []
        self.lengths = []
        logger.info("Cleared scene")


__all__ = ["Scene", "SceneSnapshot", "create_line", "create_point"]
