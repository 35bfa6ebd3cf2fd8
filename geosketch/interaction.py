"""Per-gesture state machines driving the scene.

Each session owns the ephemeral state of one tool gesture and turns cursor
positions into scene mutations.  Pointer events, key handling and rendering
stay with the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Literal, NamedTuple, Optional, Sequence

from .collision import find_line_at
from .scene import Scene, create_line
from .shapes import create_shape, is_transformable
from .snap import SnapResult, find_point_placement, resolve_line_start, resolve_snap
from .transform import find_nearest_vertex, transform_vertex
from .types import Angle, LengthMeasurement, LineSegment, Point2D, Segment, Shape, ShapeKind, as_point

logger = logging.getLogger(__name__)

Tool = Literal[
    "select",
    "rectangle",
    "triangle",
    "circle",
    "point",
    "line",
    "delete",
    "clear",
    "transform",
    "angle",
    "length",
]
CursorKind = Literal["default", "pointer", "crosshair", "move", "not-allowed"]

DRAWING_TOOLS = ("circle", "triangle", "rectangle")


@dataclass(frozen=True)
class TransformState:
    is_transforming: bool = False
    selected_shape: Optional[Shape] = None
    selected_vertex_index: Optional[int] = None
    hover_vertex_index: Optional[int] = None


def cursor_for(tool: Tool, state: Optional[TransformState] = None) -> CursorKind:
    """Cursor to show for ``tool`` given the current transform state."""

    if tool == "delete":
        return "pointer"
    if tool == "clear":
        return "not-allowed"
    if tool == "point" or tool == "line" or tool in DRAWING_TOOLS:
        return "crosshair"
    if tool == "transform" and state is not None:
        if state.is_transforming:
            return "move"
        if state.hover_vertex_index is not None:
            return "pointer"
    return "default"


class ShapeDrawSession:
    """Drag-to-draw for circles, triangles and rectangles."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.kind: Optional[ShapeKind] = None
        self.start: Optional[Point2D] = None
        self.current: Optional[Point2D] = None
        self.regular = False

    @property
    def active(self) -> bool:
        return self.start is not None

    def begin(self, point: Sequence[float], kind: ShapeKind) -> None:
        self.kind = kind
        self.start = as_point(point)
        self.current = self.start
        self.regular = False

    def preview(self, cursor: Sequence[float], regular: bool = False) -> Optional[Shape]:
        """Outline to draw while dragging; it is never added to the scene."""

        if self.start is None or self.kind is None:
            return None
        self.current = as_point(cursor)
        self.regular = regular
        return create_shape(self.start, self.current, self.kind, regular=regular, min_size=0.0)

    def end(self, cursor: Optional[Sequence[float]] = None, regular: Optional[bool] = None) -> Optional[Shape]:
        """Finish the drag; shapes under the minimum size are discarded."""

        if self.start is None or self.kind is None:
            return None
        end = as_point(cursor) if cursor is not None else self.current
        use_regular = self.regular if regular is None else regular
        shape = create_shape(self.start, end, self.kind, regular=use_regular)
        self.cancel()
        if shape is None:
            return None
        return self.scene.add_shape(shape)

    def cancel(self) -> None:
        self.kind = None
        self.start = None
        self.current = None
        self.regular = False


class LinePreview(NamedTuple):
    """Feedback for the line tool.

    ``start`` is ``None`` before the first click; ``feedback`` is the snap
    marker to highlight, if any.
    """

    start: Optional[Point2D]
    end: Point2D
    snap: SnapResult
    feedback: Optional[Point2D]
    is_perpendicular: bool = False
    is_perpendicular_preview: bool = False
    edge_info: Optional[Segment] = None


class LineDrawSession:
    """Two-click line drawing: anchor start, then any end."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.start: Optional[SnapResult] = None

    @property
    def drawing(self) -> bool:
        return self.start is not None

    def _resolve(self, cursor: Sequence[float]) -> SnapResult:
        return resolve_snap(
            cursor,
            self.scene.shapes,
            self.scene.points,
            self.scene.lines,
            self.start.point if self.start is not None else None,
        )

    def preview(self, cursor: Sequence[float]) -> LinePreview:
        snap = self._resolve(cursor)
        if self.start is None:
            feedback = snap.point if snap.is_anchor else None
            return LinePreview(None, snap.point, snap, feedback)
        return LinePreview(
            start=self.start.point,
            end=snap.point,
            snap=snap,
            feedback=None if snap.is_free else snap.point,
            is_perpendicular=snap.is_perpendicular or snap.is_perpendicular_preview,
            is_perpendicular_preview=snap.is_perpendicular_preview,
            edge_info=snap.edge_info,
        )

    def click(self, cursor: Sequence[float]) -> Optional[LineSegment]:
        """Register a click; returns the created line on the second click."""

        if self.start is None:
            self.start = resolve_line_start(
                cursor, self.scene.shapes, self.scene.points, self.scene.lines
            )
            if self.start is None:
                logger.debug("line tool click at %s is not on an anchor", tuple(cursor))
            return None
        end = self._resolve(cursor)
        line = create_line(self.start, end)
        self.start = None
        return self.scene.add_line(line)

    def cancel(self) -> None:
        self.start = None


class TransformSession:
    """Vertex drag lifecycle ``idle -> dragging -> idle``."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.state = TransformState()

    def _vertex_under(self, cursor: Sequence[float]):
        for shape in reversed(self.scene.shapes):
            if not is_transformable(shape):
                continue
            hit = find_nearest_vertex(cursor, shape)
            if hit is not None:
                return shape, hit.vertex_index
        return None

    def hover(self, cursor: Sequence[float]) -> bool:
        if self.state.is_transforming:
            return False
        found = self._vertex_under(cursor)
        self.state = dataclasses.replace(
            self.state, hover_vertex_index=found[1] if found is not None else None
        )
        return found is not None

    def begin(self, cursor: Sequence[float]) -> bool:
        found = self._vertex_under(cursor)
        if found is None:
            return False
        shape, vertex_index = found
        self.state = TransformState(
            is_transforming=True,
            selected_shape=shape,
            selected_vertex_index=vertex_index,
        )
        logger.debug("dragging vertex %d of %s", vertex_index, shape.id)
        return True

    def move(self, cursor: Sequence[float], constrained: bool = False) -> Optional[Shape]:
        """Move the dragged vertex; the scene is updated before returning."""

        state = self.state
        if not state.is_transforming or state.selected_shape is None or state.selected_vertex_index is None:
            return None
        original = self.scene.shape_by_id(state.selected_shape.id)
        if original is None:
            self.end()
            return None
        transformed = transform_vertex(original, state.selected_vertex_index, cursor, constrained)
        if transformed is not original:
            self.scene.apply_transform(original, transformed)
        self.state = dataclasses.replace(state, selected_shape=transformed)
        return transformed

    def end(self) -> None:
        self.state = TransformState()


class AnglePicker:
    """Collects two lines and measures the angle between them."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.first: Optional[LineSegment] = None

    def pick(self, cursor: Sequence[float]) -> Optional[Angle]:
        line = find_line_at(cursor, self.scene.lines)
        if line is None:
            return None
        if self.first is None:
            self.first = line
            return None
        if line.id == self.first.id:
            return None
        first, self.first = self.first, None
        return self.scene.add_angle(first, line)

    def cancel(self) -> None:
        self.first = None


def pick_length(scene: Scene, cursor: Sequence[float]) -> Optional[LengthMeasurement]:
    line = find_line_at(cursor, scene.lines)
    if line is None:
        return None
    return scene.add_length(line)


def point_tool_feedback(scene: Scene, cursor: Sequence[float]) -> Optional[Point2D]:
    """Marker shown under the point tool before clicking."""

    placement = find_point_placement(cursor, scene.shapes)
    return placement.point if placement is not None else None


__all__ = [
    "AnglePicker",
    "CursorKind",
    "LineDrawSession",
    "LinePreview",
    "ShapeDrawSession",
    "Tool",
    "TransformSession",
    "TransformState",
    "cursor_for",
    "pick_length",
    "point_tool_feedback",
]
