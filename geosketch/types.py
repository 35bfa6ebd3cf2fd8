"""Core value types shared across the editor core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, NamedTuple, Optional, Tuple, Union


class Point2D(NamedTuple):
    x: float
    y: float


ShapeKind = Literal["circle", "triangle", "rectangle"]
PointKind = Literal["vertex", "center", "edge"]
EndpointKind = Literal["point", "vertex", "center", "edge", "line", "free"]
SnapKind = Literal["point", "vertex", "center", "edge", "line", "free"]


class Segment(NamedTuple):
    start: Point2D
    end: Point2D


class GeosketchError(Exception):
    """Base class for errors raised by the editor core."""


class ShapeKindError(GeosketchError, ValueError):
    """Raised when a factory receives an unknown shape kind."""


class SceneLookupError(GeosketchError, KeyError):
    """Raised when an explicit id lookup misses."""


@dataclass(frozen=True)
class Circle:
    id: str
    x: float
    y: float
    width: float
    height: float

    kind: ClassVar[ShapeKind] = "circle"
    is_transformed: ClassVar[bool] = False


@dataclass(frozen=True)
class Triangle:
    """Triangle whose vertices are derived from its bounding box."""

    id: str
    x: float
    y: float
    width: float
    height: float

    kind: ClassVar[ShapeKind] = "triangle"
    is_transformed: ClassVar[bool] = False


@dataclass(frozen=True)
class Rectangle:
    id: str
    x: float
    y: float
    width: float
    height: float

    kind: ClassVar[ShapeKind] = "rectangle"
    is_transformed: ClassVar[bool] = False


@dataclass(frozen=True)
class TransformedTriangle:
    """Triangle with explicitly stored vertices.

    The bounding box is always the (floored) extent of ``vertices``.
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    vertices: Tuple[Point2D, Point2D, Point2D]

    kind: ClassVar[ShapeKind] = "triangle"
    is_transformed: ClassVar[bool] = True


@dataclass(frozen=True)
class TransformedRectangle:
    id: str
    x: float
    y: float
    width: float
    height: float
    vertices: Tuple[Point2D, Point2D, Point2D, Point2D]

    kind: ClassVar[ShapeKind] = "rectangle"
    is_transformed: ClassVar[bool] = True


Shape = Union[Circle, Triangle, Rectangle, TransformedTriangle, TransformedRectangle]
TransformedShape = Union[TransformedTriangle, TransformedRectangle]


@dataclass(frozen=True)
class GeometryPoint:
    """Labeled point anchored to a shape through ``shape_id``."""

    id: str
    position: Point2D
    label: str
    shape_id: str
    type: PointKind
    vertex_index: Optional[int] = None


@dataclass(frozen=True)
class LineSegment:
    id: str
    start_point: Point2D
    end_point: Point2D
    start_type: EndpointKind
    end_type: EndpointKind
    start_reference: Optional[str] = None
    end_reference: Optional[str] = None
    is_right_angle: bool = False
    right_angle_target: Optional[Segment] = None

    @property
    def segment(self) -> Segment:
        return Segment(self.start_point, self.end_point)


@dataclass(frozen=True)
class Angle:
    """Angle between two lines meeting at ``vertex``.

    Both stored lines start at the shared vertex. ``value`` is in degrees.
    """

    id: str
    lines: Tuple[LineSegment, LineSegment]
    value: float
    vertex: Point2D
    vertex_label: Optional[str] = None
    shape_id: Optional[str] = None


@dataclass(frozen=True)
class LengthMeasurement:
    id: str
    line_id: str
    value: float
    label: str


def as_point(value: Tuple[float, float]) -> Point2D:
    """Coerce any 2-sequence into a float :class:`Point2D`."""

    if isinstance(value, Point2D):
        return value
    return Point2D(float(value[0]), float(value[1]))


__all__ = [
    "Angle",
    "Circle",
    "EndpointKind",
    "GeometryPoint",
    "GeosketchError",
    "LengthMeasurement",
    "LineSegment",
    "Point2D",
    "PointKind",
    "Rectangle",
    "SceneLookupError",
    "Segment",
    "Shape",
    "ShapeKind",
    "ShapeKindError",
    "SnapKind",
    "TransformedRectangle",
    "TransformedShape",
    "TransformedTriangle",
    "Triangle",
    "as_point",
]
