"""Result records produced by the snap resolvers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ..types import GeometryPoint, Point2D, Segment, SnapKind

PerpendicularTargetKind = Literal["edge", "line"]


@dataclass(frozen=True)
class SnapResult:
    """What the cursor resolved to.

    ``reference`` is the id of the point, shape or line the result is attached
    to; it is ``None`` for ``free`` results.
    """

    point: Point2D
    type: SnapKind
    reference: Optional[str] = None
    vertex_index: Optional[int] = None
    is_perpendicular: bool = False
    is_perpendicular_preview: bool = False
    is_point_to_point: bool = False
    edge_info: Optional[Segment] = None

    @property
    def is_free(self) -> bool:
        return self.type == "free"

    @property
    def is_anchor(self) -> bool:
        """``True`` for results a line may start from."""

        return self.type in ("point", "vertex", "center")


@dataclass(frozen=True)
class PerpendicularSnap:
    point: Point2D
    target_type: PerpendicularTargetKind
    target_id: str
    target: Segment
    source: Point2D
    distance: float


@dataclass(frozen=True)
class PointToPointSnap:
    """Target of a line end snapped onto a concrete point.

    ``target_point`` is ``None`` for shape snap points that have no
    :class:`GeometryPoint` yet.
    """

    point: Point2D
    type: SnapKind
    reference: str
    distance: float
    target_point: Optional[GeometryPoint] = None
    vertex_index: Optional[int] = None


def free(cursor: Point2D) -> SnapResult:
    return SnapResult(point=cursor, type="free")


__all__ = [
    "PerpendicularSnap",
    "PerpendicularTargetKind",
    "PointToPointSnap",
    "SnapResult",
    "free",
]
