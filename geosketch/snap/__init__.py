from .model import PerpendicularSnap, PointToPointSnap, SnapResult, free
from .basic import PointPlacement, find_basic_snap_target, find_point_placement
from .point_to_point import find_point_to_point_snap, is_valid_connection
from .perpendicular import (
    edge_containing,
    find_perpendicular_preview,
    find_perpendicular_snap_target,
    find_snap_with_perpendicular_correction,
)
from .resolver import resolve_line_start, resolve_snap

__all__ = [
    "PerpendicularSnap",
    "PointPlacement",
    "PointToPointSnap",
    "SnapResult",
    "edge_containing",
    "find_basic_snap_target",
    "find_perpendicular_preview",
    "find_perpendicular_snap_target",
    "find_point_placement",
    "find_point_to_point_snap",
    "find_snap_with_perpendicular_correction",
    "free",
    "is_valid_connection",
    "resolve_line_start",
    "resolve_snap",
]
