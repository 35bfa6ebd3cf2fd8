"""Configuration helpers for editor components."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional

from . import constants


@dataclass
class EditorConfig:
    """Tolerances and presentation switches used by the editor core."""

    snap_tolerance: float = constants.SNAP_TOLERANCE
    edge_tolerance: float = constants.EDGE_TOLERANCE
    vertex_tolerance: float = constants.VERTEX_TOLERANCE
    point_to_point_tolerance: float = constants.POINT_TO_POINT_TOLERANCE
    coincident_tolerance: float = constants.COINCIDENT_TOLERANCE
    edge_membership_tolerance: float = constants.EDGE_MEMBERSHIP_TOLERANCE
    perpendicular_dot_tolerance: float = constants.PERPENDICULAR_DOT_TOLERANCE
    perpendicular_preview_min: float = constants.PERPENDICULAR_PREVIEW_MIN
    perpendicular_preview_max: float = constants.PERPENDICULAR_PREVIEW_MAX
    perpendicular_segment_slack: float = constants.PERPENDICULAR_SEGMENT_SLACK
    line_hit_tolerance: float = constants.LINE_HIT_TOLERANCE
    point_hit_tolerance: float = constants.POINT_RADIUS + 5.0
    common_vertex_tolerance: float = constants.COMMON_VERTEX_TOLERANCE
    min_shape_size: float = constants.MIN_SHAPE_SIZE
    min_parallelogram_edge: float = constants.MIN_PARALLELOGRAM_EDGE
    length_label_format: str = "{value:.1f}"
    recompute_angles_on_transform: bool = False


_EDITOR_CONFIG = EditorConfig()


def get_editor_config() -> EditorConfig:
    return copy.deepcopy(_EDITOR_CONFIG)


def set_editor_config(config: EditorConfig) -> None:
    global _EDITOR_CONFIG
    _EDITOR_CONFIG = copy.deepcopy(config)


def reset_editor_config() -> None:
    set_editor_config(EditorConfig())


def resolve(value: Optional[float], field_name: str) -> float:
    """Return ``value`` or, when ``None``, the configured ``field_name``."""

    if value is not None:
        return float(value)
    return float(getattr(_EDITOR_CONFIG, field_name))


def current() -> EditorConfig:
    """Return the live configuration object (read-only by convention)."""

    return _EDITOR_CONFIG


__all__ = [
    "EditorConfig",
    "current",
    "get_editor_config",
    "reset_editor_config",
    "resolve",
    "set_editor_config",
]
