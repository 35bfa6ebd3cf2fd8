from .types import (
    Angle,
    Circle,
    GeometryPoint,
    GeosketchError,
    LengthMeasurement,
    LineSegment,
    Point2D,
    Rectangle,
    SceneLookupError,
    Segment,
    ShapeKindError,
    TransformedRectangle,
    TransformedTriangle,
    Triangle,
)
from .config import EditorConfig, get_editor_config, set_editor_config, reset_editor_config
from .shapes import create_shape, get_edges, get_snap_points, get_vertices
from .snap import SnapResult, resolve_snap, find_point_placement
from .transform import transform_vertex, find_nearest_vertex
from .propagation import PropagationResult, propagate
from .collision import point_in_shape, distance_to_line, find_line_at, find_point_at, find_shape_at
from .measure import compute_angle, find_common_vertex, measure_length
from .scene import Scene, SceneSnapshot, create_line, create_point
from .interaction import (
    AnglePicker,
    LineDrawSession,
    ShapeDrawSession,
    TransformSession,
    TransformState,
    cursor_for,
)

__all__ = [
    'Angle',
    'Circle',
    'GeometryPoint',
    'GeosketchError',
    'LengthMeasurement',
    'LineSegment',
    'Point2D',
    'Rectangle',
    'SceneLookupError',
    'Segment',
    'ShapeKindError',
    'TransformedRectangle',
    'TransformedTriangle',
    'Triangle',
    'EditorConfig',
    'get_editor_config',
    'set_editor_config',
    'reset_editor_config',
    'create_shape',
    'get_edges',
    'get_snap_points',
    'get_vertices',
    'SnapResult',
    'resolve_snap',
    'find_point_placement',
    'transform_vertex',
    'find_nearest_vertex',
    'PropagationResult',
    'propagate',
    'point_in_shape',
    'distance_to_line',
    'find_line_at',
    'find_point_at',
    'find_shape_at',
    'compute_angle',
    'find_common_vertex',
    'measure_length',
    'Scene',
    'SceneSnapshot',
    'create_line',
    'create_point',
    'AnglePicker',
    'LineDrawSession',
    'ShapeDrawSession',
    'TransformSession',
    'TransformState',
    'cursor_for',
]
