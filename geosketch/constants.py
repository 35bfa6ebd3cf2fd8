"""Numeric defaults for the editor core (canvas units)."""

MIN_SHAPE_SIZE = 20.0
POINT_RADIUS = 4.0
SNAP_DISTANCE = 15.0

VERTEX_TOLERANCE = 10.0
EDGE_TOLERANCE = 8.0
SNAP_TOLERANCE = 15.0

POINT_TO_POINT_TOLERANCE = 20.0
COINCIDENT_TOLERANCE = 5.0
EDGE_MEMBERSHIP_TOLERANCE = 5.0

PERPENDICULAR_DOT_TOLERANCE = 0.05
PERPENDICULAR_PREVIEW_MIN = 20.0
PERPENDICULAR_PREVIEW_MAX = 300.0
PERPENDICULAR_SEGMENT_SLACK = 3.0

LINE_HIT_TOLERANCE = 5.0
COMMON_VERTEX_TOLERANCE = 10.0
EXACT_VERTEX_TOLERANCE = 1e-6

MIN_PARALLELOGRAM_EDGE = 10.0
PARALLELOGRAM_EPS = 1e-3

BARYCENTRIC_SUM_TOLERANCE = 0.01
CIRCLE_SEGMENTS = 16
