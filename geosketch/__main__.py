import argparse
import logging
import sys
from typing import Optional, Sequence

from geosketch import (
    LineDrawSession,
    Scene,
    ShapeDrawSession,
    TransformSession,
    get_vertices,
)
from geosketch.interaction import AnglePicker, pick_length

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _fmt(point: Sequence[float]) -> str:
    return f"({point[0]:.2f}, {point[1]:.2f})"


def run_demo(drag_to: Sequence[float], constrained: bool) -> Scene:
    """Replay a short editing session: rectangle, points, lines, a vertex drag."""

    scene = Scene()

    drawing = ShapeDrawSession(scene)
    drawing.begin((0, 0), "rectangle")
    drawing.preview((100, 100))
    rect = drawing.end()
    if rect is None:
        raise SystemExit("demo rectangle was rejected")

    scene.try_create_point((50, 2))
    scene.try_create_point((100, 100))

    lines = LineDrawSession(scene)
    lines.click((100, 100))
    lines.click((100, 40))
    lines.click((100, 100))
    lines.click((40, 100))

    picker = AnglePicker(scene)
    picker.pick((100, 70))
    angle = picker.pick((70, 100))
    if angle is not None:
        logger.info("Angle at %s is %.2f degrees", _fmt(angle.vertex), angle.value)
    pick_length(scene, (100, 70))

    dragging = TransformSession(scene)
    if dragging.begin((100, 0)):
        dragging.move(drag_to, constrained=constrained)
        dragging.end()
    return scene


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run a scripted geosketch editing session")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--drag-to",
        nargs=2,
        type=float,
        default=(120.0, -20.0),
        metavar=("X", "Y"),
        help="Where to drag the top-right rectangle vertex (default: 120 -20)",
    )
    parser.add_argument(
        "--constrained",
        action="store_true",
        help="Apply the parallelogram constraint while dragging",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    scene = run_demo(args.drag_to, args.constrained)

    print("Shapes:")
    for shape in scene.shapes:
        print(f"  {shape.kind} {shape.id}: bbox=({shape.x:.2f}, {shape.y:.2f}, {shape.width:.2f}, {shape.height:.2f})")
        print("    vertices: " + ", ".join(_fmt(v) for v in get_vertices(shape)))
    print("Points:")
    for point in scene.points:
        print(f"  {point.label} ({point.type}): {_fmt(point.position)}")
    print("Lines:")
    for line in scene.lines:
        print(f"  {_fmt(line.start_point)} -> {_fmt(line.end_point)} [{line.start_type} -> {line.end_type}]")
    print("Angles:")
    for angle in scene.angles:
        print(f"  {angle.vertex_label or '?'} at {_fmt(angle.vertex)}: {angle.value:.2f} deg")
    print("Lengths:")
    for measurement in scene.lengths:
        print(f"  {measurement.line_id}: {measurement.label}")


if __name__ == "__main__":
    main(sys.argv[1:])
