"""Example: free versus constrained corner drags on a rectangle."""

from geosketch import Scene, TransformSession, create_shape, get_vertices


def _drag(constrained: bool) -> None:
    scene = Scene()
    rect = scene.add_shape(create_shape((0, 0), (100, 100), "rectangle"))
    scene.try_create_point((50, 2))
    scene.try_create_point((48, 52))

    session = TransformSession(scene)
    session.begin((100, 0))
    session.move((120, -20), constrained=constrained)
    session.end()

    shape = scene.require_shape(rect.id)
    label = "constrained" if constrained else "free"
    print(f"[{label}] vertices:", ", ".join(f"({x:.1f}, {y:.1f})" for x, y in get_vertices(shape)))
    for point in scene.points:
        x, y = point.position
        print(f"[{label}] {point.label} ({point.type}): ({x:.2f}, {y:.2f})")


def main() -> None:
    _drag(constrained=False)
    _drag(constrained=True)


if __name__ == "__main__":
    main()
