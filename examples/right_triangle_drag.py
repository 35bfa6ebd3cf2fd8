"""Example: drag a triangle apex with the right-angle constraint."""

from geosketch import Scene, TransformSession, create_shape, get_vertices


def main() -> None:
    scene = Scene()
    triangle = scene.add_shape(create_shape((0, 0), (100, 50), "triangle"))
    apex = scene.try_create_point((50, 2))
    midpoint = scene.try_create_point((76, 24))

    session = TransformSession(scene)
    session.begin((50, 0))
    for cursor in [(40, 5), (20, 8), (5, 10)]:
        moved = session.move(cursor, constrained=True)
        print(f"cursor {cursor} -> " + ", ".join(f"({x:.1f}, {y:.1f})" for x, y in get_vertices(moved)))
    session.end()

    shape = scene.require_shape(triangle.id)
    print("Final bbox:", (shape.x, shape.y, shape.width, shape.height))
    for point in scene.points:
        x, y = point.position
        print(f"{point.label} ({point.type}): ({x:.2f}, {y:.2f})")
    print("Tracked ids:", apex.id, midpoint.id)


if __name__ == "__main__":
    main()
