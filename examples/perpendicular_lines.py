"""Example: lines that snap perpendicular to edges, then an angle between them."""

from geosketch import AnglePicker, LineDrawSession, Scene, create_shape


def main() -> None:
    scene = Scene()
    scene.add_shape(create_shape((0, 0), (100, 100), "rectangle"))
    scene.try_create_point((50, 50))

    session = LineDrawSession(scene)
    session.click((50, 50))
    preview = session.preview((300, 300))
    print("Preview end:", preview.end, "right angle:", preview.is_perpendicular)
    session.click((50, 3))
    session.click((50, 50))
    session.click((97, 50))

    for line in scene.lines:
        print(f"{line.start_type} -> {line.end_type}: {line.start_point} -> {line.end_point}"
              f" right_angle={line.is_right_angle}")

    picker = AnglePicker(scene)
    picker.pick((50, 25))
    angle = picker.pick((75, 50))
    if angle is not None:
        print(f"Angle at {angle.vertex_label}: {angle.value:.1f} degrees")


if __name__ == "__main__":
    main()
