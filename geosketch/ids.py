from __future__ import annotations

import string
import uuid
from typing import Iterable

from .types import GeometryPoint


def new_id(prefix: str) -> str:
    """Return a collision-safe identifier such as ``shape-3f2a...``."""

    return f"{prefix}-{uuid.uuid4().hex}"


def next_label(existing_points: Iterable[GeometryPoint], shape_id: str) -> str:
    """Return the first unused uppercase letter among the points of ``shape_id``.

    Past ``Z`` the label becomes ``A{n}`` where ``n`` is the number of points
    already on the shape.
    """

    shape_points = [p for p in existing_points if p.shape_id == shape_id]
    used = {p.label for p in shape_points}
    for letter in string.ascii_uppercase:
        if letter not in used:
            return letter
    return f"A{len(shape_points)}"


__all__ = ["new_id", "next_label"]
