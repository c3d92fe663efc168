"""Geodesic subdivision of the unit octahedron.

Each face is split into four by the spherical midpoints of its edges, so
repeated subdivision converges on the unit sphere. Depth is handled with an
explicit work stack; triangles are emitted in the same depth-first order a
recursive implementation would produce.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from trishatter.geometry import Triangle, Vec3, slerp

UP: Vec3 = (0.0, 1.0, 0.0)
DOWN: Vec3 = (0.0, -1.0, 0.0)
LEFT: Vec3 = (-1.0, 0.0, 0.0)
RIGHT: Vec3 = (1.0, 0.0, 0.0)
FORWARD: Vec3 = (0.0, 0.0, 1.0)
BACK: Vec3 = (0.0, 0.0, -1.0)

# outward (counter-clockwise seen from outside) winding
OCTAHEDRON_FACES: Tuple[Tuple[Vec3, Vec3, Vec3], ...] = (
    (UP, BACK, LEFT),
    (UP, RIGHT, BACK),
    (UP, FORWARD, RIGHT),
    (UP, LEFT, FORWARD),
    (DOWN, LEFT, BACK),
    (DOWN, BACK, RIGHT),
    (DOWN, RIGHT, FORWARD),
    (DOWN, FORWARD, LEFT),
)


def subdivide_face(a: Vec3, b: Vec3, c: Vec3, depth: int) -> Iterator[Triangle]:
    """Yield the ``4**depth`` triangles of face ``(a, b, c)`` subdivided ``depth`` times."""

    if depth < 0:
        raise ValueError("subdivision depth must be non-negative")

    stack: List[Tuple[Vec3, Vec3, Vec3, int]] = [(a, b, c, depth)]
    while stack:
        a, b, c, level = stack.pop()
        if level == 0:
            yield Triangle(a, b, c)
            continue
        ab = slerp(a, b, 0.5)
        bc = slerp(b, c, 0.5)
        ca = slerp(c, a, 0.5)
        # pushed in reverse so (a, ab, ca) is expanded first
        stack.append((ab, bc, ca, level - 1))
        stack.append((c, ca, bc, level - 1))
        stack.append((b, bc, ab, level - 1))
        stack.append((a, ab, ca, level - 1))


def octahedron_triangles(resolution: int) -> List[Triangle]:
    """Return the ``8 * 4**resolution`` triangles of a subdivided unit octahedron."""

    if resolution < 0:
        raise ValueError("resolution must be non-negative")
    triangles: List[Triangle] = []
    for a, b, c in OCTAHEDRON_FACES:
        triangles.extend(subdivide_face(a, b, c, resolution))
    return triangles


__all__ = ["OCTAHEDRON_FACES", "subdivide_face", "octahedron_triangles"]
