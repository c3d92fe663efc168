"""Exact plane slicing of triangle soups.

A triangle is classified by the signed distance of its vertices to the
cutting plane; distance ``>= 0`` is the positive side. A straddling triangle
has exactly one "lonely" vertex on one side and is cut into the lonely
vertex's small triangle plus two triangles on the other side.

Slicing a whole mesh routes every piece to a positive or negative
accumulator and records the cut points of each straddling triangle in a
single boundary list. The boundary is closed on each half with a fan to its
centroid; the negative half uses the reversed list so both caps face
outward.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from trishatter.errors import DegenerateGeometryError
from trishatter.geometry import (
    Plane,
    Triangle,
    Vec3,
    add,
    centroid,
    dot,
    epsilon,
    scale,
    sub,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unsplit:
    """The triangle lies entirely on one side of the plane."""

    triangle: Triangle


@dataclass(frozen=True)
class Split:
    """Pieces of a straddling triangle.

    ``single`` holds the lonely vertex; ``first`` and ``second`` lie on the
    other side of the plane.
    """

    single: Triangle
    first: Triangle
    second: Triangle

    @property
    def cut_points(self) -> Tuple[Vec3, Vec3]:
        """``(first_int, second_int)``, the two intersection points."""

        return self.single.v2, self.single.v1


SliceOutcome = Union[Unsplit, Split]


def edge_plane_intersection(a: Vec3, b: Vec3, plane_point: Vec3, plane_normal: Vec3) -> Vec3:
    """Point where the line through ``a`` and ``b`` meets the plane.

    Raises :class:`DegenerateGeometryError` if the edge is parallel to the
    plane.
    """

    ab = sub(b, a)
    denom = dot(ab, plane_normal)
    if abs(denom) <= epsilon:
        raise DegenerateGeometryError("edge is parallel to the cutting plane")
    t = dot(sub(plane_point, a), plane_normal) / denom
    return add(a, scale(ab, t))


def _cut(a: Vec3, b: Vec3, da: float, db: float) -> Vec3:
    # da and db have opposite sides, so da - db is never zero
    t = da / (da - db)
    return add(a, scale(sub(b, a), t))


def classify_and_split(tri: Triangle, plane: Plane) -> Tuple[SliceOutcome, bool]:
    """Classify ``tri`` against ``plane`` and cut it if it straddles.

    Returns the outcome and a flag: for :class:`Unsplit` whether the triangle
    is on the positive side, for :class:`Split` whether the lonely vertex is.
    """

    verts = tri.vertices
    dists = [plane.signed_distance(v) for v in verts]
    sides = [d >= 0.0 for d in dists]

    if sides[0] and sides[1] and sides[2]:
        return Unsplit(tri), True
    if not (sides[0] or sides[1] or sides[2]):
        return Unsplit(tri), False

    if sides[0] == sides[1]:
        lonely_idx, first_idx, second_idx = 2, 1, 0
    elif sides[0] == sides[2]:
        lonely_idx, first_idx, second_idx = 1, 0, 2
    else:
        lonely_idx, first_idx, second_idx = 0, 2, 1

    lonely = verts[lonely_idx]
    first = verts[first_idx]
    second = verts[second_idx]
    d_lonely = dists[lonely_idx]

    first_int = _cut(lonely, first, d_lonely, dists[first_idx])
    second_int = _cut(lonely, second, d_lonely, dists[second_idx])

    split = Split(
        single=Triangle(lonely, second_int, first_int),
        first=Triangle(first, first_int, second),
        second=Triangle(second, first_int, second_int),
    )
    return split, sides[lonely_idx]


def fill_boundary(triangles: List[Triangle], boundary: Sequence[Vec3]) -> List[Triangle]:
    """Close a cut with a fan of ``(p[i], p[i+1], centroid)`` triangles.

    ``boundary`` holds cut edges as consecutive point pairs, already wound
    consistently. Fewer than three points is a no-op. The new triangles are
    appended to ``triangles``, which is returned.
    """

    if len(boundary) < 3:
        return triangles
    if len(boundary) % 2:
        raise ValueError("boundary must hold an even number of points")

    center = centroid(boundary)
    for i in range(0, len(boundary), 2):
        triangles.append(Triangle(boundary[i], boundary[i + 1], center))
    return triangles


def slice_triangles(
    triangles: Sequence[Triangle], plane: Plane
) -> Optional[Tuple[List[Triangle], List[Triangle]]]:
    """Cut a triangle soup in two and cap both halves.

    Returns ``(positive, negative)`` or ``None`` if either half is empty.
    """

    positive: List[Triangle] = []
    negative: List[Triangle] = []
    boundary: List[Vec3] = []

    for tri in triangles:
        outcome, lonely_positive = classify_and_split(tri, plane)
        if isinstance(outcome, Unsplit):
            (positive if lonely_positive else negative).append(outcome.triangle)
            continue

        first_int, second_int = outcome.cut_points
        if lonely_positive:
            boundary.append(first_int)
            boundary.append(second_int)
            positive.append(outcome.single)
            negative.append(outcome.first)
            negative.append(outcome.second)
        else:
            boundary.append(second_int)
            boundary.append(first_int)
            negative.append(outcome.single)
            positive.append(outcome.first)
            positive.append(outcome.second)

    fill_boundary(positive, boundary)
    fill_boundary(negative, boundary[::-1])

    if not positive or not negative:
        logger.debug(
            "plane %s through %s did not bisect %d triangles",
            plane.normal, plane.point, len(triangles),
        )
        return None
    return positive, negative


__all__ = [
    "Unsplit",
    "Split",
    "SliceOutcome",
    "edge_plane_intersection",
    "classify_and_split",
    "fill_boundary",
    "slice_triangles",
]
