"""Vector algebra and the value types shared by the mesh engine."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

epsilon = 1e-9

ZERO: Vec3 = (0.0, 0.0, 0.0)
UP: Vec3 = (0.0, 1.0, 0.0)


def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Vec3, c: float) -> Vec3:
    return (a[0] * c, a[1] * c, a[2] * c)


def neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def mag(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def normalize(a: Vec3, tol: float = epsilon) -> Vec3:
    """Return ``a`` scaled to unit length, or the zero vector if ``a`` is tiny."""

    m = mag(a)
    if m <= tol:
        return ZERO
    return (a[0] / m, a[1] / m, a[2] / m)


def vclose(a: Vec3, b: Vec3, tol: float = 1e-6) -> bool:
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol and abs(a[2] - b[2]) <= tol


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def slerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """Spherical interpolation between ``a`` and ``b``.

    Direction is interpolated along the great arc joining the two vectors and
    the length is interpolated linearly, so unit inputs give unit outputs.
    Nearly parallel inputs fall back to a normalized linear interpolation.
    """

    la = mag(a)
    lb = mag(b)
    if la <= epsilon or lb <= epsilon:
        return lerp(a, b, t)
    ua = scale(a, 1.0 / la)
    ub = scale(b, 1.0 / lb)
    length = la + (lb - la) * t

    cos_theta = max(-1.0, min(1.0, dot(ua, ub)))
    theta = math.acos(cos_theta)
    sin_theta = math.sin(theta)
    if sin_theta <= 1e-6:
        direction = normalize(lerp(ua, ub, t))
        if direction == ZERO:
            return lerp(a, b, t)
        return scale(direction, length)

    wa = math.sin((1.0 - t) * theta) / sin_theta
    wb = math.sin(t * theta) / sin_theta
    return scale(add(scale(ua, wa), scale(ub, wb)), length)


def centroid(points: Iterable[Vec3]) -> Vec3:
    """Arithmetic mean of ``points``."""

    sx = sy = sz = 0.0
    count = 0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
        count += 1
    if count == 0:
        raise ValueError("centroid of an empty point set is undefined")
    return (sx / count, sy / count, sz / count)


def random_unit_vector(rng: random.Random) -> Vec3:
    """Draw a direction uniformly distributed over the unit sphere."""

    u = rng.uniform(-1.0, 1.0)
    theta = rng.uniform(0.0, 2.0 * math.pi)
    r = math.sqrt(max(0.0, 1.0 - u * u))
    return normalize((r * math.cos(theta), r * math.sin(theta), u))


@dataclass(frozen=True)
class Triangle:
    """Three ordered vertices; the order fixes winding and normal sign."""

    v0: Vec3
    v1: Vec3
    v2: Vec3

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.v0, self.v1, self.v2)

    def normal(self) -> Vec3:
        """Unit normal of ``(v1-v0) x (v2-v0)``; ``+Y`` for zero-area triangles."""

        n = cross(sub(self.v1, self.v0), sub(self.v2, self.v0))
        length = mag(n)
        if length <= epsilon or not math.isfinite(length):
            return UP
        return (n[0] / length, n[1] / length, n[2] / length)

    def area(self) -> float:
        return 0.5 * mag(cross(sub(self.v1, self.v0), sub(self.v2, self.v0)))

    def is_degenerate(self, tol: float = epsilon) -> bool:
        return self.area() <= tol

    def reversed(self) -> "Triangle":
        return Triangle(self.v0, self.v2, self.v1)


@dataclass(frozen=True)
class Plane:
    """A plane through ``point`` with unit ``normal``."""

    point: Vec3
    normal: Vec3

    @classmethod
    def from_normal(cls, normal: Sequence[float], point: Sequence[float] = ZERO) -> "Plane":
        """Build a plane, normalizing ``normal``; a zero normal is rejected."""

        n = normalize(to_vec3(normal))
        if n == ZERO:
            raise ValueError("plane normal must be non-zero")
        return cls(point=to_vec3(point), normal=n)

    def signed_distance(self, p: Vec3) -> float:
        return dot(self.normal, sub(p, self.point))

    def is_positive(self, p: Vec3) -> bool:
        """Points on the plane count as positive."""

        return self.signed_distance(p) >= 0.0

    def flipped(self) -> "Plane":
        return Plane(self.point, neg(self.normal))


__all__ = [
    "Vec3",
    "Vec2",
    "epsilon",
    "ZERO",
    "UP",
    "to_vec3",
    "add",
    "sub",
    "scale",
    "neg",
    "dot",
    "cross",
    "mag",
    "normalize",
    "vclose",
    "lerp",
    "slerp",
    "centroid",
    "random_unit_vector",
    "Triangle",
    "Plane",
]
