"""Radial displacement of triangle soups by a scalar height field."""

from __future__ import annotations

from typing import Callable, List, Sequence

from trishatter.geometry import Triangle, Vec3, add, normalize, scale

NoiseFunction = Callable[[Vec3], float]


def displace_point(p: Vec3, noise_fn: NoiseFunction) -> Vec3:
    """Move ``p`` by ``noise_fn(p)`` along its direction from the origin.

    A point at the origin has no direction and stays put.
    """

    height = float(noise_fn(p))
    return add(p, scale(normalize(p), height))


def displace_triangles(triangles: Sequence[Triangle], noise_fn: NoiseFunction) -> List[Triangle]:
    """Displace every vertex of every triangle independently.

    Vertices are not shared, but coincident vertices receive the same height
    because ``noise_fn`` depends on position only, so the surface stays closed.
    """

    positions = [displace_point(v, noise_fn) for tri in triangles for v in tri.vertices]
    return [
        Triangle(positions[i], positions[i + 1], positions[i + 2])
        for i in range(0, len(positions), 3)
    ]


__all__ = ["NoiseFunction", "displace_point", "displace_triangles"]
