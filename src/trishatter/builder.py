"""Triangle-soup mesh builder.

:class:`TriangleMeshBuilder` holds an ordered list of independent
triangles. Every triangle owns its three vertices; nothing is welded, so
vertex ``k`` of triangle ``i`` is always index ``3*i + k`` and normals are
flat per face.

Typical use::

    builder = TriangleMeshBuilder.new_octahedron(3)
    builder.apply_noise(height_fn)
    mesh = builder.build()
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from trishatter.displace import NoiseFunction, displace_triangles
from trishatter.geodesic import octahedron_triangles
from trishatter.geometry import (
    ZERO,
    Plane,
    Triangle,
    Vec2,
    Vec3,
    cross,
    dot,
    normalize,
    sub,
)
from trishatter.indexed import (
    ATTRIBUTE_NORMAL,
    ATTRIBUTE_POSITION,
    ATTRIBUTE_UV_0,
    IndexedMesh,
    indices_of,
    positions_of,
)
from trishatter.slicer import fill_boundary, slice_triangles

FaceTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


class TriangleMeshBuilder:
    """An ordered, mutable collection of independent triangles."""

    def __init__(self, triangles: Optional[Iterable[Triangle]] = None):
        self.triangles: List[Triangle] = list(triangles) if triangles is not None else []

    @classmethod
    def new_empty(cls) -> "TriangleMeshBuilder":
        return cls()

    @classmethod
    def new_octahedron(cls, resolution: int) -> "TriangleMeshBuilder":
        """Unit octahedron with each face subdivided ``resolution`` times.

        The result has ``8 * 4**resolution`` triangles. No upper bound is
        applied; resolution 6 already means 32768 triangles.
        """

        return cls(octahedron_triangles(resolution))

    @classmethod
    def from_indexed(cls, mesh: IndexedMesh) -> "TriangleMeshBuilder":
        """Expand an indexed mesh into independent triangles."""

        positions = positions_of(mesh)
        indices = indices_of(mesh)
        corners = positions[indices].reshape(-1, 3, 3)
        return cls(
            Triangle(
                (float(a[0]), float(a[1]), float(a[2])),
                (float(b[0]), float(b[1]), float(b[2])),
                (float(c[0]), float(c[1]), float(c[2])),
            )
            for a, b, c in corners.tolist()
        )

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    def __repr__(self) -> str:
        return f"TriangleMeshBuilder(<{len(self.triangles)} triangles>)"

    def copy(self) -> "TriangleMeshBuilder":
        return TriangleMeshBuilder(self.triangles)

    def is_empty(self) -> bool:
        return not self.triangles

    def add_triangle(self, tri: Triangle) -> "TriangleMeshBuilder":
        self.triangles.append(tri)
        return self

    def apply_noise(self, noise_fn: NoiseFunction) -> "TriangleMeshBuilder":
        """Push every vertex along its direction from the origin by ``noise_fn(vertex)``."""

        self.triangles = displace_triangles(self.triangles, noise_fn)
        return self

    def fill_boundary(self, boundary: Sequence[Vec3]) -> "TriangleMeshBuilder":
        """Close a cut loop with a fan to its centroid. See :func:`trishatter.slicer.fill_boundary`."""

        fill_boundary(self.triangles, boundary)
        return self

    def slice(
        self, plane_normal: Vec3, plane_point: Vec3 = ZERO
    ) -> Optional[Tuple["TriangleMeshBuilder", "TriangleMeshBuilder"]]:
        """Cut along a plane into capped ``(positive, negative)`` halves.

        Returns ``None`` unless both halves are non-empty. ``self`` is not
        modified.
        """

        result = slice_triangles(self.triangles, Plane.from_normal(plane_normal, plane_point))
        if result is None:
            return None
        positive, negative = result
        return TriangleMeshBuilder(positive), TriangleMeshBuilder(negative)

    def vertices_and_indices(self) -> Tuple[List[Vec3], List[int]]:
        vertices: List[Vec3] = []
        for tri in self.triangles:
            vertices.extend(tri.vertices)
        return vertices, list(range(len(vertices)))

    def normals(self) -> List[Vec3]:
        """One normal per vertex; each face normal is repeated three times."""

        normals: List[Vec3] = []
        for tri in self.triangles:
            n = tri.normal()
            normals.extend((n, n, n))
        return normals

    def uvs(self) -> List[Vec2]:
        """Planar UVs projected onto each triangle's own tangent frame."""

        uvs: List[Vec2] = []
        for tri in self.triangles:
            a = tri.v0
            u_axis = normalize(sub(tri.v1, a))
            v_axis = normalize(cross(tri.normal(), u_axis))
            for v in tri.vertices:
                local = sub(v, a)
                uvs.append((dot(local, u_axis), dot(local, v_axis)))
        return uvs

    def faces(self) -> Iterator[FaceTuple]:
        """Yield ``(normal, v0, v1, v2)`` per triangle."""

        for tri in self.triangles:
            yield tri.normal(), tri.v0, tri.v1, tri.v2

    def build(self) -> IndexedMesh:
        """Convert to the renderer-facing indexed representation."""

        vertices, indices = self.vertices_and_indices()
        return (
            IndexedMesh()
            .with_attribute(ATTRIBUTE_POSITION, np.array(vertices, dtype=np.float32).reshape(-1, 3))
            .with_attribute(ATTRIBUTE_NORMAL, np.array(self.normals(), dtype=np.float32).reshape(-1, 3))
            .with_attribute(ATTRIBUTE_UV_0, np.array(self.uvs(), dtype=np.float32).reshape(-1, 2))
            .with_indices(np.array(indices, dtype=np.uint32))
        )


__all__ = ["TriangleMeshBuilder"]
