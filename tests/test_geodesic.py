import math

import pytest

from trishatter.geodesic import OCTAHEDRON_FACES, octahedron_triangles, subdivide_face
from trishatter.geometry import Triangle, dot, mag, slerp


@pytest.mark.parametrize("resolution", [0, 1, 2, 3])
def test_octahedron_triangle_count(resolution):
    assert len(octahedron_triangles(resolution)) == 8 * 4 ** resolution


def test_resolution_zero_is_raw_faces():
    tris = octahedron_triangles(0)
    assert [t.vertices for t in tris] == list(OCTAHEDRON_FACES)


def test_vertices_lie_on_unit_sphere():
    for tri in octahedron_triangles(3):
        for v in tri.vertices:
            assert math.isclose(mag(v), 1.0, rel_tol=1e-9)


def test_faces_point_outward():
    for tri in octahedron_triangles(2):
        center = tuple(sum(c) / 3.0 for c in zip(*tri.vertices))
        assert dot(tri.normal(), center) > 0


def test_subdivide_order_matches_recursive_split():
    a, b, c = OCTAHEDRON_FACES[0]
    ab = slerp(a, b, 0.5)
    bc = slerp(b, c, 0.5)
    ca = slerp(c, a, 0.5)
    assert list(subdivide_face(a, b, c, 1)) == [
        Triangle(a, ab, ca),
        Triangle(b, bc, ab),
        Triangle(c, ca, bc),
        Triangle(ab, bc, ca),
    ]


def test_negative_resolution_rejected():
    with pytest.raises(ValueError):
        octahedron_triangles(-1)
