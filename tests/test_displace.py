import math

from trishatter.builder import TriangleMeshBuilder
from trishatter.displace import displace_point, displace_triangles
from trishatter.geometry import mag, vclose


def wavy_height(p):
    return 0.3 * math.sin(2.0 * p[0] + 1.3 * p[2]) * math.cos(1.7 * p[1])


def test_constant_height_scales_unit_sphere():
    builder = TriangleMeshBuilder.new_octahedron(1)
    result = builder.apply_noise(lambda p: 0.5)
    assert result is builder
    assert len(builder) == 32
    for tri in builder.triangles:
        for v in tri.vertices:
            assert math.isclose(mag(v), 1.5, rel_tol=1e-9)


def test_zero_height_is_identity():
    builder = TriangleMeshBuilder.new_octahedron(1)
    before = builder.copy()
    builder.apply_noise(lambda p: 0.0)
    for a, b in zip(before.triangles, builder.triangles):
        for va, vb in zip(a.vertices, b.vertices):
            assert vclose(va, vb, tol=1e-12)


def test_noise_sampled_once_per_vertex_occurrence():
    builder = TriangleMeshBuilder.new_octahedron(1)
    calls = []

    def height(p):
        calls.append(p)
        return 0.1

    builder.apply_noise(height)
    assert len(calls) == 3 * len(builder)


def test_origin_point_does_not_move():
    assert displace_point((0.0, 0.0, 0.0), lambda p: 3.0) == (0.0, 0.0, 0.0)


def test_negative_height_moves_inward():
    assert vclose(displace_point((0.0, 2.0, 0.0), lambda p: -0.5), (0.0, 1.5, 0.0))


def test_coincident_vertices_stay_together():
    triangles = TriangleMeshBuilder.new_octahedron(1).triangles
    displaced = displace_triangles(triangles, wavy_height)

    before = [v for tri in triangles for v in tri.vertices]
    after = [v for tri in displaced for v in tri.vertices]
    for i, a in enumerate(before):
        for j in range(i + 1, len(before)):
            if vclose(a, before[j], tol=1e-12):
                assert vclose(after[i], after[j], tol=1e-9)
