import math
import random

import pytest

from trishatter.builder import TriangleMeshBuilder
from trishatter.config import ExplodeSettings
from trishatter.explode import (
    MAX_ITERATIONS,
    Fragment,
    explode,
    explode_group,
    explode_mesh,
    explode_with_settings,
)
from trishatter.geometry import Triangle, dot, mag, neg
from trishatter.indexed import IndexedMesh


def _sphere():
    return TriangleMeshBuilder.new_octahedron(2)


def test_default_iteration_budget():
    assert MAX_ITERATIONS == 10


def test_explode_reaches_fragment_count():
    fragments = explode(_sphere(), fragment_count=4, max_iterations=10, rng=random.Random(1234))
    assert fragments is not None
    assert len(fragments) >= 4
    for fragment in fragments:
        assert isinstance(fragment, Fragment)
        assert not fragment.mesh.is_empty()
        assert math.isclose(mag(fragment.direction), 1.0, rel_tol=1e-9)


def test_sibling_fragments_have_opposite_directions():
    fragments = explode(_sphere(), fragment_count=2, rng=5)
    assert len(fragments) == 2
    positive, negative = fragments
    assert negative.direction == neg(positive.direction)
    for tri in positive.mesh.triangles:
        for v in tri.vertices:
            assert dot(v, positive.direction) >= -1e-9
    for tri in negative.mesh.triangles:
        for v in tri.vertices:
            assert dot(v, negative.direction) >= -1e-9


def test_explode_is_deterministic_for_a_seed():
    first = explode(_sphere(), fragment_count=4, rng=42)
    second = explode(_sphere(), fragment_count=4, rng=random.Random(42))
    assert [f.direction for f in first] == [f.direction for f in second]
    assert [f.mesh.triangles for f in first] == [f.mesh.triangles for f in second]


def test_explode_does_not_modify_input():
    sphere = _sphere()
    before = list(sphere.triangles)
    explode(sphere, fragment_count=4, rng=3)
    assert sphere.triangles == before


def test_explode_empty_mesh_fails():
    assert explode(TriangleMeshBuilder.new_empty(), fragment_count=2, rng=0) is None


def test_explode_fails_when_no_plane_bisects():
    far_away = TriangleMeshBuilder([Triangle((5.0, 5.0, 5.0), (6.0, 5.0, 5.0), (5.0, 6.0, 5.0))])

    class PointingAway(random.Random):
        def uniform(self, a, b):
            # u = 1 gives the +Z normal
            return 1.0 if a < 0 else 0.0

    assert explode(far_away, fragment_count=2, rng=PointingAway()) is None


def test_explode_runs_exactly_max_iterations(monkeypatch):
    calls = []

    def fake_slice(self, plane_normal, plane_point=(0.0, 0.0, 0.0)):
        calls.append(plane_normal)
        return self.copy(), self.copy()

    monkeypatch.setattr(TriangleMeshBuilder, "slice", fake_slice)
    result = explode(_sphere(), fragment_count=10 ** 6, max_iterations=3, rng=0)
    assert result is None
    assert len(calls) == 1 + 2 + 4


def test_explode_zero_iterations():
    assert explode(_sphere(), fragment_count=1, max_iterations=0, rng=0) is None


def test_explode_rejects_bad_parameters():
    with pytest.raises(ValueError):
        explode(_sphere(), fragment_count=0)
    with pytest.raises(ValueError):
        explode(_sphere(), fragment_count=2, max_iterations=-1)


def test_explode_mesh_indexed():
    result = explode_mesh(_sphere().build(), fragment_count=4, rng=11)
    assert result is not None
    assert len(result) >= 4
    for mesh, direction in result:
        assert isinstance(mesh, IndexedMesh)
        assert mesh.triangle_count > 0
        assert math.isclose(mag(direction), 1.0, rel_tol=1e-9)


def test_explode_group_tags_origin():
    meshes = {"hull": _sphere(), "turret": TriangleMeshBuilder.new_octahedron(1).build()}
    fragments = explode_group(meshes, fragment_count=2, rng=8)
    assert fragments is not None
    origins = [f.origin for f in fragments]
    assert origins.count("hull") >= 2
    assert origins.count("turret") >= 2
    assert origins == sorted(origins, key=["hull", "turret"].index)


def test_explode_group_fails_as_a_whole():
    meshes = {"hull": _sphere(), "empty": TriangleMeshBuilder.new_empty()}
    assert explode_group(meshes, fragment_count=2, rng=8) is None


def test_explode_with_settings():
    settings = ExplodeSettings(fragment_count=4, max_iterations=5, seed=21)
    first = explode_with_settings(_sphere(), settings)
    second = explode_with_settings(_sphere(), settings)
    assert len(first) >= 4
    assert [f.direction for f in first] == [f.direction for f in second]
