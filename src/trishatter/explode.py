"""Random-plane fragmentation of triangle soups.

Each pass cuts every pending piece with a random plane through the origin
and keeps both capped halves, so the piece count roughly doubles per pass.
Pieces that a plane fails to bisect are dropped from that pass. The run
succeeds as soon as a pass yields at least ``fragment_count`` pieces and
returns ``None`` when a pass yields nothing or the pass budget runs out.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Hashable, List, Mapping, Optional, Tuple, Union

from trishatter.builder import TriangleMeshBuilder
from trishatter.config import DEFAULT_FRAGMENT_COUNT, MAX_ITERATIONS, ExplodeSettings
from trishatter.geometry import ZERO, Vec3, neg, normalize, random_unit_vector
from trishatter.indexed import IndexedMesh

logger = logging.getLogger(__name__)


RandomSource = Union[random.Random, int, None]
MeshLike = Union[TriangleMeshBuilder, IndexedMesh]


@dataclass
class Fragment:
    """One piece of an exploded mesh.

    ``direction`` is the unit normal of the plane that separated this piece
    from its sibling, pointing away from the sibling. ``origin`` names the
    source mesh when several meshes are exploded together.
    """

    mesh: TriangleMeshBuilder
    direction: Vec3
    origin: Optional[Hashable] = None


def _as_rng(rng: RandomSource) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def _as_builder(mesh: MeshLike) -> TriangleMeshBuilder:
    if isinstance(mesh, IndexedMesh):
        return TriangleMeshBuilder.from_indexed(mesh)
    return mesh.copy()


def random_plane_normal(rng: random.Random) -> Vec3:
    return random_unit_vector(rng)


def explode(
    mesh: MeshLike,
    fragment_count: int = DEFAULT_FRAGMENT_COUNT,
    max_iterations: int = MAX_ITERATIONS,
    *,
    rng: RandomSource = None,
) -> Optional[List[Fragment]]:
    """Split ``mesh`` into at least ``fragment_count`` pieces.

    ``rng`` may be a :class:`random.Random`, an integer seed or ``None``.
    Returns the fragments of the first pass that reaches the target, which
    may overshoot it, or ``None`` if no pass does.
    """

    if fragment_count < 1:
        raise ValueError("fragment_count must be at least 1")
    if max_iterations < 0:
        raise ValueError("max_iterations must be non-negative")

    generator = _as_rng(rng)
    queue: List[Tuple[TriangleMeshBuilder, Vec3]] = [(_as_builder(mesh), ZERO)]

    for iteration in range(max_iterations):
        fragments: List[Fragment] = []

        for piece, _ in queue:
            normal = random_plane_normal(generator)
            halves = piece.slice(normal, ZERO)
            if halves is None:
                logger.warning(
                    "could not slice mesh of %d triangles with plane normal %s",
                    len(piece), normal,
                )
                continue
            positive, negative = halves
            fragments.append(Fragment(positive, normal))
            fragments.append(Fragment(negative, neg(normal)))

        logger.debug("pass %d produced %d fragments", iteration + 1, len(fragments))

        if len(fragments) >= fragment_count:
            return fragments
        if not fragments:
            logger.error("no fragments generated after slicing")
            return None
        queue = [(fragment.mesh, fragment.direction) for fragment in fragments]

    logger.debug("gave up after %d passes short of %d fragments", max_iterations, fragment_count)
    return None


def explode_mesh(
    mesh: IndexedMesh,
    fragment_count: int = DEFAULT_FRAGMENT_COUNT,
    max_iterations: int = MAX_ITERATIONS,
    *,
    rng: RandomSource = None,
) -> Optional[List[Tuple[IndexedMesh, Vec3]]]:
    """Like :func:`explode` but on the indexed representation."""

    fragments = explode(mesh, fragment_count, max_iterations, rng=rng)
    if fragments is None:
        return None
    return [(fragment.mesh.build(), fragment.direction) for fragment in fragments]


def explode_group(
    meshes: Mapping[Hashable, MeshLike],
    fragment_count: int = DEFAULT_FRAGMENT_COUNT,
    max_iterations: int = MAX_ITERATIONS,
    *,
    rng: RandomSource = None,
) -> Optional[List[Fragment]]:
    """Explode several meshes that belong to one object.

    Fragments are tagged with the key of their source mesh and returned in
    key order. If any mesh cannot be fragmented the whole group yields
    ``None``.
    """

    generator = _as_rng(rng)
    collected: List[Fragment] = []
    for key, mesh in meshes.items():
        fragments = explode(mesh, fragment_count, max_iterations, rng=generator)
        if fragments is None:
            logger.error("failed to slice mesh %r into fragments", key)
            return None
        for fragment in fragments:
            fragment.origin = key
            fragment.direction = normalize(fragment.direction)
        collected.extend(fragments)
    return collected


def explode_with_settings(mesh: MeshLike, settings: ExplodeSettings) -> Optional[List[Fragment]]:
    """Run :func:`explode` with parameters taken from ``settings``."""

    return explode(
        mesh,
        settings.fragment_count,
        settings.max_iterations,
        rng=settings.seed,
    )


__all__ = [
    "MAX_ITERATIONS",
    "DEFAULT_FRAGMENT_COUNT",
    "Fragment",
    "random_plane_normal",
    "explode",
    "explode_mesh",
    "explode_group",
    "explode_with_settings",
]
