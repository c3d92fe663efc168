# -*- coding: utf-8 -*-
"""Procedural triangle-soup meshes: geodesic spheres, displacement, plane
slicing and random-plane fragmentation."""

from importlib.metadata import PackageNotFoundError, version

from trishatter.builder import TriangleMeshBuilder
from trishatter.explode import Fragment, explode, explode_group, explode_mesh
from trishatter.geometry import Plane, Triangle
from trishatter.indexed import IndexedMesh

try:
    __version__ = version("trishatter")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    "TriangleMeshBuilder",
    "Fragment",
    "explode",
    "explode_group",
    "explode_mesh",
    "Plane",
    "Triangle",
    "IndexedMesh",
]
