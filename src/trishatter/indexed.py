"""Indexed triangle-list meshes as handed to renderers and colliders.

An :class:`IndexedMesh` carries named vertex attributes (positions, normals,
UVs) as numpy arrays plus a flat index buffer, three indices per triangle.
Positions must be ``(N, 3)`` floating point arrays; indices may be 16- or
32-bit unsigned and are widened to 32 bits on ingestion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from trishatter.errors import MeshFormatError

logger = logging.getLogger(__name__)

ATTRIBUTE_POSITION = "position"
ATTRIBUTE_NORMAL = "normal"
ATTRIBUTE_UV_0 = "uv_0"

_FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))
_INDEX_DTYPES = (np.dtype(np.uint16), np.dtype(np.uint32))


@dataclass
class IndexedMesh:
    """Vertex attribute buffers plus a triangle-list index buffer."""

    attributes: Dict[str, np.ndarray] = field(default_factory=dict)
    indices: Optional[np.ndarray] = None

    @property
    def vertex_count(self) -> int:
        positions = self.attributes.get(ATTRIBUTE_POSITION)
        return 0 if positions is None else len(positions)

    @property
    def triangle_count(self) -> int:
        return 0 if self.indices is None else len(self.indices) // 3

    def attribute(self, name: str) -> Optional[np.ndarray]:
        return self.attributes.get(name)

    def with_attribute(self, name: str, values) -> "IndexedMesh":
        self.attributes[name] = np.asarray(values)
        return self

    def with_indices(self, indices) -> "IndexedMesh":
        self.indices = np.asarray(indices)
        return self


def positions_of(mesh: IndexedMesh) -> np.ndarray:
    """Return the position buffer as ``float64`` ``(N, 3)``.

    Raises :class:`MeshFormatError` if the attribute is missing or is not a
    floating point array of 3-vectors.
    """

    positions = mesh.attribute(ATTRIBUTE_POSITION)
    if positions is None:
        raise MeshFormatError("mesh has no position attribute")
    positions = np.asarray(positions)
    if positions.dtype not in _FLOAT_DTYPES:
        raise MeshFormatError(f"unsupported position format: {positions.dtype}")
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise MeshFormatError(f"positions must have shape (N, 3), got {positions.shape}")
    return positions.astype(np.float64, copy=False)


def indices_of(mesh: IndexedMesh) -> np.ndarray:
    """Return the index buffer widened to ``uint32``.

    Raises :class:`MeshFormatError` for a missing buffer, an unsupported
    integer type, a length that is not a multiple of three, or indices past
    the end of the position buffer.
    """

    if mesh.indices is None:
        raise MeshFormatError("mesh has no index buffer")
    indices = np.asarray(mesh.indices)
    if indices.dtype not in _INDEX_DTYPES:
        raise MeshFormatError(f"unsupported index format: {indices.dtype}")
    if indices.ndim != 1:
        raise MeshFormatError("index buffer must be one-dimensional")
    if len(indices) % 3:
        raise MeshFormatError(f"index count {len(indices)} is not a multiple of 3")
    if indices.dtype == np.uint16:
        logger.debug("widening %d 16-bit indices", len(indices))
        indices = indices.astype(np.uint32)
    if len(indices) and int(indices.max()) >= mesh.vertex_count:
        raise MeshFormatError("index buffer refers past the end of the position buffer")
    return indices


__all__ = [
    "ATTRIBUTE_POSITION",
    "ATTRIBUTE_NORMAL",
    "ATTRIBUTE_UV_0",
    "IndexedMesh",
    "positions_of",
    "indices_of",
]
