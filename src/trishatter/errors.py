"""Exceptions raised by trishatter.

Expected geometric outcomes (a plane that misses the mesh, a fragmentation
budget that runs out) are reported as ``None`` return values, not exceptions.
The classes here cover malformed input and programming errors.
"""


class TrishatterError(Exception):
    """Base class for trishatter errors."""


class MeshFormatError(TrishatterError, ValueError):
    """An interchange mesh is missing data or uses an unsupported encoding."""


class DegenerateGeometryError(TrishatterError, ValueError):
    """A geometric query has no well-defined answer for its input."""


__all__ = ["TrishatterError", "MeshFormatError", "DegenerateGeometryError"]
