"""STL import and export for triangle-soup meshes.

Triangles are written with their flat face normal and read back as
independent triangles; coincident vertices are never merged.
"""

from __future__ import annotations

import re
import struct
from typing import List

from trishatter.builder import TriangleMeshBuilder
from trishatter.geometry import Triangle

_HEADER_SIZE = 80
_RECORD_SIZE = 50
_STRUCT_TRIANGLE = struct.Struct('<12fH')

_NUM = r'([eE\d.+-]+)'
_FACET_PATTERN = re.compile(
    rf'facet\s+normal\s+{_NUM}\s+{_NUM}\s+{_NUM}\s+'
    r'outer\s+loop\s+'
    rf'vertex\s+{_NUM}\s+{_NUM}\s+{_NUM}\s+'
    rf'vertex\s+{_NUM}\s+{_NUM}\s+{_NUM}\s+'
    rf'vertex\s+{_NUM}\s+{_NUM}\s+{_NUM}\s+'
    r'endloop\s+endfacet',
    re.IGNORECASE,
)


def write_stl(mesh: TriangleMeshBuilder, path_or_file, *, binary: bool = True,
              name: str = 'trishatter') -> None:
    """Write ``mesh`` to STL.

    ``path_or_file`` can be a filesystem path or an open binary/text stream.
    """

    if binary:
        _write_binary(mesh, path_or_file, name)
    else:
        _write_ascii(mesh, path_or_file, name)


def _write_binary(mesh: TriangleMeshBuilder, path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'wb')
        close_when_done = True

    try:
        header = (name[:_HEADER_SIZE]).encode('ascii', errors='replace')
        stream.write(header.ljust(_HEADER_SIZE, b' '))
        stream.write(struct.pack('<I', len(mesh)))
        for normal, v0, v1, v2 in mesh.faces():
            stream.write(_STRUCT_TRIANGLE.pack(*normal, *v0, *v1, *v2, 0))
    finally:
        if close_when_done:
            stream.close()


def _write_ascii(mesh: TriangleMeshBuilder, path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    try:
        print(f"solid {name}", file=stream)
        for normal, v0, v1, v2 in mesh.faces():
            print(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}", file=stream)
            print("    outer loop", file=stream)
            for v in (v0, v1, v2):
                print(f"      vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}", file=stream)
            print("    endloop", file=stream)
            print("  endfacet", file=stream)
        print(f"endsolid {name}", file=stream)
    finally:
        if close_when_done:
            stream.close()


def _is_binary_stl(data: bytes) -> bool:
    """Binary STL is an 80 byte header, a count, then 50 bytes per triangle.

    ASCII STL starts with ``solid``, but so do some binary headers, so the
    size is checked as well.
    """
    if len(data) < _HEADER_SIZE + 4:
        return False

    header = data[:_HEADER_SIZE].decode('ascii', errors='ignore').strip().lower()
    if not header.startswith('solid'):
        return True
    tri_count = struct.unpack('<I', data[_HEADER_SIZE:_HEADER_SIZE + 4])[0]
    if len(data) != _HEADER_SIZE + 4 + tri_count * _RECORD_SIZE:
        return False
    rest = data[_HEADER_SIZE + 4:min(200, len(data))]
    return b'facet' not in rest and b'vertex' not in rest


def _parse_binary_stl(data: bytes) -> List[Triangle]:
    tri_count = struct.unpack('<I', data[_HEADER_SIZE:_HEADER_SIZE + 4])[0]
    triangles = []
    offset = _HEADER_SIZE + 4

    for _ in range(tri_count):
        if offset + _RECORD_SIZE > len(data):
            break
        values = _STRUCT_TRIANGLE.unpack(data[offset:offset + _RECORD_SIZE])
        triangles.append(Triangle(
            (values[3], values[4], values[5]),
            (values[6], values[7], values[8]),
            (values[9], values[10], values[11]),
        ))
        offset += _RECORD_SIZE

    return triangles


def _parse_ascii_stl(text: str) -> List[Triangle]:
    triangles = []
    for match in _FACET_PATTERN.finditer(text):
        g = [float(x) for x in match.groups()]
        # stored facet normals are ignored; winding defines the normal
        triangles.append(Triangle((g[3], g[4], g[5]), (g[6], g[7], g[8]), (g[9], g[10], g[11])))
    return triangles


def read_stl(path_or_file) -> TriangleMeshBuilder:
    """Read binary or ASCII STL into a :class:`TriangleMeshBuilder`.

    ``path_or_file`` can be a path or an open file object.
    """
    if hasattr(path_or_file, 'read'):
        data = path_or_file.read()
        if isinstance(data, str):
            data = data.encode('utf-8')
    else:
        with open(path_or_file, 'rb') as f:
            data = f.read()

    if _is_binary_stl(data):
        triangles = _parse_binary_stl(data)
    else:
        triangles = _parse_ascii_stl(data.decode('utf-8', errors='replace'))
    return TriangleMeshBuilder(triangles)


__all__ = ['write_stl', 'read_stl']
