"""Command line for generating and shattering meshes.

Usage:
    python -m trishatter [-c settings.yaml] sphere -o sphere.stl [--resolution N]
        [--noise-amplitude A] [--noise-frequency F]
    python -m trishatter [-c settings.yaml] explode INPUT.stl -o OUTDIR
        [--fragments N] [--max-iterations M] [--seed S]

``explode`` writes one STL per fragment plus ``fragments.yaml`` listing the
files and their explosion directions.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Callable, Optional, Sequence

from trishatter.builder import TriangleMeshBuilder
from trishatter.config import ExplodeSettings, MeshSettings, Settings, load_settings
from trishatter.explode import explode_with_settings
from trishatter.geometry import Vec3
from trishatter.io.stl import read_stl, write_stl

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_USAGE = 2


def ripple_noise(amplitude: float, frequency: float) -> Callable[[Vec3], float]:
    """A smooth deterministic height field made of crossed sine waves."""

    def height(p: Vec3) -> float:
        x, y, z = p[0] * frequency, p[1] * frequency, p[2] * frequency
        return amplitude * (
            math.sin(x * 1.7 + z * 0.3)
            * math.cos(y * 2.3 - x * 0.5)
            + 0.5 * math.sin(z * 3.1 + y * 1.1)
        ) / 1.5

    return height


def _override(value, default):
    return default if value is None else value


def make_sphere(settings: MeshSettings) -> TriangleMeshBuilder:
    builder = TriangleMeshBuilder.new_octahedron(settings.resolution)
    if settings.noise_amplitude:
        builder.apply_noise(ripple_noise(settings.noise_amplitude, settings.noise_frequency))
    return builder


def cmd_sphere(args, settings: Settings) -> int:
    mesh_settings = MeshSettings(
        resolution=_override(args.resolution, settings.mesh.resolution),
        noise_amplitude=_override(args.noise_amplitude, settings.mesh.noise_amplitude),
        noise_frequency=_override(args.noise_frequency, settings.mesh.noise_frequency),
    )

    builder = make_sphere(mesh_settings)
    write_stl(builder, args.output, binary=not args.ascii)
    logger.info("wrote %d triangles to %s", len(builder), args.output)
    print(f"Exported to: {args.output}")
    return EXIT_OK


def cmd_explode(args, settings: Settings) -> int:
    explode_settings = ExplodeSettings(
        fragment_count=_override(args.fragments, settings.explode.fragment_count),
        max_iterations=_override(args.max_iterations, settings.explode.max_iterations),
        seed=_override(args.seed, settings.explode.seed),
    )

    mesh = read_stl(args.input)
    if mesh.is_empty():
        logger.error("%s contains no triangles", args.input)
        return EXIT_NO_RESULT

    fragments = explode_with_settings(mesh, explode_settings)
    if fragments is None:
        print(f"Could not split {args.input} into {explode_settings.fragment_count} fragments")
        return EXIT_NO_RESULT

    import yaml

    outdir = Path(args.output)
    outdir.mkdir(parents=True, exist_ok=True)
    stem = Path(args.input).stem
    index = []
    for i, fragment in enumerate(fragments):
        filename = f"{stem}_{i:03d}.stl"
        write_stl(fragment.mesh, outdir / filename, binary=not args.ascii)
        index.append({
            "file": filename,
            "triangles": len(fragment.mesh),
            "direction": [float(c) for c in fragment.direction],
        })
    with (outdir / "fragments.yaml").open("w", encoding="utf-8") as fp:
        yaml.safe_dump({"source": str(args.input), "fragments": index}, fp, sort_keys=False)

    print(f"Wrote {len(fragments)} fragments to {outdir}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m trishatter',
        description='Generate geodesic meshes and shatter them with random planes',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('-c', '--config', metavar='FILE', help='YAML settings file')

    subparsers = parser.add_subparsers(dest='action', required=True)

    sphere_parser = subparsers.add_parser('sphere', help='Write a subdivided octahedron sphere')
    sphere_parser.add_argument('-o', '--output', required=True, metavar='FILE', help='Output STL file')
    sphere_parser.add_argument('-r', '--resolution', type=int, help='Subdivision depth')
    sphere_parser.add_argument('--noise-amplitude', type=float, help='Radial displacement amplitude')
    sphere_parser.add_argument('--noise-frequency', type=float, help='Radial displacement frequency')
    sphere_parser.add_argument('--ascii', action='store_true', help='Write ASCII STL')

    explode_parser = subparsers.add_parser('explode', help='Shatter an STL mesh into fragments')
    explode_parser.add_argument('input', help='Input STL file')
    explode_parser.add_argument('-o', '--output', required=True, metavar='DIR', help='Output directory')
    explode_parser.add_argument('-n', '--fragments', type=int, help='Minimum number of fragments')
    explode_parser.add_argument('--max-iterations', type=int, help='Maximum slicing passes')
    explode_parser.add_argument('--seed', type=int, help='Random seed')
    explode_parser.add_argument('--ascii', action='store_true', help='Write ASCII STL')

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        settings = load_settings(args.config) if args.config else Settings()
        if args.action == 'sphere':
            return cmd_sphere(args, settings)
        return cmd_explode(args, settings)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_USAGE


__all__ = ['ripple_noise', 'make_sphere', 'build_parser', 'main']
