"""Settings for mesh generation and fragmentation.

Settings can be built in code or loaded from a YAML file such as::

    mesh:
      resolution: 3
      noise_amplitude: 0.15
      noise_frequency: 2.0
    explode:
      fragment_count: 8
      max_iterations: 10
      seed: 42
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

MAX_ITERATIONS = 10
DEFAULT_FRAGMENT_COUNT = 4
DEFAULT_RESOLUTION = 3


def _require_int(name: str, value: Any, *, optional: bool = False) -> None:
    if optional and value is None:
        return
    # bool is an int subclass but ``fragment_count: true`` is a typo, not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass
class ExplodeSettings:
    """Parameters for :func:`trishatter.explode.explode`."""

    fragment_count: int = DEFAULT_FRAGMENT_COUNT
    max_iterations: int = MAX_ITERATIONS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        _require_int("fragment_count", self.fragment_count)
        _require_int("max_iterations", self.max_iterations)
        _require_int("seed", self.seed, optional=True)
        if self.fragment_count < 1:
            raise ValueError("fragment_count must be at least 1")
        if self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative")


@dataclass
class MeshSettings:
    """Parameters for generating a displaced geodesic sphere."""

    resolution: int = DEFAULT_RESOLUTION
    noise_amplitude: float = 0.0
    noise_frequency: float = 1.0

    def __post_init__(self) -> None:
        _require_int("resolution", self.resolution)
        _require_number("noise_amplitude", self.noise_amplitude)
        _require_number("noise_frequency", self.noise_frequency)
        if self.resolution < 0:
            raise ValueError("resolution must be non-negative")


@dataclass
class Settings:
    mesh: MeshSettings = field(default_factory=MeshSettings)
    explode: ExplodeSettings = field(default_factory=ExplodeSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        unknown = set(data) - {"mesh", "explode"}
        if unknown:
            raise ValueError(f"unknown settings sections: {', '.join(sorted(unknown))}")
        return cls(
            mesh=_parse_section(MeshSettings, data.get("mesh")),
            explode=_parse_section(ExplodeSettings, data.get("explode")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parse_section(section_cls, raw: Optional[Mapping[str, Any]]):
    if raw is None:
        return section_cls()
    if not isinstance(raw, Mapping):
        raise ValueError(f"{section_cls.__name__} section must be a mapping, got {type(raw)!r}")
    known = {f.name for f in fields(section_cls)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(
            f"unknown keys for {section_cls.__name__}: {', '.join(sorted(unknown))}"
        )
    return section_cls(**raw)


def load_settings(path: Path | str) -> Settings:
    """Load a YAML settings file and return the normalised :class:`Settings`."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"settings file not found: {settings_path}")
    import yaml

    with settings_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"settings must be a mapping, got {type(data)!r}")
    return Settings.from_dict(data)


__all__ = [
    "MAX_ITERATIONS",
    "DEFAULT_FRAGMENT_COUNT",
    "DEFAULT_RESOLUTION",
    "ExplodeSettings",
    "MeshSettings",
    "Settings",
    "load_settings",
]
