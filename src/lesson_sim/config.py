# MIT License (see LICENSE)
"""
Configuration for the four demos.

Every tunable constant of a demo (initial state, walls, tick length, slider
ranges) lives in a frozen dataclass with the shipped values as defaults.
A JSON file can override any subset:

{
  "block":       {"dt": 0.1, "bound_max": 350.0, "mass": [1, 15, 5], ...},
  "projectile":  {"origin": [50, 350], "scale": 10.0, ...},
  "derivative":  {"sweep_step": 2.0, "sweep_bound": 50.0, ...},
  "integration": {"interval": 0.2, "samples": [5, 100, 20], ...}
}

Range entries are [minimum, maximum, default].

The log level comes from the LESSON_SIM_LOG_LEVEL environment variable.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
import json
import logging
import math
from pathlib import Path
from typing import Any

from .constants import FRAME_DT, PROJECTILE_SCALE
from .core.catalog import CATALOGS
from .errors import InvalidParameter
from .types import FunctionId
from .util import env_flag

logger = logging.getLogger(__name__)

Range = tuple[float, float, float]


def _check_dt(section: str, name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameter(f"{section}.{name} must be a positive number, got {value!r}")


def _check_range(section: str, name: str, rng: Range, floor: float | None = None,
                 strict: bool = False) -> None:
    """
    Validate a [minimum, maximum, default] range.

    Args:
        floor: Lowest value the physics accepts for this parameter.
        strict: The minimum must be strictly above floor (e.g. mass > 0).
    """
    lo, hi, default = rng
    if not all(math.isfinite(v) for v in rng):
        raise InvalidParameter(f"{section}.{name}: range must be finite, got {rng!r}")
    if not lo <= default <= hi:
        raise InvalidParameter(f"{section}.{name}: default {default} outside [{lo}, {hi}]")
    if floor is not None and (lo <= floor if strict else lo < floor):
        bound = ">" if strict else ">="
        raise InvalidParameter(f"{section}.{name}: minimum must be {bound} {floor}, got {lo}")


@dataclass(frozen=True)
class BlockConfig:
    dt: float = 0.1
    start_position: float = 50.0
    bound_min: float = 0.0
    bound_max: float = 350.0
    mass: Range = (1.0, 15.0, 5.0)
    force: Range = (0.0, 30.0, 10.0)
    friction: Range = (0.0, 0.5, 0.1)

    def __post_init__(self) -> None:
        _check_dt("block", "dt", self.dt)
        if not self.bound_min < self.bound_max:
            raise InvalidParameter(f"block: bound_min {self.bound_min} must be below bound_max {self.bound_max}")
        _check_range("block", "mass", self.mass, floor=0.0, strict=True)
        _check_range("block", "force", self.force)
        _check_range("block", "friction", self.friction, floor=0.0)


@dataclass(frozen=True)
class ProjectileConfig:
    dt: float = FRAME_DT
    origin: tuple[float, float] = (50.0, 350.0)
    scale: float = PROJECTILE_SCALE
    trajectory_step: float = 0.1
    angle: Range = (0.0, 90.0, 45.0)
    speed: Range = (5.0, 40.0, 20.0)
    gravity: Range = (1.0, 20.0, 9.8)

    def __post_init__(self) -> None:
        _check_dt("projectile", "dt", self.dt)
        _check_dt("projectile", "scale", self.scale)
        _check_dt("projectile", "trajectory_step", self.trajectory_step)
        _check_range("projectile", "angle", self.angle, floor=0.0)
        if self.angle[1] > 90.0:
            raise InvalidParameter(f"projectile.angle: maximum must be <= 90, got {self.angle[1]}")
        _check_range("projectile", "speed", self.speed, floor=0.0, strict=True)
        # g <= 0 never brings the projectile back to the ground
        _check_range("projectile", "gravity", self.gravity, floor=0.0, strict=True)


@dataclass(frozen=True)
class DerivativeConfig:
    dt: float = FRAME_DT
    function: FunctionId = FunctionId.QUADRATIC
    sweep_step: float = 2.0
    sweep_bound: float = 50.0
    tangent_half_width: float = 30.0
    slope_triangle_limit: float = 10.0
    x: Range = (-40.0, 40.0, 0.0)

    def __post_init__(self) -> None:
        _check_dt("derivative", "dt", self.dt)
        _check_dt("derivative", "sweep_step", self.sweep_step)
        _check_dt("derivative", "sweep_bound", self.sweep_bound)
        _check_range("derivative", "x", self.x)
        if self.function not in CATALOGS["derivative"]:
            raise InvalidParameter(f"derivative.function: {self.function.value!r} is not in the derivative catalog")


@dataclass(frozen=True)
class IntegrationConfig:
    interval: float = 0.2
    function: FunctionId = FunctionId.QUADRATIC
    bound_gap: float = 1.0
    lower: Range = (-20.0, 20.0, -10.0)
    upper: Range = (-20.0, 20.0, 10.0)
    samples: Range = (5.0, 100.0, 20.0)

    def __post_init__(self) -> None:
        _check_dt("integration", "interval", self.interval)
        _check_dt("integration", "bound_gap", self.bound_gap)
        _check_range("integration", "lower", self.lower)
        _check_range("integration", "upper", self.upper)
        if self.lower[2] + self.bound_gap > self.upper[2]:
            raise InvalidParameter("integration: default lower + bound_gap must not exceed default upper")
        _check_range("integration", "samples", self.samples, floor=1.0)
        if self.function not in CATALOGS["integration"]:
            raise InvalidParameter(f"integration.function: {self.function.value!r} is not in the integration catalog")


@dataclass(frozen=True)
class SimulationConfig:
    block: BlockConfig = field(default_factory=BlockConfig)
    projectile: ProjectileConfig = field(default_factory=ProjectileConfig)
    derivative: DerivativeConfig = field(default_factory=DerivativeConfig)
    integration: IntegrationConfig = field(default_factory=IntegrationConfig)


def _number(section: str, name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{section}.{name}: expected a number, got {value!r}")
    return float(value)


def _coerce(section: str, name: str, current: Any, value: Any) -> Any:
    if isinstance(current, FunctionId):
        try:
            return FunctionId(value)
        except ValueError:
            raise InvalidParameter(f"{section}.{name}: unknown function {value!r}") from None
    if isinstance(current, tuple):
        if not isinstance(value, (list, tuple)) or len(value) != len(current):
            raise InvalidParameter(f"{section}.{name}: expected {len(current)} numbers, got {value!r}")
        return tuple(_number(section, name, v) for v in value)
    return _number(section, name, value)


def _section_from_dict(section: str, base, data: dict[str, Any]):
    known = {f.name for f in fields(base)}
    unknown = set(data) - known
    if unknown:
        raise InvalidParameter(f"Unknown keys in {section}: {sorted(unknown)}")
    changes = {k: _coerce(section, k, getattr(base, k), v) for k, v in data.items()}
    return replace(base, **changes)


def config_from_dict(data: dict[str, Any]) -> SimulationConfig:
    """
    Build a SimulationConfig from a nested dict, starting from the defaults.

    Raises:
        InvalidParameter: On unknown sections/keys or badly typed values.
    """
    base = SimulationConfig()
    unknown = set(data) - {f.name for f in fields(base)}
    if unknown:
        raise InvalidParameter(f"Unknown config sections: {sorted(unknown)}")
    changes = {
        name: _section_from_dict(name, getattr(base, name), section)
        for name, section in data.items()
    }
    return replace(base, **changes)


def load_config(path: str | Path) -> SimulationConfig:
    """Load a JSON configuration file."""
    path = Path(path)
    logger.info("Loading simulation config from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidParameter(f"Config root must be an object, got {type(data).__name__}")
    return config_from_dict(data)


def log_level_from_env(default: int = logging.INFO) -> int:
    """Resolve LESSON_SIM_LOG_LEVEL (a level name such as "DEBUG") to a logging level."""
    name = env_flag("LESSON_SIM_LOG_LEVEL").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default
