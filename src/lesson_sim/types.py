# MIT License (see LICENSE)
"""
Core type definitions for the lesson simulations.

Defines the fundamental data structures:
- FunctionId / FunctionSpec: the closed set of catalog functions.
- KinematicState: the friction block's 1D state.
- ProjectileState: the projectile's 2D state and bounded trail.
- Result records produced by the numeric approximators.
- Snapshots: frozen, renderer-facing copies of each scene's state.

Mutable states are owned by exactly one scene and only changed during a tick
(or by reset). Snapshots hold plain floats and tuples so a renderer cannot
reach back into simulation state.
"""
from __future__ import annotations
from collections import deque
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable

import numpy as np

from .constants import TRAIL_CAPACITY
from .util import f64


# =============================================================================
# Catalog functions
# =============================================================================

class FunctionId(str, Enum):
    """Type tag for the closed set of catalog functions."""
    QUADRATIC = "quadratic"
    CUBIC = "cubic"
    SINE = "sine"
    EXPONENTIAL = "exponential"
    LINEAR = "linear"


@dataclass(frozen=True)
class FunctionSpec:
    """
    A closed-form function with its exact derivative and antiderivative.

    Attributes:
        id: Catalog tag.
        display_name: Human readable formula, e.g. "f(x) = 0.1x² - 2".
        f: Function value; accepts floats or numpy arrays.
        df: Exact derivative of f, or None.
        antiderivative: An antiderivative F of f (F' = f), or None when no
            closed-form integral is wired for the catalog.
        derivative_name: Human readable derivative formula.
    """
    id: FunctionId
    display_name: str
    f: Callable[[Any], Any]
    df: Callable[[Any], Any] | None = None
    antiderivative: Callable[[Any], Any] | None = None
    derivative_name: str = ""

    def evaluate(self, x):
        """f(x)."""
        return self.f(x)

    def derivative(self, x):
        """f'(x), or None when the catalog carries no derivative."""
        if self.df is None:
            return None
        return self.df(x)

    def integral(self, a: float, b: float) -> float | None:
        """Exact definite integral of f over [a, b], or None if not wired."""
        if self.antiderivative is None:
            return None
        F = self.antiderivative
        return float(F(b) - F(a))


# =============================================================================
# Simulation state
# =============================================================================

@dataclass
class KinematicState:
    """
    State of the block sliding on a surface.

    Attributes:
        position: Left edge of the block in canvas units.
        velocity: Velocity in canvas units per tick-scale (see steppers.step_block).
        acceleration: Acceleration computed on the last tick.
        friction_force: Kinetic friction applied on the last tick (N).
        net_force: Applied force plus friction on the last tick (N).
    """
    position: float = 50.0
    velocity: float = 0.0
    acceleration: float = 0.0
    friction_force: float = 0.0
    net_force: float = 0.0


@dataclass
class ProjectileState:
    """
    State of a launched projectile in canvas coordinates (y grows downward).

    Attributes:
        position: Current [x, y].
        velocity: Current [vx, vy] in m/s, vy positive upward.
        trail: Past positions, oldest first, at most TRAIL_CAPACITY entries.
        elapsed: Simulated flight time in seconds.
        launched: True once the projectile has been fired.
        landed: True once it reached the ground line.
    """
    position: np.ndarray | tuple[float, float] = (50.0, 350.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    trail: deque = field(default_factory=lambda: deque(maxlen=TRAIL_CAPACITY))
    elapsed: float = 0.0
    launched: bool = False
    landed: bool = False

    def __post_init__(self) -> None:
        """Convert position/velocity to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)


@dataclass(frozen=True)
class ProjectilePrediction:
    """Closed-form flight values for an ideal projectile (meters, seconds)."""
    max_height: float
    range: float
    time_of_flight: float


@dataclass(frozen=True)
class TangentPoint:
    """A point on a curve with its exact slope."""
    x: float
    value: float
    slope: float

    def line(self, half_width: float) -> tuple[tuple[float, float], tuple[float, float]]:
        """Endpoints of the tangent line spanning x ± half_width."""
        x1 = self.x - half_width
        x2 = self.x + half_width
        return (
            (x1, self.value - self.slope * half_width),
            (x2, self.value + self.slope * half_width),
        )


@dataclass(frozen=True)
class RiemannResult:
    """A midpoint Riemann sum compared against the exact integral."""
    approximation: float
    exact: float | None
    error: float | None
    n: int
    dx: float


# =============================================================================
# Snapshots handed to renderers
# =============================================================================

class _Snapshot:
    """Mixin providing a plain-dict view for serialising renderers."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BlockSnapshot(_Snapshot):
    time: float
    clock_state: str
    position: float
    velocity: float
    acceleration: float
    friction_force: float
    net_force: float
    mass: float
    force: float
    friction: float


@dataclass(frozen=True)
class ProjectileSnapshot(_Snapshot):
    time: float
    clock_state: str
    position: tuple[float, float]
    velocity: tuple[float, float]
    trail: tuple[tuple[float, float], ...]
    elapsed: float
    launched: bool
    landed: bool
    distance: float
    height: float
    angle: float
    speed: float
    gravity: float
    prediction: ProjectilePrediction | None


@dataclass(frozen=True)
class DerivativeSnapshot(_Snapshot):
    time: float
    clock_state: str
    function: str
    display_name: str
    derivative_name: str
    tangent: TangentPoint
    slope_estimate: float
    tangent_line: tuple[tuple[float, float], tuple[float, float]]
    show_slope_triangle: bool


@dataclass(frozen=True)
class IntegrationSnapshot(_Snapshot):
    time: float
    clock_state: str
    function: str
    display_name: str
    lower: float
    upper: float
    n: int
    dx: float
    cursor: int
    partial_sum: float
    heights: tuple[float, ...]
    result: RiemannResult
    complete: bool
