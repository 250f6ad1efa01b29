# MIT License (see LICENSE)
"""
Core simulation and numeric components.

This subpackage provides:
    - Function catalogs: closed sets of functions with exact calculus.
    - Approximators: tangents, finite differences, Riemann sums.
    - Steppers: one-tick advances for the block and the projectile.
    - Invariants: closed-form reference values.

Typical usage:
    from lesson_sim.core import INTEGRATION_CATALOG, riemann_sum

    spec = INTEGRATION_CATALOG.get("quadratic")
    riemann_sum(spec, -10, 10, 40).error
"""
from .catalog import (
    CATALOGS,
    DERIVATIVE_CATALOG,
    INTEGRATION_CATALOG,
    FunctionCatalog,
)
from .approximators import (
    RiemannAccumulator,
    central_difference,
    midpoints,
    riemann_sum,
    sample_curve,
    sweep_next,
    tangent_at,
)
from .steppers import launch_projectile, launch_velocity, step_block, step_projectile
from .invariants import block_kinetic_energy, predicted_trajectory, projectile_prediction

__all__ = [
    # Catalogs
    "CATALOGS",
    "DERIVATIVE_CATALOG",
    "INTEGRATION_CATALOG",
    "FunctionCatalog",
    # Approximators
    "RiemannAccumulator",
    "central_difference",
    "midpoints",
    "riemann_sum",
    "sample_curve",
    "sweep_next",
    "tangent_at",
    # Steppers
    "launch_projectile",
    "launch_velocity",
    "step_block",
    "step_projectile",
    # Invariants
    "block_kinetic_energy",
    "predicted_trajectory",
    "projectile_prediction",
]
