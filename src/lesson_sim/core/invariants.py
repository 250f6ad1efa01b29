# MIT License (see LICENSE)
"""
Closed-form reference values for verifying the steppers.

Used to display the theoretical flight figures next to the animation and to
check the stepped trajectories against analytic results in tests.
"""
from __future__ import annotations
import math

import numpy as np

from ..types import ProjectilePrediction
from .steppers import launch_velocity


def projectile_prediction(speed: float, angle_deg: float, gravity: float) -> ProjectilePrediction:
    """
    Ideal projectile figures on flat ground, no drag.

    H = vy² / (2g)
    R = v²·sin(2θ) / g
    T = 2·vy / g

    Args:
        speed: Launch speed v in m/s.
        angle_deg: Elevation θ in degrees.
        gravity: g in m/s², must be > 0.
    """
    vy = speed * math.sin(math.radians(angle_deg))
    return ProjectilePrediction(
        max_height=vy * vy / (2 * gravity),
        range=speed * speed * math.sin(2 * math.radians(angle_deg)) / gravity,
        time_of_flight=2 * vy / gravity,
    )


def predicted_trajectory(
    origin: tuple[float, float],
    speed: float,
    angle_deg: float,
    gravity: float,
    scale: float,
    step: float = 0.1,
) -> np.ndarray:
    """
    Sample the ideal parabola in canvas coordinates every `step` seconds.

    x(t) = x0 + vx·t·k
    y(t) = y0 - (vy·t - ½·g·t²)·k

    Samples stop at the time of flight; the landing point itself is always
    included.

    Returns:
        Array of shape [N, 2] with N ≥ 1.
    """
    vx, vy = launch_velocity(speed, angle_deg)
    T = 2 * vy / gravity
    ts = np.arange(0.0, T, step, dtype=np.float64) if T > 0 else np.zeros(1)
    ts = np.append(ts, max(T, 0.0))
    xs = origin[0] + vx * ts * scale
    ys = origin[1] - (vy * ts - 0.5 * gravity * ts * ts) * scale
    ys = np.minimum(ys, origin[1])
    return np.column_stack([xs, ys])


def block_kinetic_energy(mass: float, velocity: float) -> float:
    """T = ½·m·v²."""
    return 0.5 * mass * velocity * velocity
