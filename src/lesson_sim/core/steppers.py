# MIT License (see LICENSE)
"""
Kinematics steppers for the block and projectile demos.

Each stepper advances one state object by a single tick, in place, from an
already-validated parameter set. Steppers never read the parameter store
themselves: the caller passes one consistent snapshot of values per tick.

Block on a surface (simplified kinetic friction, no static threshold):
    f   = -sgn(v)·μ·m·g            (0 when v == 0)
    a   = (F + f) / m
    v'  = v + a·dt                  (snapped to 0 when |v'| < ε)
    x'  = x + v·VISUAL_SPEED        (pre-update velocity, not v·dt)

Projectile (canvas y axis points down, vy positive upward):
    vy' = vy - g·dt
    x'  = x + vx·dt·k
    y'  = y - ½(vy + vy')·dt·k      (exact for constant g)
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..constants import (
    G_SURFACE,
    PROJECTILE_SCALE,
    RESTITUTION,
    VELOCITY_EPS,
    VISUAL_SPEED,
)
from ..types import KinematicState, ProjectileState
from ..util import clamp, ensure_finite, f64, sign

logger = logging.getLogger(__name__)


def step_block(
    state: KinematicState,
    mass: float,
    applied_force: float,
    friction_coefficient: float,
    dt: float,
    bound_max: float = 350.0,
    bound_min: float = 0.0,
    g: float = G_SURFACE,
) -> None:
    """
    Advance the sliding block by one tick.

    Friction opposes the current direction of motion and is zero at rest.
    It can bring the block to a stop but never reverses it: if the friction
    contribution alone would carry the velocity across zero, the velocity is
    set to zero instead.

    At the walls the position is clamped into [bound_min, bound_max] and the
    velocity is reversed, keeping RESTITUTION of its magnitude.

    Args:
        state: Block state (modified in-place).
        mass: Mass in kg, must be > 0 (guaranteed by the parameter store).
        applied_force: Constant push in N along +x.
        friction_coefficient: Kinetic friction coefficient μ.
        dt: Tick duration in seconds.
        bound_max: Right wall position.
        bound_min: Left wall position.
        g: Gravitational acceleration for the normal force.
    """
    v = state.velocity
    friction_force = -sign(v) * friction_coefficient * mass * g if v != 0 else 0.0
    net_force = applied_force + friction_force
    acceleration = net_force / mass

    v_new = v + acceleration * dt
    if friction_force != 0.0:
        v_pushed = v + (applied_force / mass) * dt
        if v_pushed * v_new < 0:
            v_new = 0.0
    if abs(v_new) < VELOCITY_EPS:
        v_new = 0.0

    x_new = state.position + v * VISUAL_SPEED
    if x_new < bound_min or x_new > bound_max:
        x_new = clamp(x_new, bound_min, bound_max)
        v_new = -v_new * RESTITUTION

    ensure_finite("block state", x_new, v_new, acceleration)
    state.position = x_new
    state.velocity = v_new + 0.0  # normalise -0.0
    state.acceleration = acceleration
    state.friction_force = friction_force + 0.0
    state.net_force = net_force


def launch_velocity(speed: float, angle_deg: float) -> np.ndarray:
    """Decompose a launch speed and elevation angle into [vx, vy]."""
    theta = math.radians(angle_deg)
    return f64((speed * math.cos(theta), speed * math.sin(theta)))


def launch_projectile(
    state: ProjectileState,
    speed: float,
    angle_deg: float,
    origin: tuple[float, float],
) -> None:
    """
    Place a fresh projectile at the launch origin.

    Clears the trail and the elapsed flight time.
    """
    state.position = f64(origin)
    state.velocity = launch_velocity(speed, angle_deg)
    state.trail.clear()
    state.elapsed = 0.0
    state.launched = True
    state.landed = False


def step_projectile(
    state: ProjectileState,
    gravity: float,
    dt: float,
    ground_y: float,
    scale: float = PROJECTILE_SCALE,
) -> bool:
    """
    Advance a projectile in flight by one tick.

    The pre-update position is appended to the bounded trail. When the new
    position reaches or crosses the ground line, y is clamped to the ground,
    the vertical velocity is zeroed and the projectile is marked as landed.

    y moves by the mean of vy and vy' rather than the pre-update vy, so the
    landing point agrees with the closed-form range to within one tick.

    Args:
        state: Projectile state (modified in-place).
        gravity: Gravitational acceleration in m/s².
        dt: Tick duration in seconds.
        ground_y: Canvas y of the ground line.
        scale: Canvas units per meter.

    Returns:
        True while the projectile is still in flight after this tick.
    """
    if not state.launched or state.landed:
        return False

    x, y = float(state.position[0]), float(state.position[1])
    vx, vy = float(state.velocity[0]), float(state.velocity[1])

    vy_new = vy - gravity * dt
    x_new = x + vx * dt * scale
    y_new = y - 0.5 * (vy + vy_new) * dt * scale

    ensure_finite("projectile state", x_new, y_new, vy_new)
    state.trail.append((x, y))
    state.elapsed += dt

    if y_new >= ground_y:
        state.position = f64((x_new, ground_y))
        state.velocity = f64((vx, 0.0))
        state.landed = True
        logger.info("Projectile landed at x=%.2f after %.3fs", x_new, state.elapsed)
        return False

    state.position = f64((x_new, y_new))
    state.velocity = f64((vx, vy_new))
    return True
