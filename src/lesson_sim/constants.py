# MIT License (see LICENSE)
"""
Physical and presentation constants shared by the demos.

Distances in the block and projectile demos are expressed in canvas units
(the coordinate system the renderer paints in); the projectile demo converts
meters to canvas units with PROJECTILE_SCALE.
"""
from __future__ import annotations

# Gravitational acceleration used by the friction model, in m/s².
G_SURFACE: float = 9.8

# Velocities below this magnitude are snapped to exactly zero to stop drift.
VELOCITY_EPS: float = 0.01

# Fraction of speed kept after the block hits a wall.
RESTITUTION: float = 0.8

# Canvas units the block moves per unit of velocity per tick.
# The block's position update is position + velocity * VISUAL_SPEED, not v·dt.
VISUAL_SPEED: float = 2.0

# Maximum number of points kept in a projectile trail.
TRAIL_CAPACITY: int = 100

# Canvas units per meter for projectile motion.
PROJECTILE_SCALE: float = 10.0

# Nominal frame duration, ~60 fps.
FRAME_DT: float = 0.016
