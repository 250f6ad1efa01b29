# MIT License (see LICENSE)
"""
Demo controllers.

    - ForceFrictionScene: block pushed across a surface with friction.
    - ProjectileScene: one-shot projectile launch with trail.
    - DerivativeScene: tangent line on a sweeping point.
    - IntegrationScene: midpoint Riemann sum, rectangle by rectangle.

Each scene exposes get_state(), start(), pause(), reset() and
set_parameter(name, value).
"""
from .base import FunctionScene, Scene
from .block import ForceFrictionScene
from .projectile import ProjectileScene
from .derivative import DerivativeScene
from .integration import IntegrationScene

__all__ = [
    "Scene",
    "FunctionScene",
    "ForceFrictionScene",
    "ProjectileScene",
    "DerivativeScene",
    "IntegrationScene",
]
