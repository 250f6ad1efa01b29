# MIT License (see LICENSE)
"""
lesson_sim - Simulation and numeric core for interactive physics/math lessons.

This package drives four small demos: a force-and-friction block, a
projectile launcher, a derivative/tangent explorer and a Riemann-sum
integrator. It produces state snapshots; painting them is left to a renderer.

Main entry points:
    - ForceFrictionScene, ProjectileScene, DerivativeScene, IntegrationScene:
      demo controllers with start/pause/reset/set_parameter/get_state.
    - SimulationClock, ManualScheduler, AsyncioScheduler: tick scheduling.
    - FunctionId: tags of the catalog functions.

Submodules:
    - core: Function catalogs, approximators, steppers, invariants.
    - scenes: Demo controllers.
    - renderer: Optional snapshot consumers.
    - config: Dataclass configuration and JSON loading.

Example:
    from lesson_sim import ProjectileScene, ManualScheduler

    sched = ManualScheduler()
    scene = ProjectileScene(scheduler=sched)
    scene.start()
    sched.run_frames(200)
    scene.get_state().landed
"""
from .clock import AsyncioScheduler, ClockState, ManualScheduler, SimulationClock
from .config import SimulationConfig, load_config
from .errors import DomainGap, InvalidParameter, SimulationError
from .params import ParameterStore, ParamSpec
from .scenes import DerivativeScene, ForceFrictionScene, IntegrationScene, ProjectileScene
from .types import FunctionId, FunctionSpec

__all__ = [
    # Scenes
    "ForceFrictionScene",
    "ProjectileScene",
    "DerivativeScene",
    "IntegrationScene",
    # Clock
    "SimulationClock",
    "ClockState",
    "ManualScheduler",
    "AsyncioScheduler",
    # Parameters and config
    "ParameterStore",
    "ParamSpec",
    "SimulationConfig",
    "load_config",
    # Functions
    "FunctionId",
    "FunctionSpec",
    # Errors
    "SimulationError",
    "InvalidParameter",
    "DomainGap",
]
