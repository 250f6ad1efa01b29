# MIT License (see LICENSE)
"""
Force-and-friction block demo.

A block of adjustable mass is pushed by a constant force across a surface
with kinetic friction and bounces off the walls at both ends. See
core.steppers.step_block for the update rule.
"""
from __future__ import annotations
from typing import Mapping

from ..clock import Scheduler
from ..config import BlockConfig
from ..core.steppers import step_block
from ..params import ParameterStore, ParamSpec
from ..types import BlockSnapshot, KinematicState
from .base import Scene


class ForceFrictionScene(Scene):
    """
    Controller for the block demo.

    Parameters: mass [kg], force [N], friction [μ]; all may change at any
    time and take effect on the next tick.

    Example:
        scene = ForceFrictionScene(scheduler=ManualScheduler())
        scene.set_parameter("force", 20)
        scene.start()
    """

    def __init__(
        self,
        config: BlockConfig | None = None,
        scheduler: Scheduler | None = None,
        renderer=None,
    ):
        self.config = config or BlockConfig()
        params = ParameterStore([
            ParamSpec("mass", *self.config.mass),
            ParamSpec("force", *self.config.force),
            ParamSpec("friction", *self.config.friction),
        ])
        super().__init__(params, scheduler=scheduler, dt=self.config.dt, renderer=renderer)

    def _reset_state(self) -> None:
        self.state = KinematicState(position=self.config.start_position)

    def _advance(self, params: Mapping[str, float], dt: float) -> bool:
        step_block(
            self.state,
            mass=params["mass"],
            applied_force=params["force"],
            friction_coefficient=params["friction"],
            dt=dt,
            bound_max=self.config.bound_max,
            bound_min=self.config.bound_min,
        )
        return True

    def get_state(self) -> BlockSnapshot:
        s = self.state
        p = self.params.snapshot()
        return BlockSnapshot(
            time=self.clock.time,
            clock_state=self.clock.state.value,
            position=s.position,
            velocity=s.velocity,
            acceleration=s.acceleration,
            friction_force=s.friction_force,
            net_force=s.net_force,
            mass=p["mass"],
            force=p["force"],
            friction=p["friction"],
        )
