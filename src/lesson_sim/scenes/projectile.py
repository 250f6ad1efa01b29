# MIT License (see LICENSE)
"""
Projectile launcher demo.

A one-shot run: start() fires a projectile from the launch origin and the
clock returns to Idle on its own once it lands. Launch angle, speed and
gravity are locked while a projectile is in flight (Running or Paused).
"""
from __future__ import annotations
import logging
from typing import Mapping

import numpy as np

from ..clock import ClockState, Scheduler
from ..config import ProjectileConfig
from ..core.invariants import predicted_trajectory, projectile_prediction
from ..core.steppers import launch_projectile, step_projectile
from ..params import ParameterStore, ParamSpec
from ..types import ProjectilePrediction, ProjectileSnapshot, ProjectileState
from .base import Scene

logger = logging.getLogger(__name__)


class ProjectileScene(Scene):
    """
    Controller for the projectile demo.

    Coordinates are canvas units with y growing downward; the ground line is
    the launch origin's y. distance/height in the snapshot are in meters.
    """

    def __init__(
        self,
        config: ProjectileConfig | None = None,
        scheduler: Scheduler | None = None,
        renderer=None,
    ):
        self.config = config or ProjectileConfig()
        params = ParameterStore([
            ParamSpec("angle", *self.config.angle, idle_only=True),
            ParamSpec("speed", *self.config.speed, idle_only=True),
            ParamSpec("gravity", *self.config.gravity, idle_only=True),
        ])
        super().__init__(params, scheduler=scheduler, dt=self.config.dt, renderer=renderer)

    @property
    def ground_y(self) -> float:
        return self.config.origin[1]

    def start(self) -> bool:
        """
        Launch a new projectile, or resume a paused flight.

        No-op while a projectile is already flying.
        """
        if self.clock.state is ClockState.RUNNING:
            return False
        if self.clock.state is ClockState.IDLE:
            p = self.params.snapshot()
            launch_projectile(self.state, p["speed"], p["angle"], self.config.origin)
            self.prediction = projectile_prediction(p["speed"], p["angle"], p["gravity"])
            logger.info(
                "Launch: v=%.1f m/s at %.1f deg, g=%.2f (range %.2f m)",
                p["speed"], p["angle"], p["gravity"], self.prediction.range,
            )
        return self.clock.start()

    launch = start

    def _reset_state(self) -> None:
        self.state = ProjectileState(position=self.config.origin)
        self.prediction: ProjectilePrediction | None = None

    def _advance(self, params: Mapping[str, float], dt: float) -> bool:
        return step_projectile(
            self.state,
            gravity=params["gravity"],
            dt=dt,
            ground_y=self.ground_y,
            scale=self.config.scale,
        )

    def predicted_path(self) -> np.ndarray:
        """Ideal trajectory for the current parameters, in canvas coordinates."""
        p = self.params.snapshot()
        return predicted_trajectory(
            self.config.origin, p["speed"], p["angle"], p["gravity"],
            scale=self.config.scale, step=self.config.trajectory_step,
        )

    def get_state(self) -> ProjectileSnapshot:
        s = self.state
        p = self.params.snapshot()
        x, y = float(s.position[0]), float(s.position[1])
        return ProjectileSnapshot(
            time=self.clock.time,
            clock_state=self.clock.state.value,
            position=(x, y),
            velocity=(float(s.velocity[0]), float(s.velocity[1])),
            trail=tuple(s.trail),
            elapsed=s.elapsed,
            launched=s.launched,
            landed=s.landed,
            distance=(x - self.config.origin[0]) / self.config.scale,
            height=(self.ground_y - y) / self.config.scale,
            angle=p["angle"],
            speed=p["speed"],
            gravity=p["gravity"],
            prediction=self.prediction,
        )
