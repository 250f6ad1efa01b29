# MIT License (see LICENSE)
"""
Derivative / tangent-line explorer.

Shows f, f' and the tangent at a movable point. While running, the point
sweeps to the right and wraps around at the edge of the domain.
"""
from __future__ import annotations
from typing import Mapping

import numpy as np

from ..clock import Scheduler
from ..config import DerivativeConfig
from ..core.approximators import central_difference, sample_curve, sweep_next, tangent_at
from ..core.catalog import DERIVATIVE_CATALOG
from ..params import ParameterStore, ParamSpec
from ..types import DerivativeSnapshot
from .base import FunctionScene


class DerivativeScene(FunctionScene):
    """
    Controller for the derivative demo.

    The "x" parameter positions the point directly; the running sweep then
    continues from wherever the point is.
    """

    def __init__(
        self,
        config: DerivativeConfig | None = None,
        scheduler: Scheduler | None = None,
        renderer=None,
    ):
        self.config = config or DerivativeConfig()
        params = ParameterStore([ParamSpec("x", *self.config.x)])
        super().__init__(
            DERIVATIVE_CATALOG,
            self.config.function,
            params=params,
            scheduler=scheduler,
            dt=self.config.dt,
            renderer=renderer,
        )

    def _reset_state(self) -> None:
        self.params.restore_default("x")
        self.x = self.params["x"]

    def _parameter_changed(self, name: str) -> None:
        if name == "x":
            self.x = self.params["x"]

    def _advance(self, params: Mapping[str, float], dt: float) -> bool:
        self.x = sweep_next(self.x, self.config.sweep_step, self.config.sweep_bound)
        return True

    def curves(self, step: float = 0.5) -> dict[str, tuple[np.ndarray, np.ndarray]]:
        """Sampled f and f' over the sweep domain."""
        bound = self.config.sweep_bound
        return {
            "function": sample_curve(self.function.evaluate, -bound, bound, step),
            "derivative": sample_curve(self.function.derivative, -bound, bound, step),
        }

    def get_state(self) -> DerivativeSnapshot:
        spec = self.function
        tangent = tangent_at(spec, self.x)
        return DerivativeSnapshot(
            time=self.clock.time,
            clock_state=self.clock.state.value,
            function=spec.id.value,
            display_name=spec.display_name,
            derivative_name=spec.derivative_name,
            tangent=tangent,
            slope_estimate=central_difference(spec, self.x),
            tangent_line=tangent.line(self.config.tangent_half_width),
            show_slope_triangle=abs(tangent.slope) < self.config.slope_triangle_limit,
        )
