# MIT License (see LICENSE)
"""
Riemann-sum integrator demo.

Idle, the snapshot shows the full midpoint sum. Running, one rectangle is
added per tick until all n are drawn, then the clock stops by itself.
Changing the bounds, the sample count or the function restarts the
rectangle-by-rectangle accumulation.
"""
from __future__ import annotations
import logging
from typing import Mapping

from ..clock import Scheduler
from ..config import IntegrationConfig
from ..core.approximators import RiemannAccumulator, riemann_sum
from ..core.catalog import INTEGRATION_CATALOG
from ..params import OrderedPair, ParameterStore, ParamSpec
from ..types import IntegrationSnapshot
from .base import FunctionScene

logger = logging.getLogger(__name__)


class IntegrationScene(FunctionScene):
    """
    Controller for the Riemann-sum demo.

    Parameters: lower, upper (kept at least bound_gap apart), samples (integer n).
    """

    def __init__(
        self,
        config: IntegrationConfig | None = None,
        scheduler: Scheduler | None = None,
        renderer=None,
    ):
        self.config = config or IntegrationConfig()
        params = ParameterStore(
            [
                ParamSpec("lower", *self.config.lower),
                ParamSpec("upper", *self.config.upper),
                ParamSpec("samples", *self.config.samples, integer=True),
            ],
            pairs=[OrderedPair("lower", "upper", gap=self.config.bound_gap)],
        )
        super().__init__(
            INTEGRATION_CATALOG,
            self.config.function,
            params=params,
            scheduler=scheduler,
            dt=self.config.interval,
            renderer=renderer,
        )

    def _new_accumulator(self) -> RiemannAccumulator:
        p = self.params.snapshot()
        return RiemannAccumulator(self.function, p["lower"], p["upper"], int(p["samples"]))

    def _reset_state(self) -> None:
        self.accumulator = self._new_accumulator()

    def _parameter_changed(self, name: str) -> None:
        if self.accumulator.cursor:
            logger.debug("%s changed, restarting accumulation at 0/%d", name, self.accumulator.n)
        self.accumulator = self._new_accumulator()

    def start(self) -> bool:
        """Animate the sum; a finished accumulation starts over from zero."""
        if not self.clock.running and self.accumulator.done:
            self.accumulator.reset()
        return super().start()

    def _advance(self, params: Mapping[str, float], dt: float) -> bool:
        self.accumulator.step()
        return not self.accumulator.done

    def get_state(self) -> IntegrationSnapshot:
        acc = self.accumulator
        return IntegrationSnapshot(
            time=self.clock.time,
            clock_state=self.clock.state.value,
            function=self.function.id.value,
            display_name=self.function.display_name,
            lower=acc.a,
            upper=acc.b,
            n=acc.n,
            dx=acc.dx,
            cursor=acc.cursor,
            partial_sum=acc.partial_sum,
            heights=tuple(acc.heights),
            result=riemann_sum(self.function, acc.a, acc.b, acc.n),
            complete=acc.done,
        )
