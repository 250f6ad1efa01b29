# MIT License (see LICENSE)
"""
Common controller for the interactive demos.

A Scene owns three things and keeps them apart:
- a ParameterStore (user-facing inputs, validated on every change),
- its simulation state (changed only by a tick or by reset),
- a SimulationClock (when ticks happen).

Structure:
    - UI code calls start()/pause()/reset()/set_parameter().
    - The clock calls _tick(dt) once per frame while Running.
    - _tick takes one parameter snapshot and hands it to _advance().
    - After each tick the optional renderer receives the scene.
    - Renderers read get_state(), a frozen snapshot.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import logging
from typing import TYPE_CHECKING, Any, Mapping

from ..clock import AsyncioScheduler, ClockState, Scheduler, SimulationClock
from ..constants import FRAME_DT
from ..core.catalog import FunctionCatalog
from ..errors import InvalidParameter
from ..params import ParameterStore
from ..types import FunctionId, FunctionSpec

if TYPE_CHECKING:
    from ..renderer.adapter import RendererAdapter

logger = logging.getLogger(__name__)


class Scene(ABC):
    """
    Base class for a demo controller.

    Subclasses set up their configuration before calling
    super().__init__(), which builds the clock and the initial state.

    Args:
        params: The demo's parameter store.
        scheduler: Frame callback source (defaults to the running asyncio loop).
        dt: Simulated seconds per tick.
        interval: Wall-clock seconds between ticks (defaults to dt).
        renderer: Optional consumer called after every tick.
    """

    def __init__(
        self,
        params: ParameterStore,
        scheduler: Scheduler | None = None,
        dt: float = FRAME_DT,
        interval: float | None = None,
        renderer: RendererAdapter | None = None,
    ):
        self.params = params
        self.renderer = renderer
        self.clock = SimulationClock(
            self._tick,
            scheduler if scheduler is not None else AsyncioScheduler(),
            dt=dt,
            interval=interval,
            on_reset=self._reset_state,
            on_tick=self._after_tick,
        )
        self._reset_state()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    @property
    def clock_state(self) -> ClockState:
        return self.clock.state

    def start(self) -> bool:
        """Start or resume the animation. Returns False if already running."""
        return self.clock.start()

    def pause(self) -> bool:
        """Pause the animation. Returns False if it was not running."""
        return self.clock.pause()

    def reset(self) -> None:
        """Stop and return the simulation state to its initial values."""
        self.clock.reset()
        logger.debug("%s reset", type(self).__name__)

    def step(self, dt: float | None = None) -> bool | None:
        """
        Apply one tick directly, bypassing the clock state machine.

        Returns what the tick returned (False means the run is finished).
        """
        return self._tick(self.clock.dt if dt is None else float(dt))

    def set_parameter(self, name: str, value: Any) -> bool:
        """
        Change a user parameter.

        Out-of-range values are clamped. The change is rejected (returns
        False) when the value is not a finite number or when the parameter
        is locked in the current clock state.

        Raises:
            InvalidParameter: If name is not a parameter of this scene.
        """
        spec = self.params.spec(name)
        if spec.idle_only and self.clock.state is not ClockState.IDLE:
            logger.debug("Rejected %s change while %s", name, self.clock.state.value)
            return False
        if not self.params.set(name, value):
            return False
        self._parameter_changed(name)
        return True

    # -------------------------------------------------------------------------
    # Ticking
    # -------------------------------------------------------------------------

    def _tick(self, dt: float) -> bool | None:
        return self._advance(self.params.snapshot(), dt)

    def _after_tick(self) -> None:
        if self.renderer is not None:
            self.renderer.render_scene(self)

    def _parameter_changed(self, name: str) -> None:
        """Hook for scenes whose state depends on a parameter directly."""

    @abstractmethod
    def _advance(self, params: Mapping[str, float], dt: float) -> bool | None:
        """Advance the state by one tick using a fixed parameter snapshot."""

    @abstractmethod
    def _reset_state(self) -> None:
        """Restore the initial simulation state."""

    @abstractmethod
    def get_state(self):
        """Frozen snapshot of the current state for painting."""


class FunctionScene(Scene):
    """
    A scene that works on one function from a catalog.

    The function can be chosen with select_function() or with
    set_parameter("function", id).
    """

    catalog: FunctionCatalog

    def __init__(self, catalog: FunctionCatalog, function: FunctionId | str, **kwargs):
        self.catalog = catalog
        self.function: FunctionSpec = catalog.get(function)
        super().__init__(**kwargs)

    def select_function(self, function_id: FunctionId | str) -> bool:
        """Switch function; ids outside the catalog are rejected."""
        try:
            spec = self.catalog.get(function_id)
        except InvalidParameter:
            logger.debug("Rejected function %r for %s", function_id, self.catalog.name)
            return False
        self.function = spec
        self._parameter_changed("function")
        return True

    def set_parameter(self, name: str, value: Any) -> bool:
        if name == "function":
            return self.select_function(value)
        return super().set_parameter(name, value)
