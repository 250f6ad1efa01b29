# MIT License (see LICENSE)
"""
Simulation clock: the Idle / Running / Paused state machine that drives ticks.

The clock never touches a display. It asks an injectable scheduler to call it
back once ("before the next frame") and, when that callback fires, runs one
tick and schedules the next. This keeps the stepping logic testable: tests use
ManualScheduler and fire frames explicitly, or call advance() directly with a
controlled dt.

Transitions:
    start   Idle/Paused -> Running   schedules the first tick (no-op if Running)
    pause   Running -> Paused        cancels the pending tick (no-op otherwise)
    stop    any -> Idle              cancels the pending tick, keeps state
    reset   any -> Idle              cancels the pending tick, then on_reset()
    error   Running -> Paused        a tick raised; the exception propagates

Ordering guarantees:
    - At most one tick is scheduled at any time; the next tick is scheduled
      only after the current one has returned.
    - Cancellation happens before any state is changed. Each scheduled
      callback also carries a generation number, so a callback that a
      scheduler delivers after it was cancelled is ignored.
"""
from __future__ import annotations
import asyncio
from collections import deque
from enum import Enum
import logging
from typing import Callable, Protocol

from .constants import FRAME_DT

logger = logging.getLogger(__name__)


class ClockState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Calls a callback once after roughly `delay` seconds."""

    def schedule(self, callback: Callable[[], None], delay: float) -> Handle: ...


# =============================================================================
# Schedulers
# =============================================================================

class _ManualHandle:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic frame queue.

    schedule() enqueues a callback for the next frame; run_frame() fires
    every callback that was pending when the frame began. Callbacks
    scheduled while a frame runs wait for the following frame.

    Usage:
        sched = ManualScheduler()
        clock = SimulationClock(tick, sched, dt=0.016)
        clock.start()
        sched.run_frames(10)
    """

    def __init__(self) -> None:
        self._queue: deque[_ManualHandle] = deque()
        self.frames = 0

    def schedule(self, callback: Callable[[], None], delay: float) -> _ManualHandle:
        handle = _ManualHandle(callback)
        self._queue.append(handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled, not cancelled callbacks."""
        return sum(1 for h in self._queue if not h.cancelled)

    def run_frame(self) -> int:
        """
        Fire the callbacks due this frame.

        Returns:
            Number of callbacks actually invoked.
        """
        due = list(self._queue)
        self._queue.clear()
        self.frames += 1
        fired = 0
        for handle in due:
            if not handle.cancelled:
                handle.callback()
                fired += 1
        return fired

    def run_frames(self, n: int) -> int:
        """Run n frames; returns the total number of callbacks invoked."""
        return sum(self.run_frame() for _ in range(n))

    def fire_all(self, include_cancelled: bool = False) -> int:
        """
        Fire every queued callback, optionally including cancelled ones.

        include_cancelled=True simulates a scheduler that delivers a callback
        after it was cancelled.
        """
        due = list(self._queue)
        self._queue.clear()
        fired = 0
        for handle in due:
            if include_cancelled or not handle.cancelled:
                handle.callback()
                fired += 1
        return fired


class AsyncioScheduler:
    """
    Cooperative scheduler on an asyncio event loop.

    Ticks run on the loop thread, one at a time, between other coroutines.
    Must be used from code running inside the loop (or given a loop).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


# =============================================================================
# Clock
# =============================================================================

class SimulationClock:
    """
    State machine scheduling one tick at a time.

    Args:
        tick: Called with dt for every tick. Returning False ends the run
              (the clock goes back to Idle); any other value continues.
        scheduler: Source of frame callbacks.
        dt: Simulated time advanced per tick.
        interval: Wall-clock delay between ticks requested from the scheduler.
        on_reset: Called by reset() after the pending tick was cancelled.
        on_tick: Called after each completed tick (e.g. to hand the state to a renderer).
    """

    def __init__(
        self,
        tick: Callable[[float], bool | None],
        scheduler: Scheduler,
        dt: float = FRAME_DT,
        interval: float | None = None,
        on_reset: Callable[[], None] | None = None,
        on_tick: Callable[[], None] | None = None,
    ):
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self._tick = tick
        self.scheduler = scheduler
        self.dt = float(dt)
        self.interval = self.dt if interval is None else float(interval)
        self._on_reset = on_reset
        self._on_tick = on_tick

        self.state = ClockState.IDLE
        self.time = 0.0
        self.ticks = 0
        self._handle: Handle | None = None
        self._generation = 0
        self._in_tick = False

    @property
    def running(self) -> bool:
        return self.state is ClockState.RUNNING

    def start(self) -> bool:
        """
        Begin or resume ticking.

        Returns:
            True if the clock transitioned to Running, False if it already was.
        """
        if self.state is ClockState.RUNNING:
            return False
        logger.debug("Clock %s -> running", self.state.value)
        self.state = ClockState.RUNNING
        self._schedule()
        return True

    def pause(self) -> bool:
        """Stop ticking but keep state. No-op unless Running."""
        if self.state is not ClockState.RUNNING:
            return False
        self._cancel()
        self.state = ClockState.PAUSED
        logger.debug("Clock paused at t=%.4f after %d ticks", self.time, self.ticks)
        return True

    def stop(self) -> None:
        """Return to Idle keeping the accumulated state (end of a one-shot run)."""
        self._cancel()
        if self.state is not ClockState.IDLE:
            logger.debug("Clock %s -> idle", self.state.value)
        self.state = ClockState.IDLE

    def reset(self) -> None:
        """Cancel any pending tick, return to Idle and discard accumulated state."""
        self._cancel()
        self.state = ClockState.IDLE
        self.time = 0.0
        self.ticks = 0
        if self._on_reset is not None:
            self._on_reset()

    def advance(self, dt: float | None = None) -> bool:
        """
        Run one tick immediately, outside the scheduler.

        Only has an effect while Running. Any pending scheduled tick stays
        scheduled, so frames and manual advances share one tick sequence.

        Returns:
            True if a tick ran.
        """
        if self.state is not ClockState.RUNNING or self._in_tick:
            return False
        self._run_tick(self.dt if dt is None else float(dt))
        return True

    # -------------------------------------------------------------------------

    def _schedule(self) -> None:
        generation = self._generation
        self._handle = self.scheduler.schedule(lambda: self._fire(generation), self.interval)

    def _cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self.state is not ClockState.RUNNING:
            logger.debug("Ignored stale tick (generation %d, current %d)", generation, self._generation)
            return
        self._handle = None
        self._run_tick(self.dt)
        if self.state is ClockState.RUNNING and self._handle is None:
            self._schedule()

    def _run_tick(self, dt: float) -> None:
        self._in_tick = True
        try:
            keep_running = self._tick(dt)
        except BaseException:
            # failed tick: Running -> Paused, nothing left scheduled
            self._cancel()
            if self.state is ClockState.RUNNING:
                self.state = ClockState.PAUSED
            logger.debug("Tick failed, clock paused at t=%.4f", self.time)
            raise
        finally:
            self._in_tick = False
        self.time += dt
        self.ticks += 1
        if keep_running is False:
            self.stop()
        if self._on_tick is not None:
            self._on_tick()
