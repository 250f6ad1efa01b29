# MIT License (see LICENSE)
"""
Renderer adapters for the demo snapshots.

This module provides an abstract base class for rendering and a few concrete
implementations. The simulation core has no drawing dependency: a renderer
only ever receives frozen snapshots and cannot change simulation state.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import (
    BlockSnapshot,
    DerivativeSnapshot,
    IntegrationSnapshot,
    ProjectileSnapshot,
)

if TYPE_CHECKING:
    from ..scenes.base import Scene


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses integrate with a drawing backend (canvas, matplotlib, web
    frontend, ...).

    Usage:
        renderer.begin_frame(scene.clock.time)
        renderer.draw(scene.get_state())
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_scene(scene)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Current simulated time in seconds.
        """
        ...

    @abstractmethod
    def draw(self, snapshot) -> None:
        """Paint one scene snapshot."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_scene(self, scene: "Scene") -> None:
        """Render the scene's current snapshot as one frame."""
        self.begin_frame(scene.clock.time)
        self.draw(scene.get_state())
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Example output:
        === Frame t=0.3000 ===
        [running] block x=51.00 v=0.40 a=1.02 F_net=5.10 f=-4.90
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include secondary values (forces, trail size, error).
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw(self, snapshot) -> None:
        if isinstance(snapshot, BlockSnapshot):
            line = (f"block x={snapshot.position:.2f} v={snapshot.velocity:.2f} "
                    f"a={snapshot.acceleration:.2f}")
            if self.verbose:
                line += f" F_net={snapshot.net_force:.2f} f={snapshot.friction_force:.2f}"
        elif isinstance(snapshot, ProjectileSnapshot):
            x, y = snapshot.position
            line = f"projectile @ ({x:.2f}, {y:.2f}) d={snapshot.distance:.2f}m h={snapshot.height:.2f}m"
            if self.verbose:
                line += f" trail={len(snapshot.trail)} landed={snapshot.landed}"
        elif isinstance(snapshot, DerivativeSnapshot):
            t = snapshot.tangent
            line = f"{snapshot.display_name} x={t.x:.2f} f={t.value:.3f} f'={t.slope:.3f}"
        elif isinstance(snapshot, IntegrationSnapshot):
            line = (f"{snapshot.display_name} [{snapshot.lower:g}, {snapshot.upper:g}] "
                    f"{snapshot.cursor}/{snapshot.n} sum={snapshot.partial_sum:.4f}")
            if self.verbose and snapshot.result.error is not None:
                line += f" exact={snapshot.result.exact:.4f} err={snapshot.result.error:.2e}"
        else:
            line = f"Snapshot({type(snapshot).__name__})"

        state = getattr(snapshot, "clock_state", "")
        self.output.write(f"[{state}] {line}\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer.

    Useful as a placeholder or for benchmarking ticks without rendering overhead.
    """

    def begin_frame(self, time: float) -> None:
        pass

    def draw(self, snapshot) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records every frame as plain dicts.

    Example:
        renderer = BufferedRenderer()
        scene = ProjectileScene(scheduler=sched, renderer=renderer)
        scene.start()
        sched.run_frames(200)
        renderer.frames[-1]["snapshot"]["landed"]
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time, "snapshot": None}

    def draw(self, snapshot) -> None:
        if self._current_frame is None:
            return
        self._current_frame["snapshot"] = snapshot.to_dict()

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
