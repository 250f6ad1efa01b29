# MIT License (see LICENSE)
"""
Numeric approximations against the function catalogs.

This module provides:
- Tangent evaluation: value and exact slope at a point (no finite differences).
- A central-difference slope estimate, for comparing against the exact slope.
- The cyclic sweep used by the animated tangent point.
- Midpoint Riemann sums in batch form and incremental (one rectangle per
  tick) form, each reported alongside the exact integral.

Midpoint rule over [a, b] with n subintervals:
    dx = (b - a) / n
    S_n = Σ_{i=0}^{n-1} f(a + (i + ½)·dx) · dx
For f ∈ C², |∫f - S_n| ≤ (b - a)·dx²·max|f''| / 24, so the error shrinks
as O(1/n²).

Reference:
    https://en.wikipedia.org/wiki/Riemann_sum#Midpoint_rule
"""
from __future__ import annotations
import logging

import numpy as np

from ..errors import InvalidParameter
from ..types import FunctionSpec, RiemannResult, TangentPoint

logger = logging.getLogger(__name__)


# =============================================================================
# Derivative / tangent
# =============================================================================

def tangent_at(spec: FunctionSpec, x0: float) -> TangentPoint:
    """
    Evaluate f and its exact derivative at x0.

    Raises:
        InvalidParameter: If the catalog entry carries no derivative.
    """
    slope = spec.derivative(x0)
    if slope is None:
        raise InvalidParameter(f"{spec.id.value} has no derivative wired")
    return TangentPoint(x=float(x0), value=float(spec.evaluate(x0)), slope=float(slope))


def central_difference(spec: FunctionSpec, x0: float, h: float = 1e-4) -> float:
    """
    Estimate f'(x0) with the central difference (f(x0+h) - f(x0-h)) / 2h.

    Truncation error is O(h²); used only to cross-check the exact slope.
    """
    if h <= 0:
        raise InvalidParameter(f"Step h must be positive, got {h}")
    return float((spec.evaluate(x0 + h) - spec.evaluate(x0 - h)) / (2 * h))


def sweep_next(x: float, step: float, bound: float) -> float:
    """
    Advance the animated tangent point by one step.

    Moves x by `step`; once it passes +bound it restarts at -bound, so the
    sequence cycles over the domain indefinitely.
    """
    nx = x + step
    return -bound if nx > bound else nx


def sample_curve(fn, lo: float, hi: float, step: float) -> tuple[np.ndarray, np.ndarray]:
    """
    Sample fn over [lo, hi] at a fixed step (hi included when it falls on the grid).

    Args:
        fn: A vectorised callable such as FunctionSpec.evaluate.

    Returns:
        Tuple (xs, ys) of float64 arrays.
    """
    if step <= 0 or hi < lo:
        raise InvalidParameter(f"Bad sampling grid: [{lo}, {hi}] step {step}")
    count = int(np.floor((hi - lo) / step + 1e-9)) + 1
    xs = lo + step * np.arange(count, dtype=np.float64)
    ys = np.asarray(fn(xs), dtype=np.float64)
    return xs, ys


# =============================================================================
# Riemann sums
# =============================================================================

def _check_partition(a: float, b: float, n: int) -> None:
    if not b > a:
        raise InvalidParameter(f"Lower bound must be below upper bound, got [{a}, {b}]")
    if n < 1:
        raise InvalidParameter(f"Sample count must be at least 1, got {n}")


def midpoints(a: float, b: float, n: int) -> np.ndarray:
    """Midpoints a + (i + ½)·dx of the n equal subintervals of [a, b]."""
    _check_partition(a, b, n)
    dx = (b - a) / n
    return a + (np.arange(n, dtype=np.float64) + 0.5) * dx


def _result(spec: FunctionSpec, a: float, b: float, n: int, dx: float, approx: float) -> RiemannResult:
    exact = spec.integral(a, b)
    error = None if exact is None else abs(exact - approx)
    return RiemannResult(approximation=approx, exact=exact, error=error, n=n, dx=dx)


def riemann_sum(spec: FunctionSpec, a: float, b: float, n: int) -> RiemannResult:
    """
    Batch midpoint Riemann sum of spec over [a, b] with n rectangles.

    Rectangles are accumulated left to right, in the same order as
    RiemannAccumulator, so both forms agree on the final sum.

    Raises:
        InvalidParameter: If b <= a or n < 1.
    """
    n = int(n)
    mids = midpoints(a, b, n)
    dx = (b - a) / n
    heights = np.asarray(spec.evaluate(mids), dtype=np.float64)

    total = 0.0
    for h in heights:
        total += float(h) * dx
    return _result(spec, a, b, n, dx, total)


class RiemannAccumulator:
    """
    Incremental midpoint Riemann sum: one subinterval per step().

    The accumulator owns only its step cursor, partial sum and the heights
    consumed so far; the function and partition are fixed at construction.

    Usage:
        acc = RiemannAccumulator(spec, -10, 10, 20)
        while not acc.done:
            acc.step()
        acc.result().error
    """

    def __init__(self, spec: FunctionSpec, a: float, b: float, n: int):
        n = int(n)
        _check_partition(a, b, n)
        self.spec = spec
        self.a = float(a)
        self.b = float(b)
        self.n = n
        self.dx = (self.b - self.a) / n
        self.reset()

    def reset(self) -> None:
        """Rewind to an empty sum."""
        self.cursor = 0
        self.partial_sum = 0.0
        self.heights: list[float] = []

    @property
    def done(self) -> bool:
        return self.cursor >= self.n

    def step(self) -> float | None:
        """
        Consume the next subinterval.

        Returns:
            The rectangle height f(midpoint), or None once all n are consumed.
        """
        if self.done:
            return None
        mid = self.a + (self.cursor + 0.5) * self.dx
        height = float(self.spec.evaluate(mid))
        self.partial_sum += height * self.dx
        self.heights.append(height)
        self.cursor += 1
        if self.done:
            logger.debug("Riemann accumulation of %s complete: n=%d sum=%.6f",
                         self.spec.id.value, self.n, self.partial_sum)
        return height

    def result(self) -> RiemannResult:
        """The partial sum so far compared against the exact integral over [a, b]."""
        return _result(self.spec, self.a, self.b, self.n, self.dx, self.partial_sum)
