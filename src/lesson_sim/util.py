# MIT License (see LICENSE)
"""
Utility functions for numeric conversion and guards.

All simulation state passes through these helpers so that positions and
velocities are float64 and non-finite values are caught at tick boundaries.
"""
from __future__ import annotations
import math
import os

import numpy as np

from .errors import DomainGap


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def sign(x: float) -> float:
    """Return -1.0, 0.0 or 1.0 according to the sign of x."""
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x into the closed interval [lo, hi]."""
    return max(lo, min(hi, x))


def ensure_finite(name: str, *values) -> None:
    """
    Raise DomainGap if any of the values (scalars or arrays) is NaN or infinite.

    Args:
        name: Label used in the error message (usually the state field).
        values: Scalars or numpy arrays to check.
    """
    for v in values:
        if isinstance(v, np.ndarray):
            if not np.all(np.isfinite(v)):
                raise DomainGap(f"{name} is not finite: {v!r}")
        elif not math.isfinite(v):
            raise DomainGap(f"{name} is not finite: {v!r}")


def env_flag(name: str, default: str = "") -> str:
    """Read an environment variable used to override configuration."""
    return os.environ.get(name, default)
