# MIT License (see LICENSE)
"""
Exception types raised by the simulation core.

The user-facing scene API prevents invalid input rather than reporting it
(values are clamped or the call is rejected). These exceptions are raised by
the strict lower-level APIs and signal programming or configuration errors.
"""
from __future__ import annotations


class SimulationError(Exception):
    """Base class for all lesson_sim errors."""


class InvalidParameter(SimulationError, ValueError):
    """
    Out-of-range or inconsistent input reached a strict API.

    Examples: an unknown parameter name, lower bound >= upper bound passed
    directly to the Riemann approximator, a function id missing from a catalog.
    """


class DomainGap(SimulationError, ArithmeticError):
    """A stepper produced a non-finite value (NaN or infinity) in its state."""
