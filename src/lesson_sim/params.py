# MIT License (see LICENSE)
"""
Parameter store: the user-adjustable inputs of a demo.

Each parameter has a declared closed range. Values arriving from the UI are
clamped into that range; values that cannot be interpreted as a finite number
are rejected. Ordered pairs (e.g. lower < upper integration bounds) are kept
apart by a minimum gap.

Steppers never read the store directly: a scene takes one immutable
snapshot() per tick so that a slider moved mid-tick cannot produce a
half-updated parameter set.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamSpec:
    """
    Declaration of one bounded scalar parameter.

    Attributes:
        name: Key used by set_parameter().
        minimum: Smallest accepted value.
        maximum: Largest accepted value.
        default: Initial value, inside [minimum, maximum].
        integer: Round values to the nearest integer.
        idle_only: The owning scene only accepts changes while Idle.
    """
    name: str
    minimum: float
    maximum: float
    default: float
    integer: bool = False
    idle_only: bool = False

    def __post_init__(self) -> None:
        if not self.minimum <= self.default <= self.maximum:
            raise InvalidParameter(
                f"Default {self.default} for {self.name!r} outside [{self.minimum}, {self.maximum}]"
            )

    def coerce(self, value) -> float | None:
        """
        Clamp value into range.

        Returns:
            The accepted value, or None if value is not a finite number.
        """
        if isinstance(value, bool):
            return None
        try:
            x = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(x):
            return None
        if self.integer:
            x = float(round(x))
        return max(self.minimum, min(self.maximum, x))


@dataclass(frozen=True)
class OrderedPair:
    """Constraint lower + gap <= upper between two parameters."""
    lower: str
    upper: str
    gap: float = 1.0


class ParameterStore:
    """
    Validated storage for a demo's parameters.

    Args:
        specs: Parameter declarations.
        pairs: Ordering constraints between declared parameters.
        values: Optional initial values (clamped like user input).

    Usage:
        store = ParameterStore([ParamSpec("mass", 1, 15, 5)])
        store.set("mass", 40)     # clamped to 15, returns True
        store.set("mass", "abc")  # rejected, returns False
        params = store.snapshot()
    """

    def __init__(
        self,
        specs: Iterable[ParamSpec],
        pairs: Iterable[OrderedPair] = (),
        values: Mapping[str, float] | None = None,
    ):
        self._specs = {s.name: s for s in specs}
        self._pairs = tuple(pairs)
        for pair in self._pairs:
            self.spec(pair.lower)
            self.spec(pair.upper)
        self._values = {name: s.default for name, s in self._specs.items()}
        for pair in self._pairs:
            if self._values[pair.lower] + pair.gap > self._values[pair.upper]:
                raise InvalidParameter(
                    f"Defaults violate {pair.lower} + {pair.gap} <= {pair.upper}"
                )
        for name, value in (values or {}).items():
            if not self.set(name, value):
                raise InvalidParameter(f"Invalid initial value for {name!r}: {value!r}")

    def spec(self, name: str) -> ParamSpec:
        """Declaration for name; unknown names raise InvalidParameter."""
        try:
            return self._specs[name]
        except KeyError:
            raise InvalidParameter(f"Unknown parameter: {name!r}") from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def get(self, name: str) -> float:
        self.spec(name)
        return self._values[name]

    __getitem__ = get

    def set(self, name: str, value) -> bool:
        """
        Store a new value, clamped into its range and ordering constraints.

        Returns:
            True if a value was stored, False if the input was rejected.
        """
        spec = self.spec(name)
        x = spec.coerce(value)
        if x is None:
            logger.debug("Rejected %s=%r (not a finite number)", name, value)
            return False

        for pair in self._pairs:
            if name == pair.lower:
                x = min(x, self._values[pair.upper] - pair.gap)
            elif name == pair.upper:
                x = max(x, self._values[pair.lower] + pair.gap)
        if not spec.minimum <= x <= spec.maximum:
            logger.debug("Rejected %s=%r (ordering constraint cannot be met)", name, value)
            return False

        if x != value:
            logger.debug("Clamped %s=%r to %r", name, value, x)
        self._values[name] = x
        return True

    def restore_default(self, name: str) -> None:
        """Put name back to its declared default."""
        self._values[name] = self.spec(name).default

    def snapshot(self) -> Mapping[str, float]:
        """Read-only copy of the current values."""
        return MappingProxyType(dict(self._values))
