# MIT License (see LICENSE)
"""
Function catalogs for the calculus demos.

Each catalog is a closed enumeration of FunctionSpec entries keyed by
FunctionId. The derivative demo and the integration demo ship different
function sets; only the integration catalog wires closed-form integrals.

Every entry's df is the exact symbolic derivative of f, and every
antiderivative F satisfies F' = f, so:
    f'(x)            = df(x)
    ∫_a^b f(x) dx    = F(b) - F(a)

All callables use numpy ufuncs so they evaluate both floats and arrays.
"""
from __future__ import annotations
from typing import Iterable, Iterator

import numpy as np

from ..errors import InvalidParameter
from ..types import FunctionId, FunctionSpec


class FunctionCatalog:
    """
    Immutable lookup of FunctionSpec by FunctionId.

    Args:
        name: Catalog label, used in error messages.
        specs: Entries; ids must be unique.
    """

    def __init__(self, name: str, specs: Iterable[FunctionSpec]):
        self.name = name
        self._specs: dict[FunctionId, FunctionSpec] = {}
        for spec in specs:
            if spec.id in self._specs:
                raise ValueError(f"Duplicate function id {spec.id.value!r} in {name} catalog")
            self._specs[spec.id] = spec

    def get(self, function_id: FunctionId | str) -> FunctionSpec:
        """
        Resolve a function id (enum member or its string tag).

        Raises:
            InvalidParameter: If the id is unknown or not carried by this catalog.
        """
        try:
            fid = FunctionId(function_id)
        except ValueError:
            raise InvalidParameter(f"Unknown function id: {function_id!r}") from None
        try:
            return self._specs[fid]
        except KeyError:
            raise InvalidParameter(
                f"Function {fid.value!r} is not available in the {self.name} catalog"
            ) from None

    def __contains__(self, function_id: object) -> bool:
        try:
            return FunctionId(function_id) in self._specs
        except ValueError:
            return False

    def __iter__(self) -> Iterator[FunctionSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def ids(self) -> tuple[FunctionId, ...]:
        """Function ids in catalog order."""
        return tuple(self._specs)


# =============================================================================
# Derivative explorer
# =============================================================================

DERIVATIVE_CATALOG = FunctionCatalog("derivative", [
    FunctionSpec(
        id=FunctionId.QUADRATIC,
        display_name="f(x) = 0.1x² - 2",
        f=lambda x: 0.1 * x * x - 2,
        df=lambda x: 0.2 * x,
        derivative_name="f'(x) = 0.2x",
    ),
    FunctionSpec(
        id=FunctionId.CUBIC,
        display_name="f(x) = 0.01x³ - 0.1x² - x + 2",
        f=lambda x: 0.01 * x * x * x - 0.1 * x * x - x + 2,
        df=lambda x: 0.03 * x * x - 0.2 * x - 1,
        derivative_name="f'(x) = 0.03x² - 0.2x - 1",
    ),
    FunctionSpec(
        id=FunctionId.SINE,
        display_name="f(x) = 3sin(x/10) + 1",
        f=lambda x: 3 * np.sin(x / 10) + 1,
        df=lambda x: (3 / 10) * np.cos(x / 10),
        derivative_name="f'(x) = 0.3cos(x/10)",
    ),
    FunctionSpec(
        id=FunctionId.EXPONENTIAL,
        display_name="f(x) = e^(x/20) - 1",
        f=lambda x: np.exp(x / 20) - 1,
        df=lambda x: (1 / 20) * np.exp(x / 20),
        derivative_name="f'(x) = (1/20)e^(x/20)",
    ),
])


# =============================================================================
# Riemann-sum integrator
# =============================================================================

INTEGRATION_CATALOG = FunctionCatalog("integration", [
    FunctionSpec(
        id=FunctionId.QUADRATIC,
        display_name="f(x) = 0.05x² + 1",
        f=lambda x: 0.05 * x * x + 1,
        df=lambda x: 0.1 * x,
        # F(x) = 0.05x³/3 + x
        antiderivative=lambda x: 0.05 * x * x * x / 3 + x,
        derivative_name="f'(x) = 0.1x",
    ),
    FunctionSpec(
        id=FunctionId.SINE,
        display_name="f(x) = 2sin(x/5) + 3",
        f=lambda x: 2 * np.sin(x / 5) + 3,
        df=lambda x: 0.4 * np.cos(x / 5),
        # F(x) = -10cos(x/5) + 3x
        antiderivative=lambda x: -10 * np.cos(x / 5) + 3 * x,
        derivative_name="f'(x) = 0.4cos(x/5)",
    ),
    FunctionSpec(
        id=FunctionId.LINEAR,
        display_name="f(x) = 0.2x + 5",
        f=lambda x: 0.2 * x + 5,
        df=lambda x: 0.2 + 0 * x,
        # F(x) = 0.1x² + 5x
        antiderivative=lambda x: 0.1 * x * x + 5 * x,
        derivative_name="f'(x) = 0.2",
    ),
    FunctionSpec(
        id=FunctionId.CUBIC,
        display_name="f(x) = 0.001x³ + 0.1x + 3",
        f=lambda x: 0.001 * x * x * x + 0.1 * x + 3,
        df=lambda x: 0.003 * x * x + 0.1,
        # F(x) = 0.00025x⁴ + 0.05x² + 3x
        antiderivative=lambda x: 0.00025 * x * x * x * x + 0.05 * x * x + 3 * x,
        derivative_name="f'(x) = 0.003x² + 0.1",
    ),
])


CATALOGS: dict[str, FunctionCatalog] = {
    DERIVATIVE_CATALOG.name: DERIVATIVE_CATALOG,
    INTEGRATION_CATALOG.name: INTEGRATION_CATALOG,
}
