"""Fixed-size ordered collection of activation units."""

from __future__ import annotations

import operator
from typing import List, Tuple

import numpy as np

from .errors import InvalidConfigurationError, OutOfRangeError
from .neuron import Neuron
from .types import DEFAULT_INIT_RANGE, Array


class Layer:
    """Ordered sequence of :class:`Neuron` objects.

    Writing an input or a bias through the layer recomputes that unit's
    activation and derivative before returning, so every bulk read reflects
    the latest state.
    """

    def __init__(
        self,
        size: int,
        *,
        input_layer: bool = False,
        rng: np.random.Generator | None = None,
        init_range: Tuple[float, float] = DEFAULT_INIT_RANGE,
    ) -> None:
        if int(size) <= 0:
            raise InvalidConfigurationError(f"Layer size must be positive, got {size}")
        self._input_layer = bool(input_layer)
        units: List[Neuron] = []
        for _ in range(int(size)):
            if self._input_layer:
                units.append(Neuron())
            elif rng is not None:
                units.append(Neuron.with_random_bias(rng, init_range))
            else:
                units.append(Neuron(bias=0.0))
        self._units = tuple(units)

    @property
    def size(self) -> int:
        return len(self._units)

    @property
    def is_input_layer(self) -> bool:
        return self._input_layer

    def __len__(self) -> int:
        return len(self._units)

    def _unit(self, idx: int) -> Neuron:
        try:
            idx = operator.index(idx)
        except TypeError as exc:
            raise OutOfRangeError(f"Unit index must be an integer, got {idx!r}") from exc
        if not 0 <= idx < len(self._units):
            raise OutOfRangeError(f"Unit index {idx} out of range for layer of size {len(self._units)}")
        return self._units[idx]

    def __getitem__(self, idx: int) -> Neuron:
        return self._unit(idx)

    def __iter__(self):
        return iter(self._units)

    def set_input_at(self, idx: int, value: float) -> None:
        unit = self._unit(idx)
        unit.set_input(value)
        unit.activate()
        unit.derive()

    def set_bias_at(self, idx: int, value: float) -> None:
        unit = self._unit(idx)
        unit.set_bias(value)
        unit.activate()
        unit.derive()

    def get_bias_at(self, idx: int) -> float:
        return self._unit(idx).bias

    def get_inputs(self) -> Array:
        return np.array([unit.input for unit in self._units], dtype=np.float64)

    def get_activations(self) -> Array:
        return np.array([unit.activation for unit in self._units], dtype=np.float64)

    def get_derivatives(self) -> Array:
        return np.array([unit.derivative for unit in self._units], dtype=np.float64)

    def get_biases(self) -> Array:
        return np.array([unit.bias for unit in self._units], dtype=np.float64)

    def __repr__(self) -> str:
        kind = "input" if self._input_layer else "dense"
        return f"Layer({kind}, size={len(self._units)})"
