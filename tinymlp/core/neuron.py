"""Single activation unit."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .activations import identity, identity_deriv, sigmoid, sigmoid_deriv
from .errors import InvalidConfigurationError
from .types import DEFAULT_INIT_RANGE


class Neuron:
    """A unit holding an input, a bias, its activation and the derivative.

    Input-layer units are built with ``bias=None``: they carry no trainable
    bias and pass their input through unchanged. Every other unit squashes
    ``input + bias`` with the sigmoid.

    ``activation`` and ``derivative`` are only refreshed by :meth:`activate`
    and :meth:`derive`; :class:`~tinymlp.core.layer.Layer` calls both after
    every mutation.
    """

    def __init__(self, bias: float | None = None) -> None:
        self._trainable = bias is not None
        self._fn = sigmoid if self._trainable else identity
        self._fn_deriv = sigmoid_deriv if self._trainable else identity_deriv
        self._input = 0.0
        self._bias = float(bias) if bias is not None else 0.0
        self._activation = 0.0
        self._derivative = 0.0
        self.activate()
        self.derive()

    @classmethod
    def with_random_bias(
        cls,
        rng: np.random.Generator,
        init_range: Tuple[float, float] = DEFAULT_INIT_RANGE,
    ) -> "Neuron":
        low, high = init_range
        return cls(bias=float(rng.uniform(low, high)))

    @property
    def trainable(self) -> bool:
        return self._trainable

    @property
    def input(self) -> float:
        return self._input

    @property
    def activation(self) -> float:
        return self._activation

    @property
    def derivative(self) -> float:
        return self._derivative

    @property
    def bias(self) -> float:
        return self._bias

    def set_input(self, value: float) -> None:
        self._input = float(value)

    def set_bias(self, value: float) -> None:
        if not self._trainable:
            raise InvalidConfigurationError("Input units carry no trainable bias")
        self._bias = float(value)

    def activate(self) -> None:
        self._activation = self._fn(self._input + self._bias)

    def derive(self) -> None:
        self._derivative = self._fn_deriv(self._input + self._bias)

    def __repr__(self) -> str:
        kind = "hidden" if self._trainable else "input"
        return (
            f"Neuron({kind}, input={self._input:.6f}, bias={self._bias:.6f}, "
            f"activation={self._activation:.6f})"
        )
