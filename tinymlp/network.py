"""Multi-layer perceptron trained with per-sample gradient descent."""

from __future__ import annotations

import operator
import sys
from typing import Iterable, List, Mapping, Sequence, TextIO, Tuple

import numpy as np

from .core.errors import DimensionMismatchError, InvalidConfigurationError, NetworkError
from .core.layer import Layer
from .core.linalg import Matrix, format_vector, hadamard_product
from .core.types import DEFAULT_INIT_RANGE, Array, Sample, Vector
from .training.losses import quadratic_cost


def _layer_size(size) -> int:
    try:
        return operator.index(size)
    except TypeError as exc:
        raise InvalidConfigurationError(f"Layer sizes must be integers, got {size!r}") from exc


class Network:
    """Fully connected feed-forward network.

    ``layers[0]`` is the input layer. ``weights[k]`` connects ``layers[k]`` to
    ``layers[k + 1]`` and has shape ``(layer_sizes[k + 1], layer_sizes[k])``.

    ``errors`` is filled by :meth:`back_propagate` in reverse layer order:
    ``errors[0]`` belongs to the output layer and ``errors[-1]`` to the layer
    right after the input layer.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int],
        *,
        learning_rate: float = 0.1,
        rng: np.random.Generator | None = None,
        init_range: Tuple[float, float] = DEFAULT_INIT_RANGE,
        stream: TextIO | None = None,
        verbose: bool = True,
    ) -> None:
        sizes = [_layer_size(size) for size in layer_sizes]
        if len(sizes) < 2:
            raise InvalidConfigurationError(
                f"A network needs at least two layers, got {len(sizes)}"
            )
        if any(size <= 0 for size in sizes):
            raise InvalidConfigurationError(f"Layer sizes must be positive, got {sizes}")

        self.layer_sizes: List[int] = sizes
        self.learning_rate = float(learning_rate)
        self.stream = stream
        self.verbose = verbose
        rng = rng if rng is not None else np.random.default_rng()

        self.layers: List[Layer] = [Layer(sizes[0], input_layer=True)]
        self.weights: List[Matrix] = []
        for idx in range(len(sizes) - 1):
            self.weights.append(
                Matrix(sizes[idx + 1], sizes[idx], True, rng=rng, init_range=init_range)
            )
            self.layers.append(Layer(sizes[idx + 1], rng=rng, init_range=init_range))

        self.errors: List[Array] = []
        self.current_target: Array | None = None

    # ------------------------------------------------------------------
    # Properties

    @property
    def input_layer(self) -> Layer:
        return self.layers[0]

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    @property
    def num_layers(self) -> int:
        return len(self.layers)

    def parameter_count(self) -> int:
        weights = sum(w.rows * w.cols for w in self.weights)
        biases = sum(layer.size for layer in self.layers[1:])
        return int(weights + biases)

    # ------------------------------------------------------------------
    # Forward

    def set_input(self, values: Vector) -> None:
        values = np.asarray(values, dtype=np.float64).reshape(-1)
        if values.shape[0] != self.input_layer.size:
            raise DimensionMismatchError(
                f"Input has {values.shape[0]} values, input layer has {self.input_layer.size} units"
            )
        for idx, value in enumerate(values):
            self.input_layer.set_input_at(idx, float(value))

    def set_target(self, values: Vector) -> None:
        values = np.asarray(values, dtype=np.float64).reshape(-1)
        if values.shape[0] != self.output_layer.size:
            raise DimensionMismatchError(
                f"Target has {values.shape[0]} values, output layer has {self.output_layer.size} units"
            )
        self.current_target = values.copy()

    def feed_forward(self) -> Array:
        """Propagate the input layer through every weight matrix.

        Returns the output layer's activations.
        """

        for idx, weights in enumerate(self.weights):
            next_inputs = weights.multiply(self.layers[idx].get_activations())
            nxt = self.layers[idx + 1]
            for unit_idx, value in enumerate(next_inputs):
                nxt.set_input_at(unit_idx, float(value))
        return self.output()

    def output(self) -> Array:
        return self.output_layer.get_activations()

    def predict(self, values: Vector) -> Array:
        self.set_input(values)
        return self.feed_forward()

    def loss(self, target: Vector | None = None) -> float:
        """Quadratic cost of the current output against ``target``."""

        if target is None:
            if self.current_target is None:
                raise NetworkError("No target set; call set_target() first")
            target = self.current_target
        target = np.asarray(target, dtype=np.float64).reshape(-1)
        if target.shape[0] != self.output_layer.size:
            raise DimensionMismatchError(
                f"Target has {target.shape[0]} values, output layer has {self.output_layer.size} units"
            )
        value, _ = quadratic_cost(self.output(), target)
        return value

    # ------------------------------------------------------------------
    # Backward

    def back_propagate(self) -> List[Array]:
        if self.current_target is None:
            raise NetworkError("No target set; call set_target() before back_propagate()")
        if self.errors:
            raise NetworkError("Error buffer is not empty; clear it before back_propagate()")

        output = self.output_layer.get_activations()
        _, grad_cost = quadratic_cost(output, self.current_target)
        self.errors.append(hadamard_product(grad_cost, self.output_layer.get_derivatives()))
        self._emit("ERRORS:" + format_vector(self.errors[0]))

        for idx in range(self.num_layers - 2, 0, -1):
            propagated = self.weights[idx].transpose().multiply(self.errors[-1])
            self.errors.append(hadamard_product(propagated, self.layers[idx].get_derivatives()))
            self._emit(format_vector(self.errors[-1]))
        return self.errors

    def update(self) -> None:
        """Apply one gradient-descent step from the current ``errors``."""

        if len(self.errors) != len(self.weights):
            raise NetworkError(
                f"Expected {len(self.weights)} error vectors, found {len(self.errors)}"
            )
        lr = self.learning_rate
        for l, weights in enumerate(self.weights):
            err = self.errors[len(self.errors) - 1 - l]
            # Layer l already carries the biases written on the previous iteration.
            source = self.layers[l].get_activations()
            target_layer = self.layers[l + 1]
            for j in range(target_layer.size):
                for i in range(source.shape[0]):
                    weights[j, i] = weights[j, i] - lr * source[i] * err[j]
                target_layer.set_bias_at(j, target_layer.get_bias_at(j) - lr * err[j])

    # ------------------------------------------------------------------
    # Training loop

    def train(
        self,
        dataset: Iterable[Sample],
        callbacks: Sequence[object] | None = None,
    ) -> List[float]:
        """Take one gradient step per sample, in order, over ``dataset``.

        Returns the quadratic loss of every sample measured before its update.
        """

        losses: List[float] = []
        for step, sample in enumerate(dataset):
            inputs, target = sample
            self.set_input(inputs)
            self.set_target(target)

            self._emit(f"(PASS : {step})")
            self.feed_forward()
            self.print_to_console()
            for value in self.current_target:
                self._emit(f"\t(Target: {float(value):.6f})\n")

            loss_value = self.loss()
            losses.append(loss_value)

            self.errors.clear()
            self.back_propagate()
            self.update()
            self._notify(callbacks, step, {"loss": loss_value})
        return losses

    # ------------------------------------------------------------------
    # Diagnostics

    def format_layers(self) -> str:
        lines = []
        last = self.num_layers - 1
        for idx, layer in enumerate(self.layers):
            if idx == 0:
                lines.append("INPUT LAYER:" + format_vector(layer.get_inputs()))
            elif idx == last:
                lines.append("OUTPUT LAYER:" + format_vector(layer.get_activations()))
            else:
                lines.append(f"LAYER {idx}:" + format_vector(layer.get_activations()))
        return "\n".join(lines) + "\n"

    def print_to_console(self) -> None:
        self._emit(self.format_layers())

    def _emit(self, text: str) -> None:
        if self.verbose:
            print(text, file=self.stream if self.stream is not None else sys.stdout)

    @staticmethod
    def _notify(
        callbacks: Sequence[object] | None, step: int, metrics: Mapping[str, float]
    ) -> None:
        for callback in callbacks or []:
            if hasattr(callback, "on_step"):
                callback.on_step(step, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(step, metrics)

    def __repr__(self) -> str:
        return f"Network(layer_sizes={self.layer_sizes}, learning_rate={self.learning_rate})"


__all__ = ["Network"]
