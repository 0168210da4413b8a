"""Quadratic cost used by the training loop."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import Array, Vector


def quadratic_cost(predictions: Vector, targets: Vector) -> Tuple[float, Array]:
    """Return ``(0.5 * sum((a - t)^2), a - t)``.

    The second element is the gradient of the cost with respect to the
    output activations.
    """

    pred = np.asarray(predictions, dtype=np.float64)
    target = np.asarray(targets, dtype=np.float64)
    if pred.shape != target.shape:
        raise DimensionMismatchError(
            f"Predictions {pred.shape} and targets {target.shape} differ in shape"
        )
    diff = pred - target
    return float(0.5 * np.sum(np.square(diff))), diff


__all__ = ["quadratic_cost"]
