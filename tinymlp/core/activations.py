"""Activation utilities for tinymlp."""

from __future__ import annotations

import numpy as np


def sigmoid(z: float) -> float:
    """Return the logistic sigmoid of ``z``.

    Large negative inputs saturate to ``0.0`` instead of overflowing.
    """

    with np.errstate(over="ignore"):
        return float(1.0 / (1.0 + np.exp(-np.float64(z))))


def sigmoid_deriv(z: float) -> float:
    s = sigmoid(z)
    return s * (1.0 - s)


def identity(z: float) -> float:
    return z


def identity_deriv(z: float) -> float:
    return 1.0
