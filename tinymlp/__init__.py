"""tinymlp public API."""

from .core import activations, errors, linalg, types  # noqa: F401
from .core.errors import (
    DimensionMismatchError,
    InvalidConfigurationError,
    NetworkError,
    OutOfRangeError,
)
from .core.layer import Layer
from .core.linalg import Matrix, hadamard_product
from .core.neuron import Neuron
from .network import Network
from .training.pipelines import load_preset, presets, run_pipeline

__all__ = [
    "DimensionMismatchError",
    "InvalidConfigurationError",
    "Layer",
    "Matrix",
    "Network",
    "NetworkError",
    "Neuron",
    "OutOfRangeError",
    "activations",
    "errors",
    "hadamard_product",
    "linalg",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
