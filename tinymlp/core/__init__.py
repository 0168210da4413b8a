"""Core numerical primitives for tinymlp."""

from . import activations, errors, layer, linalg, neuron, types

__all__ = ["activations", "errors", "layer", "linalg", "neuron", "types"]
