"""Exception hierarchy for tinymlp."""

from __future__ import annotations


class NetworkError(Exception):
    """Base class for every error raised by the network engine."""


class DimensionMismatchError(NetworkError, ValueError):
    """Raised when vector or matrix operands have incompatible lengths."""


class OutOfRangeError(NetworkError, IndexError):
    """Raised when a unit or matrix index is outside the valid bounds."""


class InvalidConfigurationError(NetworkError, ValueError):
    """Raised when a network, layer or matrix cannot be built as requested."""


__all__ = [
    "NetworkError",
    "DimensionMismatchError",
    "OutOfRangeError",
    "InvalidConfigurationError",
]
