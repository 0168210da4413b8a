"""Dense matrix primitive and vector helpers."""

from __future__ import annotations

import operator
import sys
from typing import Iterable, TextIO, Tuple

import numpy as np

from .errors import DimensionMismatchError, InvalidConfigurationError, OutOfRangeError
from .types import DEFAULT_INIT_RANGE, Array, Vector


def _as_vector(values: Vector) -> Array:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"Expected a 1-D vector, got shape {arr.shape}")
    return arr


class Matrix:
    """Fixed-size ``rows x cols`` matrix of reals.

    Entry ``(j, i)`` of a weight matrix is the connection from unit ``i`` of
    one layer to unit ``j`` of the next, so ``rows`` is the size of the next
    layer and ``cols`` the size of the current one.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        randomize: bool = False,
        *,
        rng: np.random.Generator | None = None,
        init_range: Tuple[float, float] = DEFAULT_INIT_RANGE,
    ) -> None:
        if int(rows) <= 0 or int(cols) <= 0:
            raise InvalidConfigurationError(
                f"Matrix dimensions must be positive, got ({rows}, {cols})"
            )
        self._rows = int(rows)
        self._cols = int(cols)
        if randomize:
            rng = rng if rng is not None else np.random.default_rng()
            low, high = init_range
            self._data = rng.uniform(low, high, size=(self._rows, self._cols))
        else:
            self._data = np.zeros((self._rows, self._cols), dtype=np.float64)

    @classmethod
    def from_array(cls, values: Iterable[Iterable[float]]) -> "Matrix":
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 2:
            raise DimensionMismatchError(f"Expected a 2-D array, got shape {arr.shape}")
        matrix = cls(arr.shape[0], arr.shape[1])
        matrix._data = arr.copy()
        return matrix

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    def _check_index(self, key) -> Tuple[int, int]:
        try:
            row, col = (operator.index(part) for part in key)
        except (TypeError, ValueError) as exc:
            raise OutOfRangeError(f"Matrix index must be a pair of integers, got {key!r}") from exc
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise OutOfRangeError(
                f"Index ({row}, {col}) out of range for matrix of shape {self.shape}"
            )
        return row, col

    def __getitem__(self, key) -> float:
        row, col = self._check_index(key)
        return float(self._data[row, col])

    def __setitem__(self, key, value: float) -> None:
        row, col = self._check_index(key)
        self._data[row, col] = float(value)

    def multiply(self, vector: Vector) -> Array:
        """Return the matrix-vector product ``self @ vector``."""

        vec = _as_vector(vector)
        if vec.shape[0] != self._cols:
            raise DimensionMismatchError(
                f"Cannot multiply a {self._rows}x{self._cols} matrix by a vector of length {vec.shape[0]}"
            )
        return self._data @ vec

    __matmul__ = multiply

    def transpose(self) -> "Matrix":
        return Matrix.from_array(self._data.T)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def to_array(self) -> Array:
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"


def hadamard_product(a: Vector, b: Vector) -> Array:
    """Elementwise product of two equal-length vectors."""

    left = _as_vector(a)
    right = _as_vector(b)
    if left.shape != right.shape:
        raise DimensionMismatchError(
            f"Hadamard product needs equal lengths, got {left.shape[0]} and {right.shape[0]}"
        )
    return left * right


def format_vector(vector: Vector) -> str:
    """Render ``vector`` as a comma separated list of reals."""

    return " " + ", ".join(f"{float(value):.6f}" for value in vector)


def print_vector(vector: Vector, file: TextIO | None = None) -> None:
    print(format_vector(vector), file=file or sys.stdout)


__all__ = ["Matrix", "hadamard_product", "format_vector", "print_vector"]
