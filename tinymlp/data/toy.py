"""Literal truth-table datasets."""

from __future__ import annotations

from typing import List, Sequence

from ..core.types import Sample
from .registry import DatasetSpec, register_dataset

_XOR: List[Sample] = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [1.0]),
    ([1.0, 0.0], [1.0]),
    ([1.0, 1.0], [0.0]),
]

_AND: List[Sample] = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [0.0]),
    ([1.0, 0.0], [0.0]),
    ([1.0, 1.0], [1.0]),
]

_OR: List[Sample] = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [1.0]),
    ([1.0, 0.0], [1.0]),
    ([1.0, 1.0], [1.0]),
]

_IDENTITY: List[Sample] = [
    ([1.0, 0.0], [1.0, 0.0]),
    ([0.0, 1.0], [0.0, 1.0]),
]


def _repeat(name: str, table: Sequence[Sample], passes: int) -> DatasetSpec:
    passes = int(passes)
    if passes < 1:
        raise ValueError(f"passes must be >= 1, got {passes}")
    samples = [(list(x), list(y)) for _ in range(passes) for x, y in table]
    return DatasetSpec(
        name=name,
        samples=samples,
        d_in=len(table[0][0]),
        d_out=len(table[0][1]),
        provenance={"name": name, "type": "literal", "passes": passes, "rows": len(table)},
    )


@register_dataset("xor")
def make_xor(passes: int = 1) -> DatasetSpec:
    return _repeat("xor", _XOR, passes)


@register_dataset("and")
def make_and(passes: int = 1) -> DatasetSpec:
    return _repeat("and", _AND, passes)


@register_dataset("or")
def make_or(passes: int = 1) -> DatasetSpec:
    return _repeat("or", _OR, passes)


@register_dataset("identity")
def make_identity(passes: int = 1) -> DatasetSpec:
    return _repeat("identity", _IDENTITY, passes)
