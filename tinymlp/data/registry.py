"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping

from ..core.types import Sample


@dataclass(frozen=True)
class DatasetSpec:
    """A named, ordered list of ``(inputs, target)`` samples.

    Attributes
    ----------
    name:
        Registry identifier.
    samples:
        Ordered training sequence. The network consumes it exactly once and
        in this order, so any repetition is already materialised here.
    d_in:
        Length of every input vector.
    d_out:
        Length of every target vector.
    provenance:
        Free-form metadata recorded in the run manifest.
    """

    name: str
    samples: List[Sample]
    d_in: int
    d_out: int
    provenance: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    Works as a decorator (``@register_dataset("xor")``) or directly
    (``register_dataset("xor", make_xor)``).
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get(dataset: str, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` built by the factory for ``dataset``."""

    if dataset not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown dataset {dataset!r}. Available datasets: {available}")
    spec = _REGISTRY[dataset](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if not spec.samples:
        raise ValueError(f"Dataset {spec.name!r} has no samples")
    for idx, (inputs, target) in enumerate(spec.samples):
        if len(inputs) != spec.d_in:
            raise ValueError(
                f"Sample {idx} of {spec.name!r} has {len(inputs)} inputs, expected {spec.d_in}"
            )
        if len(target) != spec.d_out:
            raise ValueError(
                f"Sample {idx} of {spec.name!r} has {len(target)} targets, expected {spec.d_out}"
            )


__all__ = ["DatasetSpec", "available_datasets", "get", "register_dataset"]
