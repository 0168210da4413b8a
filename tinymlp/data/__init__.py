"""Dataset registry and built-in literal datasets."""

# Ensure built-in datasets register themselves when the package is imported.
from . import toy as _toy  # noqa: F401
from .registry import DatasetSpec, available_datasets, get, register_dataset

__all__ = ["DatasetSpec", "available_datasets", "get", "register_dataset"]
