"""Core typing contracts for tinymlp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

Array = np.ndarray
Vector = Sequence[float]
Sample = Tuple[Vector, Vector]

DEFAULT_INIT_RANGE: Tuple[float, float] = (-1.0, 1.0)


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`tinymlp.training.pipelines.run_pipeline`."""

    steps: int
    metrics_path: str
    manifest_path: str
    final_loss: float = 0.0
