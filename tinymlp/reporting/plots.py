"""Loss curves for a single training sequence."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping


class PlotAdapter:
    """Record per-sample losses and, when enabled, draw them as ``loss.png``.

    A training sequence built from ``passes`` repetitions of a table is cut
    into consecutive chunks of ``samples_per_pass`` steps; the mean loss of
    each chunk is drawn on top of the raw per-sample curve.
    """

    def __init__(
        self,
        run_dir: str | Path,
        enable_plots: bool = False,
        *,
        samples_per_pass: int | None = None,
    ) -> None:
        if samples_per_pass is not None and samples_per_pass < 1:
            raise ValueError(f"samples_per_pass must be >= 1, got {samples_per_pass}")
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.samples_per_pass = samples_per_pass
        self.losses: List[float] = []

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        self.losses.append(float(metrics.get("loss", 0.0)))

    __call__ = on_step

    def pass_means(self) -> List[float]:
        """Mean loss of every complete pass; a trailing partial pass is dropped."""

        width = self.samples_per_pass
        if not width:
            return []
        full = len(self.losses) // width
        return [sum(self.losses[k * width:(k + 1) * width]) / width for k in range(full)]

    def close(self) -> Path | None:
        if not self.enable_plots or not self.losses:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt

        self.run_dir.mkdir(parents=True, exist_ok=True)
        fig, ax = plt.subplots()
        ax.plot(range(len(self.losses)), self.losses, linewidth=0.6, alpha=0.5, label="per sample")
        means = self.pass_means()
        if means:
            width = self.samples_per_pass or 1
            ends = [(k + 1) * width - 1 for k in range(len(means))]
            ax.plot(ends, means, marker="o", markersize=2, label="mean per pass")
        ax.set_xlabel("Sample")
        ax.set_ylabel("Quadratic loss")
        ax.set_title("Training Curve")
        ax.legend()
        path = self.run_dir / "loss.png"
        fig.savefig(path)
        plt.close(fig)
        return path
