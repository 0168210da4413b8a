"""Pipeline assembly: config mapping -> dataset + network -> run artifacts."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence

import numpy as np

from .. import data
from ..core.types import RunResult
from ..network import Network
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-2-2-1": {
        "data": {"name": "xor", "options": {"passes": 2000}},
        "model": {"layer_sizes": [2, 2, 1], "learning_rate": 0.5, "init_range": [-1.0, 1.0]},
        "train": {"seed": 7, "run_dir": "runs/xor-2-2-1", "verbose": False, "enable_plots": False},
    },
    "and-2-1": {
        "data": {"name": "and", "options": {"passes": 500}},
        "model": {"layer_sizes": [2, 1], "learning_rate": 0.5, "init_range": [-1.0, 1.0]},
        "train": {"seed": 0, "run_dir": "runs/and-2-1", "verbose": False, "enable_plots": False},
    },
    "single-pass-debug": {
        "data": {"name": "xor", "options": {"passes": 1}},
        "model": {"layer_sizes": [2, 2, 1], "learning_rate": 0.1, "init_range": [-1.0, 1.0]},
        "train": {"seed": 0, "run_dir": "runs/single-pass-debug", "verbose": True, "enable_plots": False},
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None
_REQUIRED_SECTIONS = {"data", "model", "train"}


def _read_preset_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        import yaml

        loaded = yaml.safe_load(text) or {}
    elif suffix == ".json":
        loaded = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported preset file type: {path.suffix}")

    if not isinstance(loaded, Mapping):
        raise TypeError(f"Preset {path.name} must decode to a mapping")
    return loaded


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                loaded = _read_preset_file(file)
                missing = _REQUIRED_SECTIONS - set(loaded)
                if missing:
                    raise KeyError(
                        f"Preset {file.name} is missing required sections: {', '.join(sorted(missing))}"
                    )
                found[file.stem] = json.loads(json.dumps(loaded))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return file_overrides[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def build_network(model_cfg: Mapping[str, object], *, seed: int, verbose: bool) -> Network:
    """Instantiate a :class:`Network` from the ``model`` config section."""

    if "layer_sizes" not in model_cfg:
        raise KeyError("model.layer_sizes is required")
    low, high = model_cfg.get("init_range", (-1.0, 1.0))  # type: ignore[misc]
    return Network(
        list(model_cfg["layer_sizes"]),  # type: ignore[call-overload]
        learning_rate=float(model_cfg.get("learning_rate", 0.1)),  # type: ignore[arg-type]
        rng=np.random.default_rng(seed),
        init_range=(float(low), float(high)),
        verbose=verbose,
    )


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    missing = _REQUIRED_SECTIONS - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]

    dataset = data.get(str(data_cfg["name"]), **dict(data_cfg.get("options", {})))
    seed = int(train_cfg.get("seed", 0))
    verbose = bool(train_cfg.get("verbose", False))
    network = build_network(model_cfg, seed=seed, verbose=verbose)

    sizes = network.layer_sizes
    if sizes[0] != dataset.d_in or sizes[-1] != dataset.d_out:
        raise ValueError(
            f"Dataset {dataset.name!r} is {dataset.d_in}->{dataset.d_out}, "
            f"network is {sizes[0]}->{sizes[-1]}"
        )

    run_dir = Path(str(train_cfg.get("run_dir", "runs/default")))
    run_dir.mkdir(parents=True, exist_ok=True)
    metrics_path = run_dir / "metrics.jsonl"
    plots = PlotAdapter(
        run_dir,
        enable_plots=bool(train_cfg.get("enable_plots", False)),
        samples_per_pass=dataset.provenance.get("rows"),
    )
    callbacks = [
        JsonlSink(metrics_path, seed=seed),
        CsvSink(run_dir / "metrics.csv"),
        plots,
    ]

    if verbose:
        _print_startup_summary(
            dataset_name=dataset.name,
            dims=sizes,
            samples=len(dataset),
            learning_rate=network.learning_rate,
            param_count=network.parameter_count(),
        )

    losses = network.train(dataset.samples, callbacks=callbacks)
    plots.close()

    final_loss = _mean_loss(network, dataset.samples)
    manifest_path = write_manifest(
        run_dir / "manifest.json",
        config=json.loads(json.dumps(config)),
        dataset_provenance=dataset.provenance,
        final_loss=final_loss,
    )
    return RunResult(
        steps=len(losses),
        metrics_path=str(metrics_path),
        manifest_path=manifest_path,
        final_loss=final_loss,
    )


def _mean_loss(network: Network, samples: Sequence) -> float:
    """Mean quadratic loss over the distinct samples of the training table."""

    seen = []
    for inputs, target in samples:
        key = (tuple(inputs), tuple(target))
        if key not in seen:
            seen.append(key)
    total = 0.0
    for inputs, target in seen:
        network.predict(inputs)
        total += network.loss(target)
    return total / max(1, len(seen))


def _print_startup_summary(
    *,
    dataset_name: str,
    dims: Sequence[int],
    samples: int,
    learning_rate: float,
    param_count: int,
) -> None:
    print("=== tinymlp run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Layer sizes   : {list(dims)}")
    print(f"Samples       : {samples}")
    print(f"Learning rate : {learning_rate}")
    print(f"Parameters    : {param_count}")
    print("===================")


__all__ = ["build_network", "load_preset", "presets", "run_pipeline"]
