import csv
import json
from pathlib import Path

import numpy as np
import pytest

from tinymlp import data
from tinymlp.training import pipelines


def _config(run_dir, passes=50, seed=5):
    return {
        "data": {"name": "and", "options": {"passes": passes}},
        "model": {"layer_sizes": [2, 2, 1], "learning_rate": 0.5, "init_range": [-1.0, 1.0]},
        "train": {"seed": seed, "run_dir": str(run_dir), "verbose": False, "enable_plots": False},
    }


def test_pipeline_produces_artifacts(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path / "run"))
    assert result.steps == 200

    metrics = [
        json.loads(line)
        for line in Path(result.metrics_path).read_text().splitlines()
        if line
    ]
    assert len(metrics) == 200
    assert metrics[0]["step"] == 0
    assert metrics[0]["seed"] == 5
    assert "sha" in metrics[0]
    assert all("loss" in entry for entry in metrics)

    with (tmp_path / "run" / "metrics.csv").open() as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 200

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["train"]["seed"] == 5
    assert manifest["dataset"]["name"] == "and"
    assert manifest["final_loss"] == pytest.approx(result.final_loss)


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "run1"))
    second = pipelines.run_pipeline(_config(tmp_path / "run2"))
    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()
    assert first.final_loss == second.final_loss


def test_pipeline_training_lowers_loss(tmp_path):
    config = _config(tmp_path / "run", passes=300)
    untrained = pipelines.build_network(config["model"], seed=5, verbose=False)
    losses = []
    for x, y in data.get("and").samples:
        untrained.predict(x)
        losses.append(untrained.loss(y))
    before = np.mean(losses)
    result = pipelines.run_pipeline(config)
    assert result.final_loss < before


def test_pipeline_rejects_mismatched_dataset(tmp_path):
    config = _config(tmp_path / "run")
    config["model"]["layer_sizes"] = [3, 1]
    with pytest.raises(ValueError):
        pipelines.run_pipeline(config)


def test_pipeline_requires_sections(tmp_path):
    with pytest.raises(KeyError):
        pipelines.run_pipeline({"data": {"name": "xor"}})


def test_presets_include_file_presets():
    names = set(pipelines.presets())
    assert {"xor-2-2-1", "and-2-1", "single-pass-debug"} <= names
    assert "or-2-3-1" in names
    assert pipelines.load_preset("or-2-3-1")["model"]["layer_sizes"] == [2, 3, 1]
    with pytest.raises(KeyError):
        pipelines.load_preset("missing-preset")


def test_plots_written_when_enabled(tmp_path):
    config = _config(tmp_path / "run", passes=5)
    config["train"]["enable_plots"] = True
    pipelines.run_pipeline(config)
    assert (tmp_path / "run" / "loss.png").exists()
