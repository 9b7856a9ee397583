import importlib.util
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

SCRIPT = Path(__file__).resolve().parent.parent / "evaluation" / "run_evaluation.py"


@pytest.fixture
def run_evaluation():
    spec = importlib.util.spec_from_file_location("run_evaluation", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_measure(run_evaluation):
    latency, throughput = run_evaluation.measure(6, 3, repeats=1)
    assert latency > 0
    assert throughput > 0


def test_make_plot_creates_figures_dir(run_evaluation, tmp_path: Path, monkeypatch):
    monkeypatch.setattr(run_evaluation.plt, "show", lambda: None)
    figures = tmp_path / "figures"
    run_evaluation.make_plot(
        share_counts=[5, 6],
        latency_data=[[0.01, 0.02]],
        throughput_data=[[1000.0, 900.0]],
        thresholds=[3],
        save_name="scaling.png",
        figures_dir=figures,
    )
    assert (figures / "scaling.png").exists()
