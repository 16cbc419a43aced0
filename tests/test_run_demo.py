import sys
from pathlib import Path
import json
import re

import matplotlib
matplotlib.use("Agg")
import numpy as np
import pandas as pd
import pytest

# Ensure the repository root is on the path so ``track_safety`` is importable
sys.path.append(str(Path(__file__).resolve().parents[1]))

from track_safety.config import ConfigurationError
from track_safety.run_demo import main, run

PARAMS = Path(__file__).resolve().parents[1] / "data" / "track_params.csv"


def test_reference_run_outputs(tmp_path, capfd) -> None:
    analysis, out_dir = run(PARAMS, out_root=tmp_path, timestamp="ref")

    out = capfd.readouterr().out
    assert out.startswith("🏁 F1 Track Design and Analysis")
    assert re.search(r"Track length: [0-9.]+ km", out)
    assert "=== CRASH SIMULATION ===" in out
    assert re.search(r"Total runtime: [0-9.]+ s", out)

    assert out_dir == tmp_path / "ref"
    for name in ["samples.csv", "safety.csv", "crashes.csv", "summary.json", "analysis.png"]:
        assert (out_dir / name).is_file()

    samples = pd.read_csv(out_dir / "samples.csv")
    assert len(samples) == 201
    assert list(samples.columns) == ["x", "y", "slope", "second_derivative"]

    safety = pd.read_csv(out_dir / "safety.csv")
    assert len(safety) == 21
    assert safety["index"].tolist() == list(range(0, 201, 10))
    assert (safety["is_danger"] == (safety["radius_m"] < 100.0)).all()

    crashes = pd.read_csv(out_dir / "crashes.csv")
    assert crashes["test_speed_kmh"].tolist() == [150.0, 200.0, 250.0, 300.0]
    assert np.all(np.diff(crashes["crash_fraction"]) >= 0)

    with (out_dir / "summary.json").open() as f:
        summary = json.load(f)
    assert np.isclose(summary["track_length_km"], analysis.length_km)
    assert np.isclose(summary["integral_length_km"], analysis.length_km, rtol=1e-3)
    assert len(summary["critical_points"]) == 2
    assert summary["undefined_count"] == 0


def test_overrides_take_precedence(tmp_path) -> None:
    analysis, out_dir = run(
        PARAMS,
        overrides={"banking_angle_deg": 60.0, "test_speeds": "10", "sample_stride": None},
        out_root=tmp_path,
        plots=False,
        timestamp="steep",
    )
    assert analysis.config.banking_angle_deg == 60.0
    assert analysis.config.sample_stride == 10
    assert analysis.stats.degenerate_count == len(analysis.safety)
    assert analysis.crashes[0].crash_fraction == 1.0
    assert not (out_dir / "analysis.png").exists()


def test_run_without_params_file_uses_defaults(tmp_path) -> None:
    analysis, _ = run(out_root=tmp_path, plots=False, timestamp="defaults")
    assert len(analysis.samples) == 201
    assert len(analysis.safety) == 21


def test_main_cli(tmp_path, capfd) -> None:
    main(["--params", str(PARAMS), "--out", str(tmp_path), "--no-plots", "--stride", "20"])
    out = capfd.readouterr().out
    assert "Outputs written to" in out
    assert out.rstrip().endswith("Analysis complete! 🏁")
    (run_dir,) = list(tmp_path.iterdir())
    safety = pd.read_csv(run_dir / "safety.csv")
    assert len(safety) == 11


def test_main_rejects_invalid_configuration(tmp_path) -> None:
    with pytest.raises(ConfigurationError, match="friction"):
        main(["--mu", "0", "--out", str(tmp_path), "--no-plots"])
