from __future__ import annotations

"""Command line demo for the track safety analysis.

Running ``python -m track_safety.run_demo`` loads the track parameters,
analyses the cubic track and prints the safety summary.  Results are written
to time-stamped files under the ``outputs`` directory:

``samples.csv``
    Full track sample with slope and second derivative.
``safety.csv``
    Analysed samples with radius, danger flag, safe speed and status.
``crashes.csv``
    Crash count and fraction per test speed.
``summary.json``
    Headline numbers for tests and downstream consumers.
``analysis.png``
    Four-panel figure of layout, curvature, speed limits and gradient.
"""

from pathlib import Path
from datetime import datetime
import argparse
import json
import logging
import time

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .analysis import TrackAnalysis, analyse_track
from .config import SafetyConfig
from .geometry import integral_arc_length
from .io_utils import build_config, read_params_csv, write_csv
from .plots import plot_dashboard
from .report import format_report


def _write_outputs(analysis: TrackAnalysis, out_dir: Path, plots: bool) -> None:
    spec = analysis.spec
    samples = analysis.samples

    samples_df = pd.DataFrame(
        {
            "x": samples.x,
            "y": samples.y,
            "slope": spec.first_derivative(samples.x),
            "second_derivative": spec.second_derivative(samples.x),
        }
    )
    safety_df = pd.DataFrame(
        {
            "index": analysis.indices,
            "x": [s.x for s in analysis.safety],
            "y": [s.y for s in analysis.safety],
            "radius_m": [np.nan if s.radius_m is None else s.radius_m for s in analysis.safety],
            "is_danger": [s.is_danger for s in analysis.safety],
            "max_safe_speed_kmh": [
                np.nan if s.max_safe_speed_kmh is None else s.max_safe_speed_kmh
                for s in analysis.safety
            ],
            "status": [s.status for s in analysis.safety],
        }
    )
    crashes_df = pd.DataFrame(
        {
            "test_speed_kmh": [c.test_speed_kmh for c in analysis.crashes],
            "crash_count": [c.crash_count for c in analysis.crashes],
            "crash_fraction": [c.crash_fraction for c in analysis.crashes],
        }
    )

    write_csv(samples_df, out_dir / "samples.csv")
    write_csv(safety_df, out_dir / "safety.csv")
    write_csv(crashes_df, out_dir / "crashes.csv")

    stats = analysis.stats
    summary = {
        "track_length_km": analysis.length_km,
        "integral_length_km": integral_arc_length(spec),
        "critical_points": [[cp.x, cp.y] for cp in analysis.critical_points],
        "danger_count": stats.danger_count,
        "undefined_count": stats.undefined_count,
        "degenerate_count": stats.degenerate_count,
        "min_radius_m": stats.min_radius_m,
        "max_safe_speed_kmh": stats.max_speed_kmh,
        "min_safe_speed_kmh": stats.min_speed_kmh,
        "mean_safe_speed_kmh": stats.mean_speed_kmh,
    }
    with (out_dir / "summary.json").open("w") as f:
        json.dump(summary, f, indent=2)

    if plots:
        fig = plot_dashboard(analysis)
        fig.savefig(out_dir / "analysis.png")
        plt.close(fig)


def run(
    params_file: str | Path | None = None,
    overrides: dict | None = None,
    out_root: str | Path = "outputs",
    plots: bool = True,
    timestamp: str | None = None,
) -> tuple[TrackAnalysis, Path]:
    """Execute the analysis pipeline and return the result and output directory.

    Parameters
    ----------
    params_file:
        Optional ``key,value`` parameter CSV.  Missing keys use the built-in
        reference track and safety defaults.
    overrides:
        Parameter values taking precedence over the file, keyed like the
        parameter file.  ``None`` values are ignored.
    out_root:
        Directory under which the time-stamped output folder is created.
    plots:
        Whether to save the four-panel analysis figure.
    timestamp:
        Optional output folder name.  If ``None`` the current time is used.
    """
    start_time = time.perf_counter()

    params = read_params_csv(params_file) if params_file is not None else {}
    for key, value in (overrides or {}).items():
        if value is not None:
            params[key] = value
    spec, config = build_config(params)

    analysis = analyse_track(spec, config)
    print(format_report(analysis))

    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(out_root) / timestamp
    out_dir.mkdir(parents=True, exist_ok=True)
    _write_outputs(analysis, out_dir, plots)

    total_runtime = time.perf_counter() - start_time
    print(
        f"\nSamples: {len(analysis.samples)}, "
        f"Analysed: {len(analysis.safety)}, "
        f"Total runtime: {total_runtime:.3f} s"
    )
    return analysis, out_dir


def show_animation(analysis: TrackAnalysis):  # pragma: no cover - interactive
    from .animation import animate_track

    config: SafetyConfig = analysis.config
    print("\n=== ANIMATION ===")
    print(f"Animating car at {config.animation_speed_kmh:g} km/h...")
    anim = animate_track(analysis)
    plt.show()
    return anim


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run track safety analysis demo")
    parser.add_argument("--params", default=None, help="Track parameter CSV")
    parser.add_argument("--x-start", dest="x_start", type=float, default=None)
    parser.add_argument("--x-end", dest="x_end", type=float, default=None)
    parser.add_argument("--step", type=float, default=None, help="Sampling step in simulation units")
    parser.add_argument("--a3", type=float, default=None)
    parser.add_argument("--a2", type=float, default=None)
    parser.add_argument("--a1", type=float, default=None)
    parser.add_argument("--a0", type=float, default=None)
    parser.add_argument(
        "--mu",
        dest="friction_coefficient",
        type=float,
        default=None,
        help="Tyre-road friction coefficient",
    )
    parser.add_argument(
        "--banking-deg",
        dest="banking_angle_deg",
        type=float,
        default=None,
        help="Track banking angle in degrees",
    )
    parser.add_argument(
        "--danger-radius",
        dest="danger_radius_m",
        type=float,
        default=None,
        help="Danger threshold radius in metres",
    )
    parser.add_argument(
        "--test-speeds",
        dest="test_speeds",
        type=str,
        default=None,
        help="Comma separated test speeds in km/h",
    )
    parser.add_argument(
        "--stride",
        dest="sample_stride",
        type=int,
        default=None,
        help="Analyse every n-th track sample",
    )
    parser.add_argument(
        "--animate",
        dest="animate",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the car animation after the analysis",
    )
    parser.add_argument("--out", default="outputs", help="Output root directory")
    parser.add_argument("--no-plots", action="store_true", help="Skip saving the analysis figure")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    overrides = {
        key: getattr(args, key)
        for key in (
            "x_start",
            "x_end",
            "step",
            "a3",
            "a2",
            "a1",
            "a0",
            "friction_coefficient",
            "banking_angle_deg",
            "danger_radius_m",
            "test_speeds",
            "sample_stride",
            "animate",
        )
    }
    analysis, out_dir = run(
        args.params,
        overrides,
        out_root=args.out,
        plots=not args.no_plots,
    )
    print(f"Outputs written to {out_dir}")

    if analysis.config.animate:
        show_animation(analysis)
    print("\nAnalysis complete! 🏁")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
