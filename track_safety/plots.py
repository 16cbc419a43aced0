from __future__ import annotations

"""Plotting helpers for track safety results.

This module contains simple functions for visualising the sampled track and
the per-sample curvature, speed limit and gradient.  Plots are produced using
:mod:`matplotlib` and return the :class:`~matplotlib.axes.Axes` instance for
further customisation.

The plan view follows the layout convention of the analysis report: the
horizontal axis carries the track value ``y`` and the vertical axis the
sampled parameter ``x``.
"""

from typing import Iterable, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from .analysis import TrackAnalysis
from .geometry import CriticalPoint


def plot_track_layout(
    x: Iterable[float],
    y: Iterable[float],
    critical: Sequence[CriticalPoint] = (),
    danger_x: Optional[Iterable[float]] = None,
    danger_y: Optional[Iterable[float]] = None,
    limits: tuple[float, float] | None = (5.0, 17.0),
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot the track plan view.

    Parameters
    ----------
    x, y:
        Sampled track coordinates in simulation units.
    critical:
        Critical points, plotted at ``(point.x, point.y)``.
    danger_x, danger_y:
        Optional coordinates of samples flagged as dangerous.
    limits:
        Common axis limits for both axes, or ``None`` to auto-scale.
    ax:
        Existing axes to draw on.  If ``None`` a new figure and axes are
        created.
    """
    if ax is None:
        _, ax = plt.subplots()

    x_arr = np.asarray(list(x), dtype=float)
    y_arr = np.asarray(list(y), dtype=float)
    if x_arr.size == 0 or x_arr.shape != y_arr.shape:
        raise ValueError("x and y must be non-empty and of equal length")

    ax.plot(y_arr, x_arr, "r-", linewidth=2, label="Track")
    ax.plot(y_arr[0], x_arr[0], "go", markersize=10, label="Start")
    ax.plot(y_arr[-1], x_arr[-1], "ro", markersize=10, label="Finish")

    for i, cp in enumerate(critical, start=1):
        ax.plot(cp.x, cp.y, "b*", markersize=12, label="Critical Points" if i == 1 else None)
        ax.text(cp.x - 0.5, cp.y, f"Critical {i}", fontsize=10)

    if danger_x is not None and danger_y is not None:
        dx = np.asarray(list(danger_x), dtype=float)
        dy = np.asarray(list(danger_y), dtype=float)
        if dx.size:
            ax.plot(dy, dx, "ko", markersize=6, markerfacecolor="yellow", label="Danger Zones")

    if limits is not None:
        ax.set_xlim(*limits)
        ax.set_ylim(*limits)
    ax.set_xlabel("Y Coordinate")
    ax.set_ylabel("X Coordinate")
    ax.set_title("F1 Track Layout")
    ax.legend(loc="best")
    ax.grid(True)
    return ax


def plot_curvature(
    x: Iterable[float],
    radius_m: Iterable[float | None],
    threshold_m: float = 100.0,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot radius of curvature against track position.

    Undefined radii (``None``) are left as gaps in the line.
    """
    if ax is None:
        _, ax = plt.subplots()

    r = np.array([np.nan if v is None else v for v in radius_m], dtype=float)
    ax.plot(list(x), r, label="Curve Radius")
    ax.axhline(threshold_m, color="r", linestyle="--", linewidth=2,
               label=f"{threshold_m:g}m Danger Threshold")
    ax.set_xlabel("Track Position")
    ax.set_ylabel("Radius of Curvature (m)")
    ax.set_title("Curvature Analysis")
    ax.legend()
    ax.grid(True)
    return ax


def plot_speed_limits(
    x: Iterable[float],
    speed_kmh: Iterable[float | None],
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot maximum safe speed in km/h against track position."""
    if ax is None:
        _, ax = plt.subplots()

    v = np.array([np.nan if s is None else s for s in speed_kmh], dtype=float)
    ax.plot(list(x), v, "b-", linewidth=2)
    ax.set_xlabel("Track Position")
    ax.set_ylabel("Maximum Safe Speed (km/h)")
    ax.set_title("Speed Limits with Banking")
    ax.grid(True)
    return ax


def plot_gradient(
    x: Iterable[float],
    slope: Iterable[float],
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot the track slope ``dy/dx`` against track position."""
    if ax is None:
        _, ax = plt.subplots()

    ax.plot(list(x), list(slope))
    ax.set_xlabel("Track Position")
    ax.set_ylabel("Track Slope (dy/dx)")
    ax.set_title("Track Gradient Analysis")
    ax.grid(True)
    return ax


def plot_dashboard(analysis: TrackAnalysis) -> plt.Figure:
    """Draw layout, curvature, speed and gradient panels on a 2x2 figure."""
    fig, axes = plt.subplots(2, 2, figsize=(12, 9))
    samples = analysis.samples
    x_sampled = samples.x[analysis.indices]
    danger = [s for s in analysis.safety if s.is_danger]

    plot_track_layout(
        samples.x,
        samples.y,
        analysis.critical_points,
        [s.x for s in danger],
        [s.y for s in danger],
        ax=axes[0, 0],
    )
    plot_curvature(
        x_sampled,
        [c.radius_m for c in analysis.curvature],
        analysis.config.danger_radius_m,
        ax=axes[0, 1],
    )
    plot_speed_limits(x_sampled, [s.max_safe_speed_kmh for s in analysis.safety], ax=axes[1, 0])
    plot_gradient(x_sampled, analysis.spec.first_derivative(x_sampled), ax=axes[1, 1])
    fig.tight_layout()
    return fig


__all__ = [
    "plot_curvature",
    "plot_dashboard",
    "plot_gradient",
    "plot_speed_limits",
    "plot_track_layout",
]
