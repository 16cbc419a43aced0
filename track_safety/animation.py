"""Replay of the sampled track with a moving car marker.

The animation does not integrate any dynamics: each frame simply places the
marker on the next position sample.  When the constant test speed exceeds
the safe speed of the most recent analysed sample a warning is overlaid.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .analysis import TrackAnalysis
from .safety import SafetySample


def danger_message(
    frame_index: int,
    indices: np.ndarray,
    safety: Sequence[SafetySample],
    test_speed_kmh: float,
) -> str | None:
    """Return the warning text for ``frame_index`` or ``None`` if safe.

    The governing safety sample is the last analysed index at or before
    ``frame_index``.
    """
    pos = int(np.searchsorted(indices, frame_index, side="right")) - 1
    if pos < 0 or pos >= len(safety):
        return None
    limit = safety[pos].max_safe_speed_kmh
    if limit is None or test_speed_kmh <= limit:
        return None
    return f"⚠️ DANGER ZONE!\nMax Safe: {limit:.0f} km/h"


def animate_track(
    analysis: TrackAnalysis,
    test_speed_kmh: float | None = None,
    frame_step: int | None = None,
    interval_ms: int = 50,
) -> FuncAnimation:
    """Build a :class:`~matplotlib.animation.FuncAnimation` of the car.

    Parameters
    ----------
    analysis:
        Result of :func:`~track_safety.analysis.analyse_track`.
    test_speed_kmh, frame_step:
        Override the animation speed and frame spacing from the analysis
        configuration.
    interval_ms:
        Delay between frames in milliseconds.
    """
    config = analysis.config
    speed = config.animation_speed_kmh if test_speed_kmh is None else test_speed_kmh
    step = config.animation_frame_step if frame_step is None else frame_step
    if step < 1:
        raise ValueError("frame_step must be at least 1")

    samples = analysis.samples
    danger = [s for s in analysis.safety if s.is_danger]

    fig, ax = plt.subplots()
    ax.plot(samples.y, samples.x, "r-", linewidth=2)
    if danger:
        ax.plot([s.y for s in danger], [s.x for s in danger], "ro", markersize=6,
                markerfacecolor="none")
    (car,) = ax.plot([], [], "ks", markersize=10, markerfacecolor="tab:blue")
    warning = ax.text(8, 15, "", fontsize=14, color="red")
    ax.set_xlim(5, 17)
    ax.set_ylim(5, 17)
    ax.set_title(f"F1 Car Position - Speed: {speed:g} km/h")
    ax.set_xlabel("Y Coordinate")
    ax.set_ylabel("X Coordinate")

    def update(i: int):
        car.set_data([samples.y[i]], [samples.x[i]])
        message = danger_message(i, analysis.indices, analysis.safety, speed)
        warning.set_text(message or "")
        return car, warning

    frames = range(0, len(samples), step)
    return FuncAnimation(fig, update, frames=frames, interval=interval_ms,
                         blit=False, repeat=False)


__all__ = ["animate_track", "danger_message"]
