from __future__ import annotations

"""Conversion between simulation units and real-world distances.

The polynomial track is defined in abstract simulation units.  A fixed
linear scale maps one simulation unit on to ``SCALE_NUM / SCALE_DEN``
kilometres.
"""

import numpy as np

SCALE_NUM = 0.1 * 16583
SCALE_DEN = 39370


def to_real(distance: float | np.ndarray) -> float | np.ndarray:
    """Convert a simulation-unit distance to kilometres."""
    return distance * SCALE_NUM / SCALE_DEN


def to_sim(distance: float | np.ndarray) -> float | np.ndarray:
    """Convert a distance in kilometres back to simulation units."""
    return distance * SCALE_DEN / SCALE_NUM


def to_real_m(distance: float | np.ndarray) -> float | np.ndarray:
    """Convert a simulation-unit distance to metres."""
    return to_real(distance) * 1000.0


def to_sim_m(distance: float | np.ndarray) -> float | np.ndarray:
    """Convert a distance in metres to simulation units."""
    return to_sim(distance / 1000.0)


__all__ = ["SCALE_NUM", "SCALE_DEN", "to_real", "to_sim", "to_real_m", "to_sim_m"]
