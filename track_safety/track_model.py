"""Cubic track model.

The track centreline is the graph of a cubic polynomial
:math:`y = a_3 x^3 + a_2 x^2 + a_1 x + a_0` sampled over a closed interval
of ``x``.  Derivatives are evaluated analytically.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .config import ConfigurationError


def sample_count(x_start: float, x_end: float, step: float) -> int:
    """Return the number of points in ``x_start:step:x_end`` inclusive.

    Raises :class:`~track_safety.config.ConfigurationError` if the step is so
    small relative to the interval that the count is not finite.
    """
    steps = (x_end - x_start) / step
    if not math.isfinite(steps):
        raise ConfigurationError("step is too small for the sampling interval")
    # Small tolerance so that e.g. 2.0 / 0.01 counts 200 whole steps.
    return int(np.floor(steps + 1e-9)) + 1


@dataclass(frozen=True)
class TrackSpec:
    """Immutable description of the cubic track and its sampling domain.

    Parameters
    ----------
    a3, a2, a1, a0:
        Cubic coefficients, highest order first.  ``a3`` must be non-zero so
        that the first derivative is a genuine quadratic.
    x_start, x_end:
        Sampling interval in simulation units.  ``x_start < x_end``.
    step:
        Sampling step in simulation units.  Must be positive and small enough
        to give at least two samples.
    """

    a3: float
    a2: float
    a1: float
    a0: float
    x_start: float
    x_end: float
    step: float

    def __post_init__(self) -> None:
        values = (self.a3, self.a2, self.a1, self.a0, self.x_start, self.x_end, self.step)
        if not all(math.isfinite(v) for v in values):
            raise ConfigurationError("track parameters must be finite")
        if self.a3 == 0:
            raise ConfigurationError("a3 must be non-zero for a cubic track")
        if self.step <= 0:
            raise ConfigurationError("step must be positive")
        if self.x_start >= self.x_end:
            raise ConfigurationError("x_start must be less than x_end")
        if sample_count(self.x_start, self.x_end, self.step) < 2:
            raise ConfigurationError(
                "sampling domain yields fewer than two samples; reduce step"
            )

    @classmethod
    def default(cls) -> "TrackSpec":
        """Return the reference track used by the demo."""
        return cls(
            a3=7.3558,
            a2=-157.43,
            a1=1119.5,
            a0=-2631.3,
            x_start=6.0,
            x_end=8.0,
            step=0.01,
        )

    @property
    def coefficients(self) -> tuple[float, float, float, float]:
        """Coefficients ordered ``(a3, a2, a1, a0)``."""
        return self.a3, self.a2, self.a1, self.a0

    def evaluate(self, x: Iterable[float] | float) -> np.ndarray | float:
        """Evaluate the track ``y = f(x)``."""
        x = _as_float(x)
        return self.a3 * x**3 + self.a2 * x**2 + self.a1 * x + self.a0

    __call__ = evaluate

    def first_derivative(self, x: Iterable[float] | float) -> np.ndarray | float:
        """Evaluate :math:`f'(x) = 3 a_3 x^2 + 2 a_2 x + a_1`."""
        x = _as_float(x)
        return 3.0 * self.a3 * x**2 + 2.0 * self.a2 * x + self.a1

    def second_derivative(self, x: Iterable[float] | float) -> np.ndarray | float:
        """Evaluate :math:`f''(x) = 6 a_3 x + 2 a_2`."""
        x = _as_float(x)
        return 6.0 * self.a3 * x + 2.0 * self.a2


def _as_float(x: Iterable[float] | float) -> np.ndarray | float:
    if np.isscalar(x):
        return float(x)
    return np.asarray(x, dtype=float)


__all__ = ["TrackSpec", "sample_count"]
