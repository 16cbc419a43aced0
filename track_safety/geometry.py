"""Curve analysis for the cubic track.

This module turns a :class:`~track_safety.track_model.TrackSpec` into
discrete geometry:

``sample_track``
    Evaluates the cubic on the inclusive ``x_start:step:x_end`` grid and
    returns a :class:`TrackSamples` dataclass.
``arc_length`` / ``integral_arc_length``
    Piecewise-linear track length from the samples and a quadrature
    reference value for the continuous curve.
``critical_points``
    Roots of the first derivative.
``radius_of_curvature`` / ``curvature_samples``
    Osculating-circle radius, infinite where the second derivative vanishes.

Curvature, safety and crash stages all operate on the index set returned by
:func:`sample_indices`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np
from scipy.integrate import quad

from .config import ConfigurationError
from .track_model import TrackSpec, sample_count
from .units import to_real, to_real_m

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """One evaluated point of the track in simulation units."""

    x: float
    y: float


@dataclass(frozen=True)
class CriticalPoint:
    """Stationary point of the track.

    The pairing follows the plan-view convention used for display, where the
    horizontal axis carries ``f`` and the vertical axis carries the sampled
    parameter: ``x`` holds ``f(root)`` and ``y`` holds ``root``.
    """

    x: float
    y: float


@dataclass(frozen=True)
class CurvatureSample:
    """Radius of curvature at a sampled ``x``.

    ``radius_m`` is ``None`` where the curvature is undefined (inflection
    point, zero second derivative).
    """

    x: float
    radius_m: float | None

    @property
    def defined(self) -> bool:
        return self.radius_m is not None


@dataclass
class TrackSamples:
    """Discrete representation of the track centreline.

    ``x`` is strictly increasing and ``y = f(x)``.  Iterating yields
    :class:`Sample` records in order.
    """

    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self) -> Iterator[Sample]:
        for xi, yi in zip(self.x, self.y):
            yield Sample(float(xi), float(yi))


def sample_track(spec: TrackSpec) -> TrackSamples:
    """Evaluate ``spec`` on its sampling grid.

    Parameters
    ----------
    spec:
        Track description.  The grid runs from ``x_start`` to ``x_end``
        inclusive with spacing ``step``.

    Returns
    -------
    TrackSamples
        Dataclass containing the sampled ``x`` and ``y`` coordinates.
    """
    n = sample_count(spec.x_start, spec.x_end, spec.step)
    x = spec.x_start + spec.step * np.arange(n, dtype=float)
    # Guard against the last grid point overshooting by rounding error.
    x = np.minimum(x, spec.x_end)
    y = spec.evaluate(x)
    _logger.debug("sampled %d track points on [%g, %g]", n, spec.x_start, spec.x_end)
    return TrackSamples(x, y)


def arc_length(x: Iterable[float], y: Iterable[float]) -> float:
    """Return the polyline length through ``(x, y)`` in kilometres.

    The length is accumulated from straight-line distances between
    consecutive samples and converted with :func:`~track_safety.units.to_real`.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError("x and y must have the same shape")
    if x.ndim != 1:
        raise ValueError("x and y must be one-dimensional")
    segment_lengths = np.hypot(np.diff(x), np.diff(y))
    return float(to_real(np.sum(segment_lengths)))


def integral_arc_length(spec: TrackSpec) -> float:
    r"""Return the exact curve length over the domain in kilometres.

    Integrates :math:`\sqrt{1 + f'(x)^2}` with adaptive quadrature.  The
    polyline estimate from :func:`arc_length` converges to this value from
    below as the sampling step shrinks.
    """
    value, _ = quad(
        lambda x: math.sqrt(1.0 + spec.first_derivative(x) ** 2),
        spec.x_start,
        spec.x_end,
        limit=200,
    )
    return float(to_real(value))


def critical_points(spec: TrackSpec) -> list[CriticalPoint]:
    """Return the stationary points of the track.

    Solves :math:`3 a_3 x^2 + 2 a_2 x + a_1 = 0` with the quadratic formula.
    A negative discriminant gives an empty list.  Otherwise two entries are
    returned, ``+`` root first, even when both roots coincide.
    """
    a = 3.0 * spec.a3
    b = 2.0 * spec.a2
    c = spec.a1
    discriminant = b**2 - 4.0 * a * c
    if discriminant < 0:
        _logger.debug("no real critical points (discriminant %g)", discriminant)
        return []

    root_d = math.sqrt(discriminant)
    roots = ((-b + root_d) / (2.0 * a), (-b - root_d) / (2.0 * a))
    return [CriticalPoint(x=float(spec.evaluate(r)), y=r) for r in roots]


def radius_of_curvature(spec: TrackSpec, x: Iterable[float] | float) -> np.ndarray | float:
    """Return the radius of curvature in simulation units.

    :math:`R = (1 + f'^2)^{3/2} / |f''|`.  Where :math:`f'' = 0` the radius
    is ``inf`` rather than raising a division error.
    """
    scalar = np.isscalar(x)
    x_arr = np.atleast_1d(np.asarray(x, dtype=float))
    d1 = spec.first_derivative(x_arr)
    d2 = np.abs(spec.second_derivative(x_arr))
    radius = np.full_like(x_arr, np.inf)
    mask = d2 > 0
    radius[mask] = (1.0 + d1[mask] ** 2) ** 1.5 / d2[mask]
    if scalar:
        return float(radius[0])
    return radius


def sample_indices(n: int, stride: int = 10) -> np.ndarray:
    """Return the shared analysis index set ``0, stride, 2*stride, ...``."""
    if stride < 1:
        raise ConfigurationError("stride must be at least 1")
    if n < 1:
        raise ConfigurationError("cannot select indices from an empty sample set")
    return np.arange(0, n, stride, dtype=int)


def curvature_samples(spec: TrackSpec, x: Iterable[float]) -> list[CurvatureSample]:
    """Evaluate the radius of curvature in metres at each ``x``."""
    x = np.asarray(x, dtype=float)
    radius_m = to_real_m(radius_of_curvature(spec, x))
    samples = [
        CurvatureSample(float(xi), float(ri) if np.isfinite(ri) else None)
        for xi, ri in zip(x, radius_m)
    ]
    undefined = sum(1 for s in samples if not s.defined)
    if undefined:
        _logger.warning("curvature undefined at %d sampled point(s)", undefined)
    return samples


__all__ = [
    "CriticalPoint",
    "CurvatureSample",
    "Sample",
    "TrackSamples",
    "arc_length",
    "critical_points",
    "curvature_samples",
    "integral_arc_length",
    "radius_of_curvature",
    "sample_indices",
    "sample_track",
]
