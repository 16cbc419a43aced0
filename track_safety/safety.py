r"""Danger classification and banked-corner speed limits.

The maximum cornering speed follows the classic banked-curve bound for
circular motion with friction:

.. math::

    v_{max} = \sqrt{g R \frac{\mu \cos\theta + \sin\theta}
                            {\cos\theta - \mu \sin\theta}}

When the denominator is non-positive the friction and banking combination
has no finite bound.  A non-positive numerator, possible on a track banked
outwards beyond ``atan(mu)``, leaves no lateral grip at all.  Both cases are
reported as a safe speed of zero, which means no speed is considered safe.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import SafetyConfig
from .geometry import CurvatureSample
from .track_model import TrackSpec

_logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_DEGENERATE_BANKING = "degenerate_banking"
STATUS_UNDEFINED_CURVATURE = "undefined_curvature"


@dataclass(frozen=True)
class SafetySample:
    """Safety evaluation at one sampled track position.

    ``status`` records which branch produced ``max_safe_speed_kmh``:
    ``"ok"``, ``"degenerate_banking"`` (speed forced to zero) or
    ``"undefined_curvature"`` (radius and speed are ``None``).
    """

    x: float
    y: float
    radius_m: float | None
    is_danger: bool
    max_safe_speed_kmh: float | None
    status: str


@dataclass(frozen=True)
class SafetyStats:
    """Aggregates over a sequence of :class:`SafetySample`.

    Samples with undefined curvature are excluded from the radius and speed
    aggregates.  Any aggregate is ``None`` if no sample contributes to it.
    """

    total: int
    danger_count: int
    first_danger: SafetySample | None
    last_danger: SafetySample | None
    min_radius_m: float | None
    max_speed_kmh: float | None
    min_speed_kmh: float | None
    mean_speed_kmh: float | None
    undefined_count: int
    degenerate_count: int


def classify_danger(radius_m: float | None, threshold: float = 100.0) -> bool:
    """Return ``True`` if ``radius_m`` is strictly below ``threshold``."""
    if radius_m is None:
        return False
    return radius_m < threshold


def max_safe_speed(
    radius_m: float,
    friction: float,
    banking_angle_deg: float,
    g: float = 9.81,
) -> float:
    """Return the maximum safe cornering speed in km/h.

    Parameters
    ----------
    radius_m:
        Corner radius in metres.
    friction:
        Tyre-road friction coefficient.
    banking_angle_deg:
        Banking angle of the track surface in degrees.
    g:
        Gravitational acceleration in ``m/s^2``.

    Returns
    -------
    float
        Speed in km/h, or ``0.0`` if the banking/friction numerator or
        denominator or the radius is non-positive.
    """
    theta = math.radians(banking_angle_deg)
    numerator = friction * math.cos(theta) + math.sin(theta)
    denominator = math.cos(theta) - friction * math.sin(theta)
    if numerator <= 0 or denominator <= 0 or radius_m <= 0:
        return 0.0
    v_ms = math.sqrt(g * radius_m * numerator / denominator)
    return v_ms * 3.6


def evaluate_safety(
    spec: TrackSpec,
    curvature: Sequence[CurvatureSample],
    config: SafetyConfig,
) -> list[SafetySample]:
    """Classify each curvature sample and compute its speed limit."""
    samples: list[SafetySample] = []
    for c in curvature:
        y = float(spec.evaluate(c.x))
        if not c.defined:
            samples.append(
                SafetySample(c.x, y, None, False, None, STATUS_UNDEFINED_CURVATURE)
            )
            continue

        speed = max_safe_speed(
            c.radius_m, config.friction_coefficient, config.banking_angle_deg, config.g
        )
        status = STATUS_OK if speed > 0 else STATUS_DEGENERATE_BANKING
        samples.append(
            SafetySample(
                c.x,
                y,
                c.radius_m,
                classify_danger(c.radius_m, config.danger_radius_m),
                speed,
                status,
            )
        )

    degenerate = sum(1 for s in samples if s.status == STATUS_DEGENERATE_BANKING)
    if degenerate:
        _logger.warning(
            "no finite speed bound at %d sample(s): friction %g with banking %g deg",
            degenerate,
            config.friction_coefficient,
            config.banking_angle_deg,
        )
    return samples


def summarise(samples: Sequence[SafetySample]) -> SafetyStats:
    """Compute danger counts and radius/speed aggregates."""
    danger = [s for s in samples if s.is_danger]
    defined = [s for s in samples if s.status != STATUS_UNDEFINED_CURVATURE]
    radii = [s.radius_m for s in defined]
    speeds = [s.max_safe_speed_kmh for s in defined]

    return SafetyStats(
        total=len(samples),
        danger_count=len(danger),
        first_danger=danger[0] if danger else None,
        last_danger=danger[-1] if danger else None,
        min_radius_m=min(radii) if radii else None,
        max_speed_kmh=max(speeds) if speeds else None,
        min_speed_kmh=min(speeds) if speeds else None,
        mean_speed_kmh=float(np.mean(speeds)) if speeds else None,
        undefined_count=len(samples) - len(defined),
        degenerate_count=sum(1 for s in defined if s.status == STATUS_DEGENERATE_BANKING),
    )


__all__ = [
    "STATUS_DEGENERATE_BANKING",
    "STATUS_OK",
    "STATUS_UNDEFINED_CURVATURE",
    "SafetySample",
    "SafetyStats",
    "classify_danger",
    "evaluate_safety",
    "max_safe_speed",
    "summarise",
]
