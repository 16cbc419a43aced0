"""End-to-end track safety analysis.

:func:`analyse_track` chains the pure stages::

    sample_track -> arc_length / critical_points
                 -> sample_indices -> curvature_samples
                 -> evaluate_safety -> summarise
                 -> simulate_all

and bundles every intermediate sequence in a :class:`TrackAnalysis` for the
report writer, the plotting helpers and the CLI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .config import SafetyConfig
from .crash import CrashResult, simulate_all
from .geometry import (
    CriticalPoint,
    CurvatureSample,
    TrackSamples,
    arc_length,
    critical_points,
    curvature_samples,
    sample_indices,
    sample_track,
)
from .safety import SafetySample, SafetyStats, evaluate_safety, summarise
from .track_model import TrackSpec

_logger = logging.getLogger(__name__)


@dataclass
class TrackAnalysis:
    spec: TrackSpec
    config: SafetyConfig
    samples: TrackSamples
    indices: np.ndarray
    length_km: float
    critical_points: list[CriticalPoint]
    curvature: list[CurvatureSample]
    safety: list[SafetySample]
    stats: SafetyStats
    crashes: list[CrashResult]


def analyse_track(spec: TrackSpec, config: SafetyConfig | None = None) -> TrackAnalysis:
    """Run the full geometry, safety and crash pipeline for ``spec``."""
    if config is None:
        config = SafetyConfig()

    samples = sample_track(spec)
    length_km = arc_length(samples.x, samples.y)
    crit = critical_points(spec)

    indices = sample_indices(len(samples), config.sample_stride)
    curvature = curvature_samples(spec, samples.x[indices])
    safety = evaluate_safety(spec, curvature, config)
    stats = summarise(safety)
    crashes = simulate_all(config.test_speeds, safety)

    _logger.debug(
        "analysed %d samples (%d at stride %d): %d danger point(s)",
        len(samples),
        indices.size,
        config.sample_stride,
        stats.danger_count,
    )
    return TrackAnalysis(
        spec=spec,
        config=config,
        samples=samples,
        indices=indices,
        length_km=length_km,
        critical_points=crit,
        curvature=curvature,
        safety=safety,
        stats=stats,
        crashes=crashes,
    )


__all__ = ["TrackAnalysis", "analyse_track"]
