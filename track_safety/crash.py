"""Crash simulation over the per-sample speed limits.

A constant test speed "crashes" at every sample whose maximum safe speed it
exceeds.  Samples with undefined curvature impose no limit and never crash,
but still count towards the total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .safety import SafetySample


@dataclass(frozen=True)
class CrashResult:
    test_speed_kmh: float
    crash_count: int
    crash_fraction: float

    @property
    def crash_percentage(self) -> float:
        return self.crash_fraction * 100.0


def simulate(test_speed_kmh: float, samples: Sequence[SafetySample]) -> CrashResult:
    """Count the samples at which ``test_speed_kmh`` exceeds the safe speed."""
    if not samples:
        raise ValueError("crash simulation requires at least one safety sample")
    crashes = sum(
        1
        for s in samples
        if s.max_safe_speed_kmh is not None and test_speed_kmh > s.max_safe_speed_kmh
    )
    return CrashResult(float(test_speed_kmh), crashes, crashes / len(samples))


def simulate_all(
    test_speeds: Iterable[float], samples: Sequence[SafetySample]
) -> list[CrashResult]:
    """Run :func:`simulate` independently for each entry of ``test_speeds``."""
    return [simulate(v, samples) for v in test_speeds]


__all__ = ["CrashResult", "simulate", "simulate_all"]
