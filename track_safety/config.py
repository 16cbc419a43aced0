"""Safety analysis configuration.

:class:`SafetyConfig` bundles the physical and analysis parameters that are
applied to a sampled track.  The track shape itself lives in
:class:`~track_safety.track_model.TrackSpec`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_TEST_SPEEDS: tuple[float, ...] = (150.0, 200.0, 250.0, 300.0)


class ConfigurationError(ValueError):
    """Raised when track or safety parameters cannot produce a valid analysis."""


@dataclass(frozen=True)
class SafetyConfig:
    """Parameters governing the safety evaluation and crash simulation.

    Parameters
    ----------
    friction_coefficient:
        Tyre-road friction coefficient ``mu``.  Must be positive.
    banking_angle_deg:
        Lateral track banking in degrees.
    danger_radius_m:
        Corners tighter than this radius in metres are flagged as dangerous.
    test_speeds:
        Candidate constant speeds in km/h for the crash simulation.
    sample_stride:
        Every ``sample_stride``-th track sample is analysed for curvature,
        safety and crashes.
    animate:
        Whether the presentation layer should replay the car animation.
    animation_speed_kmh, animation_frame_step:
        Test speed shown during the animation and the sample spacing between
        animation frames.
    g:
        Gravitational acceleration in ``m/s^2``.
    """

    friction_coefficient: float = 1.7
    banking_angle_deg: float = 19.0
    danger_radius_m: float = 100.0
    test_speeds: tuple[float, ...] = field(default=DEFAULT_TEST_SPEEDS)
    sample_stride: int = 10
    animate: bool = False
    animation_speed_kmh: float = 180.0
    animation_frame_step: int = 5
    g: float = 9.81

    def __post_init__(self) -> None:
        # Normalise list input so the config stays hashable and immutable.
        message = f"test_speeds must be a sequence of numbers, got {self.test_speeds!r}"
        if isinstance(self.test_speeds, str):
            raise ConfigurationError(message)
        try:
            speeds = tuple(float(v) for v in self.test_speeds)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(message) from exc
        object.__setattr__(self, "test_speeds", speeds)

        if not math.isfinite(self.friction_coefficient) or self.friction_coefficient <= 0:
            raise ConfigurationError("friction_coefficient must be positive")
        if not -90.0 < self.banking_angle_deg < 90.0:
            raise ConfigurationError("banking_angle_deg must lie strictly between -90 and 90")
        if self.danger_radius_m <= 0:
            raise ConfigurationError("danger_radius_m must be positive")
        if not self.test_speeds:
            raise ConfigurationError("test_speeds must not be empty")
        if any(not math.isfinite(v) or v <= 0 for v in self.test_speeds):
            raise ConfigurationError("test_speeds must contain only positive speeds")
        if int(self.sample_stride) != self.sample_stride or self.sample_stride < 1:
            raise ConfigurationError("sample_stride must be a positive integer")
        if int(self.animation_frame_step) != self.animation_frame_step or self.animation_frame_step < 1:
            raise ConfigurationError("animation_frame_step must be a positive integer")
        if self.animation_speed_kmh <= 0:
            raise ConfigurationError("animation_speed_kmh must be positive")
        if self.g <= 0:
            raise ConfigurationError("g must be positive")
        object.__setattr__(self, "sample_stride", int(self.sample_stride))
        object.__setattr__(self, "animation_frame_step", int(self.animation_frame_step))


__all__ = ["ConfigurationError", "DEFAULT_TEST_SPEEDS", "SafetyConfig"]
