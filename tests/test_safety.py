import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from track_safety.config import SafetyConfig
from track_safety.geometry import curvature_samples
from track_safety.safety import (
    STATUS_DEGENERATE_BANKING,
    STATUS_OK,
    STATUS_UNDEFINED_CURVATURE,
    SafetySample,
    classify_danger,
    evaluate_safety,
    max_safe_speed,
    summarise,
)
from track_safety.track_model import TrackSpec


def _expected_speed(radius_m: float, mu: float, banking_deg: float) -> float:
    theta = math.radians(banking_deg)
    ratio = (mu * math.cos(theta) + math.sin(theta)) / (math.cos(theta) - mu * math.sin(theta))
    return math.sqrt(9.81 * radius_m * ratio) * 3.6


def test_classify_danger_boundary_exclusive() -> None:
    assert classify_danger(99.999)
    assert not classify_danger(100.0)
    assert not classify_danger(100.001)
    assert not classify_danger(None)
    assert classify_danger(40.0, threshold=50.0)


def test_max_safe_speed_flat_track() -> None:
    # No banking reduces to v = sqrt(mu g R).
    assert max_safe_speed(100.0, 1.0, 0.0) == pytest.approx(math.sqrt(981.0) * 3.6)


@pytest.mark.parametrize("radius", [5.0, 76.4, 100.0, 2500.0])
def test_max_safe_speed_banked(radius: float) -> None:
    assert max_safe_speed(radius, 1.7, 19.0) == pytest.approx(_expected_speed(radius, 1.7, 19.0))


def test_banking_raises_speed_limit() -> None:
    assert max_safe_speed(100.0, 1.7, 19.0) > max_safe_speed(100.0, 1.7, 0.0)


@pytest.mark.parametrize("radius", [0.5, 100.0, 1e6])
def test_degenerate_banking_gives_zero(radius: float) -> None:
    # cos(60) - 1.7 sin(60) < 0
    assert max_safe_speed(radius, 1.7, 60.0) == 0.0


@pytest.mark.parametrize(
    "mu, banking",
    [(0.1, -3.0), (0.1, -5.0), (1.7, -30.0), (1.7, -55.0)],
)
def test_outward_banking_within_grip(mu: float, banking: float) -> None:
    # Above -atan(mu) the numerator stays positive.
    assert banking > -math.degrees(math.atan(mu))
    speed = max_safe_speed(100.0, mu, banking)
    assert speed > 0
    assert speed == pytest.approx(_expected_speed(100.0, mu, banking))
    assert speed < max_safe_speed(100.0, mu, 0.0)


@pytest.mark.parametrize(
    "mu, banking",
    [(0.1, -6.0), (0.1, -30.0), (1.7, -60.0), (1.7, -89.0)],
)
def test_outward_banking_beyond_grip_gives_zero(mu: float, banking: float) -> None:
    assert banking < -math.degrees(math.atan(mu))
    assert max_safe_speed(100.0, mu, banking) == 0.0


def test_outward_banking_flags_degenerate_samples() -> None:
    samples = _evaluate(SafetyConfig(friction_coefficient=0.1, banking_angle_deg=-30.0))
    defined = [s for s in samples if s.status != STATUS_UNDEFINED_CURVATURE]
    assert len(defined) == 4
    assert all(s.status == STATUS_DEGENERATE_BANKING for s in defined)
    assert all(s.max_safe_speed_kmh == 0.0 for s in defined)


def test_non_positive_radius_gives_zero() -> None:
    assert max_safe_speed(0.0, 1.7, 19.0) == 0.0
    assert max_safe_speed(-10.0, 1.7, 19.0) == 0.0


def _small_track() -> TrackSpec:
    # f(x) = x^3 - 3x, inflection at x = 0.
    return TrackSpec(a3=1.0, a2=0.0, a1=-3.0, a0=0.0, x_start=-2.0, x_end=2.0, step=0.5)


def _evaluate(config: SafetyConfig) -> list[SafetySample]:
    spec = _small_track()
    return evaluate_safety(spec, curvature_samples(spec, [-2.0, -1.0, 0.0, 1.0, 2.0]), config)


def test_evaluate_safety_statuses_and_flags() -> None:
    samples = _evaluate(SafetyConfig())
    assert [s.status for s in samples] == [
        STATUS_OK,
        STATUS_OK,
        STATUS_UNDEFINED_CURVATURE,
        STATUS_OK,
        STATUS_OK,
    ]
    undefined = samples[2]
    assert undefined.radius_m is None
    assert undefined.max_safe_speed_kmh is None
    assert not undefined.is_danger
    for s in samples:
        assert s.is_danger == (s.radius_m is not None and s.radius_m < 100.0)
    assert [s.is_danger for s in samples] == [False, True, False, True, False]
    assert samples[1].y == pytest.approx(2.0)


def test_evaluate_safety_degenerate_banking() -> None:
    samples = _evaluate(SafetyConfig(banking_angle_deg=60.0))
    defined = [s for s in samples if s.status != STATUS_UNDEFINED_CURVATURE]
    assert all(s.status == STATUS_DEGENERATE_BANKING for s in defined)
    assert all(s.max_safe_speed_kmh == 0.0 for s in defined)


def test_summarise_excludes_undefined() -> None:
    samples = _evaluate(SafetyConfig())
    stats = summarise(samples)
    assert stats.total == 5
    assert stats.danger_count == 2
    assert stats.first_danger.x == -1.0
    assert stats.last_danger.x == 1.0
    assert stats.undefined_count == 1
    assert stats.degenerate_count == 0

    speeds = [s.max_safe_speed_kmh for s in samples if s.max_safe_speed_kmh is not None]
    assert stats.max_speed_kmh == max(speeds)
    assert stats.min_speed_kmh == min(speeds)
    assert stats.mean_speed_kmh == pytest.approx(sum(speeds) / 4)
    assert stats.min_radius_m == pytest.approx(samples[1].radius_m)


def test_summarise_counts_degenerate_zeros() -> None:
    stats = summarise(_evaluate(SafetyConfig(banking_angle_deg=60.0)))
    assert stats.degenerate_count == 4
    assert stats.max_speed_kmh == 0.0
    assert stats.mean_speed_kmh == 0.0


def test_summarise_all_undefined() -> None:
    sample = SafetySample(0.0, 0.0, None, False, None, STATUS_UNDEFINED_CURVATURE)
    stats = summarise([sample, sample])
    assert stats.min_radius_m is None
    assert stats.max_speed_kmh is None
    assert stats.mean_speed_kmh is None
    assert stats.first_danger is None
    assert stats.undefined_count == 2
