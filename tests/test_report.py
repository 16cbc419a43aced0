import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from track_safety.analysis import analyse_track
from track_safety.config import SafetyConfig
from track_safety.report import format_report
from track_safety.track_model import TrackSpec


def _small_track(a1: float = -3.0) -> TrackSpec:
    return TrackSpec(a3=1.0, a2=0.0, a1=a1, a0=0.0, x_start=-2.0, x_end=2.0, step=0.5)


def test_report_layout() -> None:
    analysis = analyse_track(_small_track(), SafetyConfig(sample_stride=2))
    lines = format_report(analysis).splitlines()

    assert lines[0] == "🏁 F1 Track Design and Analysis"
    assert lines[1] == "================================"
    assert lines[2] == f"Track length: {analysis.length_km:.3f} km"
    assert lines[3:6] == [
        "Critical Points:",
        "  Point 1: (-2.00, 1.00)",
        "  Point 2: (2.00, -1.00)",
    ]
    assert lines[6] == ""
    assert lines[7:11] == [
        "Danger Zones (radius < 100m): 2 points found",
        "First danger point: (-1.00, 2.00)",
        "Last danger point: (1.00, -2.00)",
        "Undefined curvature points: 1",
    ]
    assert lines[11:13] == ["", "=== SAFETY ANALYSIS SUMMARY ==="]
    assert lines[13] == "Minimum curve radius: 7.0 m"
    assert lines[14].startswith("Maximum safe speed: ")
    assert lines[14].endswith(" km/h")
    assert lines[17:19] == ["", "=== CRASH SIMULATION ==="]
    assert lines[19:] == [
        "Speed 150 km/h: ⚠️  2 crash points (40.0% of track)",
        "Speed 200 km/h: ⚠️  2 crash points (40.0% of track)",
        "Speed 250 km/h: ⚠️  2 crash points (40.0% of track)",
        "Speed 300 km/h: ⚠️  2 crash points (40.0% of track)",
    ]


def test_report_safe_driving_line() -> None:
    analysis = analyse_track(_small_track(), SafetyConfig(sample_stride=2, test_speeds=[50]))
    assert format_report(analysis).splitlines()[-1] == "Speed 50 km/h: ✅ Safe driving"


def test_report_without_critical_points_or_danger() -> None:
    config = SafetyConfig(sample_stride=2, danger_radius_m=1e-6, test_speeds=[10])
    text = format_report(analyse_track(_small_track(a1=1.0), config))
    assert "Critical Points:" not in text
    assert "Danger Zones (radius < 1e-06m): 0 points found" in text
    assert "First danger point" not in text
    assert "Undefined curvature points" in text


def test_report_reference_track_sections() -> None:
    analysis = analyse_track(TrackSpec.default())
    text = format_report(analysis)
    stats = analysis.stats
    assert f"Minimum curve radius: {stats.min_radius_m:.1f} m" in text
    assert f"Average safe speed: {stats.mean_speed_kmh:.1f} km/h" in text
    assert text.count("Speed ") == 4
    assert "Undefined curvature points" not in text
    assert "Degenerate banking points" not in text


def test_report_counts_degenerate_banking() -> None:
    config = SafetyConfig(sample_stride=2, banking_angle_deg=60.0)
    lines = format_report(analyse_track(_small_track(), config)).splitlines()
    undefined = lines.index("Undefined curvature points: 1")
    assert lines[undefined + 1] == "Degenerate banking points: 4"
    assert "Maximum safe speed: 0.0 km/h" in lines
