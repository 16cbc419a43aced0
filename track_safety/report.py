"""Human-readable summary of a :class:`~track_safety.analysis.TrackAnalysis`."""

from __future__ import annotations

from .analysis import TrackAnalysis

TITLE = "🏁 F1 Track Design and Analysis"


def _fmt(value: float | None, unit: str) -> str:
    if value is None:
        return "n/a"
    return f"{value:.1f} {unit}"


def format_report(analysis: TrackAnalysis) -> str:
    """Return the multi-line analysis summary printed by the CLI."""
    stats = analysis.stats
    lines = [
        TITLE,
        "=" * 32,
        f"Track length: {analysis.length_km:.3f} km",
    ]

    if analysis.critical_points:
        lines.append("Critical Points:")
        for i, cp in enumerate(analysis.critical_points, start=1):
            lines.append(f"  Point {i}: ({cp.x:.2f}, {cp.y:.2f})")

    threshold = analysis.config.danger_radius_m
    lines.append("")
    lines.append(f"Danger Zones (radius < {threshold:g}m): {stats.danger_count} points found")
    if stats.first_danger is not None and stats.last_danger is not None:
        first, last = stats.first_danger, stats.last_danger
        lines.append(f"First danger point: ({first.x:.2f}, {first.y:.2f})")
        lines.append(f"Last danger point: ({last.x:.2f}, {last.y:.2f})")
    if stats.undefined_count:
        lines.append(f"Undefined curvature points: {stats.undefined_count}")
    if stats.degenerate_count:
        lines.append(f"Degenerate banking points: {stats.degenerate_count}")

    lines += [
        "",
        "=== SAFETY ANALYSIS SUMMARY ===",
        f"Minimum curve radius: {_fmt(stats.min_radius_m, 'm')}",
        f"Maximum safe speed: {_fmt(stats.max_speed_kmh, 'km/h')}",
        f"Minimum safe speed: {_fmt(stats.min_speed_kmh, 'km/h')}",
        f"Average safe speed: {_fmt(stats.mean_speed_kmh, 'km/h')}",
        "",
        "=== CRASH SIMULATION ===",
    ]
    for result in analysis.crashes:
        if result.crash_count > 0:
            lines.append(
                f"Speed {result.test_speed_kmh:g} km/h: ⚠️  {result.crash_count} crash points "
                f"({result.crash_percentage:.1f}% of track)"
            )
        else:
            lines.append(f"Speed {result.test_speed_kmh:g} km/h: ✅ Safe driving")

    return "\n".join(lines)


__all__ = ["format_report"]
