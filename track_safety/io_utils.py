from __future__ import annotations

"""Utility functions for reading parameters and writing results.

Track and safety parameters are stored in a two-column ``key,value`` CSV
file.  :func:`read_params_csv` parses it into a plain mapping and
:func:`load_config` validates that mapping into a
:class:`~track_safety.track_model.TrackSpec` and a
:class:`~track_safety.config.SafetyConfig`.  Result tables are written with
:mod:`pandas`.
"""

from pathlib import Path
from typing import Dict, Iterable, Mapping

import csv
import pandas as pd

from .config import ConfigurationError, SafetyConfig
from .track_model import TrackSpec

TRACK_KEYS = ("a3", "a2", "a1", "a0", "x_start", "x_end", "step")

# Parameter file keys mapped to SafetyConfig fields.
SAFETY_KEYS = {
    "friction_coefficient": "friction_coefficient",
    "mu": "friction_coefficient",
    "banking_angle_deg": "banking_angle_deg",
    "danger_radius_m": "danger_radius_m",
    "danger_radius_threshold_m": "danger_radius_m",
    "test_speeds": "test_speeds",
    "sample_stride": "sample_stride",
    "animate": "animate",
    "animation_speed_kmh": "animation_speed_kmh",
    "animation_frame_step": "animation_frame_step",
    "g": "g",
}


def read_params_csv(path: str | Path) -> Dict[str, float | bool | str]:
    """Read ``key,value`` parameters from ``path``.

    Values of ``true``/``false`` are interpreted as booleans and numeric
    entries as floating point numbers.  Anything else, for instance a quoted
    comma-separated list of test speeds, is kept as the raw string.  Rows
    starting with ``#`` are treated as comments.
    """
    params: Dict[str, float | bool | str] = {}
    with Path(path).open(newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row or all(cell.strip() == "" for cell in row):
                continue
            key = row[0].strip()
            if key.startswith("#"):
                continue
            try:
                raw_value = row[1].strip()
            except IndexError:
                continue

            value_lower = raw_value.lower()
            if value_lower == "true":
                params[key] = True
            elif value_lower == "false":
                params[key] = False
            else:
                try:
                    params[key] = float(raw_value)
                except ValueError:
                    params[key] = raw_value
    return params


def parse_speeds(value: float | str | Iterable[float]) -> tuple[float, ...]:
    """Parse a speed list given as a number, a comma-separated string or an iterable."""
    if isinstance(value, bool):
        raise ConfigurationError("test_speeds must be numeric")
    if isinstance(value, (int, float)):
        return (float(value),)
    if isinstance(value, str):
        try:
            return tuple(float(v.strip()) for v in value.split(",") if v.strip())
        except ValueError as exc:
            raise ConfigurationError(f"invalid test_speeds value: {value!r}") from exc
    try:
        return tuple(float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"invalid test_speeds value: {value!r}") from exc


def build_config(
    params: Mapping[str, float | bool | str],
) -> tuple[TrackSpec, SafetyConfig]:
    """Validate a parameter mapping into track and safety configuration.

    Missing keys fall back to the defaults of :meth:`TrackSpec.default` and
    :class:`SafetyConfig`.

    Raises
    ------
    ConfigurationError
        If a key is unknown, a value has the wrong type or the resulting
        configuration is invalid.
    """
    unknown = set(params).difference(TRACK_KEYS, SAFETY_KEYS)
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigurationError(f"unknown parameter(s): {unknown_str}")

    default_track = TrackSpec.default()
    track_kwargs: Dict[str, float] = {}
    for key in TRACK_KEYS:
        value = params.get(key, getattr(default_track, key))
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"'{key}' must be numeric, got {value!r}")
        track_kwargs[key] = float(value)

    safety_kwargs: Dict[str, object] = {}
    for key, field_name in SAFETY_KEYS.items():
        if key not in params:
            continue
        value = params[key]
        if field_name == "test_speeds":
            safety_kwargs[field_name] = parse_speeds(value)
        elif field_name == "animate":
            if not isinstance(value, bool):
                raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
            safety_kwargs[field_name] = value
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"'{key}' must be numeric, got {value!r}")
            safety_kwargs[field_name] = float(value)

    return TrackSpec(**track_kwargs), SafetyConfig(**safety_kwargs)


def load_config(path: str | Path) -> tuple[TrackSpec, SafetyConfig]:
    """Read and validate a parameter file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigurationError
        If the parameters are invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter file not found: {path}")
    return build_config(read_params_csv(path))


def write_csv(data: Mapping[str, Iterable] | pd.DataFrame, file_path: str | Path) -> None:
    """Write ``data`` to ``file_path`` ensuring parent directories exist."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, pd.DataFrame):
        data.to_csv(file_path, index=False)
    else:
        pd.DataFrame(data).to_csv(file_path, index=False)
