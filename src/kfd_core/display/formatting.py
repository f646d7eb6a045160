"""Unit scaled text for the HUD readouts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

__all__ = [
    "TimeUnits",
    "format_altitude",
    "format_duration",
    "format_pressure",
    "format_radar_altitude",
    "format_scaled",
    "format_vertical_speed",
]

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
MAX_DURATION_FIELDS = 3


@dataclass(frozen=True, slots=True)
class TimeUnits:
    """Lengths of a day and a year used when formatting durations."""

    seconds_per_day: int = 24 * SECONDS_PER_HOUR
    seconds_per_year: int = 365 * 24 * SECONDS_PER_HOUR

    def __post_init__(self) -> None:
        if self.seconds_per_day <= 0 or self.seconds_per_year <= 0:
            raise ValueError("day and year lengths must be positive")

    @classmethod
    def earth(cls) -> "TimeUnits":
        return cls()

    @classmethod
    def from_home_body(cls, rotation_period: float, orbital_period: float) -> "TimeUnits":
        """Local time derived from the home body, truncated to whole seconds."""

        return cls(int(rotation_period), int(orbital_period))


def _decimals(magnitude: float) -> int:
    if magnitude < 10.0:
        return 2
    if magnitude < 100.0:
        return 1
    return 0


def format_scaled(value: float, scale: float, unit: str) -> str:
    """Format ``value / scale`` with 2, 1 or 0 decimals depending on size."""

    scaled = value / scale
    return f"{scaled:.{_decimals(abs(scaled))}f} {unit}"


def format_pressure(pascal: float) -> str:
    if pascal > 1.0e6:
        value, unit = pascal * 1.0e-6, "MPa"
    else:
        value, unit = pascal * 1.0e-3, "kPa"
    decimals = 1 if value < 10.0 else 0
    return f"{value:.{decimals}f} {unit}"


def format_altitude(metres: float) -> str:
    magnitude = abs(metres)
    if magnitude >= 1.0e9:
        return format_scaled(metres, 1.0e9, "Gm")
    if magnitude >= 1.0e6:
        return format_scaled(metres, 1.0e6, "Mm")
    return format_scaled(metres, 1.0e3, "km")


def format_radar_altitude(metres: float) -> str:
    if abs(metres) >= 1.0e3:
        return format_scaled(metres, 1.0e3, "km")
    return f"{metres:.0f} m"


def format_vertical_speed(metres_per_second: float) -> str:
    if abs(metres_per_second) >= 1.0e3:
        return format_scaled(metres_per_second, 1.0e3, "km/s")
    return f"{metres_per_second:.0f} m/s"


def _duration_fields(seconds: int, units: TimeUnits) -> Sequence[tuple[int, str]]:
    years, seconds = divmod(seconds, units.seconds_per_year)
    days, seconds = divmod(seconds, units.seconds_per_day)
    hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)
    return ((years, "y"), (days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))


def format_duration(seconds: float, units: TimeUnits | None = None) -> str:
    """Format ``seconds`` as at most three consecutive units.

    The output starts at the largest non-zero unit and continues with the
    following units, zeros included, until three fields are written.
    Fractions of a second are truncated; ``"0s"`` is returned for durations
    shorter than one second.
    """

    if not math.isfinite(seconds):
        return "inf"
    units = units or TimeUnits()
    total = max(int(seconds), 0)
    parts: list[str] = []
    for amount, suffix in _duration_fields(total, units):
        if parts or amount > 0:
            parts.append(f"{amount}{suffix}")
        if len(parts) == MAX_DURATION_FIELDS:
            break
    return " ".join(parts) if parts else "0s"
