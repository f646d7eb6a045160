from __future__ import annotations

import math

import pytest

from kfd_core.display.comparison import almost_equal, almost_equal_rel
from kfd_core.display.formatting import (
    TimeUnits,
    format_altitude,
    format_duration,
    format_pressure,
    format_radar_altitude,
    format_vertical_speed,
)


@pytest.mark.parametrize(
    ("pascal", "expected"),
    [
        (9999.0, "10.0 kPa"),
        (9940.0, "9.9 kPa"),
        (10000.0, "10 kPa"),
        (470.0, "0.5 kPa"),
        (1.0e6, "1000 kPa"),
        (1.0e6 + 1.0, "1.0 MPa"),
        (2.5e7, "25 MPa"),
    ],
)
def test_format_pressure(pascal: float, expected: str) -> None:
    assert format_pressure(pascal) == expected


@pytest.mark.parametrize(
    ("metres", "expected"),
    [
        (0.0, "0.00 km"),
        (5230.0, "5.23 km"),
        (75300.0, "75.3 km"),
        (123456.0, "123 km"),
        (999999.0, "1000 km"),
        (1.0e6, "1.00 Mm"),
        (12.34e6, "12.3 Mm"),
        (2.5e9, "2.50 Gm"),
        (-600000.0, "-600 km"),
    ],
)
def test_format_altitude(metres: float, expected: str) -> None:
    assert format_altitude(metres) == expected


@pytest.mark.parametrize(
    ("metres", "expected"),
    [(42.4, "42 m"), (999.0, "999 m"), (1000.0, "1.00 km"), (15300.0, "15.3 km")],
)
def test_format_radar_altitude(metres: float, expected: str) -> None:
    assert format_radar_altitude(metres) == expected


@pytest.mark.parametrize(
    ("speed", "expected"),
    [(-35.2, "-35 m/s"), (999.0, "999 m/s"), (2300.0, "2.30 km/s"), (-1500.0, "-1.50 km/s")],
)
def test_format_vertical_speed(speed: float, expected: str) -> None:
    assert format_vertical_speed(speed) == expected


def test_duration_caps_at_three_units() -> None:
    assert format_duration(90061.0, TimeUnits.earth()) == "1d 1h 1m"


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (59.9, "59s"),
        (61.0, "1m 1s"),
        (3600.0, "1h 0m 0s"),
        (86400.0 * 2 + 30.0, "2d 0h 0m"),
        (365 * 86400.0 + 5.0, "1y 0d 0h"),
        (0.4, "0s"),
    ],
)
def test_duration_cascade(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected


def test_local_time_units() -> None:
    units = TimeUnits.from_home_body(21549.425, 9203544.6)
    assert units == TimeUnits(seconds_per_day=21549, seconds_per_year=9203544)
    assert format_duration(21549.0 + 3600.0 + 60.0, units) == "1d 1h 1m"


def test_time_units_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TimeUnits.from_home_body(0.0, 100.0)


def test_infinite_duration() -> None:
    assert format_duration(math.inf) == "inf"


def test_almost_equal_helpers() -> None:
    assert almost_equal(1.0, 1.005, 0.01)
    assert not almost_equal(1.0, 1.01, 0.01)
    assert almost_equal_rel(0.0, 0.0, 0.01)
    assert almost_equal_rel(1000.0, 1010.0, 0.01)
    assert not almost_equal_rel(1000.0, 1030.0, 0.01)
    assert not almost_equal_rel(math.inf, 1.0, 0.01)
    assert almost_equal_rel(math.inf, math.inf, 0.01)
