"""Derived telemetry record produced once per update interval."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import NODE_AP, STYLE_PLAIN

__all__ = ["Data"]


@dataclass(slots=True)
class Data:
    """Flat record of derived HUD quantities.

    Every value is only meaningful while its paired ``has_*`` flag is set;
    consumers must check the flag first.  A fresh instance is built on every
    update tick and nothing keeps a reference to it once the display policy
    has been evaluated.
    """

    # feature flags
    has_aerodynamics: bool = False
    has_air_availability: bool = False
    has_stalls: bool = False
    has_engine_perf: bool = False
    has_air_breathing_engines: bool = False
    has_temp: bool = False
    has_orbit: bool = False
    is_in_atmosphere: bool = False
    is_landed: bool = False
    is_atmospheric_low_level_flight: bool = False

    # aerodynamics
    mach_number: float = 0.0
    q: float = 0.0
    stall_percentage: float = 0.0

    # propulsion
    air_availability: float = 0.0
    total_thrust: float = 0.0
    air_breather_thrust: float = 0.0
    throttle: float = 0.0

    # orbit
    apoapsis: float = 0.0
    periapsis: float = 0.0
    time_to_node: float = math.inf
    next_node: str = NODE_AP

    # kinematics
    altitude: float = 0.0
    radar_altitude: float = 0.0
    radar_altitude_deriv: float = 0.0
    time_to_impact: float = math.inf
    vertical_speed: float = 0.0

    # thermal
    highest_temp: float = 0.0
    highest_temp_max: float = 0.0
    temp_warn_metric: float = 0.0
    is_skin_temp: bool = False

    # warning levels
    warn_q: str = STYLE_PLAIN
    warn_stall: str = STYLE_PLAIN
    warn_air: str = STYLE_PLAIN
    warn_temp: str = STYLE_PLAIN
