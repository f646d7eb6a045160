"""Passes turning a vessel snapshot into a :class:`~kfd_core.data.Data` record."""

from .aerodynamics import AerodynamicsPass
from .deriver import TelemetryDeriver
from .kinematics import KinematicsSampler, apply_kinematics_pass, time_to_impact
from .orbital import apply_orbital_pass, low_level_flight_ceiling, select_next_node
from .propulsion import (
    PropulsionTotals,
    air_availability_ratio,
    apply_propulsion_pass,
    scan_propulsion,
)
from .thermal import ThermalReading, apply_thermal_pass, worst_thermal_reading
from .warnings import (
    apply_warning_pass,
    classify_air,
    classify_q,
    classify_stall,
    classify_temperature,
)

__all__ = [
    "AerodynamicsPass",
    "KinematicsSampler",
    "PropulsionTotals",
    "TelemetryDeriver",
    "ThermalReading",
    "air_availability_ratio",
    "apply_kinematics_pass",
    "apply_orbital_pass",
    "apply_propulsion_pass",
    "apply_thermal_pass",
    "apply_warning_pass",
    "classify_air",
    "classify_q",
    "classify_stall",
    "classify_temperature",
    "low_level_flight_ceiling",
    "scan_propulsion",
    "select_next_node",
    "time_to_impact",
    "worst_thermal_reading",
]
