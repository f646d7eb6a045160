"""Engine thrust and intake air accounting."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..data import Data
from ..snapshot import PartModuleSnapshot, VesselSnapshot

__all__ = ["PropulsionTotals", "air_availability_ratio", "apply_propulsion_pass", "scan_propulsion"]


@dataclass
class PropulsionTotals:
    """Accumulators filled while visiting the part modules."""

    total_thrust: float = 0.0
    air_breather_thrust: float = 0.0
    air_available: float = 0.0
    air_demand: float = 0.0
    has_engines: bool = False
    has_air_breathing_engines: bool = False

    def visit(self, module: PartModuleSnapshot, fixed_delta_time: float) -> None:
        if module.is_engine:
            if not module.is_active_engine:
                return
            needs_air = False
            for propellant in module.propellants:
                if propellant.is_intake_air:
                    self.air_demand += propellant.current_requirement
                    needs_air = True
            if needs_air:
                self.air_breather_thrust += module.thrust
                self.has_air_breathing_engines = True
            self.total_thrust += module.thrust
            self.has_engines = True
        elif module.is_intake and module.intake_enabled:
            self.air_available += module.air_flow * fixed_delta_time


def air_availability_ratio(available: float, demand: float) -> float:
    """Supply over demand; ``inf`` when nothing demands intake air."""

    if demand == 0.0:
        return math.inf
    return available / demand


def scan_propulsion(vessel: VesselSnapshot) -> PropulsionTotals:
    totals = PropulsionTotals()
    dt = vessel.fixed_delta_time
    for part in vessel.parts:
        if part is None:
            continue
        for module in part.modules:
            if module is None:
                continue
            totals.visit(module, dt)
    return totals


def apply_propulsion_pass(data: Data, vessel: VesselSnapshot) -> None:
    totals = scan_propulsion(vessel)
    data.total_thrust = totals.total_thrust
    data.air_breather_thrust = totals.air_breather_thrust
    data.has_air_breathing_engines = totals.has_air_breathing_engines
    data.has_engine_perf = totals.has_engines
    data.throttle = vessel.throttle
    data.air_availability = air_availability_ratio(totals.air_available, totals.air_demand)
    data.has_air_availability = data.is_in_atmosphere and totals.has_air_breathing_engines
