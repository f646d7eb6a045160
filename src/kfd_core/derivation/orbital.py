"""Orbital event selection and atmospheric flight-phase flags."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from ..constants import (
    NODE_AP,
    NODE_ENCOUNTER,
    NODE_ESCAPE,
    NODE_MANEUVER,
    NODE_PE,
    NON_TERMINAL_TRANSITIONS,
    TRANSITION_ENCOUNTER,
    TRANSITION_ESCAPE,
)
from ..data import Data
from ..snapshot import BodySnapshot, OrbitSnapshot, VesselSnapshot

__all__ = [
    "apply_orbital_pass",
    "low_level_flight_ceiling",
    "select_next_node",
]


def _positive_or_inf(value: float) -> float:
    if math.isnan(value) or value <= 0.0:
        return math.inf
    return value


def _node_for_transition(transition: str) -> str:
    if transition == TRANSITION_ESCAPE:
        return NODE_ESCAPE
    if transition == TRANSITION_ENCOUNTER:
        return NODE_ENCOUNTER
    return NODE_MANEUVER


def select_next_node(orbit: OrbitSnapshot) -> Tuple[str, float]:
    """Return ``(next_node, time_to_node)`` for ``orbit``.

    The end of the patch wins whenever it comes no later than both apsis
    crossings and actually terminates the patch.  Otherwise the sooner apsis
    is reported, periapsis on ties.  When nothing is upcoming the time is
    ``inf``.
    """

    time_to_end = _positive_or_inf(orbit.time_to_patch_end)
    time_to_ap = _positive_or_inf(orbit.time_to_apoapsis)
    time_to_pe = _positive_or_inf(orbit.time_to_periapsis)
    if orbit.apoapsis < orbit.periapsis:
        time_to_ap = math.inf

    if (
        math.isfinite(time_to_end)
        and time_to_end <= time_to_pe
        and time_to_end <= time_to_ap
        and orbit.patch_end_transition not in NON_TERMINAL_TRANSITIONS
    ):
        return _node_for_transition(orbit.patch_end_transition), time_to_end
    if time_to_ap < time_to_pe:
        return NODE_AP, time_to_ap
    return NODE_PE, time_to_pe


def low_level_flight_ceiling(body: BodySnapshot) -> Optional[float]:
    """Altitude below which an orbit counts as a low atmospheric hop.

    One third of the atmosphere depth, truncated to whole kilometres.  Bodies
    without atmosphere have no ceiling.
    """

    if not body.has_atmosphere:
        return None
    return float(int(body.atmosphere_depth / 3000.0)) * 1000.0


def apply_orbital_pass(data: Data, vessel: VesselSnapshot) -> None:
    """Fill the orbit values and flight-phase flags of ``data``.

    Without an orbit patch ``has_orbit`` stays false and the apsis values are
    left untouched; without a body neither flight-phase flag is set.
    """

    orbit = vessel.orbit
    body = vessel.body
    if body is not None:
        data.is_in_atmosphere = body.has_atmosphere and vessel.altitude < body.atmosphere_depth
    if orbit is None:
        return

    data.has_orbit = True
    data.apoapsis = orbit.apoapsis
    data.periapsis = orbit.periapsis
    data.next_node, data.time_to_node = select_next_node(orbit)

    ceiling = None if body is None else low_level_flight_ceiling(body)
    if ceiling is not None:
        data.is_atmospheric_low_level_flight = not (
            orbit.apoapsis > ceiling or orbit.periapsis > ceiling
        )
