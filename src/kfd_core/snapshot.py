"""Read-only vehicle state consumed by the telemetry deriver.

The host game fills one :class:`VesselSnapshot` per update interval.  The
structures deliberately mirror what the game exposes for the active vessel so
that adapters only need to copy attributes across; none of them carry
behaviour beyond a couple of convenience predicates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .constants import (
    ENGINE_MODULE_KINDS,
    INTAKE_AIR,
    MODULE_INTAKE,
    TRANSITION_FINAL,
)

__all__ = [
    "BodySnapshot",
    "OrbitSnapshot",
    "PartModuleSnapshot",
    "PartSnapshot",
    "Propellant",
    "VesselSnapshot",
]


@dataclass(frozen=True, slots=True)
class Propellant:
    """Propellant feed of an engine with its instantaneous demand."""

    name: str
    current_requirement: float = 0.0

    @property
    def is_intake_air(self) -> bool:
        return self.name == INTAKE_AIR


@dataclass(frozen=True, slots=True)
class PartModuleSnapshot:
    """Engine or intake module attached to a part.

    ``kind`` is one of ``"engine"``, ``"engine_fx"`` or ``"intake"``; the
    engine fields are ignored for intakes and vice versa.
    """

    kind: str
    ignited: bool = False
    shutdown: bool = False
    thrust: float = 0.0
    propellants: tuple[Propellant, ...] = ()
    intake_enabled: bool = False
    air_flow: float = 0.0

    @property
    def is_engine(self) -> bool:
        return self.kind in ENGINE_MODULE_KINDS

    @property
    def is_intake(self) -> bool:
        return self.kind == MODULE_INTAKE

    @property
    def is_active_engine(self) -> bool:
        return self.is_engine and self.ignited and not self.shutdown


@dataclass(frozen=True, slots=True)
class PartSnapshot:
    """Thermal state of a vessel part and its modules."""

    name: str = ""
    temperature: float = 0.0
    max_temp: float = 0.0
    skin_temperature: float = 0.0
    skin_max_temp: float = 0.0
    modules: tuple[Optional[PartModuleSnapshot], ...] = ()


@dataclass(frozen=True, slots=True)
class OrbitSnapshot:
    """Current orbit patch of the vessel.

    Times are measured in seconds from the snapshot instant.  ``patch_end_transition``
    follows the host naming (``initial``, ``final``, ``encounter``, ``escape``,
    ``maneuver``).
    """

    apoapsis: float = 0.0
    periapsis: float = 0.0
    time_to_apoapsis: float = math.inf
    time_to_periapsis: float = math.inf
    time_to_patch_end: float = math.inf
    patch_end_transition: str = TRANSITION_FINAL


@dataclass(frozen=True, slots=True)
class BodySnapshot:
    """Celestial body the vessel is currently orbiting."""

    name: str = ""
    has_atmosphere: bool = False
    atmosphere_depth: float = 0.0


@dataclass(frozen=True, slots=True)
class VesselSnapshot:
    """Everything the deriver needs to know about the active vessel."""

    altitude: float = 0.0
    terrain_altitude: float = 0.0
    vertical_speed: float = 0.0
    surface_speed: float = 0.0
    landed_or_splashed: bool = False
    throttle: float = 0.0
    mach: float = 0.0
    dynamic_pressure_kpa: float = 0.0
    fixed_delta_time: float = 0.02
    orbit: Optional[OrbitSnapshot] = None
    body: Optional[BodySnapshot] = None
    parts: Sequence[Optional[PartSnapshot]] = ()
    is_eva: bool = False
    is_dead: bool = False
    navball_enabled: bool = True
    handle: Any = field(default=None, compare=False, repr=False)

    @property
    def radar_altitude(self) -> float:
        """Altitude above the terrain; the sea surface bounds it from below."""

        return self.altitude - max(0.0, self.terrain_altitude)
