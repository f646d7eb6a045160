"""Adapter for the FerramAerospaceResearch aerodynamics extension."""

from __future__ import annotations

from typing import Any, Optional

from kfd_core.interfaces import FlightInfo
from kfd_core.snapshot import VesselSnapshot

from .registry import AerodynamicsExtensionError, aerodynamics_extension

__all__ = ["FAR_EXTENSION_NAME", "FarAerodynamicsProvider"]

FAR_EXTENSION_NAME = "FerramAerospaceResearch"


@aerodynamics_extension(FAR_EXTENSION_NAME)
class FarAerodynamicsProvider:
    """Query ``FARAPI`` for the stalled fraction of the lifting surfaces.

    ``VesselFlightInfo`` returns ``None`` until the extension has attached
    its flight model to the vessel, which is how readiness is detected.
    Mach number and dynamic pressure are taken from the snapshot because the
    extension feeds them back into the host values anyway.
    """

    def __init__(self, extension: Any) -> None:
        api = getattr(extension, "FARAPI", extension)
        flight_info = getattr(api, "VesselFlightInfo", None)
        stall_fraction = getattr(api, "VesselStallFrac", None)
        if not callable(flight_info) or not callable(stall_fraction):
            raise AerodynamicsExtensionError(
                "FARAPI must expose VesselFlightInfo and VesselStallFrac"
            )
        self._flight_info = flight_info
        self._stall_fraction = stall_fraction

    @property
    def available(self) -> bool:
        return True

    def try_get_flight_info(self, vessel: VesselSnapshot) -> Optional[FlightInfo]:
        if vessel.handle is None:
            return None
        if self._flight_info(vessel.handle) is None:
            return None
        return FlightInfo(
            mach=vessel.mach,
            q=vessel.dynamic_pressure_kpa * 1000.0,
            stall_fraction=float(self._stall_fraction(vessel.handle)),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
