"""Mach, dynamic pressure and stall data gathered through an extension."""

from __future__ import annotations

import logging
from typing import Optional

from ..data import Data
from ..interfaces import AerodynamicsProvider, FlightInfo, NullAerodynamicsProvider
from ..snapshot import VesselSnapshot

logger = logging.getLogger(__name__)

__all__ = ["AerodynamicsPass"]


class AerodynamicsPass:
    """Pull aerodynamic data from ``provider`` once per tick.

    A provider that is present but not ready clears ``has_aerodynamics`` and
    ``has_stalls`` for that tick only.  The transition into and out of that
    state is logged once rather than on every tick.
    """

    def __init__(self, provider: Optional[AerodynamicsProvider] = None) -> None:
        self.provider: AerodynamicsProvider = provider or NullAerodynamicsProvider()
        self._was_ready: Optional[bool] = None

    def __call__(self, data: Data, vessel: VesselSnapshot) -> None:
        if not self.provider.available:
            data.mach_number = vessel.mach
            data.q = vessel.dynamic_pressure_kpa * 1000.0
            data.has_aerodynamics = True
            data.has_stalls = False
            return

        info = self._query(vessel)
        if info is None:
            data.has_aerodynamics = False
            data.has_stalls = False
            self._note_readiness(False)
            return

        data.mach_number = info.mach
        data.q = info.q
        data.stall_percentage = info.stall_fraction
        data.has_aerodynamics = True
        data.has_stalls = True
        self._note_readiness(True)

    def _query(self, vessel: VesselSnapshot) -> Optional[FlightInfo]:
        try:
            return self.provider.try_get_flight_info(vessel)
        except Exception as exc:  # extensions may raise while still loading
            logger.debug(
                "Aerodynamics extension raised while queried.",
                extra={"event": "aerodynamics.query_failed", "error": repr(exc)},
            )
            return None

    def _note_readiness(self, ready: bool) -> None:
        previous = self._was_ready
        self._was_ready = ready
        if previous == ready:
            return
        if ready:
            logger.info(
                "Aerodynamics data obtained from extension.",
                extra={"event": "aerodynamics.ready", "provider": repr(self.provider)},
            )
        else:
            logger.warning(
                "Aerodynamics extension stopped delivering data.",
                extra={"event": "aerodynamics.unready", "provider": repr(self.provider)},
            )
