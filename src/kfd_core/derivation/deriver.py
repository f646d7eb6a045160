"""Composition of the derivation passes into a single telemetry deriver."""

from __future__ import annotations

from typing import Optional

from ..data import Data
from ..interfaces import AerodynamicsProvider
from ..snapshot import VesselSnapshot
from ..thresholds import DEFAULT_THRESHOLDS, WarningThresholds
from .aerodynamics import AerodynamicsPass
from .kinematics import KinematicsSampler, apply_kinematics_pass
from .orbital import apply_orbital_pass
from .propulsion import apply_propulsion_pass
from .thermal import apply_thermal_pass
from .warnings import apply_warning_pass

__all__ = ["TelemetryDeriver"]


class TelemetryDeriver:
    """Turn :class:`VesselSnapshot` instances into :class:`Data` records.

    :meth:`sample_kinematics` must be called once per physics step while the
    HUD is active; :meth:`derive` is called once per update interval and
    builds a fresh record every time.  Apart from the kinematics sampler and
    the readiness memory of the aerodynamics pass the deriver keeps no state.
    """

    def __init__(
        self,
        aerodynamics: Optional[AerodynamicsProvider] = None,
        thresholds: WarningThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        self.thresholds = thresholds
        self.kinematics = KinematicsSampler()
        self._aerodynamics = AerodynamicsPass(aerodynamics)

    @property
    def aerodynamics(self) -> AerodynamicsProvider:
        return self._aerodynamics.provider

    def sample_kinematics(
        self,
        vessel: VesselSnapshot,
        *,
        recording: bool = True,
        step: Optional[float] = None,
    ) -> None:
        self.kinematics.sample(vessel, recording=recording, step=step)

    def pause_kinematics(self) -> None:
        self.kinematics.pause()

    def derive(self, vessel: VesselSnapshot) -> Data:
        data = Data()
        apply_orbital_pass(data, vessel)
        apply_kinematics_pass(data, vessel, self.kinematics)
        self._aerodynamics(data, vessel)
        apply_propulsion_pass(data, vessel)
        apply_thermal_pass(data, vessel, self.thresholds)
        apply_warning_pass(data, self.thresholds)
        return data
