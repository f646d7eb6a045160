"""Radar altitude tracking, impact estimate and landed detection."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from ..constants import LANDED_SPEED_SQUARED
from ..data import Data
from ..snapshot import VesselSnapshot

__all__ = ["KinematicsSampler", "apply_kinematics_pass", "time_to_impact"]


@dataclass
class KinematicsSampler:
    """Finite-difference radar altitude rate sampled once per physics step.

    The derivative is only computed when the previous step was recorded as
    well.  Pausing the sampler (UI hidden, vessel switched) therefore makes
    the first step after resuming report a zero rate instead of the altitude
    change accumulated while hidden.
    """

    radar_altitude: float = 0.0
    radar_altitude_deriv: float = 0.0
    _recorded_last_step: bool = field(default=False, init=False, repr=False)
    _has_sample: bool = field(default=False, init=False, repr=False)

    @property
    def has_sample(self) -> bool:
        return self._has_sample

    def sample(
        self,
        vessel: VesselSnapshot,
        *,
        recording: bool = True,
        step: Optional[float] = None,
    ) -> None:
        """Record one physics step lasting ``step`` seconds.

        ``step`` defaults to the snapshot's ``fixed_delta_time``.
        """

        if not recording:
            self.pause()
            return

        radar_altitude = vessel.radar_altitude
        dt = vessel.fixed_delta_time if step is None else step
        if self._recorded_last_step and dt > 0.0:
            self.radar_altitude_deriv = (radar_altitude - self.radar_altitude) / dt
        else:
            self.radar_altitude_deriv = 0.0
        self.radar_altitude = radar_altitude
        self._recorded_last_step = True
        self._has_sample = True

    def pause(self) -> None:
        """Forget the last sample so nothing stale outlives the pause."""

        self.radar_altitude_deriv = 0.0
        self._recorded_last_step = False
        self._has_sample = False


def time_to_impact(radar_altitude: float, radar_altitude_deriv: float) -> float:
    if radar_altitude_deriv < 0.0:
        return -radar_altitude / radar_altitude_deriv
    return math.inf


def apply_kinematics_pass(
    data: Data, vessel: VesselSnapshot, sampler: KinematicsSampler
) -> None:
    data.altitude = vessel.altitude
    data.vertical_speed = vessel.vertical_speed
    if sampler.has_sample:
        data.radar_altitude = sampler.radar_altitude
        data.radar_altitude_deriv = sampler.radar_altitude_deriv
    else:
        data.radar_altitude = vessel.radar_altitude
        data.radar_altitude_deriv = 0.0
    data.time_to_impact = time_to_impact(data.radar_altitude, data.radar_altitude_deriv)
    data.is_landed = (
        vessel.landed_or_splashed
        and vessel.surface_speed * vessel.surface_speed < LANDED_SPEED_SQUARED
    )
