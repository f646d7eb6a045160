"""Worst-case thermal margin across every part of the vessel.

Each part contributes up to two candidate readings, its bulk temperature and
its skin temperature.  The margin of a reading is normalised against its
limit::

    score = (limit - current) / limit

so ``0`` means the part is at its limit and ``1`` means it is at absolute
zero.  The reading with the smallest score drives the temperature readout.
Parts reporting a zero temperature have not been simulated yet and are
ignored together with channels without a positive limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..data import Data
from ..snapshot import PartSnapshot, VesselSnapshot
from ..thresholds import DEFAULT_THRESHOLDS, WarningThresholds

__all__ = ["ThermalReading", "apply_thermal_pass", "worst_thermal_reading"]


@dataclass(frozen=True, slots=True)
class ThermalReading:
    """Temperature reading with the smallest normalised margin."""

    temperature: float
    limit: float
    score: float
    is_skin: bool
    part_name: str = ""


def _candidate_arrays(
    parts: Sequence[Optional[PartSnapshot]],
) -> tuple[np.ndarray, np.ndarray, list[str]]:
    # Bulk and skin readings of a part sit next to each other so that the
    # channel can be recovered from the parity of the index.
    temperatures: list[float] = []
    limits: list[float] = []
    names: list[str] = []
    for part in parts:
        if part is None or part.temperature == 0.0:
            continue
        temperatures.extend((part.temperature, part.skin_temperature))
        limits.extend((part.max_temp, part.skin_max_temp))
        names.append(part.name)
    return (
        np.asarray(temperatures, dtype=float),
        np.asarray(limits, dtype=float),
        names,
    )


def worst_thermal_reading(
    parts: Sequence[Optional[PartSnapshot]],
) -> Optional[ThermalReading]:
    """Return the reading closest to its limit or ``None`` when there is none."""

    temperatures, limits, names = _candidate_arrays(parts)
    if temperatures.size == 0:
        return None

    valid = (limits > 0.0) & (temperatures != 0.0) & np.isfinite(temperatures)
    if not np.any(valid):
        return None

    scores = np.full(temperatures.shape, np.inf)
    np.divide(limits - temperatures, limits, out=scores, where=valid)
    index = int(np.argmin(scores))
    return ThermalReading(
        temperature=float(temperatures[index]),
        limit=float(limits[index]),
        score=float(scores[index]),
        is_skin=bool(index % 2),
        part_name=names[index // 2],
    )


def apply_thermal_pass(
    data: Data,
    vessel: VesselSnapshot,
    thresholds: WarningThresholds = DEFAULT_THRESHOLDS,
) -> None:
    data.has_temp = False
    if not data.is_in_atmosphere:
        return

    reading = worst_thermal_reading(vessel.parts)
    if reading is None:
        return

    data.highest_temp = reading.temperature
    data.highest_temp_max = reading.limit
    data.temp_warn_metric = reading.score
    data.is_skin_temp = reading.is_skin
    data.has_temp = reading.score < thresholds.temp_display
