"""Warning level classification of the derived values."""

from __future__ import annotations

from ..constants import STYLE_EMPH, STYLE_GREYED, STYLE_WARN1, STYLE_WARN2
from ..data import Data
from ..thresholds import DEFAULT_THRESHOLDS, WarningThresholds

__all__ = [
    "apply_warning_pass",
    "classify_air",
    "classify_q",
    "classify_stall",
    "classify_temperature",
]


def classify_q(q: float, thresholds: WarningThresholds = DEFAULT_THRESHOLDS) -> str:
    if q > thresholds.q_warn1:
        return STYLE_WARN1
    return STYLE_GREYED


def classify_stall(
    stall_fraction: float, thresholds: WarningThresholds = DEFAULT_THRESHOLDS
) -> str:
    if stall_fraction > thresholds.stall_warn2:
        return STYLE_WARN2
    if stall_fraction > thresholds.stall_warn1:
        return STYLE_WARN1
    return STYLE_GREYED


def classify_air(ratio: float, thresholds: WarningThresholds = DEFAULT_THRESHOLDS) -> str:
    # NaN compares false everywhere and lands on greyed.
    if ratio < thresholds.air_warn2:
        return STYLE_WARN2
    if ratio < thresholds.air_warn1:
        return STYLE_WARN1
    return STYLE_GREYED


def classify_temperature(
    margin: float, thresholds: WarningThresholds = DEFAULT_THRESHOLDS
) -> str:
    if margin < thresholds.temp_warn2:
        return STYLE_WARN2
    if margin < thresholds.temp_warn1:
        return STYLE_WARN1
    if margin < thresholds.temp_emph:
        return STYLE_EMPH
    return STYLE_GREYED


def apply_warning_pass(
    data: Data, thresholds: WarningThresholds = DEFAULT_THRESHOLDS
) -> None:
    """Set the four warning levels of ``data`` from its current values.

    Below ``q_inactive`` the aerodynamic surfaces do nothing useful, so dynamic
    pressure and stall are both greyed regardless of the stall fraction.
    """

    if data.has_aerodynamics:
        if data.q < thresholds.q_inactive:
            data.warn_q = STYLE_GREYED
            data.warn_stall = STYLE_GREYED
        else:
            data.warn_q = classify_q(data.q, thresholds)
            data.warn_stall = classify_stall(data.stall_percentage, thresholds)
    data.warn_air = classify_air(data.air_availability, thresholds)
    data.warn_temp = classify_temperature(data.temp_warn_metric, thresholds)
