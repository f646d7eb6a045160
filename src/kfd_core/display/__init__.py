"""Display policy turning :class:`~kfd_core.data.Data` into render commands."""

from .comparison import almost_equal, almost_equal_rel
from .formatting import (
    TimeUnits,
    format_altitude,
    format_duration,
    format_pressure,
    format_radar_altitude,
    format_vertical_speed,
)
from .policy import (
    READOUT_RULES,
    DisplayPolicy,
    DisplayState,
    ReadoutContext,
    ReadoutRule,
    RenderCommand,
    ViewContext,
    visible_readouts,
)

__all__ = [
    "DisplayPolicy",
    "DisplayState",
    "READOUT_RULES",
    "ReadoutContext",
    "ReadoutRule",
    "RenderCommand",
    "TimeUnits",
    "ViewContext",
    "almost_equal",
    "almost_equal_rel",
    "format_altitude",
    "format_duration",
    "format_pressure",
    "format_radar_altitude",
    "format_vertical_speed",
    "visible_readouts",
]
