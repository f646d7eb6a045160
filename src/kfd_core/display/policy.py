"""Visibility, text and style decisions for every HUD readout.

Each readout is described by a :class:`ReadoutRule` made of three plain
functions: one extracting the values the readout depends on, one deciding
whether those values moved far enough from the last drawn ones to justify a
redraw, and one producing the text and style.  The mutable part lives in one
:class:`DisplayState` per readout owned by :class:`DisplayPolicy`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..constants import (
    AREA_LAYOUT,
    NODE_AP,
    NODE_LABELS,
    NODE_PE,
    RADAR_ALTITUDE_DISPLAY_LIMIT,
    READOUT_AIR,
    READOUT_ALT,
    READOUT_AP,
    READOUT_ENGINE_PERF,
    READOUT_MACH,
    READOUT_PE,
    READOUT_Q,
    READOUT_STALL,
    READOUT_TEMP,
    READOUT_TNODE,
    READOUT_VSPEED,
    STYLE_EMPH,
    STYLE_GREYED,
    STYLE_PLAIN,
    STYLE_WARN1,
    STYLE_WARN2,
)
from ..data import Data
from .comparison import almost_equal, almost_equal_rel
from .formatting import (
    TimeUnits,
    format_altitude,
    format_duration,
    format_pressure,
    format_radar_altitude,
    format_vertical_speed,
)

__all__ = [
    "DisplayPolicy",
    "DisplayState",
    "READOUT_RULES",
    "ReadoutContext",
    "ReadoutRule",
    "RenderCommand",
    "ViewContext",
    "visible_readouts",
]

Values = Tuple[object, ...]
Content = Tuple[str, str]

# Above this ratio the intake readout drops its percentage and stops
# redrawing on small changes.
AIR_PERCENT_LIMIT = 2.0
AIR_REDRAW_LIMIT = 2.1

IMPACT_WARN2_SECONDS = 5.0
IMPACT_WARN1_SECONDS = 10.0
RADAR_ALTITUDE_WARN1 = 200.0


@dataclass(frozen=True, slots=True)
class ViewContext:
    """Camera state of the host for the current frame."""

    map_mode: bool = False


@dataclass(frozen=True, slots=True)
class ReadoutContext:
    """Per-tick inputs the formatting functions need besides :class:`Data`."""

    radar_mode: bool = False
    time_units: TimeUnits = field(default_factory=TimeUnits)


@dataclass(slots=True)
class DisplayState:
    """Last drawn values and appearance of one readout."""

    readout: str
    area: str
    last_values: Optional[Values] = None
    text: str = ""
    style: str = STYLE_PLAIN
    visible: bool = False


@dataclass(frozen=True, slots=True)
class RenderCommand:
    """Instruction for the rendering host.

    ``changed`` is set when the text or style was regenerated or the
    visibility toggled this tick; hosts may skip every other command.
    """

    readout: str
    area: str
    visible: bool
    text: str
    style: str
    changed: bool


@dataclass(frozen=True, slots=True)
class ReadoutRule:
    readout: str
    values: Callable[[Data, ReadoutContext], Values]
    has_changed: Callable[[Values, Values], bool]
    content: Callable[[Data, ReadoutContext], Content]


# -- mach ------------------------------------------------------------------


def _mach_values(data: Data, context: ReadoutContext) -> Values:
    return (data.mach_number,)


def _mach_changed(new: Values, last: Values) -> bool:
    return not almost_equal(new[0], last[0], 0.01)


def _mach_content(data: Data, context: ReadoutContext) -> Content:
    return f"Mach {data.mach_number:.2f}", STYLE_EMPH


# -- intake air --------------------------------------------------------------


def _air_values(data: Data, context: ReadoutContext) -> Values:
    return (data.air_availability,)


def _air_changed(new: Values, last: Values) -> bool:
    if new[0] < AIR_REDRAW_LIMIT or last[0] < AIR_REDRAW_LIMIT:
        return not almost_equal(new[0], last[0], 0.01)
    return False


def _air_content(data: Data, context: ReadoutContext) -> Content:
    text = "Intake"
    if data.air_availability < AIR_PERCENT_LIMIT:
        text += f"  {data.air_availability * 100.0:.0f}%"
    return text, data.warn_air


# -- engine performance ------------------------------------------------------


def _engine_thrust(data: Data) -> float:
    if data.has_air_breathing_engines:
        return data.air_breather_thrust
    return data.total_thrust


def _engine_values(data: Data, context: ReadoutContext) -> Values:
    return (_engine_thrust(data), data.throttle, data.has_air_breathing_engines)


def _engine_changed(new: Values, last: Values) -> bool:
    return (
        not almost_equal(new[0], last[0], 0.5)
        or not almost_equal(new[1], last[1], 0.005)
        or new[2] != last[2]
    )


def _engine_content(data: Data, context: ReadoutContext) -> Content:
    prefix = "J" if data.has_air_breathing_engines else "R"
    thrust = _engine_thrust(data)
    return f"{prefix} {thrust:.0f} kN |{data.throttle * 100.0:.0f}%|", STYLE_GREYED


# -- stall -------------------------------------------------------------------


def _stall_values(data: Data, context: ReadoutContext) -> Values:
    return (data.warn_stall,)


def _identity_changed(new: Values, last: Values) -> bool:
    return new != last


def _stall_content(data: Data, context: ReadoutContext) -> Content:
    return "Stall", data.warn_stall


# -- dynamic pressure --------------------------------------------------------


def _q_values(data: Data, context: ReadoutContext) -> Values:
    return (data.q, data.warn_q)


def _q_changed(new: Values, last: Values) -> bool:
    return not almost_equal_rel(new[0], last[0], 0.01) or new[1] != last[1]


def _q_content(data: Data, context: ReadoutContext) -> Content:
    return "Q  " + format_pressure(data.q), data.warn_q


# -- temperature -------------------------------------------------------------


def _temp_values(data: Data, context: ReadoutContext) -> Values:
    return (data.highest_temp, data.warn_temp, data.is_skin_temp)


def _temp_changed(new: Values, last: Values) -> bool:
    return not almost_equal(new[0], last[0], 1.0) or new[1:] != last[1:]


def _temp_content(data: Data, context: ReadoutContext) -> Content:
    return f"T {data.highest_temp:.0f} K", data.warn_temp


# -- altitude ----------------------------------------------------------------


def _alt_values(data: Data, context: ReadoutContext) -> Values:
    return (data.altitude, data.radar_altitude_deriv, context.radar_mode)


def _alt_changed(new: Values, last: Values) -> bool:
    return (
        not almost_equal_rel(new[0], last[0], 0.001)
        or not almost_equal_rel(new[1], last[1], 0.01)
        or new[2] != last[2]
    )


def _alt_style(data: Data) -> str:
    if data.time_to_impact < IMPACT_WARN2_SECONDS:
        return STYLE_WARN2
    if data.time_to_impact < IMPACT_WARN1_SECONDS or data.radar_altitude < RADAR_ALTITUDE_WARN1:
        return STYLE_WARN1
    return STYLE_EMPH


def _alt_content(data: Data, context: ReadoutContext) -> Content:
    if context.radar_mode:
        text = f"Alt {format_radar_altitude(data.radar_altitude)} R"
    else:
        text = "Alt " + format_altitude(data.altitude)
    return text, _alt_style(data)


# -- time to node ------------------------------------------------------------


def _tnode_values(data: Data, context: ReadoutContext) -> Values:
    return (data.time_to_node, data.next_node)


def _tnode_changed(new: Values, last: Values) -> bool:
    return not almost_equal(new[0], last[0], 1.0) or new[1] != last[1]


def _tnode_content(data: Data, context: ReadoutContext) -> Content:
    label = NODE_LABELS.get(data.next_node, "")
    return f"T{label} -{format_duration(data.time_to_node, context.time_units)}", STYLE_PLAIN


# -- apsides -----------------------------------------------------------------


def _apsis_changed(new: Values, last: Values) -> bool:
    return not almost_equal_rel(new[0], last[0], 0.001) or new[1] != last[1]


def _ap_values(data: Data, context: ReadoutContext) -> Values:
    return (data.apoapsis, data.next_node)


def _ap_content(data: Data, context: ReadoutContext) -> Content:
    style = STYLE_EMPH if data.next_node == NODE_AP else STYLE_PLAIN
    return "Ap " + format_altitude(data.apoapsis), style


def _pe_values(data: Data, context: ReadoutContext) -> Values:
    return (data.periapsis, data.next_node)


def _pe_content(data: Data, context: ReadoutContext) -> Content:
    style = STYLE_EMPH if data.next_node == NODE_PE else STYLE_PLAIN
    return "Pe " + format_altitude(data.periapsis), style


# -- vertical speed ----------------------------------------------------------


def _vspeed_values(data: Data, context: ReadoutContext) -> Values:
    return (data.vertical_speed,)


def _vspeed_changed(new: Values, last: Values) -> bool:
    return not almost_equal_rel(new[0], last[0], 0.001)


def _vspeed_content(data: Data, context: ReadoutContext) -> Content:
    return "VS " + format_vertical_speed(data.vertical_speed), STYLE_PLAIN


READOUT_RULES: Mapping[str, ReadoutRule] = MappingProxyType(
    {
        rule.readout: rule
        for rule in (
            ReadoutRule(READOUT_MACH, _mach_values, _mach_changed, _mach_content),
            ReadoutRule(READOUT_AIR, _air_values, _air_changed, _air_content),
            ReadoutRule(READOUT_ENGINE_PERF, _engine_values, _engine_changed, _engine_content),
            ReadoutRule(READOUT_STALL, _stall_values, _identity_changed, _stall_content),
            ReadoutRule(READOUT_Q, _q_values, _q_changed, _q_content),
            ReadoutRule(READOUT_TEMP, _temp_values, _temp_changed, _temp_content),
            ReadoutRule(READOUT_ALT, _alt_values, _alt_changed, _alt_content),
            ReadoutRule(READOUT_TNODE, _tnode_values, _tnode_changed, _tnode_content),
            ReadoutRule(READOUT_AP, _ap_values, _apsis_changed, _ap_content),
            ReadoutRule(READOUT_PE, _pe_values, _apsis_changed, _pe_content),
            ReadoutRule(READOUT_VSPEED, _vspeed_values, _vspeed_changed, _vspeed_content),
        )
    }
)


def visible_readouts(data: Data, view: ViewContext, radar_mode: bool) -> set[str]:
    """Return the readouts shown for ``data`` under ``view``.

    ``radar_mode`` is the latched radar-altitude mode; it is passed in rather
    than recomputed because it only follows the radar altitude while the
    vessel is airborne.
    """

    visible: set[str] = set()
    in_flight = data.is_in_atmosphere and not data.is_landed
    if data.is_in_atmosphere and data.has_engine_perf:
        visible.add(READOUT_ENGINE_PERF)
    if in_flight:
        if data.has_aerodynamics:
            visible.update((READOUT_MACH, READOUT_Q))
        if data.has_air_availability:
            visible.add(READOUT_AIR)
        if data.has_stalls:
            visible.add(READOUT_STALL)
        if data.has_temp:
            visible.add(READOUT_TEMP)
    if not data.is_landed:
        if view.map_mode or radar_mode:
            visible.add(READOUT_ALT)
        if view.map_mode:
            visible.add(READOUT_VSPEED)
        if data.has_orbit and not data.is_atmospheric_low_level_flight:
            if math.isfinite(data.time_to_node):
                visible.add(READOUT_TNODE)
            visible.update((READOUT_AP, READOUT_PE))
    return visible


class DisplayPolicy:
    """Evaluate every readout rule against successive :class:`Data` records."""

    def __init__(self, time_units: Optional[TimeUnits] = None) -> None:
        self.time_units = time_units or TimeUnits()
        self.radar_mode = False
        self._states: Dict[str, DisplayState] = {}
        for area, readouts in AREA_LAYOUT.items():
            for readout in readouts:
                self._states[readout] = DisplayState(readout=readout, area=area)

    @property
    def states(self) -> Mapping[str, DisplayState]:
        return MappingProxyType(self._states)

    def evaluate(self, data: Data, view: Optional[ViewContext] = None) -> List[RenderCommand]:
        """Update every readout for ``data`` and return the commands in layout order."""

        view = view or ViewContext()
        if not data.is_landed:
            self.radar_mode = data.radar_altitude < RADAR_ALTITUDE_DISPLAY_LIMIT
        context = ReadoutContext(
            radar_mode=self.radar_mode,
            time_units=self.time_units,
        )
        visible = visible_readouts(data, view, self.radar_mode)
        return [
            self._update(self._states[readout], data, context, readout in visible)
            for readouts in AREA_LAYOUT.values()
            for readout in readouts
        ]

    def hide_all(self) -> List[RenderCommand]:
        commands: List[RenderCommand] = []
        for state in self._states.values():
            changed = state.visible
            state.visible = False
            commands.append(_command(state, changed))
        return commands

    def reset(self) -> None:
        for state in self._states.values():
            state.last_values = None
            state.text = ""
            state.style = STYLE_PLAIN
            state.visible = False
        self.radar_mode = False

    def _update(
        self, state: DisplayState, data: Data, context: ReadoutContext, visible: bool
    ) -> RenderCommand:
        if not visible:
            changed = state.visible
            state.visible = False
            return _command(state, changed)

        rule = READOUT_RULES[state.readout]
        values = rule.values(data, context)
        appearing = not state.visible
        if appearing or state.last_values is None or rule.has_changed(values, state.last_values):
            state.last_values = values
            state.text, state.style = rule.content(data, context)
            changed = True
        else:
            changed = False
        state.visible = True
        return _command(state, changed)


def _command(state: DisplayState, changed: bool) -> RenderCommand:
    return RenderCommand(
        readout=state.readout,
        area=state.area,
        visible=state.visible,
        text=state.text,
        style=state.style,
        changed=changed,
    )
