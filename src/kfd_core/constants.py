"""Centralised constant definitions shared across the flight data engine."""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping


# Warning levels double as style identifiers for the rendering host.
STYLE_PLAIN = "plain"
STYLE_GREYED = "greyed"
STYLE_WARN1 = "warn1"
STYLE_WARN2 = "warn2"
STYLE_EMPH = "emph"

WarningLevel = Literal["plain", "greyed", "warn1", "warn2", "emph"]

WARNING_LEVELS: tuple[str, ...] = (
    STYLE_PLAIN,
    STYLE_GREYED,
    STYLE_WARN1,
    STYLE_WARN2,
    STYLE_EMPH,
)

NODE_AP = "ap"
NODE_PE = "pe"
NODE_ESCAPE = "escape"
NODE_MANEUVER = "maneuver"
NODE_ENCOUNTER = "encounter"

NextNode = Literal["ap", "pe", "escape", "maneuver", "encounter"]

NODE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        NODE_AP: "Ap",
        NODE_PE: "Pe",
        NODE_ENCOUNTER: "En",
        NODE_MANEUVER: "Man",
        NODE_ESCAPE: "Esc",
    }
)

TRANSITION_INITIAL = "initial"
TRANSITION_FINAL = "final"
TRANSITION_ENCOUNTER = "encounter"
TRANSITION_ESCAPE = "escape"
TRANSITION_MANEUVER = "maneuver"

PATCH_TRANSITIONS: tuple[str, ...] = (
    TRANSITION_INITIAL,
    TRANSITION_FINAL,
    TRANSITION_ENCOUNTER,
    TRANSITION_ESCAPE,
    TRANSITION_MANEUVER,
)

# Transitions that do not terminate the current patch.
NON_TERMINAL_TRANSITIONS: frozenset[str] = frozenset(
    {TRANSITION_INITIAL, TRANSITION_FINAL}
)

MODULE_ENGINE = "engine"
MODULE_ENGINE_FX = "engine_fx"
MODULE_INTAKE = "intake"

ENGINE_MODULE_KINDS: frozenset[str] = frozenset({MODULE_ENGINE, MODULE_ENGINE_FX})

INTAKE_AIR = "IntakeAir"

READOUT_MACH = "mach"
READOUT_AIR = "air"
READOUT_ALT = "alt"
READOUT_STALL = "stall"
READOUT_Q = "q"
READOUT_TEMP = "temp"
READOUT_TNODE = "tnode"
READOUT_AP = "ap"
READOUT_PE = "pe"
READOUT_ENGINE_PERF = "eng"
READOUT_VSPEED = "vertspeed"

AREA_LEFT = "left"
AREA_RIGHT = "right"

# Top to bottom order of each HUD text area.
AREA_LAYOUT: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        AREA_LEFT: (
            READOUT_VSPEED,
            READOUT_ALT,
            READOUT_TNODE,
            READOUT_AP,
            READOUT_PE,
        ),
        AREA_RIGHT: (
            READOUT_MACH,
            READOUT_AIR,
            READOUT_ENGINE_PERF,
            READOUT_STALL,
            READOUT_Q,
            READOUT_TEMP,
        ),
    }
)

LANDED_SPEED_SQUARED = 0.01
RADAR_ALTITUDE_DISPLAY_LIMIT = 5000.0

__all__ = [
    "AREA_LAYOUT",
    "AREA_LEFT",
    "AREA_RIGHT",
    "ENGINE_MODULE_KINDS",
    "INTAKE_AIR",
    "LANDED_SPEED_SQUARED",
    "MODULE_ENGINE",
    "MODULE_ENGINE_FX",
    "MODULE_INTAKE",
    "NODE_AP",
    "NODE_ENCOUNTER",
    "NODE_ESCAPE",
    "NODE_LABELS",
    "NODE_MANEUVER",
    "NODE_PE",
    "NON_TERMINAL_TRANSITIONS",
    "NextNode",
    "PATCH_TRANSITIONS",
    "RADAR_ALTITUDE_DISPLAY_LIMIT",
    "READOUT_AIR",
    "READOUT_ALT",
    "READOUT_AP",
    "READOUT_ENGINE_PERF",
    "READOUT_MACH",
    "READOUT_PE",
    "READOUT_Q",
    "READOUT_STALL",
    "READOUT_TEMP",
    "READOUT_TNODE",
    "READOUT_VSPEED",
    "STYLE_EMPH",
    "STYLE_GREYED",
    "STYLE_PLAIN",
    "STYLE_WARN1",
    "STYLE_WARN2",
    "TRANSITION_ENCOUNTER",
    "TRANSITION_ESCAPE",
    "TRANSITION_FINAL",
    "TRANSITION_INITIAL",
    "TRANSITION_MANEUVER",
    "WARNING_LEVELS",
    "WarningLevel",
]
