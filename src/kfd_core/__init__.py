"""Telemetry derivation and display policy engine for the flight data HUD.

The package has no dependency on the host game.  Adapters build
:class:`VesselSnapshot` instances, :class:`TelemetryDeriver` condenses them
into :class:`Data` records and :class:`DisplayPolicy` turns those into
:class:`RenderCommand` batches for the rendering host.
"""

from __future__ import annotations

from .data import Data
from .derivation import TelemetryDeriver
from .display import (
    DisplayPolicy,
    DisplayState,
    RenderCommand,
    TimeUnits,
    ViewContext,
)
from .interfaces import (
    AerodynamicsProvider,
    FlightInfo,
    NullAerodynamicsProvider,
    RenderSink,
)
from .snapshot import (
    BodySnapshot,
    OrbitSnapshot,
    PartModuleSnapshot,
    PartSnapshot,
    Propellant,
    VesselSnapshot,
)
from .thresholds import DEFAULT_THRESHOLDS, ConfigurationError, WarningThresholds

__all__ = [
    "AerodynamicsProvider",
    "BodySnapshot",
    "ConfigurationError",
    "DEFAULT_THRESHOLDS",
    "Data",
    "DisplayPolicy",
    "DisplayState",
    "FlightInfo",
    "NullAerodynamicsProvider",
    "OrbitSnapshot",
    "PartModuleSnapshot",
    "PartSnapshot",
    "Propellant",
    "RenderCommand",
    "RenderSink",
    "TelemetryDeriver",
    "TimeUnits",
    "VesselSnapshot",
    "ViewContext",
    "WarningThresholds",
]
