"""Host integration for the Kerbal Flight Data HUD.

:mod:`kfd_core` holds the game independent engine.  This package adds what a
host needs around it: the frame-driven :class:`FlightDataController`,
discovery of optional aerodynamics extensions, persisted display settings,
project configuration, snapshot recordings and the ``kfd-hud`` command.
"""

from ._version import __version__
from .aerodynamics import (
    FarAerodynamicsProvider,
    discover_aerodynamics_provider,
    register_aerodynamics_extension,
)
from .configuration import load_config, load_project_config
from .controller import FlightDataController, should_display
from .io import iter_snapshots, write_snapshots
from .settings import (
    DisplaySettings,
    SettingsError,
    load_settings,
    save_settings,
)

__all__ = [
    "DisplaySettings",
    "FarAerodynamicsProvider",
    "FlightDataController",
    "SettingsError",
    "__version__",
    "discover_aerodynamics_provider",
    "iter_snapshots",
    "load_config",
    "load_project_config",
    "load_settings",
    "register_aerodynamics_extension",
    "save_settings",
    "should_display",
    "write_snapshots",
]
