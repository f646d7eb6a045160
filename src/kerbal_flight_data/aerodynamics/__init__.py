"""Optional aerodynamics extensions and their discovery."""

from .far import FAR_EXTENSION_NAME, FarAerodynamicsProvider
from .registry import (
    AerodynamicsExtensionError,
    aerodynamics_extension,
    discover_aerodynamics_provider,
    iter_aerodynamics_extensions,
    register_aerodynamics_extension,
)

__all__ = [
    "AerodynamicsExtensionError",
    "FAR_EXTENSION_NAME",
    "FarAerodynamicsProvider",
    "aerodynamics_extension",
    "discover_aerodynamics_provider",
    "iter_aerodynamics_extensions",
    "register_aerodynamics_extension",
]
