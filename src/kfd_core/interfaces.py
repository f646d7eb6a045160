"""Structural typing interfaces for the engine's external collaborators.

The deriver never inspects third party code at runtime.  Optional
aerodynamics extensions are reached through :class:`AerodynamicsProvider`,
and the rendering host only needs to satisfy :class:`RenderSink`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

from .snapshot import VesselSnapshot

if TYPE_CHECKING:  # pragma: no cover - type-checker hint without runtime import
    from .display.policy import RenderCommand

__all__ = [
    "AerodynamicsProvider",
    "FlightInfo",
    "NullAerodynamicsProvider",
    "RenderSink",
]


@dataclass(frozen=True, slots=True)
class FlightInfo:
    """Aerodynamic state reported by an extension for the active vessel."""

    mach: float
    q: float
    stall_fraction: float


@runtime_checkable
class AerodynamicsProvider(Protocol):
    """Capability exposing mach, dynamic pressure and stall data."""

    @property
    def available(self) -> bool:
        """``False`` when no extension is bound at all."""

    def try_get_flight_info(self, vessel: VesselSnapshot) -> Optional[FlightInfo]:
        """Return the flight info or ``None`` when the extension is not ready."""


class NullAerodynamicsProvider:
    """Provider used when no aerodynamics extension is installed."""

    @property
    def available(self) -> bool:
        return False

    def try_get_flight_info(self, vessel: VesselSnapshot) -> Optional[FlightInfo]:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@runtime_checkable
class RenderSink(Protocol):
    """Rendering host receiving one ordered batch of commands per tick."""

    def render(self, commands: Sequence["RenderCommand"]) -> None:
        """Draw ``commands``; the engine never computes coordinates itself."""
