"""Registry of adapters for third party aerodynamics extensions."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Dict, Optional

from kfd_core.interfaces import AerodynamicsProvider, NullAerodynamicsProvider

logger = logging.getLogger(__name__)

ExtensionFactory = Callable[[Any], AerodynamicsProvider]

_EXTENSION_REGISTRY: Dict[str, ExtensionFactory] = {}

__all__ = [
    "AerodynamicsExtensionError",
    "aerodynamics_extension",
    "discover_aerodynamics_provider",
    "iter_aerodynamics_extensions",
    "register_aerodynamics_extension",
]


class AerodynamicsExtensionError(ValueError):
    """Raised when an adapter registration is invalid."""


def register_aerodynamics_extension(
    name: str, factory: ExtensionFactory
) -> ExtensionFactory:
    """Bind ``factory`` to the loaded extension called ``name``.

    ``factory`` receives the extension object found among the host's loaded
    extensions and returns the provider wrapping it.
    """

    if not isinstance(name, str) or not name:
        raise AerodynamicsExtensionError("extension names must be non-empty strings")
    if not callable(factory):
        raise AerodynamicsExtensionError("factory must be callable")
    existing = _EXTENSION_REGISTRY.get(name)
    if existing is not None and existing is not factory:
        raise AerodynamicsExtensionError(
            f"extension {name!r} already registered with a different adapter"
        )
    _EXTENSION_REGISTRY[name] = factory
    return factory


def aerodynamics_extension(name: str) -> Callable[[ExtensionFactory], ExtensionFactory]:
    """Decorator registering an adapter class or factory for ``name``."""

    def decorator(factory: ExtensionFactory) -> ExtensionFactory:
        return register_aerodynamics_extension(name, factory)

    return decorator


def iter_aerodynamics_extensions() -> Iterator[tuple[str, ExtensionFactory]]:
    return iter(_EXTENSION_REGISTRY.items())


def discover_aerodynamics_provider(
    loaded_extensions: Optional[Mapping[str, Any]] = None,
) -> AerodynamicsProvider:
    """Return the provider for the first registered extension that is loaded.

    Discovery happens once at startup.  When no registered extension is
    loaded, or binding the adapter fails, the null provider is returned and
    the host's own aerodynamic values are used for the rest of the session.
    """

    if loaded_extensions:
        for name, factory in _EXTENSION_REGISTRY.items():
            if name not in loaded_extensions:
                continue
            try:
                provider = factory(loaded_extensions[name])
            except Exception:
                logger.exception(
                    "Failed to bind aerodynamics extension.",
                    extra={"event": "aerodynamics.bind_failed", "extension": name},
                )
                continue
            logger.info(
                "Aerodynamics extension bound.",
                extra={"event": "aerodynamics.bound", "extension": name},
            )
            return provider

    logger.debug(
        "No aerodynamics extension loaded; using host values.",
        extra={"event": "aerodynamics.absent"},
    )
    return NullAerodynamicsProvider()


def _clear_registry() -> None:
    """Test helper clearing the registry; not part of the public API."""

    _EXTENSION_REGISTRY.clear()
