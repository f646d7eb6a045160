"""Warning thresholds used by the classification pass."""

from __future__ import annotations

import math
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

__all__ = ["ConfigurationError", "WarningThresholds", "DEFAULT_THRESHOLDS"]


class ConfigurationError(ValueError):
    """Raised when threshold overrides are inconsistent."""


@dataclass(frozen=True, slots=True)
class WarningThresholds:
    """Immutable warning thresholds parsed from TOML sources.

    Pressures are in pascal, stall values are fractions of stalled lifting
    area, air values are supply/demand ratios and temperature values are
    normalised margins ``(limit - current) / limit``.
    """

    q_inactive: float = 10.0
    q_warn1: float = 40000.0
    stall_warn2: float = 0.5
    stall_warn1: float = 0.005
    air_warn2: float = 1.05
    air_warn1: float = 1.5
    temp_warn2: float = 0.05
    temp_warn1: float = 0.2
    temp_emph: float = 0.5
    temp_display: float = 0.5

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{item.name} must be finite, got {value!r}")
        if self.stall_warn1 > self.stall_warn2:
            raise ConfigurationError("stall_warn1 must not exceed stall_warn2")
        if self.air_warn2 > self.air_warn1:
            raise ConfigurationError("air_warn2 must not exceed air_warn1")
        if not self.temp_warn2 <= self.temp_warn1 <= self.temp_emph:
            raise ConfigurationError(
                "temperature thresholds must satisfy temp_warn2 <= temp_warn1 <= temp_emph"
            )

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any] | None = None
    ) -> "WarningThresholds":
        """Coerce the ``thresholds`` table of ``config`` into thresholds.

        Unknown keys and values that cannot be read as numbers are ignored so
        that a partially broken file still yields the defaults for those
        entries.
        """

        table = config.get("thresholds") if config else None
        if not isinstance(table, ABCMapping):
            return cls()
        return cls().merged(table)

    def merged(self, overrides: Mapping[str, Any]) -> "WarningThresholds":
        """Return a copy updated with the numeric entries of ``overrides``."""

        updates: dict[str, float] = {}
        for item in fields(self):
            key = item.name
            if key not in overrides:
                continue
            try:
                numeric = float(overrides[key])
            except (TypeError, ValueError):
                continue
            updates[key] = numeric
        if updates:
            return replace(self, **updates)
        return self

    def as_dict(self) -> dict[str, float]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


DEFAULT_THRESHOLDS = WarningThresholds()
