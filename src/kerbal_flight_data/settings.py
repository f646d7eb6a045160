"""Persistence of the user display preferences."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SETTINGS_FILENAME",
    "DisplaySettings",
    "SettingsError",
    "load_settings",
    "render_settings",
    "save_settings",
]

DEFAULT_SETTINGS_FILENAME = "settings.toml"
_TABLE_NAME = "display"


class SettingsError(RuntimeError):
    """Raised when a settings file cannot be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True, slots=True)
class DisplaySettings:
    """Font sizes, anchor offset and the toolbar state of the HUD."""

    base_font_size_iva: int = 16
    base_font_size_external: int = 16
    top_anchor_offset_x: float = 0.0
    active: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DisplaySettings":
        """Build settings from ``values`` keeping the default for bad entries.

        Each entry is coerced to the type of its field.  Entries that cannot
        be coerced are logged and skipped so that one mistyped key does not
        discard the whole file.
        """

        defaults = cls()
        updates: dict[str, Any] = {}
        for item in fields(cls):
            if item.name not in values:
                continue
            raw = values[item.name]
            default = getattr(defaults, item.name)
            try:
                updates[item.name] = _coerce(raw, type(default))
            except (TypeError, ValueError):
                logger.warning(
                    "Ignoring invalid display setting.",
                    extra={
                        "event": "settings.invalid_value",
                        "key": item.name,
                        "value": repr(raw),
                    },
                )
        return cls(**updates)

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "DisplaySettings":
        table = config.get(_TABLE_NAME) if config else None
        if not isinstance(table, ABCMapping):
            return cls()
        return cls.from_mapping(table)

    def as_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def _coerce(raw: Any, target: type) -> Any:
    if target is bool:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().lower() in {"true", "false"}:
            return raw.strip().lower() == "true"
        raise ValueError(f"not a boolean: {raw!r}")
    if isinstance(raw, bool):
        raise TypeError("booleans are not numeric settings")
    if target is int:
        numeric = float(raw)
        if not numeric.is_integer():
            raise ValueError(f"not an integer: {raw!r}")
        return int(numeric)
    numeric = float(raw)
    if not math.isfinite(numeric):
        raise ValueError(f"not finite: {raw!r}")
    return numeric


def load_settings(path: Path) -> DisplaySettings:
    """Read ``path``; a missing file yields the defaults."""

    path = Path(path).expanduser()
    if not path.exists():
        return DisplaySettings()
    try:
        with path.open("rb") as handle:
            payload = tomllib.load(handle)
    except OSError as exc:
        raise SettingsError(f"Unable to read settings file {path}: {exc}", path=path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"Malformed settings file {path}: {exc}", path=path) from exc
    return DisplaySettings.from_config(payload)


def _format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def render_settings(settings: DisplaySettings) -> str:
    lines = [f"[{_TABLE_NAME}]"]
    for key, value in settings.as_dict().items():
        lines.append(f"{key} = {_format_toml_value(value)}")
    return "\n".join(lines) + "\n"


def save_settings(settings: DisplaySettings, path: Path) -> Path:
    path = Path(path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_settings(settings), encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Unable to write settings file {path}: {exc}", path=path) from exc
    return path
