"""Project configuration stored under ``[tool.kerbal_flight_data]``.

The table groups the settings shared by the command line tools and the
controller factory::

    [tool.kerbal_flight_data.thresholds]   # WarningThresholds overrides
    [tool.kerbal_flight_data.logging]      # level, output, format
    [tool.kerbal_flight_data.replay]       # interval, map_mode
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping as ABCMapping
from pathlib import Path
from typing import Any

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

CONFIG_ENV_VAR = "KFD_HUD_CONFIG"
TOOL_SECTION = "kerbal_flight_data"

_PYPROJECT = "pyproject.toml"


def _plain(value: Any) -> Any:
    # Nested tables become plain dicts with string keys.
    if isinstance(value, ABCMapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _pyproject_for(candidate: Path) -> Path | None:
    """Map a directory or ``pyproject.toml`` path to the file to read."""

    candidate = candidate.expanduser()
    if candidate.name == _PYPROJECT:
        return candidate.resolve(strict=False)
    if candidate.suffix:
        return None
    return (candidate / _PYPROJECT).resolve(strict=False)


def _search_order(path: Path | None) -> Iterator[Path]:
    seen: set[Path] = set()
    bases = [path, os.environ.get(CONFIG_ENV_VAR) or None, Path.cwd()]
    for base in bases:
        if base is None:
            continue
        pyproject = _pyproject_for(Path(base))
        if pyproject is None or pyproject in seen:
            continue
        seen.add(pyproject)
        yield pyproject


def load_project_config(path: Path) -> tuple[dict[str, Any], Path] | None:
    """Return the HUD table of the ``pyproject.toml`` at or inside ``path``.

    ``None`` means there is no such file or it has no
    ``[tool.kerbal_flight_data]`` table.  Malformed TOML is not masked.
    """

    pyproject = _pyproject_for(path)
    if pyproject is None or not pyproject.is_file():
        return None
    with pyproject.open("rb") as handle:
        document = tomllib.load(handle)

    tool = document.get("tool")
    section = tool.get(TOOL_SECTION) if isinstance(tool, ABCMapping) else None
    if not isinstance(section, ABCMapping):
        return None
    return _plain(section), pyproject


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Return the HUD configuration the command line tools should use.

    An explicit ``path`` is tried first, then :data:`CONFIG_ENV_VAR`, then
    the working directory.  The file that was used is recorded under
    ``_config_path`` (``None`` when no table was found anywhere).
    """

    for pyproject in _search_order(path):
        loaded = load_project_config(pyproject)
        if loaded is not None:
            payload, source = loaded
            payload["_config_path"] = str(source)
            return payload
    return {"_config_path": None}


__all__ = [
    "CONFIG_ENV_VAR",
    "TOOL_SECTION",
    "load_config",
    "load_project_config",
]
