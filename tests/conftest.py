from __future__ import annotations

import importlib.util
import sys
import warnings
from pathlib import Path
from textwrap import dedent

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kerbal_flight_data.aerodynamics import FAR_EXTENSION_NAME, FarAerodynamicsProvider
from kerbal_flight_data.aerodynamics import registry as aerodynamics_registry


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


if importlib.util.find_spec("pytest_cov") is None:

    def pytest_addoption(parser: pytest.Parser) -> None:
        """Register stub coverage options when pytest-cov is unavailable."""

        parser.addoption(
            "--cov",
            action="append",
            default=[],
            metavar="MODULE",
            help="Stub option provided when pytest-cov is not installed.",
        )
        parser.addoption(
            "--cov-report",
            action="append",
            default=[],
            metavar="TYPE",
            help="Stub option provided when pytest-cov is not installed.",
        )

    def pytest_configure(config: pytest.Config) -> None:
        if config.getoption("--cov") or config.getoption("--cov-report"):
            warnings.warn(
                "pytest-cov is not installed; coverage options will be ignored.",
                RuntimeWarning,
                stacklevel=2,
            )


@pytest.fixture
def pyproject_factory(tmp_path: Path):
    def factory(contents: str) -> Path:
        return write_pyproject(tmp_path, contents)

    return factory


@pytest.fixture
def aerodynamics_registry_state():
    """Run the test against a registry holding only the built-in adapter."""

    saved = dict(aerodynamics_registry._EXTENSION_REGISTRY)
    aerodynamics_registry._clear_registry()
    aerodynamics_registry.register_aerodynamics_extension(
        FAR_EXTENSION_NAME, FarAerodynamicsProvider
    )
    try:
        yield aerodynamics_registry
    finally:
        aerodynamics_registry._clear_registry()
        aerodynamics_registry._EXTENSION_REGISTRY.update(saved)
