from __future__ import annotations

from pathlib import Path

import pytest

from kerbal_flight_data.configuration import CONFIG_ENV_VAR, load_config, load_project_config


def test_load_project_config_reads_tool_section(pyproject_factory) -> None:
    path = pyproject_factory(
        """
        [project]
        name = "demo"

        [tool.kerbal_flight_data.thresholds]
        q_warn1 = 35000

        [tool.kerbal_flight_data.logging]
        level = "debug"
        """
    )
    loaded = load_project_config(path)
    assert loaded is not None
    config, source = loaded
    assert source == path.resolve()
    assert config == {"thresholds": {"q_warn1": 35000}, "logging": {"level": "debug"}}


def test_load_project_config_accepts_directories(pyproject_factory, tmp_path: Path) -> None:
    pyproject_factory("[tool.kerbal_flight_data]\nreplay = { interval = 0.2 }\n")
    loaded = load_project_config(tmp_path)
    assert loaded is not None
    assert loaded[0]["replay"] == {"interval": 0.2}


def test_missing_section_returns_none(pyproject_factory, tmp_path: Path) -> None:
    pyproject_factory("[tool.other]\nvalue = 1\n")
    assert load_project_config(tmp_path) is None
    assert load_project_config(tmp_path / "settings.toml") is None
    assert load_project_config(tmp_path / "missing") is None


def test_load_config_prefers_explicit_path(
    pyproject_factory, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = pyproject_factory("[tool.kerbal_flight_data.display]\nactive = false\n")
    monkeypatch.chdir(tmp_path.parent)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config(path)
    assert config["display"] == {"active": False}
    assert config["_config_path"] == str(path.resolve())


def test_load_config_uses_environment(
    pyproject_factory, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    pyproject_factory("[tool.kerbal_flight_data.thresholds]\nq_inactive = 20\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path))
    monkeypatch.chdir(tmp_path.parent)
    assert load_config()["thresholds"] == {"q_inactive": 20}


def test_load_config_without_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    assert load_config() == {"_config_path": None}


def test_non_table_tool_entry_is_ignored(pyproject_factory, tmp_path: Path) -> None:
    pyproject_factory('tool = "none"\n')
    assert load_project_config(tmp_path) is None

