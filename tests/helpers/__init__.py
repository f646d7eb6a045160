"""Convenience re-exports for test helpers."""

from __future__ import annotations

from tests.helpers.aerodynamics import FakeFarApi, FakeFarAssembly, ScriptedProvider
from tests.helpers.rendering import CollectingSink, by_readout, visible_texts
from tests.helpers.snapshots import (
    KERBIN_ATMOSPHERE_DEPTH,
    build_intake,
    build_jet_engine,
    build_kerbin,
    build_mun,
    build_orbit,
    build_orbiting_vessel,
    build_part,
    build_rocket_engine,
    build_vessel,
    with_parts,
)

__all__ = [
    "CollectingSink",
    "FakeFarApi",
    "FakeFarAssembly",
    "KERBIN_ATMOSPHERE_DEPTH",
    "ScriptedProvider",
    "build_intake",
    "build_jet_engine",
    "build_kerbin",
    "build_mun",
    "build_orbit",
    "build_orbiting_vessel",
    "build_part",
    "build_rocket_engine",
    "build_vessel",
    "by_readout",
    "visible_texts",
    "with_parts",
]
