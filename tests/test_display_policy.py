from __future__ import annotations

import math
from dataclasses import replace

import pytest

from kfd_core.constants import (
    AREA_LAYOUT,
    NODE_AP,
    NODE_PE,
    READOUT_AIR,
    READOUT_ALT,
    READOUT_AP,
    READOUT_ENGINE_PERF,
    READOUT_MACH,
    READOUT_PE,
    READOUT_Q,
    READOUT_STALL,
    READOUT_TEMP,
    READOUT_TNODE,
    READOUT_VSPEED,
    STYLE_EMPH,
    STYLE_GREYED,
    STYLE_PLAIN,
    STYLE_WARN1,
    STYLE_WARN2,
)
from kfd_core.data import Data
from kfd_core.derivation import TelemetryDeriver
from kfd_core.display import DisplayPolicy, TimeUnits, ViewContext
from kfd_core.interfaces import FlightInfo

from tests.helpers import (
    ScriptedProvider,
    build_intake,
    build_jet_engine,
    build_orbiting_vessel,
    build_part,
    build_rocket_engine,
    build_vessel,
    by_readout,
    visible_texts,
    with_parts,
)


def _atmospheric_data(**overrides) -> Data:
    values = dict(
        is_in_atmosphere=True,
        is_atmospheric_low_level_flight=True,
        has_orbit=True,
        has_aerodynamics=True,
        has_engine_perf=True,
        mach_number=0.95,
        q=15000.0,
        warn_q=STYLE_GREYED,
        total_thrust=215.0,
        throttle=0.75,
        altitude=12000.0,
        radar_altitude=11500.0,
        time_to_impact=math.inf,
        time_to_node=45.0,
        next_node=NODE_AP,
    )
    values.update(overrides)
    return Data(**values)


def test_commands_follow_area_layout() -> None:
    commands = DisplayPolicy().evaluate(_atmospheric_data())
    expected = [
        (area, readout) for area, readouts in AREA_LAYOUT.items() for readout in readouts
    ]
    assert [(command.area, command.readout) for command in commands] == expected


def test_atmospheric_flight_readouts() -> None:
    commands = by_readout(DisplayPolicy().evaluate(_atmospheric_data()))

    assert commands[READOUT_MACH].visible
    assert commands[READOUT_MACH].text == "Mach 0.95"
    assert commands[READOUT_MACH].style == STYLE_EMPH
    assert commands[READOUT_Q].text == "Q  15 kPa"
    assert commands[READOUT_Q].style == STYLE_GREYED
    assert commands[READOUT_ENGINE_PERF].text == "R 215 kN |75%|"
    assert commands[READOUT_ENGINE_PERF].style == STYLE_GREYED
    for hidden in (READOUT_ALT, READOUT_VSPEED, READOUT_TNODE, READOUT_AP, READOUT_PE,
                   READOUT_STALL, READOUT_AIR, READOUT_TEMP):
        assert not commands[hidden].visible, hidden


def test_low_dynamic_pressure_is_greyed_but_shown() -> None:
    deriver = TelemetryDeriver()
    data = deriver.derive(build_vessel(dynamic_pressure_kpa=0.005))
    assert data.q == pytest.approx(5.0)
    assert data.warn_q == STYLE_GREYED
    assert data.warn_stall == STYLE_GREYED

    commands = by_readout(DisplayPolicy().evaluate(data))
    assert commands[READOUT_Q].visible
    assert commands[READOUT_Q].style == STYLE_GREYED
    assert commands[READOUT_MACH].visible
    assert not commands[READOUT_STALL].visible


def test_low_dynamic_pressure_greys_visible_stall_row() -> None:
    provider = ScriptedProvider(FlightInfo(mach=0.1, q=5.0, stall_fraction=0.9))
    data = TelemetryDeriver(aerodynamics=provider).derive(build_vessel())
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert commands[READOUT_STALL].visible
    assert commands[READOUT_STALL].style == STYLE_GREYED


def test_missing_aerodynamics_hides_rows() -> None:
    data = TelemetryDeriver(aerodynamics=ScriptedProvider(None)).derive(build_vessel())
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert not commands[READOUT_MACH].visible
    assert not commands[READOUT_Q].visible
    assert not commands[READOUT_STALL].visible


def test_stall_row_uses_warning_level() -> None:
    provider = ScriptedProvider(FlightInfo(mach=0.4, q=8000.0, stall_fraction=0.7))
    data = TelemetryDeriver(aerodynamics=provider).derive(build_vessel())
    command = by_readout(DisplayPolicy().evaluate(data))[READOUT_STALL]
    assert command.text == "Stall"
    assert command.style == STYLE_WARN2


def test_landed_vessel_shows_only_engine_performance() -> None:
    data = _atmospheric_data(is_landed=True, radar_altitude=2.0, has_temp=True,
                             has_stalls=True, has_air_availability=True)
    texts = visible_texts(DisplayPolicy().evaluate(data, ViewContext(map_mode=True)))
    assert set(texts) == {READOUT_ENGINE_PERF}


def test_radar_mode_latch_holds_while_landed() -> None:
    policy = DisplayPolicy()
    policy.evaluate(_atmospheric_data(radar_altitude=300.0))
    assert policy.radar_mode is True

    policy.evaluate(_atmospheric_data(radar_altitude=9000.0, is_landed=True))
    assert policy.radar_mode is True

    policy.evaluate(_atmospheric_data(radar_altitude=9000.0))
    assert policy.radar_mode is False


def test_radar_altitude_readout_and_styles() -> None:
    policy = DisplayPolicy()
    commands = by_readout(policy.evaluate(_atmospheric_data(radar_altitude=150.0)))
    assert commands[READOUT_ALT].text == "Alt 150 m R"
    assert commands[READOUT_ALT].style == STYLE_WARN1

    commands = by_readout(policy.evaluate(
        _atmospheric_data(radar_altitude=3000.0, radar_altitude_deriv=-700.0, time_to_impact=4.0)
    ))
    assert commands[READOUT_ALT].text == "Alt 3.00 km R"
    assert commands[READOUT_ALT].style == STYLE_WARN2

    commands = by_readout(DisplayPolicy().evaluate(_atmospheric_data(radar_altitude=3000.0)))
    assert commands[READOUT_ALT].style == STYLE_EMPH


def test_map_mode_shows_altitude_and_vertical_speed() -> None:
    data = _atmospheric_data(vertical_speed=-35.2)
    commands = by_readout(DisplayPolicy().evaluate(data, ViewContext(map_mode=True)))
    assert commands[READOUT_ALT].text == "Alt 12.0 km"
    assert commands[READOUT_VSPEED].text == "VS -35 m/s"
    assert commands[READOUT_VSPEED].style == STYLE_PLAIN


def test_orbital_readouts_outside_low_level_flight() -> None:
    data = TelemetryDeriver().derive(build_orbiting_vessel())
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert commands[READOUT_TNODE].text == "TAp -10m 0s"
    assert commands[READOUT_TNODE].style == STYLE_PLAIN
    assert commands[READOUT_AP].text == "Ap 100 km"
    assert commands[READOUT_AP].style == STYLE_EMPH
    assert commands[READOUT_PE].text == "Pe 80.0 km"
    assert commands[READOUT_PE].style == STYLE_PLAIN
    assert not commands[READOUT_MACH].visible


def test_periapsis_emphasis_follows_next_node() -> None:
    data = _atmospheric_data(is_atmospheric_low_level_flight=False, next_node=NODE_PE,
                             apoapsis=100000.0, periapsis=80000.0)
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert commands[READOUT_PE].style == STYLE_EMPH
    assert commands[READOUT_AP].style == STYLE_PLAIN


def test_time_to_node_needs_finite_time() -> None:
    data = _atmospheric_data(is_atmospheric_low_level_flight=False, time_to_node=math.inf)
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert not commands[READOUT_TNODE].visible
    assert commands[READOUT_AP].visible


def test_local_time_units_are_used() -> None:
    data = _atmospheric_data(is_atmospheric_low_level_flight=False, time_to_node=21600.0 + 3661.0)
    policy = DisplayPolicy(TimeUnits.from_home_body(21600.0, 9203545.0))
    assert by_readout(policy.evaluate(data))[READOUT_TNODE].text == "TAp -1d 1h 1m"


def test_intake_readout() -> None:
    policy = DisplayPolicy()
    data = _atmospheric_data(has_air_availability=True, air_availability=1.2, warn_air=STYLE_WARN1)
    command = by_readout(policy.evaluate(data))[READOUT_AIR]
    assert command.text == "Intake  120%"
    assert command.style == STYLE_WARN1

    data = replace(data, air_availability=math.inf, warn_air=STYLE_GREYED)
    command = by_readout(policy.evaluate(data))[READOUT_AIR]
    assert command.text == "Intake"
    assert command.style == STYLE_GREYED


def test_air_breathing_engine_performance() -> None:
    vessel = with_parts(
        build_vessel(throttle=0.5),
        build_part(modules=[build_jet_engine(120.0), build_intake(10.0)]),
        build_part(modules=[build_rocket_engine(60.0)]),
    )
    data = TelemetryDeriver().derive(vessel)
    commands = by_readout(DisplayPolicy().evaluate(data))
    assert commands[READOUT_ENGINE_PERF].text == "J 120 kN |50%|"
    assert commands[READOUT_AIR].visible


def test_temperature_readout() -> None:
    data = _atmospheric_data(has_temp=True, highest_temp=1940.4, warn_temp=STYLE_WARN2)
    command = by_readout(DisplayPolicy().evaluate(data))[READOUT_TEMP]
    assert command.text == "T 1940 K"
    assert command.style == STYLE_WARN2


def test_unchanged_data_is_not_redrawn() -> None:
    policy = DisplayPolicy()
    data = _atmospheric_data()
    first = policy.evaluate(data)
    second = policy.evaluate(data)
    assert [command.text for command in first] == [command.text for command in second]
    assert not any(command.changed for command in second)


def test_small_changes_keep_the_previous_text() -> None:
    policy = DisplayPolicy()
    policy.evaluate(_atmospheric_data(mach_number=0.950))

    command = by_readout(policy.evaluate(_atmospheric_data(mach_number=0.954)))[READOUT_MACH]
    assert command.text == "Mach 0.95"
    assert not command.changed

    command = by_readout(policy.evaluate(_atmospheric_data(mach_number=0.97)))[READOUT_MACH]
    assert command.text == "Mach 0.97"
    assert command.changed


def test_engine_class_change_forces_redraw() -> None:
    policy = DisplayPolicy()
    policy.evaluate(_atmospheric_data())
    data = _atmospheric_data(has_air_breathing_engines=True, air_breather_thrust=215.0)
    command = by_readout(policy.evaluate(data))[READOUT_ENGINE_PERF]
    assert command.changed
    assert command.text == "J 215 kN |75%|"


def test_hidden_readouts_keep_their_text_until_shown_again() -> None:
    policy = DisplayPolicy()
    policy.evaluate(_atmospheric_data(mach_number=0.5))

    hidden = by_readout(policy.evaluate(_atmospheric_data(mach_number=2.0, has_aerodynamics=False)))
    assert not hidden[READOUT_MACH].visible
    assert hidden[READOUT_MACH].changed
    assert hidden[READOUT_MACH].text == "Mach 0.50"

    shown = by_readout(policy.evaluate(_atmospheric_data(mach_number=0.502)))
    assert shown[READOUT_MACH].visible
    assert shown[READOUT_MACH].changed
    assert shown[READOUT_MACH].text == "Mach 0.50"


def test_hide_all_and_reset() -> None:
    policy = DisplayPolicy()
    policy.evaluate(_atmospheric_data())
    commands = policy.hide_all()
    assert not any(command.visible for command in commands)
    assert by_readout(commands)[READOUT_MACH].changed
    assert not by_readout(commands)[READOUT_ALT].changed

    policy.reset()
    assert all(state.last_values is None for state in policy.states.values())


def test_derivation_and_display_are_idempotent() -> None:
    vessel = with_parts(
        build_vessel(),
        build_part(temperature=1800.0, max_temp=2000.0, modules=[build_jet_engine(), build_intake()]),
    )
    deriver = TelemetryDeriver()
    first = deriver.derive(vessel)
    second = deriver.derive(vessel)
    assert first == second

    texts_a = [(c.text, c.style) for c in DisplayPolicy().evaluate(first)]
    texts_b = [(c.text, c.style) for c in DisplayPolicy().evaluate(second)]
    assert texts_a == texts_b


def test_orbital_readouts_need_an_orbit() -> None:
    data = TelemetryDeriver().derive(build_orbiting_vessel(orbit=None))
    commands = by_readout(DisplayPolicy().evaluate(data, ViewContext(map_mode=True)))
    for readout in (READOUT_TNODE, READOUT_AP, READOUT_PE):
        assert not commands[readout].visible, readout
    assert commands[READOUT_ALT].visible
