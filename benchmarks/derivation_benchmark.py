"""Benchmark a full derive-and-evaluate tick for vessels of growing size."""

from __future__ import annotations

import argparse
import statistics
import sys
import time
from pathlib import Path
from typing import Callable

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from kfd_core.constants import INTAKE_AIR, MODULE_ENGINE_FX, MODULE_INTAKE
from kfd_core.derivation import TelemetryDeriver, worst_thermal_reading
from kfd_core.display import DisplayPolicy
from kfd_core.snapshot import (
    BodySnapshot,
    OrbitSnapshot,
    PartModuleSnapshot,
    PartSnapshot,
    Propellant,
    VesselSnapshot,
)


def _format(label: str, durations: list[float], iterations: int) -> str:
    mean = statistics.fmean(durations)
    throughput = iterations / mean if mean else float("nan")
    deviation = statistics.pstdev(durations) if len(durations) > 1 else 0.0
    return (
        f"{label}: {mean * 1_000:.3f} ms +/- {deviation * 1_000:.3f} ms "
        f"({throughput:,.0f} ticks/s)"
    )


def _measure(func: Callable[[], None], *, iterations: int, repeats: int) -> list[float]:
    durations: list[float] = []
    for _ in range(repeats):
        start = time.perf_counter()
        for _ in range(iterations):
            func()
        durations.append(time.perf_counter() - start)
    return durations


def _vessel(part_count: int) -> VesselSnapshot:
    jet = PartModuleSnapshot(
        kind=MODULE_ENGINE_FX,
        ignited=True,
        thrust=90.0,
        propellants=(Propellant("LiquidFuel", 0.04), Propellant(INTAKE_AIR, 0.4)),
    )
    intake = PartModuleSnapshot(kind=MODULE_INTAKE, intake_enabled=True, air_flow=1.2)
    parts = []
    for index in range(part_count):
        modules = (jet,) if index % 7 == 0 else (intake,) if index % 5 == 0 else ()
        parts.append(
            PartSnapshot(
                name=f"part{index}",
                temperature=300.0 + index,
                max_temp=2000.0,
                skin_temperature=320.0 + 2 * index,
                skin_max_temp=2400.0,
                modules=modules,
            )
        )
    return VesselSnapshot(
        altitude=18000.0,
        terrain_altitude=400.0,
        vertical_speed=60.0,
        surface_speed=650.0,
        throttle=1.0,
        mach=1.9,
        dynamic_pressure_kpa=28.0,
        orbit=OrbitSnapshot(
            apoapsis=32000.0,
            periapsis=-580000.0,
            time_to_apoapsis=95.0,
            time_to_periapsis=1100.0,
        ),
        body=BodySnapshot(name="Kerbin", has_atmosphere=True, atmosphere_depth=70000.0),
        parts=tuple(parts),
    )


def run(iterations: int, repeats: int, sizes: list[int]) -> None:
    for size in sizes:
        vessel = _vessel(size)
        deriver = TelemetryDeriver()
        policy = DisplayPolicy()

        def tick() -> None:
            deriver.sample_kinematics(vessel)
            policy.evaluate(deriver.derive(vessel))

        def scan() -> None:
            worst_thermal_reading(vessel.parts)

        print(f"{size} parts")
        print("  " + _format("tick", _measure(tick, iterations=iterations, repeats=repeats), iterations))
        print("  " + _format("thermal scan", _measure(scan, iterations=iterations, repeats=repeats), iterations))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--iterations", type=int, default=2000, help="Ticks per run")
    parser.add_argument("--repeats", type=int, default=5, help="Number of timing repeats")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[10, 100, 500],
        help="Part counts of the benchmarked vessels",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    run(iterations=max(args.iterations, 1), repeats=max(args.repeats, 1), sizes=args.sizes)
