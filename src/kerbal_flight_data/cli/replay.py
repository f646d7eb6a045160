"""``replay`` command: run a snapshot recording through the HUD engine."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from kfd_core.display import RenderCommand, TimeUnits, ViewContext
from kfd_core.thresholds import ConfigurationError

from ..controller import FlightDataController
from ..io import SnapshotDecodeError, iter_snapshots
from .errors import CliError

logger = logging.getLogger(__name__)

__all__ = ["RecordingSink", "format_frame", "handle_replay", "replay_recording"]


class RecordingSink:
    """Render sink keeping every batch it receives."""

    def __init__(self) -> None:
        self.frames: List[List[RenderCommand]] = []

    def render(self, commands: Sequence[RenderCommand]) -> None:
        self.frames.append(list(commands))


def format_frame(
    index: int,
    elapsed: float,
    commands: Sequence[RenderCommand],
    *,
    include_hidden: bool = False,
) -> str:
    lines = [f"frame {index} t={elapsed:.2f}s"]
    for command in commands:
        if not command.visible and not include_hidden:
            continue
        text = command.text if command.visible else "(hidden)"
        lines.append(f"  {command.area:<5} {command.readout:<9} {text:<24} {command.style}")
    return "\n".join(lines)


def replay_recording(
    path: Path,
    *,
    config: Mapping[str, Any] | None = None,
    interval: float = 0.1,
    map_mode: bool = False,
    time_units: TimeUnits | None = None,
    include_hidden: bool = False,
) -> str:
    """Feed every snapshot of ``path`` to a controller and describe each frame.

    Consecutive snapshots are assumed to be ``interval`` seconds apart; each
    one counts as a single physics step of that length followed by a single
    rendered frame.
    """

    sink = RecordingSink()
    controller = FlightDataController.from_config(sink, config, time_units=time_units)
    view = ViewContext(map_mode=map_mode)
    blocks: List[str] = []
    elapsed = 0.0
    count = 0
    for snapshot in iter_snapshots(path):
        controller.fixed_update(snapshot, interval)
        commands = controller.late_update(snapshot, interval, view)
        if commands is not None:
            blocks.append(
                format_frame(len(blocks) + 1, elapsed, commands, include_hidden=include_hidden)
            )
        elapsed += interval
        count += 1
    logger.info(
        "Replayed snapshot recording.",
        extra={
            "event": "replay.completed",
            "path": str(path),
            "snapshots": count,
            "frames": len(blocks),
        },
    )
    return "\n\n".join(blocks)


def handle_replay(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    path: Path = namespace.recording
    if namespace.interval <= 0.0:
        raise CliError(
            "--interval must be positive.",
            category="usage",
            context={"interval": namespace.interval},
        )
    time_units = None
    if namespace.local_time is not None:
        rotation, orbit = namespace.local_time
        try:
            time_units = TimeUnits.from_home_body(rotation, orbit)
        except ValueError as exc:
            raise CliError(
                f"Invalid local time definition: {exc}",
                category="usage",
                context={"rotation_period": rotation, "orbital_period": orbit},
            ) from exc

    try:
        return replay_recording(
            path,
            config=config,
            interval=namespace.interval,
            map_mode=namespace.map_mode,
            time_units=time_units,
            include_hidden=namespace.include_hidden,
        )
    except FileNotFoundError as exc:
        raise CliError(str(exc), category="not_found", context={"path": path}) from exc
    except SnapshotDecodeError as exc:
        raise CliError(str(exc), category="io", context={"path": path}) from exc
    except ConfigurationError as exc:
        raise CliError(
            f"Invalid threshold configuration: {exc}",
            category="usage",
            context={"config_path": config.get("_config_path")},
        ) from exc
    except OSError as exc:
        raise CliError(
            f"Unable to read snapshot recording {path}: {exc}",
            category="io",
            context={"path": path},
        ) from exc
