"""Argument parsing helpers for the flight data CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from .replay import handle_replay


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})
    logging_cfg_raw = config.get("logging", {})
    logging_cfg = dict(logging_cfg_raw) if isinstance(logging_cfg_raw, Mapping) else {}
    replay_cfg_raw = config.get("replay", {})
    replay_cfg = dict(replay_cfg_raw) if isinstance(replay_cfg_raw, Mapping) else {}

    parser = argparse.ArgumentParser(
        prog="kfd-hud",
        description="Kerbal Flight Data: HUD telemetry derivation tools",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml holding [tool.kerbal_flight_data].",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level", "info"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output", "stderr"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=logging_cfg.get("format", "json"),
        help="Logging formatter (json or text).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Run a JSONL snapshot recording through the HUD and print every frame.",
    )
    replay_parser.add_argument(
        "recording",
        type=Path,
        help="Snapshot recording written by write_snapshots (.jsonl or .jsonl.gz).",
    )
    replay_parser.add_argument(
        "--map-mode",
        action="store_true",
        default=bool(replay_cfg.get("map_mode", False)),
        help="Evaluate the readouts as if the map view were open.",
    )
    replay_parser.add_argument(
        "--local-time",
        nargs=2,
        type=float,
        metavar=("ROTATION", "ORBIT"),
        default=None,
        help="Home body rotation and orbital period in seconds for local time durations.",
    )
    replay_parser.add_argument(
        "--interval",
        type=float,
        default=float(replay_cfg.get("interval", 0.1)),
        help="Seconds between consecutive snapshots (default: 0.1).",
    )
    replay_parser.add_argument(
        "--all",
        dest="include_hidden",
        action="store_true",
        help="Also list hidden readouts.",
    )
    replay_parser.set_defaults(handler=handle_replay)

    return parser


__all__ = ["build_parser"]
