"""Command line utilities for the flight data HUD."""

from kerbal_flight_data.cli.app import main, run_cli
from kerbal_flight_data.cli.errors import CliError

__all__ = ["CliError", "main", "run_cli"]
