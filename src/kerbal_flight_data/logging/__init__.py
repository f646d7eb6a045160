"""Logging utilities for the flight data HUD."""

from kerbal_flight_data.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
