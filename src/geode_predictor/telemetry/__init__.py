"""Logging and telemetry boundaries."""

from .logging import Telemetry, TelemetryHandler, configure_logging

__all__ = ["Telemetry", "TelemetryHandler", "configure_logging"]
