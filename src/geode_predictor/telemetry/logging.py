"""Logging setup and the contract for structured telemetry sinks."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.logging import RichHandler


class Telemetry(Protocol):
    """Reports prediction events to an external sink."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class TelemetryHandler(logging.Handler):
    """Forwards log records to a :class:`Telemetry` sink, ``extra`` fields as payload."""

    _RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}

    def __init__(self, telemetry: Telemetry, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._telemetry = telemetry

    def emit(self, record: logging.LogRecord) -> None:
        payload = {key: value for key, value in record.__dict__.items() if key not in self._RESERVED}
        payload["level"] = record.levelname
        payload["logger"] = record.name
        try:
            self._telemetry.emit(record.getMessage(), payload)
        except Exception:  # noqa: BLE001 - logging must not break predictions.
            self.handleError(record)


def configure_logging(level: str | int = "WARNING", *, telemetry: Telemetry | None = None) -> logging.Logger:
    """Attach a rich console handler (and optional telemetry sink) to the package logger."""
    logger = logging.getLogger("geode_predictor")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    if telemetry is not None:
        logger.addHandler(TelemetryHandler(telemetry))
    logger.propagate = False
    return logger
