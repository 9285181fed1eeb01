"""Outcome telemetry and logging setup."""

from .logging import LoggingTelemetry, NullTelemetry, Telemetry, configure_logging

__all__ = ["LoggingTelemetry", "NullTelemetry", "Telemetry", "configure_logging"]
