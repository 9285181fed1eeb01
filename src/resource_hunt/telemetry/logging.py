"""Contract for runtime telemetry and structured logging sinks."""

from __future__ import annotations

import logging
from collections import deque
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler


class Telemetry(Protocol):
    """Reports progression outcomes and session events."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Writes telemetry events as structured log records."""

    def __init__(self, logger: logging.Logger | None = None, max_events: int = 1_000) -> None:
        self._logger = logger or logging.getLogger("resource_hunt.telemetry")
        self.events: deque[tuple[str, dict]] = deque(maxlen=max_events)

    def emit(self, event_name: str, payload: dict) -> None:
        self.events.append((event_name, payload))
        self._logger.info(event_name, extra={"telemetry": payload})


class NullTelemetry:
    def emit(self, event_name: str, payload: dict) -> None:
        return None


def configure_logging(level: str = "INFO") -> None:
    """Route ``resource_hunt`` loggers through a rich console handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
