"""Per-game session wiring between the mining subsystem, progression and HUD."""

from __future__ import annotations

import logging
from typing import Any

from resource_hunt.catalog import DEFAULT_CATALOG, ResourceCatalog, load_catalog
from resource_hunt.config import Settings
from resource_hunt.config import settings as default_settings
from resource_hunt.generator import Seed
from resource_hunt.models import Phase, ProgressionSnapshot
from resource_hunt.progression import ProgressionController
from resource_hunt.scheduling import Scheduler
from resource_hunt.telemetry import LoggingTelemetry, NullTelemetry, Telemetry


def resolve_catalog(settings: Settings) -> ResourceCatalog:
    if settings.catalog_path:
        return load_catalog(settings.catalog_path)
    return DEFAULT_CATALOG


class GameSession:
    """Owns the single progression controller of one game session."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        settings: Settings | None = None,
        catalog: ResourceCatalog | None = None,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._logger = logger or logging.getLogger("resource_hunt.session")
        if telemetry is None:
            telemetry = LoggingTelemetry() if self._settings.telemetry_enabled else NullTelemetry()
        self._telemetry = telemetry

        self.catalog = catalog or resolve_catalog(self._settings)
        self.controller = ProgressionController(
            scheduler,
            catalog=self.catalog,
            generation_rules=self._settings.generation_rules(),
            timing_rules=self._settings.timing_rules(),
        )
        self.controller.add_listener(self._forward_outcome)
        self.seed: Seed | None = None

    @property
    def phase(self) -> Phase:
        return self.controller.state.phase

    @property
    def finished(self) -> bool:
        return self.phase.terminal

    def begin(self, seed: Seed) -> ProgressionSnapshot:
        """Generate objectives for ``seed`` and start the clock on the first set."""
        self.controller.init_random(seed)
        self.seed = seed
        self._telemetry.emit("session_started", {"seed": seed, "total_sets": len(self.controller.state.sets)})
        self.controller.start()
        return self.controller.get_snapshot()

    def restart(self, seed: Seed) -> ProgressionSnapshot:
        self._logger.info("session_restarted", extra={"previous_seed": self.seed, "seed": seed})
        return self.begin(seed)

    def end(self) -> None:
        self.controller.reset()
        self.seed = None

    def on_resource_mined(self, resource_id: str) -> bool:
        return self.controller.collect(resource_id)

    def hud(self) -> ProgressionSnapshot:
        return self.controller.get_snapshot()

    def _forward_outcome(self, event_name: str, payload: dict[str, Any]) -> None:
        self._telemetry.emit(event_name, {"seed": self.seed, **payload})
