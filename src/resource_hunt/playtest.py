"""Deterministic offline playthroughs for balancing objective difficulty."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from resource_hunt.catalog import ResourceCatalog
from resource_hunt.config import Settings
from resource_hunt.generator import Seed
from resource_hunt.models import Phase, ProgressionSnapshot
from resource_hunt.scheduling import ManualScheduler
from resource_hunt.session import GameSession
from resource_hunt.telemetry import NullTelemetry


@dataclass(slots=True)
class PlaytestReport:
    seed: Seed
    outcome: Phase
    elapsed_seconds: float
    units_collected: int
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    final: ProgressionSnapshot | None = None


def simulate_playthrough(
    seed: Seed,
    *,
    settings: Settings | None = None,
    catalog: ResourceCatalog | None = None,
    seconds_per_unit: float = 5.0,
    skip: Iterable[str] = (),
) -> PlaytestReport:
    """Mine the active set one unit every ``seconds_per_unit`` virtual seconds.

    Resources listed in ``skip`` are never mined, which forces a timeout on any
    set that requires them.
    """
    if seconds_per_unit <= 0:
        raise ValueError("seconds_per_unit must be positive")

    scheduler = ManualScheduler()
    session = GameSession(scheduler, settings=settings, catalog=catalog, telemetry=NullTelemetry())
    events: list[tuple[str, dict[str, Any]]] = []
    session.controller.add_listener(lambda name, payload: events.append((name, payload)))
    skipped = set(skip)
    timing = session.controller.timing

    session.begin(seed)
    units = 0
    while not session.finished:
        if session.phase is Phase.SET_TRANSITION:
            scheduler.advance(timing.transition_delay_seconds)
            continue

        snapshot = session.hud()
        outstanding = [
            item.resource_id
            for item in snapshot.requirements
            if item.collected < item.target and item.resource_id not in skipped
        ]
        if not outstanding:
            scheduler.advance(timing.tick_interval_seconds)
            continue

        scheduler.advance(seconds_per_unit)
        if session.on_resource_mined(outstanding[0]):
            units += 1

    return PlaytestReport(
        seed=seed,
        outcome=session.phase,
        elapsed_seconds=scheduler.monotonic(),
        units_collected=units,
        events=events,
        final=session.hud(),
    )
