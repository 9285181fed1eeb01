"""Progression state machine: objective sets, countdown clock and bonus economy."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

from resource_hunt.catalog import DEFAULT_CATALOG, ResourceCatalog
from resource_hunt.config import GenerationRules, TimingRules
from resource_hunt.generator import ObjectiveGenerator, ObjectiveSource, Seed
from resource_hunt.models import (
    Phase,
    ProgressionSnapshot,
    ProgressionState,
    RequirementProgress,
    StatusCode,
    Urgency,
)
from resource_hunt.scheduling import Scheduler, TaskHandle

OutcomeListener = Callable[[str, dict[str, Any]], None]

STATUS_MESSAGES: dict[StatusCode, str] = {
    StatusCode.NOT_STARTED: "No objective assigned.",
    StatusCode.READY: "Objective ready.",
    StatusCode.IN_PROGRESS: "Collect the listed resources.",
    StatusCode.SET_COMPLETE: "Objective complete! +{bonus} seconds",
    StatusCode.ALL_COMPLETE: "All objectives complete!",
    StatusCode.TIME_UP: "Time's up!",
}


class ProgressionController:
    """Owns one game's progression state and every callback scheduled against it.

    All handlers run on a single logical thread supplied by ``scheduler``. The
    periodic tick and the set-transition delay are kept as task handles and are
    cancelled whenever the phase leaves Running or the state is reset, so no
    stale callback can touch a discarded or terminal state.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        catalog: ResourceCatalog = DEFAULT_CATALOG,
        generation_rules: GenerationRules | None = None,
        timing_rules: TimingRules | None = None,
        generator: ObjectiveSource | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._timing = timing_rules or TimingRules()
        self._generator = generator or ObjectiveGenerator(catalog, generation_rules)
        self._logger = logger or logging.getLogger("resource_hunt.progression")

        self._state = ProgressionState()
        self._status = StatusCode.NOT_STARTED
        self._remaining_at_stop = 0.0
        self._tick_handle: TaskHandle | None = None
        self._transition_handle: TaskHandle | None = None
        self._listeners: list[OutcomeListener] = []

    @property
    def state(self) -> ProgressionState:
        return self._state

    @property
    def timing(self) -> TimingRules:
        return self._timing

    def add_listener(self, listener: OutcomeListener) -> None:
        """Register a callback for ``set_completed``, ``all_complete`` and ``failed`` outcomes."""
        self._listeners.append(listener)

    def reset(self) -> None:
        """Cancel pending callbacks and drop all progression state."""
        self._cancel_pending()
        self._state = ProgressionState()
        self._status = StatusCode.NOT_STARTED
        self._remaining_at_stop = 0.0

    def init_random(self, seed: Seed) -> None:
        """Start a brand-new progression for ``seed``, discarding any previous one.

        Raises ``ConfigurationError`` when objectives cannot be generated; the
        controller is left reset (Idle, no sets) in that case.
        """
        self.reset()
        sets = self._generator.generate(seed)
        for objective_set in sets:
            objective_set.reset()

        self._state = ProgressionState(
            sets=sets,
            current_index=0,
            bonus_pool_remaining=self._timing.total_bonus_pool_seconds,
            time_limit=self._timing.base_time_seconds,
            phase=Phase.IDLE,
            seed=seed,
        )
        self._status = StatusCode.READY
        self._remaining_at_stop = self._state.time_limit
        self._logger.info(
            "progression_initialized",
            extra={"seed": seed, "total_sets": len(sets), "time_limit": self._state.time_limit},
        )

    def start(self) -> None:
        state = self._state
        if state.phase is Phase.RUNNING:
            return
        if state.phase is Phase.SET_TRANSITION and self._transition_handle is not None:
            self._transition_handle.cancel()
            self._advance()
            return
        if state.phase not in (Phase.IDLE, Phase.SET_TRANSITION) or state.current_set is None:
            self._logger.debug("invalid_transition", extra={"operation": "start", "phase": state.phase.value})
            return
        self._run_clock()

    def _run_clock(self) -> None:
        state = self._state
        state.phase = Phase.RUNNING
        state.phase_started_at = self._scheduler.monotonic()
        self._status = StatusCode.IN_PROGRESS
        self._tick_handle = self._scheduler.call_every(self._timing.tick_interval_seconds, self.tick)
        self._logger.info(
            "objective_set_started",
            extra={"set_index": state.current_index, "time_limit": state.time_limit},
        )

    def tick(self) -> None:
        if self._state.phase is not Phase.RUNNING:
            return
        if self._remaining() <= 0:
            self._fail()

    def collect(self, resource_id: str) -> bool:
        """Credit one unit of ``resource_id`` to the active set.

        Returns True when a counter changed. Events outside Running, for ids not
        outstanding in the active set, or with no set loaded are ignored.
        """
        state = self._state
        if state.phase is not Phase.RUNNING:
            self._logger.debug(
                "collect_ignored",
                extra={"resource_id": resource_id, "reason": "not_running", "phase": state.phase.value},
            )
            return False
        if self._remaining() <= 0:
            self._fail()
            return False

        current = state.current_set
        if current is None:
            self._logger.debug("collect_ignored", extra={"resource_id": resource_id, "reason": "no_current_set"})
            return False

        changed = False
        for requirement in current.requirements:
            if requirement.resource_id == resource_id and requirement.credit():
                changed = True
        if not changed:
            self._logger.debug("collect_ignored", extra={"resource_id": resource_id, "reason": "not_outstanding"})
            return False

        if current.complete:
            self._complete_set()
        return True

    def get_snapshot(self) -> ProgressionSnapshot:
        state = self._state
        current = state.current_set
        requirements = ()
        if current is not None:
            requirements = tuple(
                RequirementProgress(
                    resource_id=requirement.resource_id,
                    display_name=requirement.display_name,
                    collected=requirement.collected,
                    target=requirement.target,
                )
                for requirement in current.requirements
            )

        seconds = self._display_seconds()
        return ProgressionSnapshot(
            set_index=state.current_index,
            total_sets=len(state.sets),
            requirements=requirements,
            seconds_remaining=seconds,
            bonus_pool_remaining=state.bonus_pool_remaining,
            time_limit=state.time_limit,
            phase=state.phase,
            urgency=self.classify_urgency(seconds),
            status=self._status,
            status_message=STATUS_MESSAGES[self._status].format(bonus=state.last_bonus),
            last_bonus=state.last_bonus,
        )

    snapshot = get_snapshot

    def classify_urgency(self, seconds_remaining: float) -> Urgency:
        if seconds_remaining > self._timing.low_time_threshold_seconds:
            return Urgency.NORMAL
        if seconds_remaining > self._timing.critical_time_threshold_seconds:
            return Urgency.LOW
        return Urgency.CRITICAL

    def _remaining(self) -> float:
        elapsed = self._scheduler.monotonic() - self._state.phase_started_at
        return self._state.time_limit - elapsed

    def _display_seconds(self) -> int:
        if self._state.phase is Phase.RUNNING:
            remaining = self._remaining()
        else:
            remaining = self._remaining_at_stop
        return max(0, math.ceil(remaining))

    def _complete_set(self) -> None:
        state = self._state
        self._remaining_at_stop = max(0.0, self._remaining())
        self._cancel_tick()

        bonus = min(self._timing.max_bonus_per_set_seconds, state.bonus_pool_remaining)
        state.bonus_pool_remaining -= bonus
        state.time_limit += bonus
        state.last_bonus = bonus
        state.phase = Phase.SET_TRANSITION
        self._status = StatusCode.SET_COMPLETE

        payload = {
            "set_index": state.current_index,
            "bonus": bonus,
            "bonus_pool_remaining": state.bonus_pool_remaining,
            "time_limit": state.time_limit,
        }
        self._logger.info("objective_set_completed", extra=payload)
        self._transition_handle = self._scheduler.call_later(
            self._timing.transition_delay_seconds, self._advance
        )
        self._notify("set_completed", payload)

    def _advance(self) -> None:
        self._transition_handle = None
        state = self._state
        if state.phase is not Phase.SET_TRANSITION:
            return

        if state.current_index + 1 < len(state.sets):
            state.current_index += 1
            state.sets[state.current_index].reset()
            self._run_clock()
            return

        state.phase = Phase.ALL_COMPLETE
        self._status = StatusCode.ALL_COMPLETE
        self._cancel_pending()
        payload = {"total_sets": len(state.sets), "time_limit": state.time_limit}
        self._logger.info("progression_complete", extra=payload)
        self._notify("all_complete", payload)

    def _fail(self) -> None:
        state = self._state
        self._cancel_pending()
        self._remaining_at_stop = 0.0
        state.phase = Phase.FAILED
        self._status = StatusCode.TIME_UP
        payload = {"set_index": state.current_index, "total_sets": len(state.sets)}
        self._logger.info("progression_failed", extra=payload)
        self._notify("failed", payload)

    def _notify(self, event_name: str, payload: dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event_name, dict(payload))
            except Exception:  # noqa: BLE001 - listeners are external collaborators.
                self._logger.exception("outcome_listener_failed", extra={"event_name": event_name})

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _cancel_pending(self) -> None:
        self._cancel_tick()
        if self._transition_handle is not None:
            self._transition_handle.cancel()
            self._transition_handle = None
