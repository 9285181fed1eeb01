from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Phase(str, Enum):
    """Discrete states of the progression state machine."""

    IDLE = "idle"
    RUNNING = "running"
    SET_TRANSITION = "set_transition"
    ALL_COMPLETE = "all_complete"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (Phase.ALL_COMPLETE, Phase.FAILED)


class Urgency(str, Enum):
    NORMAL = "normal"
    LOW = "low"
    CRITICAL = "critical"


class StatusCode(str, Enum):
    NOT_STARTED = "not_started"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    SET_COMPLETE = "set_complete"
    ALL_COMPLETE = "all_complete"
    TIME_UP = "time_up"


@dataclass(slots=True)
class ResourceRequirement:
    """One resource that must be collected ``target`` times."""

    resource_id: str
    display_name: str
    target: int
    collected: int = 0

    @property
    def satisfied(self) -> bool:
        return self.collected == self.target

    @property
    def outstanding(self) -> int:
        return self.target - self.collected

    def credit(self) -> bool:
        """Add one unit; returns False when the requirement is already satisfied."""
        if self.collected >= self.target:
            return False
        self.collected += 1
        return True


@dataclass(slots=True)
class ObjectiveSet:
    ordinal: int
    requirements: tuple[ResourceRequirement, ...]

    @property
    def complete(self) -> bool:
        return all(requirement.satisfied for requirement in self.requirements)

    def resource_ids(self) -> list[str]:
        return [requirement.resource_id for requirement in self.requirements]

    def reset(self) -> None:
        for requirement in self.requirements:
            requirement.collected = 0


@dataclass(slots=True)
class ProgressionState:
    """Mutable state owned by exactly one controller per game session."""

    sets: list[ObjectiveSet] = field(default_factory=list)
    current_index: int = 0
    bonus_pool_remaining: int = 0
    time_limit: float = 0.0
    phase_started_at: float = 0.0
    phase: Phase = Phase.IDLE
    last_bonus: int = 0
    seed: int | str | bytes | None = None

    @property
    def current_set(self) -> ObjectiveSet | None:
        if 0 <= self.current_index < len(self.sets):
            return self.sets[self.current_index]
        return None


@dataclass(frozen=True, slots=True)
class RequirementProgress:
    resource_id: str
    display_name: str
    collected: int
    target: int


@dataclass(frozen=True, slots=True)
class ProgressionSnapshot:
    """Read-only projection consumed by the HUD each frame."""

    set_index: int
    total_sets: int
    requirements: tuple[RequirementProgress, ...]
    seconds_remaining: int
    bonus_pool_remaining: int
    time_limit: float
    phase: Phase
    urgency: Urgency
    status: StatusCode
    status_message: str
    last_bonus: int = 0
