"""Runtime configuration for Resource Hunt."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True, slots=True)
class GenerationRules:
    """Bounds used when drawing objective sets from a seed."""

    min_sets: int = 3
    max_sets: int = 5
    min_resources_per_set: int = 1
    max_resources_per_set: int = 3
    min_target: int = 3
    max_target: int = 10


@dataclass(frozen=True, slots=True)
class TimingRules:
    """Clock and bonus economy for one progression."""

    base_time_seconds: float = 120
    total_bonus_pool_seconds: int = 300
    max_bonus_per_set_seconds: int = 20
    transition_delay_seconds: float = 2.0
    tick_interval_seconds: float = 1.0
    low_time_threshold_seconds: float = 10
    critical_time_threshold_seconds: float = 3


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="RESOURCE_HUNT_", env_file=".env", extra="ignore")

    app_name: str = "resource-hunt"
    log_level: str = "INFO"

    base_time_seconds: float = Field(default=120, gt=0)
    total_bonus_pool_seconds: int = Field(default=300, ge=0)
    max_bonus_per_set_seconds: int = Field(default=20, ge=0)
    transition_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Pause between a completed set and the next one so the HUD can show the bonus.",
    )
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    low_time_threshold_seconds: float = 10
    critical_time_threshold_seconds: float = 3

    min_sets: int = Field(default=3, ge=1)
    max_sets: int = 5
    min_resources_per_set: int = Field(default=1, ge=1)
    max_resources_per_set: int = 3
    min_target: int = Field(default=3, ge=1)
    max_target: int = 10

    catalog_path: str | None = Field(
        default=None,
        description="Optional JSON file listing collectible resources; the built-in catalog is used when unset.",
    )
    telemetry_enabled: bool = True

    @model_validator(mode="after")
    def _check_ranges(self) -> "Settings":
        pairs = [
            ("min_sets", "max_sets"),
            ("min_resources_per_set", "max_resources_per_set"),
            ("min_target", "max_target"),
            ("critical_time_threshold_seconds", "low_time_threshold_seconds"),
        ]
        for low_name, high_name in pairs:
            if getattr(self, low_name) > getattr(self, high_name):
                raise ValueError(f"{low_name} must not exceed {high_name}")
        return self

    def generation_rules(self) -> GenerationRules:
        return GenerationRules(
            min_sets=self.min_sets,
            max_sets=self.max_sets,
            min_resources_per_set=self.min_resources_per_set,
            max_resources_per_set=self.max_resources_per_set,
            min_target=self.min_target,
            max_target=self.max_target,
        )

    def timing_rules(self) -> TimingRules:
        return TimingRules(
            base_time_seconds=self.base_time_seconds,
            total_bonus_pool_seconds=self.total_bonus_pool_seconds,
            max_bonus_per_set_seconds=self.max_bonus_per_set_seconds,
            transition_delay_seconds=self.transition_delay_seconds,
            tick_interval_seconds=self.tick_interval_seconds,
            low_time_threshold_seconds=self.low_time_threshold_seconds,
            critical_time_threshold_seconds=self.critical_time_threshold_seconds,
        )


settings = Settings()
