"""Seeded resource-collection objectives with a countdown and bonus-time economy."""

from .catalog import DEFAULT_CATALOG, CatalogEntry, ConfigurationError, ResourceCatalog, load_catalog
from .generator import ObjectiveGenerator, generate_objective_sets
from .models import ObjectiveSet, Phase, ProgressionSnapshot, ResourceRequirement, StatusCode, Urgency
from .progression import ProgressionController
from .scheduling import AsyncioScheduler, ManualScheduler
from .session import GameSession

__all__ = [
    "AsyncioScheduler",
    "CatalogEntry",
    "ConfigurationError",
    "DEFAULT_CATALOG",
    "GameSession",
    "ManualScheduler",
    "ObjectiveGenerator",
    "ObjectiveSet",
    "Phase",
    "ProgressionController",
    "ProgressionSnapshot",
    "ResourceCatalog",
    "ResourceRequirement",
    "StatusCode",
    "Urgency",
    "generate_objective_sets",
    "load_catalog",
]
