"""Deterministic objective-set generation from a world seed."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from resource_hunt.catalog import DEFAULT_CATALOG, ConfigurationError, ResourceCatalog
from resource_hunt.config import GenerationRules
from resource_hunt.models import ObjectiveSet, ResourceRequirement

Seed = int | str | bytes

logger = logging.getLogger("resource_hunt.generator")


class ObjectiveSource(Protocol):
    """Anything that turns a seed into the fixed play order of objective sets."""

    def generate(self, seed: Seed) -> list[ObjectiveSet]:
        ...


def normalize_seed(seed: object) -> Seed:
    if seed is None:
        raise ConfigurationError("A world seed is required to generate objectives")
    if isinstance(seed, bool):
        return int(seed)
    if isinstance(seed, (int, str, bytes)):
        return seed
    return str(seed)


class ObjectiveGenerator:
    """Draws objective sets from a private ``random.Random`` seeded per call.

    Draw order is part of the output contract: set count, then for every set its
    requirement count, then per requirement a rejection-sampled catalog index
    followed by the target.
    """

    def __init__(self, catalog: ResourceCatalog = DEFAULT_CATALOG, rules: GenerationRules | None = None) -> None:
        self._catalog = catalog
        self._rules = rules or GenerationRules()

    @property
    def catalog(self) -> ResourceCatalog:
        return self._catalog

    def generate(self, seed: Seed) -> list[ObjectiveSet]:
        rules = self._rules
        if len(self._catalog) < rules.max_resources_per_set:
            raise ConfigurationError(
                f"Resource catalog has {len(self._catalog)} entries but up to "
                f"{rules.max_resources_per_set} distinct resources per set are required"
            )

        rng = random.Random(normalize_seed(seed))
        set_count = rng.randint(rules.min_sets, rules.max_sets)
        sets = [self._draw_set(rng, ordinal) for ordinal in range(set_count)]

        logger.debug(
            "objective_sets_generated",
            extra={"seed": seed, "set_count": set_count, "sets": [s.resource_ids() for s in sets]},
        )
        return sets

    def _draw_set(self, rng: random.Random, ordinal: int) -> ObjectiveSet:
        rules = self._rules
        wanted = rng.randint(rules.min_resources_per_set, rules.max_resources_per_set)
        picked: set[int] = set()
        requirements: list[ResourceRequirement] = []
        while len(requirements) < wanted:
            index = rng.randrange(len(self._catalog))
            if index in picked:
                continue
            picked.add(index)
            entry = self._catalog[index]
            requirements.append(
                ResourceRequirement(
                    resource_id=entry.resource_id,
                    display_name=entry.display_name,
                    target=rng.randint(rules.min_target, rules.max_target),
                )
            )
        return ObjectiveSet(ordinal=ordinal, requirements=tuple(requirements))


def generate_objective_sets(
    seed: Seed,
    *,
    catalog: ResourceCatalog = DEFAULT_CATALOG,
    rules: GenerationRules | None = None,
) -> list[ObjectiveSet]:
    return ObjectiveGenerator(catalog, rules).generate(seed)
