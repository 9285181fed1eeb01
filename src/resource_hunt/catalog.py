"""Catalog of collectible materials the objective generator samples from."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


class ConfigurationError(ValueError):
    """Raised when the catalog or generation rules cannot produce objectives."""


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    resource_id: str
    display_name: str


def default_display_name(resource_id: str) -> str:
    return resource_id.replace("_", " ")


class ResourceCatalog:
    """Ordered, immutable list of collectible resources with unique ids."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id: dict[str, CatalogEntry] = {}
        for entry in self._entries:
            if not entry.resource_id:
                raise ConfigurationError("Catalog entries need a non-empty resource id")
            if entry.resource_id in self._by_id:
                raise ConfigurationError(f"Duplicate resource id in catalog: {entry.resource_id}")
            self._by_id[entry.resource_id] = entry

    @classmethod
    def from_ids(cls, resource_ids: Iterable[str]) -> "ResourceCatalog":
        return cls(CatalogEntry(resource_id=rid, display_name=default_display_name(rid)) for rid in resource_ids)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> CatalogEntry:
        return self._entries[index]

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._by_id

    def get(self, resource_id: str) -> CatalogEntry | None:
        return self._by_id.get(resource_id)

    def __repr__(self) -> str:
        return f"ResourceCatalog({[entry.resource_id for entry in self._entries]!r})"


DEFAULT_CATALOG = ResourceCatalog(
    [
        CatalogEntry("stone", "stone"),
        CatalogEntry("coal_ore", "coal"),
        CatalogEntry("iron_ore", "iron"),
        CatalogEntry("anconite", "anconite"),
    ]
)


def _parse_entry(raw: object, position: int) -> CatalogEntry:
    if isinstance(raw, str):
        return CatalogEntry(resource_id=raw, display_name=default_display_name(raw))
    if isinstance(raw, dict) and isinstance(raw.get("id"), str):
        name = raw.get("name")
        if name is not None and not isinstance(name, str):
            raise ConfigurationError(f"Catalog entry {position} has a non-string name")
        return CatalogEntry(resource_id=raw["id"], display_name=name or default_display_name(raw["id"]))
    raise ConfigurationError(f"Catalog entry {position} must be a string id or an object with an 'id' key")


def load_catalog(path: str | Path) -> ResourceCatalog:
    """Load a catalog from a JSON list of ids or ``{"id", "name"}`` objects."""
    target = Path(path).expanduser()
    if not target.exists():
        raise ConfigurationError(f"Catalog file does not exist: {target}")

    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Catalog file is not valid JSON: {target} ({exc})") from exc

    if not isinstance(payload, list) or not payload:
        raise ConfigurationError(f"Catalog file must contain a non-empty JSON list: {target}")
    return ResourceCatalog(_parse_entry(raw, position) for position, raw in enumerate(payload))
