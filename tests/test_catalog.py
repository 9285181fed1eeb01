from __future__ import annotations

import json
from pathlib import Path

import pytest

from resource_hunt.catalog import DEFAULT_CATALOG, CatalogEntry, ConfigurationError, ResourceCatalog, load_catalog


def test_default_catalog_has_enough_distinct_resources() -> None:
    ids = [entry.resource_id for entry in DEFAULT_CATALOG]

    assert len(ids) >= 3
    assert len(set(ids)) == len(ids)
    assert "coal_ore" in DEFAULT_CATALOG
    assert DEFAULT_CATALOG.get("coal_ore").display_name == "coal"


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Duplicate"):
        ResourceCatalog([CatalogEntry("stone", "stone"), CatalogEntry("stone", "rock")])


def test_load_catalog_accepts_ids_and_objects(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(["gold_ore", {"id": "diamond_ore", "name": "diamond"}, {"id": "lapis"}]), encoding="utf-8")

    catalog = load_catalog(path)

    assert [entry.resource_id for entry in catalog] == ["gold_ore", "diamond_ore", "lapis"]
    assert catalog.get("gold_ore").display_name == "gold ore"
    assert catalog.get("diamond_ore").display_name == "diamond"
    assert catalog.get("lapis").display_name == "lapis"


@pytest.mark.parametrize(
    "content",
    [
        "[]",
        "{\"id\": \"stone\"}",
        "[42]",
        "[{\"name\": \"no id\"}]",
        "[\"stone\", \"stone\"]",
        "not json",
    ],
)
def test_load_catalog_rejects_bad_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_catalog(path)


def test_load_catalog_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="does not exist"):
        load_catalog(tmp_path / "missing.json")
