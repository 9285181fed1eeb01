from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("resource_hunt.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_generate_json_is_deterministic() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("resource_hunt.main")
    runner = typer_testing.CliRunner()

    first = runner.invoke(module.app, ["generate", "--seed", "42", "--json"])
    second = runner.invoke(module.app, ["generate", "--seed", "42", "--json"])

    assert first.exit_code == 0
    payload = json.loads(first.stdout)
    assert first.stdout == second.stdout
    assert 3 <= len(payload) <= 5
    assert [item["ordinal"] for item in payload] == list(range(len(payload)))


def test_generate_reports_configuration_errors(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("resource_hunt.main")
    catalog = tmp_path / "tiny.json"
    catalog.write_text(json.dumps(["stone"]), encoding="utf-8")

    result = typer_testing.CliRunner().invoke(module.app, ["generate", "--seed", "1", "--catalog-file", str(catalog)])

    assert result.exit_code == 2
    assert "error" in result.stdout


def test_simulate_exit_codes() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("resource_hunt.main")
    runner = typer_testing.CliRunner()

    win = runner.invoke(module.app, ["simulate", "--seed", "42", "--seconds-per-unit", "1"])
    loss = runner.invoke(
        module.app,
        ["simulate", "--seed", "42", "--skip", "stone", "--skip", "coal_ore", "--skip", "iron_ore", "--skip", "anconite"],
    )

    assert win.exit_code == 0
    assert "all_complete" in win.stdout
    assert loss.exit_code == 1
    assert "Time's up!" in loss.stdout


def test_parse_seed_prefers_integers() -> None:
    module = importlib.import_module("resource_hunt.main")

    assert module.parse_seed("42") == 42
    assert module.parse_seed("-3") == -3
    assert module.parse_seed("my world") == "my world"
