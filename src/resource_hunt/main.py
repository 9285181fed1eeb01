"""CLI entrypoint for Resource Hunt."""

from __future__ import annotations

import json
from dataclasses import asdict

import typer
from rich import print

from resource_hunt.catalog import ConfigurationError, ResourceCatalog, load_catalog
from resource_hunt.config import settings
from resource_hunt.generator import ObjectiveGenerator
from resource_hunt.models import Phase
from resource_hunt.playtest import simulate_playthrough
from resource_hunt.session import resolve_catalog
from resource_hunt.telemetry import configure_logging

app = typer.Typer(help="Resource Hunt objective progression tools")


def _catalog(catalog_file: str | None) -> ResourceCatalog:
    if catalog_file:
        return load_catalog(catalog_file)
    return resolve_catalog(settings)


def _config_error(exc: ConfigurationError) -> typer.Exit:
    print({"error": str(exc)})
    return typer.Exit(code=2)


@app.callback()
def _main(log_level: str = typer.Option(None, help="Override RESOURCE_HUNT_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


@app.command()
def start() -> None:
    """Show effective progression settings."""
    print(settings.model_dump())


@app.command()
def catalog(catalog_file: str = typer.Option(None, help="JSON catalog file")) -> None:
    """List collectible resources objectives are drawn from."""
    try:
        entries = _catalog(catalog_file)
    except ConfigurationError as exc:
        raise _config_error(exc)
    print([asdict(entry) for entry in entries])


@app.command()
def generate(
    seed: str = typer.Option(..., help="World seed; integers are used as numbers"),
    catalog_file: str = typer.Option(None, help="JSON catalog file"),
    as_json: bool = typer.Option(False, "--json", help="Emit plain JSON"),
) -> None:
    """Print the objective sets a seed produces."""
    try:
        generator = ObjectiveGenerator(_catalog(catalog_file), settings.generation_rules())
        sets = generator.generate(parse_seed(seed))
    except ConfigurationError as exc:
        raise _config_error(exc)

    payload = [
        {
            "ordinal": objective_set.ordinal,
            "requirements": [
                {"resource_id": r.resource_id, "name": r.display_name, "target": r.target}
                for r in objective_set.requirements
            ],
        }
        for objective_set in sets
    ]
    if as_json:
        typer.echo(json.dumps(payload))
        return
    print({"seed": seed, "total_sets": len(sets), "sets": payload})


@app.command()
def simulate(
    seed: str = typer.Option(..., help="World seed; integers are used as numbers"),
    seconds_per_unit: float = typer.Option(5.0, help="Virtual seconds spent mining each unit"),
    skip: list[str] = typer.Option(None, help="Resource ids the simulated player never mines"),
    catalog_file: str = typer.Option(None, help="JSON catalog file"),
) -> None:
    """Play a seed offline on a virtual clock and report the outcome."""
    try:
        report = simulate_playthrough(
            parse_seed(seed),
            settings=settings,
            catalog=_catalog(catalog_file),
            seconds_per_unit=seconds_per_unit,
            skip=skip or (),
        )
    except ConfigurationError as exc:
        raise _config_error(exc)

    for event_name, payload in report.events:
        print({"event": event_name, **payload})
    final = report.final
    print(
        {
            "outcome": report.outcome.value,
            "elapsed_seconds": report.elapsed_seconds,
            "units_collected": report.units_collected,
            "bonus_pool_remaining": final.bonus_pool_remaining if final else None,
            "status_message": final.status_message if final else None,
        }
    )
    if report.outcome is not Phase.ALL_COMPLETE:
        raise typer.Exit(code=1)


def parse_seed(raw: str) -> int | str:
    try:
        return int(raw)
    except ValueError:
        return raw


if __name__ == "__main__":
    app()
