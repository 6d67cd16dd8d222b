"""CLI entrypoint for the Courtforge court simulation.

Usage (uv):
  uv run python -m scripts.run_simulation --ticks 24 --no-db

Or via installed script:
  courtforge-sim --ticks 24
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from pathlib import Path

import typer

from courtforge.config import get_event_log_path, get_settings
from courtforge.court import Court
from courtforge.db import create_schema, session_scope
from courtforge.logging_utils import read_court_events
from courtforge.persistence import load_store, save_store
from courtforge.rng import make_rng
from courtforge.simulation import initial_territories, run_simulation, seed_court
from courtforge.types import CourtEvent, Severity

app = typer.Typer(add_completion=False, help="Run the Courtforge court intrigue simulation")


# Allow invoking the module without an explicit subcommand, e.g.:
#   uv run python -m scripts.run_simulation --no-db --ticks 12
@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    ticks: int = typer.Option(None, "--ticks", "-n", help="Number of simulation ticks to run"),
    no_db: bool = typer.Option(False, "--no-db", help="Run without database persistence (in-memory)"),
    seed: int = typer.Option(None, "--seed", help="Seed for the court random source"),
) -> None:
    if ctx.invoked_subcommand is None:
        main(ticks=ticks, no_db=no_db, seed=seed, event_log_path=None)


@app.command("run")
def main(
    ticks: int = typer.Option(None, "--ticks", "-n", help="Number of simulation ticks to run"),
    no_db: bool = typer.Option(False, "--no-db", help="Run without database persistence (in-memory)"),
    seed: int = typer.Option(None, "--seed", help="Seed for the court random source"),
    event_log_path: Path | None = typer.Option(None, help="Where to write the JSONL court event log"),
) -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    num_ticks = ticks if ticks is not None else settings.simulate_ticks
    persist = settings.persist_to_db and not no_db
    mode = "no-DB (in-memory)" if not persist else "DB-backed"
    typer.echo(f"Starting Courtforge simulation for {num_ticks} ticks ({mode})...")
    court = run_simulation(num_ticks=num_ticks, persist_to_db=persist, event_log_path=event_log_path, seed=seed)
    typer.echo(
        f"Done: {len(court.feed)} court events, {len(court.store.succession_events)} successions."
    )


@app.command()
def seed(
    seed_value: int = typer.Option(None, "--seed", help="Seed for the court random source"),
) -> None:
    """Create the schema and seed the starting realms into an empty database."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    create_schema()
    with session_scope() as session:
        existing = load_store(session)
        if existing.territories:
            typer.echo(f"Database already holds {len(existing.territories)} territories; nothing to seed.")
            raise typer.Exit(code=0)

        court = Court(rng=make_rng(seed_value if seed_value is not None else settings.rng_seed))
        for territory, dynasty in initial_territories():
            ids = seed_court(court, territory, tick=0, dynasty_name=dynasty)
            ruler = court.store.get(ids[0])
            typer.echo(f"{territory.name}: {ruler.display_name} of {dynasty} and {len(ids) - 1} courtiers")
        save_store(session, court.store)


@app.command()
def view_court(
    event_log_path: Path = typer.Option(None, help="Path to the JSONL court event log"),
    territory: int = typer.Option(None, help="Only show events for this territory id"),
) -> None:
    """Summarize a run from its JSONL court event log."""
    path = event_log_path or get_event_log_path()
    events = read_court_events(path)
    if territory is not None:
        events = [e for e in events if e.territory_id == territory]
    if not events:
        typer.echo(f"No court events found at {path}")
        raise typer.Exit(code=0)

    by_territory: dict[int | None, list[CourtEvent]] = defaultdict(list)
    for e in events:
        by_territory[e.territory_id].append(e)

    typer.echo(f"Court summary ({len(events)} events, ticks {events[0].tick}-{events[-1].tick})")
    typer.echo("=" * 40)
    for territory_id in sorted(by_territory, key=lambda t: (t is None, t or 0)):
        rows = by_territory[territory_id]
        counts = Counter(e.event_type for e in rows)
        typer.echo(f"\nTerritory {territory_id}")
        typer.echo("- " + ", ".join(f"{k}: {v}" for k, v in sorted(counts.items())))
        plot_counts = Counter(e.plot_type for e in rows if e.event_type == "plot_started" and e.plot_type)
        if plot_counts:
            top = ", ".join(f"{k} ({v})" for k, v in plot_counts.most_common(3))
            typer.echo(f"- Favourite schemes: {top}")
        for e in rows:
            if e.event_type == "succession":
                typer.echo(f"  t={e.tick}: {e.description}")

    critical = sum(1 for e in events if e.severity is Severity.CRITICAL)
    if critical >= max(5, len(events) // 2):
        typer.echo(f"\n⚠ {critical} critical events; the realms are in turmoil.")


if __name__ == "__main__":
    app()
