"""Core simulation loop for Courtforge.

Implements `run_simulation`, which seeds a set of realms and then drives
`process_territory_tick` for every territory each tick. Two modes:

- no-DB: everything stays in memory; events and memories go to JSONL.
- DB-backed: the store is loaded from and saved to SQL once per tick, and
  memories land in the `memories` table.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from .config import get_event_log_path, get_memory_log_path, get_settings
from .court import Court
from .db import create_schema, session_scope
from .logging_utils import JsonlEventLogger, JsonlMemorySink
from .memory_store import SqlMemorySink
from .narration import embellish_obituary
from .persistence import get_last_tick, load_store, save_events, save_store, set_last_tick
from .prosperity import apply_character_prosperity_effects
from .rng import make_rng
from .store import CharacterStore
from .types import Addiction, CourtEvent, Role, Severity, TerritoryStats

logger = logging.getLogger(__name__)


# (name, dynasty, starting stats)
INITIAL_TERRITORIES: List[Tuple[str, str, dict]] = [
    ("Valdmark", "House Aldren", {"wealth": 60, "military": 35, "prosperity_tier": 2}),
    ("Serenholt", "House Varo", {"wealth": 80, "food": 70, "prosperity_tier": 4, "decadence_level": 30}),
    ("Kharesh", "House Duskbane", {"wealth": 30, "military": 50, "happiness": 35}),
]

SEED_ROLES = (Role.HEIR, Role.GENERAL, Role.ADVISOR)


def seed_court(court: Court, territory: TerritoryStats, tick: int = 0, dynasty_name: Optional[str] = None) -> List[int]:
    """Register `territory` and populate it with a ruler, heir, general and advisor."""
    court.store.add_territory(territory)
    ids = [court.create_character(territory.id, Role.RULER, tick, dynasty_name=dynasty_name, dynasty_generation=1)]
    for role in SEED_ROLES:
        ids.append(
            court.create_character(
                territory.id,
                role,
                tick,
                dynasty_name=dynasty_name if role is Role.HEIR else None,
            )
        )
    return ids


def initial_territories() -> List[Tuple[TerritoryStats, str]]:
    """Fresh TerritoryStats for the starting realms, paired with their ruling dynasty."""
    return [
        (TerritoryStats(id=index, name=name, **stats), dynasty)
        for index, (name, dynasty, stats) in enumerate(INITIAL_TERRITORIES, start=1)
    ]


def _seed_initial_territories(court: Court, tick: int = 0) -> None:
    for territory, dynasty in initial_territories():
        seed_court(court, territory, tick=tick, dynasty_name=dynasty)


def process_territory_tick(
    court: Court,
    territory: TerritoryStats,
    tick: int,
    addictions: Optional[Mapping[int, Addiction]] = None,
) -> List[CourtEvent]:
    """Run one territory through one tick. Returns the events emitted.

    Order matters: a ruler who dies of age is succeeded before this tick's
    plots resolve, and prosperity feedback sees the post-plot court.
    """
    start = len(court.feed)

    for event in court.process_character_aging(tick, territory.id):
        deceased = court.store.get(event.character_id)
        if deceased is not None and deceased.role is Role.RULER:
            court.handle_ruler_death(deceased.id, tick, deceased.death_cause or "natural causes")

    court.check_plot_opportunities(
        territory.id,
        tick,
        territory.prosperity_tier,
        territory.decadence_level,
        addictions,
    )
    court.process_plots(territory.id, tick)
    apply_character_prosperity_effects(court, territory.id, territory.prosperity_tier, tick)

    for succession in court.store.successions_for(territory.id):
        if succession.tick != tick:
            continue
        deceased = court.store.get(succession.deceased_ruler_id)
        if deceased is not None and not deceased.is_alive:
            embellish_obituary(deceased)

    return court.feed[start:]


def _print_tick(tick: int, events: List[CourtEvent]) -> None:
    notable = [e for e in events if e.severity is not Severity.INFO]
    if not notable:
        print(f"t={tick}: the courts are quiet")
        return
    for e in notable:
        print(f"t={tick}: {e.title.upper()} - {e.description}")


def run_simulation(
    num_ticks: Optional[int] = None,
    persist_to_db: bool | None = None,
    event_log_path: Optional[Path] = None,
    memory_log_path: Optional[Path] = None,
    seed: Optional[int] = None,
) -> Court:
    """Run the court simulation for `num_ticks` ticks and return the final Court.

    If `persist_to_db` is True, creates the schema, seeds realms when the
    database is empty, and persists characters, successions, events and
    memories each tick. If False, runs purely in memory.
    """
    settings = get_settings()
    if num_ticks is None:
        num_ticks = settings.simulate_ticks
    if persist_to_db is None:
        persist_to_db = settings.persist_to_db
    if seed is None:
        seed = settings.rng_seed

    court = Court(
        rng=make_rng(seed),
        event_logger=JsonlEventLogger(event_log_path or get_event_log_path()),
    )

    if not persist_to_db:
        memory_sink = JsonlMemorySink(memory_log_path or get_memory_log_path())
        court.narrative = memory_sink
        _seed_initial_territories(court)
        for tick in range(1, num_ticks + 1):
            memory_sink.tick = tick
            tick_events: List[CourtEvent] = []
            for territory in list(court.store.territories.values()):
                memory_sink.territory_id = territory.id
                tick_events.extend(process_territory_tick(court, territory, tick))
            _print_tick(tick, tick_events)
        return court

    # DB-backed run
    create_schema()
    with session_scope() as session:
        store = load_store(session)
        if not store.territories:
            court.store = CharacterStore()
            _seed_initial_territories(court)
            save_store(session, court.store)
            logger.info("seeded %d territories", len(court.store.territories))
        first_tick = get_last_tick(session) + 1

    for tick in range(first_tick, first_tick + num_ticks):
        with session_scope() as session:
            court.store = load_store(session)
            sink = SqlMemorySink(session, tick=tick)
            court.narrative = sink
            tick_events = []
            for territory in list(court.store.territories.values()):
                sink.territory_id = territory.id
                tick_events.extend(process_territory_tick(court, territory, tick))
            save_store(session, court.store)
            save_events(session, tick_events)
            set_last_tick(session, tick)
            _print_tick(tick, tick_events)

    return court
