"""Sync helpers between the in-memory CharacterStore and the ORM tables.

`character_from_row` / `apply_character_to_row` are the canonical paths
DB -> Character and Character -> DB. `load_store` and `save_store` apply
them to a whole simulation. Ids are shared: a stored character keeps the
id it has in the `characters` table.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .characters import Character
from .models import (
    CharacterRow,
    CourtEventRow,
    FactionRow,
    RebellionRow,
    SimulationState,
    SuccessionEventRow,
    Territory,
)
from .store import CharacterStore
from .traits import EmotionalState, Traits
from .types import (
    CourtEvent,
    Deed,
    Faction,
    Plot,
    Rebellion,
    ReignSummary,
    Role,
    SecretGoal,
    SuccessionEvent,
    SuccessionType,
    TerritoryStats,
)

logger = logging.getLogger(__name__)


# ---- Characters --------------------------------------------------------------


def character_from_row(row: Any) -> Character:
    plots = [Plot.from_dict(p) for p in (getattr(row, "plots_json", None) or [])]
    deeds = [Deed.from_dict(d) for d in (getattr(row, "deeds_json", None) or [])]
    reign = getattr(row, "reign_summary_json", None)
    return Character(
        id=row.id,
        territory_id=row.territory_id,
        name=row.name,
        title=row.title,
        role=Role(row.role),
        birth_tick=int(row.birth_tick),
        age=int(row.age),
        traits=Traits.from_dict(getattr(row, "traits_json", None) or {}),
        emotional_state=EmotionalState.from_dict(getattr(row, "emotions_json", None) or {}),
        secret_goal=SecretGoal(getattr(row, "secret_goal", None) or "none"),
        is_alive=bool(row.is_alive),
        death_tick=row.death_tick,
        death_cause=row.death_cause,
        dynasty_name=row.dynasty_name,
        dynasty_generation=row.dynasty_generation,
        coronation_tick=row.coronation_tick,
        active_plots={p.key: p for p in plots},
        deeds=deeds,
        reign_summary=ReignSummary.from_dict(reign) if reign else None,
    )


def apply_character_to_row(row: Any, character: Character) -> None:
    character.traits.clamp()
    character.emotional_state.clamp()
    row.territory_id = character.territory_id
    row.name = character.name
    row.title = character.title
    row.role = character.role.value
    row.birth_tick = character.birth_tick
    row.age = character.age
    row.is_alive = character.is_alive
    row.death_tick = character.death_tick
    row.death_cause = character.death_cause
    row.dynasty_name = character.dynasty_name
    row.dynasty_generation = character.dynasty_generation
    row.coronation_tick = character.coronation_tick
    row.secret_goal = character.secret_goal.value
    row.traits_json = character.traits.to_dict()
    row.emotions_json = character.emotional_state.to_dict()
    row.plots_json = [p.to_dict() for p in character.active_plots.values()]
    row.deeds_json = [d.to_dict() for d in character.deeds]
    row.reign_summary_json = character.reign_summary.to_dict() if character.reign_summary else None


# ---- Territories -------------------------------------------------------------


def territory_from_row(row: Territory) -> TerritoryStats:
    return TerritoryStats.from_dict(
        {
            "id": row.id,
            "name": row.name,
            "wealth": row.wealth,
            "food": row.food,
            "military": row.military,
            "technology": row.technology,
            "happiness": row.happiness,
            "population": row.population,
            "prosperity_tier": row.prosperity_tier,
            "decadence_level": row.decadence_level,
            "schema_version": row.schema_version,
        }
    )


def apply_territory_to_row(row: Territory, territory: TerritoryStats) -> None:
    data = territory.to_dict()
    for key in ("name", "wealth", "food", "military", "technology", "happiness", "population",
                "prosperity_tier", "decadence_level", "schema_version"):
        setattr(row, key, data[key])


# ---- Whole-store load / save -------------------------------------------------


def load_store(session: Session) -> CharacterStore:
    """Build a CharacterStore from the current DB contents."""
    store = CharacterStore()
    for row in session.scalars(select(Territory).order_by(Territory.id)).all():
        store.add_territory(territory_from_row(row))
    for row in session.scalars(select(CharacterRow).order_by(CharacterRow.id)).all():
        store.add(character_from_row(row))
    for row in session.scalars(select(SuccessionEventRow).order_by(SuccessionEventRow.id)).all():
        store.succession_events.append(
            SuccessionEvent(
                territory_id=row.territory_id,
                tick=row.tick,
                deceased_ruler_id=row.deceased_ruler_id,
                new_ruler_id=row.new_ruler_id,
                succession_type=SuccessionType(row.succession_type),
                narrative=row.narrative,
                plotters_executed=row.plotters_executed,
                civil_war_casualties=row.civil_war_casualties,
            )
        )
    for row in session.scalars(select(FactionRow).order_by(FactionRow.id)).all():
        store.factions.append(
            Faction(
                id=row.id,
                territory_id=row.territory_id,
                name=row.name,
                faction_type=row.faction_type,
                ideology=row.ideology,
                power=row.power,
                rebellion_risk=row.rebellion_risk,
                happiness=row.happiness,
                member_count=row.member_count,
                leader_name=row.leader_name,
                founded_at_tick=row.founded_at_tick,
            )
        )
    for row in session.scalars(select(RebellionRow).order_by(RebellionRow.id)).all():
        store.rebellions.append(
            Rebellion(
                id=row.id,
                territory_id=row.territory_id,
                faction_id=row.faction_id,
                started_at_tick=row.started_at_tick,
                strength=row.strength,
                demands=row.demands,
                status=row.status,
            )
        )
    logger.debug("loaded %d characters across %d territories", len(store.characters), len(store.territories))
    return store


def save_store(session: Session, store: CharacterStore) -> None:
    """Upsert every record in `store`. Succession events are append-only."""
    for territory in store.territories.values():
        row = session.get(Territory, territory.id)
        if row is None:
            row = Territory(id=territory.id)
            session.add(row)
        apply_territory_to_row(row, territory)
    session.flush()

    for character in store.characters.values():
        row = session.get(CharacterRow, character.id)
        if row is None:
            row = CharacterRow(id=character.id)
            session.add(row)
        apply_character_to_row(row, character)
    session.flush()

    persisted = {
        (r.territory_id, r.tick, r.deceased_ruler_id, r.new_ruler_id)
        for r in session.scalars(select(SuccessionEventRow)).all()
    }
    for event in store.succession_events:
        if (event.territory_id, event.tick, event.deceased_ruler_id, event.new_ruler_id) in persisted:
            continue
        session.add(
            SuccessionEventRow(
                territory_id=event.territory_id,
                tick=event.tick,
                deceased_ruler_id=event.deceased_ruler_id,
                new_ruler_id=event.new_ruler_id,
                succession_type=event.succession_type.value,
                plotters_executed=event.plotters_executed,
                civil_war_casualties=event.civil_war_casualties,
                narrative=event.narrative,
            )
        )

    for faction in store.factions:
        row = session.get(FactionRow, faction.id)
        if row is None:
            row = FactionRow(id=faction.id)
            session.add(row)
        row.territory_id = faction.territory_id
        row.name = faction.name
        row.faction_type = faction.faction_type
        row.ideology = faction.ideology
        row.power = faction.power
        row.rebellion_risk = faction.rebellion_risk
        row.happiness = faction.happiness
        row.member_count = faction.member_count
        row.leader_name = faction.leader_name
        row.founded_at_tick = faction.founded_at_tick
    session.flush()

    for rebellion in store.rebellions:
        row = session.get(RebellionRow, rebellion.id)
        if row is None:
            row = RebellionRow(id=rebellion.id)
            session.add(row)
        row.territory_id = rebellion.territory_id
        row.faction_id = rebellion.faction_id
        row.started_at_tick = rebellion.started_at_tick
        row.strength = rebellion.strength
        row.demands = rebellion.demands
        row.status = rebellion.status


def save_events(session: Session, events: Iterable[CourtEvent]) -> int:
    """Append court events to the `court_events` table. Returns the count written."""
    count = 0
    for event in events:
        session.add(
            CourtEventRow(
                territory_id=event.territory_id,
                tick=event.tick,
                event_type=event.event_type,
                title=event.title,
                description=event.description,
                severity=event.severity.value,
                character_id=event.character_id,
                plot_type=event.plot_type,
            )
        )
        count += 1
    return count


# ---- Run bookkeeping ---------------------------------------------------------


def get_last_tick(session: Session) -> int:
    """Last fully processed tick, 0 for a fresh database.

    Databases written before `simulation_state` existed fall back to the
    latest court event tick.
    """
    state = session.get(SimulationState, 1)
    if state is not None:
        return state.last_tick
    return session.scalar(select(func.max(CourtEventRow.tick))) or 0


def set_last_tick(session: Session, tick: int) -> None:
    state = session.get(SimulationState, 1)
    if state is None:
        state = SimulationState(id=1)
        session.add(state)
    state.last_tick = tick
