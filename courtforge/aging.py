"""Aging and natural mortality.

Run once per tick before plot processing, so a ruler who dies of old age
is succeeded before that tick's schemes resolve.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .characters import TICKS_PER_YEAR
from .types import CourtEvent, Severity

if TYPE_CHECKING:
    from .court import Court

logger = logging.getLogger(__name__)

NATURAL_DEATH_CAUSES = (
    "natural causes",
    "illness",
    "old age",
    "fever",
    "mysterious illness",
    "in their sleep",
)


def natural_death_chance(age: int) -> float:
    """Per-tick chance of dying of natural causes at `age` years."""
    chance = 0.0
    if age > 50:
        chance = (age - 50) * 0.005
    if age > 70:
        chance += (age - 70) * 0.01
    if age > 85:
        chance += 0.15
    return chance


def process_character_aging(court: "Court", tick: int, territory_id: Optional[int] = None) -> List[CourtEvent]:
    """Advance ages and roll natural death for every living character.

    Returns one `death` event per character who died. Succession for a dead
    ruler is the caller's job (see `simulation.process_territory_tick`).
    """
    events: List[CourtEvent] = []
    for character in court.store.living(territory_id):
        character.age = (tick - character.birth_tick) // TICKS_PER_YEAR

        if not court.rng.chance(natural_death_chance(character.age)):
            continue

        cause = court.rng.choice(NATURAL_DEATH_CAUSES)
        character.kill(tick, cause)
        logger.debug("%s died of %s at %s", character.name, cause, character.age)
        events.append(
            court.emit(
                CourtEvent(
                    tick=tick,
                    territory_id=character.territory_id,
                    event_type="death",
                    title="Character Death",
                    description=f"{character.display_name} died of {cause} at age {character.age}.",
                    severity=Severity.CRITICAL,
                    character_id=character.id,
                )
            )
        )
    return events
