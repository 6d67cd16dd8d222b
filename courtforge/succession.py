"""Succession resolver.

Decides who takes power after a ruler dies and records the transition.
Called exactly once per ruler death; a successful coup records its own
succession inside plot execution and never comes through here.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .characters import TICKS_PER_YEAR, Character, build_character, promote_to_ruler
from .errors import NotARulerError
from .types import CourtEvent, ReignSummary, Role, Severity, SuccessionEvent, SuccessionResult, SuccessionType

if TYPE_CHECKING:
    from .court import Court

logger = logging.getLogger(__name__)

AMBITION_THRESHOLD = 60
HEIR_LOYALTY_THRESHOLD = 50
ELECTED_RULER_AGE = 35


def years_reigned(ruler: Character, tick: int) -> int:
    if ruler.coronation_tick is None:
        return 0
    return (tick - ruler.coronation_tick) // TICKS_PER_YEAR


def build_narrative(
    old_ruler: str,
    new_ruler: Character,
    succession_type: SuccessionType,
    death_cause: str,
    civil_war_casualties: Optional[int] = None,
) -> str:
    """Type-specific narrative text. `old_ruler` is the deceased's display name."""
    if succession_type is SuccessionType.PEACEFUL:
        return (
            f"Following the {death_cause} of {old_ruler}, {new_ruler.display_name} "
            f"ascended to power in a peaceful transition."
        )
    if succession_type is SuccessionType.COUP:
        return (
            f"Upon learning of {old_ruler}'s {death_cause}, {new_ruler.name} seized power "
            f"in a swift coup, declaring themselves {new_ruler.title}."
        )
    if succession_type is SuccessionType.CIVIL_WAR:
        return (
            f"The {death_cause} of {old_ruler} sparked a bloody civil war. After {civil_war_casualties} "
            f"casualties, {new_ruler.name} emerged victorious as {new_ruler.title}."
        )
    return f"With no clear heir after {old_ruler}'s {death_cause}, the people chose {new_ruler.name} to lead them."


def _inherit(heir: Character, ruler: Character, tick: int) -> None:
    promote_to_ruler(heir, tick, title=ruler.title, dynasty_generation=(ruler.dynasty_generation or 1) + 1)
    if heir.dynasty_name is None:
        heir.dynasty_name = ruler.dynasty_name


def _strongest(candidates: List[Character]) -> Character:
    # strict ">" keeps the first maximal candidate on ties
    best = candidates[0]
    for current in candidates[1:]:
        if current.traits.courage + current.traits.cunning > best.traits.courage + best.traits.cunning:
            best = current
    return best


def handle_ruler_death(court: "Court", character_id: int, tick: int, death_cause: str) -> SuccessionResult:
    ruler = court.store.get(character_id)
    if ruler is None:
        return SuccessionResult(succession_type=None, new_ruler_id=None, success=False, error="Character not found")
    if ruler.role is not Role.RULER:
        raise NotARulerError(character_id, ruler.role.value)

    ruler.kill(tick, death_cause)
    old_ruler = ruler.display_name
    reign = years_reigned(ruler, tick)
    ruler.reign_summary = ReignSummary(
        years_reigned=reign,
        obituary=f"{old_ruler} ruled for {reign} years before {death_cause}.",
    )

    territory_id = ruler.territory_id
    heir = court.store.get_heir(territory_id)
    casualties: Optional[int] = None

    if heir is not None and heir.traits.loyalty > HEIR_LOYALTY_THRESHOLD:
        succession_type = SuccessionType.PEACEFUL
        new_ruler = heir
        _inherit(heir, ruler, tick)
    else:
        candidates = [
            c
            for c in court.store.living(territory_id)
            if c.traits.ambition > AMBITION_THRESHOLD and c.id != character_id
        ]
        if len(candidates) >= 2:
            succession_type = SuccessionType.CIVIL_WAR
            casualties = court.rng.randint(500, 1499)
            new_ruler = _strongest(candidates)
            promote_to_ruler(new_ruler, tick, title="Lord Protector")
            for loser in candidates:
                if loser.id == new_ruler.id or not court.rng.chance(0.5):
                    continue
                loser.kill(tick, "killed in succession war")
                court.emit(
                    CourtEvent(
                        tick=tick,
                        territory_id=territory_id,
                        event_type="death",
                        title="Character Death",
                        description=f"{loser.display_name} was killed in the succession war.",
                        severity=Severity.CRITICAL,
                        character_id=loser.id,
                    )
                )
        elif len(candidates) == 1:
            succession_type = SuccessionType.COUP
            new_ruler = candidates[0]
            promote_to_ruler(new_ruler, tick, title="Usurper")
        elif heir is not None:
            # disloyal heir, but nobody ambitious enough to contest the claim
            succession_type = SuccessionType.PEACEFUL
            new_ruler = heir
            _inherit(heir, ruler, tick)
        else:
            succession_type = SuccessionType.ELECTION
            new_ruler = build_character(
                territory_id, Role.RULER, tick, court.rng, age=ELECTED_RULER_AGE, title="Chief"
            )
            court.store.add(new_ruler)

    narrative = build_narrative(old_ruler, new_ruler, succession_type, death_cause, casualties)
    court.store.record_succession(
        SuccessionEvent(
            territory_id=territory_id,
            tick=tick,
            deceased_ruler_id=character_id,
            new_ruler_id=new_ruler.id,
            succession_type=succession_type,
            narrative=narrative,
            civil_war_casualties=casualties,
        )
    )
    court.emit(
        CourtEvent(
            tick=tick,
            territory_id=territory_id,
            event_type="succession",
            title="Succession",
            description=narrative,
            severity=Severity.CRITICAL,
            character_id=new_ruler.id,
        )
    )
    court.remember(-30 if succession_type is SuccessionType.PEACEFUL else -60, narrative, "crisis")
    logger.info("territory %s: %s succession, new ruler %s", territory_id, succession_type.value, new_ruler.name)

    return SuccessionResult(
        succession_type=succession_type,
        new_ruler_id=new_ruler.id,
        civil_war_casualties=casualties,
    )
