"""In-memory character store for Courtforge.

Owns character records, territories, succession history, factions and
rebellions for one simulation. Processors read and mutate records through
this store; `persistence.py` syncs it to and from the database.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .characters import Character
from .errors import CharacterNotFound
from .types import Faction, OperationResult, Rebellion, Role, SuccessionEvent, TerritoryStats

logger = logging.getLogger(__name__)


@dataclass
class CharacterStore:
    characters: Dict[int, Character] = field(default_factory=dict)
    territories: Dict[int, TerritoryStats] = field(default_factory=dict)
    succession_events: List[SuccessionEvent] = field(default_factory=list)
    factions: List[Faction] = field(default_factory=list)
    rebellions: List[Rebellion] = field(default_factory=list)
    _next_id: int = 1

    # ---- characters ---------------------------------------------------------

    def add(self, character: Character) -> int:
        """Store a character, assigning the next id when it has none."""
        if character.id is None:
            character.id = self._next_id
        self.characters[character.id] = character
        self._next_id = max(self._next_id, character.id + 1)
        return character.id

    def get(self, character_id: Optional[int]) -> Optional[Character]:
        if character_id is None:
            return None
        return self.characters.get(character_id)

    def require(self, character_id: int) -> Character:
        character = self.characters.get(character_id)
        if character is None:
            raise CharacterNotFound(character_id)
        return character

    def living(self, territory_id: Optional[int] = None) -> List[Character]:
        """Living characters in id (creation) order, optionally for one territory."""
        return [
            c
            for _, c in sorted(self.characters.items())
            if c.is_alive and (territory_id is None or c.territory_id == territory_id)
        ]

    def get_ruler(self, territory_id: int) -> Optional[Character]:
        return self._first_with_role(territory_id, Role.RULER)

    def get_heir(self, territory_id: int) -> Optional[Character]:
        return self._first_with_role(territory_id, Role.HEIR)

    def living_rulers(self, territory_id: int) -> List[Character]:
        return [c for c in self.living(territory_id) if c.role is Role.RULER]

    def _first_with_role(self, territory_id: int, role: Role) -> Optional[Character]:
        for c in self.living(territory_id):
            if c.role is role:
                return c
        return None

    def add_deed(self, character_id: int, tick: int, description: str, deed_type: str) -> OperationResult:
        character = self.get(character_id)
        if character is None:
            return OperationResult.fail("Character not found")
        character.add_deed(tick, description, deed_type)
        return OperationResult.ok()

    def update_emotional_state(self, character_id: int, **deltas: int) -> OperationResult:
        """Apply additive emotion deltas, clamped to [0, 100]."""
        character = self.get(character_id)
        if character is None:
            return OperationResult.fail("Character not found")
        try:
            character.emotional_state.adjust(**deltas)
        except ValueError as e:
            return OperationResult.fail(str(e))
        return OperationResult.ok()

    # ---- territories --------------------------------------------------------

    def add_territory(self, territory: TerritoryStats) -> TerritoryStats:
        self.territories[territory.id] = territory
        return territory

    def territory(self, territory_id: int) -> Optional[TerritoryStats]:
        return self.territories.get(territory_id)

    # ---- history / factions -------------------------------------------------

    def record_succession(self, event: SuccessionEvent) -> SuccessionEvent:
        self.succession_events.append(event)
        logger.debug(
            "succession %s in territory %s: %s -> %s",
            event.succession_type.value,
            event.territory_id,
            event.deceased_ruler_id,
            event.new_ruler_id,
        )
        return event

    def successions_for(self, territory_id: int) -> List[SuccessionEvent]:
        return [e for e in self.succession_events if e.territory_id == territory_id]

    def add_faction(self, faction: Faction) -> Faction:
        if faction.id is None:
            faction.id = _next_free_id(f.id for f in self.factions)
        self.factions.append(faction)
        return faction

    def add_rebellion(self, rebellion: Rebellion) -> Rebellion:
        if rebellion.id is None:
            rebellion.id = _next_free_id(r.id for r in self.rebellions)
        self.rebellions.append(rebellion)
        return rebellion


def _next_free_id(ids: Iterable[Optional[int]]) -> int:
    return max((i for i in ids if i is not None), default=0) + 1
