"""Court context: the store plus the collaborators every processor needs.

`Court` bundles the character store, the injectable random source, the
event log and the narrative sink. Processor modules (aging, plots,
succession, prosperity) are plain functions taking a Court as their first
argument; the methods below are thin wrappers that give callers the
operation names they expect.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from . import aging, plots, succession
from .characters import build_character
from .logging_utils import JsonlEventLogger, NullNarrativeSink
from .rng import CourtRandom
from .store import CharacterStore
from .types import Addiction, CourtEvent, OperationResult, Role, SuccessionResult

logger = logging.getLogger(__name__)


@dataclass
class Court:
    store: CharacterStore = field(default_factory=CharacterStore)
    rng: CourtRandom = field(default_factory=CourtRandom)
    event_logger: Optional[JsonlEventLogger] = None
    narrative: Any = field(default_factory=NullNarrativeSink)
    feed: List[CourtEvent] = field(default_factory=list)

    # ---- side-effect seams (fire-and-forget) --------------------------------

    def emit(self, event: CourtEvent) -> CourtEvent:
        """Append to the in-memory feed and the JSONL log. Log failures never propagate."""
        self.feed.append(event)
        if self.event_logger is not None:
            try:
                self.event_logger.write_event(event)
            except Exception as e:
                logger.debug("event log write failed: %s", e)
        return event

    def remember(self, emotional_weight: float, description: str, memory_type: str) -> None:
        try:
            self.narrative.record(emotional_weight, description, memory_type)
        except Exception as e:
            logger.debug("narrative sink rejected memory (%s): %s", memory_type, e)

    # ---- operations ---------------------------------------------------------

    def create_character(
        self,
        territory_id: int,
        role: Role | str,
        tick: int,
        name: Optional[str] = None,
        dynasty_name: Optional[str] = None,
        dynasty_generation: Optional[int] = None,
    ) -> int:
        character = build_character(
            territory_id,
            Role(role),
            tick,
            self.rng,
            name=name,
            dynasty_name=dynasty_name,
            dynasty_generation=dynasty_generation,
        )
        return self.store.add(character)

    def process_character_aging(self, tick: int, territory_id: Optional[int] = None) -> List[CourtEvent]:
        return aging.process_character_aging(self, tick, territory_id=territory_id)

    def process_plots(self, territory_id: int, tick: int) -> List[CourtEvent]:
        return plots.process_plots(self, territory_id, tick)

    def check_plot_opportunities(
        self,
        territory_id: int,
        tick: int,
        prosperity_tier: int,
        decadence_level: float,
        addictions: Optional[Mapping[int, Addiction]] = None,
    ) -> List[str]:
        return plots.check_plot_opportunities(self, territory_id, tick, prosperity_tier, decadence_level, addictions)

    def handle_ruler_death(self, character_id: int, tick: int, death_cause: str) -> SuccessionResult:
        return succession.handle_ruler_death(self, character_id, tick, death_cause)

    def start_plot(self, character_id: int, plot_type: str, tick: int, target_id: Optional[int] = None) -> OperationResult:
        return plots.start_plot(self, character_id, plot_type, tick, target_id=target_id)

    def join_plot(self, character_id: int, plotter_id: int, plot_type: str) -> OperationResult:
        return plots.join_plot(self, character_id, plotter_id, plot_type)

    def get_active_plots(self, territory_id: int) -> List[Dict[str, object]]:
        return plots.get_active_plots(self, territory_id)

    def add_deed(self, character_id: int, tick: int, description: str, deed_type: str) -> OperationResult:
        return self.store.add_deed(character_id, tick, description, deed_type)
