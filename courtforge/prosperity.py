"""Prosperity feedback: good times breed ambition, golden ages breed complacency."""
from __future__ import annotations

from typing import TYPE_CHECKING, List

from .types import CourtEvent, Plot, PlotType, Role, Severity

if TYPE_CHECKING:
    from .court import Court

SCHEMING_TIER = 3
COMPLACENCY_TIER = 4
PROSPERITY_PLOT_PROGRESS = 5
MIN_GENERAL_COURAGE = 10


def apply_character_prosperity_effects(
    court: "Court", territory_id: int, prosperity_tier: int, tick: int
) -> List[CourtEvent]:
    events: List[CourtEvent] = []
    for character in court.store.living(territory_id):
        if character.role is Role.RULER:
            continue
        traits = character.traits

        if prosperity_tier >= SCHEMING_TIER and traits.ambition > 60:
            character.emotional_state.adjust(hope=5)
            if (
                traits.cunning > 50
                and traits.loyalty < 50
                and not character.has_plot()
                and court.rng.chance(0.1)
            ):
                plot_type = PlotType.EMBEZZLEMENT if traits.greed > 60 else PlotType.COUP
                character.put_plot(
                    Plot(
                        plot_type=plot_type.value,
                        start_tick=tick,
                        progress_percent=PROSPERITY_PLOT_PROGRESS,
                    )
                )
                events.append(
                    court.emit(
                        CourtEvent(
                            tick=tick,
                            territory_id=territory_id,
                            event_type="plot_started",
                            title="Court Intrigue",
                            description=f"{character.display_name} has begun scheming during the time of prosperity.",
                            severity=Severity.INFO,
                            character_id=character.id,
                            plot_type=plot_type.value,
                        )
                    )
                )

        if prosperity_tier >= COMPLACENCY_TIER:
            if character.role is Role.GENERAL and court.rng.chance(0.05):
                traits.adjust(floor=MIN_GENERAL_COURAGE, courage=-2)
            if character.role is Role.ADVISOR and traits.greed > 50 and court.rng.chance(0.05):
                traits.adjust(greed=3, loyalty=-2)
    return events
