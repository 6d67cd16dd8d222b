"""Plot lifecycle: opportunity, progress, discovery, resolution, execution.

Each tick a plot gains progress and may be discovered by the ruler's spies.
Resolution is evaluated right after, in this order:

1. complete and undiscovered -> the scheme is executed and removed
2. discovered under a cruel ruler (cruelty > 50) -> the plotter is executed
3. otherwise the plot carries over to the next tick

A plot discovered on the same tick it reaches 100% therefore never
executes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from . import succession
from .characters import Character, convert_to_rebel_leader, demote_to_rival, promote_to_ruler
from .errors import UnknownPlotTypeError
from .types import (
    Addiction,
    CourtEvent,
    Faction,
    OperationResult,
    Plot,
    PlotType,
    ReignSummary,
    Rebellion,
    Role,
    SecretGoal,
    Severity,
    SuccessionEvent,
    SuccessionType,
)

if TYPE_CHECKING:
    from .court import Court

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlotConfig:
    name: str
    description: str
    base_progress_rate: int
    discovery_base_chance: float
    success_effects: str
    failure_effects: str


PLOT_TYPES: Dict[PlotType, PlotConfig] = {
    PlotType.COUP: PlotConfig(
        name="Coup d'État",
        description="Seize power from the current ruler",
        base_progress_rate=8,
        discovery_base_chance=0.03,
        success_effects="Plotter becomes ruler, old ruler dies or is exiled",
        failure_effects="Plotter executed",
    ),
    PlotType.ASSASSINATION: PlotConfig(
        name="Assassination",
        description="Kill a specific target",
        base_progress_rate=10,
        discovery_base_chance=0.04,
        success_effects="Target dies",
        failure_effects="Plotter may be caught and killed",
    ),
    PlotType.EMBEZZLEMENT: PlotConfig(
        name="Embezzlement",
        description="Secretly steal from the treasury",
        base_progress_rate=12,
        discovery_base_chance=0.02,
        success_effects="Plotter gains wealth, treasury loses",
        failure_effects="Plotter caught, loses position, possible execution",
    ),
    PlotType.SABOTAGE: PlotConfig(
        name="Sabotage",
        description="Undermine military or economy",
        base_progress_rate=15,
        discovery_base_chance=0.02,
        success_effects="Territory suffers setback",
        failure_effects="Plotter caught",
    ),
    PlotType.DEFECTION: PlotConfig(
        name="Defection",
        description="Plan to switch allegiance to another territory",
        base_progress_rate=6,
        discovery_base_chance=0.025,
        success_effects="Character defects with secrets/forces",
        failure_effects="Caught for treason",
    ),
    PlotType.REBELLION: PlotConfig(
        name="Rebellion",
        description="Incite and lead a popular uprising",
        base_progress_rate=5,
        discovery_base_chance=0.04,
        success_effects="Rebellion starts with bonus strength",
        failure_effects="Rebellion fails before starting",
    ),
}

SABOTAGE_TARGETS = ("military", "food", "technology")


def plot_config(plot_type: str) -> Optional[PlotConfig]:
    try:
        return PLOT_TYPES[PlotType(plot_type)]
    except ValueError:
        return None


# ---- Starting and joining ----------------------------------------------------


def start_plot(
    court: "Court",
    character_id: int,
    plot_type: str,
    tick: int,
    target_id: Optional[int] = None,
) -> OperationResult:
    character = court.store.get(character_id)
    if character is None or not character.is_alive:
        return OperationResult.fail("Character not available")
    if character.has_plot(plot_type):
        return OperationResult.fail("Already plotting this")

    character.put_plot(Plot(plot_type=plot_type, start_tick=tick, target_id=target_id))
    return OperationResult.ok()


def join_plot(court: "Court", character_id: int, plotter_id: int, plot_type: str) -> OperationResult:
    plotter = court.store.get(plotter_id)
    joiner = court.store.get(character_id)
    if plotter is None or joiner is None or not plotter.is_alive or not joiner.is_alive:
        return OperationResult.fail("Characters not available")

    plot = plotter.active_plots.get(plot_type)
    if plot is None:
        return OperationResult.fail("Plot not found")

    plotter.put_plot(plot.with_conspirator(character_id))
    return OperationResult.ok()


def get_active_plots(court: "Court", territory_id: int) -> List[Dict[str, object]]:
    plots: List[Dict[str, object]] = []
    for character in court.store.living(territory_id):
        for plot in character.active_plots.values():
            plots.append(
                {
                    "character_id": character.id,
                    "character_name": character.name,
                    "plot_type": plot.plot_type,
                    "progress": plot.progress_percent,
                    "discovered": plot.discovered,
                }
            )
    return plots


# ---- Opportunity -------------------------------------------------------------


def plot_chance(
    character: Character,
    prosperity_tier: int,
    decadence_level: float,
    addiction: Optional[Addiction] = None,
) -> float:
    traits = character.traits
    chance = 0.0
    # ambition pushes toward scheming, loyalty away from it
    chance += (traits.ambition - 50) / 200
    chance -= (traits.loyalty - 50) / 200
    chance += prosperity_tier * 0.02
    chance += decadence_level / 500
    if traits.greed > 70:
        chance += 0.05
    if addiction is not None:
        chance += addiction.plot_bonus()
    if character.secret_goal is SecretGoal.SEIZE_THRONE:
        chance += 0.1
    return chance


def choose_plot_type(character: Character) -> PlotType:
    traits = character.traits
    if character.secret_goal is SecretGoal.SEIZE_THRONE or (traits.ambition > 70 and traits.courage > 50):
        return PlotType.COUP
    if traits.greed > 70:
        return PlotType.EMBEZZLEMENT
    if traits.wrath > 60 and character.emotional_state.rage > 50:
        return PlotType.ASSASSINATION
    if traits.loyalty < 30:
        return PlotType.DEFECTION
    return PlotType.SABOTAGE


def check_plot_opportunities(
    court: "Court",
    territory_id: int,
    tick: int,
    prosperity_tier: int,
    decadence_level: float,
    addictions: Optional[Mapping[int, Addiction]] = None,
) -> List[str]:
    """Give every idle non-ruler one roll to start scheming. Returns narrative lines."""
    addictions = addictions or {}
    started: List[str] = []
    for character in court.store.living(territory_id):
        if character.role is Role.RULER or character.has_plot():
            continue

        chance = plot_chance(character, prosperity_tier, decadence_level, addictions.get(character.id))
        if not court.rng.chance(chance):
            continue

        plot_type = choose_plot_type(character)
        character.put_plot(Plot(plot_type=plot_type.value, start_tick=tick))
        line = f"{character.display_name} has begun plotting {plot_type.value}..."
        started.append(line)
        court.emit(
            CourtEvent(
                tick=tick,
                territory_id=territory_id,
                event_type="plot_started",
                title="Court Intrigue",
                description=line,
                severity=Severity.INFO,
                character_id=character.id,
                plot_type=plot_type.value,
            )
        )
    return started


# ---- Progress, discovery, resolution -----------------------------------------


def progress_rate(config: PlotConfig, plotter: Character, plot: Plot) -> int:
    rate = config.base_progress_rate
    rate += (plotter.traits.cunning - 50) // 10
    rate += len(plot.conspirators) * 2
    return rate


def discovery_chance(config: PlotConfig, plotter: Character, ruler: Character, plot: Plot) -> float:
    chance = config.discovery_base_chance
    chance += ruler.traits.paranoia / 1000
    chance -= plotter.traits.cunning / 500
    chance += len(plot.conspirators) * 0.01
    return chance


def process_plots(court: "Court", territory_id: int, tick: int) -> List[CourtEvent]:
    events: List[CourtEvent] = []

    for character in court.store.living(territory_id):
        if not character.active_plots:
            continue

        for plot_type, plot in list(character.active_plots.items()):
            # an earlier plot this pass may have killed or crowned this character
            if not character.is_alive or plot_type not in character.active_plots:
                break

            config = plot_config(plot.plot_type)
            if config is None:
                logger.debug("leaving plot with unknown type %r untouched", plot.plot_type)
                continue

            ruler = court.store.get_ruler(territory_id)
            if ruler is not None and ruler.id == character.id:
                ruler = None

            new_progress = plot.progress_percent + progress_rate(config, character, plot)
            discovered = plot.discovered
            if not discovered and ruler is not None:
                if court.rng.chance(discovery_chance(config, character, ruler, plot)):
                    discovered = True
                    events.append(
                        court.emit(
                            CourtEvent(
                                tick=tick,
                                territory_id=territory_id,
                                event_type="plot_discovered",
                                title="Plot Discovered!",
                                description=(
                                    f"{ruler.display_name}'s spies have uncovered a {config.name.lower()} "
                                    f"plot by {character.display_name}!"
                                ),
                                severity=Severity.CRITICAL,
                                character_id=character.id,
                                plot_type=plot.plot_type,
                            )
                        )
                    )
            updated = plot.advanced(new_progress, discovered)

            if updated.progress_percent >= 100 and not updated.discovered:
                character.active_plots.pop(plot_type, None)
                success, description = execute_plot(court, character, updated, tick)
                events.append(
                    court.emit(
                        CourtEvent(
                            tick=tick,
                            territory_id=territory_id,
                            event_type="plot_executed",
                            title="Scheme Executed!",
                            description=description,
                            severity=Severity.CRITICAL if success else Severity.WARNING,
                            character_id=character.id,
                            plot_type=plot.plot_type,
                        )
                    )
                )
            elif updated.discovered and ruler is not None and ruler.traits.cruelty > 50:
                character.active_plots.pop(plot_type, None)
                character.kill(tick, f"executed for {plot.plot_type}")
                description = f"{ruler.display_name} has executed {character.name} for plotting {config.name.lower()}."
                events.append(
                    court.emit(
                        CourtEvent(
                            tick=tick,
                            territory_id=territory_id,
                            event_type="plotter_executed",
                            title="Traitor Executed",
                            description=description,
                            severity=Severity.CRITICAL,
                            character_id=character.id,
                            plot_type=plot.plot_type,
                        )
                    )
                )
                court.remember(-30, description, "betrayal")
            elif updated != plot:
                character.put_plot(updated)

        if not character.is_alive:
            character.active_plots = {}

    return events


# ---- Execution ---------------------------------------------------------------


def execute_plot(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    """Carry out a completed, undiscovered scheme. Returns (success, description)."""
    try:
        plot_type = PlotType(plot.plot_type)
    except ValueError:
        raise UnknownPlotTypeError(plot.plot_type) from None

    handler = _EXECUTORS[plot_type]
    success, description = handler(court, plotter, plot, tick)
    logger.debug("plot %s by %s resolved: success=%s", plot_type.value, plotter.name, success)
    return success, description


def _execute_coup(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    ruler = court.store.get_ruler(plotter.territory_id)
    if ruler is None or ruler.id == plotter.id:
        return False, "No ruler to overthrow"

    chance = 0.5
    chance += (plotter.traits.cunning - ruler.traits.paranoia) / 200
    chance += (plotter.traits.courage - ruler.traits.courage) / 200
    chance += len(plot.conspirators) * 0.1

    if not court.rng.chance(chance):
        plotter.kill(tick, "executed for failed coup")
        description = f"{plotter.name}'s coup attempt has failed! They have been captured and executed."
        court.remember(-20, description, "crisis")
        return False, description

    deposed = ruler.display_name
    ruler_died = court.rng.chance(0.8 if plotter.traits.cruelty > 60 else 0.4)
    if ruler_died:
        ruler.kill(tick, "killed in coup")
        ruler.reign_summary = ReignSummary(
            years_reigned=succession.years_reigned(ruler, tick),
            obituary=f"{deposed} was overthrown and killed in a coup led by {plotter.name}.",
        )
    else:
        demote_to_rival(ruler, title="Exile")

    promote_to_ruler(plotter, tick, title="Lord Protector" if plotter.traits.honor > 50 else "Usurper")

    narrative = f"{plotter.name} successfully overthrew {deposed} in a carefully planned coup."
    court.store.record_succession(
        SuccessionEvent(
            territory_id=plotter.territory_id,
            tick=tick,
            deceased_ruler_id=ruler.id,
            new_ruler_id=plotter.id,
            succession_type=SuccessionType.COUP,
            narrative=narrative,
        )
    )
    court.emit(
        CourtEvent(
            tick=tick,
            territory_id=plotter.territory_id,
            event_type="succession",
            title="Coup d'État",
            description=narrative,
            severity=Severity.CRITICAL,
            character_id=plotter.id,
            plot_type=PlotType.COUP.value,
        )
    )
    court.remember(-60, narrative, "crisis")

    fate = "The former ruler is dead." if ruler_died else "The former ruler has fled into exile."
    return True, f"{plotter.name} has overthrown {deposed} in a successful coup! {fate}"


def _execute_assassination(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    if plot.target_id is not None:
        target = court.store.get(plot.target_id)
    else:
        target = court.store.get_ruler(plotter.territory_id)
    if target is None or not target.is_alive:
        return False, "Target not available"

    chance = 0.6 + plotter.traits.cunning / 200 - target.traits.paranoia / 200
    if court.rng.chance(chance):
        target.kill(tick, "assassinated")
        plotter.add_deed(tick, f"Orchestrated the assassination of {target.display_name}", "villainous")
        description = f"{target.display_name} has been assassinated! The killer remains unknown."
        court.remember(-50, description, "character_death")
        if target.role is Role.RULER:
            succession.handle_ruler_death(court, target.id, tick, "assassinated")
        return True, description

    if court.rng.chance(0.5):
        plotter.kill(tick, "killed during failed assassination")
        return False, (
            f"An assassination attempt on {target.display_name} has failed! "
            f"The assassin, {plotter.name}, was killed."
        )
    return False, f"An assassination attempt on {target.display_name} has failed! The assassin escaped."


def _execute_embezzlement(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    territory = court.store.territory(plotter.territory_id)
    if territory is None:
        return False, "No territory to embezzle from"

    stolen = court.rng.randint(5, 14)
    territory.reduce("wealth", stolen)
    plotter.traits.adjust(greed=5)
    return True, f"{plotter.display_name} has been secretly embezzling from the treasury."


def _execute_sabotage(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    territory = court.store.territory(plotter.territory_id)
    if territory is None:
        return False, "No territory to sabotage"

    target_stat = court.rng.choice(SABOTAGE_TARGETS)
    damage = court.rng.randint(5, 14)
    territory.reduce(target_stat, damage)
    return True, f"Mysterious sabotage has damaged the {target_stat} of the realm!"


def _execute_defection(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    # readiness only; the diplomacy layer acts on foreign_allegiance
    plotter.secret_goal = SecretGoal.FOREIGN_ALLEGIANCE
    return True, f"{plotter.display_name} has prepared to defect to a foreign power."


def _execute_rebellion(court: "Court", plotter: Character, plot: Plot, tick: int) -> Tuple[bool, str]:
    territory = court.store.territory(plotter.territory_id)
    if territory is None:
        return False, "No territory for rebellion"
    if plotter.role is Role.RULER:
        return False, "A ruler cannot rebel against themselves"

    faction = court.store.add_faction(
        Faction(
            territory_id=plotter.territory_id,
            name=f"{plotter.name}'s Rebels",
            power=30 + plotter.traits.charisma // 3,
            rebellion_risk=100,
            member_count=int(territory.population * 0.1),
            founded_at_tick=tick,
            leader_name=plotter.name,
        )
    )
    court.store.add_rebellion(
        Rebellion(
            territory_id=plotter.territory_id,
            faction_id=faction.id,
            started_at_tick=tick,
            strength=40 + plotter.traits.courage // 3 + plotter.traits.charisma // 3,
        )
    )
    convert_to_rebel_leader(plotter, title="Rebel Leader")
    description = f"{plotter.name} has raised the banner of rebellion! The people rise against their rulers!"
    court.remember(-40, description, "crisis")
    return True, description


_EXECUTORS = {
    PlotType.COUP: _execute_coup,
    PlotType.ASSASSINATION: _execute_assassination,
    PlotType.EMBEZZLEMENT: _execute_embezzlement,
    PlotType.SABOTAGE: _execute_sabotage,
    PlotType.DEFECTION: _execute_defection,
    PlotType.REBELLION: _execute_rebellion,
}
