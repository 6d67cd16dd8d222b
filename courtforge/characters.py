"""
Court characters: the record, its role transitions, and the generator.

This module holds:
- name / title pools (pure data, safe for reporting)
- Character: the in-memory record every processor reads and mutates
- promote_to_ruler / demote_to_rival / convert_to_rebel_leader: the only
  ways a character's role changes after creation
- generate_traits / generate_secret_goal / build_character: the creation-time
  generator (traits, hidden motive, age, emotional baseline)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import InvalidRoleTransition
from .rng import CourtRandom
from .traits import TRAIT_NAMES, EmotionalState, Traits
from .types import Deed, Plot, ReignSummary, Role, SecretGoal


TICKS_PER_YEAR = 12
MAX_DEEDS = 20

NAME_POOL: Tuple[str, ...] = (
    "Aelric", "Bjorn", "Cassius", "Draven", "Einar", "Fenris", "Godfrey", "Harald",
    "Ivar", "Jorah", "Kael", "Lucius", "Magnus", "Nikolai", "Odin", "Ragnar",
    "Sigurd", "Theron", "Ulric", "Viktor", "Wulfric", "Xander", "Yorick", "Zephyr",
    "Alaric", "Brennan", "Cedric", "Darius", "Edmund", "Felix", "Gareth", "Hector",
    "Aldara", "Brenna", "Cassandra", "Diana", "Elena", "Freya", "Gwendolyn", "Helena",
    "Isolde", "Jocelyn", "Kira", "Lyra", "Morgana", "Nadia", "Ophelia", "Priscilla",
    "Quinn", "Rowena", "Selena", "Thalia", "Una", "Vivienne", "Wren", "Yara", "Zara",
)

TITLES: Dict[Role, Tuple[str, ...]] = {
    Role.RULER: ("King", "Queen", "Chief", "High Chief", "Lord Protector", "Emperor", "Empress", "Supreme Leader"),
    Role.HEIR: ("Crown Prince", "Crown Princess", "Heir Apparent", "Prince", "Princess"),
    Role.GENERAL: ("General", "War Chief", "Marshal", "Commander", "Warlord"),
    Role.ADVISOR: ("High Advisor", "Chancellor", "Vizier", "Sage", "Oracle", "Minister"),
    Role.RIVAL: ("Lord", "Lady", "Duke", "Duchess", "Count", "Countess"),
    Role.REBEL_LEADER: ("Rebel Leader", "Revolutionary", "Insurgent Chief", "Freedom Fighter"),
}

# (lowest age, span) per role; age = lowest + randint(0, span - 1)
AGE_BANDS: Dict[Role, Tuple[int, int]] = {
    Role.RULER: (30, 30),
    Role.HEIR: (15, 15),
    Role.GENERAL: (35, 20),
    Role.ADVISOR: (40, 25),
    Role.RIVAL: (25, 25),
    Role.REBEL_LEADER: (25, 20),
}

# Additive creation-time boosts; negative values floor at 0.
ROLE_TRAIT_BOOSTS: Dict[Role, Dict[str, int]] = {
    Role.RULER: {"ambition": 20, "charisma": 15},
    Role.HEIR: {"pride": 15},
    Role.GENERAL: {"courage": 25, "wrath": 15},
    Role.ADVISOR: {"wisdom": 20, "cunning": 15},
    Role.RIVAL: {"ambition": 30, "loyalty": -20},
    Role.REBEL_LEADER: {"courage": 20, "loyalty": -30, "ambition": 25},
}

# Narrower sampling bands; everything else draws from 20-80.
TRAIT_BANDS: Dict[str, Tuple[int, int]] = {
    "cruelty": (10, 60),
    "paranoia": (10, 50),
    "wrath": (10, 50),
}

FALLBACK_GOALS: Tuple[SecretGoal, ...] = (
    SecretGoal.ACCUMULATE_WEALTH,
    SecretGoal.PROTECT_FAMILY,
    SecretGoal.GLORY,
    SecretGoal.INDEPENDENCE,
    SecretGoal.NONE,
)


@dataclass
class Character:
    """A person at court.

    `active_plots` is keyed by plot type, which enforces at most one plot
    of each type per character.
    """

    territory_id: int
    name: str
    title: str
    role: Role
    birth_tick: int
    age: int
    traits: Traits
    emotional_state: EmotionalState
    secret_goal: SecretGoal = SecretGoal.NONE
    is_alive: bool = True
    death_tick: Optional[int] = None
    death_cause: Optional[str] = None
    dynasty_name: Optional[str] = None
    dynasty_generation: Optional[int] = None
    coronation_tick: Optional[int] = None
    active_plots: Dict[str, Plot] = field(default_factory=dict)
    deeds: List[Deed] = field(default_factory=list)
    reign_summary: Optional[ReignSummary] = None
    id: Optional[int] = None

    @property
    def display_name(self) -> str:
        return f"{self.title} {self.name}"

    def has_plot(self, plot_type: Optional[str] = None) -> bool:
        if plot_type is None:
            return bool(self.active_plots)
        return plot_type in self.active_plots

    def kill(self, tick: int, cause: str) -> None:
        """Logical death. Idempotent: the first recorded cause wins."""
        if not self.is_alive:
            return
        self.is_alive = False
        self.death_tick = tick
        self.death_cause = cause

    def put_plot(self, plot: Plot) -> Plot:
        """Store or replace the plot under its key."""
        self.active_plots[plot.key] = plot
        return plot

    def add_deed(self, tick: int, description: str, deed_type: str) -> None:
        self.deeds.append(Deed(tick=tick, description=description, deed_type=deed_type))
        if len(self.deeds) > MAX_DEEDS:
            del self.deeds[: len(self.deeds) - MAX_DEEDS]


# ---- Role transitions --------------------------------------------------------

_PROMOTABLE = {Role.HEIR, Role.GENERAL, Role.ADVISOR, Role.RIVAL, Role.REBEL_LEADER}


def promote_to_ruler(
    character: Character,
    tick: int,
    title: str,
    dynasty_generation: Optional[int] = None,
) -> None:
    """Crown a living non-ruler. Clears their schemes; a ruler has nothing to plot for."""
    if not character.is_alive or character.role not in _PROMOTABLE:
        raise InvalidRoleTransition(character.id or -1, character.role.value, Role.RULER.value)
    character.role = Role.RULER
    character.title = title
    character.coronation_tick = tick
    character.active_plots = {}
    if dynasty_generation is not None:
        character.dynasty_generation = dynasty_generation


def demote_to_rival(character: Character, title: str = "Exile") -> None:
    if character.role is not Role.RULER:
        raise InvalidRoleTransition(character.id or -1, character.role.value, Role.RIVAL.value)
    character.role = Role.RIVAL
    character.title = title


def convert_to_rebel_leader(character: Character, title: str = "Rebel Leader") -> None:
    if not character.is_alive or character.role is Role.RULER:
        raise InvalidRoleTransition(character.id or -1, character.role.value, Role.REBEL_LEADER.value)
    character.role = Role.REBEL_LEADER
    character.title = title


# ---- Generation --------------------------------------------------------------


def random_trait(rng: CourtRandom, lo: int = 20, hi: int = 80) -> int:
    return rng.randint(lo, hi)


def random_emotional_state(rng: CourtRandom) -> EmotionalState:
    return EmotionalState(
        hope=random_trait(rng, 40, 70),
        fear=random_trait(rng, 10, 40),
        shame=random_trait(rng, 0, 20),
        despair=random_trait(rng, 0, 20),
        contentment=random_trait(rng, 40, 70),
        rage=random_trait(rng, 0, 30),
    )


def generate_traits(role: Role, rng: CourtRandom) -> Traits:
    values = {}
    for name in TRAIT_NAMES:
        lo, hi = TRAIT_BANDS.get(name, (20, 80))
        values[name] = random_trait(rng, lo, hi)
    traits = Traits(**values)
    traits.adjust(**ROLE_TRAIT_BOOSTS.get(role, {}))
    return traits


def generate_secret_goal(role: Role, traits: Traits, rng: CourtRandom) -> SecretGoal:
    """Trait-weighted hidden motive; first matching rule wins."""
    if role is Role.RULER:
        return SecretGoal.NONE

    if traits.ambition > 70 and traits.loyalty < 40:
        return SecretGoal.SEIZE_THRONE if rng.chance(0.6) else SecretGoal.INDEPENDENCE
    if traits.greed > 70:
        return SecretGoal.ACCUMULATE_WEALTH
    if traits.wrath > 60 and rng.chance(0.3):
        return SecretGoal.REVENGE
    if traits.compassion > 70:
        return SecretGoal.PROTECT_FAMILY
    if traits.pride > 70 and traits.courage > 60:
        return SecretGoal.GLORY
    if rng.chance(0.5):
        return SecretGoal.NONE
    return rng.choice(FALLBACK_GOALS)


def sample_age(role: Role, rng: CourtRandom) -> int:
    lo, span = AGE_BANDS.get(role, (30, 1))
    return lo + rng.randint(0, span - 1)


def build_character(
    territory_id: int,
    role: Role,
    tick: int,
    rng: CourtRandom,
    name: Optional[str] = None,
    dynasty_name: Optional[str] = None,
    dynasty_generation: Optional[int] = None,
    age: Optional[int] = None,
    title: Optional[str] = None,
) -> Character:
    """Roll a fresh living character. The caller assigns the id by storing it."""
    character_name = name or rng.choice(NAME_POOL)
    character_title = title or rng.choice(TITLES[role])
    traits = generate_traits(role, rng)
    secret_goal = generate_secret_goal(role, traits, rng)
    years = age if age is not None else sample_age(role, rng)
    return Character(
        territory_id=territory_id,
        name=character_name,
        title=character_title,
        role=role,
        birth_tick=tick - years * TICKS_PER_YEAR,
        age=years,
        traits=traits,
        emotional_state=random_emotional_state(rng),
        secret_goal=secret_goal,
        dynasty_name=dynasty_name,
        dynasty_generation=dynasty_generation,
        coronation_tick=tick if role is Role.RULER else None,
    )
