from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


# --- Closed vocabularies ------------------------------------------------------


class Role(str, Enum):
    RULER = "ruler"
    HEIR = "heir"
    GENERAL = "general"
    ADVISOR = "advisor"
    RIVAL = "rival"
    REBEL_LEADER = "rebel_leader"


class SecretGoal(str, Enum):
    SEIZE_THRONE = "seize_throne"
    ACCUMULATE_WEALTH = "accumulate_wealth"
    REVENGE = "revenge"
    PROTECT_FAMILY = "protect_family"
    FOREIGN_ALLEGIANCE = "foreign_allegiance"
    RELIGIOUS_DOMINANCE = "religious_dominance"
    INDEPENDENCE = "independence"
    GLORY = "glory"
    NONE = "none"


class PlotType(str, Enum):
    COUP = "coup"
    ASSASSINATION = "assassination"
    EMBEZZLEMENT = "embezzlement"
    SABOTAGE = "sabotage"
    DEFECTION = "defection"
    REBELLION = "rebellion"


class SuccessionType(str, Enum):
    PEACEFUL = "peaceful"
    COUP = "coup"
    CIVIL_WAR = "civil_war"
    ELECTION = "election"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# --- Plot ---------------------------------------------------------------------


@dataclass(frozen=True)
class Plot:
    """One scheme owned by a character.

    Value object: a character holds at most one plot per `plot_type`, so the
    type doubles as the key within the owner's plot collection. Updates
    return a new Plot; comparing two Plots with `==` is the dirty check.
    """

    plot_type: str
    start_tick: int
    target_id: Optional[int] = None
    progress_percent: int = 0
    discovered: bool = False
    conspirators: FrozenSet[int] = frozenset()

    @property
    def key(self) -> str:
        return self.plot_type

    def advanced(self, progress_percent: int, discovered: bool) -> "Plot":
        # progress never goes backwards and discovery is sticky
        return replace(
            self,
            progress_percent=max(self.progress_percent, min(100, progress_percent)),
            discovered=self.discovered or discovered,
        )

    def with_conspirator(self, character_id: int) -> "Plot":
        return replace(self, conspirators=self.conspirators | {character_id})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plot_type": self.plot_type,
            "start_tick": int(self.start_tick),
            "target_id": self.target_id,
            "progress_percent": int(self.progress_percent),
            "discovered": bool(self.discovered),
            "conspirators": sorted(self.conspirators),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plot":
        target = data.get("target_id")
        return cls(
            plot_type=str(data.get("plot_type", "")),
            start_tick=int(data.get("start_tick", 0)),
            target_id=None if target is None else int(target),
            progress_percent=int(data.get("progress_percent", 0)),
            discovered=bool(data.get("discovered", False)),
            conspirators=frozenset(int(c) for c in data.get("conspirators", []) or []),
        )


# --- Character history --------------------------------------------------------


@dataclass
class Deed:
    tick: int
    description: str
    deed_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tick": int(self.tick), "description": self.description, "type": self.deed_type}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deed":
        return cls(
            tick=int(data.get("tick", 0)),
            description=str(data.get("description", "")),
            deed_type=str(data.get("type", "")),
        )


@dataclass
class ReignSummary:
    """Terminal record attached to a ruler at death.

    The war/plot counters are reserved; nothing in the court core increments them.
    """

    years_reigned: int
    obituary: str
    wars_started: int = 0
    wars_won: int = 0
    plots_survived: int = 0
    advisors_executed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "years_reigned": int(self.years_reigned),
            "obituary": self.obituary,
            "wars_started": int(self.wars_started),
            "wars_won": int(self.wars_won),
            "plots_survived": int(self.plots_survived),
            "advisors_executed": int(self.advisors_executed),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReignSummary":
        return cls(
            years_reigned=int(data.get("years_reigned", 0)),
            obituary=str(data.get("obituary", "")),
            wars_started=int(data.get("wars_started", 0)),
            wars_won=int(data.get("wars_won", 0)),
            plots_survived=int(data.get("plots_survived", 0)),
            advisors_executed=int(data.get("advisors_executed", 0)),
        )


# --- Succession ---------------------------------------------------------------


@dataclass(frozen=True)
class SuccessionEvent:
    """Immutable record of a ruler transition. Created once, never mutated."""

    territory_id: int
    tick: int
    deceased_ruler_id: int
    new_ruler_id: int
    succession_type: SuccessionType
    narrative: str
    plotters_executed: int = 0
    civil_war_casualties: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "territory_id": self.territory_id,
            "tick": self.tick,
            "deceased_ruler_id": self.deceased_ruler_id,
            "new_ruler_id": self.new_ruler_id,
            "succession_type": self.succession_type.value,
            "narrative": self.narrative,
            "plotters_executed": self.plotters_executed,
            "civil_war_casualties": self.civil_war_casualties,
        }


@dataclass
class SuccessionResult:
    succession_type: Optional[SuccessionType]
    new_ruler_id: Optional[int]
    civil_war_casualties: Optional[int] = None
    success: bool = True
    error: Optional[str] = None


@dataclass
class OperationResult:
    """Soft-failure return value for store and plot operations."""

    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)


# --- Court event feed ---------------------------------------------------------


@dataclass
class CourtEvent:
    """One entry in the append-only narrative feed.

    Every death, discovery, execution and succession produces exactly one.
    """

    tick: int
    territory_id: Optional[int]
    event_type: str  # "death" | "plot_started" | "plot_discovered" | "plot_executed" | "plotter_executed" | "succession"
    title: str
    description: str
    severity: Severity = Severity.INFO
    character_id: Optional[int] = None
    plot_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": int(self.tick),
            "territory_id": self.territory_id,
            "event_type": self.event_type,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "character_id": self.character_id,
            "plot_type": self.plot_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CourtEvent":
        return cls(
            tick=int(data.get("tick", 0)),
            territory_id=data.get("territory_id"),
            event_type=str(data.get("event_type", "")),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            severity=Severity(data.get("severity", "info")),
            character_id=data.get("character_id"),
            plot_type=data.get("plot_type"),
        )


# --- Factions & rebellions ----------------------------------------------------


@dataclass
class Faction:
    territory_id: int
    name: str
    power: int
    rebellion_risk: int
    member_count: int
    founded_at_tick: int
    faction_type: str = "political"
    ideology: str = "overthrow the current regime"
    happiness: int = 20
    leader_name: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Rebellion:
    territory_id: int
    faction_id: int
    started_at_tick: int
    strength: int
    demands: str = "Overthrow the current ruler"
    status: str = "active"
    id: Optional[int] = None


# --- External inputs ----------------------------------------------------------


ADDICTION_PLOT_BONUS: Dict[str, float] = {
    "mild": 0.02,
    "moderate": 0.05,
    "severe": 0.10,
    "crippling": 0.20,
}


@dataclass(frozen=True)
class Addiction:
    """Addiction severity supplied by the (external) addiction system."""

    severity: str  # mild | moderate | severe | crippling
    addiction_type: str = "alcohol"

    def plot_bonus(self) -> float:
        bonus = ADDICTION_PLOT_BONUS.get(self.severity, 0.0)
        if self.addiction_type == "gambling":
            bonus += 0.03
        return bonus


TERRITORY_SCHEMA_VERSION = 2


@dataclass
class TerritoryStats:
    """Aggregate territory fields read (and partially written) by the court core.

    Owned by the economy simulation. `from_dict` applies defaults at read
    time so rows written by older schema versions (v1 had no prosperity or
    decadence fields) stay readable.
    """

    id: int
    name: str = "Unnamed Realm"
    wealth: float = 50.0
    food: float = 50.0
    military: float = 20.0
    technology: float = 10.0
    happiness: float = 50.0
    population: int = 100
    prosperity_tier: int = 0
    decadence_level: float = 0.0
    schema_version: int = TERRITORY_SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "wealth": float(self.wealth),
            "food": float(self.food),
            "military": float(self.military),
            "technology": float(self.technology),
            "happiness": float(self.happiness),
            "population": int(self.population),
            "prosperity_tier": int(self.prosperity_tier),
            "decadence_level": float(self.decadence_level),
            "schema_version": TERRITORY_SCHEMA_VERSION,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TerritoryStats":
        version = int(data.get("schema_version", 1) or 1)
        prosperity = data.get("prosperity") or {}
        tier = data.get("prosperity_tier", prosperity.get("current_tier", 0))
        decadence = data.get("decadence_level", prosperity.get("decadence_level", 0.0))
        return cls(
            id=int(data.get("id", 0)),
            name=str(data.get("name", "Unnamed Realm")),
            wealth=float(data.get("wealth", 50.0) or 0.0),
            food=float(data.get("food", 50.0) or 0.0),
            military=float(data.get("military", 20.0) or 0.0),
            technology=float(data.get("technology", 10.0) or 0.0),
            happiness=float(data.get("happiness", 50.0) or 0.0),
            population=int(data.get("population", 100) or 0),
            prosperity_tier=int(tier or 0),
            decadence_level=float(decadence or 0.0),
            schema_version=version,
        )

    def reduce(self, stat: str, amount: float) -> float:
        """Subtract `amount` from a numeric stat, floored at 0. Returns the new value."""
        if stat not in {"wealth", "food", "military", "technology", "happiness"}:
            raise ValueError(f"unknown territory stat {stat!r}")
        value = max(0.0, float(getattr(self, stat)) - amount)
        setattr(self, stat, value)
        return value
