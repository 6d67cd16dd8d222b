"""ORM models for Courtforge.

Defines Territory, CharacterRow, SuccessionEventRow, FactionRow,
RebellionRow, CourtEventRow, Memory and SimulationState.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class Territory(Base):
    __tablename__ = "territories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    wealth: Mapped[float] = mapped_column(Float, nullable=False, default=50.0)
    food: Mapped[float] = mapped_column(Float, nullable=False, default=50.0)
    military: Mapped[float] = mapped_column(Float, nullable=False, default=20.0)
    technology: Mapped[float] = mapped_column(Float, nullable=False, default=10.0)
    happiness: Mapped[float] = mapped_column(Float, nullable=False, default=50.0)
    population: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    # v2 fields; v1 rows read back with defaults
    prosperity_tier: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    decadence_level: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=2)

    characters: Mapped[list["CharacterRow"]] = relationship(back_populates="territory")


class CharacterRow(Base):
    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[int] = mapped_column(ForeignKey("territories.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    birth_tick: Mapped[int] = mapped_column(Integer, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    is_alive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    death_tick: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    death_cause: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    dynasty_name: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    dynasty_generation: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    coronation_tick: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    secret_goal: Mapped[str] = mapped_column(String(32), nullable=False, default="none")

    traits_json: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    emotions_json: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    plots_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    deeds_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    reign_summary_json: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    territory: Mapped[Territory] = relationship(back_populates="characters")


class SuccessionEventRow(Base):
    __tablename__ = "succession_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[int] = mapped_column(ForeignKey("territories.id"), nullable=False, index=True)
    tick: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    deceased_ruler_id: Mapped[int] = mapped_column(ForeignKey("characters.id"), nullable=False)
    new_ruler_id: Mapped[int] = mapped_column(ForeignKey("characters.id"), nullable=False)
    succession_type: Mapped[str] = mapped_column(String(16), nullable=False)
    plotters_executed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    civil_war_casualties: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    narrative: Mapped[str] = mapped_column(Text, nullable=False)


class FactionRow(Base):
    __tablename__ = "factions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[int] = mapped_column(ForeignKey("territories.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    faction_type: Mapped[str] = mapped_column(String(32), nullable=False, default="political")
    ideology: Mapped[str] = mapped_column(String(255), nullable=False)
    power: Mapped[int] = mapped_column(Integer, nullable=False)
    rebellion_risk: Mapped[int] = mapped_column(Integer, nullable=False)
    happiness: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False)
    leader_name: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    founded_at_tick: Mapped[int] = mapped_column(Integer, nullable=False)


class RebellionRow(Base):
    __tablename__ = "rebellions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[int] = mapped_column(ForeignKey("territories.id"), nullable=False, index=True)
    faction_id: Mapped[int] = mapped_column(ForeignKey("factions.id"), nullable=False)
    started_at_tick: Mapped[int] = mapped_column(Integer, nullable=False)
    strength: Mapped[int] = mapped_column(Integer, nullable=False)
    demands: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")


class CourtEventRow(Base):
    __tablename__ = "court_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[Optional[int]] = mapped_column(ForeignKey("territories.id"), nullable=True, index=True)
    tick: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[str] = mapped_column(String(16), nullable=False, default="info")
    character_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    plot_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)


class Memory(Base):
    __tablename__ = "memories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    territory_id: Mapped[Optional[int]] = mapped_column(ForeignKey("territories.id"), nullable=True, index=True)
    tick: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    memory_type: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    emotional_weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class SimulationState(Base):
    """Single-row run bookkeeping; `last_tick` is the last tick fully processed."""

    __tablename__ = "simulation_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    last_tick: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
