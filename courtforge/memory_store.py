"""Memory store for the realm's collective memory.

`MemoryStore` adds and reads Memory rows. `SqlMemorySink` adapts it to the
narrative sink interface the court calls after major outcomes.
"""
from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Memory


class MemoryStore:
    """Simple helper to manage Memory rows."""

    def add_memory(
        self,
        session: Session,
        description: str,
        memory_type: str,
        emotional_weight: float = 0.0,
        territory_id: Optional[int] = None,
        tick: Optional[int] = None,
    ) -> Memory:
        mem = Memory(
            territory_id=territory_id,
            tick=tick,
            memory_type=memory_type,
            description=description,
            emotional_weight=float(emotional_weight),
        )
        session.add(mem)
        return mem

    def get_recent_memories(self, session: Session, territory_id: int, limit: int = 10) -> Iterable[Memory]:
        stmt = (
            select(Memory)
            .where(Memory.territory_id == territory_id)
            .order_by(Memory.tick.desc(), Memory.id.desc())
            .limit(limit)
        )
        return session.scalars(stmt).all()


class SqlMemorySink:
    """Narrative sink that writes Memory rows into an open session.

    `territory_id` and `tick` are updated by the tick driver before each
    territory is processed.
    """

    def __init__(self, session: Session, territory_id: Optional[int] = None, tick: Optional[int] = None) -> None:
        self.session = session
        self.territory_id = territory_id
        self.tick = tick
        self._store = MemoryStore()

    def record(self, emotional_weight: float, description: str, memory_type: str) -> None:
        # savepoint: a rejected memory row must not undo the tick's character writes
        with self.session.begin_nested():
            self._store.add_memory(
                self.session,
                description,
                memory_type,
                emotional_weight=emotional_weight,
                territory_id=self.territory_id,
                tick=self.tick,
            )
