from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from courtforge.types import CourtEvent


class JsonlEventLogger:
    """
    Minimal JSONL logger for the court event feed.

    Writes one JSON object per line. This is deliberately simple so it
    can be swapped out later.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def write_event(self, event: CourtEvent) -> None:
        line = json.dumps(event.to_dict(), separators=(",", ":"))
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")


def read_court_events(path: Path) -> List[CourtEvent]:
    """Read a JSONL file of court events.

    Fail-soft: if the file doesn't exist, return an empty list. Any
    malformed lines are skipped.
    """
    p = Path(path)
    if not p.exists():
        return []
    events: List[CourtEvent] = []
    try:
        with p.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(CourtEvent.from_dict(json.loads(line)))
                except (ValueError, TypeError):
                    # skip malformed lines
                    continue
    except OSError:
        # If the file becomes unreadable, return what we have so far
        return events
    return events


# ---- Narrative / memory sinks ------------------------------------------------


class NullNarrativeSink:
    """Narrative sink that drops everything. Default when nothing is wired."""

    def record(self, emotional_weight: float, description: str, memory_type: str) -> None:
        return None


class ListNarrativeSink:
    """Keeps memories in a list; handy for tests and for the no-DB CLI run."""

    def __init__(self) -> None:
        self.memories: List[Dict[str, Any]] = []

    def record(self, emotional_weight: float, description: str, memory_type: str) -> None:
        self.memories.append(
            {"emotional_weight": emotional_weight, "description": description, "type": memory_type}
        )


class JsonlMemorySink:
    """Minimal JSONL sink for narrative memories."""

    def __init__(self, path: Path, tick: Optional[int] = None, territory_id: Optional[int] = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.tick = tick
        self.territory_id = territory_id

    def record(self, emotional_weight: float, description: str, memory_type: str) -> None:
        entry = {
            "tick": self.tick,
            "territory_id": self.territory_id,
            "emotional_weight": float(emotional_weight),
            "description": description,
            "type": memory_type,
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry))
            f.write("\n")
