"""Traits, emotional state, and clamping helpers for court characters.

This module defines:
- Traits: the 14 stable psychological traits (ints in [0, 100]).
- EmotionalState: six volatile feelings, mutated additively and clamped.
- describe_trait / describe_emotional_state: short phrases for narrative text.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


TRAIT_NAMES = (
    "ambition",
    "greed",
    "loyalty",
    "honor",
    "cruelty",
    "compassion",
    "cunning",
    "wisdom",
    "paranoia",
    "courage",
    "pride",
    "wrath",
    "charisma",
    "diplomacy",
)

# Ruler-only extras consumed by the external legitimacy system.
RULER_EXTRA_TRAITS = ("justice", "generosity", "vigilance", "strength")

EMOTION_NAMES = ("hope", "fear", "shame", "despair", "contentment", "rage")


def _clamp(x: float, lo: int = 0, hi: int = 100) -> int:
    return int(max(lo, min(hi, x)))


@dataclass
class Traits:
    """Stable personality traits in [0, 100]."""

    ambition: int = 50
    greed: int = 50
    loyalty: int = 50
    honor: int = 50
    cruelty: int = 35
    compassion: int = 50
    cunning: int = 50
    wisdom: int = 50
    paranoia: int = 30
    courage: int = 50
    pride: int = 50
    wrath: int = 30
    charisma: int = 50
    diplomacy: int = 50

    justice: Optional[int] = None
    generosity: Optional[int] = None
    vigilance: Optional[int] = None
    strength: Optional[int] = None

    def clamp(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                setattr(self, f.name, _clamp(value))

    def adjust(self, floor: int = 0, **deltas: int) -> None:
        """Add deltas to named traits; results clamp to [floor, 100]."""
        for name, delta in deltas.items():
            if name not in TRAIT_NAMES:
                raise ValueError(f"unknown trait {name!r}")
            setattr(self, name, _clamp(getattr(self, name) + delta, lo=floor))

    def to_dict(self) -> Dict[str, int]:
        data = {name: int(getattr(self, name)) for name in TRAIT_NAMES}
        for name in RULER_EXTRA_TRAITS:
            value = getattr(self, name)
            if value is not None:
                data[name] = int(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Traits":
        kwargs: Dict[str, Any] = {}
        for name in TRAIT_NAMES:
            if name in data:
                kwargs[name] = _clamp(float(data[name]))
        for name in RULER_EXTRA_TRAITS:
            if data.get(name) is not None:
                kwargs[name] = _clamp(float(data[name]))
        return cls(**kwargs)


@dataclass
class EmotionalState:
    """Current feelings in [0, 100]. Temporary, changes with events."""

    hope: int = 50
    fear: int = 20
    shame: int = 10
    despair: int = 10
    contentment: int = 50
    rage: int = 15

    def clamp(self) -> None:
        for name in EMOTION_NAMES:
            setattr(self, name, _clamp(getattr(self, name)))

    def adjust(self, **deltas: int) -> None:
        for name, delta in deltas.items():
            if name not in EMOTION_NAMES:
                raise ValueError(f"unknown emotion {name!r}")
            setattr(self, name, getattr(self, name) + delta)
        self.clamp()

    def to_dict(self) -> Dict[str, int]:
        return {name: int(getattr(self, name)) for name in EMOTION_NAMES}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmotionalState":
        state = cls(**{name: int(data[name]) for name in EMOTION_NAMES if name in data})
        state.clamp()
        return state


# ---- Narrative descriptions --------------------------------------------------

_TRAIT_PHRASES: Dict[str, tuple] = {
    "ambition": ("content with their station", "moderately ambitious", "burning with ambition"),
    "greed": ("generous and content", "practical about wealth", "consumed by greed"),
    "loyalty": ("untrustworthy", "pragmatic loyalty", "fiercely loyal"),
    "honor": ("dishonorable", "practical about honor", "bound by honor"),
    "cruelty": ("merciful", "pragmatic", "cruel and ruthless"),
    "compassion": ("cold-hearted", "practical compassion", "deeply compassionate"),
    "cunning": ("simple and direct", "reasonably shrewd", "masterfully cunning"),
    "wisdom": ("foolish", "reasonably wise", "profoundly wise"),
    "paranoia": ("trusting", "cautious", "deeply paranoid"),
    "courage": ("cowardly", "brave when needed", "fearlessly courageous"),
    "pride": ("humble", "appropriately proud", "consumed by pride"),
    "wrath": ("peaceful", "can be angered", "wrathful and vengeful"),
    "charisma": ("off-putting", "reasonably likable", "magnetically charismatic"),
    "diplomacy": ("tactless", "diplomatic when needed", "masterful diplomat"),
}


def describe_trait(trait: str, value: int) -> str:
    phrases = _TRAIT_PHRASES.get(trait)
    if phrases is None:
        return "unknown"
    low, mid, high = phrases
    if value < 35:
        return low
    if value < 65:
        return mid
    return high


def describe_emotional_state(state: EmotionalState) -> str:
    dominant = []
    if state.hope > 70:
        dominant.append("hopeful")
    if state.fear > 70:
        dominant.append("fearful")
    if state.shame > 50:
        dominant.append("ashamed")
    if state.despair > 50:
        dominant.append("despairing")
    if state.contentment > 70:
        dominant.append("content")
    if state.rage > 60:
        dominant.append("angry")

    if not dominant:
        return "stable" if state.contentment > 50 else "troubled"
    return ", ".join(dominant)
