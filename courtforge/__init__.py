"""Courtforge package.

Court intrigue for autonomous realms: characters who scheme, plots that
advance and get discovered, and successions when a ruler dies.
"""

from .court import Court  # re-export the facade
from .rng import CourtRandom
from .types import CourtEvent, Plot, SuccessionEvent, SuccessionType, TerritoryStats

__all__ = [
    "config",
    "db",
    "models",
    "characters",
    "traits",
    "store",
    "aging",
    "plots",
    "succession",
    "prosperity",
    "persistence",
    "memory_store",
    "simulation",
    "narration",
    # re-exports
    "Court",
    "CourtRandom",
    "CourtEvent",
    "Plot",
    "SuccessionEvent",
    "SuccessionType",
    "TerritoryStats",
]
