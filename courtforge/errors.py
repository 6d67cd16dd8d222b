"""Exceptions raised by the court core.

Scheme failures, missing characters and duplicate plots are modelled as data
(`OperationResult`), not exceptions. The classes here mark calls that
valid input never produces.
"""
from __future__ import annotations


class CourtError(RuntimeError):
    """Base class for court programmer errors."""


class CharacterNotFound(CourtError):
    def __init__(self, character_id: int) -> None:
        super().__init__(f"no character with id {character_id}")
        self.character_id = character_id


class NotARulerError(CourtError):
    """The succession resolver was invoked on a character who is not a ruler."""

    def __init__(self, character_id: int, role: str) -> None:
        super().__init__(f"character {character_id} is a {role}, not a ruler")
        self.character_id = character_id
        self.role = role


class UnknownPlotTypeError(CourtError):
    """A plot reached execution with a type missing from PLOT_TYPES."""

    def __init__(self, plot_type: str) -> None:
        super().__init__(f"unknown plot type {plot_type!r}")
        self.plot_type = plot_type


class InvalidRoleTransition(CourtError):
    def __init__(self, character_id: int, source: str, target: str) -> None:
        super().__init__(f"character {character_id} cannot move from {source} to {target}")
        self.character_id = character_id
        self.source = source
        self.target = target
