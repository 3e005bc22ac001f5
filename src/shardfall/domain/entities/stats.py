"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(slots=True)
class Stats:
    """Stores combat stats; HP and MP are clamped after every mutation, not on construction."""

    hp: int
    max_hp: int
    mp: int
    max_mp: int
    strength: int
    defense: int
    magic: int
    speed: int
    spirit: int
    luck: int

    def __post_init__(self) -> None:
        for stat in fields(self):
            value = getattr(self, stat.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{stat.name} must be an integer")
            if value < 0:
                raise ValueError(f"{stat.name} must be non-negative")

    def clamp(self) -> None:
        """Restore the hp <= max_hp and mp <= max_mp invariants."""
        self.hp = max(0, min(self.max_hp, self.hp))
        self.mp = max(0, min(self.max_mp, self.mp))

    def copy(self) -> Stats:
        return replace(self)
