"""Party member models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .stats import Stats


@dataclass(slots=True)
class Character:
    """A player-controlled party member, mutated in place during battles."""

    id: str
    name: str
    class_name: str
    level: int
    experience: int
    stats: Stats
    status_effects: List[str] = field(default_factory=list)
    equipped_items: Dict[str, str | None] = field(default_factory=dict)
    # Element name -> weight; only used to infer an element for elemental multipliers.
    crystal_resonance: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.class_name, str) or not self.class_name.strip():
            raise ValueError("class_name must be a non-empty string")
        for attr, minimum in (("level", 1), ("experience", 0)):
            value = getattr(self, attr)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{attr} must be an integer")
            if value < minimum:
                raise ValueError(f"{attr} must be at least {minimum}")
        if not isinstance(self.stats, Stats):
            raise TypeError("stats must be an instance of Stats")

    @property
    def is_alive(self) -> bool:
        return self.stats.hp > 0
