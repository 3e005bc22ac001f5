"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List

from shardfall.core.types import Element

from .stats import Stats


@dataclass(slots=True)
class Enemy:
    """An enemy spawned for a single battle and discarded when it ends."""

    id: str
    name: str
    stats: Stats
    element: Element | None = None
    status_effects: List[str] = field(default_factory=list)
    template_id: str | None = None
    story_target_id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not isinstance(self.stats, Stats):
            raise TypeError("stats must be an instance of Stats")

    @property
    def is_alive(self) -> bool:
        return self.stats.hp > 0

    def copy(self) -> Enemy:
        """Return an independent copy so a battle can own its enemies."""
        return replace(self, stats=self.stats.copy(), status_effects=list(self.status_effects))
