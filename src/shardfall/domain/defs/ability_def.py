"""Ability definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shardfall.core.types import Element, TargetType


@dataclass(frozen=True, slots=True)
class AbilityDef:
    """Describes a catalog ability: its cost, target rule and effect magnitude."""

    id: str
    name: str
    element: Element | None
    mp_cost: int
    target_type: TargetType
    power: int
    description: str = ""
    status_effect: str | None = None
    class_restriction: Tuple[str, ...] | None = None
    level_requirement: int = 1

    def is_usable_by(self, class_name: str, level: int) -> bool:
        """Return True when a character of this class and level may learn the ability."""
        if level < self.level_requirement:
            return False
        if self.class_restriction is None:
            return True
        return class_name in self.class_restriction
