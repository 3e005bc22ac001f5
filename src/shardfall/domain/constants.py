"""Static combat vocabulary: elements, class names and status tags."""
from __future__ import annotations

from typing import Dict, Tuple

from shardfall.core.types import Element

ELEMENTS: Tuple[Element, ...] = ("LIGHT", "SHADOW", "FIRE", "WATER", "EARTH", "WIND", "NULL")

# ELEMENTAL_WEAKNESS[element] is the element it is weak against.
ELEMENTAL_WEAKNESS: Dict[Element, Element] = {
    "FIRE": "WATER",
    "WATER": "EARTH",
    "EARTH": "WIND",
    "WIND": "FIRE",
    "LIGHT": "SHADOW",
    "SHADOW": "LIGHT",
    "NULL": "NULL",
}

CLASS_NAMES: Tuple[str, ...] = (
    "CRYSTALBORNE",
    "SAGE",
    "KNIGHT",
    "AEROMANCER",
    "UMBRAMANCER",
    "CRYSTAL_KNIGHT",
)

STATUS_EFFECTS: Tuple[str, ...] = ("POISON", "STUN", "SLOW", "SILENCE", "WEAKEN", "BURN")

HEALING_TARGET_TYPES = frozenset({"ally_single", "party", "self"})
UNSUPPORTED_TARGET_TYPES = frozenset({"party", "enemy_all"})

FLEE_ABILITY_ID = "flee"

__all__ = [
    "CLASS_NAMES",
    "ELEMENTAL_WEAKNESS",
    "ELEMENTS",
    "FLEE_ABILITY_ID",
    "HEALING_TARGET_TYPES",
    "STATUS_EFFECTS",
    "UNSUPPORTED_TARGET_TYPES",
]
