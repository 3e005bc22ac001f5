"""Elemental affinity rules."""
from __future__ import annotations

import math
from typing import Dict, Mapping

from shardfall.core.types import Element
from shardfall.domain.constants import ELEMENTAL_WEAKNESS, ELEMENTS
from shardfall.domain.entities import Character, Enemy

WEAKNESS_MULTIPLIER = 1.25
BACKFIRE_MULTIPLIER = 0.75
SAME_ELEMENT_MULTIPLIER = 0.9
NEUTRAL_MULTIPLIER = 1.0


def infer_element(resonance: Mapping[str, object]) -> Element | None:
    """
    Pick the strongest element from an affinity map.

    Keys are matched case-insensitively against the element names; unknown keys
    and non-numeric weights are ignored. Equal weights resolve to the
    lexicographically smallest element name.
    """
    weights: Dict[Element, float] = {}
    for key, weight in resonance.items():
        if not isinstance(weight, (int, float)) or isinstance(weight, bool):
            continue
        if math.isnan(weight):
            continue
        normalized = str(key).upper()
        for element in ELEMENTS:
            if element == normalized:
                weights[element] = max(float(weight), weights.get(element, -math.inf))
    if not weights:
        return None
    return min(weights, key=lambda element: (-weights[element], element))


def unit_element(unit: Character | Enemy) -> Element | None:
    """Return the explicit element of a unit, falling back to its affinity map."""
    if isinstance(unit, Enemy):
        if unit.element:
            return unit.element
        return None
    return infer_element(unit.crystal_resonance)


def elemental_multiplier(ability_element: Element | None, target_element: Element | None) -> float:
    if not ability_element or ability_element == "NULL":
        return NEUTRAL_MULTIPLIER
    if not target_element or target_element == "NULL":
        return NEUTRAL_MULTIPLIER
    if ELEMENTAL_WEAKNESS[target_element] == ability_element:
        return WEAKNESS_MULTIPLIER
    if ELEMENTAL_WEAKNESS[ability_element] == target_element:
        return BACKFIRE_MULTIPLIER
    if ability_element == target_element:
        return SAME_ELEMENT_MULTIPLIER
    return NEUTRAL_MULTIPLIER
