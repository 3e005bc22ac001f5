"""Effect classification and combat formulas."""
from __future__ import annotations

import math

from shardfall.core.types import EffectKind
from shardfall.domain.constants import HEALING_TARGET_TYPES
from shardfall.domain.defs import AbilityDef
from shardfall.domain.entities import Stats

HEAL_MAGIC_SCALE = 1.1
MITIGATION_SCALE = 0.6
MINIMUM_AMOUNT = 1


def classify_effect(ability: AbilityDef) -> EffectKind:
    """
    Derive the effect kind of an ability from its declared target type and power.

    Positive power heals when aimed at allies or self and damages otherwise;
    zero power abilities only carry a status tag, or nothing at all.
    """
    if ability.power > 0:
        if ability.target_type in HEALING_TARGET_TYPES:
            return "heal"
        return "damage"
    if ability.status_effect:
        return "status_only"
    return "noop"


def is_physical(ability: AbilityDef) -> bool:
    return ability.element is None or ability.element == "NULL"


def heal_amount(ability: AbilityDef, source: Stats, multiplier: float) -> int:
    return max(MINIMUM_AMOUNT, math.floor((ability.power + source.magic * HEAL_MAGIC_SCALE) * multiplier))


def damage_amount(ability: AbilityDef, source: Stats, target: Stats, multiplier: float) -> int:
    if is_physical(ability):
        offense = source.strength + ability.power
        mitigation = target.defense * MITIGATION_SCALE
    else:
        offense = source.magic + ability.power
        mitigation = target.spirit * MITIGATION_SCALE
    return max(MINIMUM_AMOUNT, math.floor((offense - mitigation) * multiplier))
