"""Shared type aliases for the core, domain and service layers."""
from typing import Literal

Element = Literal["LIGHT", "SHADOW", "FIRE", "WATER", "EARTH", "WIND", "NULL"]
TargetType = Literal["enemy_single", "enemy_all", "ally_single", "party", "self"]
TurnKind = Literal["party", "enemy"]
BattleStatus = Literal["pending", "in_progress", "victory", "defeat"]
EffectKind = Literal["damage", "heal", "status_only", "noop"]
PartyLocation = Literal["overworld", "battle"]

__all__ = ["BattleStatus", "EffectKind", "Element", "PartyLocation", "TargetType", "TurnKind"]
