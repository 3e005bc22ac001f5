"""Domain definition exports."""

from .ability_def import AbilityDef
from .enemy_def import EnemyTemplateDef
from .party_member_def import PartyMemberDef

__all__ = [
    "AbilityDef",
    "EnemyTemplateDef",
    "PartyMemberDef",
]
