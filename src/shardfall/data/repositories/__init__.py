"""Repository exports."""

from .abilities_repo import AbilitiesRepository
from .enemies_repo import EnemiesRepository
from .party_members_repo import PartyMembersRepository

__all__ = [
    "AbilitiesRepository",
    "EnemiesRepository",
    "PartyMembersRepository",
]
