"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy_instance
from .id_factory import make_instance_id
from .party_factory import create_character, create_party

__all__ = [
    "create_character",
    "create_enemy_instance",
    "create_party",
    "make_instance_id",
]
